import re
import sys
from pathlib import Path

from setuptools import find_packages, setup

project_dir = Path(__file__).parent


def get_version():
    text = (project_dir / "src" / "randstats" / "version.py").read_text()
    match = re.compile(r"__version__\s*=\s*\"?([^\n\"]+)\"?.*").match(text)
    if match:
        if match.group(1) != "None":
            return match.group(1)
        else:
            return None
    else:
        sys.exit("Can't parse version.py")


def get_long_description():
    return open(project_dir / "README.md").read()


BASE_DEPS = [
    "typing-extensions>=4.0.0",
    "pydantic>=2.0.0",
    "rich",
    "rich-argparse",
    "numpy",
]

SERVER_DEPS = [
    "fastapi",
    "starlette>=0.26.0",
    "uvicorn",
    "httpx",
    "orjson",
    "python-json-logger>=3.1.0",
]

TEST_DEPS = [
    "pytest",
    "pytest-asyncio",
]

setup(
    name="randstats",
    version=get_version(),
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests", "tests.*"]),
    include_package_data=True,
    scripts=[],
    entry_points={
        "console_scripts": ["randstats=randstats._internal.cli.main:main"],
    },
    description="HTTP service computing standard deviations of true random integer sequences from random.org.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    install_requires=BASE_DEPS + SERVER_DEPS,
    extras_require={
        "test": TEST_DEPS,
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Programming Language :: Python :: 3",
    ],
)
