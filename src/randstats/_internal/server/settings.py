import os

from randstats._internal.utils.env import environ

SERVER_HOST = os.getenv("RANDSTATS_SERVER_HOST", "127.0.0.1")
SERVER_PORT = environ.get_int("RANDSTATS_SERVER_PORT", default=8000)
SERVER_URL = f"http://{SERVER_HOST}:{SERVER_PORT}"

ROOT_LOG_LEVEL = os.getenv("RANDSTATS_SERVER_ROOT_LOG_LEVEL", "ERROR").upper()
LOG_LEVEL = os.getenv("RANDSTATS_SERVER_LOG_LEVEL", "INFO").upper()
# "standard", "json" or "rich"
LOG_FORMAT = os.getenv("RANDSTATS_SERVER_LOG_FORMAT", "standard").lower()
UVICORN_LOG_LEVEL = os.getenv("RANDSTATS_SERVER_UVICORN_LOG_LEVEL", "ERROR").lower()

RANDOM_ORG_API_KEY = os.getenv("RANDOM_ORG_API_KEY", "")
RANDOM_ORG_URL = os.getenv(
    "RANDSTATS_RANDOM_ORG_URL", "https://api.random.org/json-rpc/4/invoke"
)
RANDOM_ORG_REQUEST_ID = 666
RANDOM_MIN = 1
RANDOM_MAX = 10

UPSTREAM_TIMEOUT = environ.get_float("RANDSTATS_UPSTREAM_TIMEOUT", default=30.0)
# random.org asks clients not to issue simultaneous requests,
# so upstream calls are serialized unless explicitly allowed otherwise.
UPSTREAM_MAX_CONCURRENCY = environ.get_int("RANDSTATS_UPSTREAM_MAX_CONCURRENCY", default=1)
