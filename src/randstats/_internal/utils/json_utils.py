from typing import Any

import orjson
from pydantic import BaseModel


def get_orjson_default_options() -> int:
    return orjson.OPT_NON_STR_KEYS


def orjson_default(obj: Any) -> Any:
    if isinstance(obj, float):
        # orjson does not convert float subclasses by default
        return float(obj)
    if isinstance(obj, BaseModel):
        # Allows calling orjson.dumps() on pydantic models
        # (e.g. to return from the API)
        return obj.model_dump()
    raise TypeError
