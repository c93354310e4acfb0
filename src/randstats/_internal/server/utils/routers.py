from typing import Any

import orjson
from fastapi import Response, status
from fastapi.responses import PlainTextResponse

from randstats._internal.core.errors import SerializationError
from randstats._internal.utils.json_utils import get_orjson_default_options, orjson_default


class CustomORJSONResponse(Response):
    """
    Custom JSONResponse that uses orjson for serialization.

    Content is rendered when the response is constructed, so encoding problems
    surface as `SerializationError` inside the endpoint that builds the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        try:
            return orjson.dumps(
                content,
                option=get_orjson_default_options(),
                default=orjson_default,
            )
        except (orjson.JSONEncodeError, TypeError) as e:
            raise SerializationError(f"Failed to encode response: {e}") from e


def error_plain_text(
    msg: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
) -> PlainTextResponse:
    return PlainTextResponse(content=msg, status_code=status_code)
