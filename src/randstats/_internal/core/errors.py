from typing import Optional


class RandstatsError(Exception):
    pass


class CLIError(RandstatsError):
    pass


class InvalidParameterError(RandstatsError):
    """
    A job parameter failed validation. Raised before any upstream request is made.
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name} param {reason}")

    @property
    def msg(self) -> str:
        return str(self)


class UpstreamError(RandstatsError):
    """
    A single fetch from the random number service failed.
    Contained per fetch by the aggregator and never surfaced to the API caller.
    """

    def __init__(self, msg: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(msg)


class SerializationError(RandstatsError):
    pass


class UnexpectedServerError(RuntimeError):
    """Internal errors that should have never happened"""

    pass
