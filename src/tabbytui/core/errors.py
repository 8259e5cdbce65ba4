"""Error taxonomy for talking to the inference server.

Every failure that originates in the network layer is raised as a subclass of
ApiError, so callers at the task boundary only ever need to catch one type.
"""


class ApiError(Exception):
    """Base class for all errors raised by a connection provider."""

    def describe(self) -> str:
        """Short human-readable description shown in the chat view."""
        return str(self) or type(self).__name__


class ApiConnectionError(ApiError):
    """The server could not be reached before any data was received."""


class ApiStatusError(ApiError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message or f"Server returned HTTP {status_code}")
        self.status_code = status_code


class ApiDecodeError(ApiError):
    """A payload was not valid UTF-8, not valid JSON, or had the wrong shape."""


class TransportInterruptedError(ApiError):
    """The connection dropped after at least one chunk was delivered.

    Chunks already handed to the caller are not retracted; ``partial`` holds
    their concatenation so the caller can decide how to surface the truncation.
    """

    def __init__(self, message: str, partial: str) -> None:
        super().__init__(message)
        self.partial = partial
