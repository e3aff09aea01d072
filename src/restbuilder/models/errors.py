from typing import Any, Optional


class RestBuilderError(Exception):
    """Base class for every error raised while building or sending a request."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class BuildError(RestBuilderError):
    """The request could not be built (bad URL or bad parameters)."""


class TransportError(RestBuilderError):
    """The executor failed to perform the exchange."""


class ReadError(RestBuilderError):
    """The response body could not be read to the end."""


class DecodeError(RestBuilderError):
    """A success response body is not valid JSON for the requested type.

    The raw body is kept on ``body`` for diagnostics.
    """

    def __init__(self, message: str, body: bytes) -> None:
        self.body = body
        super().__init__(message)


class APIError(RestBuilderError):
    """The server answered with a non-success status.

    ``message`` holds the raw response body as text. ``detail`` holds the body
    decoded into the caller's failure type when one was given and decoding
    succeeded, otherwise ``None``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: bytes,
        detail: Optional[Any] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"
