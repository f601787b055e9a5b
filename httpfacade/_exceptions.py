from __future__ import annotations


class HTTPFacadeError(Exception):
    """Base class for every error raised by httpfacade."""


class TransportError(HTTPFacadeError):
    """The transport reported a non-zero error code after executing a call.

    ``code`` follows the libcurl numbering (7 for a refused connection,
    28 for a timeout, ...) so callers can branch on it without knowing
    which transport produced it.
    """

    def __init__(self, message: str, code: int, *, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.url = url

    def __str__(self) -> str:
        if self.url:
            return f"[{self.code}] {self.message} ({self.url})"
        return f"[{self.code}] {self.message}"


class RequestReusedError(HTTPFacadeError, RuntimeError):
    """A Request that already dispatched its call was used again."""
