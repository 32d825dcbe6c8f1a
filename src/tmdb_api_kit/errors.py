from __future__ import annotations

from enum import Enum


class TmdbErrorKind(str, Enum):
    """Origin of a failed API request."""

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


class TmdbError(RuntimeError):
    """Raised for every failed TMDB request.

    Branch on ``kind`` rather than on the message. ``status_code`` and ``body``
    are only populated for ``TmdbErrorKind.HTTP_STATUS``.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: TmdbErrorKind,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        code = f" (status: {self.status_code})" if self.status_code is not None else ""
        return f"TmdbError{code}: {self.message}"


class TmdbClientClosedError(RuntimeError):
    """Raised when a request is issued on a client that was already closed."""


__all__ = ["TmdbClientClosedError", "TmdbError", "TmdbErrorKind"]
