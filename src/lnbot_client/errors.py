from __future__ import annotations

import json


class LnBotError(Exception):
    """Base exception for everything raised by the client."""


class ApiError(LnBotError):
    """The API answered with an error status (HTTP 4xx/5xx)."""

    reason = "API error"

    def __init__(self, status: int, body: str) -> None:
        super().__init__(self._format(status, body))
        self.status = status
        self.body = body

    def _format(self, status: int, body: str) -> str:
        return f"{self.reason} (HTTP {status}): {body}"

    @property
    def message(self) -> str:
        """Human-readable message from the JSON error body, if the server sent one."""
        return _extract_message(self.body, self.reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, body={self.body!r})"


class _StatusError(ApiError):
    status_code: int

    def __init__(self, body: str) -> None:
        super().__init__(self.status_code, body)

    def _format(self, status: int, body: str) -> str:
        return f"{self.reason} ({status}): {body}"


class BadRequestError(_StatusError):
    """Raised for 400 Bad Request responses."""

    status_code = 400
    reason = "Bad Request"


class UnauthorizedError(_StatusError):
    """Raised for 401 Unauthorized responses."""

    status_code = 401
    reason = "Unauthorized"


class ForbiddenError(_StatusError):
    """Raised for 403 Forbidden responses."""

    status_code = 403
    reason = "Forbidden"


class NotFoundError(_StatusError):
    """Raised for 404 Not Found responses."""

    status_code = 404
    reason = "Not Found"


class ConflictError(_StatusError):
    """Raised for 409 Conflict responses."""

    status_code = 409
    reason = "Conflict"


class TransportError(LnBotError):
    """The request never produced a response (connect, TLS, read failures)."""


class DecodeError(LnBotError):
    """A success response or event payload did not decode into the expected type."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw

    def __repr__(self) -> str:
        return f"DecodeError({str(self)!r}, raw={self.raw!r})"


_STATUS_ERRORS: dict[int, type[_StatusError]] = {
    cls.status_code: cls
    for cls in (BadRequestError, UnauthorizedError, ForbiddenError, NotFoundError, ConflictError)
}


def classify(status: int, body: str) -> ApiError:
    """Map an error status and its raw body to the matching exception.

    The body is kept verbatim. Only valid for ``status >= 400``.
    """
    if status < 400:
        raise ValueError(f"status {status} is not an error status")
    cls = _STATUS_ERRORS.get(status)
    if cls is None:
        return ApiError(status, body)
    return cls(body)


def _extract_message(body: str, fallback: str) -> str:
    """Try to pull a human-readable message from a JSON error body."""
    try:
        data = json.loads(body)
        return data.get("message") or data.get("error") or fallback
    except (json.JSONDecodeError, TypeError, AttributeError):
        return fallback
