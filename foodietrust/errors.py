"""
Error types surfaced to API callers.

Codes follow the callable-function vocabulary the web client already handles
(invalid-argument, not-found, internal, ...). `reason` is an optional
machine-readable subcode, e.g. "location-required".
"""

from __future__ import annotations

from typing import Optional

HTTP_STATUS_BY_CODE: dict[str, int] = {
    "invalid-argument": 400,
    "unauthenticated": 401,
    "not-found": 404,
    "internal": 500,
}


class FoodieTrustError(Exception):
    """An error with a client-facing code and message."""

    def __init__(self, code: str, message: str, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.reason = reason

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_CODE.get(self.code, 500)

    def to_dict(self) -> dict:
        body = {"detail": self.message, "code": self.code}
        if self.reason:
            body["reason"] = self.reason
        return body


class InvalidArgumentError(FoodieTrustError):
    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__("invalid-argument", message, reason)


class NotFoundError(FoodieTrustError):
    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__("not-found", message, reason)


class InternalError(FoodieTrustError):
    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__("internal", message, reason)
