"""Failures raised by order table operations.

Each class is one kind of rejection the API layer maps to a response status:
``ValidationError`` for malformed input, ``NotFoundError`` for an unknown
table and ``ConflictError`` for a transition the state machine disallows.
"""

from __future__ import annotations

from typing import Any


class OrderTableError(Exception):
    default_code = "ORDER_TABLE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details or {}


class ValidationError(OrderTableError):
    default_code = "INVALID_REQUEST"


class NotFoundError(OrderTableError):
    default_code = "ORDER_TABLE_NOT_FOUND"


class ConflictError(OrderTableError):
    default_code = "CONFLICT"

    def __init__(self, message: str, *, code: str | None = None, reason: str) -> None:
        super().__init__(message, code=code, details={"reason": reason})
        self.reason = reason
