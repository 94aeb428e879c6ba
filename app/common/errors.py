# app/common/errors.py
"""
Errors raised by the friend graph services.

Routers never catch these; ``app.main`` maps each kind onto an HTTP status.
Store failures are SQLAlchemy's own exceptions and are left untouched.
"""

from sqlalchemy.exc import SQLAlchemyError

# Anything the edge store raises (connectivity, timeout, constraint violation).
StoreError = SQLAlchemyError


class FriendGraphError(Exception):
    """Base exception for all friend graph errors."""

    pass


class NotFoundError(FriendGraphError):
    """Raised when a user, friendship or pending request does not exist."""

    pass


class ValidationError(FriendGraphError):
    """Raised when a user id or request is malformed, before any query runs."""

    pass


class ConflictError(FriendGraphError):
    """Raised when a write would duplicate existing state."""

    pass


class RecordShapeError(FriendGraphError):
    """Raised when a composed query returns a row that is not a valid FriendRecord."""

    pass


def ensure_user_id(value, field: str = "user_id") -> int:
    # bool is an int subclass; True is not a user id
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValidationError(f"{field} must be positive, got {value}")
    return value


__all__ = [
    "ConflictError",
    "FriendGraphError",
    "NotFoundError",
    "RecordShapeError",
    "StoreError",
    "ValidationError",
    "ensure_user_id",
]
