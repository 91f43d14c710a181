"""Domain error kinds and persistence error classification."""

from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# PostgreSQL SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_VIOLATIONS = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}


class ErrorKind(str, Enum):
    """Kinds of failure the core can surface."""

    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    ALREADY_ATTACHED = "already_attached"
    NOT_ATTACHED = "not_attached"
    INTERNAL = "internal"


class AppError(Exception):
    """Base class for errors raised by the data access and auth layers."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateKeyError(AppError):
    kind = ErrorKind.DUPLICATE_KEY
    default_message = "duplicate key"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "record not found"


class UnauthorizedError(AppError):
    """Authentication missing/invalid, or ownership denied.

    ``authenticated`` is False when no trusted identity could be established,
    True when the caller is known but does not own the resource.
    """

    kind = ErrorKind.UNAUTHORIZED
    default_message = "unauthorized"

    def __init__(self, message: str | None = None, *, authenticated: bool = False):
        super().__init__(message)
        self.authenticated = authenticated


class AlreadyAttachedError(AppError):
    kind = ErrorKind.ALREADY_ATTACHED
    default_message = "image already in collection"


class NotAttachedError(AppError):
    kind = ErrorKind.NOT_ATTACHED
    default_message = "image not in collection"


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from a unique constraint."""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlite_errorname", None) in SQLITE_UNIQUE_VIOLATIONS:
        return True
    return False


def classify_db_error(exc: SQLAlchemyError, duplicate_message: str | None = None) -> AppError:
    """Turn a raw SQLAlchemy/driver error into a domain error."""
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return DuplicateKeyError(duplicate_message)
    return InternalError()
