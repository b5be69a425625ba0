"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They are the stable contract between repositories, models and
application services. Translation to RFC 7807 responses happens once, at the
boundary, in ``balance_api/core/errors.py``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

# sqlite: "UNIQUE constraint failed: users.email"
_SQLITE_UNIQUE = re.compile(r"unique constraint failed: (?P<cols>[\w., ]+)")


def violates(exc: IntegrityError, constraint_name: str, *, columns: tuple[str, ...] = ()) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL and MySQL include the constraint name in the driver message.
    SQLite only reports ``table.column`` pairs, so ``columns`` (qualified as
    ``table.column``) is matched as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').
    columns : tuple[str, ...], optional
        Qualified columns covered by the constraint, e.g. ``("users.email",)``.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    match = _SQLITE_UNIQUE.search(message)
    if match is None or not columns:
        return False
    reported = {c.strip() for c in match.group("cols").split(",")}
    return reported == {c.lower() for c in columns}


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """


# --------------------------------------------------------------------------- #
# Input & state errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """
    Raised when input violates a domain policy (e.g. the password rules).

    :param message: Human-readable explanation.
    :param field: Optional name of the offending field.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Game").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """Raised at signup when the email already belongs to an account."""

    def __init__(self, email: str) -> None:
        ConflictError.__init__(self, "User", "email already in use")
        self.email = email


@dataclass(slots=True, eq=False)
class TargetMismatchError(ServiceError):
    """
    Raised when a like target belongs to a different game than the one in the path.

    :param target: Target kind ("Choice" or "Comment").
    :param target_id: Target identifier.
    :param game_id: Game identifier taken from the request.
    """

    target: str
    target_id: int
    game_id: int

    def __str__(self) -> str:
        return f"{self.target} {self.target_id} does not belong to game {self.game_id}"


# --------------------------------------------------------------------------- #
# Authentication & authorization
# --------------------------------------------------------------------------- #


class UnauthenticatedError(ServiceError):
    """Raised when no valid identity backs the request."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthenticatedError):
    """Raised when a token is tampered, malformed, expired, revoked or of the wrong type."""

    def __init__(self, message: str = "Token is invalid or expired") -> None:
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised when the password does not match the stored hash."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Raised when the actor is authenticated but not allowed to act on a resource."""

    def __init__(self, message: str = "You are not allowed to perform this action") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Unexpected failures
# --------------------------------------------------------------------------- #


class OperationFailedError(ServiceError):
    """
    Generic failure that hides the lower-layer cause from clients.

    The original exception is chained (``raise ... from exc``) and logged by
    the raising service.
    """

    def __init__(self, message: str = "Operation failed") -> None:
        super().__init__(message)
