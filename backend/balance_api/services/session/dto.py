# balance_api/services/session/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from balance_api.models.user import Role

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for account creation.

    :param email: Login email (normalized by the model).
    :param password: Raw password, checked against the password policy.
    :param username: Display name.
    """

    email: str
    password: str
    username: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified).
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    id: int
    email: str
    username: str
    role: Role


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param username: Display name of the account.
    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT, also persisted server-side.
    """

    username: str
    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime (also the stored row's expiry).
    """

    access_expires: timedelta
    refresh_expires: timedelta
