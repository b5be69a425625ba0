"""
SessionService
==============

Account and session lifecycle:

- ``signup``: password policy, email uniqueness, hashed persistence.
- ``login``: credential check, token pair issuance, refresh-token persistence.
- ``logout``: refresh-token revocation (idempotent).
- ``refresh``: new access token from a stored, unexpired refresh token.
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta

from sqlalchemy.exc import IntegrityError

from balance_api.models.base import utcnow
from balance_api.models.user import Role
from balance_api.services._shared.base import BaseService
from balance_api.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
    violates,
)
from balance_api.services._shared.ports import REFRESH, TokenProvider
from balance_api.services.session.dto import (
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    SignupIn,
    UserOut,
)

log = logging.getLogger(__name__)

PASSWORD_SPECIALS = "!@#$%^&*()_~"
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*[0-9])(?=.*[!@#$%^&*()_~]).{8,15}$")
PASSWORD_RULE = (
    "Password must be 8-15 characters and contain a letter, a digit "
    f"and one of {PASSWORD_SPECIALS}"
)


def check_password_policy(password: str) -> None:
    """
    Enforce the signup password policy.

    :param password: Raw password.
    :raises ValidationError: When the password does not match the policy.
    """
    if not isinstance(password, str) or PASSWORD_PATTERN.fullmatch(password) is None:
        raise ValidationError(PASSWORD_RULE, field="password")


class SessionService(BaseService):
    """
    Application service for accounts and token sessions.

    Tokens are issued through an injected :class:`TokenProvider`; refresh
    tokens are persisted in the ``refresh_tokens`` table (one row per email).
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for signing/validating JWTs.
        :param token_cfg: Access/Refresh expiry configuration.
        """
        self.tokens = token_provider
        self.cfg = token_cfg or AuthTokenConfig(
            access_expires=timedelta(minutes=30),
            refresh_expires=timedelta(days=14),
        )

    # ------------------------------------------------------------------ #
    # Signup
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> UserOut:
        """
        Create an account with role ``USER``.

        :param dto: Signup input.
        :returns: Public view of the new account.
        :raises ValidationError: If the password violates the policy.
        :raises DuplicateEmailError: If the email is already registered.
        """
        check_password_policy(dto.password)

        with self.rw_uow() as uow:
            if uow.users.exists_by_email(dto.email):
                raise DuplicateEmailError(dto.email)

            try:
                user = uow.users.add(
                    uow.users.model(
                        email=dto.email,
                        password=dto.password,  # model hashes via setter
                        username=dto.username,
                        role=Role.USER,
                    )
                )
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                # Lost a race against a concurrent signup with the same email
                if violates(exc, "uq_users_email", columns=("users.email",)):
                    raise DuplicateEmailError(dto.email) from exc
                raise

            out = UserOut(id=user.id, email=user.email, username=user.username, role=user.role)

        log.info("session.signup", extra={"user_email": out.email})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a token pair.

        The refresh token is written in the same transaction; tokens are
        handed back only once that write committed.

        :param dto: Login input.
        :returns: Username plus access/refresh tokens.
        :raises NotFoundError: If the email is unknown.
        :raises InvalidCredentialsError: If the password does not match.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is None:
                raise NotFoundError("User", dto.email)
            if not user.verify_password(dto.password):
                raise InvalidCredentialsError()

            access = self.tokens.create_access_token(
                email=user.email, role=user.role, expires_delta=self.cfg.access_expires
            )
            refresh = self.tokens.create_refresh_token(
                email=user.email, role=user.role, expires_delta=self.cfg.refresh_expires
            )
            uow.refresh_tokens.upsert(
                owner_email=user.email,
                token=refresh,
                expires_at=utcnow() + self.cfg.refresh_expires,
            )
            email = user.email
            out = LoginOut(username=user.username, access_token=access, refresh_token=refresh)

        log.info("session.login", extra={"user_email": email})
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str) -> bool:
        """
        Revoke a refresh token by deleting its stored row.

        Unknown tokens are accepted silently: the caller's intent (no live
        session for this token) already holds.

        :param refresh_token: Encoded refresh JWT as returned by ``login``.
        :returns: ``True`` when a row was removed.
        """
        with self.rw_uow() as uow:
            removed = uow.refresh_tokens.delete_by_token(refresh_token)

        if not removed:
            log.info("session.logout.unknown_token")
        return removed

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> str:
        """
        Issue a new access token for a trusted refresh token.

        Trust requires a valid refresh JWT *and* a stored, unexpired row with
        the same token string for the same account.

        :param refresh_token: Encoded refresh JWT.
        :returns: New encoded access JWT.
        :raises InvalidTokenError: When any of the checks fails.
        """
        claims = self.tokens.validate(refresh_token, expected_type=REFRESH)

        with self.ro_uow() as uow:
            row = uow.refresh_tokens.get_by_token(refresh_token)
            if row is None or row.owner_email != claims.email.lower():
                raise InvalidTokenError("Refresh token has been revoked")
            if row.is_expired():
                raise InvalidTokenError("Refresh token has expired")
            user = uow.users.get_by_email(claims.email)
            if user is None:
                raise InvalidTokenError("Refresh token owner no longer exists")
            email, role = user.email, user.role

        return self.tokens.create_access_token(
            email=email, role=role, expires_delta=self.cfg.access_expires
        )
