# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass

from balance_api.models.user import Role


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated caller, resolved once per request and passed to every service call.

    :param email: Account email taken from the access token subject.
    :type email: str
    :param role: Role claim of the access token.
    :type role: Role
    """

    email: str
    role: Role
