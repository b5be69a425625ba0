"""Role → capability policy.

Every role maps to an explicit, frozen capability set. Adding a role means
adding an entry here; nothing else compares role strings.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType

from balance_api.models.user import Role


class Capability(enum.Enum):
    """Actions a caller may be granted."""

    COMMENT = "comment"
    LIKE = "like"


ROLE_CAPABILITIES: Mapping[Role, frozenset[Capability]] = MappingProxyType(
    {
        Role.USER: frozenset({Capability.COMMENT, Capability.LIKE}),
        Role.ADMIN: frozenset({Capability.COMMENT, Capability.LIKE}),
    }
)


def has_capability(role: Role, capability: Capability) -> bool:
    """Return ``True`` when ``role`` grants ``capability``."""
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def is_owner(*, actor_id: int | None, owner_id: int) -> bool:
    """Return ``True`` when the acting user is the recorded owner."""
    return actor_id is not None and actor_id == owner_id
