from __future__ import annotations

import enum
from dataclasses import dataclass


class LikeTarget(enum.Enum):
    """Kinds of entities that can be liked."""

    CHOICE = "Choice"
    COMMENT = "Comment"


class LikeOutcome(enum.Enum):
    """State of the like row after a toggle."""

    LIKED = "liked"
    UNLIKED = "unliked"


_MESSAGES = {
    (LikeTarget.CHOICE, LikeOutcome.LIKED): "Like added to the choice.",
    (LikeTarget.CHOICE, LikeOutcome.UNLIKED): "Like removed from the choice.",
    (LikeTarget.COMMENT, LikeOutcome.LIKED): "Like added to the comment.",
    (LikeTarget.COMMENT, LikeOutcome.UNLIKED): "Like removed from the comment.",
}


@dataclass(frozen=True, slots=True)
class ToggleLikeOut:
    """
    Result of a like toggle.

    :param target: Kind of liked entity.
    :param target_id: Identifier of the liked entity.
    :param outcome: ``LIKED`` or ``UNLIKED``.
    """

    target: LikeTarget
    target_id: int
    outcome: LikeOutcome

    @property
    def message(self) -> str:
        """Human-readable state message returned to clients."""
        return _MESSAGES[(self.target, self.outcome)]
