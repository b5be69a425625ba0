"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session

from balance_api.core.extensions import db
from balance_api.repositories import (
    ChoiceLikeRepository,
    ChoiceRepository,
    CommentLikeRepository,
    CommentRepository,
    GameRepository,
    RefreshTokenRepository,
    UserRepository,
)
from balance_api.uow.base import UnitOfWork


class ReadOnlyViolation(RuntimeError):
    """Raised when code inside a read-only unit of work tries to flush changes."""


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.refresh_tokens = RefreshTokenRepository(session=self.session)
        self.games = GameRepository(session=self.session)
        self.choices = ChoiceRepository(session=self.session)
        self.comments = CommentRepository(session=self.session)
        self.choice_likes = ChoiceLikeRepository(session=self.session)
        self.comment_likes = CommentLikeRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Leaving the block normally commits; any exception rolls back
    and propagates.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Blocks ORM flushes that carry new, dirty or deleted objects.
    - Always rolls back on exit, so nothing read here can be written back.
    - Disallows ``commit()``.

    Build return values (DTOs) inside the ``with`` block: the rollback on
    exit expires every loaded instance.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._target: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # Listen on the concrete Session, not the scoped_session proxy, so the
        # guard never leaks onto other sessions of the same class.
        self._target = db.session()
        event.listen(self._target, "before_flush", self._block_writes)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            if self._target is not None:
                event.remove(self._target, "before_flush", self._block_writes)
                self._target = None

    @staticmethod
    def _block_writes(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise ReadOnlyViolation(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises ReadOnlyViolation: always, to prevent accidental writes.
        """
        raise ReadOnlyViolation("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
