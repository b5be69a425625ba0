"""
Unit tests for SQLAlchemyReadOnlyUnitOfWork.
"""

from __future__ import annotations

import pytest

from balance_api.models import Game
from balance_api.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from balance_api.uow import SQLAlchemyUnitOfWork as RWuow
from balance_api.uow.sqlalchemy_uow import ReadOnlyViolation
from tests.factories.game import GameFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db):
        """
        Attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(ReadOnlyViolation, match="ORM flush blocked"):
            uow.session.add(Game(title="Never stored"))
            uow.session.flush()

    def test_allows_reads(self, db):
        GameFactory(title="Readable")

        with ROuow() as uow:
            assert [g.title for g in uow.games.list()] == ["Readable"]

    def test_disallows_commit(self, db):
        with ROuow() as uow, pytest.raises(ReadOnlyViolation, match="does not allow commit"):
            uow.commit()

    def test_always_rolls_back_changes(self, db):
        """
        Modifications made in RO scope never persist after exit.
        """
        with RWuow() as uow:
            game = uow.games.add(Game(title="Original"))
            game_id = game.id

        with ROuow() as uow:
            uow.games.get(game_id).title = "Mutated"

        with RWuow() as uow:
            assert uow.games.get(game_id).title == "Original"

    def test_guard_is_removed_on_exit(self, db):
        with ROuow():
            pass

        with RWuow() as uow:
            uow.games.add(Game(title="Writable again"))
