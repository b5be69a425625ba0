"""Read access to games and choices."""

from __future__ import annotations

from balance_api.models.game import Choice, Game
from balance_api.repositories.base import BaseRepository


class GameRepository(BaseRepository[Game]):
    model = Game

    def _filterable_fields(self):
        return {"title": Game.title}


class ChoiceRepository(BaseRepository[Choice]):
    model = Choice

    def _filterable_fields(self):
        return {"game_id": Choice.game_id, "content": Choice.content}
