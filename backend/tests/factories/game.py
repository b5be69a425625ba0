"""Factories for games and their choices."""

from __future__ import annotations

import factory

from balance_api.models.game import Choice, Game
from tests.factories import BaseFactory


class GameFactory(BaseFactory):
    class Meta:
        model = Game

    id = None
    title = factory.Faker("sentence", nb_words=5)


class ChoiceFactory(BaseFactory):
    """Choice attached to a fresh game unless ``game`` is given."""

    class Meta:
        model = Choice

    id = None
    game = factory.SubFactory(GameFactory)
    content = factory.Faker("word")
