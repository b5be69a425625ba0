"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from balance_api.models.comment import Comment
from balance_api.models.game import Choice, Game
from balance_api.models.user import Role, User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "alex.martinez@example.com",
        "username": "alexm",
        "password": "devPass123!",
        "role": Role.USER,
    },
    {
        "email": "jamie.lee@example.com",
        "username": "jamielee",
        "password": "strongPass1!",
        "role": Role.USER,
    },
    {
        "email": "admin@example.com",
        "username": "admin",
        "password": "adminPass9~",
        "role": Role.ADMIN,
    },
]

GAME_FIXTURES: list[dict[str, Any]] = [
    {
        "title": "Summer or winter forever?",
        "choices": ["Endless summer", "Endless winter"],
    },
    {
        "title": "Read minds or be invisible?",
        "choices": ["Read minds", "Be invisible"],
    },
    {
        "title": "Mountains or the sea for every holiday?",
        "choices": ["Mountains", "The sea"],
    },
]

COMMENT_FIXTURES: list[dict[str, Any]] = [
    {
        "game_title": "Summer or winter forever?",
        "author_email": "alex.martinez@example.com",
        "content": "Winter, because you can always add another layer.",
    },
    {
        "game_title": "Read minds or be invisible?",
        "author_email": "jamie.lee@example.com",
        "content": "Invisible. Reading minds sounds exhausting.",
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo accounts. Existing accounts keep their password."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in USER_FIXTURES:
            email = str(fixture["email"]).strip().lower()
            user = session.execute(select(User).filter_by(email=email)).scalar_one_or_none()
            created = False
            if user is None:
                user = User(email=email, username=fixture["username"], role=fixture["role"])
                user.password = fixture["password"]
                session.add(user)
                created = True
            else:
                user.username = fixture["username"]
                user.role = fixture["role"]
            session.flush()
            _touch(summary, "users", created)

    return summary


def seed_games(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo games with their choices, plus a few comments."""
    if verbose:
        LOGGER.info("Seeding games, choices and comments...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    games_by_title: dict[str, Game] = {}

    with session.begin():
        for fixture in GAME_FIXTURES:
            game, created = _get_or_create(session, Game, title=fixture["title"])
            session.flush()
            games_by_title[game.title] = game
            _touch(summary, "games", created)

            for content in fixture["choices"]:
                _, created = _get_or_create(session, Choice, game_id=game.id, content=content)
                _touch(summary, "choices", created)
            session.flush()

        for fixture in COMMENT_FIXTURES:
            game = games_by_title.get(fixture["game_title"])
            if game is None:
                raise RuntimeError(f"Game {fixture['game_title']!r} missing while seeding comments")
            author = session.execute(
                select(User).filter_by(email=fixture["author_email"])
            ).scalar_one_or_none()
            if author is None:
                raise RuntimeError(f"User {fixture['author_email']} missing while seeding comments")
            _, created = _get_or_create(
                session,
                Comment,
                game_id=game.id,
                author_id=author.id,
                content=fixture["content"],
            )
            session.flush()
            _touch(summary, "comments", created)

    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_games):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_games", "seed_users", "run_all"]
