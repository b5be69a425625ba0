"""Pytest fixtures for the balance game API.

The application is created once per session with :class:`TestingConfig`
(in-memory SQLite shared through a static pool) and its app context stays
pushed. Every test gets a fresh schema: services commit and roll back real
transactions, so isolation comes from recreating the tables rather than from
an outer SAVEPOINT.
"""

from __future__ import annotations

import os

import pytest

from balance_api.core.config import TestingConfig
from balance_api.core.extensions import db as _db
from balance_api.factory import create_app
from balance_api.services import Identity
from tests.helpers.auth import access_token_for, bearer


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application instance with its app context pushed for the whole run.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig)
    application.logger.setLevel("WARNING")
    with application.app_context():
        yield application


@pytest.fixture()
def db(app):
    """Create all tables before a test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    _db.create_all()
    try:
        yield _db
    finally:
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session shared with services and repositories."""
    return db.session


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the Flask-scoped session ---------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the per-test session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def user(session):
    """Persist and return a regular user (password ``GoodPass1!``)."""
    from tests.factories.user import UserFactory

    return UserFactory()


@pytest.fixture()
def identity(user) -> Identity:
    """Identity of :func:`user` as the HTTP layer would build it."""
    return Identity(email=user.email, role=user.role)


@pytest.fixture()
def auth_header(user) -> dict[str, str]:
    """Authorization header carrying a valid access token for :func:`user`."""
    return bearer(access_token_for(user))
