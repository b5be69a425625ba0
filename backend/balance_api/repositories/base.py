"""Generic repository base for SQLAlchemy 2.x.

Repositories wrap a single mapped class and only stage and query rows:

- equality filters, optionally restricted to a whitelist;
- updates restricted to a whitelist so ``@validates`` hooks always run;
- results in primary-key order.

Transactions belong to the unit of work; nothing here commits or rolls back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from balance_api.core.extensions import db

E = TypeVar("E")


class BaseRepository(Generic[E]):
    """Row-level access for one mapped class.

    Subclasses set ``model`` and may override the hooks:

    * ``_default_eagerload`` for loader options on ``get``/``list``;
    * ``_filterable_fields`` to whitelist filter keys;
    * ``_updatable_fields`` to whitelist keys accepted by ``update``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Injected unit-of-work session, else the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------------------------------------------ #
    # Hooks
    # ------------------------------------------------------------------ #

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]] | None:
        """Whitelist of filter keys; ``None`` accepts any model attribute."""
        return None

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any] | None) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        for key, value in filters.items():
            column = getattr(self.model, key) if allowed is None else allowed.get(key)
            if column is not None:
                stmt = stmt.where(column == value)
        return stmt

    def _checked_updates(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Reject keys outside ``_updatable_fields``.

        :raises ValueError: On any key that may not be assigned.
        """
        rejected = sorted(set(fields) - self._updatable_fields())
        if rejected:
            raise ValueError(f"Fields not updatable on {self.model.__name__}: {rejected}")
        return dict(fields)

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        stmt = self._default_eagerload(
            select(self.model).where(getattr(self.model, "id") == entity_id)
        )
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self._where(select(self.model), filters)
        return bool(self.session.execute(select(stmt.exists())).scalar())

    def delete(self, instance: E) -> None:
        """Delete ``instance`` (ORM cascades included) and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """
        Assign whitelisted attributes through ``setattr`` and flush.

        :raises ValueError: If a key is not updatable, or a model validator
            rejects the new value.
        """
        for key, value in self._checked_updates(fields).items():
            setattr(instance, key, value)
        self.flush()
        return instance

    def list(self, *, filters: Mapping[str, Any] | None = None) -> list[E]:
        """Rows matching ``filters`` (equality only), primary key ascending."""
        stmt = self._default_eagerload(self._where(select(self.model), filters))
        stmt = stmt.order_by(getattr(self.model, "id").asc())
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))
