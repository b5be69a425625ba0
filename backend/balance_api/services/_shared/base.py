# balance_api/services/_shared/base.py
from __future__ import annotations

from balance_api.models.user import User
from balance_api.services._shared.dto import Identity
from balance_api.services._shared.errors import ForbiddenError, UnauthenticatedError
from balance_api.services._shared.policies.roles import Capability, has_capability, is_owner
from balance_api.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyRepositoryContainer,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Resolve the acting user from an explicit :class:`Identity`.
    * Centralize ownership and capability checks.

    Notes
    -----
    - Services never touch the global session; they always use a Unit of Work.
    - Services never import Flask; HTTP translation happens in ``core.errors``.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # --------------------------- AuthN / AuthZ ------------------------------

    def resolve_actor(
        self,
        uow: SQLAlchemyRepositoryContainer,
        identity: Identity | None,
        *,
        capability: Capability | None = None,
    ) -> User:
        """
        Load the user behind ``identity`` and check the required capability.

        :param uow: Active unit of work.
        :param identity: Caller resolved by the HTTP layer.
        :param capability: Capability the use-case needs, if any.
        :returns: The acting :class:`User`.
        :raises UnauthenticatedError: When there is no identity or no such user.
        :raises ForbiddenError: When the role does not grant ``capability``.
        """
        if identity is None:
            raise UnauthenticatedError()
        user = uow.users.get_by_email(identity.email)
        if user is None:
            raise UnauthenticatedError("No account matches the presented identity")
        if capability is not None and not has_capability(user.role, capability):
            raise ForbiddenError(f"Role {user.role.value} cannot {capability.value}")
        return user

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id.
        :param owner_id: Recorded owner id.
        :param msg: Optional custom error message.
        :raises ForbiddenError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise ForbiddenError(msg or "You can only modify your own resources.")
