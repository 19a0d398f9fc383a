"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from accessgraph.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from accessgraph.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from accessgraph.application.ports.repositories.role_repository import RoleRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def principals(self) -> PrincipalRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
