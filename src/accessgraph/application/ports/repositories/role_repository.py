"""Role repository port."""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol
from uuid import UUID

from accessgraph.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: UUID) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_by_ids(self, role_ids: Iterable[UUID]) -> list[Role]: ...

    async def set_inherits(self, role_id: UUID, inherits: Iterable[UUID]) -> None:
        """Replace only the inheritance edges of a role."""
        ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def upsert_by_name(
        self,
        name: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Role: ...
