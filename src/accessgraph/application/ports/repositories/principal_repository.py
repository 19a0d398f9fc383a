"""Principal repository port."""

from typing import Protocol
from uuid import UUID

from accessgraph.domain.entities import Principal


class PrincipalRepository(Protocol):
    """Port for principal role assignments and grants."""

    async def get_by_id(self, principal_id: UUID) -> Principal | None: ...

    async def save(self, principal: Principal) -> None: ...
