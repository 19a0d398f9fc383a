"""Permission checker port - RBAC authorization."""

from typing import Protocol
from uuid import UUID

from accessgraph.domain.entities import Principal


class PermissionChecker(Protocol):
    """Port for checking whether a principal may perform an action."""

    async def has_permission(
        self, principal: Principal | UUID, module: str, action: str
    ) -> bool: ...
