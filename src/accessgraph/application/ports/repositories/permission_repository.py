"""Permission repository port."""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol
from uuid import UUID

from accessgraph.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def list_by_ids(
        self, permission_ids: Iterable[UUID], *, active_only: bool = True
    ) -> list[Permission]: ...

    async def list_active(
        self,
        *,
        module: str | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = 50,
    ) -> tuple[list[Permission], int]:
        """Active permissions ordered by (module, action) with the total count.

        ``limit=None`` returns every match.
        """
        ...

    async def upsert(
        self,
        canonical_key: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Permission:
        """Atomic upsert keyed on ``canonical_key``.

        ``on_insert`` is written only when the row is created, ``on_update``
        on every call. The two groups must not share a field.
        """
        ...

    async def set_active(self, permission_id: UUID, active: bool) -> Permission | None: ...

    async def acquire_bootstrap_lock(self, lock_id: int) -> None:
        """Serialize catalog bootstrap for the rest of the transaction."""
        ...
