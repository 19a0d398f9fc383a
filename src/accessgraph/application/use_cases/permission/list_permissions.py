"""List permissions use case."""

from dataclasses import dataclass

from accessgraph.domain.entities import Permission


@dataclass
class PermissionPage:
    items: list[Permission]
    page: int
    limit: int
    total: int


class ListPermissionsUseCase:
    """Page through active permissions ordered by (module, action)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        page: int = 1,
        limit: int = 50,
        module: str | None = None,
        search: str | None = None,
    ) -> PermissionPage:
        """Filter by module (case-insensitive) and free-text search on key/description."""
        page = max(1, page)
        limit = max(1, limit)
        async with self._uow_factory() as uow:
            items, total = await uow.permissions.list_active(
                module=module.strip().upper() if module else None,
                search=search.strip() if search else None,
                offset=(page - 1) * limit,
                limit=limit,
            )
        return PermissionPage(items=items, page=page, limit=limit, total=total)
