"""Role inheritance graph walks."""

from collections import deque
from collections.abc import AsyncIterator, Iterable
from uuid import UUID

from accessgraph.application.ports.repositories import RoleRepository
from accessgraph.domain.entities import Role


class RoleInheritanceResolver:
    """Breadth-first walks over ``Role.inherits`` edges.

    Every walk keeps a visited set keyed by role id, so cyclic data that
    slipped past validation still terminates.
    """

    async def walk(
        self,
        roles: RoleRepository,
        start_ids: Iterable[UUID],
        *,
        active_only: bool = False,
    ) -> AsyncIterator[Role]:
        """Yield each role reachable from ``start_ids`` exactly once."""
        queue = deque(dict.fromkeys(start_ids))
        visited: set[UUID] = set(queue)
        while queue:
            role = await roles.get_by_id(queue.popleft())
            if role is None or (active_only and not role.active):
                continue
            yield role
            for parent_id in role.inherits:
                if parent_id not in visited:
                    visited.add(parent_id)
                    queue.append(parent_id)

    async def reaches(self, roles: RoleRepository, start_id: UUID, target_id: UUID) -> bool:
        """True when ``target_id`` is ``start_id`` or one of its ancestors."""
        if start_id == target_id:
            return True
        async for role in self.walk(roles, [start_id]):
            if target_id in role.inherits:
                return True
        return False

    async def collect_permission_ids(self, roles: RoleRepository, role: Role) -> set[UUID]:
        """Union of ``role``'s permissions and those of its active ancestors."""
        collected = set(role.permission_ids)
        async for ancestor in self.walk(roles, role.inherits, active_only=True):
            if ancestor.id == role.id:
                continue
            collected.update(ancestor.permission_ids)
        return collected
