"""Validation shared by role mutations."""

from collections.abc import Iterable, Sequence
from uuid import UUID

from accessgraph.application.ports import UnitOfWork
from accessgraph.application.services import PermissionNormalizer
from accessgraph.domain.entities import Role
from accessgraph.domain.exceptions import NotFound, ValidationError


async def resolve_role_permissions(
    uow: UnitOfWork, normalizer: PermissionNormalizer, refs: Sequence[object]
) -> set[UUID]:
    """Normalize ``refs``; non-empty input must resolve to something."""
    permission_ids = await normalizer.resolve_mixed_to_ids(uow, refs)
    if refs and not permission_ids:
        raise ValidationError("no valid permissions resolved")
    return set(permission_ids)


async def ensure_still_active(uow: UnitOfWork, permission_ids: set[UUID]) -> None:
    """Re-check right before the write that no permission was deactivated."""
    if not permission_ids:
        return
    active = await uow.permissions.list_by_ids(permission_ids, active_only=True)
    if len(active) != len(permission_ids):
        raise ValidationError("One or more permissions are invalid or inactive")


async def load_parent_roles(uow: UnitOfWork, role_ids: Iterable[UUID]) -> list[Role]:
    """Fetch roles to inherit from; all must exist and be active."""
    wanted = set(role_ids)
    parents = await uow.roles.list_by_ids(wanted)
    missing = wanted - {r.id for r in parents}
    if missing:
        raise NotFound("Role", ", ".join(sorted(str(m) for m in missing)))
    inactive = [r.name for r in parents if not r.active]
    if inactive:
        raise ValidationError(f"Cannot inherit from inactive role(s): {', '.join(inactive)}")
    return parents


def ensure_mutable(role: Role) -> None:
    if role.is_system:
        raise ValidationError(f"System role {role.name} cannot be modified")
