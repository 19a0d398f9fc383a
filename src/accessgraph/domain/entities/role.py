"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID


def normalize_role_name(name: str) -> str:
    return name.strip().upper()


@dataclass
class Role:
    """Role - named permission set with parent roles it inherits from."""

    id: UUID
    name: str
    description: str = ""
    permission_ids: set[UUID] = field(default_factory=set)
    inherits: set[UUID] = field(default_factory=set)
    active: bool = True
    is_super_admin: bool = False
    is_system: bool = False

    def __post_init__(self) -> None:
        self.name = normalize_role_name(self.name)
