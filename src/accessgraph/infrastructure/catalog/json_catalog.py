"""Load a permission catalog from a JSON file."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from accessgraph.domain.catalog import Catalog, CatalogEntry
from accessgraph.domain.exceptions import ValidationError


class CatalogModuleSchema(BaseModel):
    """One ``modules[]`` item of a catalog file."""

    key: str = Field(min_length=1)
    category: str = ""
    actions: list[str] = Field(min_length=1)


class CatalogFileSchema(BaseModel):
    """Catalog file: ``{"version": ..., "modules": [...]}``."""

    version: str = "1"
    modules: list[CatalogModuleSchema]


def parse_catalog(raw: str | bytes) -> Catalog:
    """Parse catalog JSON; malformed input raises ValidationError."""
    try:
        data = CatalogFileSchema.model_validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid catalog: {e}") from e
    return Catalog(
        entries=tuple(
            CatalogEntry(module_key=m.key, category=m.category, actions=frozenset(m.actions))
            for m in data.modules
        ),
        version=data.version,
    )


def load_catalog(path: str | Path) -> Catalog:
    """Read and parse a catalog file."""
    return parse_catalog(Path(path).read_bytes())
