from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

from seoschema.core.exceptions import SchemaSourceError
from seoschema.models.source_config import FileSchemaSourceConfig, PackagedSchemaSourceConfig
from seoschema.sources.base import format_from_suffix, parse_table_text
from seoschema.sources.registry import register_schema_source


@register_schema_source(kind="file")
class FileSchemaSource:
    """Schema table stored as a local JSON or YAML file."""

    def __init__(self, path: str, *, fmt: Optional[str] = None):
        self.path = Path(path)
        self.fmt = fmt

    @classmethod
    def from_config(cls, cfg: FileSchemaSourceConfig) -> "FileSchemaSource":
        return cls(cfg.path, fmt=cfg.format)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise SchemaSourceError(f"Schema table not found: {self.path}")
        fmt = self.fmt or format_from_suffix(self.path.name)
        if fmt is None:
            raise SchemaSourceError(
                f"Unsupported schema table format: {self.path.suffix}. Use .json or .yaml"
            )
        with open(self.path, "r", encoding="utf-8") as f:
            return parse_table_text(f.read(), fmt, origin=str(self.path))


@register_schema_source(kind="packaged")
class PackagedSchemaSource:
    """Schema table shipped inside the package (``seoschema/schemas``)."""

    def __init__(self, resource: str = "schemaorg.yaml"):
        self.resource = resource

    @classmethod
    def from_config(cls, cfg: PackagedSchemaSourceConfig) -> "PackagedSchemaSource":
        return cls(cfg.resource)

    def load(self) -> Dict[str, Any]:
        fmt = format_from_suffix(self.resource)
        if fmt is None:
            raise SchemaSourceError(f"Unsupported packaged schema resource: {self.resource}")
        target = resources.files("seoschema.schemas").joinpath(self.resource)
        if not target.is_file():
            raise SchemaSourceError(f"Packaged schema table not found: {self.resource}")
        return parse_table_text(target.read_text(encoding="utf-8"), fmt, origin=f"package:{self.resource}")
