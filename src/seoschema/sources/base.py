from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol

import yaml

from seoschema.core.exceptions import SchemaSourceError


class SchemaSource(Protocol):
    def load(self) -> Dict[str, Any]:
        ...


def format_from_suffix(name: str) -> Optional[str]:
    lowered = name.lower()
    if lowered.endswith(".json"):
        return "json"
    if lowered.endswith((".yaml", ".yml")):
        return "yaml"
    return None


def parse_table_text(text: str, fmt: str, *, origin: str) -> Dict[str, Any]:
    """Parse a schema table document; YAML is a superset of JSON so it is the fallback."""
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            raise SchemaSourceError(f"Unsupported schema table format {fmt!r} for {origin}. Use json or yaml")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaSourceError(f"Failed to parse schema table from {origin}: {e}") from e

    if not isinstance(data, dict):
        raise SchemaSourceError(
            f"Schema table from {origin} must be a mapping, got {type(data).__name__}"
        )
    return data
