from __future__ import annotations

import threading
from typing import Optional

from seoschema.core.exceptions import RegistryError
from seoschema.registry.registry import SchemaRegistry

# Process-wide registry, built once from the packaged schema table on first use
_DEFAULT: Optional[SchemaRegistry] = None
_LOCK = threading.Lock()


def default_registry() -> SchemaRegistry:
    global _DEFAULT
    if _DEFAULT is not None:
        return _DEFAULT
    with _LOCK:
        if _DEFAULT is None:
            from seoschema.loader import load_registry

            _DEFAULT = load_registry()
    return _DEFAULT


def set_default_registry(registry: Optional[SchemaRegistry]) -> None:
    """Install an application-loaded registry as the process default (None resets)."""
    global _DEFAULT
    if registry is not None and not registry.frozen:
        raise RegistryError("Only a frozen registry can be installed as the default")
    with _LOCK:
        _DEFAULT = registry
