from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_SOURCE_MODULES: tuple[str, ...] = (
    "seoschema.sources.file_source",
    "seoschema.sources.http_source",
)


_LOADED = False


def load_builtin_sources(*, reload: bool = False, modules: Iterable[str] = BUILTIN_SOURCE_MODULES) -> None:
    """Import built-in schema source modules so decorators register them.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True after clearing the registry to re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from seoschema.sources.registry import SchemaSourceRegistry

        SchemaSourceRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True
