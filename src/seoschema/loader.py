from __future__ import annotations

from typing import Any, Dict, Optional, Union

import httpx
from pydantic import TypeAdapter

from seoschema.bootstrap import load_builtin_sources
from seoschema.core.logger import get_logger
from seoschema.models.schema_table import SchemaTable
from seoschema.models.source_config import PackagedSchemaSourceConfig, SchemaSourceConfig
from seoschema.registry.builder import build_registry
from seoschema.registry.registry import SchemaRegistry
from seoschema.sources.base import SchemaSource
from seoschema.sources.registry import SchemaSourceRegistry

logger = get_logger(__name__)

_SOURCE_ADAPTER: TypeAdapter[Any] = TypeAdapter(SchemaSourceConfig)


def load_schema_table(
    cfg: Union[Dict[str, Any], SchemaSourceConfig, None] = None,
    **source_kwargs: Any,
) -> SchemaTable:
    """
    Load and validate a schema table from a configured source.

    Args:
        cfg: Source configuration as either:
            - None (the table shipped with the package)
            - A dict (validated against the ``kind`` discriminator)
            - A source config model object
        source_kwargs: Extra keyword arguments for the source's ``from_config``
                       (e.g. ``client=`` for the http source).

    Raises:
        SchemaSourceRegistryError: If no source is registered for the kind.
        SchemaSourceError: If the table cannot be read or parsed.
        ValidationError: If the source config or the table is invalid.
    """
    if cfg is None:
        cfg = PackagedSchemaSourceConfig()
    elif isinstance(cfg, dict):
        cfg = _SOURCE_ADAPTER.validate_python(cfg)

    load_builtin_sources()
    source_cls = SchemaSourceRegistry.get(cfg.kind)
    source: SchemaSource = source_cls.from_config(cfg, **source_kwargs)
    logger.debug(f"Loading schema table via {source_cls.__name__}")
    return SchemaTable.model_validate(source.load())


def load_registry(
    cfg: Union[Dict[str, Any], SchemaSourceConfig, None] = None,
    **source_kwargs: Any,
) -> SchemaRegistry:
    """Load a schema table and build a frozen registry from it."""
    return build_registry(load_schema_table(cfg, **source_kwargs))


def source_config_for_path(path: Optional[str]) -> Union[Dict[str, Any], None]:
    """CLI helper: a file source for ``path``, or the packaged table when omitted."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        url = httpx.URL(path)
        base_url = f"{url.scheme}://{url.host}" + (f":{url.port}" if url.port else "")
        return {"kind": "http", "base_url": base_url, "path": url.raw_path.decode("ascii")}
    return {"kind": "file", "path": path}
