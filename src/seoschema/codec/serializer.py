"""Entity -> JSON-LD style document.

Values are written plain: the alternative tag of an ``Or`` is never emitted,
readers infer it from the value's shape. Absent properties are omitted and
present ones follow registry declaration order.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from seoschema.core.entity import Entity
from seoschema.core.logger import push_property_path, reset_property_path
from seoschema.core.types import DataType, EntityType, EnumerationType
from seoschema.core.value import Or
from seoschema.models.codec_config import CodecConfig

TYPE_KEY = "@type"
ID_KEY = "@id"
CONTEXT_KEY = "@context"


def _value_to_raw(wrapped: Or) -> Any:
    selected = wrapped.selected
    if isinstance(selected, EntityType):
        return _entity_to_raw(wrapped.value)
    if isinstance(selected, (DataType, EnumerationType)):
        return selected.to_raw(wrapped.value)
    raise TypeError(f"Unsupported alternative kind: {selected!r}")


def _entity_to_raw(entity: Entity) -> Dict[str, Any]:
    document: Dict[str, Any] = {TYPE_KEY: entity.type_name}
    if entity.node_id is not None:
        document[ID_KEY] = entity.node_id
    for name, wrapped in entity.items():
        token = push_property_path(f"{entity.type_name}.{name}")
        try:
            document[name] = _value_to_raw(wrapped)
        finally:
            reset_property_path(token)
    for name, raw in entity.extensions.items():
        document.setdefault(name, raw)
    return document


def serialize(
    entity: Entity,
    *,
    include_context: Optional[bool] = None,
    config: Optional[CodecConfig] = None,
) -> Dict[str, Any]:
    """Produce the structured document for ``entity``.

    ``@type`` comes first, then ``@id`` when set, then declared properties,
    then any preserved extension keys.
    """
    config = config or CodecConfig()
    if include_context is None:
        include_context = config.include_context

    body = _entity_to_raw(entity)
    if not include_context:
        return body
    document: Dict[str, Any] = {CONTEXT_KEY: config.context}
    document.update(body)
    return document


def dumps(
    entity: Entity,
    *,
    include_context: Optional[bool] = None,
    config: Optional[CodecConfig] = None,
    **json_kwargs: Any,
) -> str:
    json_kwargs.setdefault("ensure_ascii", False)
    return json.dumps(serialize(entity, include_context=include_context, config=config), **json_kwargs)
