"""JSON-LD style document -> Entity.

Each value is resolved by structural match against the property's declared
alternatives, tried in declaration order; the first match wins. A call
either returns a fully populated entity or raises, never a partial one.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional

from seoschema.core.entity import Entity
from seoschema.core.exceptions import (
    EntityTypeConflictError,
    NoMatchingAlternativeError,
    UnknownEntityTypeError,
    UnknownPropertyHandler,
    UnknownPropertyPolicy,
)
from seoschema.core.logger import get_logger, push_property_path, reset_property_path
from seoschema.core.types import AlternativeType, DataType, EntityType, EnumerationType
from seoschema.core.value import Or
from seoschema.codec.serializer import CONTEXT_KEY, ID_KEY, TYPE_KEY
from seoschema.models.codec_config import CodecConfig
from seoschema.registry.registry import PropertyDeclaration, RegistryEntry, SchemaRegistry

logger = get_logger(__name__)


class Deserializer:
    """Reads documents into entities using a registry's declarations.

    Args:
        registry: Registry to resolve entity types against; the packaged
                  default registry when omitted.
        config: Codec configuration (unknown-property policy).
        custom_handler: Optional callable ``(entity_type, key, raw) -> bool``
                        deciding whether an undeclared key is kept.
    """

    def __init__(
        self,
        registry: Optional[SchemaRegistry] = None,
        *,
        config: Optional[CodecConfig] = None,
        custom_handler: Optional[Callable[[str, str, Any], bool]] = None,
    ):
        if registry is None:
            from seoschema.registry.default import default_registry

            registry = default_registry()
        self.registry = registry
        self.config = config or CodecConfig()
        self._unknown = UnknownPropertyHandler(
            policy=self.config.unknown_property_policy,
            logger=logger,
            custom_handler=custom_handler,
        )

    @property
    def unknown_property_policy(self) -> UnknownPropertyPolicy:
        return self._unknown.policy

    def deserialize(self, entity_type_name: str, document: Dict[str, Any]) -> Entity:
        if not isinstance(document, dict):
            raise TypeError(
                f"Document for {entity_type_name} must be a JSON object, got {type(document).__name__}"
            )
        declared = document.get(TYPE_KEY)
        if declared is not None and declared != entity_type_name:
            raise EntityTypeConflictError(
                f"Document declares @type={declared!r} but {entity_type_name!r} was requested"
            )
        return self._read_entity(self.registry.lookup(entity_type_name), document, top_level=True)

    def deserialize_document(self, document: Dict[str, Any]) -> Entity:
        """Deserialize using the document's own ``@type``."""
        if not isinstance(document, dict):
            raise TypeError(f"Document must be a JSON object, got {type(document).__name__}")
        type_name = document.get(TYPE_KEY)
        if not isinstance(type_name, str):
            raise EntityTypeConflictError(f"Document has no usable @type: {type_name!r}")
        return self.deserialize(type_name, document)

    def loads(self, text: str, entity_type_name: Optional[str] = None) -> Entity:
        document = json.loads(text)
        if entity_type_name is None:
            return self.deserialize_document(document)
        return self.deserialize(entity_type_name, document)

    def _read_entity(self, entry: RegistryEntry, document: Dict[str, Any], *, top_level: bool) -> Entity:
        node_id: Optional[str] = None
        values: Dict[str, Or] = {}
        extensions: Dict[str, Any] = {}

        for key, raw in document.items():
            if key == TYPE_KEY:
                continue
            if key == ID_KEY:
                if not isinstance(raw, str):
                    raise NoMatchingAlternativeError(entry.name, ID_KEY, raw, ("URL",))
                node_id = raw
                continue
            if key == CONTEXT_KEY and top_level:
                continue
            if not entry.has_property(key):
                if self._unknown.handle(entry.name, key, raw):
                    extensions[key] = raw
                continue
            if raw is None:
                # JSON null is an explicit absence
                continue
            token = push_property_path(f"{entry.name}.{key}")
            try:
                values[key] = self._read_value(entry, entry.declaration(key), raw)
            finally:
                reset_property_path(token)

        return Entity(entry, values, node_id=node_id, extensions=extensions)

    def _read_value(self, entry: RegistryEntry, declaration: PropertyDeclaration, raw: Any) -> Or:
        if isinstance(raw, dict):
            nested_type = raw.get(TYPE_KEY)
            if isinstance(nested_type, str) and nested_type not in self.registry:
                raise UnknownEntityTypeError(nested_type, referenced_by=f"{entry.name}.{declaration.name}")
        matches = [alt for alt in declaration.alternatives if alt.matches_raw(raw)]
        if not matches:
            if (
                isinstance(raw, dict)
                and not isinstance(raw.get(TYPE_KEY), str)
                and any(isinstance(alt, EntityType) for alt in declaration.alternatives)
            ):
                raise EntityTypeConflictError(
                    f"{entry.name}.{declaration.name}: nested object has no usable @type"
                )
            raise NoMatchingAlternativeError(entry.name, declaration.name, raw, declaration.alternative_names)
        chosen = matches[0]
        if len(matches) > 1:
            logger.debug(
                f"Value matches alternatives {[m.name for m in matches]}; "
                f"using first declared {chosen.name!r}"
            )
        return Or.of(declaration.alternatives, chosen, self._convert(chosen, raw))

    def _convert(self, alternative: AlternativeType, raw: Any) -> Any:
        if isinstance(alternative, EntityType):
            nested = self.registry.lookup(raw[TYPE_KEY])
            return self._read_entity(nested, raw, top_level=False)
        if isinstance(alternative, EnumerationType):
            return alternative.member_for(raw)
        if isinstance(alternative, DataType):
            return alternative.from_raw(raw)
        raise TypeError(f"Unsupported alternative kind: {alternative!r}")


def deserialize(
    entity_type_name: str,
    document: Dict[str, Any],
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Entity:
    return Deserializer(registry, config=config).deserialize(entity_type_name, document)


def deserialize_document(
    document: Dict[str, Any],
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Entity:
    return Deserializer(registry, config=config).deserialize_document(document)


def loads(
    text: str,
    entity_type_name: Optional[str] = None,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Entity:
    return Deserializer(registry, config=config).loads(text, entity_type_name)
