from __future__ import annotations

from typing import Any, Dict, Union

from seoschema.core.logger import get_logger
from seoschema.models.schema_table import SchemaTable
from seoschema.registry.registry import SchemaRegistry

logger = get_logger(__name__)


def build_registry(table: Union[SchemaTable, Dict[str, Any]]) -> SchemaRegistry:
    """Build and freeze a registry from a schema table.

    Every entity type is declared before any property so that property
    alternatives may reference types declared later in the table.
    """
    if not isinstance(table, SchemaTable):
        table = SchemaTable.model_validate(table)

    registry = SchemaRegistry()
    for name, members in table.enumerations.items():
        registry.declare_enumeration(name, members)
    for name, properties in table.property_groups.items():
        registry.declare_property_group(name, properties)
    for name, spec in table.entity_types.items():
        registry.declare_entity_type(name, supertypes=spec.subtype_of, description=spec.description)
    for name, spec in table.entity_types.items():
        for prop, alternatives in spec.properties.items():
            registry.declare_property(name, prop, alternatives)
        for group in spec.includes:
            registry.include_property_group(name, group)

    registry.freeze()
    logger.info(
        f"Loaded schema table: {len(table.entity_types)} entity types, "
        f"{len(table.enumerations)} enumerations, {len(table.property_groups)} property groups"
    )
    return registry
