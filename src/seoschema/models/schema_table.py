from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


AlternativeList = List[str]


def _check_alternatives(owner: str, properties: Dict[str, AlternativeList]) -> None:
    for prop, alternatives in properties.items():
        if not alternatives:
            raise ValueError(f"{owner}.{prop} must list at least one alternative type")
        if len(set(alternatives)) != len(alternatives):
            raise ValueError(f"{owner}.{prop} lists duplicate alternative types: {alternatives}")


class EntityTypeSpec(BaseModel):
    description: Optional[str] = None
    subtype_of: List[str] = Field(default_factory=list)
    includes: List[str] = Field(default_factory=list)
    properties: Dict[str, AlternativeList] = Field(default_factory=dict)


class SchemaTable(BaseModel):
    """Declarative source of a registry: enumerations, property groups and entity types.

    Mapping order is significant: property declaration order drives
    serialization order and alternative order drives deserialization
    tie-breaks.
    """

    version: Literal[1] = 1
    enumerations: Dict[str, List[str]] = Field(default_factory=dict)
    property_groups: Dict[str, Dict[str, AlternativeList]] = Field(default_factory=dict)
    entity_types: Dict[str, EntityTypeSpec] = Field(default_factory=dict)

    @field_validator("enumerations")
    @classmethod
    def _validate_enumerations(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        for name, members in value.items():
            if not members:
                raise ValueError(f"enumeration {name!r} must list at least one member")
        return value

    @model_validator(mode="after")
    def _validate_references(self) -> "SchemaTable":
        for group, properties in self.property_groups.items():
            _check_alternatives(group, properties)
        for name, spec in self.entity_types.items():
            _check_alternatives(name, spec.properties)
            unknown_groups = [g for g in spec.includes if g not in self.property_groups]
            if unknown_groups:
                raise ValueError(f"entity type {name!r} includes undeclared property groups: {unknown_groups}")
            unknown_supertypes = [s for s in spec.subtype_of if s not in self.entity_types]
            if unknown_supertypes:
                raise ValueError(f"entity type {name!r} is a subtype of undeclared types: {unknown_supertypes}")
        clashes = sorted(set(self.enumerations) & set(self.entity_types))
        if clashes:
            raise ValueError(f"names declared both as enumeration and entity type: {clashes}")
        return self
