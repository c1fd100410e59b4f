"""seoschema.

schema.org entities as flat records of optional, polymorphic properties.

Every property value is an ``Or``: exactly one of the alternative types the
registry declares for (entity type, property). Documents are read and
written in the JSON-LD shape schema.org consumers expect.

Public API for clients building or reading structured data.
"""

from seoschema.codec.deserializer import Deserializer, deserialize, deserialize_document, loads
from seoschema.codec.serializer import dumps, serialize
from seoschema.core.entity import Entity
from seoschema.core.exceptions import (
    EntityTypeConflictError,
    NoMatchingAlternativeError,
    RegistryError,
    RegistryFrozenError,
    SchemaSourceError,
    SeoSchemaError,
    TypeMismatchError,
    UnknownEntityTypeError,
    UnknownPropertyError,
    UnknownPropertyPolicy,
    WrongAlternativeError,
)
from seoschema.core.value import Or
from seoschema.loader import load_registry, load_schema_table
from seoschema.models.codec_config import CodecConfig
from seoschema.registry.default import default_registry, set_default_registry
from seoschema.registry.registry import PropertyDeclaration, RegistryEntry, SchemaRegistry

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "Deserializer",
    "Entity",
    "EntityTypeConflictError",
    "NoMatchingAlternativeError",
    "Or",
    "PropertyDeclaration",
    "RegistryEntry",
    "RegistryError",
    "RegistryFrozenError",
    "SchemaRegistry",
    "SchemaSourceError",
    "SeoSchemaError",
    "TypeMismatchError",
    "UnknownEntityTypeError",
    "UnknownPropertyError",
    "UnknownPropertyPolicy",
    "WrongAlternativeError",
    "default_registry",
    "deserialize",
    "deserialize_document",
    "dumps",
    "load_registry",
    "load_schema_table",
    "loads",
    "serialize",
    "set_default_registry",
]
