from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional, Type

from seoschema.core.exceptions import SchemaSourceError


class SchemaSourceRegistryError(SchemaSourceError):
    pass


class SchemaSourceRegistry:
    _registry: ClassVar[Dict[str, Type[Any]]] = {}

    @classmethod
    def register(
        cls,
        *,
        kind: str,
        source_class: Type[Any],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and kind in cls._registry:
            existing = cls._registry[kind]
            raise SchemaSourceRegistryError(
                f"Schema source already registered for kind={kind!r}: {existing}"
            )
        cls._registry[kind] = source_class

    @classmethod
    def get(cls, kind: str) -> Type[Any]:
        try:
            return cls._registry[kind]
        except KeyError as exc:
            raise SchemaSourceRegistryError(f"No schema source registered for kind={kind!r}") from exc

    @classmethod
    def try_get(cls, kind: str) -> Optional[Type[Any]]:
        return cls._registry.get(kind)

    @classmethod
    def kinds(cls) -> tuple[str, ...]:
        return tuple(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_schema_source(
    *,
    kind: str,
    overwrite: bool = False,
) -> Callable[[Type[Any]], Type[Any]]:
    def decorator(source_class: Type[Any]) -> Type[Any]:
        SchemaSourceRegistry.register(kind=kind, source_class=source_class, overwrite=overwrite)
        return source_class

    return decorator
