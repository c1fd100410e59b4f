from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple

from seoschema.core.exceptions import TypeMismatchError
from seoschema.core.value import AlternativeRef, Or

if TYPE_CHECKING:
    from seoschema.registry.registry import RegistryEntry


class Entity:
    """One schema.org record: a type name plus optional, independently set properties.

    Properties are either absent or hold an ``Or`` value whose alternatives
    are the ones the registry declares for (entity type, property). Instances
    are flat: shared property groups are resolved into the registry entry,
    not into a class hierarchy.
    """

    __slots__ = ("_entry", "_values", "node_id", "extensions")

    def __init__(
        self,
        entry: "RegistryEntry",
        values: Optional[Mapping[str, Any]] = None,
        *,
        node_id: Optional[str] = None,
        extensions: Optional[Mapping[str, Any]] = None,
    ):
        self._entry = entry
        self._values: Dict[str, Or] = {}
        self.node_id = node_id
        self.extensions: Dict[str, Any] = dict(extensions or {})
        for name, value in (values or {}).items():
            self.set(name, value)

    @property
    def type_name(self) -> str:
        return self._entry.name

    @property
    def entry(self) -> "RegistryEntry":
        return self._entry

    def set(self, name: str, value: Any, *, as_type: Optional[AlternativeRef] = None) -> "Entity":
        """Set a property, wrapping plain values in the declared ``Or``.

        ``value`` may be an ``Or`` (re-bound to the declared alternatives), or
        a plain payload; ``as_type`` picks the alternative explicitly, otherwise
        the first declared alternative that accepts the payload is used.
        ``None`` clears the property.
        """
        declaration = self._entry.declaration(name)
        if value is None:
            self._values.pop(name, None)
            return self
        if isinstance(value, Or):
            if as_type is not None and not value.is_(as_type):
                raise TypeMismatchError(
                    "as_type disagrees with the wrapped value",
                    details={"property": name, "as_type": str(as_type), "selected": value.selected_type},
                )
            wrapped = value.rebind(declaration.alternatives)
        elif as_type is not None:
            wrapped = Or.of(declaration.alternatives, as_type, value)
        else:
            wrapped = Or.infer(declaration.alternatives, value)
        self._values[name] = wrapped
        return self

    def clear(self, name: str) -> "Entity":
        self._entry.declaration(name)
        self._values.pop(name, None)
        return self

    def get(self, name: str) -> Optional[Or]:
        self._entry.declaration(name)
        return self._values.get(name)

    def value(self, name: str, default: Any = None) -> Any:
        """Payload of a property regardless of which alternative it holds."""
        wrapped = self.get(name)
        return default if wrapped is None else wrapped.value

    def __getitem__(self, name: str) -> Or:
        wrapped = self.get(name)
        if wrapped is None:
            raise KeyError(name)
        return wrapped

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[str, Or]]:
        """Present properties in registry declaration order."""
        for declaration in self._entry.properties:
            wrapped = self._values.get(declaration.name)
            if wrapped is not None:
                yield declaration.name, wrapped

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return (
            self.type_name == other.type_name
            and self.node_id == other.node_id
            and self._values == other._values
            and self.extensions == other.extensions
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Custom repr that truncates large records to keep output readable."""
        parts = [f"Entity(type_name='{self.type_name}'"]
        if self.node_id:
            parts.append(f", node_id={self.node_id!r}")
        present = [f"{name}={wrapped.value!r}" for name, wrapped in self.items()]
        if len(present) <= 3:
            parts.append(f", {', '.join(present)}" if present else "")
        else:
            parts.append(f", {present[0]}, {present[1]}, ... +{len(present) - 2} more")
        if self.extensions:
            parts.append(f", extensions={sorted(self.extensions)}")
        parts.append(")")
        return "".join(parts)
