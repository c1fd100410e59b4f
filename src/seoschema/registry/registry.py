from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from seoschema.core.entity import Entity
from seoschema.core.exceptions import (
    RegistryError,
    RegistryFrozenError,
    UnknownEntityTypeError,
    UnknownPropertyError,
)
from seoschema.core.logger import get_logger
from seoschema.core.types import (
    AlternativeType,
    EntityType,
    EnumerationType,
    builtin_data_type,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class PropertyDeclaration:
    name: str
    alternatives: Tuple[AlternativeType, ...]
    group: Optional[str] = None  # property group the declaration came from, if any

    @property
    def alternative_names(self) -> Tuple[str, ...]:
        return tuple(a.name for a in self.alternatives)


@dataclass(frozen=True)
class RegistryEntry:
    """Declared shape of one entity type: its ordered property declarations."""

    name: str
    properties: Tuple[PropertyDeclaration, ...]
    supertypes: Tuple[str, ...] = ()
    description: Optional[str] = None
    _by_name: Dict[str, PropertyDeclaration] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {p.name: p for p in self.properties})

    def declaration(self, name: str) -> PropertyDeclaration:
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise UnknownPropertyError(self.name, name) from exc

    def has_property(self, name: str) -> bool:
        return name in self._by_name

    @property
    def property_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.properties)


@dataclass
class _EntityDraft:
    name: str
    supertypes: Tuple[str, ...] = ()
    description: Optional[str] = None
    properties: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    includes: List[str] = field(default_factory=list)


class SchemaRegistry:
    """Table of entity types, their property declarations and their alternative types.

    Declarations are accepted until ``freeze()``; afterwards the registry is
    read-only and safe to share between threads. Alternative types are stored
    per (entity type, property) so the same property name may carry different
    alternatives on different types.

    Example:
        >>> registry = SchemaRegistry()
        >>> registry.declare_property("LoanOrCredit", "currency", ["Text"])
        >>> registry.freeze()
        >>> loan = registry.new_entity("LoanOrCredit", currency="USD")
    """

    def __init__(self) -> None:
        self._drafts: Dict[str, _EntityDraft] = {}
        self._enumerations: Dict[str, EnumerationType] = {}
        self._groups: Dict[str, Dict[str, Tuple[str, ...]]] = {}
        self._entries: Dict[str, RegistryEntry] = {}
        self._entity_types: Dict[str, EntityType] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Load-time declarations
    # ------------------------------------------------------------------

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; declarations are only accepted at load time")

    def _ensure_free_name(self, name: str) -> None:
        if builtin_data_type(name) is not None:
            raise RegistryError(f"{name!r} is a built-in data type name")
        if name in self._enumerations or name in self._drafts:
            raise RegistryError(f"Type already declared: {name!r}")

    def declare_entity_type(
        self,
        name: str,
        *,
        supertypes: Sequence[str] = (),
        description: Optional[str] = None,
    ) -> None:
        self._ensure_mutable()
        self._ensure_free_name(name)
        self._drafts[name] = _EntityDraft(name=name, supertypes=tuple(supertypes), description=description)
        self._entity_types[name] = EntityType(name, self.is_subtype)

    def declare_enumeration(self, name: str, members: Sequence[str]) -> None:
        self._ensure_mutable()
        self._ensure_free_name(name)
        if not members:
            raise RegistryError(f"Enumeration {name!r} must declare at least one member")
        self._enumerations[name] = EnumerationType(name, frozenset(members))

    def declare_property_group(self, name: str, properties: Mapping[str, Sequence[str]]) -> None:
        self._ensure_mutable()
        if name in self._groups:
            raise RegistryError(f"Property group already declared: {name!r}")
        self._groups[name] = {prop: self._check_alternative_list(name, prop, alts) for prop, alts in properties.items()}

    def declare_property(
        self,
        entity_type_name: str,
        property_name: str,
        alternative_type_list: Sequence[str],
    ) -> None:
        self._ensure_mutable()
        if entity_type_name not in self._drafts:
            self.declare_entity_type(entity_type_name)
        draft = self._drafts[entity_type_name]
        if property_name in draft.properties:
            raise RegistryError(f"Property already declared: {entity_type_name}.{property_name}")
        draft.properties[property_name] = self._check_alternative_list(
            entity_type_name, property_name, alternative_type_list
        )

    def include_property_group(self, entity_type_name: str, group: str) -> None:
        self._ensure_mutable()
        if group not in self._groups:
            raise RegistryError(f"Unknown property group {group!r} (included by {entity_type_name})")
        if entity_type_name not in self._drafts:
            self.declare_entity_type(entity_type_name)
        draft = self._drafts[entity_type_name]
        if group not in draft.includes:
            draft.includes.append(group)

    @staticmethod
    def _check_alternative_list(owner: str, prop: str, alternatives: Sequence[str]) -> Tuple[str, ...]:
        names = tuple(alternatives)
        if not names:
            raise RegistryError(f"{owner}.{prop} must declare at least one alternative type")
        if len(set(names)) != len(names):
            raise RegistryError(f"{owner}.{prop} declares duplicate alternatives: {list(names)}")
        return names

    def freeze(self) -> "SchemaRegistry":
        """Resolve every declaration and make the registry read-only."""
        if self._frozen:
            return self
        entries = {name: self._build_entry(draft) for name, draft in self._drafts.items()}
        for draft in self._drafts.values():
            for supertype in draft.supertypes:
                if supertype not in self._drafts:
                    raise UnknownEntityTypeError(supertype, referenced_by=f"{draft.name} supertypes")
        self._entries = entries
        self._frozen = True
        logger.debug(
            f"Registry frozen: entity_types={len(entries)}, enumerations={len(self._enumerations)}, "
            f"property_groups={len(self._groups)}"
        )
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _build_entry(self, draft: _EntityDraft) -> RegistryEntry:
        declarations: Dict[str, PropertyDeclaration] = {}
        sources: List[Tuple[Optional[str], Mapping[str, Tuple[str, ...]]]] = [(None, draft.properties)]
        sources.extend((group, self._groups[group]) for group in draft.includes)
        for group, props in sources:
            for prop, names in props.items():
                where = f"{draft.name}.{prop}"
                alternatives = tuple(self._resolve(name, referenced_by=where) for name in names)
                existing = declarations.get(prop)
                if existing is not None:
                    if existing.alternative_names != tuple(a.name for a in alternatives):
                        raise RegistryError(
                            f"Conflicting declarations for {where}: "
                            f"{list(existing.alternative_names)} vs {list(names)}"
                        )
                    continue
                declarations[prop] = PropertyDeclaration(prop, alternatives, group=group)
        return RegistryEntry(
            name=draft.name,
            properties=tuple(declarations.values()),
            supertypes=draft.supertypes,
            description=draft.description,
        )

    def _resolve(self, name: str, *, referenced_by: Optional[str] = None) -> AlternativeType:
        data_type = builtin_data_type(name)
        if data_type is not None:
            return data_type
        if name in self._enumerations:
            return self._enumerations[name]
        if name in self._entity_types:
            return self._entity_types[name]
        raise UnknownEntityTypeError(name, referenced_by=referenced_by)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def lookup(self, entity_type_name: str) -> RegistryEntry:
        if self._frozen:
            try:
                return self._entries[entity_type_name]
            except KeyError as exc:
                raise UnknownEntityTypeError(entity_type_name) from exc
        draft = self._drafts.get(entity_type_name)
        if draft is None:
            raise UnknownEntityTypeError(entity_type_name)
        return self._build_entry(draft)

    def try_lookup(self, entity_type_name: str) -> Optional[RegistryEntry]:
        try:
            return self.lookup(entity_type_name)
        except UnknownEntityTypeError:
            return None

    def lookup_property(self, entity_type_name: str, property_name: str) -> PropertyDeclaration:
        return self.lookup(entity_type_name).declaration(property_name)

    def resolve_type(self, name: str) -> AlternativeType:
        return self._resolve(name)

    def is_subtype(self, type_name: str, supertype: str) -> bool:
        """True if ``type_name`` derives (transitively) from ``supertype``."""
        seen = set()
        pending = list(self._supertypes_of(type_name))
        while pending:
            current = pending.pop()
            if current == supertype:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._supertypes_of(current))
        return False

    def _supertypes_of(self, name: str) -> Tuple[str, ...]:
        draft = self._drafts.get(name)
        return draft.supertypes if draft is not None else ()

    def entity_types(self) -> Tuple[str, ...]:
        return tuple(self._drafts)

    def enumerations(self) -> Tuple[str, ...]:
        return tuple(self._enumerations)

    def property_groups(self) -> Tuple[str, ...]:
        return tuple(self._groups)

    def new_entity(self, entity_type_name: str, /, *, node_id: Optional[str] = None, **values: Any) -> Entity:
        return Entity(self.lookup(entity_type_name), values, node_id=node_id)

    def __contains__(self, entity_type_name: object) -> bool:
        return entity_type_name in self._drafts

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "loading"
        return f"SchemaRegistry({state}, entity_types={len(self._drafts)})"
