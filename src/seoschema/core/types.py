"""Alternative types a property value may take.

Three kinds exist:

- ``DataType``: schema.org data types (Text, URL, Boolean, ...), checked and
  rendered with pydantic type adapters.
- ``EnumerationType``: a closed set of schema.org enumeration members.
- ``EntityType``: a reference to a registered entity type; the payload is an
  ``Entity`` of that type or of a declared subtype.

Every alternative answers two questions: does a Python value fit it
(``accepts``), and does a raw JSON value have its shape (``matches_raw``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, Type

from pydantic import AnyUrl, TypeAdapter, ValidationError


SCHEMA_ORG_IRI = "https://schema.org/"

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")
_ISO_DURATION = re.compile(
    r"^P(?!$)(\d+(\.\d+)?Y)?(\d+(\.\d+)?M)?(\d+(\.\d+)?W)?(\d+(\.\d+)?D)?"
    r"(T(?=\d)(\d+(\.\d+)?H)?(\d+(\.\d+)?M)?(\d+(\.\d+)?S)?)?$"
)

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)
_DATE_ADAPTER: TypeAdapter[date] = TypeAdapter(date)
_DATETIME_ADAPTER: TypeAdapter[datetime] = TypeAdapter(datetime)


class AlternativeType:
    """Base class for the alternatives of an ``Or`` value."""

    name: str
    kind: str

    def accepts(self, value: Any) -> bool:
        raise NotImplementedError

    def matches_raw(self, raw: Any) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_url(value: Any) -> bool:
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_date(value: Any) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _is_duration(value: Any) -> bool:
    return isinstance(value, str) and bool(_ISO_DURATION.match(value))


def _raw_date(raw: Any) -> bool:
    if not isinstance(raw, str) or not _DATE_ONLY.match(raw):
        return False
    try:
        _DATE_ADAPTER.validate_python(raw)
    except ValidationError:
        return False
    return True


def _raw_datetime(raw: Any) -> bool:
    if not isinstance(raw, str) or not _ISO_DATETIME.match(raw):
        return False
    try:
        _DATETIME_ADAPTER.validate_python(raw)
    except ValidationError:
        return False
    return True


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True, repr=False)
class DataType(AlternativeType):
    """A schema.org data type backed by a Python type."""

    name: str
    python_type: Type[Any]
    check: Callable[[Any], bool]
    raw_check: Callable[[Any], bool]
    to_raw: Callable[[Any], Any] = _identity
    from_raw: Callable[[Any], Any] = _identity
    kind: str = field(default="data", init=False)

    def accepts(self, value: Any) -> bool:
        return self.check(value)

    def matches_raw(self, raw: Any) -> bool:
        return self.raw_check(raw)


TEXT = DataType("Text", str, lambda v: isinstance(v, str), lambda r: isinstance(r, str))
URL = DataType("URL", str, _is_url, _is_url)
BOOLEAN = DataType("Boolean", bool, _is_bool, _is_bool)
INTEGER = DataType("Integer", int, _is_int, _is_int)
NUMBER = DataType("Number", float, _is_number, _is_number)
DATE = DataType(
    "Date",
    date,
    _is_date,
    _raw_date,
    to_raw=lambda v: _DATE_ADAPTER.dump_python(v, mode="json"),
    from_raw=_DATE_ADAPTER.validate_python,
)
DATETIME = DataType(
    "DateTime",
    datetime,
    lambda v: isinstance(v, datetime),
    _raw_datetime,
    to_raw=lambda v: _DATETIME_ADAPTER.dump_python(v, mode="json"),
    from_raw=_DATETIME_ADAPTER.validate_python,
)
DURATION = DataType("Duration", str, _is_duration, _is_duration)


BUILTIN_DATA_TYPES: Dict[str, DataType] = {
    t.name: t for t in (TEXT, URL, BOOLEAN, INTEGER, NUMBER, DATE, DATETIME, DURATION)
}

# Spellings accepted in schema tables besides the schema.org names.
DATA_TYPE_ALIASES: Dict[str, str] = {
    "string": "Text",
    "str": "Text",
    "Uri": "URL",
    "url": "URL",
    "bool": "Boolean",
    "int": "Integer",
    "double": "Number",
    "float": "Number",
}


def builtin_data_type(name: str) -> Optional[DataType]:
    return BUILTIN_DATA_TYPES.get(DATA_TYPE_ALIASES.get(name, name))


@dataclass(frozen=True, repr=False)
class EnumerationType(AlternativeType):
    """A closed set of schema.org enumeration members.

    The payload is the bare member name. Raw values may be the member name or
    its schema.org IRI (``https://schema.org/InForce``, also ``http://``).
    """

    name: str
    members: FrozenSet[str]
    kind: str = field(default="enumeration", init=False)

    def member_for(self, raw: Any) -> Optional[str]:
        if not isinstance(raw, str):
            return None
        candidate = raw
        for prefix in (SCHEMA_ORG_IRI, "http://schema.org/"):
            if raw.startswith(prefix):
                candidate = raw[len(prefix):]
                break
        return candidate if candidate in self.members else None

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.members

    def matches_raw(self, raw: Any) -> bool:
        return self.member_for(raw) is not None

    def to_raw(self, value: str) -> str:
        return f"{SCHEMA_ORG_IRI}{value}"


@dataclass(frozen=True, repr=False)
class EntityType(AlternativeType):
    """A reference to a registered entity type.

    ``is_subtype`` is supplied by the registry so that an alternative declared
    as ``Organization`` also admits a ``Corporation`` payload.
    """

    name: str
    is_subtype: Callable[[str, str], bool] = field(compare=False, hash=False)
    kind: str = field(default="entity", init=False)

    def admits(self, type_name: str) -> bool:
        return type_name == self.name or self.is_subtype(type_name, self.name)

    def accepts(self, value: Any) -> bool:
        from seoschema.core.entity import Entity

        return isinstance(value, Entity) and self.admits(value.type_name)

    def matches_raw(self, raw: Any) -> bool:
        if not isinstance(raw, dict):
            return False
        type_name = raw.get("@type")
        return isinstance(type_name, str) and self.admits(type_name)


def alternative_names(alternatives: Tuple[AlternativeType, ...]) -> Tuple[str, ...]:
    return tuple(a.name for a in alternatives)


def describe_value(value: Any) -> str:
    """Short description of a payload for error details."""
    from seoschema.core.entity import Entity

    if isinstance(value, Entity):
        return f"Entity({value.type_name})"
    return type(value).__name__
