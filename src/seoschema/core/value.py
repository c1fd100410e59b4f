from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence, Tuple, Union

from seoschema.core.exceptions import TypeMismatchError, WrongAlternativeError
from seoschema.core.types import AlternativeType, alternative_names, describe_value


AlternativeRef = Union[str, AlternativeType]


def _find(alternatives: Tuple[AlternativeType, ...], ref: AlternativeRef) -> int:
    name = ref if isinstance(ref, str) else ref.name
    for index, alt in enumerate(alternatives):
        if alt.name == name:
            return index
    return -1


@dataclass(frozen=True, eq=False)
class Or:
    """A property value holding exactly one of a closed set of alternatives.

    ``alternatives`` is the declared alternative list of the property, in
    declaration order. ``index`` says which one is populated and ``value`` is
    the payload. Construction fails with ``TypeMismatchError`` when the
    selected alternative is not declared or the payload does not fit it.

    Example:
        >>> price = Or.of((NUMBER, TEXT), "Number", 9.5)
        >>> price.selected_type
        'Number'
        >>> price.unwrap("Number")
        9.5
    """

    alternatives: Tuple[AlternativeType, ...]
    index: int
    value: Any

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise TypeMismatchError("alternative set must not be empty")
        if not 0 <= self.index < len(self.alternatives):
            raise TypeMismatchError(
                "selected alternative is outside the declared set",
                details={"index": self.index, "alternatives": list(alternative_names(self.alternatives))},
            )
        selected = self.alternatives[self.index]
        if not selected.accepts(self.value):
            raise TypeMismatchError(
                "payload does not match the selected alternative",
                details={"selected": selected.name, "value_type": describe_value(self.value)},
            )

    @classmethod
    def of(
        cls,
        alternatives: Sequence[AlternativeType],
        selected: AlternativeRef,
        value: Any,
    ) -> "Or":
        alts = tuple(alternatives)
        index = _find(alts, selected)
        if index < 0:
            name = selected if isinstance(selected, str) else selected.name
            raise TypeMismatchError(
                "selected alternative is not part of the declared set",
                details={"selected": name, "alternatives": list(alternative_names(alts))},
            )
        return cls(alts, index, value)

    @classmethod
    def infer(cls, alternatives: Sequence[AlternativeType], value: Any) -> "Or":
        """Wrap ``value`` as the first declared alternative that accepts it."""
        alts = tuple(alternatives)
        for index, alt in enumerate(alts):
            if alt.accepts(value):
                return cls(alts, index, value)
        raise TypeMismatchError(
            "no declared alternative accepts the payload",
            details={"value_type": describe_value(value), "alternatives": list(alternative_names(alts))},
        )

    @property
    def selected(self) -> AlternativeType:
        return self.alternatives[self.index]

    @property
    def selected_type(self) -> str:
        return self.selected.name

    def is_(self, alternative: AlternativeRef) -> bool:
        return _find(self.alternatives, alternative) == self.index

    def unwrap(self, expected: AlternativeRef) -> Any:
        name = expected if isinstance(expected, str) else expected.name
        if name != self.selected_type:
            raise WrongAlternativeError(expected=name, actual=self.selected_type)
        return self.value

    def match(self, handlers: Mapping[str, Callable[[Any], Any]]) -> Any:
        """Dispatch on the populated alternative.

        ``handlers`` must cover every declared alternative so that callers are
        forced to consider each shape the property can take.
        """
        missing = [n for n in alternative_names(self.alternatives) if n not in handlers]
        if missing:
            raise ValueError(f"match() is missing handlers for alternatives: {missing}")
        return handlers[self.selected_type](self.value)

    def rebind(self, alternatives: Sequence[AlternativeType]) -> "Or":
        """Re-wrap this value under another declared alternative list."""
        return Or.of(alternatives, self.selected, self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Or):
            return NotImplemented
        return self.selected_type == other.selected_type and self.value == other.value

    def __hash__(self) -> int:
        # Hashable only when the payload is; Entity payloads are mutable and unhashable
        return hash((self.selected_type, self.value))

    def __repr__(self) -> str:
        names = "|".join(alternative_names(self.alternatives))
        return f"Or[{names}]({self.selected_type}={self.value!r})"
