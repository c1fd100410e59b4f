import dataclasses

import pytest

from seoschema.core.exceptions import TypeMismatchError, WrongAlternativeError
from seoschema.core.types import BOOLEAN, INTEGER, NUMBER, TEXT, URL
from seoschema.core.value import Or
from seoschema.registry.registry import SchemaRegistry


def test_of_selects_named_alternative():
    price = Or.of((NUMBER, TEXT), "Number", 9.5)

    assert price.selected is NUMBER
    assert price.selected_type == "Number"
    assert price.index == 0
    assert price.unwrap("Number") == 9.5
    assert price.is_("Number")
    assert not price.is_(TEXT)


def test_of_rejects_alternative_outside_declared_set():
    with pytest.raises(TypeMismatchError, match="not part of the declared set"):
        Or.of((TEXT,), "URL", "https://example.com")


def test_of_rejects_payload_not_matching_selected_alternative():
    with pytest.raises(TypeMismatchError, match="does not match the selected alternative"):
        Or.of((BOOLEAN, TEXT), "Boolean", "yes")


def test_index_outside_declared_set_is_rejected():
    with pytest.raises(TypeMismatchError, match="outside the declared set"):
        Or((TEXT,), 3, "x")


def test_empty_alternative_set_is_rejected():
    with pytest.raises(TypeMismatchError, match="must not be empty"):
        Or((), 0, "x")


def test_infer_uses_first_declared_alternative():
    assert Or.infer((TEXT, URL), "http://example.com").selected_type == "Text"
    assert Or.infer((URL, TEXT), "http://example.com").selected_type == "URL"
    assert Or.infer((URL, TEXT), "plain words").selected_type == "Text"


def test_infer_keeps_booleans_out_of_integers():
    assert Or.infer((INTEGER, BOOLEAN), True).selected_type == "Boolean"
    assert Or.infer((INTEGER, BOOLEAN), 1).selected_type == "Integer"


def test_infer_without_accepting_alternative_raises():
    with pytest.raises(TypeMismatchError, match="no declared alternative accepts"):
        Or.infer((INTEGER,), 1.5)


def test_unwrap_other_alternative_raises():
    price = Or.of((NUMBER, TEXT), "Number", 9.5)

    with pytest.raises(WrongAlternativeError, match="holds alternative 'Number', not 'Text'"):
        price.unwrap("Text")


def test_match_dispatches_on_populated_alternative():
    price = Or.of((NUMBER, TEXT), "Text", "free")

    result = price.match({"Number": lambda v: f"{v:.2f}", "Text": str.upper})

    assert result == "FREE"


def test_match_requires_handler_for_every_alternative():
    price = Or.of((NUMBER, TEXT), "Number", 1)

    with pytest.raises(ValueError, match=r"missing handlers.*'Text'"):
        price.match({"Number": lambda v: v})


def test_equality_uses_selected_alternative_and_payload():
    assert Or.of((TEXT, URL), "Text", "a") == Or.of((TEXT,), "Text", "a")
    assert Or.of((TEXT, URL), "Text", "http://a.test") != Or.of((TEXT, URL), "URL", "http://a.test")
    assert hash(Or.of((TEXT, URL), "Text", "a")) == hash(Or.of((TEXT,), "Text", "a"))


def test_value_is_immutable():
    name = Or.of((TEXT,), "Text", "Acme")

    with pytest.raises(dataclasses.FrozenInstanceError):
        name.value = "Other"


def test_rebind_moves_value_to_other_alternative_list():
    name = Or.of((TEXT,), "Text", "Acme")

    rebound = name.rebind((URL, TEXT))

    assert rebound.index == 1
    assert rebound == name


def test_repr_shows_alternatives_and_selection():
    assert repr(Or.of((TEXT, URL), "Text", "x")) == "Or[Text|URL](Text='x')"


def test_or_with_entity_payload_is_not_hashable():
    registry = SchemaRegistry()
    registry.declare_property("Offer", "seller", ["Organization"])
    registry.declare_entity_type("Organization")
    registry.freeze()
    offer = registry.new_entity("Offer", seller=registry.new_entity("Organization"))

    with pytest.raises(TypeError, match="unhashable"):
        hash(offer["seller"])
