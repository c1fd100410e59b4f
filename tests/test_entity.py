import pytest

from seoschema.core.exceptions import TypeMismatchError, UnknownPropertyError
from seoschema.core.types import TEXT, URL
from seoschema.core.value import Or
from seoschema.registry.registry import SchemaRegistry


def _registry() -> SchemaRegistry:
    registry = SchemaRegistry()
    registry.declare_entity_type("Thing")
    registry.declare_entity_type("Organization", supertypes=["Thing"])
    registry.declare_entity_type("Corporation", supertypes=["Organization"])
    registry.declare_property("Organization", "legalName", ["Text"])
    registry.declare_property("Offer", "price", ["Number", "Text"])
    registry.declare_property("Offer", "url", ["Text", "URL"])
    registry.declare_property("Offer", "seller", ["Organization"])
    registry.declare_property("Offer", "name", ["Text"])
    registry.declare_property("Offer", "sku", ["Text"])
    return registry.freeze()


def test_new_entity_is_empty():
    offer = _registry().new_entity("Offer")

    assert len(offer) == 0
    assert offer.get("price") is None
    assert "price" not in offer
    assert offer.value("price", "n/a") == "n/a"


def test_set_infers_first_accepting_alternative():
    offer = _registry().new_entity("Offer")

    offer.set("price", 12.5)
    offer.set("url", "https://shop.test/item")

    assert offer["price"].selected_type == "Number"
    assert offer["url"].selected_type == "Text"


def test_set_with_explicit_alternative():
    offer = _registry().new_entity("Offer")

    offer.set("url", "https://shop.test/item", as_type="URL")

    assert offer["url"].unwrap("URL") == "https://shop.test/item"


def test_set_rebinds_or_to_declared_alternatives():
    offer = _registry().new_entity("Offer")

    offer.set("url", Or.of((URL,), "URL", "https://shop.test"))

    assert offer["url"].alternatives == (TEXT, URL)
    assert offer["url"].selected_type == "URL"


def test_set_or_with_undeclared_alternative_raises():
    offer = _registry().new_entity("Offer")

    with pytest.raises(TypeMismatchError, match="not part of the declared set"):
        offer.set("name", Or.of((URL,), "URL", "https://shop.test"))


def test_set_as_type_disagreeing_with_or_raises():
    offer = _registry().new_entity("Offer")

    with pytest.raises(TypeMismatchError, match="as_type disagrees"):
        offer.set("url", Or.of((URL,), "URL", "https://shop.test"), as_type="Text")


def test_set_undeclared_property_raises():
    offer = _registry().new_entity("Offer")

    with pytest.raises(UnknownPropertyError, match="'colour'"):
        offer.set("colour", "red")


def test_set_undeclared_alternative_raises():
    offer = _registry().new_entity("Offer")

    with pytest.raises(TypeMismatchError):
        offer.set("price", True)
    with pytest.raises(TypeMismatchError):
        offer.set("price", 3, as_type="Boolean")


def test_entity_payload_accepts_subtype():
    registry = _registry()
    corp = registry.new_entity("Corporation")
    offer = registry.new_entity("Offer", seller=corp)

    assert offer["seller"].selected_type == "Organization"
    assert offer.value("seller") is corp


def test_entity_payload_rejects_unrelated_type():
    registry = _registry()

    with pytest.raises(TypeMismatchError):
        registry.new_entity("Offer", seller=registry.new_entity("Offer"))


def test_none_and_clear_remove_property():
    offer = _registry().new_entity("Offer", price=3, name="Lamp")

    offer.set("price", None)
    offer.clear("name")

    assert len(offer) == 0
    with pytest.raises(KeyError):
        offer["price"]


def test_items_follow_declaration_order():
    offer = _registry().new_entity("Offer")
    offer.set("name", "Lamp").set("price", 3)

    assert [name for name, _ in offer.items()] == ["price", "name"]


def test_equality_compares_type_id_and_values():
    registry = _registry()

    assert registry.new_entity("Offer", price=3) == registry.new_entity("Offer", price=3)
    assert registry.new_entity("Offer", price=3) != registry.new_entity("Offer", price="3")
    assert registry.new_entity("Offer", node_id="#a") != registry.new_entity("Offer", node_id="#b")


def test_repr_truncates_many_properties():
    offer = _registry().new_entity("Offer", price=3, url="u", name="Lamp", sku="L-1")

    assert repr(offer) == "Entity(type_name='Offer', price=3, url='u', ... +2 more)"
