import os
import subprocess
import sys
from pathlib import Path

import pytest

from seoschema.core.exceptions import RegistryError
from seoschema.core.types import EntityType, EnumerationType
from seoschema.loader import load_registry
from seoschema.registry.default import default_registry, set_default_registry
from seoschema.registry.registry import SchemaRegistry


def setup_function() -> None:
    set_default_registry(None)


def teardown_function() -> None:
    set_default_registry(None)


def test_packaged_table_declares_catalog_types():
    registry = load_registry()

    for name in ("ActionAccessSpecification", "LegislationObject", "LoanOrCredit", "Physiotherapy"):
        assert registry.try_lookup(name) is not None


def test_loan_or_credit_declarations():
    entry = load_registry().lookup("LoanOrCredit")

    assert entry.property_names[:3] == ("amount", "currency", "gracePeriod")
    assert entry.declaration("currency").alternative_names == ("Text",)
    assert entry.declaration("loanType").alternative_names == ("Text", "URL")
    assert entry.declaration("requiredCollateral").alternative_names == ("Text", "Thing")
    assert entry.has_property("interestRate")
    assert entry.has_property("provider")
    assert entry.has_property("name")


def test_legislation_object_carries_shared_groups():
    registry = load_registry()
    entry = registry.lookup("LegislationObject")

    assert entry.property_names[0] == "legislationLegalValue"
    for name in ("contentUrl", "author", "legislationLegalForce", "name"):
        assert entry.has_property(name)
    assert isinstance(entry.declaration("legislationLegalForce").alternatives[0], EnumerationType)
    assert registry.is_subtype("LegislationObject", "CreativeWork")


def test_action_access_specification_category():
    registry = load_registry()
    category = registry.lookup_property("ActionAccessSpecification", "category")

    assert category.alternative_names == ("PhysicalActivityCategory", "Text", "Thing")
    assert isinstance(category.alternatives[2], EntityType)


def test_physiotherapy_has_no_properties():
    entry = load_registry().lookup("Physiotherapy")

    assert entry.properties == ()
    assert entry.supertypes == ("Thing",)


def test_every_entity_alternative_is_declared():
    registry = load_registry()

    for name in registry.entity_types():
        for declaration in registry.lookup(name).properties:
            for alternative in declaration.alternatives:
                if isinstance(alternative, EntityType):
                    assert alternative.name in registry


def test_default_registry_is_built_once():
    first = default_registry()

    assert first.frozen
    assert default_registry() is first


def test_set_default_registry_requires_frozen_registry():
    with pytest.raises(RegistryError, match="frozen"):
        set_default_registry(SchemaRegistry())

    custom = SchemaRegistry()
    custom.declare_property("Offer", "price", ["Number"])
    set_default_registry(custom.freeze())

    assert default_registry() is custom


def test_package_imports_in_fresh_interpreter():
    src = str(Path(__file__).resolve().parents[1] / "src")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src, env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, "-c", "import seoschema; print(seoschema.RegistryEntry.property_names)"],
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0, result.stderr
    assert "property" in result.stdout
