import pytest

from seoschema.core.exceptions import (
    NoMatchingAlternativeError,
    TypeMismatchError,
    UnknownPropertyError,
    UnknownPropertyHandler,
    UnknownPropertyPolicy,
)


def test_fail_policy_raises():
    handler = UnknownPropertyHandler(policy=UnknownPropertyPolicy.FAIL)

    with pytest.raises(UnknownPropertyError, match="'colour'.*'LoanOrCredit'"):
        handler.handle("LoanOrCredit", "colour", "red")


def test_warn_policy_without_logger_emits_warning():
    handler = UnknownPropertyHandler(policy=UnknownPropertyPolicy.WARN)

    with pytest.warns(UserWarning, match="Dropping undeclared property 'colour'"):
        assert handler.handle("LoanOrCredit", "colour", "red") is False


def test_preserve_policy_keeps_value():
    handler = UnknownPropertyHandler(policy=UnknownPropertyPolicy.PRESERVE)

    assert handler.handle("LoanOrCredit", "colour", "red") is True


def test_type_mismatch_message_includes_details():
    err = TypeMismatchError("payload does not match", details={"selected": "Boolean"})

    assert str(err) == "payload does not match - {'selected': 'Boolean'}"
    assert err.details == {"selected": "Boolean"}


def test_no_matching_alternative_truncates_long_values():
    err = NoMatchingAlternativeError("Offer", "price", "x" * 500, ("Number", "Text"))

    assert "..." in str(err)
    assert len(str(err)) < 250
    assert err.alternatives == ("Number", "Text")
