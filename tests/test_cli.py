import json
import sys

import pytest

import seoschema.cli as cli_module
from seoschema.cli import check_document, cli, describe_type, validate_schema
from seoschema.core.exceptions import UnknownPropertyError

YAML_TABLE = """\
version: 1
entity_types:
  Offer:
    properties:
      price: [Number, Text]
      priceCurrency: [Text]
"""


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return str(path)


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["seoschema", *argv])
    monkeypatch.setattr(cli_module, "configure_root_logger", lambda level="INFO": None)
    with pytest.raises(SystemExit) as exc:
        cli()
    return exc.value.code


def test_validate_schema_accepts_valid_table(tmp_path):
    assert validate_schema(_write(tmp_path, "schema.yaml", YAML_TABLE)) is True


def test_validate_schema_raises_for_invalid_table(tmp_path):
    path = _write(tmp_path, "schema.yaml", "version: 1\nentity_types:\n  Offer:\n    properties:\n      seller: [Nope]\n")

    with pytest.raises(Exception, match="Nope"):
        validate_schema(path)


def test_describe_type_lists_declarations():
    text = describe_type("LoanOrCredit")

    lines = text.splitlines()
    assert lines[0] == "LoanOrCredit (subtype of FinancialProduct)"
    assert "  currency: Text" in lines
    assert "  loanType: Text | URL" in lines
    assert "  name: Text  [Thing]" in lines


def test_describe_type_without_properties():
    assert describe_type("Physiotherapy").splitlines()[-1] == "  (no properties)"


def test_check_document_normalizes(tmp_path):
    path = _write(tmp_path, "offer.json", {"priceCurrency": "EUR", "price": 5, "@type": "Offer"})
    schema = _write(tmp_path, "schema.yaml", YAML_TABLE)

    result = check_document(path, schema=schema)

    assert list(result.items()) == [("@type", "Offer"), ("price", 5), ("priceCurrency", "EUR")]


def test_check_document_policies(tmp_path):
    path = _write(tmp_path, "loan.json", {"@context": "https://schema.org", "@type": "LoanOrCredit", "colour": "red"})

    with pytest.raises(UnknownPropertyError):
        check_document(path)
    assert check_document(path, unknown_properties="preserve") == {
        "@context": "https://schema.org",
        "@type": "LoanOrCredit",
        "colour": "red",
    }
    assert check_document(path, unknown_properties="warn", type_name="LoanOrCredit") == {
        "@context": "https://schema.org",
        "@type": "LoanOrCredit",
    }


def test_check_document_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Document not found"):
        check_document(str(tmp_path / "missing.json"))


def test_cli_check_prints_document(tmp_path, monkeypatch, capsys):
    path = _write(tmp_path, "loan.json", {"@type": "LoanOrCredit", "currency": "USD"})

    assert _run(monkeypatch, "check", path) == 0
    assert json.loads(capsys.readouterr().out) == {"@type": "LoanOrCredit", "currency": "USD"}


def test_cli_check_exits_nonzero_on_error(tmp_path, monkeypatch):
    path = _write(tmp_path, "loan.json", {"@type": "LoanOrCredit", "recourseLoan": "yes"})

    assert _run(monkeypatch, "check", path) == 1


def test_cli_validate_and_describe(tmp_path, monkeypatch, capsys):
    schema = _write(tmp_path, "schema.yaml", YAML_TABLE)

    assert _run(monkeypatch, "validate-schema", schema) == 0
    assert _run(monkeypatch, "validate-schema", str(tmp_path / "missing.yaml")) == 1
    assert _run(monkeypatch, "describe", "Offer", "--schema", schema) == 0
    assert "  price: Number | Text" in capsys.readouterr().out
    assert _run(monkeypatch, "describe", "Spaceship") == 1


def test_cli_without_command_prints_help(monkeypatch, capsys):
    assert _run(monkeypatch) == 0
    assert "validate-schema" in capsys.readouterr().out
