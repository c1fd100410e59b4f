"""
Command-line interface for seoschema.

Loads a schema table (the packaged one, a local JSON/YAML file or an http(s)
URL), describes entity types, and checks structured-data documents by reading
them into entities and writing them back in normalized form.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from seoschema.codec.deserializer import Deserializer
from seoschema.codec.serializer import serialize
from seoschema.core.logger import configure_root_logger, get_logger
from seoschema.loader import load_registry, source_config_for_path
from seoschema.models.codec_config import CodecConfig
from seoschema.registry.registry import SchemaRegistry

logger = get_logger(__name__)


def _registry_for(schema: Optional[str]) -> SchemaRegistry:
    return load_registry(source_config_for_path(schema))


def validate_schema(path: str) -> bool:
    """
    Validate a schema table without using it.

    Args:
        path: Path (or http(s) URL) of a JSON/YAML schema table

    Returns:
        True if the table loads and the registry freezes

    Raises:
        Exception: If the table is unreadable or inconsistent

    Example:
        >>> validate_schema("/path/to/schema.yaml")
        True
    """
    try:
        logger.info(f"Validating schema table: {path}")
        registry = _registry_for(path)
        logger.info(f"Schema table is valid: {len(registry.entity_types())} entity types")
        return True
    except Exception as e:
        logger.error(f"Schema validation failed: {str(e)}")
        raise


def describe_type(type_name: str, schema: Optional[str] = None) -> str:
    """Render the property declarations of an entity type as text."""
    registry = _registry_for(schema)
    entry = registry.lookup(type_name)

    lines = [entry.name]
    if entry.supertypes:
        lines[0] += f" (subtype of {', '.join(entry.supertypes)})"
    if entry.description:
        lines.append(f"  {entry.description}")
    for declaration in entry.properties:
        source = f"  [{declaration.group}]" if declaration.group else ""
        lines.append(f"  {declaration.name}: {' | '.join(declaration.alternative_names)}{source}")
    if not entry.properties:
        lines.append("  (no properties)")
    return "\n".join(lines)


def check_document(
    document_path: str,
    *,
    schema: Optional[str] = None,
    unknown_properties: str = "fail",
    type_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Read a JSON document into an entity and return its normalized form.

    Args:
        document_path: Path to a JSON structured-data document
        schema: Optional schema table path or URL (packaged table when omitted)
        unknown_properties: Policy for undeclared keys (fail, warn, preserve)
        type_name: Expected entity type; the document's @type when omitted

    Returns:
        The re-serialized document

    Raises:
        FileNotFoundError: If the document doesn't exist
        SeoSchemaError: If the document doesn't fit the registry
    """
    doc_file = Path(document_path)
    if not doc_file.exists():
        raise FileNotFoundError(f"Document not found: {document_path}")

    with open(doc_file, "r", encoding="utf-8") as f:
        document = json.load(f)
    logger.info(f"Loaded document from {document_path}")

    config = CodecConfig(unknown_properties=unknown_properties)
    reader = Deserializer(_registry_for(schema), config=config)
    if type_name is None:
        entity = reader.deserialize_document(document)
    else:
        entity = reader.deserialize(type_name, document)

    include_context = isinstance(document, dict) and "@context" in document
    return serialize(entity, include_context=include_context, config=config)


def cli() -> None:
    """
    Command-line interface for seoschema.

    Supports subcommands:
    - validate-schema: Validate a schema table
    - describe: Print the declarations of an entity type
    - check: Read and re-write a structured-data document

    Usage:
        seoschema validate-schema /path/to/schema.yaml
        seoschema describe LoanOrCredit
        seoschema check /path/to/document.json --unknown-properties warn
    """
    parser = argparse.ArgumentParser(
        prog="seoschema",
        description="schema.org structured data entities and codec"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    validate_parser = subparsers.add_parser(
        "validate-schema",
        help="Validate a schema table"
    )
    validate_parser.add_argument(
        "schema",
        help="Path or http(s) URL of a schema table (JSON or YAML)"
    )

    describe_parser = subparsers.add_parser(
        "describe",
        help="Print the property declarations of an entity type"
    )
    describe_parser.add_argument("type_name", help="Entity type name, e.g. LoanOrCredit")
    describe_parser.add_argument("--schema", help="Schema table (defaults to the packaged one)")

    check_parser = subparsers.add_parser(
        "check",
        help="Read a JSON document and print its normalized form"
    )
    check_parser.add_argument("document", help="Path to a JSON document")
    check_parser.add_argument("--schema", help="Schema table (defaults to the packaged one)")
    check_parser.add_argument(
        "--unknown-properties",
        choices=["fail", "warn", "preserve"],
        default="fail",
        help="How to treat keys not declared for the entity type"
    )
    check_parser.add_argument("--type", dest="type_name", help="Expected entity type")

    args = parser.parse_args()
    configure_root_logger("DEBUG" if args.verbose else "INFO")

    if args.command == "validate-schema":
        try:
            validate_schema(args.schema)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    elif args.command == "describe":
        try:
            print(describe_type(args.type_name, schema=args.schema))
            sys.exit(0)
        except Exception as e:
            logger.error(f"Describe failed: {e}")
            sys.exit(1)

    elif args.command == "check":
        try:
            result = check_document(
                args.document,
                schema=args.schema,
                unknown_properties=args.unknown_properties,
                type_name=args.type_name,
            )
            print(json.dumps(result, indent=2, ensure_ascii=False))
            sys.exit(0)
        except Exception as e:
            logger.error(f"Check failed: {e}")
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()
