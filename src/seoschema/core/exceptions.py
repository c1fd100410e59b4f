"""
Custom exception classes for seoschema.

Provides structured error handling with domain-specific exceptions
for the value wrapper, the entity registry and the document codec.
"""

from enum import Enum
from typing import Any, Callable, Optional, Sequence


class SeoSchemaError(Exception):
    """Base exception class for all seoschema exceptions."""

    pass


class TypeMismatchError(SeoSchemaError):
    """
    Raised when a value does not fit the alternative it is wrapped as.

    This covers:
    - the selected alternative is not part of the declared alternative set
    - the payload does not structurally match the selected alternative
    - no declared alternative accepts the payload (inference)

    Example:
        >>> raise TypeMismatchError(
        ...     reason="payload does not match alternative",
        ...     details={"selected": "Boolean", "value": "yes"}
        ... )
    """

    def __init__(self, reason: str, details: dict = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class WrongAlternativeError(SeoSchemaError):
    """Raised when unwrapping a value as an alternative that is not populated."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Value holds alternative {actual!r}, not {expected!r}; check selected_type first"
        )


class UnknownEntityTypeError(SeoSchemaError):
    """Raised when an entity type (or alternative type name) is not declared."""

    def __init__(self, type_name: str, *, referenced_by: Optional[str] = None):
        self.type_name = type_name
        self.referenced_by = referenced_by
        message = f"Unknown entity type {type_name!r}"
        if referenced_by:
            message += f" (referenced by {referenced_by})"
        super().__init__(message)


class UnknownPropertyError(SeoSchemaError):
    """Raised when a property is not declared for an entity type."""

    def __init__(self, entity_type: str, property_name: str):
        self.entity_type = entity_type
        self.property_name = property_name
        super().__init__(
            f"Property {property_name!r} is not declared for entity type {entity_type!r}"
        )


class NoMatchingAlternativeError(SeoSchemaError):
    """Raised when a raw document value matches none of a property's alternatives."""

    def __init__(
        self,
        entity_type: str,
        property_name: str,
        raw_value: Any,
        alternatives: Sequence[str],
    ):
        self.entity_type = entity_type
        self.property_name = property_name
        self.raw_value = raw_value
        self.alternatives = tuple(alternatives)
        preview = repr(raw_value)
        if len(preview) > 120:
            preview = preview[:120] + "..."
        super().__init__(
            f"{entity_type}.{property_name}: value {preview} matches none of "
            f"the declared alternatives {list(self.alternatives)}"
        )


class EntityTypeConflictError(SeoSchemaError):
    """Raised when a document's @type disagrees with the expected entity type."""

    pass


class RegistryError(SeoSchemaError):
    """Raised for duplicate or conflicting registry declarations."""

    pass


class RegistryFrozenError(RegistryError):
    """Raised when a frozen registry is asked to accept new declarations."""

    pass


class SchemaSourceError(SeoSchemaError):
    """Raised when a schema table cannot be located, fetched or parsed."""

    pass


class UnknownPropertyPolicy(Enum):
    """Policy for handling document keys that are not declared for the entity type."""

    FAIL = "fail"              # Raise UnknownPropertyError (default)
    WARN = "warn"              # Log warning and drop the key
    PRESERVE = "preserve"      # Keep the raw value as an extension


class UnknownPropertyHandler:
    """
    Handles undeclared document keys based on configured policy.

    Usage:
        >>> handler = UnknownPropertyHandler(policy=UnknownPropertyPolicy.FAIL)
        >>> handler.handle("LoanOrCredit", "colour", "red")
        # Raises UnknownPropertyError

        >>> handler = UnknownPropertyHandler(policy=UnknownPropertyPolicy.PRESERVE)
        >>> handler.handle("LoanOrCredit", "colour", "red")
        True  # caller keeps the raw value
    """

    def __init__(
        self,
        policy: UnknownPropertyPolicy = UnknownPropertyPolicy.FAIL,
        logger: Optional[Any] = None,
        custom_handler: Optional[Callable[[str, str, Any], bool]] = None,
    ):
        """
        Initialize the handler.

        Args:
            policy: How to handle unknown keys (FAIL, WARN, PRESERVE)
            logger: Logger instance for WARN policy
            custom_handler: Custom function deciding whether to keep the key
        """
        self.policy = policy
        self.logger = logger
        self.custom_handler = custom_handler

    def handle(self, entity_type: str, property_name: str, raw_value: Any) -> bool:
        """
        Handle an unknown key based on policy.

        Returns:
            True if the raw value should be kept as an extension, False if dropped

        Raises:
            UnknownPropertyError: If policy is FAIL
        """
        if self.custom_handler:
            return self.custom_handler(entity_type, property_name, raw_value)

        if self.policy == UnknownPropertyPolicy.FAIL:
            raise UnknownPropertyError(entity_type, property_name)

        elif self.policy == UnknownPropertyPolicy.WARN:
            if self.logger:
                self.logger.warning(
                    f"Dropping undeclared property {property_name!r} of {entity_type}"
                )
            else:
                import warnings
                warnings.warn(
                    f"Dropping undeclared property {property_name!r} of {entity_type}",
                    UserWarning,
                )
            return False

        elif self.policy == UnknownPropertyPolicy.PRESERVE:
            return True

        return False
