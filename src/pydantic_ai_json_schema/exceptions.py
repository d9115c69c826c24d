"""Exception classes for JSON schema generation and deserialization."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import TypeDescriptor


class JsonSchemaError(RuntimeError):
    """Base class for every error raised by this package."""


class GenerationError(JsonSchemaError):
    """Raised when a type descriptor cannot be mapped to a schema.

    Example:
        ```python
        from pydantic_ai_json_schema import GenerationError, ObjectType, load_service

        try:
            load_service().generate(ObjectType(name="Invoice"))
        except GenerationError as e:
            print(e)  # suggests modelling the type as dict[str, ...]
        ```
    """


class DeserializationError(JsonSchemaError):
    """Raised when text cannot be turned into a value of the expected type.

    This is also the error raised when a sanitized value tree cannot be
    materialized, which indicates a sanitizer/descriptor contract violation.
    """


class ParsingError(DeserializationError):
    """Raised when input text is not well-formed JSON."""

    def __init__(self, message: str, text: str):
        """
        Initialize ParsingError.

        Args:
            message: Description of the decoding failure
            text: The text that failed to parse
        """
        super().__init__(message)
        self.text = text


class SanitizationError(DeserializationError):
    """Raised when a value tree does not conform to a type descriptor.

    Attributes:
        expected: The descriptor the value was checked against
        value: The offending value tree node
    """

    def __init__(self, message: str, expected: TypeDescriptor | None = None, value: Any = None):
        super().__init__(message)
        self.expected = expected
        self.value = value


class MismatchTypeError(SanitizationError):
    """The node's shape does not match the expected kind and no repair applies."""

    def __init__(self, expected: TypeDescriptor, value: Any):
        super().__init__(
            f"value is not convertable to {expected}, "
            f"got {describe_kind(value)}: {render_value(value)}",
            expected,
            value,
        )


class NumberOutOfBoundError(SanitizationError):
    """A numeric value lies outside the target width's range (strict mode only)."""

    def __init__(self, expected: TypeDescriptor, value: Any, min_value: Any, max_value: Any):
        super().__init__(
            f"{render_value(value)} is out of range for {expected}: [{min_value}, {max_value}]",
            expected,
            value,
        )
        self.min_value = min_value
        self.max_value = max_value


class NonIntegralNumberError(SanitizationError):
    """A fractional value was supplied for an integer width (strict mode only)."""

    def __init__(self, expected: TypeDescriptor, value: Any):
        super().__init__(
            f"{render_value(value)} has non-integer value for {expected}",
            expected,
            value,
        )


class InvalidEnumValueError(SanitizationError):
    """A value does not match any declared enum constant, in either mode."""

    def __init__(self, expected: TypeDescriptor, value: Any):
        super().__init__(
            f"{render_value(value)} has invalid enum value for {expected}",
            expected,
            value,
        )


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a value tree node for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def render_value(value: Any) -> str:
    """Render a value tree node as compact JSON, falling back to repr."""
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
