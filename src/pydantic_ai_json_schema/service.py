"""JSON schema service composing generation, sanitization and the JSON codec.

Example:
    ```python
    from pydantic_ai_json_schema import ArrayType, IntegerType, load_service

    service = load_service({"strict": False})
    descriptor = ArrayType(IntegerType(8))

    schema = service.generate(descriptor)
    # hand schema.to_json_schema() to a model, get text back ...
    service.deserialize('[10, "oops", 300]', descriptor)  # [10, None, 127]
    ```
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Union

from .adapters import descriptor_from_annotation
from .generator import DefaultJsonSchemaGenerator
from .sanitizer import DefaultJsonSchemaSanitizer
from .schema import Schema
from .serde import DefaultJsonSerde
from .types import (
    AnyType,
    ArrayType,
    BooleanType,
    DecimalType,
    EnumType,
    IntegerType,
    JsonSchemaServiceSettings,
    JsonValue,
    MapType,
    ObjectType,
    StringType,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)

_DESCRIPTOR_TYPES = (
    BooleanType,
    IntegerType,
    DecimalType,
    StringType,
    EnumType,
    ArrayType,
    MapType,
    ObjectType,
    AnyType,
)

Target = Union[TypeDescriptor, Schema, Any]


class JsonSchemaGenerator(Protocol):
    """Generates a schema for a type descriptor."""

    def generate(self, descriptor: TypeDescriptor) -> Schema: ...


class JsonSchemaSanitizer(Protocol):
    """Validates and coerces a parsed value tree against a type descriptor."""

    def sanitize(self, node: JsonValue, descriptor: TypeDescriptor) -> JsonValue: ...


class JsonSerde(Protocol):
    """Encodes values to text and decodes text into typed values."""

    def serialize(self, value: Any) -> str: ...

    def parse(self, text: str) -> JsonValue: ...

    def materialize(self, node: JsonValue, descriptor: TypeDescriptor) -> Any: ...


class JsonSchemaService:
    """Entry point for applications: generate schemas, serialize and deserialize values.

    The service holds no mutable state; one instance can be shared between
    threads.
    """

    def __init__(
        self,
        generator: JsonSchemaGenerator,
        sanitizer: JsonSchemaSanitizer,
        serde: JsonSerde,
    ):
        self.generator = generator
        self.sanitizer = sanitizer
        self.serde = serde

    def generate(self, descriptor: TypeDescriptor) -> Schema:
        """Generate the schema for ``descriptor``."""
        return self.generator.generate(descriptor)

    def generate_for(self, annotation: Any) -> Schema:
        """Generate the schema for a Python annotation such as ``list[str]``."""
        return self.generate(descriptor_from_annotation(annotation))

    def serialize(self, value: Any) -> str:
        """Encode ``value`` as JSON text."""
        return self.serde.serialize(value)

    def deserialize(self, text: str, target: Target) -> Any:
        """
        Parse, sanitize and materialize ``text`` as a value of ``target``.

        Parameters:
            text (str): JSON text, typically a model's structured output.
            target: A type descriptor, a ``Schema`` (its source descriptor is used),
                or a Python annotation resolved via ``descriptor_from_annotation``.

        Returns:
            Any: The materialized value.

        Raises:
            ParsingError: If ``text`` is not valid JSON.
            SanitizationError: If the parsed value does not conform (see the sanitizer).
            DeserializationError: If the sanitized value cannot be materialized.
        """
        logger.debug("Deserializing %d chars", len(text))
        return self.convert(self.serde.parse(text), target)

    def convert(self, node: JsonValue, target: Target) -> Any:
        """Sanitize and materialize an already parsed value tree, e.g. tool call arguments."""
        descriptor = resolve_descriptor(target)
        return self.serde.materialize(self.sanitizer.sanitize(node, descriptor), descriptor)


def resolve_descriptor(target: Target) -> TypeDescriptor:
    """Return the descriptor for a descriptor, a ``Schema`` or a Python annotation."""
    if isinstance(target, Schema):
        return target.source
    if isinstance(target, _DESCRIPTOR_TYPES):
        return target
    return descriptor_from_annotation(target)


def load_service(settings: JsonSchemaServiceSettings | None = None) -> JsonSchemaService:
    """
    Build the default service.

    Parameters:
        settings (JsonSchemaServiceSettings | None): Optional configuration mapping:
            - strict: raise on every violation instead of repairing it (default: True)
            - strip_code_fences: remove ```json fences before parsing (default: True)

    Returns:
        JsonSchemaService: Service wired with the default generator, sanitizer and serde.
    """
    config = settings or {}
    strict = config.get("strict", True)
    logger.debug("Loading JSON schema service (strict=%s)", strict)
    return JsonSchemaService(
        generator=DefaultJsonSchemaGenerator(),
        sanitizer=DefaultJsonSchemaSanitizer(strict=strict),
        serde=DefaultJsonSerde(strip_code_fences=config.get("strip_code_fences", True)),
    )
