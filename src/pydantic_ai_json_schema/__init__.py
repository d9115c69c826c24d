"""Pydantic AI JSON Schema - Type-directed JSON schemas and output sanitization.

This package turns type descriptors into JSON schemas for instructing a
language model, and turns the model's JSON output back into typed values,
validating and (optionally) repairing it on the way.

Example:
    ```python
    from pydantic_ai_json_schema import ArrayType, IntegerType, load_service

    service = load_service({"strict": False})
    descriptor = ArrayType(IntegerType(8))

    schema = service.generate(descriptor)
    print(schema.to_json_schema())  # {'type': 'array', 'items': {'type': 'integer'}}

    service.deserialize('[10, "oops", 300]', descriptor)  # [10, None, 127]
    ```

Python annotations work too:
    ```python
    from enum import Enum

    class Color(Enum):
        RED = 1
        BLUE = 2

    service = load_service()
    service.generate_for(dict[str, Color])
    service.deserialize('{"a": "RED"}', dict[str, Color])  # {'a': Color.RED}
    ```

Error Handling:
    ```python
    from pydantic_ai_json_schema import NumberOutOfBoundError, SanitizationError

    try:
        service.deserialize("300", IntegerType(8))
    except NumberOutOfBoundError as e:
        print(e.min_value, e.max_value)
    except SanitizationError as e:
        print(f"Model output did not conform: {e}")
    ```

Logging:
    To enable debug logging in your application:
    ```python
    import logging
    logging.getLogger('pydantic_ai_json_schema').setLevel(logging.DEBUG)
    ```
"""

import logging

from .adapters import descriptor_from_annotation, native_type
from .exceptions import (
    DeserializationError,
    GenerationError,
    InvalidEnumValueError,
    JsonSchemaError,
    MismatchTypeError,
    NonIntegralNumberError,
    NumberOutOfBoundError,
    ParsingError,
    SanitizationError,
)
from .generator import DefaultJsonSchemaGenerator
from .sanitizer import DefaultJsonSchemaSanitizer
from .schema import Schema, SchemaProperty
from .serde import DefaultJsonSerde
from .service import (
    JsonSchemaGenerator,
    JsonSchemaSanitizer,
    JsonSchemaService,
    JsonSerde,
    load_service,
    resolve_descriptor,
)
from .tools import build_output_instructions, to_tool_definition, unwrap_tool_arguments
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

# Configure module-level logger
logger = logging.getLogger(__name__)
# Use NullHandler by default - consuming applications configure as needed
logger.addHandler(logging.NullHandler())

# Get version from package metadata (single source of truth in pyproject.toml)
try:
    from importlib.metadata import version

    __version__ = version("pydantic-ai-json-schema")
except Exception:
    # Fallback for development environments where package isn't installed
    __version__ = "0.0.0.dev"

__all__ = [
    # Service
    "JsonSchemaService",
    "JsonSchemaServiceSettings",
    "load_service",
    "resolve_descriptor",
    "JsonSchemaGenerator",
    "JsonSchemaSanitizer",
    "JsonSerde",
    "DefaultJsonSchemaGenerator",
    "DefaultJsonSchemaSanitizer",
    "DefaultJsonSerde",
    # Schema model
    "Schema",
    "SchemaProperty",
    # Type descriptors
    "TypeDescriptor",
    "JsonValue",
    "AnyType",
    "ArrayType",
    "BooleanType",
    "DecimalType",
    "EnumType",
    "IntegerType",
    "MapType",
    "ObjectType",
    "StringType",
    "descriptor_from_annotation",
    "native_type",
    # Tool calling
    "build_output_instructions",
    "to_tool_definition",
    "unwrap_tool_arguments",
    # Errors
    "JsonSchemaError",
    "GenerationError",
    "DeserializationError",
    "ParsingError",
    "SanitizationError",
    "MismatchTypeError",
    "NumberOutOfBoundError",
    "NonIntegralNumberError",
    "InvalidEnumValueError",
]
