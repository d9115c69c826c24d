"""Schema generation from type descriptors."""

from __future__ import annotations

import logging

from typing_extensions import assert_never

from . import schema as sp
from .exceptions import GenerationError
from .schema import Schema, SchemaProperty
from .types import (
    AnyType,
    ArrayType,
    BooleanType,
    DecimalType,
    EnumType,
    IntegerType,
    MapType,
    ObjectType,
    StringType,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)


class DefaultJsonSchemaGenerator:
    """Generates schemas for the built-in descriptor kinds.

    Arrays and maps recurse into their element/value descriptors. Custom
    ``ObjectType`` descriptors cannot be described without field metadata and
    are rejected with a hint to model them as ``dict[str, ...]`` instead.
    """

    def generate(self, descriptor: TypeDescriptor) -> Schema:
        """Generate the schema for ``descriptor``.

        Args:
            descriptor: The expected shape

        Returns:
            Schema whose ``source`` is ``descriptor``

        Raises:
            GenerationError: If ``descriptor`` is an ``ObjectType``
        """
        properties = self._properties(descriptor)
        logger.debug("Generated %d schema properties for %s", len(properties), descriptor)
        return Schema.of(descriptor, *properties)

    def _properties(self, descriptor: TypeDescriptor) -> tuple[SchemaProperty, ...]:
        if isinstance(descriptor, BooleanType):
            return (sp.BOOLEAN,)
        if isinstance(descriptor, IntegerType):
            return (sp.INTEGER,)
        if isinstance(descriptor, DecimalType):
            return (sp.NUMBER,)
        if isinstance(descriptor, StringType):
            return (sp.STRING,)
        if isinstance(descriptor, EnumType):
            return (sp.STRING, sp.enum(descriptor.constants))
        if isinstance(descriptor, ArrayType):
            if descriptor.element is None:
                # Unresolved element type
                return (sp.ARRAY, sp.items(sp.OBJECT))
            return (sp.ARRAY, sp.items(*self._properties(descriptor.element)))
        if isinstance(descriptor, MapType):
            if descriptor.value is None:
                return (sp.OBJECT,)
            return (sp.OBJECT, sp.additional_properties(*self._properties(descriptor.value)))
        if isinstance(descriptor, AnyType):
            return ()
        if isinstance(descriptor, ObjectType):
            raise GenerationError(  # noqa: TRY003
                f"Cannot generate a JSON schema for custom type {descriptor.name}. "
                f"Model it as a string-keyed map (dict[str, ...]) instead."
            )
        assert_never(descriptor)
