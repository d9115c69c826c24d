"""Immutable JSON schema model.

A schema is an ordered list of ``SchemaProperty`` pairs plus the type
descriptor it was generated from. Order matters to renderers: ``type`` comes
first, then ``description``, then everything else.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from .types import TypeDescriptor

TYPE_KEY = "type"
DESCRIPTION_KEY = "description"
ITEMS_KEY = "items"
ADDITIONAL_PROPERTIES_KEY = "additionalProperties"
ENUM_KEY = "enum"

_NESTED_KEYS = (ITEMS_KEY, ADDITIONAL_PROPERTIES_KEY)


@dataclass(frozen=True)
class SchemaProperty:
    """A single ``key: value`` entry of a schema.

    Nested schemas (``items``, ``additionalProperties``) are stored as tuples of
    ``SchemaProperty``; enum values as a tuple of strings.
    """

    key: str
    value: Any

    def to_json(self) -> Any:
        """Render the value into plain JSON-compatible Python objects."""
        if self.key in _NESTED_KEYS:
            return {p.key: p.to_json() for p in self.value}
        if isinstance(self.value, (tuple, list)):
            return list(self.value)
        return self.value


STRING = SchemaProperty(TYPE_KEY, "string")
INTEGER = SchemaProperty(TYPE_KEY, "integer")
NUMBER = SchemaProperty(TYPE_KEY, "number")
BOOLEAN = SchemaProperty(TYPE_KEY, "boolean")
OBJECT = SchemaProperty(TYPE_KEY, "object")
ARRAY = SchemaProperty(TYPE_KEY, "array")


def description(text: str) -> SchemaProperty:
    return SchemaProperty(DESCRIPTION_KEY, text)


def enum(constants: tuple[str, ...] | list[str]) -> SchemaProperty:
    return SchemaProperty(ENUM_KEY, tuple(constants))


def items(*properties: SchemaProperty | None) -> SchemaProperty:
    return SchemaProperty(ITEMS_KEY, remove_nulls(*properties))


def additional_properties(*properties: SchemaProperty | None) -> SchemaProperty:
    return SchemaProperty(ADDITIONAL_PROPERTIES_KEY, remove_nulls(*properties))


def remove_nulls(*properties: SchemaProperty | None) -> tuple[SchemaProperty, ...]:
    """Drop ``None`` entries, keeping the order of the rest."""
    return tuple(p for p in properties if p is not None)


@dataclass(frozen=True)
class Schema:
    """Schema generated from a type descriptor.

    Schemas never change after creation; ``with_description`` returns a new
    instance.

    Example:
        ```python
        schema = Schema.of(StringType(), STRING).with_description("A name")
        schema.to_json_schema()  # {"type": "string", "description": "A name"}
        ```
    """

    properties: tuple[SchemaProperty, ...]
    source: TypeDescriptor

    @classmethod
    def of(cls, source: TypeDescriptor, *properties: SchemaProperty | None) -> Schema:
        """Build a schema from ``properties``, skipping ``None`` entries."""
        return cls(properties=remove_nulls(*properties), source=source)

    def __iter__(self) -> Iterator[SchemaProperty]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first property named ``key``."""
        for prop in self.properties:
            if prop.key == key:
                return prop.value
        return default

    @property
    def description(self) -> str | None:
        return self.get(DESCRIPTION_KEY)

    def with_description(self, text: str) -> Schema:
        """
        Return a copy of this schema with ``text`` merged into its description.

        An existing description is kept after the new text, separated by a newline.
        The ``type`` property is moved to the front, the merged description follows
        it, and the remaining properties keep their order with duplicate keys dropped.

        Parameters:
            text (str): Description to prepend.

        Returns:
            Schema: The new schema; this instance is left untouched.
        """
        existing = self.description
        merged = text if existing is None else f"{text}\n{existing}"

        head: list[SchemaProperty] = []
        rest: dict[str, SchemaProperty] = {}
        for prop in self.properties:
            if prop.key == TYPE_KEY:
                if not head:
                    head.append(prop)
            elif prop.key != DESCRIPTION_KEY:
                rest.setdefault(prop.key, prop)

        head.append(description(merged))
        return replace(self, properties=(*head, *rest.values()))

    def to_json_schema(self) -> dict[str, Any]:
        """Render the ordered properties into a JSON Schema dictionary."""
        return {prop.key: prop.to_json() for prop in self.properties}
