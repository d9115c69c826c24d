"""Type definitions for JSON schema generation and sanitization.

A type descriptor is a pre-resolved, immutable description of the shape an
application expects. The core never inspects Python annotations itself; see
``adapters.descriptor_from_annotation`` for that step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, TypedDict, Union

JsonValue = Union[None, bool, int, float, Decimal, str, list[Any], dict[str, Any]]

INTEGER_WIDTHS = (8, 16, 32, 64, None)
DECIMAL_WIDTHS = (32, 64, None)

_CONTAINERS = (list, tuple, set, frozenset)


def _width_name(width: int | None) -> str:
    return "arbitrary" if width is None else str(width)


@dataclass(frozen=True)
class BooleanType:
    """A true/false value."""

    def __str__(self) -> str:
        return "Boolean"


@dataclass(frozen=True)
class IntegerType:
    """A whole number of the given bit width (``None`` for arbitrary precision)."""

    width: int | None = 32

    def __post_init__(self) -> None:
        if self.width not in INTEGER_WIDTHS:
            raise TypeError(f"Unsupported integer width: {self.width}")  # noqa: TRY003

    def __str__(self) -> str:
        return f"Integer<{_width_name(self.width)}>"


@dataclass(frozen=True)
class DecimalType:
    """A floating point number of the given bit width (``None`` for arbitrary precision)."""

    width: int | None = 64

    def __post_init__(self) -> None:
        if self.width not in DECIMAL_WIDTHS:
            raise TypeError(f"Unsupported decimal width: {self.width}")  # noqa: TRY003

    def __str__(self) -> str:
        return f"Decimal<{_width_name(self.width)}>"


@dataclass(frozen=True)
class StringType:
    """A text value."""

    def __str__(self) -> str:
        return "String"


@dataclass(frozen=True)
class EnumType:
    """A closed set of string constants.

    Attributes:
        name: Name of the enumeration, used in messages
        constants: Accepted values, compared case-sensitively
        enum_class: Optional Python enum whose member names are the constants;
            materialization returns its members instead of plain strings
    """

    name: str
    constants: tuple[str, ...]
    enum_class: type[Enum] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable of strings but store an immutable tuple
        object.__setattr__(self, "constants", tuple(self.constants))
        if not self.constants:
            raise TypeError(f"Enum {self.name} must declare at least one constant")  # noqa: TRY003

    @classmethod
    def from_enum(cls, enum_class: type[Enum]) -> EnumType:
        """Build a descriptor whose constants are the member names of ``enum_class``."""
        return cls(
            name=enum_class.__name__,
            constants=tuple(enum_class.__members__),
            enum_class=enum_class,
        )

    def __str__(self) -> str:
        return f"Enum {self.name}{{{', '.join(self.constants)}}}"


@dataclass(frozen=True)
class ArrayType:
    """An ordered collection.

    ``element=None`` means the element type could not be resolved. ``container``
    only affects the materialized Python type (list, tuple, set or frozenset).
    """

    element: TypeDescriptor | None = None
    container: type = field(default=list, compare=False)

    def __post_init__(self) -> None:
        if self.container not in _CONTAINERS:
            raise TypeError(f"Unsupported array container: {self.container!r}")  # noqa: TRY003

    def __str__(self) -> str:
        return f"Array<{self.element if self.element is not None else 'Any'}>"


@dataclass(frozen=True)
class MapType:
    """A string-keyed mapping.

    ``value=None`` means the value type could not be resolved. The key type is
    only accepted to reject anything but ``str`` early.
    """

    value: TypeDescriptor | None = None
    key: type = field(default=str, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.key is not str:
            raise TypeError(  # noqa: TRY003
                f"Map key type must be str, but was: {getattr(self.key, '__name__', self.key)}"
            )

    def __str__(self) -> str:
        return f"Map<String, {self.value if self.value is not None else 'Any'}>"


@dataclass(frozen=True)
class ObjectType:
    """A custom object type without a parameterized map shape.

    Attributes:
        name: Name of the concrete type, used in messages
        python_type: Optional class that materialization validates into
    """

    name: str = "object"
    python_type: Any = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class AnyType:
    """The universal type: no constraints at all."""

    def __str__(self) -> str:
        return "Any"


TypeDescriptor = Union[
    BooleanType,
    IntegerType,
    DecimalType,
    StringType,
    EnumType,
    ArrayType,
    MapType,
    ObjectType,
    AnyType,
]


class JsonSchemaServiceSettings(TypedDict, total=False):
    """Settings for the JSON schema service."""

    strict: bool  # Report every violation instead of repairing it (default: True)
    strip_code_fences: bool  # Remove ```json fences around model output before parsing (default: True)
