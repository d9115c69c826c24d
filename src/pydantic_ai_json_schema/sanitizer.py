"""Validation and coercion of parsed JSON against type descriptors.

The sanitizer walks a value tree alongside a type descriptor and returns a new
tree that conforms to it. In strict mode every violation is raised. Otherwise
the sanitizer repairs what it can:

- numbers are cast between widths, clamped into range and truncated to integers
- strings, booleans and numbers are converted into each other where unambiguous
- a value of the wrong shape inside an array or object becomes ``None``

Numeric repairs are attempted in both modes; only the strict flag decides
whether a violation is reported or silently fixed. Enum values are never
repaired.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar

from typing_extensions import assert_never

from ._utils.type_utils import as_number, has_fractional_part, number_bounds
from .exceptions import (
    InvalidEnumValueError,
    MismatchTypeError,
    NonIntegralNumberError,
    NumberOutOfBoundError,
    SanitizationError,
)
from .types import (
    AnyType,
    ArrayType,
    BooleanType,
    DecimalType,
    EnumType,
    IntegerType,
    JsonValue,
    MapType,
    ObjectType,
    StringType,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ANY = AnyType()
_SCALARS = (bool, int, float, Decimal, str)


class DefaultJsonSchemaSanitizer:
    """Sanitizes value trees against type descriptors.

    Example:
        ```python
        sanitizer = DefaultJsonSchemaSanitizer(strict=False)
        sanitizer.sanitize([10, "oops", 300], ArrayType(IntegerType(8)))  # [10, None, 127]
        ```
    """

    def __init__(self, strict: bool = True):
        """
        Initialize the sanitizer.

        Args:
            strict: Raise on every violation instead of repairing it (default: True)
        """
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def sanitize(self, node: JsonValue, descriptor: TypeDescriptor) -> JsonValue:
        """
        Validate ``node`` against ``descriptor`` and return a conforming copy.

        Every array element and object value is sanitized through this method, so in
        lenient mode a shape mismatch only nulls out the smallest enclosing element.
        The same applies to the outermost call: a top-level mismatch yields `None`.

        Parameters:
            node (JsonValue): Parsed JSON value; never modified.
            descriptor (TypeDescriptor): The expected shape.

        Returns:
            JsonValue: A new value tree conforming to ``descriptor``.

        Raises:
            MismatchTypeError: If the shape is wrong and no repair applies (strict mode).
            NumberOutOfBoundError: If a number is outside the target range (strict mode).
            NonIntegralNumberError: If a fraction is given for an integer (strict mode).
            InvalidEnumValueError: If the value is not an enum constant (both modes).
        """
        try:
            return self._sanitize(node, descriptor)
        except MismatchTypeError as e:
            if not self._strict:
                logger.debug("Replacing mismatched value with null: %s", e)
                return None
            raise

    def _sanitize(self, node: JsonValue, descriptor: TypeDescriptor) -> JsonValue:
        if isinstance(descriptor, AnyType):
            return node
        if node is None:
            return None

        if isinstance(descriptor, BooleanType):
            return self._sanitize_boolean(node, descriptor)
        if isinstance(descriptor, (IntegerType, DecimalType)):
            return self._sanitize_bounded_number(node, descriptor)
        if isinstance(descriptor, StringType):
            return self._sanitize_string(node, descriptor)
        if isinstance(descriptor, EnumType):
            return self._sanitize_enum(node, descriptor)
        if isinstance(descriptor, ArrayType):
            return self._sanitize_array(node, descriptor)
        if isinstance(descriptor, MapType):
            return self._sanitize_object(node, descriptor, descriptor.value)
        if isinstance(descriptor, ObjectType):
            return self._sanitize_object(node, descriptor, None)
        assert_never(descriptor)

    def _sanitize_string(self, node: JsonValue, descriptor: StringType) -> JsonValue:
        """Sanitize a string; in lenient mode scalars are converted to their JSON text."""
        self._ensure_scalar(node, descriptor)
        if isinstance(node, str):
            return node

        def fix() -> str:
            if isinstance(node, bool):
                return "true" if node else "false"
            return str(node)

        return self._try_fix(fix, MismatchTypeError(descriptor, node))

    def _sanitize_boolean(self, node: JsonValue, descriptor: BooleanType) -> JsonValue:
        """Sanitize a boolean; in lenient mode the strings "true"/"false" are accepted."""
        self._ensure_scalar(node, descriptor)
        if isinstance(node, bool):
            return node

        def fix() -> bool:
            if node not in ("true", "false"):
                raise ValueError(f"Not a boolean literal: {node!r}")  # noqa: TRY003
            return node == "true"

        return self._try_fix(fix, MismatchTypeError(descriptor, node))

    def _sanitize_enum(self, node: JsonValue, descriptor: EnumType) -> JsonValue:
        if isinstance(node, str) and node in descriptor.constants:
            return node
        raise InvalidEnumValueError(descriptor, node)

    def _sanitize_array(self, node: JsonValue, descriptor: ArrayType) -> JsonValue:
        if not isinstance(node, (list, tuple)):
            raise MismatchTypeError(descriptor, node)
        element = descriptor.element if descriptor.element is not None else _ANY
        return [self.sanitize(item, element) for item in node]

    def _sanitize_object(
        self,
        node: JsonValue,
        descriptor: MapType | ObjectType,
        value_descriptor: TypeDescriptor | None,
    ) -> JsonValue:
        if not isinstance(node, dict):
            raise MismatchTypeError(descriptor, node)
        value_descriptor = value_descriptor if value_descriptor is not None else _ANY
        return {key: self.sanitize(value, value_descriptor) for key, value in node.items()}

    def _sanitize_bounded_number(
        self, node: JsonValue, descriptor: IntegerType | DecimalType
    ) -> JsonValue:
        """
        Sanitize a number against the range and integrality of its target width.

        A number that already fits is cast directly. Anything else, including numeric
        strings, goes through a forced repair that runs in both modes: fractions are
        truncated and out-of-range values clamped, unless strict mode turns those into
        errors. Non-numeric input is a type mismatch.
        """
        self._ensure_scalar(node, descriptor)
        bounds = number_bounds(descriptor)

        if isinstance(node, (int, float, Decimal)) and not isinstance(node, bool):
            int_has_fraction = bounds.integral and has_fractional_part(node)
            if not int_has_fraction and bounds.contains(node):
                return bounds.caster(node)

        def fix() -> Any:
            number = as_number(node)
            if number is None:
                raise ValueError(f"Not a number: {node!r}")  # noqa: TRY003
            if bounds.integral and has_fractional_part(number):
                if self._strict:
                    raise NonIntegralNumberError(descriptor, node)
                logger.debug("Truncating %s to an integer for %s", number, descriptor)
            if not bounds.contains(number):
                if self._strict:
                    raise NumberOutOfBoundError(
                        descriptor, node, bounds.min_value, bounds.max_value
                    )
                logger.debug("Clamping %s into range of %s", number, descriptor)
                number = bounds.clamp(number)
            return bounds.caster(number)

        return self._try_fix(fix, MismatchTypeError(descriptor, node), force=True)

    def _try_fix(
        self,
        fix: Callable[[], T],
        fallback_error: SanitizationError,
        force: bool = False,
    ) -> T:
        """
        Attempt a repair, raising ``fallback_error`` if it is not allowed or fails.

        Args:
            fix: Produces the repaired value; may raise a SanitizationError, which is propagated
            fallback_error: Raised when the repair is skipped or fails with any other error
            force: Attempt the repair even in strict mode

        Returns:
            The repaired value
        """
        if force or not self._strict:
            try:
                return fix()
            except SanitizationError:
                raise
            except (ValueError, TypeError, ArithmeticError):
                pass
        raise fallback_error

    def _ensure_scalar(self, node: JsonValue, descriptor: TypeDescriptor) -> None:
        if not isinstance(node, _SCALARS):
            raise MismatchTypeError(descriptor, node)
