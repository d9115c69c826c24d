"""Numeric helpers for bounded number sanitization.

Each integer and decimal width maps to a range and a caster. Python's own
numbers are unbounded, so the widths are enforced here rather than by the
runtime.
"""

import math
import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Union

from ..types import DecimalType, IntegerType

Number = Union[int, float, Decimal]

FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True)
class NumberBounds:
    """Inclusive range and caster for one numeric width."""

    min_value: Number
    max_value: Number
    caster: Callable[[Any], Number]
    integral: bool

    def contains(self, number: Number) -> bool:
        """Return True when ``number`` lies within ``[min_value, max_value]``."""
        if number != number:  # NaN
            return False
        return self.min_value <= number <= self.max_value

    def clamp(self, number: Number) -> Number:
        """Move ``number`` into the range, returning a bound when outside it."""
        if number < self.min_value:
            return self.min_value
        if number > self.max_value:
            return self.max_value
        return number


def _to_decimal(number: Number) -> Decimal:
    return Decimal(str(number))


def _integer_bounds(bits: int) -> NumberBounds:
    return NumberBounds(-(2 ** (bits - 1)), 2 ** (bits - 1) - 1, int, True)


_INTEGER_BOUNDS: dict[int | None, NumberBounds] = {
    8: _integer_bounds(8),
    16: _integer_bounds(16),
    32: _integer_bounds(32),
    64: _integer_bounds(64),
    None: NumberBounds(-math.inf, math.inf, int, True),
}

_DECIMAL_BOUNDS: dict[int | None, NumberBounds] = {
    # Python floats are always 64-bit, so a 32-bit target keeps the value
    # as-is and only inherits the narrower range.
    32: NumberBounds(-FLOAT32_MAX, FLOAT32_MAX, float, False),
    64: NumberBounds(-sys.float_info.max, sys.float_info.max, float, False),
    None: NumberBounds(-math.inf, math.inf, _to_decimal, False),
}


def number_bounds(descriptor: IntegerType | DecimalType) -> NumberBounds:
    """Look up the range and caster for a numeric descriptor.

    Args:
        descriptor: Integer or decimal descriptor

    Returns:
        The bounds for the descriptor's width
    """
    if isinstance(descriptor, IntegerType):
        return _INTEGER_BOUNDS[descriptor.width]
    return _DECIMAL_BOUNDS[descriptor.width]


def as_number(value: Any) -> Number | None:
    """
    Interpret a value tree node as a number.

    Numbers are returned unchanged. Strings holding a finite numeric literal are
    parsed: integer literals to ``int``, everything else to ``Decimal`` so that no
    precision is lost before the target width is applied. Booleans and all other
    nodes are not numbers.

    Parameters:
        value (Any): The node to interpret.

    Returns:
        int | float | Decimal | None: The numeric value, or `None` if the node is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def has_fractional_part(number: Number) -> bool:
    """Return True when ``number`` is not a whole value; infinities and NaN count as fractional."""
    if isinstance(number, int):
        return False
    if isinstance(number, Decimal):
        return not number.is_finite() or number != number.to_integral_value()
    return not number.is_integer()
