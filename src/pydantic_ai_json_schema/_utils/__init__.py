"""Utility modules for JSON schema services.

This package contains shared helpers used by the codec and the sanitizer.
"""

from .json_utils import strip_markdown_code_fence
from .type_utils import NumberBounds, as_number, has_fractional_part, number_bounds

__all__ = [
    "strip_markdown_code_fence",
    "NumberBounds",
    "as_number",
    "has_fractional_part",
    "number_bounds",
]
