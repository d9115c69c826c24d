"""JSON text codec: serialize values, parse text, materialize sanitized trees."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from ._utils.json_utils import strip_markdown_code_fence
from .adapters import native_type
from .exceptions import DeserializationError, ParsingError
from .types import JsonValue, TypeDescriptor

logger = logging.getLogger(__name__)


class DefaultJsonSerde:
    """Encodes values as JSON and decodes model output back into typed values.

    Enum members are written by name, which is what enum descriptors accept.
    """

    def __init__(self, strip_code_fences: bool = True):
        """
        Initialize the codec.

        Args:
            strip_code_fences: Remove Markdown code fences around the text before parsing
        """
        self._strip_code_fences = strip_code_fences

    @property
    def strip_code_fences(self) -> bool:
        return self._strip_code_fences

    def serialize(self, value: Any) -> str:
        """Encode ``value`` as JSON text without validating it."""
        return json.dumps(_to_tree(value), default=to_jsonable_python, ensure_ascii=False)

    def parse(self, text: str) -> JsonValue:
        """
        Decode JSON text into a value tree.

        Parameters:
            text (str): JSON text, optionally wrapped in a ```json code fence.

        Returns:
            JsonValue: The decoded tree of dicts, lists, strings, numbers, booleans and None.

        Raises:
            ParsingError: If the text is not well-formed JSON.
        """
        cleaned = strip_markdown_code_fence(text) if self._strip_code_fences else text
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.debug("Failed to parse JSON (%d chars): %s", len(text), e)
            raise ParsingError(f"Invalid JSON: {e}", text) from e

    def materialize(self, node: JsonValue, descriptor: TypeDescriptor) -> Any:
        """
        Convert a sanitized value tree into the native Python value for ``descriptor``.

        Parameters:
            node (JsonValue): A tree already sanitized against ``descriptor``.
            descriptor (TypeDescriptor): The target shape.

        Returns:
            Any: The validated native value, e.g. an enum member or a pydantic model.

        Raises:
            DeserializationError: If pydantic rejects the tree.
        """
        if node is None:
            return None
        logger.debug("Materializing value as %s", descriptor)
        adapter: TypeAdapter[Any] = TypeAdapter(native_type(descriptor))
        try:
            return adapter.validate_python(node)
        except ValidationError as e:
            raise DeserializationError(f"Cannot materialize value as {descriptor}: {e}") from e


def _to_tree(value: Any) -> Any:
    """Convert enums to names and containers to lists/dicts; leave everything else to pydantic.

    Models are dumped in their own JSON form (enum values, field aliases), which is
    what validating them back expects.
    """
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Mapping):
        return {key: _to_tree(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_tree(item) for item in value]
    return value
