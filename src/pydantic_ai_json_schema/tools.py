"""Rendering schemas for model tool calling and structured output prompts."""

import json
import logging
from typing import Any

from pydantic_ai.tools import ToolDefinition

from .exceptions import DeserializationError, ParsingError
from .schema import TYPE_KEY, Schema
from .types import JsonValue

logger = logging.getLogger(__name__)

VALUE_KEY = "value"


def is_wrapped(schema: Schema) -> bool:
    """Return True when ``schema`` is not an object and needs a ``value`` wrapper as tool parameters."""
    return schema.get(TYPE_KEY) != "object"


def to_tool_parameters(schema: Schema) -> dict[str, Any]:
    """Render ``schema`` as a tool's parameters JSON schema.

    Tool parameters must be a JSON object, so any other schema is wrapped into
    a single required ``value`` property.

    Args:
        schema: Schema to render

    Returns:
        Object JSON schema for the tool's parameters
    """
    json_schema = schema.to_json_schema()
    if not is_wrapped(schema):
        return json_schema
    return {
        "type": "object",
        "properties": {VALUE_KEY: json_schema},
        "required": [VALUE_KEY],
    }


def to_tool_definition(schema: Schema, name: str, description: str | None = None) -> ToolDefinition:
    """Build a pydantic_ai tool definition whose parameters follow ``schema``.

    Args:
        schema: Schema of the tool's arguments
        name: Tool name
        description: Tool description (defaults to the schema's description)

    Returns:
        ToolDefinition ready to pass to a pydantic_ai model
    """
    logger.debug("Building tool definition: %s", name)
    return ToolDefinition(
        name=name,
        description=description if description is not None else schema.description,
        parameters_json_schema=to_tool_parameters(schema),
    )


def unwrap_tool_arguments(args: str | dict[str, Any] | None, schema: Schema) -> JsonValue:
    """
    Recover the value tree from tool call arguments built with ``to_tool_definition``.

    Parameters:
        args (str | dict[str, Any] | None): Arguments as returned by the model, either a
            JSON string or an already decoded mapping.
        schema (Schema): The schema the tool definition was built from.

    Returns:
        JsonValue: The arguments, with the ``value`` wrapper removed when one was added.

    Raises:
        ParsingError: If ``args`` is a string that is not valid JSON.
        DeserializationError: If a wrapped value is missing.
    """
    if isinstance(args, str):
        try:
            args = json.loads(args) if args.strip() else {}
        except json.JSONDecodeError as e:
            raise ParsingError(f"Invalid tool arguments JSON: {e}", args) from e
    if args is None:
        args = {}

    if not is_wrapped(schema):
        return args
    if not isinstance(args, dict) or VALUE_KEY not in args:
        raise DeserializationError(f"Tool arguments are missing the '{VALUE_KEY}' field")  # noqa: TRY003
    return args[VALUE_KEY]


def build_output_instructions(schema: Schema) -> str:
    """Build prompt instructions asking the model to answer with JSON conforming to ``schema``.

    Args:
        schema: Schema of the expected answer

    Returns:
        Instructions to prepend or append to the user prompt
    """
    lines = ["Respond with a single JSON value and nothing else."]
    if schema.description:
        lines.append(f"The value describes: {schema.description}")
    lines.append("It must conform to this JSON schema:")
    lines.append("```json")
    lines.append(json.dumps(schema.to_json_schema(), indent=2))
    lines.append("```")
    return "\n".join(lines)
