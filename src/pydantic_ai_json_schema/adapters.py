"""Conversion between Python type annotations and type descriptors.

The generator, sanitizer and serde only ever see ``TypeDescriptor`` values.
This module is the single place that looks at Python annotations, both to
resolve them into descriptors and to map descriptors back onto the native
types that pydantic validates sanitized values into.
"""

from __future__ import annotations

import collections.abc
import logging
import types
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union, get_args, get_origin

from pydantic import BeforeValidator
from typing_extensions import assert_never

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

_ARRAY_ORIGINS: dict[Any, type] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def descriptor_from_annotation(annotation: Any) -> TypeDescriptor:
    """
    Resolve a Python type annotation into a type descriptor.

    ``Optional[X]`` resolves to the descriptor of ``X`` because every descriptor
    accepts null. Containers without type arguments produce descriptors with an
    unresolved element/value type. Classes that are neither built-in nor enums
    become ``ObjectType`` descriptors carrying the class.

    Parameters:
        annotation (Any): A type such as ``int``, ``list[str]`` or ``dict[str, Color]``.

    Returns:
        TypeDescriptor: The resolved descriptor.

    Raises:
        TypeError: If the annotation cannot be described, e.g. a map with non-string keys
            or a union of several non-null types.
    """
    if annotation is Any or annotation is object:
        return AnyType()

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return descriptor_from_annotation(args[0])
    if origin is Union or origin is types.UnionType:
        return _resolve_optional(annotation, args)
    if origin is Literal:
        return _resolve_literal(annotation, args)
    if origin in _ARRAY_ORIGINS:
        return ArrayType(element=_resolve_element(args), container=_ARRAY_ORIGINS[origin])
    if origin in _MAP_ORIGINS:
        key, value = args
        return MapType(value=descriptor_from_annotation(value), key=key)

    if annotation is bool:
        return BooleanType()
    if annotation is int:
        return IntegerType(None)
    if annotation is float:
        return DecimalType(64)
    if annotation is Decimal:
        return DecimalType(None)
    if annotation is str:
        return StringType()
    if annotation in _ARRAY_ORIGINS:
        return ArrayType(element=None, container=_ARRAY_ORIGINS[annotation])
    if annotation in _MAP_ORIGINS:
        return MapType(value=None)
    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return EnumType.from_enum(annotation)
        logger.debug("Resolved %s as a custom object type", annotation)
        return ObjectType(name=annotation.__qualname__, python_type=annotation)

    raise TypeError(f"Cannot resolve a type descriptor for {annotation!r}")  # noqa: TRY003


def _resolve_optional(annotation: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    non_null = [arg for arg in args if arg is not type(None)]
    if len(non_null) != 1:
        raise TypeError(  # noqa: TRY003
            f"Cannot resolve a type descriptor for union {annotation!r}; "
            f"only Optional[X] is supported"
        )
    return descriptor_from_annotation(non_null[0])


def _resolve_literal(annotation: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    if not all(isinstance(arg, str) for arg in args):
        raise TypeError(f"Only string literals are supported, got {annotation!r}")  # noqa: TRY003
    return EnumType(name="Literal", constants=args)


def _resolve_element(args: tuple[Any, ...]) -> TypeDescriptor | None:
    if not args:
        return None
    # tuple[X, ...] and homogeneous fixed tuples share one element type
    if len(args) == 2 and args[1] is Ellipsis:
        return descriptor_from_annotation(args[0])
    if len(set(args)) == 1:
        return descriptor_from_annotation(args[0])
    return None


def native_type(descriptor: TypeDescriptor) -> Any:
    """
    Map a descriptor onto the Python annotation used to materialize sanitized values.

    Enum descriptors backed by an ``enum_class`` accept member names; plain enum
    descriptors become ``Literal`` string types. ``ObjectType`` descriptors map to
    their ``python_type`` when present and to ``dict[str, Any]`` otherwise. Nested
    element and value types are optional, since sanitization may null out entries.

    Parameters:
        descriptor (TypeDescriptor): The descriptor to map.

    Returns:
        Any: An annotation that ``pydantic.TypeAdapter`` accepts.
    """
    if isinstance(descriptor, BooleanType):
        return bool
    if isinstance(descriptor, IntegerType):
        return int
    if isinstance(descriptor, DecimalType):
        return Decimal if descriptor.width is None else float
    if isinstance(descriptor, StringType):
        return str
    if isinstance(descriptor, EnumType):
        if descriptor.enum_class is not None:
            return Annotated[
                descriptor.enum_class, BeforeValidator(_member_by_name(descriptor.enum_class))
            ]
        return Literal[descriptor.constants]
    if isinstance(descriptor, ArrayType):
        element = Any if descriptor.element is None else Optional[native_type(descriptor.element)]
        if descriptor.container is tuple:
            return tuple[element, ...]
        return descriptor.container[element]
    if isinstance(descriptor, MapType):
        value = Any if descriptor.value is None else Optional[native_type(descriptor.value)]
        return dict[str, value]
    if isinstance(descriptor, ObjectType):
        return descriptor.python_type if descriptor.python_type is not None else dict[str, Any]
    if isinstance(descriptor, AnyType):
        return Any
    assert_never(descriptor)


def _member_by_name(enum_class: type[Enum]):
    def validate(value: Any) -> Any:
        if isinstance(value, str) and value in enum_class.__members__:
            return enum_class[value]
        return value

    return validate
