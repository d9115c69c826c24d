"""Tests for the JSON codec: serialize, parse and materialize."""

import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import pytest
from pydantic import BaseModel, Field

from pydantic_ai_json_schema import (
    AnyType,
    ArrayType,
    BooleanType,
    DecimalType,
    DefaultJsonSerde,
    DeserializationError,
    EnumType,
    IntegerType,
    MapType,
    ObjectType,
    ParsingError,
    StringType,
)


class Color(Enum):
    RED = 1
    BLUE = 2


class Point(BaseModel):
    x: int
    y: int


class Swatch(BaseModel):
    color: Color
    hex_code: str = Field(alias="hexCode")


@dataclass
class Pair:
    left: str
    right: str


@pytest.fixture
def serde():
    return DefaultJsonSerde()


class TestSerialize:
    """Tests for encoding values as JSON text."""

    def test_primitives(self, serde):
        """Test primitives encode as plain JSON."""
        assert serde.serialize(42) == "42"
        assert serde.serialize("abc") == '"abc"'
        assert serde.serialize(True) == "true"
        assert serde.serialize(None) == "null"

    def test_enum_members_encode_by_name(self, serde):
        """Test enums are written by member name."""
        assert serde.serialize(Color.RED) == '"RED"'
        assert json.loads(serde.serialize({"c": [Color.BLUE]})) == {"c": ["BLUE"]}

    def test_containers(self, serde):
        """Test tuples and sets encode as arrays."""
        assert json.loads(serde.serialize((1, 2))) == [1, 2]
        assert json.loads(serde.serialize({3})) == [3]

    def test_pydantic_model(self, serde):
        """Test models encode as objects."""
        assert json.loads(serde.serialize(Point(x=1, y=2))) == {"x": 1, "y": 2}

    def test_pydantic_model_uses_its_own_json_form(self, serde):
        """Test model fields keep enum values and aliases so the model validates back."""
        encoded = json.loads(serde.serialize(Swatch(color=Color.RED, hexCode="#f00")))
        assert encoded == {"color": 1, "hexCode": "#f00"}

    def test_dataclass_and_decimal(self, serde):
        """Test values json cannot encode fall back to pydantic."""
        assert json.loads(serde.serialize(Pair("a", "b"))) == {"left": "a", "right": "b"}
        assert json.loads(serde.serialize(Decimal("1.5"))) == "1.5"

    def test_non_ascii_is_kept(self, serde):
        """Test text is not escaped to ASCII."""
        assert serde.serialize("größe") == '"größe"'


class TestParse:
    """Tests for decoding JSON text."""

    def test_valid_json(self, serde):
        """Test a JSON document decodes into a value tree."""
        assert serde.parse('{"a": [1, 2.5, "x", true, null]}') == {"a": [1, 2.5, "x", True, None]}

    def test_code_fence_is_stripped(self, serde):
        """Test fenced model output is accepted."""
        assert serde.parse('```json\n{"key": "value"}\n```') == {"key": "value"}

    def test_code_fence_kept_when_disabled(self):
        """Test fence stripping can be turned off."""
        with pytest.raises(ParsingError):
            DefaultJsonSerde(strip_code_fences=False).parse('```json\n{"key": "value"}\n```')

    def test_malformed_json(self, serde):
        """Test malformed text raises ParsingError with the original text."""
        with pytest.raises(ParsingError, match="Invalid JSON") as exc_info:
            serde.parse('{"a": ')
        assert exc_info.value.text == '{"a": '
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_parsing_error_is_a_deserialization_error(self, serde):
        """Test the error hierarchy."""
        with pytest.raises(DeserializationError):
            serde.parse("not json")


class TestMaterialize:
    """Tests for converting sanitized trees into native values."""

    def test_primitives(self, serde):
        """Test scalar descriptors materialize to Python scalars."""
        assert serde.materialize(True, BooleanType()) is True
        assert serde.materialize(42, IntegerType(8)) == 42
        assert serde.materialize(1.5, DecimalType(64)) == 1.5
        assert serde.materialize("abc", StringType()) == "abc"

    def test_arbitrary_decimal(self, serde):
        """Test arbitrary precision decimals materialize to Decimal."""
        result = serde.materialize(Decimal("0.1"), DecimalType(None))
        assert result == Decimal("0.1")
        assert isinstance(result, Decimal)

    def test_null(self, serde):
        """Test null materializes to None for every descriptor."""
        assert serde.materialize(None, IntegerType()) is None
        assert serde.materialize(None, ArrayType(StringType())) is None

    def test_enum_with_class(self, serde):
        """Test enum names become members of the enum class."""
        descriptor = EnumType.from_enum(Color)
        assert serde.materialize("RED", descriptor) is Color.RED

    def test_enum_without_class(self, serde):
        """Test plain enum descriptors materialize to strings."""
        descriptor = EnumType(name="Color", constants=("RED", "BLUE"))
        assert serde.materialize("BLUE", descriptor) == "BLUE"

    def test_containers(self, serde):
        """Test arrays materialize into their declared container."""
        assert serde.materialize([1, 2], ArrayType(IntegerType())) == [1, 2]
        assert serde.materialize([1, 2], ArrayType(IntegerType(), container=tuple)) == (1, 2)
        assert serde.materialize([1, 1], ArrayType(IntegerType(), container=set)) == {1}

    def test_containers_with_null_entries(self, serde):
        """Test nulled-out entries from lenient sanitization materialize."""
        assert serde.materialize([10, None, 20], ArrayType(IntegerType(8))) == [10, None, 20]
        assert serde.materialize({"a": None}, MapType(StringType())) == {"a": None}

    def test_map_of_enums(self, serde):
        """Test enums nested in maps are converted."""
        descriptor = MapType(EnumType.from_enum(Color))
        assert serde.materialize({"a": "RED", "b": "BLUE"}, descriptor) == {
            "a": Color.RED,
            "b": Color.BLUE,
        }

    def test_object_with_python_type(self, serde):
        """Test custom objects validate into their class."""
        descriptor = ObjectType(name="Point", python_type=Point)
        assert serde.materialize({"x": 1, "y": 2}, descriptor) == Point(x=1, y=2)

    def test_serialized_model_materializes(self, serde):
        """Test a serialized model validates back into an equal model."""
        value = Swatch(color=Color.BLUE, hexCode="#00f")
        descriptor = ObjectType(name="Swatch", python_type=Swatch)
        assert serde.materialize(serde.parse(serde.serialize(value)), descriptor) == value

    def test_object_without_python_type(self, serde):
        """Test custom objects without a class stay dicts."""
        assert serde.materialize({"x": [1]}, ObjectType()) == {"x": [1]}

    def test_any(self, serde):
        """Test Any returns the tree unchanged."""
        assert serde.materialize({"x": [1, "a"]}, AnyType()) == {"x": [1, "a"]}

    def test_contract_violation(self, serde):
        """Test trees that do not fit raise DeserializationError."""
        with pytest.raises(DeserializationError, match="Cannot materialize value as Integer<32>"):
            serde.materialize("abc", IntegerType())
        with pytest.raises(DeserializationError, match="Point"):
            serde.materialize({"x": 1}, ObjectType(name="Point", python_type=Point))
