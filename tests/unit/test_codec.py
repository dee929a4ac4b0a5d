"""Unit tests for record encoding/decoding."""

from __future__ import annotations

import enum
from typing import Annotated, ClassVar, Literal, Optional

import pytest
from pydantic import Field

from radixpack import (
    BaseRecord,
    BoundedInt,
    CharString,
    DecodeError,
    EncodeError,
    IntRange,
    OneOf,
    Packed,
    RecordSchema,
    SchemaError,
    Sequence,
    decode,
    encode,
    encoded_bits,
    encoded_size,
    field_capacities,
)


class Priority(enum.Enum):
    """Test enum."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class SimpleRecord(BaseRecord):
    """Simple test record."""

    vehicle_id: int = Field(ge=0, le=255)
    active: bool


class BoundedRecord(BaseRecord):
    """Record with various bounded fields."""

    small_int: int = Field(ge=0, le=15)
    medium_int: int = Field(ge=0, le=1000)
    negative_int: int = Field(ge=-100, le=100)


class EnumRecord(BaseRecord):
    """Record with enum fields."""

    priority: Priority
    mode: Literal["idle", "transit", "survey"]
    fruit: str = OneOf(["Banana", "Orange", "Apple"])
    id: int = BoundedInt(ge=0, le=255)


class TextRecord(BaseRecord):
    """Record with alphabet-restricted strings."""

    callsign: str = CharString(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", max_length=8)
    grid: str = CharString(alphabet="ABCDEFGHIJKLMNOPQR", max_length=2, fixed=True)


class PackedRecord(BaseRecord):
    """Record with an explicit sequence codec."""

    readings: Annotated[list[int], Packed(Sequence.variable(IntRange(-50, 50), 6))]
    ok: bool


class TestEncodeDecode:
    """Test basic encode/decode functionality."""

    def test_simple_record(self) -> None:
        """Test simple record encoding."""
        msg = SimpleRecord(vehicle_id=42, active=True)
        data = encode(msg)

        # 42 * 2 + 1 = 85
        assert data == b"\x55"

        decoded = decode(SimpleRecord, data)
        assert decoded.vehicle_id == 42
        assert decoded.active is True

    def test_zero_record_is_empty(self) -> None:
        """Test a record of all-zero codes packs to no bytes."""
        msg = SimpleRecord(vehicle_id=0, active=False)
        assert encode(msg) == b""
        assert decode(SimpleRecord, b"") == msg

    def test_bounded_record(self) -> None:
        """Test bounded integer encoding."""
        msg = BoundedRecord(small_int=15, medium_int=500, negative_int=-50)
        data = encode(msg)

        # 16 * 1001 * 201 values = 22 bits = 3 bytes
        assert len(data) <= 3

        decoded = decode(BoundedRecord, data)
        assert decoded == msg

    def test_enum_record(self) -> None:
        """Test enum, Literal and OneOf encoding."""
        msg = EnumRecord(priority=Priority.HIGH, mode="transit", fruit="Apple", id=123)
        decoded = decode(EnumRecord, encode(msg))

        assert decoded.priority is Priority.HIGH
        assert decoded.mode == "transit"
        assert decoded.fruit == "Apple"
        assert decoded.id == 123

    def test_text_record(self) -> None:
        """Test variable and fixed-length alphabet strings."""
        msg = TextRecord(callsign="AUV7", grid="FN")
        decoded = decode(TextRecord, encode(msg))

        assert decoded.callsign == "AUV7"
        assert decoded.grid == "FN"

    def test_empty_string(self) -> None:
        """Test an empty variable-length string."""
        msg = TextRecord(callsign="", grid="AA")
        assert decode(TextRecord, encode(msg)) == msg

    def test_packed_record(self) -> None:
        """Test an explicit Packed sequence codec."""
        msg = PackedRecord(readings=[-50, 0, 12, 50], ok=False)
        decoded = decode(PackedRecord, encode(msg))

        assert decoded.readings == [-50, 0, 12, 50]
        assert decoded.ok is False

    def test_word_width_does_not_change_bytes(self) -> None:
        """Test compact bytes are the same integer whatever the word width."""

        class Narrow(SimpleRecord):
            radixpack_word_bits: ClassVar[int] = 32

        msg = SimpleRecord(vehicle_id=200, active=True)
        narrow = Narrow(vehicle_id=200, active=True)

        assert encode(narrow) == encode(msg)
        assert decode(Narrow, encode(narrow)) == narrow

    def test_mixed_radix_beats_bit_fields(self) -> None:
        """Test fields share bits instead of rounding each up."""

        class Triple(BaseRecord):
            a: int = Field(ge=0, le=4)
            b: int = Field(ge=0, le=4)
            c: int = Field(ge=0, le=4)

        # 5 * 5 * 5 = 125 values = 7 bits (3 bits per field would be 9)
        assert encoded_bits(Triple) == 7
        assert encoded_size(Triple) == 1
        assert encode(Triple(a=4, b=4, c=4)) == bytes([124])


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_value_out_of_bounds(self) -> None:
        """Test out-of-bounds error."""
        # Use model_construct to bypass Pydantic validation
        msg = SimpleRecord.model_construct(vehicle_id=256, active=True)

        with pytest.raises(EncodeError, match="Field vehicle_id"):
            encode(msg)

    def test_invalid_option(self) -> None:
        """Test a string outside OneOf options."""
        msg = EnumRecord(priority=Priority.LOW, mode="idle", fruit="Mango", id=1)

        with pytest.raises(EncodeError, match="Field fruit"):
            encode(msg)

    def test_character_outside_alphabet(self) -> None:
        """Test a character outside the CharString alphabet."""
        msg = TextRecord(callsign="auv", grid="AA")

        with pytest.raises(EncodeError, match="Field callsign"):
            encode(msg)

    def test_wrong_enum_type(self) -> None:
        """Test an enum field holding a foreign value."""
        msg = EnumRecord.model_construct(priority="HIGH", mode="idle", fruit="Apple", id=1)

        with pytest.raises(EncodeError, match="Expected Priority"):
            encode(msg)

    def test_max_bytes_exceeded(self) -> None:
        """Test radixpack_max_bytes is enforced."""

        class Tiny(BoundedRecord):
            radixpack_max_bytes: ClassVar[Optional[int]] = 1

        msg = Tiny(small_int=15, medium_int=1000, negative_int=100)

        with pytest.raises(EncodeError, match="exceeds radixpack_max_bytes=1"):
            encode(msg)


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_trailing_data(self) -> None:
        """Test data larger than the record's capacity."""
        with pytest.raises(DecodeError, match="Trailing data"):
            decode(SimpleRecord, b"\xff\xff\xff")

    def test_invalid_model_value(self) -> None:
        """Test decoded values rejected by the model."""

        class Strict(BaseRecord):
            value: int = Field(ge=0, le=10, multiple_of=2)

        # Code 3 is a valid IntRange code but fails multiple_of
        with pytest.raises(DecodeError, match="Failed to construct Strict"):
            decode(Strict, b"\x03")


class TestSchemaErrors:
    """Test schema introspection errors."""

    def test_unbounded_int(self) -> None:
        """Test integers without bounds."""

        class Unbounded(BaseRecord):
            value: int

        with pytest.raises(SchemaError, match="Field value: integer fields require"):
            encode(Unbounded(value=3))

    def test_single_value_int(self) -> None:
        """Test integer fields need more than one possible value."""

        class Constant(BaseRecord):
            value: int = BoundedInt(ge=5, le=5)

        with pytest.raises(SchemaError, match="Field value: integer fields require ge < le"):
            RecordSchema.from_model(Constant)

    def test_radix_wider_than_record_word(self) -> None:
        """Test a field radix must fit the record's word width."""

        class Wide(BaseRecord):
            radixpack_word_bits: ClassVar[int] = 32
            value: int = BoundedInt(ge=0, le=2**40)

        with pytest.raises(SchemaError, match="Field value: radix .* 32-bit word"):
            RecordSchema.from_model(Wide)
        with pytest.raises(SchemaError, match="Field value"):
            encode(Wide(value=3))

    def test_plain_string(self) -> None:
        """Test strings without an alphabet or options."""

        class Plain(BaseRecord):
            name: str

        with pytest.raises(SchemaError, match="OneOf"):
            RecordSchema.from_model(Plain)

    def test_optional_field(self) -> None:
        """Test Optional fields are not supported."""

        class Maybe(BaseRecord):
            value: Optional[bool] = None

        with pytest.raises(SchemaError, match="Optional"):
            RecordSchema.from_model(Maybe)

    def test_unsupported_type(self) -> None:
        """Test unsupported annotations."""

        class Raw(BaseRecord):
            payload: bytes

        with pytest.raises(SchemaError, match="unsupported type"):
            RecordSchema.from_model(Raw)

    def test_invalid_word_bits(self) -> None:
        """Test record options are validated at class creation."""
        with pytest.raises(SchemaError, match="radixpack_word_bits"):

            class Odd(BaseRecord):
                radixpack_word_bits: ClassVar[int] = 12
                flag: bool

    def test_packed_requires_codec(self) -> None:
        """Test Packed only accepts FieldSpec or Sequence."""
        with pytest.raises(SchemaError, match="Packed codec"):
            Packed("not a codec")  # type: ignore[arg-type]


class TestSizing:
    """Test size calculation helpers."""

    def test_field_capacities(self) -> None:
        """Test capacity per field."""
        assert field_capacities(SimpleRecord) == {"vehicle_id": 256, "active": 2}
        assert field_capacities(TextRecord) == {"callsign": 37**8, "grid": 18**2}

    def test_encoded_bits(self) -> None:
        """Test worst-case bits."""
        assert encoded_bits(SimpleRecord) == 9
        assert encoded_bits(BoundedRecord) == 22

    def test_encoded_size_instance(self) -> None:
        """Test size from an instance matches the class."""
        msg = SimpleRecord(vehicle_id=255, active=True)
        assert encoded_size(msg) == encoded_size(SimpleRecord) == 2
        assert len(encode(msg)) == 2

    def test_field_bits_required(self) -> None:
        """Test per-field bits."""
        schema = RecordSchema.from_model(BoundedRecord)
        assert [field.bits_required() for field in schema.fields] == [4, 10, 8]
        assert schema.total_bits() == 22
