"""Mixed-radix decoder for Pydantic records.

This module provides the decode() function that converts packed binary data
back to a Pydantic record instance.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import DecodeError, DomainError
from .accumulator import WORD_BITS, Accumulator
from .schema import RecordSchema

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def decode(record_class: type[T], data: bytes) -> T:
    """Decode packed binary data to a Pydantic record.

    Fields are popped from the accumulator in reverse declaration order,
    since the last field encoded is the least significant digit.

    Args:
        record_class: Pydantic record class to decode to
        data: Binary data produced by encode()

    Returns:
        Decoded record instance

    Raises:
        SchemaError: If the record schema is invalid
        DecodeError: If the data holds more than the record, or decoded values
            are rejected by the model

    Example:
        ```python
        from radixpack import decode, encode

        data = encode(msg)
        decoded = decode(Status, data)
        ```
    """
    schema = RecordSchema.from_model(record_class)
    accum = Accumulator.from_bytes(data, getattr(record_class, "radixpack_word_bits", WORD_BITS))
    bit_length = accum.bit_length()

    field_values: dict[str, Any] = {}
    for field_schema in reversed(schema.fields):
        try:
            field_values[field_schema.name] = field_schema.decompress(accum)
        except DomainError as e:
            raise DecodeError(f"Error decoding field {field_schema.name}: {e}") from e

    if not accum.is_zero():
        raise DecodeError(
            f"Trailing data after decoding {record_class.__name__}: "
            f"{accum.bit_length()} bits left over"
        )

    try:
        decoded = record_class(**field_values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {record_class.__name__}: {e}") from e

    logger.debug("Decoded %s from %d bits", record_class.__name__, bit_length)
    return decoded
