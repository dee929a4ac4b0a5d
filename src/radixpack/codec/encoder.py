"""Mixed-radix encoder for Pydantic records.

This module provides the encode() function that packs a Pydantic record
instance into the bytes of a single arbitrary-precision integer.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from ..exceptions import DomainError, EncodeError
from .accumulator import WORD_BITS, Accumulator
from .schema import RecordSchema

logger = logging.getLogger(__name__)


def encode(record: BaseModel) -> bytes:
    """Encode a Pydantic record to its packed binary form.

    Every field is pushed onto one accumulator in declaration order, so the
    first field ends up most significant. The accumulator is serialized with
    trailing zero bytes stripped.

    Args:
        record: Pydantic record instance to encode

    Returns:
        Packed representation

    Raises:
        SchemaError: If the record schema is invalid
        SequenceError: If a sequence field holds too many values
        EncodeError: If a field value is invalid or the result is too large

    Example:
        ```python
        from radixpack import BaseRecord, BoundedInt, encode

        class Status(BaseRecord):
            vehicle_id: int = BoundedInt(ge=0, le=255)
            active: bool

        data = encode(Status(vehicle_id=42, active=True))
        ```
    """
    record_class = type(record)
    schema = RecordSchema.from_model(record_class)
    accum = Accumulator(getattr(record_class, "radixpack_word_bits", WORD_BITS))

    for field_schema in schema.fields:
        value = getattr(record, field_schema.name)
        try:
            field_schema.compress(accum, value)
        except DomainError as e:
            raise EncodeError(f"Field {field_schema.name}: {e}") from e

    encoded = accum.to_bytes(compact=True)

    max_bytes = getattr(record_class, "radixpack_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded record size ({len(encoded)} bytes) exceeds radixpack_max_bytes={max_bytes}"
        )

    logger.debug(
        "Encoded %s: %d bits in %d bytes", record_class.__name__, accum.bit_length(), len(encoded)
    )
    return encoded
