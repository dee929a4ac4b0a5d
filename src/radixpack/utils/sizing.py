"""Record size calculation utilities.

This module provides functions to calculate the packed size of records
without actually encoding them. Sizes are worst-case: a record whose fields
hold small codes can serialize to fewer bytes.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..codec.schema import RecordSchema


def _schema_for(record_or_class: BaseModel | type[BaseModel]) -> RecordSchema:
    if isinstance(record_or_class, BaseModel):
        return RecordSchema.from_model(type(record_or_class))
    return RecordSchema.from_model(record_or_class)


def encoded_size(record_or_class: BaseModel | type[BaseModel]) -> int:
    """Calculate the worst-case packed size of a record in bytes.

    Args:
        record_or_class: Record instance or class to calculate size for

    Returns:
        Size in bytes (rounded up to nearest byte)

    Raises:
        SchemaError: If schema is invalid or contains unsupported features

    Example:
        >>> class Status(BaseRecord):
        ...     vehicle_id: int = Field(ge=0, le=255)
        ...     battery_pct: int = Field(ge=0, le=100)
        ...     active: bool
        >>> encoded_size(Status)
        2  # 256 * 101 * 2 = 51712 values = 16 bits = 2 bytes
    """
    return _schema_for(record_or_class).total_bytes()


def encoded_bits(record_or_class: BaseModel | type[BaseModel]) -> int:
    """Calculate the worst-case packed size of a record in bits.

    Args:
        record_or_class: Record instance or class to calculate size for

    Returns:
        Size in bits

    Raises:
        SchemaError: If schema is invalid or contains unsupported features

    Example:
        >>> encoded_bits(Status)
        16  # ceil(log2(256 * 101 * 2))
    """
    return _schema_for(record_or_class).total_bits()


def field_capacities(record_or_class: BaseModel | type[BaseModel]) -> dict[str, int]:
    """Get the number of values (radix) each field of a record contributes.

    The record's capacity is the product of these values.

    Args:
        record_or_class: Record instance or class to analyze

    Returns:
        Dictionary mapping field names to their capacity

    Raises:
        SchemaError: If schema is invalid or contains unsupported features

    Example:
        >>> field_capacities(Status)
        {'vehicle_id': 256, 'battery_pct': 101, 'active': 2}
    """
    return {field.name: field.capacity() for field in _schema_for(record_or_class).fields}
