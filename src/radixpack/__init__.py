"""radixpack: Mixed-Radix Record Packer

A Python library that packs small structured records into the minimum number
of bits by treating the whole record as one arbitrary-precision integer,
written in a mixed radix chosen per field.

Key Features:
- Arbitrary-precision word accumulator (add, mul, div, shl, shr)
- Bounded field specifications: Bool, IntRange, FixedPointRange, CharSet, Enum
- Fixed and variable-length sequences with an end marker
- Pydantic-based record modeling

Quick Start:
    >>> from radixpack import BaseRecord, BoundedInt, encode, decode
    >>>
    >>> class StatusReport(BaseRecord):
    ...     vehicle_id: int = BoundedInt(ge=0, le=255)
    ...     depth_cm: int = BoundedInt(ge=0, le=10000)
    ...     battery_pct: int = BoundedInt(ge=0, le=100)
    ...     active: bool
    >>>
    >>> msg = StatusReport(vehicle_id=42, depth_cm=1500, battery_pct=87, active=True)
    >>> data = encode(msg)
    >>> decoded = decode(StatusReport, data)

Low-level use:
    >>> from radixpack import Accumulator, Bool, IntRange, Sequence
    >>> accum = Accumulator()
    >>> IntRange(-10, 10).compress(accum, 7)
    >>> Sequence.variable(Bool(), 20).compress(accum, [True, False])
    >>> Sequence.variable(Bool(), 20).decompress(accum)
    [True, False]
    >>> IntRange(-10, 10).decompress(accum)
    7
"""

from __future__ import annotations

import logging

from .codec import (
    SIGNED_WORD_MAX,
    SIGNED_WORD_MIN,
    WORD_BITS,
    Accumulator,
    Bool,
    CharSet,
    Enum,
    FieldSpec,
    Fixed,
    FixedPointRange,
    IntRange,
    Packed,
    RecordSchema,
    Sequence,
    Variable,
    decode,
    encode,
)
from .exceptions import (
    AccumulatorError,
    DecodeError,
    DomainError,
    EncodeError,
    RadixpackError,
    SchemaError,
    SequenceError,
)
from .models import BaseRecord, BoundedFloat, BoundedInt, CharString, OneOf
from .utils import encoded_bits, encoded_size, field_capacities

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Accumulator",
    "WORD_BITS",
    "FieldSpec",
    "Bool",
    "IntRange",
    "FixedPointRange",
    "CharSet",
    "Enum",
    "SIGNED_WORD_MAX",
    "SIGNED_WORD_MIN",
    "Sequence",
    "Fixed",
    "Variable",
    # Records
    "BaseRecord",
    "RecordSchema",
    "encode",
    "decode",
    # Field helpers
    "BoundedInt",
    "BoundedFloat",
    "CharString",
    "OneOf",
    "Packed",
    # Exceptions
    "RadixpackError",
    "SchemaError",
    "AccumulatorError",
    "SequenceError",
    "DomainError",
    "EncodeError",
    "DecodeError",
    # Sizing
    "encoded_size",
    "encoded_bits",
    "field_capacities",
    # Version
    "__version__",
]
