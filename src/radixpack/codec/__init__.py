"""Mixed-radix codec for radixpack.

This module provides the accumulator, the field specifications and sequences
built on it, and record-level encoding and decoding.
"""

from __future__ import annotations

from .accumulator import WORD_BITS, Accumulator
from .decoder import decode
from .encoder import encode
from .fields import (
    SIGNED_WORD_MAX,
    SIGNED_WORD_MIN,
    Bool,
    CharSet,
    Enum,
    FieldSpec,
    FixedPointRange,
    IntRange,
)
from .schema import FieldSchema, Packed, RecordSchema
from .sequence import Fixed, Sequence, Variable

__all__ = [
    "encode",
    "decode",
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
    "RecordSchema",
    "FieldSchema",
    "Packed",
]
