"""Exception hierarchy for radixpack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from RadixpackError for easy catching of any
radixpack-specific error.

Two families exist:

- Configuration / misuse errors (SchemaError, AccumulatorError, SequenceError)
  signal a programming mistake and are always raised before an accumulator
  is mutated.
- Domain errors (DomainError and its EncodeError / DecodeError subclasses)
  signal a value or code that does not fit a field, and can be handled by
  the caller with corrected input.
"""

from __future__ import annotations


class RadixpackError(Exception):
    """Base exception for all radixpack errors."""

    pass


class SchemaError(RadixpackError):
    """Raised when a field specification or record schema is invalid.

    Examples:
        - Range bounds are invalid (e.g., min >= max)
        - Duplicate characters in a CharSet or strings in an Enum
        - Sequence length mode with a negative count
        - Unsupported record field type
    """

    pass


class AccumulatorError(RadixpackError):
    """Raised when an accumulator operation is given an invalid parameter.

    Examples:
        - Division by zero
        - Shift wider than the accumulator word
        - Word argument negative or wider than the accumulator word
    """

    pass


class SequenceError(RadixpackError):
    """Raised when a sequence is given the wrong number of values.

    Examples:
        - Variable sequence given more values than its maximum
        - Fixed sequence given a different number of values than its count
    """

    pass


class DomainError(RadixpackError):
    """Raised when a value or code falls outside a field's domain."""

    pass


class EncodeError(DomainError):
    """Raised when encoding a value fails.

    Examples:
        - Value out of bounds for a bounded field
        - Character not in a CharSet
        - Field type mismatch
        - Record exceeds radixpack_max_bytes constraint
    """

    pass


class DecodeError(DomainError):
    """Raised when decoding a code or binary data fails.

    Examples:
        - Code at or beyond the field's permutations
        - Trailing data left after all record fields are decoded
        - Decoded values rejected by the record model
    """

    pass
