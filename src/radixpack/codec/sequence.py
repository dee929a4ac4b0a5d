"""Ordered lists of values packed with one field specification.

A Sequence pushes each value onto an accumulator as one mixed-radix digit
(Horner's rule), so the first value ends up most significant. Unpacking pops
digits least significant first and reverses them to restore the order.

Two length modes are supported:

- ``Fixed(count)``: exactly ``count`` values; radix is ``spec.permutations()``.
- ``Variable(max_count)``: up to ``max_count`` values; radix is
  ``spec.permutations() + 1`` with code 0 reserved as the end marker.

Variable layout: when fewer than ``max_count`` values are given, a zero
digit is pushed first, so it sits just above the values and stops the
decoder. A full list needs no marker because the decoder stops after
``max_count`` digits anyway.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar, Union

from ..exceptions import SchemaError, SequenceError
from .accumulator import WORD_BITS, Accumulator
from .fields import FieldSpec

T = TypeVar("T")


@dataclass(frozen=True)
class Fixed:
    """Exactly ``count`` values, known to both encoder and decoder."""

    count: int

    def __post_init__(self) -> None:
        if not isinstance(self.count, int) or self.count < 0:
            raise SchemaError(f"Fixed count must be a non-negative int, got {self.count}")


@dataclass(frozen=True)
class Variable:
    """Between 0 and ``max_count`` values, self-terminating."""

    max_count: int

    def __post_init__(self) -> None:
        if not isinstance(self.max_count, int) or self.max_count < 0:
            raise SchemaError(
                f"Variable max_count must be a non-negative int, got {self.max_count}"
            )


LengthMode = Union[Fixed, Variable]


@dataclass(frozen=True)
class Sequence(Generic[T]):
    """Packs lists of values of one field specification.

    Attributes:
        spec: Field specification for every element
        length: Length mode (Fixed or Variable)

    Example:
        >>> flags = Sequence(Bool(), Variable(20))
        >>> accum = Accumulator()
        >>> flags.compress(accum, [False, True, True, False, True])
        >>> flags.decompress(accum)
        [False, True, True, False, True]
    """

    spec: FieldSpec[T]
    length: LengthMode

    def __post_init__(self) -> None:
        if not isinstance(self.spec, FieldSpec):
            raise SchemaError(f"Sequence spec must be a FieldSpec, got {type(self.spec).__name__}")
        if not isinstance(self.length, (Fixed, Variable)):
            raise SchemaError(
                f"Sequence length must be Fixed or Variable, got {type(self.length).__name__}"
            )
        if self.radix > (1 << WORD_BITS) - 1:
            raise SchemaError(
                f"Sequence radix {self.radix} does not fit in a {WORD_BITS}-bit word"
            )

    @classmethod
    def fixed(cls, spec: FieldSpec[T], count: int) -> Sequence[T]:
        """Create a sequence of exactly ``count`` values."""
        return cls(spec, Fixed(count))

    @classmethod
    def variable(cls, spec: FieldSpec[T], max_count: int) -> Sequence[T]:
        """Create a sequence of up to ``max_count`` values."""
        return cls(spec, Variable(max_count))

    @property
    def radix(self) -> int:
        """Radix of each digit pushed by this sequence."""
        if isinstance(self.length, Variable):
            return self.spec.permutations() + 1
        return self.spec.permutations()

    def capacity(self) -> int:
        """Return the largest factor this sequence multiplies an accumulator by."""
        if isinstance(self.length, Variable):
            return self.radix**self.length.max_count
        return self.radix**self.length.count

    def compress(self, accum: Accumulator, values: Iterable[T]) -> None:
        """Pack values onto the accumulator.

        Every value is encoded before the accumulator is touched, so a failure
        leaves it unchanged.

        Args:
            accum: Accumulator to write to (may already hold other fields)
            values: Values in order (a str is treated as its characters)

        Raises:
            SequenceError: If the number of values does not fit the length mode
            EncodeError: If a value is outside the spec's domain
        """
        values = list(values)
        length = self.length

        if isinstance(length, Fixed):
            if len(values) != length.count:
                raise SequenceError(
                    f"Fixed sequence expects {length.count} values, got {len(values)}"
                )
            codes = [self.spec.encode(value) for value in values]
        else:
            if len(values) > length.max_count:
                raise SequenceError(
                    f"Variable sequence accepts at most {length.max_count} values, "
                    f"got {len(values)}"
                )
            codes = [self.spec.encode(value) + 1 for value in values]
            if len(values) < length.max_count:
                # End marker
                accum.mul(self.radix)

        radix = self.radix
        for code in codes:
            accum.mul(radix)
            accum.add(code)

    def decompress(self, accum: Accumulator) -> list[T]:
        """Unpack values from the accumulator.

        Args:
            accum: Accumulator to read from

        Returns:
            Values in their original order

        Raises:
            DecodeError: If a digit is not a valid code for the spec
        """
        radix = self.radix
        length = self.length
        values: list[T] = []

        if isinstance(length, Fixed):
            for _ in range(length.count):
                values.append(self.spec.decode(accum.div(radix)))
        else:
            for _ in range(length.max_count):
                code = accum.div(radix)
                if code == 0:
                    break
                values.append(self.spec.decode(code - 1))

        # Digits come out last-pushed first
        values.reverse()
        return values
