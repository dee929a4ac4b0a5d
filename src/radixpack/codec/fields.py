"""Field specifications: bounded domains mapped to integer codes.

Each specification describes how one kind of bounded value maps to a code in
``[0, permutations())`` and back. Specifications are immutable and can be
shared between any number of records and sequences.

Example:
    >>> depth = IntRange(0, 10000)
    >>> depth.permutations()
    10001
    >>> depth.encode(1500)
    1500
    >>> Enum(["idle", "transit", "survey"]).encode("survey")
    2
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..exceptions import DecodeError, EncodeError, SchemaError
from .accumulator import WORD_BITS, Accumulator

T = TypeVar("T")

#: Largest value of a signed word.
SIGNED_WORD_MAX = (1 << (WORD_BITS - 1)) - 1

#: Smallest value of a signed word. Reserved: range bounds must be strictly
#: greater, so that ``max - min + 1`` always fits in an unsigned word.
SIGNED_WORD_MIN = -(1 << (WORD_BITS - 1))


class FieldSpec(ABC, Generic[T]):
    """Capability shared by every field specification.

    Subclasses define the number of codes and the value <-> code bijection.
    The compress/decompress helpers push or pop a single value on an
    accumulator, so single fields can be chained with sequences in one record.
    """

    @abstractmethod
    def permutations(self) -> int:
        """Return the number of distinct codes (the field's radix)."""

    @abstractmethod
    def encode(self, value: T) -> int:
        """Map a value to its code.

        Raises:
            EncodeError: If value is outside the field's domain
        """

    @abstractmethod
    def decode(self, code: int) -> T:
        """Map a code back to its value.

        Raises:
            DecodeError: If code is not below permutations()
        """

    def capacity(self) -> int:
        """Return the factor this field multiplies an accumulator by."""
        return self.permutations()

    def compress(self, accum: Accumulator, value: T) -> None:
        """Push one value onto the accumulator as its least significant digit.

        Args:
            accum: Accumulator to write to
            value: Value to encode

        Raises:
            EncodeError: If value is outside the field's domain (accum untouched)
        """
        code = self.encode(value)
        accum.mul(self.permutations())
        accum.add(code)

    def decompress(self, accum: Accumulator) -> T:
        """Pop the least significant digit from the accumulator and decode it.

        Args:
            accum: Accumulator to read from

        Returns:
            Decoded value
        """
        return self.decode(accum.div(self.permutations()))

    def _check_code(self, code: int) -> None:
        if not isinstance(code, int) or isinstance(code, bool):
            raise DecodeError(f"Code must be an int, got {type(code).__name__}")
        if code < 0 or code >= self.permutations():
            raise DecodeError(
                f"Cannot decode code {code}: only {self.permutations()} permutations"
            )


@dataclass(frozen=True)
class Bool(FieldSpec[bool]):
    """Boolean field: False -> 0, True -> 1."""

    def permutations(self) -> int:
        return 2

    def encode(self, value: bool) -> int:
        if not isinstance(value, bool):
            raise EncodeError(f"Expected bool, got {type(value).__name__}")
        return int(value)

    def decode(self, code: int) -> bool:
        self._check_code(code)
        return code == 1


@dataclass(frozen=True)
class IntRange(FieldSpec[int]):
    """Integer range with inclusive bounds.

    Values are encoded as their offset from ``min``.

    Attributes:
        min: Smallest value (inclusive), strictly greater than SIGNED_WORD_MIN
        max: Largest value (inclusive), at most SIGNED_WORD_MAX

    Raises:
        SchemaError: If the bounds are invalid
    """

    min: int
    max: int

    def __post_init__(self) -> None:
        for name in ("min", "max"):
            bound = getattr(self, name)
            if not isinstance(bound, int) or isinstance(bound, bool):
                raise SchemaError(f"IntRange {name} must be an int, got {type(bound).__name__}")
        if self.min <= SIGNED_WORD_MIN:
            raise SchemaError(f"IntRange min must be greater than {SIGNED_WORD_MIN}")
        if self.max > SIGNED_WORD_MAX:
            raise SchemaError(f"IntRange max must be at most {SIGNED_WORD_MAX}")
        if self.min >= self.max:
            raise SchemaError(
                f"Invalid bounds: min={self.min} must be less than max={self.max}"
            )

    @classmethod
    def full(cls) -> IntRange:
        """Return the widest range a signed word allows."""
        return cls(SIGNED_WORD_MIN + 1, SIGNED_WORD_MAX)

    def permutations(self) -> int:
        return self.max - self.min + 1

    def encode(self, value: int) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"Expected int, got {type(value).__name__}")
        if value < self.min or value > self.max:
            raise EncodeError(f"Value {value} out of bounds [{self.min}, {self.max}]")
        return value - self.min

    def decode(self, code: int) -> int:
        self._check_code(code)
        return code + self.min


@dataclass(frozen=True)
class FixedPointRange(FieldSpec[float]):
    """Quantized float range with ``decimals`` binary fraction bits.

    Bounds are multiplied by ``2**decimals``, truncated toward zero and clamped
    to the largest magnitude a signed word can hold at that scale. Values are
    scaled and truncated the same way when encoded, so a decoded value can
    differ from the original by up to one step (``2**-decimals``).

    Attributes:
        min: Requested lower bound
        max: Requested upper bound
        decimals: Number of binary fraction bits (0-62)
        scaled_min: Lower bound in steps, after truncation and clamping
        scaled_max: Upper bound in steps, after truncation and clamping

    Example:
        >>> heading = FixedPointRange(0.0, 360.0, decimals=4)
        >>> heading.decode(heading.encode(123.4567))
        123.4375
    """

    min: float
    max: float
    decimals: int
    scaled_min: int = field(init=False)
    scaled_max: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.decimals, int) or not 0 <= self.decimals < WORD_BITS - 1:
            raise SchemaError(f"decimals must be 0-{WORD_BITS - 2}, got {self.decimals}")
        for name in ("min", "max"):
            bound = getattr(self, name)
            if not isinstance(bound, (int, float)) or isinstance(bound, bool):
                raise SchemaError(
                    f"FixedPointRange {name} must be a number, got {type(bound).__name__}"
                )
            try:
                finite = math.isfinite(bound)
            except OverflowError:
                raise SchemaError(
                    f"FixedPointRange {name} is too large to represent as a float"
                ) from None
            if not finite:
                raise SchemaError(f"FixedPointRange {name} must be finite, got {bound}")
        if self.min >= self.max:
            raise SchemaError(
                f"Invalid bounds: min={self.min} must be less than max={self.max}"
            )

        scaled_min = self._scale_bound(self.min)
        scaled_max = self._scale_bound(self.max)
        if scaled_min >= scaled_max:
            raise SchemaError(
                f"Bounds [{self.min}, {self.max}] collapse to a single step "
                f"at decimals={self.decimals}"
            )
        object.__setattr__(self, "scaled_min", scaled_min)
        object.__setattr__(self, "scaled_max", scaled_max)

    def _scale_bound(self, bound: float) -> int:
        limit = (SIGNED_WORD_MAX >> self.decimals) << self.decimals
        # Clamp in float first so the scaled value cannot overflow
        unscaled_limit = float(SIGNED_WORD_MAX >> self.decimals)
        bound = max(-unscaled_limit, min(unscaled_limit, float(bound)))
        scaled = int(bound * self.scale)
        return max(-limit, min(limit, scaled))

    @property
    def scale(self) -> int:
        """Number of steps per unit (``2**decimals``)."""
        return 1 << self.decimals

    @property
    def step(self) -> float:
        """Quantization step (``2**-decimals``)."""
        return 1.0 / self.scale

    @property
    def lower(self) -> float:
        """Effective lower bound after truncation and clamping."""
        return self.scaled_min / self.scale

    @property
    def upper(self) -> float:
        """Effective upper bound after truncation and clamping."""
        return self.scaled_max / self.scale

    def permutations(self) -> int:
        return self.scaled_max - self.scaled_min + 1

    def encode(self, value: float) -> int:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise EncodeError(f"Expected float, got {type(value).__name__}")
        if isinstance(value, int):
            # Exact for ints of any size
            scaled = value * self.scale
        else:
            scaled_float = value * self.scale
            if not math.isfinite(scaled_float):
                raise EncodeError(f"Value {value} is not finite at decimals={self.decimals}")
            # int() truncates toward zero
            scaled = int(scaled_float)
        if scaled < self.scaled_min or scaled > self.scaled_max:
            raise EncodeError(f"Value {value} out of bounds [{self.lower}, {self.upper}]")
        return scaled - self.scaled_min

    def decode(self, code: int) -> float:
        self._check_code(code)
        return (code + self.scaled_min) / self.scale


def _duplicates(items: Any) -> list[Any]:
    seen = set()
    dups = []
    for item in items:
        if item in seen and item not in dups:
            dups.append(item)
        seen.add(item)
    return dups


@dataclass(frozen=True)
class CharSet(FieldSpec[str]):
    """Single character drawn from an ordered alphabet.

    The code of a character is its position in ``chars``.

    Example:
        >>> hexdigits = CharSet("0123456789abcdef")
        >>> hexdigits.encode("a")
        10
    """

    chars: str
    _lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        chars = self.chars
        if not isinstance(chars, str):
            chars = list(chars)
            for char in chars:
                if not isinstance(char, str) or len(char) != 1:
                    raise SchemaError(f"CharSet entries must be single characters, got {char!r}")
            chars = "".join(chars)
            object.__setattr__(self, "chars", chars)

        if not chars:
            raise SchemaError("CharSet requires at least one character")
        dups = _duplicates(chars)
        if dups:
            raise SchemaError(f"CharSet has duplicate characters: {''.join(dups)!r}")

        object.__setattr__(self, "_lookup", {char: index for index, char in enumerate(chars)})

    def permutations(self) -> int:
        return len(self.chars)

    def encode(self, value: str) -> int:
        if not isinstance(value, str):
            raise EncodeError(f"Expected str, got {type(value).__name__}")
        try:
            return self._lookup[value]
        except KeyError:
            raise EncodeError(f"Character {value!r} not in CharSet {self.chars!r}") from None

    def decode(self, code: int) -> str:
        self._check_code(code)
        return self.chars[code]


@dataclass(frozen=True)
class Enum(FieldSpec[str]):
    """One string out of an ordered list of options.

    The code of an option is its position in ``options``.

    Example:
        >>> fruit = Enum(["Banana", "Orange", "Apple"])
        >>> fruit.encode("Apple")
        2
        >>> fruit.decode(0)
        'Banana'
    """

    options: tuple[str, ...]
    _lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.options, str):
            raise SchemaError("Enum options must be a sequence of strings, not a single str")
        options = tuple(self.options)
        for option in options:
            if not isinstance(option, str):
                raise SchemaError(f"Enum options must be strings, got {option!r}")
        if not options:
            raise SchemaError("Enum requires at least one option")
        dups = _duplicates(options)
        if dups:
            raise SchemaError(f"Enum has duplicate options: {dups}")

        object.__setattr__(self, "options", options)
        object.__setattr__(self, "_lookup", {option: index for index, option in enumerate(options)})

    def permutations(self) -> int:
        return len(self.options)

    def encode(self, value: str) -> int:
        if not isinstance(value, str):
            raise EncodeError(f"Expected str, got {type(value).__name__}")
        try:
            return self._lookup[value]
        except KeyError:
            raise EncodeError(f"{value!r} is not one of {list(self.options)}") from None

    def decode(self, code: int) -> str:
        self._check_code(code)
        return self.options[code]
