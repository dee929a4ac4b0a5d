"""Arbitrary-precision unsigned accumulator.

This module provides the word-level arithmetic that mixed-radix packing is
built on. The accumulator holds one large unsigned integer as a list of
fixed-width words, least significant word first, and is updated in place by
adding, multiplying, dividing and shifting by single-word values.

Double-width intermediates (carries, products, long-division dividends) are
formed with explicit shifts and masks, so every word stored back always fits
in ``word_bits`` bits.
"""

from __future__ import annotations

from typing import Iterable

from ..exceptions import AccumulatorError

#: Default word width in bits.
WORD_BITS = 64


class Accumulator:
    """A very large unsigned number, mutated in place.

    Starts at zero. The word list never keeps a most-significant zero word,
    so zero is the empty list and two equal values always have identical
    word lists.

    Example:
        >>> accum = Accumulator(word_bits=32)
        >>> accum.add(2)
        >>> accum.add(4)
        >>> accum.to_hex_str()
        '00000006'
        >>> accum.add(0xFFFFFFFF)
        >>> accum.to_hex_str()
        '00000001 00000005'
    """

    def __init__(self, word_bits: int = WORD_BITS) -> None:
        """Initialize an accumulator holding zero.

        Args:
            word_bits: Width of each word in bits (positive multiple of 8)

        Raises:
            AccumulatorError: If word_bits is not a positive multiple of 8
        """
        if not isinstance(word_bits, int) or word_bits < 8 or word_bits % 8 != 0:
            raise AccumulatorError(f"word_bits must be a positive multiple of 8, got {word_bits}")

        self._word_bits = word_bits
        self._mask = (1 << word_bits) - 1
        self._words: list[int] = []

    @classmethod
    def from_int(cls, value: int, word_bits: int = WORD_BITS) -> Accumulator:
        """Create an accumulator holding a non-negative Python integer.

        Args:
            value: Value to load (must be >= 0)
            word_bits: Width of each word in bits

        Returns:
            Accumulator equal to value

        Raises:
            AccumulatorError: If value is not a non-negative int
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise AccumulatorError(f"Accumulator value must be an int, got {type(value).__name__}")
        if value < 0:
            raise AccumulatorError(f"Accumulator value must be non-negative, got {value}")

        accum = cls(word_bits)
        while value:
            accum._words.append(value & accum._mask)
            value >>= word_bits
        return accum

    @classmethod
    def from_words(cls, words: Iterable[int], word_bits: int = WORD_BITS) -> Accumulator:
        """Create an accumulator from words, least significant first.

        Most-significant zero words are dropped.

        Args:
            words: Word values, least significant first
            word_bits: Width of each word in bits

        Returns:
            Accumulator holding the given words

        Raises:
            AccumulatorError: If a word does not fit in word_bits
        """
        accum = cls(word_bits)
        for word in words:
            accum._check_word(word, "word")
            accum._words.append(word)
        accum._trim()
        return accum

    @classmethod
    def from_bytes(cls, data: bytes, word_bits: int = WORD_BITS) -> Accumulator:
        """Load an accumulator from the byte form produced by to_bytes().

        Both full-word and compact (trailing zeros stripped) input is accepted.

        Args:
            data: Serialized accumulator
            word_bits: Width of each word in bits

        Returns:
            Accumulator holding the decoded value
        """
        accum = cls(word_bits)
        word_bytes = word_bits // 8
        for start in range(0, len(data), word_bytes):
            accum._words.append(int.from_bytes(data[start : start + word_bytes], "little"))
        accum._trim()
        return accum

    @property
    def word_bits(self) -> int:
        """Width of each word in bits."""
        return self._word_bits

    @property
    def words(self) -> tuple[int, ...]:
        """Word values, least significant first."""
        return tuple(self._words)

    def is_zero(self) -> bool:
        """Return True if the accumulator holds zero."""
        return not self._words

    def bit_length(self) -> int:
        """Return the number of bits needed to represent the value.

        Returns:
            Bit length (0 for zero)
        """
        if not self._words:
            return 0
        return (len(self._words) - 1) * self._word_bits + self._words[-1].bit_length()

    def copy(self) -> Accumulator:
        """Return an independent accumulator holding the same value."""
        clone = type(self)(self._word_bits)
        clone._words = list(self._words)
        return clone

    def _check_word(self, value: int, name: str) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise AccumulatorError(f"{name} must be an int, got {type(value).__name__}")
        if value < 0 or value > self._mask:
            raise AccumulatorError(
                f"{name} {value} does not fit in a {self._word_bits}-bit word"
            )

    def _check_shift(self, shift: int) -> None:
        if not isinstance(shift, int) or shift < 0 or shift > self._word_bits:
            raise AccumulatorError(f"shift must be 0-{self._word_bits}, got {shift}")

    def _trim(self) -> None:
        words = self._words
        while words and words[-1] == 0:
            words.pop()

    def _add_at_place(self, value: int, place: int) -> None:
        """Add value scaled by base**place, rippling the carry upward.

        This is the only method that grows the word list.

        Args:
            value: Word to add (0 is a no-op)
            place: Word index at which value is added
        """
        if value == 0:
            return

        words = self._words
        # Extend with zero words until place is reachable
        while len(words) < place:
            words.append(0)

        carry = value
        index = place
        while carry:
            if index == len(words):
                words.append(carry)
                return
            total = words[index] + carry
            words[index] = total & self._mask
            carry = total >> self._word_bits
            index += 1

    def add(self, value: int) -> None:
        """Add a single word at the least significant position.

        Args:
            value: Word to add

        Raises:
            AccumulatorError: If value does not fit in a word
        """
        self._check_word(value, "value")
        self._add_at_place(value, 0)

    def mul(self, value: int) -> None:
        """Multiply the whole number by a single word.

        Words are processed from most to least significant. The high half of
        each product is folded into the next word up, which has already been
        multiplied, so no unprocessed word is ever overwritten.

        Args:
            value: Word multiplier

        Raises:
            AccumulatorError: If value does not fit in a word
        """
        self._check_word(value, "value")

        words = self._words
        for index in range(len(words) - 1, -1, -1):
            product = words[index] * value
            self._add_at_place(product >> self._word_bits, index + 1)
            words[index] = product & self._mask

        # Only a zero multiplier can leave zero words on top
        self._trim()

    def div(self, value: int) -> int:
        """Divide the whole number by a single word, in place.

        Long division from the most significant word down. The running
        remainder is always below the divisor, so it forms the high half of
        the next double-width dividend without overflowing.

        Args:
            value: Word divisor (must be non-zero)

        Returns:
            Remainder of the division

        Raises:
            AccumulatorError: If value is zero or does not fit in a word
        """
        self._check_word(value, "divisor")
        if value == 0:
            raise AccumulatorError("Division by zero")

        words = self._words
        remainder = 0
        for index in range(len(words) - 1, -1, -1):
            dividend = (remainder << self._word_bits) | words[index]
            words[index], remainder = divmod(dividend, value)

        self._trim()
        return remainder

    def shl(self, shift: int) -> None:
        """Multiply by 2**shift.

        Args:
            shift: Number of bits to shift (0 to word_bits inclusive)

        Raises:
            AccumulatorError: If shift is outside 0..word_bits
        """
        self._check_shift(shift)

        words = self._words
        carry = 0
        for index in range(len(words)):
            wide = (words[index] << shift) | carry
            words[index] = wide & self._mask
            carry = wide >> self._word_bits

        if carry:
            words.append(carry)

    def shr(self, shift: int) -> int:
        """Divide by 2**shift, returning the bits shifted out.

        Args:
            shift: Number of bits to shift (0 to word_bits inclusive)

        Returns:
            The low ``shift`` bits of the original value

        Raises:
            AccumulatorError: If shift is outside 0..word_bits
        """
        self._check_shift(shift)

        words = self._words
        low_mask = (1 << shift) - 1
        carry = 0
        for index in range(len(words) - 1, -1, -1):
            word = words[index]
            wide = (carry << self._word_bits) | word
            words[index] = (wide >> shift) & self._mask
            carry = word & low_mask

        self._trim()
        return carry

    def to_bytes(self, compact: bool = False) -> bytes:
        """Serialize the accumulator.

        Words are written least significant first, each as ``word_bits // 8``
        little-endian bytes.

        Args:
            compact: If True, strip trailing zero bytes

        Returns:
            Serialized accumulator
        """
        word_bytes = self._word_bits // 8
        data = b"".join(word.to_bytes(word_bytes, "little") for word in self._words)
        if compact:
            return data.rstrip(b"\x00")
        return data

    def to_hex_str(self) -> str:
        """Render the words as fixed-width hex, most significant first.

        Returns:
            Space-separated hex words ('' for zero)
        """
        width = self._word_bits // 4
        return " ".join(f"{word:0{width}x}" for word in reversed(self._words))

    def __str__(self) -> str:
        return self.to_hex_str()

    def __repr__(self) -> str:
        return f"Accumulator({self.to_hex_str()!r}, word_bits={self._word_bits})"

    def __len__(self) -> int:
        return len(self._words)

    def __int__(self) -> int:
        value = 0
        for word in reversed(self._words):
            value = (value << self._word_bits) | word
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Accumulator):
            return NotImplemented
        return self._word_bits == other._word_bits and self._words == other._words
