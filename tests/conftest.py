"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from radixpack import Accumulator


@pytest.fixture
def accum() -> Accumulator:
    """Empty accumulator with the default 64-bit words."""
    return Accumulator()


@pytest.fixture
def accum32() -> Accumulator:
    """Empty accumulator with 32-bit words, for legible hex output."""
    return Accumulator(word_bits=32)
