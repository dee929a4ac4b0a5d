"""Utility functions for radixpack.

This module provides record size calculation.
"""

from __future__ import annotations

from .sizing import encoded_bits, encoded_size, field_capacities

__all__ = [
    "encoded_size",
    "encoded_bits",
    "field_capacities",
]
