"""Pydantic record modeling for radixpack.

This module provides the BaseRecord class and field utilities for defining
records that pack into a single mixed-radix integer.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import BoundedFloat, BoundedInt, CharString, OneOf, Packed

__all__ = [
    "BaseRecord",
    "BoundedInt",
    "BoundedFloat",
    "CharString",
    "OneOf",
    "Packed",
]
