"""Field type helpers and utilities.

This module provides convenience functions for declaring record fields
whose packed form is inferred by ``radixpack.codec.schema``.
"""

from __future__ import annotations

from typing import Any, Iterable, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.schema import Packed
from ..exceptions import SchemaError


def BoundedInt(*, ge: int, le: int, **kwargs: Any) -> FieldInfo:
    """Create a bounded integer field, packed as an IntRange.

    The range must hold at least two values (``ge < le``); a field with a
    single possible value carries no information and is rejected when the
    record schema is built.

    Args:
        ge: Minimum value (inclusive)
        le: Maximum value (inclusive)
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Record(BaseRecord):
        ...     depth_cm: int = BoundedInt(ge=0, le=10000)
    """
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


def BoundedFloat(*, min: float, max: float, decimals: int = 8, **kwargs: Any) -> FieldInfo:
    """Create a bounded float field, packed as a FixedPointRange.

    The value is stored in steps of ``2**-decimals``, truncated toward zero:

    - scaled = trunc(value * 2**decimals)
    - packed as an offset from trunc(min * 2**decimals)

    Args:
        min: Minimum value (inclusive)
        max: Maximum value (inclusive)
        decimals: Number of binary fraction bits (0-62), default 8
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Examples:
        >>> class Record(BaseRecord):
        ...     # -5 m to 100 m in 1/128 m steps: 13441 values
        ...     depth: float = BoundedFloat(min=-5.0, max=100.0, decimals=7)

    Raises:
        SchemaError: If decimals is out of range
    """
    if not isinstance(decimals, int) or not 0 <= decimals <= 62:
        raise SchemaError(f"decimals must be 0-62, got {decimals}")

    return cast(
        FieldInfo, Field(ge=min, le=max, json_schema_extra={"decimals": decimals}, **kwargs)
    )


def OneOf(options: Iterable[str], **kwargs: Any) -> FieldInfo:
    """Create a string field restricted to a fixed list of options.

    Args:
        options: Allowed strings; the packed code is the position in this list
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Record(BaseRecord):
        ...     phase: str = OneOf(["startup", "transit", "survey"])
    """
    return cast(FieldInfo, Field(json_schema_extra={"options": list(options)}, **kwargs))


def CharString(*, alphabet: str, max_length: int, fixed: bool = False, **kwargs: Any) -> FieldInfo:
    """Create a string field whose characters come from a finite alphabet.

    Each character is packed as one CharSet digit. A variable-length string
    carries an end marker, a fixed-length string does not.

    Args:
        alphabet: Allowed characters, in code order
        max_length: Maximum (or, when fixed, exact) number of characters
        fixed: If True, every value has exactly max_length characters
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Record(BaseRecord):
        ...     callsign: str = CharString(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789",
        ...                                max_length=8)
    """
    min_length = max_length if fixed else None
    return cast(
        FieldInfo,
        Field(
            min_length=min_length,
            max_length=max_length,
            json_schema_extra={"alphabet": alphabet, "fixed": fixed},
            **kwargs,
        ),
    )

