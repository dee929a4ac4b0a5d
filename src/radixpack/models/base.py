"""Base record class and radixpack-specific Pydantic configuration.

This module provides the BaseRecord class that all packed records should
inherit from.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ..codec.accumulator import WORD_BITS
from ..exceptions import SchemaError


class BaseRecord(BaseModel):
    """Base class for all radixpack records.

    Records should inherit from this class and declare bounded fields, either
    with Pydantic's Field() constraints (ge, le) or with the helpers in
    ``radixpack.models.fields``. Fields are packed in declaration order.

    radixpack-specific options can be configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> from pydantic import Field
        >>> class StatusReport(BaseRecord):
        ...     vehicle_id: int = Field(ge=0, le=255)
        ...     battery_pct: int = Field(ge=0, le=100)
        ...     active: bool
        ...
        ...     radixpack_max_bytes: ClassVar[Optional[int]] = 4

    Attributes:
        radixpack_max_bytes: Maximum encoded size in bytes (optional, for validation)
        radixpack_word_bits: Accumulator word width used to pack the record
    """

    model_config = ConfigDict(
        strict=False,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )

    radixpack_max_bytes: ClassVar[int | None] = None
    radixpack_word_bits: ClassVar[int] = WORD_BITS

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate radixpack options when a record class is declared."""
        super().__init_subclass__(**kwargs)

        word_bits = cls.radixpack_word_bits
        if not isinstance(word_bits, int) or word_bits < 8 or word_bits % 8 != 0:
            raise SchemaError(
                f"{cls.__name__}.radixpack_word_bits must be a positive multiple of 8, "
                f"got {word_bits}"
            )

        max_bytes = cls.radixpack_max_bytes
        if max_bytes is not None and (not isinstance(max_bytes, int) or max_bytes < 0):
            raise SchemaError(
                f"{cls.__name__}.radixpack_max_bytes must be a non-negative int, got {max_bytes}"
            )
