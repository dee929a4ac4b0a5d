"""Schema introspection for Pydantic records.

This module analyzes Pydantic models and resolves each field to the codec
(a FieldSpec or a Sequence) that packs it, together with the conversions
between the model's Python values and the codec's values.
"""

from __future__ import annotations

import enum
import logging
import math
import types
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import EncodeError, SchemaError
from . import fields
from .accumulator import WORD_BITS, Accumulator
from .fields import FieldSpec
from .sequence import Fixed, Sequence, Variable

logger = logging.getLogger(__name__)

Codec = Union[FieldSpec[Any], Sequence[Any]]


@dataclass(frozen=True)
class Packed:
    """Annotation marker attaching an explicit codec to a record field.

    Example:
        >>> class Record(BaseRecord):
        ...     readings: Annotated[list[int], Packed(Sequence.variable(IntRange(0, 99), 16))]
    """

    codec: Codec

    def __post_init__(self) -> None:
        if not isinstance(self.codec, (FieldSpec, Sequence)):
            raise SchemaError(
                f"Packed codec must be a FieldSpec or Sequence, got {type(self.codec).__name__}"
            )


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single record field.

    Attributes:
        name: Field name
        python_type: Python type annotation
        codec: FieldSpec or Sequence that packs the field
        min_value: Minimum value constraint (for numeric types)
        max_value: Maximum value constraint (for numeric types)
        enum_type: Enum class if field is an enum (packed by member name)
        is_str: Whether a Sequence of characters is exposed as a str
    """

    name: str
    python_type: Type[Any]
    codec: Codec
    min_value: Optional[int | float] = None
    max_value: Optional[int | float] = None
    enum_type: Optional[Type[enum.Enum]] = None
    is_str: bool = False

    def capacity(self) -> int:
        """Return the largest factor this field multiplies the accumulator by."""
        return self.codec.capacity()

    def radix(self) -> int:
        """Return the largest single-word multiplier this field pushes."""
        if isinstance(self.codec, Sequence):
            return self.codec.radix
        return self.codec.permutations()

    def bits_required(self) -> int:
        """Return the bits this field needs on its own.

        Packed records share bits between fields, so the sum of these values
        can exceed the record's total_bits().
        """
        return (self.capacity() - 1).bit_length()

    def compress(self, accum: Accumulator, value: Any) -> None:
        """Convert a model value and push it onto the accumulator.

        Raises:
            EncodeError: If the value does not fit the field
        """
        if value is None:
            raise EncodeError("Optional fields are not supported, got None")

        if self.enum_type is not None:
            if not isinstance(value, self.enum_type):
                raise EncodeError(
                    f"Expected {self.enum_type.__name__}, got {type(value).__name__}"
                )
            value = value.name

        self.codec.compress(accum, value)

    def decompress(self, accum: Accumulator) -> Any:
        """Pop the field from the accumulator and convert it to a model value."""
        value = self.codec.decompress(accum)

        if self.enum_type is not None:
            return self.enum_type[value]
        if self.is_str:
            return "".join(value)
        if isinstance(self.codec, fields.FixedPointRange):
            # Truncated bounds can sit up to one step outside ge/le
            if self.min_value is not None and value < self.min_value:
                return float(self.min_value)
            if self.max_value is not None and value > self.max_value:
                return float(self.max_value)
        return value


class RecordSchema:
    """Schema information for an entire record.

    This class introspects a Pydantic model and resolves a codec for each
    field, in declaration order.

    Example:
        >>> schema = RecordSchema.from_model(StatusReport)
        >>> for field in schema.fields:
        ...     print(f"{field.name}: {field.capacity()} permutations")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If a field cannot be packed
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordSchema:
        """Create a schema from a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            RecordSchema instance
        """
        return cls(model_class)

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        word_bits = getattr(self.model_class, "radixpack_word_bits", WORD_BITS)
        for field_name, field_info in self.model_class.model_fields.items():
            field_schema = self._extract_field_schema(field_name, field_info)
            if field_schema.radix() > (1 << word_bits) - 1:
                raise SchemaError(
                    f"Field {field_name}: radix {field_schema.radix()} does not fit in a "
                    f"{word_bits}-bit word (radixpack_word_bits={word_bits})"
                )
            self.fields.append(field_schema)

        logger.debug(
            "Built schema for %s: %d fields, %d bits",
            self.model_class.__name__,
            len(self.fields),
            self.total_bits(),
        )

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Resolve the codec for one field.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with the resolved codec

        Raises:
            SchemaError: If the field type or its constraints cannot be packed
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        origin = get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            raise SchemaError(f"Field {name}: Optional and Union fields are not supported")

        min_value = None
        max_value = None
        max_length = None
        packed = None

        for constraint in field_info.metadata:
            if isinstance(constraint, Packed):
                packed = constraint
            if hasattr(constraint, "ge"):
                min_value = constraint.ge
            if hasattr(constraint, "le"):
                max_value = constraint.le
            if hasattr(constraint, "max_length"):
                max_length = constraint.max_length

        extra = field_info.json_schema_extra
        if not isinstance(extra, dict):
            extra = {}

        try:
            if packed is not None:
                return FieldSchema(
                    name=name,
                    python_type=annotation,
                    codec=packed.codec,
                    is_str=annotation is str and isinstance(packed.codec, Sequence),
                )

            if annotation is bool:
                return FieldSchema(name=name, python_type=bool, codec=fields.Bool())

            if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
                return FieldSchema(
                    name=name,
                    python_type=annotation,
                    codec=fields.Enum([member.name for member in annotation]),
                    enum_type=annotation,
                )

            if origin is Literal:
                return FieldSchema(
                    name=name,
                    python_type=str,
                    codec=fields.Enum(list(get_args(annotation))),
                )

            if annotation is int:
                if min_value is None or max_value is None:
                    raise SchemaError(
                        "integer fields require ge= and le= constraints for packing"
                    )
                if min_value >= max_value:
                    raise SchemaError(
                        f"integer fields require ge < le, got ge={min_value}, le={max_value}"
                    )
                return FieldSchema(
                    name=name,
                    python_type=int,
                    codec=fields.IntRange(int(min_value), int(max_value)),
                    min_value=min_value,
                    max_value=max_value,
                )

            if annotation is float:
                decimals = extra.get("decimals")
                if min_value is None or max_value is None or decimals is None:
                    raise SchemaError(
                        "float fields require BoundedFloat(min=, max=, decimals=) for packing"
                    )
                if not (math.isfinite(min_value) and math.isfinite(max_value)):
                    raise SchemaError("float bounds must be finite")
                return FieldSchema(
                    name=name,
                    python_type=float,
                    codec=fields.FixedPointRange(float(min_value), float(max_value), decimals),
                    min_value=min_value,
                    max_value=max_value,
                )

            if annotation is str:
                if "options" in extra:
                    return FieldSchema(
                        name=name, python_type=str, codec=fields.Enum(extra["options"])
                    )
                if "alphabet" in extra:
                    if max_length is None:
                        raise SchemaError("CharString fields require max_length")
                    length = Fixed(max_length) if extra.get("fixed") else Variable(max_length)
                    return FieldSchema(
                        name=name,
                        python_type=str,
                        codec=Sequence(fields.CharSet(extra["alphabet"]), length),
                        is_str=True,
                    )
                raise SchemaError("str fields require OneOf() or CharString() for packing")
        except SchemaError as err:
            raise SchemaError(f"Field {name}: {err}") from err

        raise SchemaError(
            f"Field {name}: unsupported type {annotation}. "
            f"Supported: bool, bounded int, bounded float, enum, Literal, OneOf/CharString str, "
            f"or an explicit Packed() codec."
        )

    def capacity(self) -> int:
        """Return the number of distinct values the packed record can take.

        Returns:
            Product of every field's capacity
        """
        return math.prod(field.capacity() for field in self.fields)

    def total_bits(self) -> int:
        """Calculate the worst-case bits required for the entire record.

        Returns:
            Total bits required
        """
        return (self.capacity() - 1).bit_length()

    def total_bytes(self) -> int:
        """Calculate the worst-case bytes required (rounded up).

        Returns:
            Total bytes required
        """
        return (self.total_bits() + 7) // 8
