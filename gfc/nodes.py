"""Typed field containers for LST documents."""

from __future__ import annotations

import math
import struct
from enum import Enum
from typing import Annotated, Iterator

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def to_float32(value: float) -> float:
    """Round ``value`` to the nearest IEEE-754 single precision float."""
    try:
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            return value
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"{value!r} is out of range for a 32-bit float") from exc


Int32 = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]
Float32 = Annotated[StrictFloat | StrictInt, AfterValidator(to_float32)]


class FieldType(Enum):
    STRING = "str"
    INTEGER = "int"
    FLOAT = "flt"
    LONG = "lng"
    BOOLEAN = "bol"

    @classmethod
    def from_tag(cls, tag: str) -> "FieldType | None":
        if tag == "dbl":
            return cls.FLOAT
        for field_type in cls:
            if field_type.value == tag:
                return field_type
        return None

    @property
    def tag(self) -> str:
        return self.value


class FieldNotFound(KeyError):
    def __init__(self, class_name: str, field_name: str, expected_type: FieldType):
        self.class_name = class_name
        self.field_name = field_name
        self.expected_type = expected_type
        super().__init__(class_name, field_name, expected_type)

    def __str__(self) -> str:
        return f"No {self.expected_type.tag} field '{self.field_name}' in class '{self.class_name}'"


class TypedValue(BaseModel):
    type: FieldType
    value: StrictStr | StrictBool | StrictInt | float


class LSTClass(BaseModel):
    """A named class with one field mapping per supported type.

    The same field name may appear in more than one mapping; ``collisions``
    reports those names instead of picking a winner.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: StrictStr
    strings: dict[str, StrictStr] = Field(default_factory=dict)
    integers: dict[str, Int32] = Field(default_factory=dict)
    floats: dict[str, Float32] = Field(default_factory=dict)
    longs: dict[str, Int64] = Field(default_factory=dict)
    booleans: dict[str, StrictBool] = Field(default_factory=dict)

    def mapping(self, field_type: FieldType) -> dict:
        match field_type:
            case FieldType.STRING:
                return self.strings
            case FieldType.INTEGER:
                return self.integers
            case FieldType.FLOAT:
                return self.floats
            case FieldType.LONG:
                return self.longs
            case FieldType.BOOLEAN:
                return self.booleans
        raise ValueError(f"Unknown field type {field_type}")

    def get(self, field_name: str, field_type: FieldType):
        values = self.mapping(field_type)
        if field_name not in values:
            raise FieldNotFound(self.name, field_name, field_type)
        return values[field_name]

    def get_string(self, field_name: str) -> str:
        return self.get(field_name, FieldType.STRING)

    def get_integer(self, field_name: str) -> int:
        return self.get(field_name, FieldType.INTEGER)

    def get_float(self, field_name: str) -> float:
        return self.get(field_name, FieldType.FLOAT)

    def get_long(self, field_name: str) -> int:
        return self.get(field_name, FieldType.LONG)

    def get_boolean(self, field_name: str) -> bool:
        return self.get(field_name, FieldType.BOOLEAN)

    def fields(self) -> Iterator[tuple[str, TypedValue]]:
        for field_type in FieldType:
            for field_name, value in self.mapping(field_type).items():
                yield field_name, TypedValue(type=field_type, value=value)

    def collisions(self) -> dict[str, list[FieldType]]:
        seen: dict[str, list[FieldType]] = {}
        for field_type in FieldType:
            for field_name in self.mapping(field_type):
                seen.setdefault(field_name, []).append(field_type)
        return {field_name: types for field_name, types in seen.items() if len(types) > 1}
