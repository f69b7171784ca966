"""Type descriptors and the closed set of conversion categories.

WHY: Python has one int, one float and no character type, but document
conversion cares about width and signedness ("does 300 fit a uint8?").
Descriptors spell out exactly which host type a caller is asking for.
Plain Python hints (``int``, ``list[str]``, ``tuple[int, str]``) remain
usable for the common cases; the registry maps both forms onto the same
categories.

HOW: One frozen dataclass per scalar/leaf category, plus parameterised
container descriptors whose element types may themselves be descriptors
or hints. Canonical instances (INT32, FLOAT64, ...) cover the usual
widths.

RULES:
- Descriptors are frozen and hashable
- IntType.bits in {8, 16, 32, 64}; FloatType.bits in {32, 64};
  CharType.bits in {8, 16, 32}
- Container element types are resolved by the registry, not here
- Category has exactly fourteen members; adding one means adding a
  registry rule
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

_INT_WIDTHS = (8, 16, 32, 64)
_FLOAT_WIDTHS = (32, 64)
_CHAR_WIDTHS = (8, 16, 32)


class Category(str, enum.Enum):
    """Closed, mutually exclusive classification of convertible types."""

    BOOLEAN = "boolean"
    SIGNED_INTEGER = "signed_integer"
    UNSIGNED_INTEGER = "unsigned_integer"
    FLOATING_POINT = "floating_point"
    CHARACTER_UNIT = "character_unit"
    STRING = "string"
    NULL = "null"
    NODE = "node"
    SEQUENCE = "sequence"
    FIXED_ARRAY = "fixed_array"
    PAIR = "pair"
    MAPPING = "mapping"
    BINARY = "binary"
    ENCODE_ONLY_TEXT = "encode_only_text"


@dataclass(frozen=True)
class BoolType:
    pass


@dataclass(frozen=True)
class IntType:
    """A fixed-width integer.

    ``min_value``/``max_value`` give the representable range.
    """

    bits: int = 64
    signed: bool = True

    def __post_init__(self) -> None:
        if self.bits not in _INT_WIDTHS:
            raise ValueError(f"integer width must be one of {_INT_WIDTHS}, got {self.bits}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatType:
    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits not in _FLOAT_WIDTHS:
            raise ValueError(f"float width must be one of {_FLOAT_WIDTHS}, got {self.bits}")


@dataclass(frozen=True)
class CharType:
    """A single code unit of UTF-8 (8), UTF-16 (16) or UTF-32 (32)."""

    bits: int = 32

    def __post_init__(self) -> None:
        if self.bits not in _CHAR_WIDTHS:
            raise ValueError(f"character width must be one of {_CHAR_WIDTHS}, got {self.bits}")


@dataclass(frozen=True)
class StringType:
    pass


@dataclass(frozen=True)
class NullType:
    pass


@dataclass(frozen=True)
class NodeValueType:
    """The Node itself; decoding shares the source tree."""


@dataclass(frozen=True)
class BinaryType:
    pass


@dataclass(frozen=True)
class TextLiteralType:
    """Fixed text that can be encoded but never decoded into."""


@dataclass(frozen=True)
class SeqType:
    """A growable sequence; ``container`` must support clear() and append()."""

    element: Any
    container: Callable[[], Any] = list


@dataclass(frozen=True)
class ArrayType:
    """A sequence of exactly ``size`` elements, decoded into a list."""

    element: Any
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"array size must be non-negative, got {self.size}")


@dataclass(frozen=True)
class PairType:
    first: Any
    second: Any


@dataclass(frozen=True)
class MapType:
    """A keyed association; ``container`` must support clear() and item assignment."""

    key: Any
    value: Any
    container: Callable[[], Any] = dict


BOOL = BoolType()
INT8 = IntType(8, signed=True)
INT16 = IntType(16, signed=True)
INT32 = IntType(32, signed=True)
INT64 = IntType(64, signed=True)
UINT8 = IntType(8, signed=False)
UINT16 = IntType(16, signed=False)
UINT32 = IntType(32, signed=False)
UINT64 = IntType(64, signed=False)
FLOAT32 = FloatType(32)
FLOAT64 = FloatType(64)
CHAR8 = CharType(8)
CHAR16 = CharType(16)
CHAR32 = CharType(32)
STRING = StringType()
NULL = NullType()
NODE = NodeValueType()
BINARY = BinaryType()
TEXT_LITERAL = TextLiteralType()
