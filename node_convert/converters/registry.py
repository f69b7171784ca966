"""Conversion registry — classify a requested type and hand back its converter.

WHY: Callers say "decode this node as T". Exactly one conversion
strategy must apply to T; if two could, results would depend on rule
order, and if none can, the caller made a programming mistake that
should surface before any data is touched.

HOW: RULES is a closed tuple with one (category, predicate, factory)
per Category. converter() runs every predicate: zero matches raises
UnsupportedTypeError, more than one raises OverlappingCategoryError.
The factory normalises Python hints to descriptors (``int`` → INT64,
``list[str]`` → SeqType(str)) and builds the converter; container
factories re-enter the registry for their element types, so the whole
type tree is checked when the converter is built. At construction the
registry runs all rules against a probe set and fails fast on overlap.

RULES:
- One rule per category; probes must each match exactly one rule
- ``bool`` is not an integer here, even though Python says it is
- Encode-only types raise UnsupportedTypeError from decode(), before
  the node is read
- decode() returns Decoded and never raises for bad data
- as_value() raises ConversionError on failure unless given a fallback
"""

from __future__ import annotations

import collections
import logging
import typing
from typing import Any, Callable, List, NamedTuple, Optional

from node_convert.converters.base import BaseConverter, Decoded
from node_convert.converters.binary import Base64Codec, BinaryConverter
from node_convert.converters.containers import (
    ArrayConverter,
    MapConverter,
    PairConverter,
    SequenceConverter,
)
from node_convert.converters.scalars import (
    BoolConverter,
    CharConverter,
    FloatConverter,
    NodeConverter,
    NullConverter,
    SignedIntegerConverter,
    StringConverter,
    TextLiteralConverter,
    UnsignedIntegerConverter,
)
from node_convert.core import types as t
from node_convert.core.errors import (
    ConversionError,
    OverlappingCategoryError,
    UnsupportedTypeError,
)
from node_convert.core.node import Node
from node_convert.core.types import Category

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS = (list, collections.deque)
_MAPPING_ORIGINS = (dict, collections.OrderedDict)


# ---------------------------------------------------------------------------
# Category predicates
# ---------------------------------------------------------------------------


def _hint_args(type_: Any, origins: tuple) -> Optional[tuple]:
    """Arguments of a parameterised hint whose origin is in ``origins``."""
    if typing.get_origin(type_) in origins:
        return typing.get_args(type_)
    return None


def _is_sequence(type_: Any) -> bool:
    if isinstance(type_, t.SeqType):
        return True
    args = _hint_args(type_, _SEQUENCE_ORIGINS)
    return args is not None and len(args) == 1


def _is_pair(type_: Any) -> bool:
    if isinstance(type_, t.PairType):
        return True
    args = _hint_args(type_, (tuple,))
    return args is not None and len(args) == 2 and args[1] is not Ellipsis


def _is_mapping(type_: Any) -> bool:
    if isinstance(type_, t.MapType):
        return True
    args = _hint_args(type_, _MAPPING_ORIGINS)
    return args is not None and len(args) == 2


def _is_text_literal(type_: Any) -> bool:
    if isinstance(type_, t.TextLiteralType):
        return True
    args = _hint_args(type_, (typing.Literal,))
    return bool(args) and all(isinstance(arg, str) for arg in args)


# ---------------------------------------------------------------------------
# Factories (hint → descriptor → converter)
# ---------------------------------------------------------------------------


def _sequence_type(type_: Any) -> t.SeqType:
    if isinstance(type_, t.SeqType):
        return type_
    (element,) = typing.get_args(type_)
    return t.SeqType(element, container=typing.get_origin(type_))


def _pair_type(type_: Any) -> t.PairType:
    if isinstance(type_, t.PairType):
        return type_
    return t.PairType(*typing.get_args(type_))


def _mapping_type(type_: Any) -> t.MapType:
    if isinstance(type_, t.MapType):
        return type_
    key, value = typing.get_args(type_)
    return t.MapType(key, value, container=typing.get_origin(type_))


class _Rule(NamedTuple):
    category: Category
    matches: Callable[[Any], bool]
    build: Callable[["ConversionRegistry", Any], BaseConverter]


RULES = (
    _Rule(
        Category.BOOLEAN,
        lambda x: x is bool or isinstance(x, t.BoolType),
        lambda reg, x: BoolConverter(t.BOOL),
    ),
    _Rule(
        Category.SIGNED_INTEGER,
        lambda x: x is int or (isinstance(x, t.IntType) and x.signed),
        lambda reg, x: SignedIntegerConverter(t.INT64 if x is int else x),
    ),
    _Rule(
        Category.UNSIGNED_INTEGER,
        lambda x: isinstance(x, t.IntType) and not x.signed,
        lambda reg, x: UnsignedIntegerConverter(x),
    ),
    _Rule(
        Category.FLOATING_POINT,
        lambda x: x is float or isinstance(x, t.FloatType),
        lambda reg, x: FloatConverter(t.FLOAT64 if x is float else x),
    ),
    _Rule(
        Category.CHARACTER_UNIT,
        lambda x: isinstance(x, t.CharType),
        lambda reg, x: CharConverter(x),
    ),
    _Rule(
        Category.STRING,
        lambda x: x is str or isinstance(x, t.StringType),
        lambda reg, x: StringConverter(t.STRING),
    ),
    _Rule(
        Category.NULL,
        lambda x: x is None or x is type(None) or isinstance(x, t.NullType),
        lambda reg, x: NullConverter(t.NULL),
    ),
    _Rule(
        Category.NODE,
        lambda x: x is Node or isinstance(x, t.NodeValueType),
        lambda reg, x: NodeConverter(t.NODE),
    ),
    _Rule(
        Category.SEQUENCE,
        _is_sequence,
        lambda reg, x: SequenceConverter(_sequence_type(x), reg),
    ),
    _Rule(
        Category.FIXED_ARRAY,
        lambda x: isinstance(x, t.ArrayType),
        lambda reg, x: ArrayConverter(x, reg),
    ),
    _Rule(
        Category.PAIR,
        _is_pair,
        lambda reg, x: PairConverter(_pair_type(x), reg),
    ),
    _Rule(
        Category.MAPPING,
        _is_mapping,
        lambda reg, x: MapConverter(_mapping_type(x), reg),
    ),
    _Rule(
        Category.BINARY,
        lambda x: x is bytes or x is bytearray or isinstance(x, t.BinaryType),
        lambda reg, x: BinaryConverter(t.BINARY, codec=reg.codec),
    ),
    _Rule(
        Category.ENCODE_ONLY_TEXT,
        _is_text_literal,
        lambda reg, x: TextLiteralConverter(t.TEXT_LITERAL),
    ),
)

# Every category must be reached by at least one probe, and no probe
# may be claimed twice.
_PROBES: List[Any] = [
    bool, int, float, str, bytes, bytearray, None, type(None), Node,
    typing.List[int], typing.Deque[str], typing.Tuple[int, str],
    typing.Dict[str, int], typing.OrderedDict[str, float],
    typing.Literal["text"],
    t.BOOL, t.INT8, t.INT16, t.INT32, t.INT64,
    t.UINT8, t.UINT16, t.UINT32, t.UINT64,
    t.FLOAT32, t.FLOAT64, t.CHAR8, t.CHAR16, t.CHAR32,
    t.STRING, t.NULL, t.NODE, t.BINARY, t.TEXT_LITERAL,
    t.SeqType(t.INT32), t.ArrayType(t.INT32, 3),
    t.PairType(t.INT32, t.STRING), t.MapType(t.STRING, t.INT32),
]


class ConversionRegistry:
    """Closed dispatch from requested types to converters.

    Args:
        codec: Base64 capability handed to binary converters; the
               standard-library codec when omitted.

    Raises:
        OverlappingCategoryError: If the rule set is not a partition
            of the probe types.
    """

    rules = RULES

    def __init__(self, codec: Optional[Base64Codec] = None) -> None:
        self.codec = codec
        self._check_rules()

    def _check_rules(self) -> None:
        categories = [rule.category for rule in self.rules]
        if sorted(categories) != sorted(Category):
            raise OverlappingCategoryError(
                "rule set must have exactly one rule per category"
            )
        reached = set()
        for probe in _PROBES:
            try:
                reached.add(self._match(probe).category)
            except UnsupportedTypeError:
                raise OverlappingCategoryError(
                    f"probe type {probe!r} matches no category"
                ) from None
        unreached = set(Category) - reached
        if unreached:
            raise OverlappingCategoryError(
                f"categories without a probe: {sorted(c.value for c in unreached)}"
            )
        logger.debug("Checked %d conversion rules against %d probe types",
                     len(self.rules), len(_PROBES))

    def _match(self, type_: Any) -> _Rule:
        matches = [rule for rule in self.rules if rule.matches(type_)]
        if not matches:
            raise UnsupportedTypeError(f"no conversion for type {type_!r}")
        if len(matches) > 1:
            names = ", ".join(rule.category.value for rule in matches)
            raise OverlappingCategoryError(f"type {type_!r} matches {names}")
        return matches[0]

    def classify(self, type_: Any) -> Category:
        """The single category ``type_`` belongs to."""
        return self._match(type_).category

    def converter(self, type_: Any) -> BaseConverter:
        """Build the converter for ``type_`` (and, recursively, its parts)."""
        return self._match(type_).build(self, type_)

    def encode(self, value: Any, type_: Any) -> Node:
        return self.converter(type_).encode(value)

    def decode(self, node: Node, type_: Any, out: Any = None) -> Decoded:
        """Decode ``node`` as ``type_``, optionally into ``out``.

        Raises:
            UnsupportedTypeError: If ``type_`` cannot be decoded at all.
        """
        converter = self.converter(type_)
        if not converter.decodable:
            raise UnsupportedTypeError(f"{type_!r} can only be encoded")
        return converter.decode(node, out)

    def as_value(self, node: Node, type_: Any, *fallback: Any) -> Any:
        """Decode ``node`` as ``type_``, raising instead of returning a result.

        Args:
            node: The node to read.
            type_: Requested type (descriptor or Python hint).
            fallback: Optional single value returned when decoding fails.

        Raises:
            ConversionError: If decoding fails and no fallback was given.
        """
        if len(fallback) > 1:
            raise TypeError("as_value() takes at most one fallback value")
        result = self.decode(node, type_)
        if result:
            return result.value
        if fallback:
            return fallback[0]
        raise ConversionError(type_, result.error)


DEFAULT_REGISTRY = ConversionRegistry()


def classify(type_: Any) -> Category:
    return DEFAULT_REGISTRY.classify(type_)


def encode(value: Any, type_: Any) -> Node:
    return DEFAULT_REGISTRY.encode(value, type_)


def decode(node: Node, type_: Any, out: Any = None) -> Decoded:
    return DEFAULT_REGISTRY.decode(node, type_, out)


def as_value(node: Node, type_: Any, *fallback: Any) -> Any:
    return DEFAULT_REGISTRY.as_value(node, type_, *fallback)
