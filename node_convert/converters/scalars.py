"""Scalar converters: booleans, integers, floats, characters, strings, null.

WHY: A scalar node is only text. Whether "0x1F" is the integer 31, or
"1." is a float rather than an int, is decided here, by the type the
caller asked for. These grammars are the part of the conversion layer
that must stay stable: documents written today must read back tomorrow.

HOW: Precompiled regexes recognise each lexical form (full match only).
Integers parse into a 64-bit intermediate of the target's signedness,
then get range-checked against the target width. Floats parse through
Decimal (exact) and are narrowed to the target width. Encoding picks
the shortest text that reads back as the same value.

RULES:
- Booleans: true/True/TRUE and false/False/FALSE only; encode lowercase
- Integers: decimal with optional sign, then 0o octal, then 0x hex;
  encode is plain decimal
- Floats: [-+]?(.d+|d+(.d*)?)([eE][-+]?d+)?, [-+]?.inf (3 spellings),
  .nan (3 spellings); encode NaN as .nan, infinities as .inf / -.inf
- Integer-looking float text gets a trailing "." on encode
- Characters: exactly one code unit of the target width
- Strings are copied verbatim; null decodes only from a null node
- The Node category shares the source tree instead of copying it
"""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from node_convert.converters.base import BaseConverter, Decoded
from node_convert.core.errors import DecodeError, UnsupportedTypeError
from node_convert.core.node import Node
from node_convert.core.types import INT64, UINT64, Category, IntType

_TRUE_RE = re.compile(r"true|True|TRUE")
_FALSE_RE = re.compile(r"false|False|FALSE")
_DECIMAL_RE = re.compile(r"[-+]?[0-9]+")
_OCTAL_RE = re.compile(r"0o[0-7]+")
_HEX_RE = re.compile(r"0x[0-9a-fA-F]+")
_FLOAT_RE = re.compile(r"[-+]?(\.[0-9]+|[0-9]+(\.[0-9]*)?)([eE][-+]?[0-9]+)?")
_INF_RE = re.compile(r"[-+]?(\.inf|\.Inf|\.INF)")
_NAN_RE = re.compile(r"\.nan|\.NaN|\.NAN")
_NONZERO_DIGIT_RE = re.compile(r"[1-9]")

# Significant decimal digits that always round-trip (max_digits10).
_MAX_FLOAT_DIGITS = {32: 9, 64: 17}

# Decimal digits in the largest 64-bit value (2**64 - 1).
_MAX_INT_DIGITS = 20
_PAST_INT_RANGE = 10 ** _MAX_INT_DIGITS

_CODE_UNIT_CODECS = {8: "utf-8", 16: "utf-16-le", 32: "utf-32-le"}


# ---------------------------------------------------------------------------
# Lexical helpers
# ---------------------------------------------------------------------------


def parse_integer(text: str) -> Optional[int]:
    """Parse decimal, 0o-octal or 0x-hex integer text; None if none match.

    Decimal text with more significant digits than any 64-bit value is
    returned as a signed value just past that range, without converting
    the whole text.
    """
    if _DECIMAL_RE.fullmatch(text):
        sign = "-" if text.startswith("-") else ""
        significant = text.lstrip("+-").lstrip("0")
        if len(significant) > _MAX_INT_DIGITS:
            return -_PAST_INT_RANGE if sign else _PAST_INT_RANGE
        return int(sign + (significant or "0"), 10)
    if _OCTAL_RE.fullmatch(text):
        return int(text[2:], 8)
    if _HEX_RE.fullmatch(text):
        return int(text[2:], 16)
    return None


def narrow_float(value: float, bits: int) -> float:
    """Round a float to the given width.

    Raises:
        OverflowError: If a finite value does not fit a 32-bit float.
    """
    if bits == 64:
        return value
    return struct.unpack("<f", struct.pack("<f", value))[0]


def format_float(value: float, bits: int = 64) -> str:
    """Shortest text that reads back as ``value`` at the given width."""
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return "-.inf" if value < 0 else ".inf"
    try:
        value = narrow_float(value, bits)
    except OverflowError:
        return "-.inf" if value < 0 else ".inf"

    if bits == 64:
        text = repr(value)
    else:
        text = repr(float(_shortest_digits(value, bits)))

    if text.endswith(".0"):
        text = text[:-2]
    # Disambiguate float from int
    if _DECIMAL_RE.fullmatch(text):
        text += "."
    return text


def _shortest_digits(value: float, bits: int) -> str:
    limit = _MAX_FLOAT_DIGITS[bits]
    for precision in range(1, limit + 1):
        candidate = "%.*g" % (precision, value)
        try:
            if narrow_float(float(candidate), bits) == value:
                return candidate
        except OverflowError:
            continue
    return "%.*g" % (limit, value)


def code_unit_count(text: str, bits: int) -> int:
    """Number of code units ``text`` occupies in the width's encoding."""
    encoded = text.encode(_CODE_UNIT_CODECS[bits], "surrogatepass")
    return len(encoded) // (bits // 8)


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------


class BoolConverter(BaseConverter):
    category = Category.BOOLEAN

    def encode(self, value: Any) -> Node:
        return Node("true") if value else Node("false")

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        text = node.scalar
        if _TRUE_RE.fullmatch(text):
            return Decoded.success(True)
        if _FALSE_RE.fullmatch(text):
            return Decoded.success(False)
        return self._fail(node, DecodeError.LEXICAL_MISMATCH)


class _IntegerConverter(BaseConverter):
    """Shared integer logic; subclasses fix the intermediate signedness.

    The intermediate is the 64-bit type of matching signedness, so an
    unsigned target rejects negative text even when it would fit after
    wrapping.
    """

    _intermediate: IntType

    def encode(self, value: Any) -> Node:
        return Node(str(int(value)))

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        number = parse_integer(node.scalar)
        if number is None:
            return self._fail(node, DecodeError.LEXICAL_MISMATCH)
        for bounds in (self._intermediate, self.type):
            if not bounds.min_value <= number <= bounds.max_value:
                return self._fail(node, DecodeError.RANGE_OVERFLOW)
        return Decoded.success(number)


class SignedIntegerConverter(_IntegerConverter):
    category = Category.SIGNED_INTEGER
    _intermediate = INT64


class UnsignedIntegerConverter(_IntegerConverter):
    category = Category.UNSIGNED_INTEGER
    _intermediate = UINT64


class FloatConverter(BaseConverter):
    category = Category.FLOATING_POINT

    def encode(self, value: Any) -> Node:
        return Node(format_float(float(value), self.type.bits))

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        text = node.scalar
        match = _FLOAT_RE.fullmatch(text)
        if match:
            try:
                exact = Decimal(text)
            except InvalidOperation:
                # Exponent beyond what Decimal can hold.
                if _NONZERO_DIGIT_RE.search(match.group(1)):
                    return self._fail(node, DecodeError.RANGE_OVERFLOW)
                exact = Decimal(text[:match.start(3)])
            number = float(exact)
            if math.isinf(number):
                return self._fail(node, DecodeError.RANGE_OVERFLOW)
            try:
                number = narrow_float(number, self.type.bits)
            except OverflowError:
                return self._fail(node, DecodeError.RANGE_OVERFLOW)
            # Nonzero text that rounds to zero underflowed the target.
            if number == 0.0 and exact != 0:
                return self._fail(node, DecodeError.RANGE_OVERFLOW)
            return Decoded.success(number)
        if _INF_RE.fullmatch(text):
            return Decoded.success(-math.inf if text.startswith("-") else math.inf)
        if _NAN_RE.fullmatch(text):
            return Decoded.success(math.nan)
        return self._fail(node, DecodeError.LEXICAL_MISMATCH)


class CharConverter(BaseConverter):
    """One code unit as a one-character string.

    Encode also takes an int code point, but decode always returns the
    string, so ``decode(encode(65))`` is ``"A"``.
    """

    category = Category.CHARACTER_UNIT

    def encode(self, value: Any) -> Node:
        return Node(value if isinstance(value, str) else chr(value))

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        text = node.scalar
        if code_unit_count(text, self.type.bits) != 1:
            return self._fail(node, DecodeError.LEXICAL_MISMATCH)
        return Decoded.success(text)


class StringConverter(BaseConverter):
    category = Category.STRING

    def encode(self, value: Any) -> Node:
        return Node(value)

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        return Decoded.success(node.scalar)


class NullConverter(BaseConverter):
    category = Category.NULL

    def encode(self, value: Any = None) -> Node:
        return Node()

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_null:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        return Decoded.success(None)


class NodeConverter(BaseConverter):
    """Node to Node: encode is identity, decode shares the source tree.

    With an ``out`` Node, ``out`` is re-pointed at the source tree.
    """

    category = Category.NODE

    @property
    def hashable(self) -> bool:
        return False

    def encode(self, value: Any) -> Node:
        return value

    def decode(self, node: Node, out: Any = None) -> Decoded:
        target = out if isinstance(out, Node) else Node()
        target.reset(node)
        return Decoded.success(target)


class TextLiteralConverter(BaseConverter):
    category = Category.ENCODE_ONLY_TEXT

    @property
    def decodable(self) -> bool:
        return False

    def encode(self, value: Any) -> Node:
        return Node(value)

    def decode(self, node: Node, out: Any = None) -> Decoded:
        raise UnsupportedTypeError(f"{self.type!r} can only be encoded")
