"""Unit tests for the conversion registry.

WHY: The registry is the only place that decides which conversion
applies to a type. Overlapping or missing rules must fail when the
registry is built, not halfway through reading a document.

HOW: Tests classify every supported kind of type, check that unknown
types are rejected before any node is read, build registries with
broken rule sets, and exercise the raising accessors.

RULES:
- Broken rule sets are built by subclassing, never by mutating RULES.
"""

import logging
from typing import Deque, Dict, List, Literal, OrderedDict, Set, Tuple

import pytest

from node_convert import ConversionError, as_value, classify
from node_convert.converters.registry import RULES, ConversionRegistry, decode, encode
from node_convert.core import types as t
from node_convert.core.errors import DecodeError, OverlappingCategoryError, UnsupportedTypeError
from node_convert.core.node import Node
from node_convert.core.types import Category

from conftest import seq_node


class TestClassify:
    """Every supported type lands in exactly one category."""

    @pytest.mark.parametrize("type_,category", [
        (bool, Category.BOOLEAN),
        (t.BOOL, Category.BOOLEAN),
        (int, Category.SIGNED_INTEGER),
        (t.INT8, Category.SIGNED_INTEGER),
        (t.UINT32, Category.UNSIGNED_INTEGER),
        (float, Category.FLOATING_POINT),
        (t.FLOAT32, Category.FLOATING_POINT),
        (t.CHAR16, Category.CHARACTER_UNIT),
        (str, Category.STRING),
        (None, Category.NULL),
        (type(None), Category.NULL),
        (Node, Category.NODE),
        (List[int], Category.SEQUENCE),
        (Deque[str], Category.SEQUENCE),
        (t.ArrayType(t.INT8, 2), Category.FIXED_ARRAY),
        (Tuple[int, str], Category.PAIR),
        (Dict[str, int], Category.MAPPING),
        (OrderedDict[str, int], Category.MAPPING),
        (bytes, Category.BINARY),
        (bytearray, Category.BINARY),
        (Literal["a", "b"], Category.ENCODE_ONLY_TEXT),
    ])
    def test_category(self, type_, category):
        assert classify(type_) is category

    def test_bool_is_not_an_integer(self, registry):
        assert registry.classify(bool) is Category.BOOLEAN
        assert not registry.decode(Node("1"), bool)

    @pytest.mark.parametrize("type_", [
        Set[int], Tuple[int, ...], Tuple[int, int, int], list, dict, complex, Literal[1], object,
    ])
    def test_unsupported(self, registry, type_):
        with pytest.raises(UnsupportedTypeError):
            registry.classify(type_)

    def test_unsupported_element_found_when_built(self, registry):
        assert registry.classify(List[complex]) is Category.SEQUENCE
        with pytest.raises(UnsupportedTypeError):
            registry.converter(List[complex])

    def test_unsupported_type_raises_before_reading(self, registry):
        with pytest.raises(UnsupportedTypeError):
            registry.decode(Node("1"), complex)


class TestRuleChecks:
    """Broken rule sets fail when the registry is constructed."""

    def test_default_rules_are_a_partition(self):
        assert len(RULES) == len(Category)
        ConversionRegistry()

    def test_overlapping_rules_rejected(self):
        def widen(rule):
            if rule.category is Category.STRING:
                return rule._replace(matches=lambda x: x is str or x is int)
            return rule

        class Overlapping(ConversionRegistry):
            rules = tuple(widen(rule) for rule in RULES)

        with pytest.raises(OverlappingCategoryError):
            Overlapping()

    def test_unreachable_rule_rejected(self):
        def narrow(rule):
            if rule.category is Category.CHARACTER_UNIT:
                return rule._replace(matches=lambda x: False)
            return rule

        class Unreachable(ConversionRegistry):
            rules = tuple(narrow(rule) for rule in RULES)

        with pytest.raises(OverlappingCategoryError):
            Unreachable()

    def test_missing_category_rejected(self):
        class Missing(ConversionRegistry):
            rules = tuple(rule for rule in RULES if rule.category is not Category.PAIR)

        with pytest.raises(OverlappingCategoryError):
            Missing()

    def test_overlap_error_is_not_unsupported(self):
        assert not issubclass(OverlappingCategoryError, UnsupportedTypeError)


class TestEncodeOnly:
    """Encode-only types, alone or nested, refuse to decode."""

    def test_nested_literal_encodes(self):
        assert encode(["x", "y"], List[Literal["x", "y"]]) == seq_node("x", "y")

    def test_nested_literal_decode_raises(self):
        with pytest.raises(UnsupportedTypeError):
            decode(seq_node("x"), List[Literal["x"]])

    def test_literal_map_value_decode_raises(self, registry):
        with pytest.raises(UnsupportedTypeError):
            registry.decode(Node(), Dict[str, Literal["x"]])


class TestAsValue:
    """as_value raises ConversionError unless a fallback is given."""

    def test_success(self):
        assert as_value(Node("0x10"), t.UINT8) == 16

    def test_failure_raises(self):
        with pytest.raises(ConversionError) as excinfo:
            as_value(Node("abc"), int)
        assert excinfo.value.reason is DecodeError.LEXICAL_MISMATCH
        assert excinfo.value.type is int
        assert "lexical_mismatch" in str(excinfo.value)

    def test_conversion_error_is_value_error(self):
        with pytest.raises(ValueError):
            as_value(Node(), str)

    def test_fallback(self):
        assert as_value(Node("abc"), int, -1) == -1

    def test_none_is_a_valid_fallback(self):
        assert as_value(Node("abc"), int, None) is None

    def test_fallback_unused_on_success(self):
        assert as_value(Node("5"), int, -1) == 5

    def test_too_many_fallbacks(self):
        with pytest.raises(TypeError):
            as_value(Node("5"), int, 1, 2)

    def test_node_accessor(self, str_int_map):
        assert str_int_map.as_(Dict[str, int]) == {"a": 1, "b": 2}
        assert str_int_map["a"].as_(float) == 1.0
        assert str_int_map.as_(List[int], []) == []


class TestLogging:
    """Decode failures are logged at DEBUG on the converter logger."""

    def test_failure_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="node_convert.converters.base")
        decode(Node("abc"), t.INT32)
        assert "Cannot decode signed_integer from scalar node: lexical_mismatch" in caplog.text

    def test_success_not_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="node_convert.converters.base")
        decode(Node("12"), t.INT32)
        assert "Cannot decode" not in caplog.text
