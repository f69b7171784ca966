"""Unit tests for the binary converter and base64 codecs."""

import pytest

from node_convert.converters.binary import BinaryConverter, StandardBase64Codec
from node_convert.converters.registry import ConversionRegistry, decode, encode
from node_convert.core import types as t
from node_convert.core.errors import DecodeError
from node_convert.core.node import Node

from conftest import seq_node


class ReversingCodec:
    """Toy codec: 'base64' is the reversed hex text."""

    def encode_base64(self, data):
        return data.hex()[::-1]

    def decode_base64(self, text):
        try:
            return bytes.fromhex(text[::-1])
        except ValueError:
            return b""


class TestStandardCodec:

    def test_encode(self):
        assert StandardBase64Codec().encode_base64(b"hello") == "aGVsbG8="

    def test_whitespace_ignored(self):
        assert StandardBase64Codec().decode_base64("aGVs\n bG8=") == b"hello"

    @pytest.mark.parametrize("text", ["!!!!", "aGVsbG8", "a"])
    def test_malformed_is_empty(self, text):
        assert StandardBase64Codec().decode_base64(text) == b""


class TestBinaryConverter:

    def test_encode(self):
        assert encode(b"hello", bytes) == Node("aGVsbG8=")

    def test_encode_empty(self):
        assert encode(b"", t.BINARY) == Node("")

    def test_decode(self):
        result = decode(Node("aGVsbG8="), bytes)
        assert result.ok
        assert result.value == b"hello"

    def test_decode_empty_text(self):
        result = decode(Node(""), bytes)
        assert result.ok
        assert result.value == b""

    @pytest.mark.parametrize("text", ["!!!!", "aGVsbG8"])
    def test_malformed_text_fails(self, text):
        assert decode(Node(text), bytes).error is DecodeError.LEXICAL_MISMATCH

    def test_non_scalar_fails(self):
        assert decode(seq_node("aGVsbG8="), bytes).error is DecodeError.TYPE_MISMATCH

    def test_bytearray_out_filled_in_place(self):
        out = bytearray(b"old contents")
        result = decode(Node("aGVsbG8="), bytearray, out)
        assert result.value is out
        assert out == bytearray(b"hello")

    def test_bytearray_out_untouched_on_failure(self):
        out = bytearray(b"keep")
        assert not decode(Node("!!!!"), bytearray, out)
        assert out == bytearray(b"keep")

    def test_round_trip(self):
        data = bytes(range(256))
        assert decode(encode(data, bytes), bytes).value == data


class TestInjectedCodec:
    """The registry hands its codec to every binary converter."""

    def test_registry_codec_is_used(self):
        registry = ConversionRegistry(codec=ReversingCodec())
        node = registry.encode(b"\x01\xab", bytes)
        assert node.scalar == "ba10"
        assert registry.decode(node, bytes).value == b"\x01\xab"

    def test_nested_binary_uses_codec(self):
        registry = ConversionRegistry(codec=ReversingCodec())
        node = registry.encode([b"\xff"], t.SeqType(t.BINARY))
        assert node[0].scalar == "ff"

    def test_converter_default_codec(self):
        converter = BinaryConverter(t.BINARY)
        assert isinstance(converter.codec, StandardBase64Codec)
