"""Binary converter — raw bytes as base64 scalar text.

WHY: Documents carry binary blobs (images, keys, hashes) as base64 text.
The converter wraps and unwraps that text; the actual base64 codec is a
pluggable capability so a document library can supply its own.

HOW: BinaryConverter delegates to a Base64Codec. The default codec uses
the standard-library base64 module and follows the capability contract:
malformed input decodes to empty bytes rather than raising.

RULES:
- Encode: bytes → scalar node holding base64 text ("" for empty bytes)
- Decode requires a scalar node
- Non-empty text that decodes to zero bytes is a failure; this is a
  secondary guard for corrupt input, not a full validation
- Empty text decodes to empty bytes
- With a bytearray ``out``, its contents are replaced on success only
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Optional, Protocol

from node_convert.converters.base import BaseConverter, Decoded
from node_convert.core.errors import DecodeError
from node_convert.core.node import Node
from node_convert.core.types import Category


class Base64Codec(Protocol):
    """The base64 capability the binary converter needs."""

    def encode_base64(self, data: bytes) -> str:
        ...

    def decode_base64(self, text: str) -> bytes:
        ...


class StandardBase64Codec:
    """Base64 via the standard library.

    Whitespace (line breaks in long blobs) is ignored. Anything else
    outside the base64 alphabet, or bad padding, yields ``b""``.
    """

    def encode_base64(self, data: bytes) -> str:
        return base64.b64encode(bytes(data)).decode("ascii")

    def decode_base64(self, text: str) -> bytes:
        compact = "".join(text.split())
        try:
            return base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError):
            return b""


class BinaryConverter(BaseConverter):
    category = Category.BINARY

    def __init__(self, type_: Any, codec: Optional[Base64Codec] = None) -> None:
        super().__init__(type_)
        self.codec = codec if codec is not None else StandardBase64Codec()

    def encode(self, value: Any) -> Node:
        return Node(self.codec.encode_base64(bytes(value)))

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_scalar:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        text = node.scalar
        data = self.codec.decode_base64(text)
        if not data and text:
            return self._fail(node, DecodeError.LEXICAL_MISMATCH, out)
        if isinstance(out, bytearray):
            out[:] = data
            return Decoded.success(out)
        return Decoded.success(bytes(data))
