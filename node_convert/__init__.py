"""Node Convert — typed values in and out of weakly-typed document nodes.

WHY: A document model stores everything as null, scalar text, sequences
or key-ordered maps. Callers want "this node as an int32" or "a node for
this list of floats" without writing marshalling code per type.

HOW: Three layers: the Node model (core), per-category converters
(scalars, containers, binary), and a closed registry that classifies a
requested type into exactly one category and hands back its converter.

RULES:
- decode never raises for bad data; it returns a Decoded result
- encode never fails
- Unsupported or ambiguous types raise when the converter is built,
  before any node is read
"""

from node_convert.converters.base import Decoded
from node_convert.converters.registry import (
    ConversionRegistry,
    as_value,
    classify,
    decode,
    encode,
)
from node_convert.core.errors import (
    ConversionError,
    DecodeError,
    OverlappingCategoryError,
    UnsupportedTypeError,
)
from node_convert.core.node import Node, NodeType

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConversionRegistry",
    "DecodeError",
    "Decoded",
    "Node",
    "NodeType",
    "OverlappingCategoryError",
    "UnsupportedTypeError",
    "as_value",
    "classify",
    "decode",
    "encode",
]
