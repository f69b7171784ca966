"""Type expressions — name a requested type as JSON.

WHY: Tools and configuration files cannot pass Python objects like
``IntType(32)`` or ``dict[str, list[float]]``. They need a textual way
to say which type a node should be decoded as.

HOW: A type expression is JSON: a bare name ("int32", "string", ...) or
a one-key object for containers. The expression is validated against
TYPE_SPEC_SCHEMA with jsonschema, then built recursively into the
descriptors from core/types.py.

RULES:
- Bare names are the keys of TYPE_NAMES
- {"seq": T}, {"array": {"of": T, "size": N}}, {"pair": [T, U]},
  {"map": {"key": K, "value": V}}; T, U, K, V are type expressions
- Invalid structure raises jsonschema.ValidationError
- Unknown bare names raise UnsupportedTypeError
"""

from __future__ import annotations

import json
from typing import Any, Dict

import jsonschema

from node_convert.core import types as t
from node_convert.core.errors import UnsupportedTypeError

TYPE_NAMES: Dict[str, Any] = {
    "bool": t.BOOL,
    "int8": t.INT8,
    "int16": t.INT16,
    "int32": t.INT32,
    "int64": t.INT64,
    "uint8": t.UINT8,
    "uint16": t.UINT16,
    "uint32": t.UINT32,
    "uint64": t.UINT64,
    "float32": t.FLOAT32,
    "float64": t.FLOAT64,
    "char8": t.CHAR8,
    "char16": t.CHAR16,
    "char32": t.CHAR32,
    "string": t.STRING,
    "null": t.NULL,
    "node": t.NODE,
    "binary": t.BINARY,
}

TYPE_SPEC_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$ref": "#/definitions/type",
    "definitions": {
        "type": {
            "oneOf": [
                {"type": "string"},
                {
                    "type": "object",
                    "properties": {"seq": {"$ref": "#/definitions/type"}},
                    "required": ["seq"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {
                        "array": {
                            "type": "object",
                            "properties": {
                                "of": {"$ref": "#/definitions/type"},
                                "size": {"type": "integer", "minimum": 0},
                            },
                            "required": ["of", "size"],
                            "additionalProperties": False,
                        },
                    },
                    "required": ["array"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {
                        "pair": {
                            "type": "array",
                            "items": {"$ref": "#/definitions/type"},
                            "minItems": 2,
                            "maxItems": 2,
                        },
                    },
                    "required": ["pair"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {
                        "map": {
                            "type": "object",
                            "properties": {
                                "key": {"$ref": "#/definitions/type"},
                                "value": {"$ref": "#/definitions/type"},
                            },
                            "required": ["key", "value"],
                            "additionalProperties": False,
                        },
                    },
                    "required": ["map"],
                    "additionalProperties": False,
                },
            ],
        },
    },
}


def parse_type_spec(spec: Any) -> Any:
    """Build a type descriptor from a parsed type expression.

    Args:
        spec: A bare type name or a container object, as parsed from JSON.

    Returns:
        The matching descriptor, ready for the registry.

    Raises:
        jsonschema.ValidationError: If the expression is malformed.
        UnsupportedTypeError: If a bare name is unknown.
    """
    jsonschema.validate(instance=spec, schema=TYPE_SPEC_SCHEMA)
    return _build(spec)


def parse_type_argument(text: str) -> Any:
    """Parse a command-line type argument: a bare type name, or JSON."""
    stripped = text.strip()
    # "null" is both a type name and a JSON literal
    if stripped in TYPE_NAMES:
        return TYPE_NAMES[stripped]
    try:
        spec = json.loads(stripped)
    except json.JSONDecodeError:
        spec = stripped
    return parse_type_spec(spec)


def _build(spec: Any) -> Any:
    if isinstance(spec, str):
        try:
            return TYPE_NAMES[spec]
        except KeyError:
            raise UnsupportedTypeError(
                f"unknown type name {spec!r}; known: {', '.join(TYPE_NAMES)}"
            ) from None
    if "seq" in spec:
        return t.SeqType(_build(spec["seq"]))
    if "array" in spec:
        return t.ArrayType(_build(spec["array"]["of"]), spec["array"]["size"])
    if "pair" in spec:
        first, second = spec["pair"]
        return t.PairType(_build(first), _build(second))
    return t.MapType(_build(spec["map"]["key"]), _build(spec["map"]["value"]))
