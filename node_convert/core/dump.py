"""JSON node dump — Node trees to and from JSON-compatible data.

WHY: The command-line tool needs some way to feed whole node trees in
and print them out. The standard json module already parses JSON; this
module only maps the parsed data onto nodes and back, so no document
syntax is parsed here.

HOW: node_from_data() walks parsed JSON (None, str, bool, number, list,
dict) and builds nodes. node_to_data() does the reverse.

RULES:
- None ↔ null node, str ↔ scalar, list ↔ sequence, dict ↔ map
- JSON booleans become "true"/"false"; numbers become their JSON text
- Object keys are always scalar nodes
- A map with a non-scalar key cannot be dumped and raises ValueError
"""

from __future__ import annotations

import json
from typing import Any

from node_convert.core.node import Node, NodeType


def node_from_data(data: Any) -> Node:
    """Build a node tree from parsed JSON data."""
    if data is None:
        return Node()
    if isinstance(data, str):
        return Node(data)
    if isinstance(data, bool):
        return Node("true" if data else "false")
    if isinstance(data, (int, float)):
        return Node(json.dumps(data))
    if isinstance(data, list):
        node = Node(NodeType.SEQUENCE)
        for item in data:
            node.push_back(node_from_data(item))
        return node
    if isinstance(data, dict):
        node = Node(NodeType.MAP)
        for key, value in data.items():
            node.force_insert(Node(str(key)), node_from_data(value))
        return node
    raise TypeError(f"cannot build a node from {type(data).__name__}")


def node_to_data(node: Node) -> Any:
    """JSON-compatible data for a node tree.

    Raises:
        ValueError: If a map has a key that is not a scalar.
    """
    if node.is_null:
        return None
    if node.is_scalar:
        return node.scalar
    if node.is_sequence:
        return [node_to_data(child) for child in node]
    result = {}
    for key, value in node.items():
        if not key.is_scalar:
            raise ValueError(f"map key {key!r} is not a scalar; cannot dump as JSON")
        result[key.scalar] = node_to_data(value)
    return result
