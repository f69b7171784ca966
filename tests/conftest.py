"""Shared test fixtures for the node_convert test suite.

WHY: Most converter tests need small hand-built node trees and a fresh
registry. Building them in one place keeps the trees identical across
modules and keeps each test focused on the rule it checks.

HOW: Builder helpers create sequence and map nodes from plain text.
Fixtures expose a fresh ConversionRegistry and a few sample trees.

RULES:
- Trees are built with the Node API only (no JSON dump) so converter
  tests do not depend on the CLI bridge.
- Every fixture returns a new object; tests may mutate them freely.
"""

import pytest

from node_convert.converters.registry import ConversionRegistry
from node_convert.core.node import Node, NodeType


def seq_node(*items) -> Node:
    """Sequence node; str items become scalars, Nodes are used as-is."""
    node = Node(NodeType.SEQUENCE)
    for item in items:
        node.push_back(item if isinstance(item, Node) else Node(item))
    return node


def map_node(*pairs) -> Node:
    """Map node from (key, value) pairs, keeping duplicates and order."""
    node = Node(NodeType.MAP)
    for key, value in pairs:
        node.force_insert(
            key if isinstance(key, Node) else Node(key),
            value if isinstance(value, Node) else Node(value),
        )
    return node


@pytest.fixture
def registry():
    """A freshly built registry with the standard base64 codec."""
    return ConversionRegistry()


@pytest.fixture
def int_sequence():
    """Sequence of three decimal scalars: [1, 2, 3]."""
    return seq_node("1", "2", "3")


@pytest.fixture
def str_int_map():
    """Map {"a": "1", "b": "2"} in that order."""
    return map_node(("a", "1"), ("b", "2"))


@pytest.fixture
def nested_tree():
    """{"points": [[1, 2], [3, 4]], "name": "grid"}"""
    points = seq_node(seq_node("1", "2"), seq_node("3", "4"))
    return map_node(("points", points), ("name", "grid"))


