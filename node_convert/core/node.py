"""Document node: null, scalar text, ordered sequence, or key-ordered map.

WHY: Converters read and build document values. The document model is
deliberately weak (a scalar is just text, with no numeric kind), so
that typing decisions live in the converters, not in the tree.

HOW: A Node is a thin handle over a shared _NodeData record. Most
operations act on the record; reset() swaps the record so two handles
can share one underlying tree, the way a document library hands out
references into a loaded document.

RULES:
- Map pairs keep insertion order; keys are Nodes, compared structurally
- insert() replaces an equal key's value, force_insert() always appends
- Growing a null node turns it into a sequence (push_back) or map (insert)
- Equality is structural; nodes are mutable and therefore unhashable
- Converters never mutate a node they decode from
"""

from __future__ import annotations

import enum
from typing import Any, Iterator, List, Tuple, Union


class NodeType(str, enum.Enum):
    """The four node tags."""

    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAP = "map"


class _NodeData:
    __slots__ = ("type", "text", "children", "pairs")

    def __init__(self, node_type: NodeType, text: str = "") -> None:
        self.type = node_type
        self.text = text
        self.children: List[Node] = []
        self.pairs: List[Tuple[Node, Node]] = []


class Node:
    """A handle onto a document value.

    ``Node()`` is null, ``Node("text")`` is a scalar, and
    ``Node(NodeType.SEQUENCE)`` / ``Node(NodeType.MAP)`` are empty
    containers.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Union[None, str, NodeType] = None) -> None:
        if value is None:
            self._data = _NodeData(NodeType.NULL)
        elif isinstance(value, NodeType):
            self._data = _NodeData(value)
        elif isinstance(value, str):
            self._data = _NodeData(NodeType.SCALAR, value)
        else:
            raise TypeError(
                f"Node() takes text, a NodeType or None, not {type(value).__name__}"
            )

    # -- tag ---------------------------------------------------------------

    @property
    def type(self) -> NodeType:
        return self._data.type

    @property
    def is_null(self) -> bool:
        return self._data.type is NodeType.NULL

    @property
    def is_scalar(self) -> bool:
        return self._data.type is NodeType.SCALAR

    @property
    def is_sequence(self) -> bool:
        return self._data.type is NodeType.SEQUENCE

    @property
    def is_map(self) -> bool:
        return self._data.type is NodeType.MAP

    @property
    def scalar(self) -> str:
        """The text of a scalar node."""
        if not self.is_scalar:
            raise TypeError(f"{self._data.type.value} node has no scalar text")
        return self._data.text

    # -- access ------------------------------------------------------------

    def __len__(self) -> int:
        if self.is_sequence:
            return len(self._data.children)
        if self.is_map:
            return len(self._data.pairs)
        return 0

    def __getitem__(self, key: Union[int, str, Node]) -> Node:
        if self.is_sequence and isinstance(key, int):
            return self._data.children[key]
        if self.is_map:
            wanted = key if isinstance(key, Node) else Node(str(key))
            for pair_key, pair_value in self._data.pairs:
                if pair_key == wanted:
                    return pair_value
            raise KeyError(key)
        raise TypeError(f"{self._data.type.value} node is not indexable by {key!r}")

    def __iter__(self) -> Iterator[Any]:
        if self.is_sequence:
            return iter(list(self._data.children))
        if self.is_map:
            return iter(list(self._data.pairs))
        return iter(())

    def items(self) -> List[Tuple[Node, Node]]:
        """(key, value) pairs of a map node in stored order."""
        if not self.is_map:
            raise TypeError(f"{self._data.type.value} node has no items")
        return list(self._data.pairs)

    # -- growth ------------------------------------------------------------

    def push_back(self, child: Node) -> None:
        """Append a child to a sequence (a null node becomes a sequence)."""
        if self.is_null:
            self._data.type = NodeType.SEQUENCE
        if not self.is_sequence:
            raise TypeError(f"cannot push_back onto a {self._data.type.value} node")
        self._data.children.append(child)

    def insert(self, key: Node, value: Node) -> None:
        """Set ``key`` to ``value``, replacing the value of an equal key."""
        self._require_map("insert")
        pairs = self._data.pairs
        for index, (pair_key, _) in enumerate(pairs):
            if pair_key == key:
                pairs[index] = (pair_key, value)
                return
        pairs.append((key, value))

    def force_insert(self, key: Node, value: Node) -> None:
        """Append a (key, value) pair without looking for an equal key."""
        self._require_map("force_insert")
        self._data.pairs.append((key, value))

    def _require_map(self, operation: str) -> None:
        if self.is_null:
            self._data.type = NodeType.MAP
        if not self.is_map:
            raise TypeError(f"cannot {operation} into a {self._data.type.value} node")

    # -- sharing -----------------------------------------------------------

    def reset(self, other: Node) -> None:
        """Make this handle share ``other``'s underlying tree."""
        self._data = other._data

    def is_same(self, other: Node) -> bool:
        return self._data is other._data

    def clone(self) -> Node:
        """Deep, unshared copy of this node."""
        copy = Node(self._data.type)
        copy._data.text = self._data.text
        copy._data.children = [child.clone() for child in self._data.children]
        copy._data.pairs = [(k.clone(), v.clone()) for k, v in self._data.pairs]
        return copy

    # -- conversion shorthand ----------------------------------------------

    def as_(self, type_: Any, *fallback: Any) -> Any:
        """Decode this node as ``type_``; see registry.as_value."""
        from node_convert.converters.registry import as_value

        return as_value(self, type_, *fallback)

    # -- comparison --------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        if self._data is other._data:
            return True
        mine, theirs = self._data, other._data
        if mine.type is not theirs.type:
            return False
        if mine.type is NodeType.SCALAR:
            return mine.text == theirs.text
        if mine.type is NodeType.SEQUENCE:
            return mine.children == theirs.children
        if mine.type is NodeType.MAP:
            return mine.pairs == theirs.pairs
        return True

    def __repr__(self) -> str:
        if self.is_null:
            return "Node()"
        if self.is_scalar:
            return f"Node({self._data.text!r})"
        if self.is_sequence:
            return f"Node(sequence={self._data.children!r})"
        return f"Node(map={self._data.pairs!r})"

