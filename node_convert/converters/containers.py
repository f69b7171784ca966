"""Container converters: sequences, fixed arrays, pairs and maps.

WHY: Real documents are trees. Containers turn a typed Python list or
dict into a sequence or map node (and back) by converting each element
through the registry, so nesting works to any depth without extra code.

HOW: Each converter resolves its element/key/value converters once, at
construction, through the registry that built it. Encode walks the
value and grows a node; decode checks the node's tag (and length where
the shape is fixed), then decodes children in order.

RULES:
- Sequence: destination cleared first, elements appended in order
- Fixed array: node length must equal the size, checked before any
  element is read; a mismatch leaves the destination untouched
- Pair: exactly two elements, index 0 then index 1
- Map: node pairs decoded in stored order; duplicate keys, last one wins
- No rollback: when an element fails midway, earlier elements stay
  written in the destination, which is returned as the failure value
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from node_convert.converters.base import BaseConverter, Decoded
from node_convert.core.errors import DecodeError, UnsupportedTypeError
from node_convert.core.node import Node, NodeType
from node_convert.core.types import Category

if TYPE_CHECKING:
    from node_convert.converters.registry import ConversionRegistry


class SequenceConverter(BaseConverter):
    category = Category.SEQUENCE

    def __init__(self, type_: Any, registry: ConversionRegistry) -> None:
        super().__init__(type_)
        self.element = registry.converter(type_.element)

    @property
    def hashable(self) -> bool:
        return False

    @property
    def decodable(self) -> bool:
        return self.element.decodable

    def encode(self, value: Any) -> Node:
        node = Node(NodeType.SEQUENCE)
        for item in value:
            node.push_back(self.element.encode(item))
        return node

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_sequence:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        target = out if out is not None else self.type.container()
        target.clear()
        for child in node:
            result = self.element.decode(child)
            if not result:
                return self._fail(node, result.error, target)
            target.append(result.value)
        return Decoded.success(target)


class ArrayConverter(BaseConverter):
    """Fixed-size array; decodes into a list of exactly ``size`` slots.

    An ``out`` list must already have ``size`` slots.
    """

    category = Category.FIXED_ARRAY

    def __init__(self, type_: Any, registry: ConversionRegistry) -> None:
        super().__init__(type_)
        self.element = registry.converter(type_.element)

    @property
    def hashable(self) -> bool:
        return False

    @property
    def decodable(self) -> bool:
        return self.element.decodable

    def encode(self, value: Any) -> Node:
        node = Node(NodeType.SEQUENCE)
        for item in value:
            node.push_back(self.element.encode(item))
        return node

    def decode(self, node: Node, out: Any = None) -> Decoded:
        size = self.type.size
        if not node.is_sequence:
            return self._fail(node, DecodeError.TYPE_MISMATCH, out)
        if len(node) != size:
            return self._fail(node, DecodeError.SHAPE_MISMATCH, out)
        if out is None:
            target: List[Any] = [None] * size
        elif len(out) != size:
            raise ValueError(f"destination has {len(out)} slots, array needs {size}")
        else:
            target = out
        for index in range(size):
            result = self.element.decode(node[index])
            if not result:
                return self._fail(node, result.error, target)
            target[index] = result.value
        return Decoded.success(target)


class PairConverter(BaseConverter):
    """Two-element tuple encoded as ``[first, second]``.

    Decodes to a tuple, or into a two-slot ``out`` list when given.
    """

    category = Category.PAIR

    def __init__(self, type_: Any, registry: ConversionRegistry) -> None:
        super().__init__(type_)
        self.first = registry.converter(type_.first)
        self.second = registry.converter(type_.second)

    @property
    def hashable(self) -> bool:
        return self.first.hashable and self.second.hashable

    @property
    def decodable(self) -> bool:
        return self.first.decodable and self.second.decodable

    def encode(self, value: Any) -> Node:
        first, second = value
        node = Node(NodeType.SEQUENCE)
        node.push_back(self.first.encode(first))
        node.push_back(self.second.encode(second))
        return node

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_sequence:
            return self._fail(node, DecodeError.TYPE_MISMATCH, out)
        if len(node) != 2:
            return self._fail(node, DecodeError.SHAPE_MISMATCH, out)
        slots = out if out is not None else [None, None]

        first = self.first.decode(node[0])
        if not first:
            return self._fail(node, first.error, self._value(slots, out))
        slots[0] = first.value

        second = self.second.decode(node[1])
        if not second:
            return self._fail(node, second.error, self._value(slots, out))
        slots[1] = second.value
        return Decoded.success(self._value(slots, out))

    @staticmethod
    def _value(slots: Any, out: Any) -> Any:
        return slots if out is not None else tuple(slots)


class MapConverter(BaseConverter):
    """Keyed association encoded as a map node.

    Keys go through the registry like values do, so pair keys are fine;
    key types that decode to unhashable values are rejected up front.
    """

    category = Category.MAPPING

    def __init__(self, type_: Any, registry: ConversionRegistry) -> None:
        super().__init__(type_)
        self.key = registry.converter(type_.key)
        self.value = registry.converter(type_.value)
        if not self.key.hashable:
            raise UnsupportedTypeError(
                f"map key type {type_.key!r} decodes to unhashable values"
            )

    @property
    def hashable(self) -> bool:
        return False

    @property
    def decodable(self) -> bool:
        return self.key.decodable and self.value.decodable

    def encode(self, value: Any) -> Node:
        node = Node(NodeType.MAP)
        for key, item in value.items():
            node.force_insert(self.key.encode(key), self.value.encode(item))
        return node

    def decode(self, node: Node, out: Any = None) -> Decoded:
        if not node.is_map:
            return self._fail(node, DecodeError.TYPE_MISMATCH)
        target = out if out is not None else self.type.container()
        target.clear()
        for key_node, value_node in node.items():
            key = self.key.decode(key_node)
            if not key:
                return self._fail(node, key.error, target)
            item = self.value.decode(value_node)
            if not item:
                return self._fail(node, item.error, target)
            target[key.value] = item.value
        return Decoded.success(target)
