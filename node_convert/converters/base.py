"""Abstract base converter and the decode result container.

WHY: Every category converts in both directions with the same shape:
encode a value into a Node, decode a Node into a value. That lets the
registry, the containers and the CLI treat converters generically.

HOW: BaseConverter is an ABC with ``encode()`` and ``decode()``.
Decoded is a small dataclass carrying the success flag, the value and,
on failure, the DecodeError reason.

RULES:
- encode() never fails for a value of the converter's type
- decode() never raises for bad data; it returns Decoded.failure(...)
- A caller-supplied ``out`` of the wrong shape (a fixed-array list with
  the wrong number of slots) is a caller error and raises ValueError
- decode(node, out) writes into ``out`` when the category is mutable;
  on failure ``out`` may be partially written and is returned as value
- decode() never mutates the node it reads
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from node_convert.core.errors import DecodeError
from node_convert.core.node import Node
from node_convert.core.types import Category

logger = logging.getLogger(__name__)


@dataclass
class Decoded:
    """Outcome of one decode.

    Attributes:
        ok: True when the node converted cleanly.
        value: The decoded value, or the partially written destination
               when a container decode failed midway.
        error: Why the decode failed; None on success.
    """

    ok: bool
    value: Any = None
    error: Optional[DecodeError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any) -> Decoded:
        return cls(True, value)

    @classmethod
    def failure(cls, error: DecodeError, value: Any = None) -> Decoded:
        return cls(False, value, error)


class BaseConverter(ABC):
    """Abstract base for all category converters.

    To add a conversion for a new kind of type:
    1. Add the Category member and descriptor in core/types.py
    2. Subclass BaseConverter
    3. Add one rule (predicate + factory) to the registry
    """

    category: Category

    def __init__(self, type_: Any) -> None:
        self.type = type_

    @property
    def hashable(self) -> bool:
        """Whether decoded values can be used as dict keys."""
        return True

    @property
    def decodable(self) -> bool:
        """False for encode-only types, and containers holding them."""
        return True

    @abstractmethod
    def encode(self, value: Any) -> Node:
        """Build a node for ``value``."""

    @abstractmethod
    def decode(self, node: Node, out: Any = None) -> Decoded:
        """Read ``node`` as this converter's type.

        Args:
            node: The node to read. Never modified.
            out: Optional caller-owned destination for mutable categories.

        Returns:
            Decoded with ``ok`` set and ``value`` holding the result.
        """

    def _fail(self, node: Node, error: DecodeError, value: Any = None) -> Decoded:
        logger.debug(
            "Cannot decode %s from %s node: %s",
            self.category.value, node.type.value, error.value,
        )
        return Decoded.failure(error, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type!r})"
