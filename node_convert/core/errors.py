"""Failure reasons and exceptions for node conversion.

WHY: Decoding is result-based (bad data is reported, not raised), but
callers still want to know *why* a decode failed. Programming mistakes
(asking for a type nobody can convert) are a different kind of problem
and should surface loudly when the converter is built.

HOW: DecodeError enumerates the four data failure kinds. The exception
classes cover the build-time problems and the optional raising layer.

RULES:
- DecodeError values are stable strings (safe to log and compare)
- UnsupportedTypeError is a TypeError; ConversionError is a ValueError
"""

from __future__ import annotations

import enum
from typing import Any


class DecodeError(str, enum.Enum):
    """Why a node could not be decoded into the requested type.

    RULES:
    - type_mismatch: the node's tag is wrong for the category
    - lexical_mismatch: scalar text matches no recognized grammar
    - range_overflow: number parsed but does not fit the target
    - shape_mismatch: container length/arity is wrong
    """

    TYPE_MISMATCH = "type_mismatch"
    LEXICAL_MISMATCH = "lexical_mismatch"
    RANGE_OVERFLOW = "range_overflow"
    SHAPE_MISMATCH = "shape_mismatch"


class UnsupportedTypeError(TypeError):
    """Raised when a requested type matches no conversion category.

    Also raised for encode-only types asked to decode, and for mapping
    key types whose decoded values cannot be dict keys.
    """


class OverlappingCategoryError(RuntimeError):
    """Raised when more than one category claims the same type.

    This is a defect in the registry's rule set, never a property of
    the data being converted.
    """


class ConversionError(ValueError):
    """Raised by the ``as_value`` convenience layer when decoding fails.

    WHY: Some call sites prefer exception flow over checking a result.

    HOW: Wraps the requested type and the DecodeError reason.

    RULES:
    - Only the convenience layer raises this; decode() itself never does
    """

    def __init__(self, type_: Any, reason: DecodeError | None) -> None:
        self.type = type_
        self.reason = reason
        detail = reason.value if reason is not None else "unknown"
        super().__init__(f"bad conversion to {type_!r}: {detail}")
