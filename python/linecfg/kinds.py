"""
Value kinds understood by the codec.

This module defines:
- ValueKind: The closed set of kinds the codec can format or parse
- Rectangle: Four-integer rectangle (min corner, max corner)
- Color: Four 8-bit RGBA channels
- infer_kind: Mapping from a resolved type annotation to a kind and bit width
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import numpy as np

__all__ = ["Color", "Rectangle", "ValueKind", "infer_kind"]


class ValueKind(Enum):
    """Kind of a setting's value."""

    INT = auto()
    UINT = auto()
    BOOL = auto()
    STRING = auto()
    FLOAT32 = auto()
    FLOAT64 = auto()
    COMPLEX64 = auto()
    COMPLEX128 = auto()
    RECTANGLE = auto()  # min_x, min_y, max_x, max_y
    COLOR = auto()  # r, g, b, a

    @property
    def label(self) -> str:
        """Lower-case name used in messages and docs."""
        return self.name.lower()


@dataclass
class Rectangle:
    """
    Integer rectangle.

    Parameters
    ----------
    min_x
        Minimum x coordinate
    min_y
        Minimum y coordinate
    max_x
        Maximum x coordinate
    max_y
        Maximum y coordinate
    """

    min_x: int = 0
    min_y: int = 0
    max_x: int = 0
    max_y: int = 0

    @property
    def min(self) -> tuple[int, int]:
        """Minimum corner as (x, y)."""
        return (self.min_x, self.min_y)

    @property
    def max(self) -> tuple[int, int]:
        """Maximum corner as (x, y)."""
        return (self.max_x, self.max_y)


@dataclass
class Color:
    """
    RGBA colour with 8-bit channels.

    Channel values are not range-checked on construction.
    """

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


# Annotation -> (kind, bit width); width is only meaningful for INT and UINT
_KIND_BY_TYPE: dict[Any, tuple[ValueKind, int]] = {
    bool: (ValueKind.BOOL, 0),
    int: (ValueKind.INT, 64),
    str: (ValueKind.STRING, 0),
    float: (ValueKind.FLOAT64, 64),
    complex: (ValueKind.COMPLEX128, 128),
    Rectangle: (ValueKind.RECTANGLE, 0),
    Color: (ValueKind.COLOR, 0),
    np.int8: (ValueKind.INT, 8),
    np.int16: (ValueKind.INT, 16),
    np.int32: (ValueKind.INT, 32),
    np.int64: (ValueKind.INT, 64),
    np.uint8: (ValueKind.UINT, 8),
    np.uint16: (ValueKind.UINT, 16),
    np.uint32: (ValueKind.UINT, 32),
    np.uint64: (ValueKind.UINT, 64),
    np.float32: (ValueKind.FLOAT32, 32),
    np.float64: (ValueKind.FLOAT64, 64),
    np.complex64: (ValueKind.COMPLEX64, 64),
    np.complex128: (ValueKind.COMPLEX128, 128),
}

_DEFAULT_BITS: dict[ValueKind, int] = {
    ValueKind.INT: 64,
    ValueKind.UINT: 64,
    ValueKind.FLOAT32: 32,
    ValueKind.FLOAT64: 64,
    ValueKind.COMPLEX64: 64,
    ValueKind.COMPLEX128: 128,
}


def infer_kind(
    annotation: Any, kind: ValueKind | None = None, bits: int | None = None
) -> tuple[ValueKind | None, int]:
    """
    Work out the kind and bit width of a field.

    Parameters
    ----------
    annotation
        Resolved type annotation of the field.
    kind
        Explicit kind; overrides whatever the annotation implies.
    bits
        Explicit bit width for INT and UINT fields.

    Returns
    -------
    tuple[ValueKind | None, int]
        The kind (None if the annotation maps to no native kind) and the
        bit width.

    Examples
    --------
    >>> infer_kind(int)
    (<ValueKind.INT: 1>, 64)
    >>> infer_kind(np.uint8)
    (<ValueKind.UINT: 2>, 8)
    >>> infer_kind(list)
    (None, 0)
    """
    if kind is None:
        try:
            kind, inferred_bits = _KIND_BY_TYPE[annotation]
        except (KeyError, TypeError):
            # TypeError covers unhashable annotations
            return None, bits or 0
        return kind, bits or inferred_bits

    return kind, bits or _DEFAULT_BITS.get(kind, 0)
