"""
Per-path value formatting and parsing.

Each codec path has its own capability table, and the tables intentionally
differ:

- ENCODE_FORMATTERS: kinds the encoder can write
- DEFAULT_PARSERS: kinds a raw default string can be parsed into (widest)
- LINE_PARSERS: kinds a document assignment can be parsed into (narrowest)

Parsers take the text and the field's bit width and raise ``ValueError`` with a
short reason on failure. The decoder adds the key, kind and line context.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

import numpy as np

from .kinds import Color, Rectangle, ValueKind

__all__ = [
    "DEFAULT_PARSERS",
    "ENCODE_FORMATTERS",
    "LINE_PARSERS",
    "parse_bool",
    "parse_color",
    "parse_complex",
    "parse_float",
    "parse_int",
    "parse_rectangle",
    "parse_uint",
]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_UINT_PATTERN = re.compile(r"[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"(?:[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity)|nan)",
    re.IGNORECASE,
)
_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_PART_COUNT = 4


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a signed base-10 integer that fits in ``bits`` bits.

    >>> parse_int("-42")
    -42
    >>> parse_int("200", bits=8)
    Traceback (most recent call last):
        ...
    ValueError: value out of range for int8
    """
    if not _INT_PATTERN.fullmatch(text):
        msg = "invalid syntax"
        raise ValueError(msg)
    value = int(text)
    bits = bits or 64
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        msg = f"value out of range for int{bits}"
        raise ValueError(msg)
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """Parse an unsigned base-10 integer that fits in ``bits`` bits."""
    if not _UINT_PATTERN.fullmatch(text):
        msg = "invalid syntax"
        raise ValueError(msg)
    value = int(text)
    bits = bits or 64
    if value >= (1 << bits):
        msg = f"value out of range for uint{bits}"
        raise ValueError(msg)
    return value


def parse_bool(text: str, bits: int = 0) -> bool:
    """Parse one of the accepted boolean literals."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    msg = "invalid syntax"
    raise ValueError(msg)


def _parse_string(text: str, bits: int = 0) -> str:
    return text


def parse_float(text: str, bits: int = 64) -> float:
    """
    Parse a decimal or exponential float at the given precision.

    Parameters
    ----------
    text
        Float literal; ``inf`` and ``nan`` are accepted in any case.
    bits
        32 rounds the result to single precision, anything else is double.

    Returns
    -------
    float
        A Python float, or ``numpy.float32`` when ``bits`` is 32.

    Raises
    ------
    ValueError
        On malformed input or when a finite literal overflows the precision.
    """
    if not _FLOAT_PATTERN.fullmatch(text):
        msg = "invalid syntax"
        raise ValueError(msg)
    value = float(text)
    explicit_inf = "inf" in text.lower()
    if math.isinf(value) and not explicit_inf:
        msg = f"value out of range for float{bits or 64}"
        raise ValueError(msg)
    if bits != 32:  # noqa: PLR2004
        return value

    with np.errstate(over="ignore"):
        single = np.float32(value)
    if np.isinf(single) and not explicit_inf:
        msg = "value out of range for float32"
        raise ValueError(msg)
    return single


def _split_complex(text: str) -> tuple[str, str]:
    # Returns (real, imaginary) literal halves; either may be empty
    if not text.endswith("i"):
        return text, ""
    body = text[:-1]
    for pos in range(len(body) - 1, 0, -1):
        if body[pos] in "+-" and body[pos - 1] not in "eE":
            return body[:pos], body[pos:]
    return "", body


def parse_complex(text: str, bits: int = 128) -> complex:
    """
    Parse a complex number written as ``a``, ``bi`` or ``a+bi``.

    Surrounding parentheses are allowed. ``bits`` is the total width: 64
    rounds both parts to single precision and returns ``numpy.complex64``.

    >>> parse_complex("1.5-2i")
    (1.5-2j)
    >>> parse_complex("(3i)")
    3j
    """
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    real_text, imag_text = _split_complex(text)
    if not real_text and not imag_text:
        msg = "invalid syntax"
        raise ValueError(msg)

    part_bits = 32 if bits == 64 else 64  # noqa: PLR2004
    real = parse_float(real_text, part_bits) if real_text else 0.0
    imag = parse_float(imag_text, part_bits) if imag_text else 0.0
    if part_bits == 32:  # noqa: PLR2004
        return np.complex64(complex(real, imag))
    return complex(real, imag)


def _parse_quad(text: str) -> list[int]:
    parts = text.split(",")
    if len(parts) != _PART_COUNT:
        msg = "invalid number of parts"
        raise ValueError(msg)
    # Parts are not trimmed: "1, 2,3,4" is rejected
    return [parse_int(part) for part in parts]


def parse_rectangle(text: str, bits: int = 0) -> Rectangle:
    """Parse ``minX,minY,maxX,maxY``.

    >>> parse_rectangle("1,2,3,4")
    Rectangle(min_x=1, min_y=2, max_x=3, max_y=4)
    """
    min_x, min_y, max_x, max_y = _parse_quad(text)
    return Rectangle(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


def parse_color(text: str, bits: int = 0) -> Color:
    """Parse ``R,G,B,A``; each channel wraps to 8 bits."""
    r, g, b, a = (channel % 256 for channel in _parse_quad(text))
    return Color(r=r, g=g, b=b, a=a)


def _format_int(value: Any) -> str:
    # Rejects floats and strings rather than truncating them
    return f"{value:d}"


def _format_bool(value: Any) -> str:
    if not isinstance(value, (bool, np.bool_)):
        msg = f"expected bool, got {type(value).__name__}"
        raise TypeError(msg)
    return "true" if value else "false"


def _format_string(value: Any) -> str:
    return str(value)


def _format_float(value: Any) -> str:
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:f}"


def _format_rectangle(value: Rectangle) -> str:
    return f"{value.min_x:d},{value.min_y:d},{value.max_x:d},{value.max_y:d}"


def _format_color(value: Color) -> str:
    return f"{value.r:d},{value.g:d},{value.b:d},{value.a:d}"


ENCODE_FORMATTERS: dict[ValueKind, Callable[[Any], str]] = {
    ValueKind.INT: _format_int,
    ValueKind.UINT: _format_int,
    ValueKind.STRING: _format_string,
    ValueKind.BOOL: _format_bool,
    ValueKind.FLOAT64: _format_float,
    ValueKind.RECTANGLE: _format_rectangle,
    ValueKind.COLOR: _format_color,
}

DEFAULT_PARSERS: dict[ValueKind, Callable[[str, int], Any]] = {
    ValueKind.INT: parse_int,
    ValueKind.UINT: parse_uint,
    ValueKind.BOOL: parse_bool,
    ValueKind.STRING: _parse_string,
    ValueKind.FLOAT32: parse_float,
    ValueKind.FLOAT64: parse_float,
    ValueKind.COMPLEX64: parse_complex,
    ValueKind.COMPLEX128: parse_complex,
    ValueKind.RECTANGLE: parse_rectangle,
    ValueKind.COLOR: parse_color,
}

LINE_PARSERS: dict[ValueKind, Callable[[str, int], Any]] = {
    ValueKind.BOOL: parse_bool,
    ValueKind.INT: parse_int,
    ValueKind.STRING: _parse_string,
    ValueKind.RECTANGLE: parse_rectangle,
}
