"""
Unit tests for linecfg.values module.

Tests the individual parsers and formatters and the per-path capability tables.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from linecfg.kinds import Color, Rectangle, ValueKind
from linecfg.values import (
    DEFAULT_PARSERS,
    ENCODE_FORMATTERS,
    LINE_PARSERS,
    parse_bool,
    parse_color,
    parse_complex,
    parse_float,
    parse_int,
    parse_rectangle,
    parse_uint,
)


class TestCapabilityTables:
    """The three paths deliberately support different kinds."""

    def test_default_parsers_cover_every_kind(self):
        """Raw defaults can be parsed into every kind."""
        assert set(DEFAULT_PARSERS) == set(ValueKind)

    def test_encode_formatters(self):
        """The encoder handles everything but float32 and complex kinds."""
        assert set(ENCODE_FORMATTERS) == set(ValueKind) - {
            ValueKind.FLOAT32,
            ValueKind.COMPLEX64,
            ValueKind.COMPLEX128,
        }

    def test_line_parsers(self):
        """Assignment lines only handle bool, int, string and rectangle."""
        assert set(LINE_PARSERS) == {
            ValueKind.BOOL,
            ValueKind.INT,
            ValueKind.STRING,
            ValueKind.RECTANGLE,
        }

    def test_line_parsers_subset_of_default_parsers(self):
        """Every line-parsable kind also has a default parser."""
        assert set(LINE_PARSERS) <= set(DEFAULT_PARSERS)


class TestParseInt:
    """Tests for parse_int and parse_uint."""

    @pytest.mark.parametrize(
        ("text", "expected"), [("0", 0), ("42", 42), ("-7", -7), ("+9", 9)]
    )
    def test_valid(self, text, expected):
        """Signed decimal integers parse."""
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "0x10", "1.0", "abc"])
    def test_invalid_syntax(self, text):
        """Whitespace, underscores, prefixes and fractions are rejected."""
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_int(text)

    def test_bit_width(self):
        """Values must fit the field's bit width."""
        assert parse_int("127", bits=8) == 127
        assert parse_int("-128", bits=8) == -128
        with pytest.raises(ValueError, match="out of range for int8"):
            parse_int("128", bits=8)
        with pytest.raises(ValueError, match="out of range for int64"):
            parse_int("9223372036854775808")

    def test_uint(self):
        """Unsigned integers reject signs and respect bit width."""
        assert parse_uint("255", bits=8) == 255
        assert parse_uint("18446744073709551615") == 2**64 - 1
        with pytest.raises(ValueError, match="out of range for uint8"):
            parse_uint("256", bits=8)
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_uint("-1")
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_uint("+1")


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text):
        """True literals parse to True."""
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text):
        """False literals parse to False."""
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "no", "tRUE", "", "2"])
    def test_invalid(self, text):
        """Anything else is rejected."""
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_bool(text)


class TestParseFloat:
    """Tests for parse_float."""

    def test_decimal_and_exponent(self):
        """Decimal and exponent forms parse."""
        assert parse_float("1.5") == 1.5
        assert parse_float("-2e3") == -2000.0
        assert parse_float(".5") == 0.5
        assert parse_float("3.") == 3.0

    def test_special_values(self):
        """inf and nan are accepted in any case."""
        assert parse_float("Inf") == math.inf
        assert parse_float("-infinity") == -math.inf
        assert math.isnan(parse_float("NaN"))

    @pytest.mark.parametrize("text", ["-nan", "+nan", "+NaN"])
    def test_signed_nan_rejected(self, text):
        """nan takes no sign."""
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_float(text)

    @pytest.mark.parametrize("text", ["", "1.0.0", " 1", "1_0", "e5", "abc"])
    def test_invalid(self, text):
        """Malformed floats are rejected."""
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_float(text)

    def test_overflow(self):
        """Finite literals that overflow are range errors."""
        with pytest.raises(ValueError, match="out of range for float64"):
            parse_float("1e400")

    def test_float32_precision(self):
        """bits=32 rounds to single precision."""
        value = parse_float("0.1", bits=32)
        assert isinstance(value, np.float32)
        assert value == np.float32(0.1)
        assert float(value) != 0.1

    def test_float32_overflow(self):
        """Values beyond single precision range are rejected for float32."""
        with pytest.raises(ValueError, match="out of range for float32"):
            parse_float("1e39", bits=32)
        assert np.isinf(parse_float("inf", bits=32))


class TestParseComplex:
    """Tests for parse_complex."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1+2i", complex(1, 2)),
            ("1.5-2i", complex(1.5, -2)),
            ("3", complex(3, 0)),
            ("3i", complex(0, 3)),
            ("-3i", complex(0, -3)),
            ("(1+2i)", complex(1, 2)),
            ("1e+2+3e-1i", complex(100, 0.3)),
        ],
    )
    def test_valid(self, text, expected):
        """a, bi and a+bi forms parse."""
        assert parse_complex(text) == expected

    @pytest.mark.parametrize("text", ["", "i", "1+2j", "1+i", "()", "1 + 2i"])
    def test_invalid(self, text):
        """Malformed complex literals are rejected."""
        with pytest.raises(ValueError):
            parse_complex(text)

    def test_complex64(self):
        """bits=64 returns a single precision complex."""
        value = parse_complex("0.1+0.2i", bits=64)
        assert isinstance(value, np.complex64)
        assert value == np.complex64(complex(0.1, 0.2))


class TestParseQuads:
    """Tests for parse_rectangle and parse_color."""

    def test_rectangle(self):
        """Four parts map to min and max corners."""
        rect = parse_rectangle("1,2,3,4")
        assert rect == Rectangle(min_x=1, min_y=2, max_x=3, max_y=4)
        assert rect.min == (1, 2)
        assert rect.max == (3, 4)

    def test_rectangle_negative(self):
        """Rectangle parts may be negative."""
        assert parse_rectangle("-1,-2,3,4").min == (-1, -2)

    @pytest.mark.parametrize("text", ["1,2,3", "1,2,3,4,5", "", "1"])
    def test_part_count(self, text):
        """Anything other than four parts is rejected."""
        with pytest.raises(ValueError, match="invalid number of parts"):
            parse_rectangle(text)

    def test_parts_not_trimmed(self):
        """Whitespace around parts is rejected."""
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_rectangle("1, 2,3,4")

    def test_color(self):
        """Four parts map to R, G, B, A."""
        assert parse_color("10,20,30,255") == Color(r=10, g=20, b=30, a=255)

    def test_color_wraps_to_eight_bits(self):
        """Out-of-range channels wrap like an 8-bit conversion."""
        assert parse_color("256,257,-1,0") == Color(r=0, g=1, b=255, a=0)

    def test_color_part_count(self):
        """Color needs exactly four parts."""
        with pytest.raises(ValueError, match="invalid number of parts"):
            parse_color("1,2,3")


class TestFormatters:
    """Tests for ENCODE_FORMATTERS."""

    def test_scalars(self):
        """Scalar kinds format as plain text."""
        assert ENCODE_FORMATTERS[ValueKind.INT](-12) == "-12"
        assert ENCODE_FORMATTERS[ValueKind.UINT](np.uint16(65535)) == "65535"
        assert ENCODE_FORMATTERS[ValueKind.BOOL](True) == "true"
        assert ENCODE_FORMATTERS[ValueKind.BOOL](False) == "false"
        assert ENCODE_FORMATTERS[ValueKind.STRING]("a b # c") == "a b # c"

    def test_float_fixed_point(self):
        """Float64 uses six decimals and no exponent."""
        fmt = ENCODE_FORMATTERS[ValueKind.FLOAT64]
        assert fmt(1.5) == "1.500000"
        assert fmt(1e20) == "100000000000000000000.000000"
        assert fmt(1e-9) == "0.000000"

    def test_float_special_values(self):
        """Non-finite floats use Inf and NaN spellings."""
        fmt = ENCODE_FORMATTERS[ValueKind.FLOAT64]
        assert fmt(math.inf) == "+Inf"
        assert fmt(-math.inf) == "-Inf"
        assert fmt(math.nan) == "NaN"

    def test_composites(self):
        """Rectangle and Color format as four comma-separated integers."""
        rect = Rectangle(min_x=1, min_y=2, max_x=3, max_y=4)
        assert ENCODE_FORMATTERS[ValueKind.RECTANGLE](rect) == "1,2,3,4"
        color = Color(r=10, g=20, b=30, a=255)
        assert ENCODE_FORMATTERS[ValueKind.COLOR](color) == "10,20,30,255"

    @pytest.mark.parametrize("value", [2.7, "3", None])
    def test_int_rejects_non_integers(self, value):
        """Int formatting rejects floats and strings instead of converting them."""
        with pytest.raises((TypeError, ValueError)):
            ENCODE_FORMATTERS[ValueKind.INT](value)

    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_bool_rejects_non_bools(self, value):
        """Bool formatting only accepts bool and numpy bool."""
        with pytest.raises(TypeError, match="expected bool"):
            ENCODE_FORMATTERS[ValueKind.BOOL](value)
        assert ENCODE_FORMATTERS[ValueKind.BOOL](np.bool_(False)) == "false"
