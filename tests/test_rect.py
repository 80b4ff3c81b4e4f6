"""Tests for the rectangle key wrapper."""

import pytest
from zorder_rect.rect import RectKey
from zorder_rect.zorder import (
    KeyLayout,
    FieldRangeError,
    decode_field,
    X0_OFFSET,
    X1_OFFSET,
    Y0_OFFSET,
    Y1_OFFSET,
)


# Fields of the reference rectangle, reduced to 16 bits
X0 = 33096
X1 = 147833 % 65536
Y0 = 24770
Y1 = 95027 % 65536


class TestRectKey:
    """Tests for RectKey."""

    def test_default_is_empty(self):
        """Test a default key has all fields at zero."""
        r = RectKey()
        assert r.value == 0
        assert r.fields() == (0, 0, 0, 0)

    def test_from_fields(self):
        """Test fields round trip through the key."""
        r = RectKey.from_fields(X0, X1, Y0, Y1)
        assert r.x0 == 33096
        assert r.x1 == 16761
        assert r.y0 == 24770
        assert r.y1 == 29491

    def test_accessor_offsets(self):
        """Test accessors read the documented offsets."""
        r = RectKey.from_fields(X0, X1, Y0, Y1)
        assert decode_field(r.value, X0_OFFSET) == r.x0
        assert decode_field(r.value, X1_OFFSET) == r.x1
        assert decode_field(r.value, Y0_OFFSET) == r.y0
        assert decode_field(r.value, Y1_OFFSET) == r.y1

    def test_from_fields_truncates(self):
        """Test wide inputs are reduced to 16 bits."""
        r = RectKey.from_fields(X0, 147833, Y0, 95027)
        assert r.fields() == (X0, X1, Y0, Y1)

    def test_from_fields_strict(self):
        """Test strict construction rejects wide inputs."""
        with pytest.raises(FieldRangeError):
            RectKey.from_fields(X0, 147833, Y0, Y1, strict=True)

    def test_with_setters(self):
        """Test setters return new keys and leave the original alone."""
        r = RectKey.from_fields(1, 2, 3, 4)
        r2 = r.with_x0(10).with_x1(20).with_y0(30).with_y1(40)
        assert r.fields() == (1, 2, 3, 4)
        assert r2.fields() == (10, 20, 30, 40)

    def test_setter_isolation(self):
        """Test a setter changes only its own field."""
        r = RectKey.from_fields(X0, X1, Y0, Y1)
        assert r.with_y0(7).fields() == (X0, X1, 7, Y1)

    def test_setter_truncates(self):
        """Test setters use the truncating codec."""
        r = RectKey().with_x1(70000)
        assert r.x1 == 4464

    def test_immutable(self):
        """Test keys cannot be modified in place."""
        r = RectKey(5)
        with pytest.raises(AttributeError):
            r.value = 6

    def test_equality(self):
        """Test keys with equal values compare equal."""
        assert RectKey.from_fields(1, 2, 3, 4) == RectKey.from_fields(1, 2, 3, 4)
        assert RectKey.from_fields(1, 2, 3, 4) != RectKey.from_fields(1, 2, 3, 5)

    def test_binary(self):
        """Test binary formatting."""
        assert RectKey(5).binary() == "101"
        assert RectKey.from_fields(1 << 15, 0, 0, 0).binary() == "1" + "0" * 63

    def test_invalid_key(self):
        """Test keys outside [0, 2^W - 1] raise."""
        with pytest.raises(ValueError):
            RectKey(-1)
        with pytest.raises(ValueError):
            RectKey(1 << 64)

    def test_requires_four_dimensions(self):
        """Test layouts with other dimension counts are rejected."""
        with pytest.raises(ValueError):
            RectKey(0, KeyLayout(total_bits=64, dimensions=2))

    def test_custom_layout(self):
        """Test an 8-bit-per-field layout."""
        layout = KeyLayout(total_bits=32)
        r = RectKey.from_fields(255, 1, 300, 0, layout)
        assert r.fields() == (255, 1, 300 % 256, 0)
        assert r.value <= layout.key_max
