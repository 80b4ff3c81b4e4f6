"""
Rectangle representation backed by a single interleaved key.

A rectangle is the pair of intervals [x0, x1] and [y0, y1] in unsigned
field coordinates. It is never stored as four separate integers: RectKey
wraps the Z-order key and reads or replaces fields through the codec.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple

from .zorder import (
    DEFAULT_LAYOUT,
    KeyLayout,
    X0_OFFSET,
    X1_OFFSET,
    Y0_OFFSET,
    Y1_OFFSET,
    decode_field,
    encode_field,
)


@dataclass(frozen=True)
class RectKey:
    """
    An axis-aligned rectangle encoded as one Z-order key.

    Fields are interleaved as x0, x1, y0, y1 from the most significant
    bit down (offsets 3, 2, 1, 0).
    """
    value: int = 0
    layout: KeyLayout = DEFAULT_LAYOUT

    def __post_init__(self):
        if self.layout.dimensions != 4:
            raise ValueError(
                f"RectKey needs a 4-dimension layout, got {self.layout.dimensions}"
            )
        if not 0 <= self.value <= self.layout.key_max:
            raise ValueError(
                f"Key {self.value} outside [0, {self.layout.key_max}]"
            )

    @classmethod
    def from_fields(
        cls,
        x0: int,
        x1: int,
        y0: int,
        y1: int,
        layout: KeyLayout = DEFAULT_LAYOUT,
        strict: bool = False,
    ) -> RectKey:
        """
        Encode four field values into a rectangle key.

        Values wider than the layout's field width are truncated unless
        strict is set.
        """
        key = 0
        key = encode_field(key, x0, X0_OFFSET, layout, strict)
        key = encode_field(key, x1, X1_OFFSET, layout, strict)
        key = encode_field(key, y0, Y0_OFFSET, layout, strict)
        key = encode_field(key, y1, Y1_OFFSET, layout, strict)
        return cls(key, layout)

    @property
    def x0(self) -> int:
        return decode_field(self.value, X0_OFFSET, self.layout)

    @property
    def x1(self) -> int:
        return decode_field(self.value, X1_OFFSET, self.layout)

    @property
    def y0(self) -> int:
        return decode_field(self.value, Y0_OFFSET, self.layout)

    @property
    def y1(self) -> int:
        return decode_field(self.value, Y1_OFFSET, self.layout)

    def _with(self, value: int, offset: int) -> RectKey:
        return replace(self, value=encode_field(self.value, value, offset, self.layout))

    def with_x0(self, value: int) -> RectKey:
        """Return a copy with x0 replaced (truncating)."""
        return self._with(value, X0_OFFSET)

    def with_x1(self, value: int) -> RectKey:
        """Return a copy with x1 replaced (truncating)."""
        return self._with(value, X1_OFFSET)

    def with_y0(self, value: int) -> RectKey:
        """Return a copy with y0 replaced (truncating)."""
        return self._with(value, Y0_OFFSET)

    def with_y1(self, value: int) -> RectKey:
        """Return a copy with y1 replaced (truncating)."""
        return self._with(value, Y1_OFFSET)

    def fields(self) -> Tuple[int, int, int, int]:
        """Decode all fields as (x0, x1, y0, y1)."""
        return self.x0, self.x1, self.y0, self.y1

    def binary(self) -> str:
        """Binary representation of the key, without leading zeros."""
        return format(self.value, "b")
