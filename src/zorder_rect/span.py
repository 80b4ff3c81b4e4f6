"""
Approximate rectangle matching at reduced precision.

Truncating the low bits of an interleaved key clears the low bits of every
dimension at once. Two rectangles "match" at precision p when their keys
agree after keeping only the top p bits of each field. The set of matching
rectangles is bounded (approximately, per axis) by two span rectangles:

- minimum span: the bucket corner with x0 and y0 pushed in by one step
- maximum span: the bucket corner with x1 and y1 pushed out by one step

where one step is 2^(field_bits - p), the size of a bucket along one axis.

Stepped fields saturate at the field maximum, so the top bucket on an axis
(and every bucket at precision 0) spans up to field_max rather than past it.
"""

from dataclasses import dataclass
from typing import Tuple

from .rect import RectKey
from .zorder import DEFAULT_LAYOUT, KeyLayout, check_key


def _check_precision(precision_bits: int, layout: KeyLayout) -> None:
    if not 0 <= precision_bits <= layout.field_bits:
        raise ValueError(
            f"precision_bits {precision_bits} outside [0, {layout.field_bits}]"
        )


def truncated_bit_count(precision_bits: int, layout: KeyLayout = DEFAULT_LAYOUT) -> int:
    """Number of low key bits cleared at the given precision."""
    _check_precision(precision_bits, layout)
    return (layout.field_bits - precision_bits) * layout.dimensions


def precision_step(precision_bits: int, layout: KeyLayout = DEFAULT_LAYOUT) -> int:
    """Per-axis field increment of one unit at the given precision."""
    _check_precision(precision_bits, layout)
    return 1 << (layout.field_bits - precision_bits)


def truncate_key(key: int, precision_bits: int, layout: KeyLayout = DEFAULT_LAYOUT) -> int:
    """
    Compute the bucket key of a key at the given precision.

    Args:
        key: Interleaved key
        precision_bits: Most significant bits kept per dimension
        layout: Key layout

    Returns:
        The key with its low (field_bits - precision_bits) * D bits cleared
    """
    check_key(key, layout)
    n = truncated_bit_count(precision_bits, layout)
    return (key >> n) << n


def matches(a: int, b: int, precision_bits: int, layout: KeyLayout = DEFAULT_LAYOUT) -> bool:
    """Check whether two keys fall in the same bucket at the given precision."""
    return truncate_key(a, precision_bits, layout) == truncate_key(b, precision_bits, layout)


def min_span_rectangle(rect: RectKey, precision_bits: int) -> RectKey:
    """
    Compute the smallest rectangle guaranteed to match at this precision.

    Starts from the bucket key and moves x0 and y0 up by one step.
    """
    step = precision_step(precision_bits, rect.layout)
    bucket = RectKey(truncate_key(rect.value, precision_bits, rect.layout), rect.layout)
    top = rect.layout.field_max
    return bucket.with_x0(min(bucket.x0 + step, top)).with_y0(min(bucket.y0 + step, top))


def max_span_rectangle(rect: RectKey, precision_bits: int) -> RectKey:
    """
    Compute the largest rectangle guaranteed to match at this precision.

    Starts from the bucket key and moves x1 and y1 up by one step.
    """
    step = precision_step(precision_bits, rect.layout)
    bucket = RectKey(truncate_key(rect.value, precision_bits, rect.layout), rect.layout)
    top = rect.layout.field_max
    return bucket.with_x1(min(bucket.x1 + step, top)).with_y1(min(bucket.y1 + step, top))


def span_rectangles(rect: RectKey, precision_bits: int) -> Tuple[RectKey, RectKey]:
    """Return (min_span, max_span) for a rectangle."""
    return (
        min_span_rectangle(rect, precision_bits),
        max_span_rectangle(rect, precision_bits),
    )


@dataclass
class SpanConfig:
    """Precision settings for approximate matching."""

    precision_bits: int
    """Most significant bits kept per dimension."""

    layout: KeyLayout = DEFAULT_LAYOUT
    """Key layout the precision applies to."""

    def __post_init__(self):
        _check_precision(self.precision_bits, self.layout)

    @property
    def step(self) -> int:
        return precision_step(self.precision_bits, self.layout)

    @property
    def truncated_bit_count(self) -> int:
        return truncated_bit_count(self.precision_bits, self.layout)

    @property
    def buckets_per_axis(self) -> int:
        """Number of distinct bucket positions along one field."""
        return 1 << self.precision_bits

    def truncate(self, key: int) -> int:
        return truncate_key(key, self.precision_bits, self.layout)

    def spans(self, rect: RectKey) -> Tuple[RectKey, RectKey]:
        if rect.layout != self.layout:
            raise ValueError(f"Rectangle layout {rect.layout} does not match {self.layout}")
        return span_rectangles(rect, self.precision_bits)
