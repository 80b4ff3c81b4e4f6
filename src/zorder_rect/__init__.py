"""
zorder-rect: Z-order rectangle encoding and approximate matching.

This package interleaves the four edges of an axis-aligned rectangle
(x0, x1, y0, y1) into one fixed-width integer key, so that rectangles can
be compared approximately by truncating keys to a number of precision bits
per dimension.
"""

__version__ = "0.1.0"

from .zorder import (
    KeyLayout,
    DEFAULT_LAYOUT,
    FieldRangeError,
    check_key,
    encode_field,
    decode_field,
    field_mask,
    X0_OFFSET,
    X1_OFFSET,
    Y0_OFFSET,
    Y1_OFFSET,
)
from .rect import RectKey
from .span import (
    SpanConfig,
    truncate_key,
    precision_step,
    matches,
    min_span_rectangle,
    max_span_rectangle,
    span_rectangles,
)
from .coords import to_field, to_coordinate, rect_from_coords, rect_to_coords
from .oracle import Oracle, ListOracle
from .duckdb_oracle import DuckDBOracle

__all__ = [
    "KeyLayout",
    "DEFAULT_LAYOUT",
    "FieldRangeError",
    "check_key",
    "encode_field",
    "decode_field",
    "field_mask",
    "X0_OFFSET",
    "X1_OFFSET",
    "Y0_OFFSET",
    "Y1_OFFSET",
    "RectKey",
    "SpanConfig",
    "truncate_key",
    "precision_step",
    "matches",
    "min_span_rectangle",
    "max_span_rectangle",
    "span_rectangles",
    "to_field",
    "to_coordinate",
    "rect_from_coords",
    "rect_to_coords",
    "Oracle",
    "ListOracle",
    "DuckDBOracle",
]
