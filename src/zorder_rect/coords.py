"""
Coordinate mapping between a bounded float domain and unsigned field values.

A domain coordinate x in [0, domain_max] maps linearly onto the field range
[0, 2^field_bits - 1]:

    value = floor(x / domain_max * (2^field_bits - 1))
    x     = value / (2^field_bits - 1) * domain_max

The mapping truncates toward zero and does not clamp, so the round trip is
lossy by up to one field unit (domain_max / (2^field_bits - 1)). Coordinates
outside the domain are not validated; the codec truncates whatever comes out.
"""

from typing import Tuple

from .rect import RectKey
from .zorder import DEFAULT_LAYOUT, KeyLayout


def _field_scale(domain_max: float, field_bits: int) -> int:
    if domain_max <= 0:
        raise ValueError(f"domain_max must be positive, got {domain_max}")
    if field_bits < 1:
        raise ValueError(f"field_bits must be at least 1, got {field_bits}")
    return (1 << field_bits) - 1


def to_field(x: float, domain_max: float, field_bits: int) -> int:
    """
    Convert a domain coordinate to an unsigned field value.

    Args:
        x: Coordinate in [0, domain_max]
        domain_max: Upper bound of the domain
        field_bits: Bits per field

    Returns:
        Field value (truncated toward zero)
    """
    scale = _field_scale(domain_max, field_bits)
    return int((x / domain_max) * scale)


def to_coordinate(value: int, domain_max: float, field_bits: int) -> float:
    """
    Convert a field value back to a domain coordinate.

    This is the approximate inverse of to_field; it does not recover the
    truncated fraction.
    """
    scale = _field_scale(domain_max, field_bits)
    return value / scale * domain_max


def rect_from_coords(
    x0: float,
    x1: float,
    y0: float,
    y1: float,
    domain_max: float,
    layout: KeyLayout = DEFAULT_LAYOUT,
) -> RectKey:
    """Map a rectangle in domain coordinates to a rectangle key."""
    bits = layout.field_bits
    return RectKey.from_fields(
        to_field(x0, domain_max, bits),
        to_field(x1, domain_max, bits),
        to_field(y0, domain_max, bits),
        to_field(y1, domain_max, bits),
        layout,
    )


def rect_to_coords(rect: RectKey, domain_max: float) -> Tuple[float, float, float, float]:
    """Map a rectangle key back to domain coordinates as (x0, x1, y0, y1)."""
    bits = rect.layout.field_bits
    return tuple(to_coordinate(v, domain_max, bits) for v in rect.fields())
