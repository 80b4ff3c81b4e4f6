"""
Z-order (Morton) codec for packing fixed-width unsigned fields into one key.

Bits of each field are interleaved so that, reading the key from the most
significant bit down, every dimension contributes one bit before any
dimension contributes its next less significant bit. Field bit i of the
dimension at offset d lives at key bit position i * D + d.

With the default layout (64 bits, 4 dimensions) the offsets are:
- 3: x0 (owns the most significant key bit)
- 2: x1
- 1: y0
- 0: y1 (owns the least significant key bit)

Values wider than the per-dimension bit budget are silently truncated unless
strict mode is requested. Negative values are not supported.
"""

from dataclasses import dataclass


# Dimension offsets for the rectangle layout
Y1_OFFSET = 0
Y0_OFFSET = 1
X1_OFFSET = 2
X0_OFFSET = 3


class FieldRangeError(ValueError):
    """Raised in strict mode when a field value exceeds its bit budget."""


@dataclass(frozen=True)
class KeyLayout:
    """Bit layout of an interleaved key."""

    total_bits: int = 64
    """Width W of the composite key."""

    dimensions: int = 4
    """Number D of interleaved fields."""

    def __post_init__(self):
        if self.total_bits < 1:
            raise ValueError("total_bits must be at least 1")
        if self.dimensions < 1:
            raise ValueError("dimensions must be at least 1")
        if self.total_bits % self.dimensions != 0:
            raise ValueError(
                f"total_bits={self.total_bits} is not divisible by "
                f"dimensions={self.dimensions}"
            )

    @property
    def field_bits(self) -> int:
        """Bits available to each dimension (W / D)."""
        return self.total_bits // self.dimensions

    @property
    def field_max(self) -> int:
        """Largest value a single field can hold."""
        return (1 << self.field_bits) - 1

    @property
    def key_max(self) -> int:
        """Largest value the composite key can hold."""
        return (1 << self.total_bits) - 1


DEFAULT_LAYOUT = KeyLayout()


def _check_offset(offset: int, layout: KeyLayout) -> None:
    if not 0 <= offset < layout.dimensions:
        raise ValueError(
            f"Dimension offset {offset} outside [0, {layout.dimensions - 1}]"
        )


def check_key(key: int, layout: KeyLayout = DEFAULT_LAYOUT) -> None:
    """Raise ValueError unless key fits in [0, 2^W - 1]."""
    if not 0 <= key <= layout.key_max:
        raise ValueError(f"Key {key} outside [0, {layout.key_max}]")


def field_mask(offset: int, layout: KeyLayout = DEFAULT_LAYOUT) -> int:
    """
    Build the key mask covering every bit owned by one dimension.

    Args:
        offset: Dimension offset in [0, D-1]
        layout: Key layout

    Returns:
        Integer with bit i * D + offset set for every i in [0, W/D)
    """
    _check_offset(offset, layout)
    mask = 0
    for i in range(layout.field_bits):
        mask |= 1 << (i * layout.dimensions + offset)
    return mask


def encode_field(
    key: int,
    value: int,
    offset: int,
    layout: KeyLayout = DEFAULT_LAYOUT,
    strict: bool = False,
) -> int:
    """
    Replace one dimension's bits in an interleaved key.

    Args:
        key: Current key
        value: Unsigned field value, up to W/D bits
        offset: Dimension offset in [0, D-1]
        layout: Key layout
        strict: Raise FieldRangeError instead of truncating wide values

    Returns:
        New key with the dimension's slot replaced; other dimensions untouched

    High bits of value beyond W/D are dropped without error unless strict.
    """
    check_key(key, layout)
    if value < 0:
        raise ValueError(f"Field value must be non-negative, got {value}")
    if strict and value > layout.field_max:
        raise FieldRangeError(
            f"Field value {value} does not fit in {layout.field_bits} bits"
        )

    # Clear the slot, then copy the low W/D bits of value into it
    result = key & ~field_mask(offset, layout)

    for i in range(layout.field_bits):
        if value & (1 << i):
            result |= 1 << (i * layout.dimensions + offset)

    return result


def decode_field(key: int, offset: int, layout: KeyLayout = DEFAULT_LAYOUT) -> int:
    """
    Extract one dimension's value from an interleaved key.

    Args:
        key: Interleaved key
        offset: Dimension offset in [0, D-1]
        layout: Key layout

    Returns:
        The field value, in [0, 2^(W/D) - 1]
    """
    _check_offset(offset, layout)
    check_key(key, layout)

    result = 0
    for i in range(layout.field_bits):
        if key & (1 << (i * layout.dimensions + offset)):
            result |= 1 << i
    return result
