"""
Command-line interface for zorder-rect.

Provides commands for encoding rectangles, comparing keys and showing
precision statistics.
"""

import argparse
import sys
from typing import Optional

from .coords import rect_from_coords, rect_to_coords, to_coordinate
from .rect import RectKey
from .span import SpanConfig, matches
from .zorder import KeyLayout


# Demo rectangle in a [0, 100] domain
DEFAULT_RECT = (20.1234123, 89.99, 15.122122, 57.999988)


def _add_layout_args(parser: argparse.ArgumentParser, precision: int = 4) -> None:
    parser.add_argument(
        "-p", "--precision",
        type=int,
        default=precision,
        help=f"Bits of precision kept per dimension (default: {precision})",
    )
    parser.add_argument(
        "--total-bits",
        type=int,
        default=64,
        help="Width of the interleaved key in bits (default: 64)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zorder-rect",
        description="Encode rectangles as Z-order keys and inspect approximate matches",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode a rectangle and show its span rectangles",
    )
    for name, default in zip(("x0", "x1", "y0", "y1"), DEFAULT_RECT):
        encode_parser.add_argument(
            f"--{name}",
            type=float,
            default=default,
            help=f"Rectangle {name} in domain units (default: {default})",
        )
    encode_parser.add_argument(
        "--domain-max",
        type=float,
        default=100.0,
        help="Upper bound of the coordinate domain (default: 100)",
    )
    _add_layout_args(encode_parser)

    # Match command
    match_parser = subparsers.add_parser(
        "match",
        help="Check whether two keys match at a precision",
    )
    match_parser.add_argument("key_a", type=int, help="First encoded key")
    match_parser.add_argument("key_b", type=int, help="Second encoded key")
    _add_layout_args(match_parser)

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show bucket statistics for a given precision",
    )
    stats_parser.add_argument(
        "--domain-max",
        type=float,
        default=100.0,
        help="Upper bound of the coordinate domain (default: 100)",
    )
    _add_layout_args(stats_parser)

    return parser


def _format_coords(coords) -> str:
    x0, x1, y0, y1 = coords
    return f"x0 {x0:f} x1 {x1:f} y0 {y0:f} y1 {y1:f}"


def cmd_encode(args: argparse.Namespace) -> int:
    """Handle the encode command."""
    config = SpanConfig(args.precision, KeyLayout(args.total_bits))
    rect = rect_from_coords(args.x0, args.x1, args.y0, args.y1, args.domain_max, config.layout)

    print(f"encoded value: {rect.value}")
    print(f"encoded binary value: 0b{rect.binary()}")
    print("fields: x0 {} x1 {} y0 {} y1 {}".format(*rect.fields()))
    print(f"coords: {_format_coords(rect_to_coords(rect, args.domain_max))}")

    bucket = RectKey(config.truncate(rect.value), config.layout)
    min_span, max_span = config.spans(rect)

    print(f"\nPrecision {config.precision_bits} bits (step {config.step}):")
    print(f"  bucket key: {bucket.value}")
    print("  min span fields: x0 {} x1 {} y0 {} y1 {}".format(*min_span.fields()))
    print(f"  min span coords: {_format_coords(rect_to_coords(min_span, args.domain_max))}")
    print("  max span fields: x0 {} x1 {} y0 {} y1 {}".format(*max_span.fields()))
    print(f"  max span coords: {_format_coords(rect_to_coords(max_span, args.domain_max))}")

    return 0


def cmd_match(args: argparse.Namespace) -> int:
    """Handle the match command."""
    config = SpanConfig(args.precision, KeyLayout(args.total_bits))
    a = RectKey(args.key_a, config.layout)
    b = RectKey(args.key_b, config.layout)

    print(f"bucket a: {config.truncate(a.value)}")
    print(f"bucket b: {config.truncate(b.value)}")

    if matches(a.value, b.value, config.precision_bits, config.layout):
        print(f"match at {config.precision_bits} bits")
        return 0

    print(f"no match at {config.precision_bits} bits")
    return 1


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle the stats command."""
    config = SpanConfig(args.precision, KeyLayout(args.total_bits))
    layout = config.layout

    bucket_size = to_coordinate(config.step, args.domain_max, layout.field_bits)

    print(f"Bucket statistics for precision {config.precision_bits}:")
    print(f"  Key width: {layout.total_bits} bits, {layout.dimensions} dimensions")
    print(f"  Bits per field: {layout.field_bits}")
    print(f"  Max field value: {layout.field_max}")
    print(f"  Truncated key bits: {config.truncated_bit_count}")
    print(f"  Step: {config.step}")
    print(f"  Buckets per axis: {config.buckets_per_axis:,}")
    print(f"  Bucket size: {bucket_size:f} domain units")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "encode": cmd_encode,
        "match": cmd_match,
        "stats": cmd_stats,
    }

    try:
        return commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
