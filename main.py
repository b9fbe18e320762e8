#!/usr/bin/env python3
"""
Dungeon Layout - Command Line Entry Point

Generates a BSP dungeon layout and prints it as a summary, JSON, a Graphviz
graph or an ASCII map. Run `python main.py --help` for details.
"""

import argparse
import logging
import sys
from textwrap import dedent

from dungeon_layout import __version__
from dungeon_layout.conversion import render_ascii
from dungeon_layout.debug.graph_export import export_layout_dot, export_layout_json
from dungeon_layout.generators.bsp import BSPGenerator, DEFAULT_CONFIG, DungeonGenerationError
from dungeon_layout.validation import LayoutValidator

logger = logging.getLogger("dungeon_layout.main")

FORMATS = ("summary", "json", "dot", "ascii")


def _digits(text: str) -> int:
    """Accept only plain digit strings for size parameters."""
    if not text.isdigit():
        raise argparse.ArgumentTypeError(f"expected a non-negative whole number, got {text!r}")
    return int(text)


def parse_args(argv: list) -> argparse.Namespace:
    epilog = dedent(
        """
        Examples:
          # Default 100x100 layout with a random seed
          python main.py

          # Reproduce a layout and draw it with leaf borders
          python main.py --seed 42 --format ascii --show-leaves

          # Export the room graph for Graphviz
          python main.py --seed 42 --format dot > dungeon.dot
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeon-layout",
        description="Generate a BSP dungeon layout.",
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"dungeon-layout {__version__}")
    parser.add_argument("--width", type=_digits, default=DEFAULT_CONFIG['map_width'],
                        help="Root region width (default: %(default)s)")
    parser.add_argument("--height", type=_digits, default=DEFAULT_CONFIG['map_height'],
                        help="Root region height (default: %(default)s)")
    parser.add_argument("--origin-x", type=int, default=DEFAULT_CONFIG['origin_x'],
                        help="Root region X origin (default: %(default)s)")
    parser.add_argument("--origin-y", type=int, default=DEFAULT_CONFIG['origin_y'],
                        help="Root region Y origin (default: %(default)s)")
    parser.add_argument("--min-leaf", type=_digits, default=DEFAULT_CONFIG['min_leaf_size'],
                        help="Minimum split size, 0 disables splitting (default: %(default)s)")
    parser.add_argument("--max-leaf", type=_digits, default=DEFAULT_CONFIG['max_leaf_size'],
                        help="Leaves above this size always split, 0 keeps one leaf (default: %(default)s)")
    parser.add_argument("--padding", type=_digits, default=DEFAULT_CONFIG['room_padding'],
                        help="Minimum border between leaf and room (default: %(default)s)")
    parser.add_argument("--adjacency-threshold", type=float, default=None,
                        help="Center distance below which rooms are linked (default: min leaf size)")
    parser.add_argument("--merge-anchor", choices=("start", "component"),
                        default=DEFAULT_CONFIG['merge_anchor'],
                        help="Measure bridge distances from the start room or the whole component")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: random, printed in the output)")
    parser.add_argument("--format", choices=FORMATS, default="summary",
                        help="Output format (default: %(default)s)")
    parser.add_argument("--show-leaves", action="store_true",
                        help="Draw leaf borders in ascii output")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    return {
        'map_width': args.width,
        'map_height': args.height,
        'origin_x': args.origin_x,
        'origin_y': args.origin_y,
        'min_leaf_size': args.min_leaf,
        'max_leaf_size': args.max_leaf,
        'room_padding': args.padding,
        'adjacency_threshold': args.adjacency_threshold,
        'merge_anchor': args.merge_anchor,
        'seed': args.seed,
    }


def main(argv: list) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        generator = BSPGenerator(build_config(args))
        layout = generator.generate()
    except DungeonGenerationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(export_layout_json(generator.export_layout(), layout.seed))
    elif args.format == "dot":
        print(export_layout_dot(generator.export_layout()))
    elif args.format == "ascii":
        print(render_ascii(layout, show_leaves=args.show_leaves))
    else:
        stats = generator.get_layout_stats()
        print(f"seed: {layout.seed}")
        for key, value in stats.items():
            print(f"{key}: {value}")

    validator = LayoutValidator()
    validator.validate(layout)
    if validator.has_errors():
        logger.error(validator.generate_report())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
