"""
Command-line argument parsing for the display projection calculator.

This module handles argument parsing, validation, and normalization.
"""

from __future__ import annotations
import argparse
import logging
import math
from typing import Optional, Sequence

from .projection import DEFAULT_NEAR_DISTANCE, EdgeDistanceMode
from .io_config import ConfigError, get_file_store
from .presets import DISPLAY_PRESETS

DEFAULT_POSITION = (0.0, 0.0, 1.0)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="viewcal",
        description="Off-center projection calculator for physical display rigs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=r"""
Examples:
  # one 65" display 1.16 m in front of the eye
  python main.py --preset 65 --position 0 0 1.16

  # add a second display to its right, yawed 47 degrees, and plot both
  python main.py --preset 65 --position 0 0 1.16 --place-right 47 --plot

  # every display in a saved configuration, precise edge distances
  python main.py --config rig.json --edge-mode precise --near 0.05

Conventions:
  - Eye at the origin, +X right, +Y up, +Z forward
  - Rotations in degrees, applied roll -> pitch -> yaw
  - Corners reported as top-left, top-right, bottom-left, bottom-right
        """
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Print version and exit'
    )

    # Display source
    parser.add_argument(
        '--config',
        type=str,
        metavar='PATH',
        help='Configuration document (.json or .yaml) with a displays list'
    )
    parser.add_argument(
        '--size',
        nargs=2,
        type=float,
        metavar=('W', 'H'),
        help='Display size (width height) in metres'
    )
    parser.add_argument(
        '--preset',
        choices=sorted(DISPLAY_PRESETS, key=int),
        metavar='DIAG',
        help=f"Display size preset by diagonal inches ({', '.join(DISPLAY_PRESETS)})"
    )
    parser.add_argument(
        '--position',
        nargs=3,
        type=float,
        default=list(DEFAULT_POSITION),
        metavar=('X', 'Y', 'Z'),
        help='Display centre in metres, eye space (default: 0 0 1)'
    )
    parser.add_argument(
        '--rotation',
        nargs=3,
        type=float,
        default=[0.0, 0.0, 0.0],
        metavar=('YAW', 'PITCH', 'ROLL'),
        help='Display rotation in degrees (default: 0 0 0)'
    )
    parser.add_argument(
        '--name',
        type=str,
        help='Label for the display given on the command line'
    )
    parser.add_argument(
        '--place-right',
        type=float,
        action='append',
        metavar='YAW',
        help='Append a display of the same size to the right of the last one, at this yaw. Repeatable.'
    )

    # Computation
    parser.add_argument(
        '--near',
        type=float,
        default=DEFAULT_NEAR_DISTANCE,
        metavar='D',
        help=f'Near-clip distance for frustum parameters in metres (default: {DEFAULT_NEAR_DISTANCE})'
    )
    parser.add_argument(
        '--edge-mode',
        choices=[m.value for m in EdgeDistanceMode],
        default=EdgeDistanceMode.STABLE.value,
        help='Edge-distance algorithm (default: stable)'
    )

    # Output
    parser.add_argument(
        '--save',
        type=str,
        metavar='PATH',
        help='Write the display set to a configuration document (.json or .yaml)'
    )
    parser.add_argument(
        '--plot',
        action='store_true',
        help='Write a top/left/front three-view PNG'
    )
    parser.add_argument(
        '--plot-3d',
        dest='plot_3d',
        action='store_true',
        help='Write an interactive 3-D HTML view'
    )
    parser.add_argument(
        '--select',
        type=int,
        metavar='N',
        help='1-based index of the display to highlight in plots'
    )
    parser.add_argument(
        '--outdir',
        type=str,
        default='results',
        metavar='PATH',
        help="Directory to write plots (default: 'results')"
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print one line per display instead of the full report'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'NOTSET'],
        help='Logging level (default: INFO).'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Shortcut for --log-level DEBUG'
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate parsed command-line arguments.

    Args:
        args: Parsed command-line arguments

    Raises:
        ValueError: If arguments are invalid or missing
    """
    if args.config:
        try:
            store = get_file_store()
        except ConfigError as e:
            raise ValueError(str(e)) from e
        if not store.exists(args.config):
            raise ValueError(f"Configuration file not found: {args.config}")
        if args.size or args.preset:
            raise ValueError("--config cannot be combined with --size/--preset")
    else:
        if not args.size and not args.preset:
            raise ValueError("--size or --preset is required when not using --config")
        if args.size and args.preset:
            raise ValueError("Specify only one of --size or --preset")

    if args.size:
        w, h = args.size
        if w <= 0 or h <= 0:
            raise ValueError(f"Display dimensions must be positive, got {w} × {h}")

    if not math.isfinite(args.near) or args.near <= 0:
        raise ValueError(f"Near distance must be positive, got {args.near}")

    if args.select is not None and args.select < 1:
        raise ValueError(f"--select is 1-based, got {args.select}")


def normalize_args(args: argparse.Namespace) -> argparse.Namespace:
    """Normalise inexpensive options and decide a single internal plot mode."""
    logger = logging.getLogger(__name__)

    if getattr(args, "verbose", False):
        args.log_level = "DEBUG"

    if not getattr(args, "outdir", None):
        args.outdir = "results"

    if args.preset and not args.size:
        w, h = DISPLAY_PRESETS[str(args.preset)]
        args.size = [w, h]
        logger.debug(f"Size from preset {args.preset}: {w} × {h} m")

    if getattr(args, "plot", False) and getattr(args, "plot_3d", False):
        args._plot_mode = "both"
    elif getattr(args, "plot_3d", False):
        args._plot_mode = "3d"
    elif getattr(args, "plot", False):
        args._plot_mode = "2d"
    else:
        args._plot_mode = "none"

    return args


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse, validate and normalise; usage errors exit via parser.error."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.version:
        return normalize_args(args)
    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))
    return normalize_args(args)
