"""
Command-line front end: build a display set, project each display, report,
and optionally save the set and write plots.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .cli_parser import parse_args
from .geometry import Display, GeometryError
from .io_config import ConfigError, load_config, save_config
from .layout import place_adjacent
from .projection import EdgeDistanceMode, PlaneProjectionResult, project_display
from .report import format_projection, single_line_summary

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Set up logging configuration."""
    if getattr(args, 'verbose', False):
        args.log_level = "DEBUG"

    level = getattr(logging, getattr(args, 'log_level', 'INFO'), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.log_level != "DEBUG":
        logging.getLogger("matplotlib").setLevel(logging.WARNING)
        logging.getLogger("PIL").setLevel(logging.WARNING)
        logging.getLogger("fontTools").setLevel(logging.WARNING)


def build_displays(args: argparse.Namespace) -> List[Display]:
    """Display set from --config, or from --size/--position/--rotation, plus --place-right."""
    if args.config:
        displays = load_config(args.config)
    else:
        w, h = args.size
        x, y, z = args.position
        yaw, pitch, roll = args.rotation
        displays = [Display(width=w, height=h, x=x, y=y, z=z,
                            yaw=yaw, pitch=pitch, roll=roll, name=args.name)]

    for yaw in (getattr(args, "place_right", None) or []):
        if not displays:
            raise ConfigError("--place-right needs at least one display to attach to")
        ref = displays[-1]
        new = place_adjacent(ref, width=ref.width, height=ref.height, yaw=yaw,
                             name=f"Display {len(displays) + 1}")
        logger.debug("Placed %s at (%.4f, %.4f, %.4f)", new.name, new.x, new.y, new.z)
        displays.append(new)
    return displays


def run_projection(displays: Sequence[Display], *, near: float,
                   mode: EdgeDistanceMode) -> List[PlaneProjectionResult]:
    return [project_display(d, near_distance=near, mode=mode) for d in displays]


def _write_plots(args, displays: Sequence[Display]) -> None:
    plot_mode = getattr(args, "_plot_mode", "none")
    if plot_mode == "none":
        return
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    selected = args.select - 1 if args.select else None
    if plot_mode in ("2d", "both"):
        from .viz.plots import plot_three_views
        png = plot_three_views(displays, str(outdir / "views.png"),
                               selected=selected, near_distance=args.near)
        print(f"Three-view plot: {png}")
    if plot_mode in ("3d", "both"):
        from .viz.plot3d import plot_displays_3d
        html = plot_displays_3d(displays, str(outdir / "displays_3d.html"))
        print(f"3D view: {html}")


def main_with_args(args: argparse.Namespace) -> int:
    """Main function that takes parsed arguments.

    Returns:
        Exit code (0 for success, 1 for geometry/configuration errors)
    """
    if args.version:
        from . import __version__
        print(__version__)
        return 0

    _setup_logging(args)

    try:
        displays = build_displays(args)
        if args.select is not None and args.select > len(displays):
            raise ConfigError(f"--select {args.select} is out of range for {len(displays)} display(s)")
        results = run_projection(displays, near=args.near, mode=EdgeDistanceMode(args.edge_mode))

        for res in results:
            print(single_line_summary(res) if args.summary else format_projection(res))
            if not args.summary:
                print()

        if args.save:
            path = save_config(displays, args.save)
            print(f"Configuration saved: {path}")

        _write_plots(args, displays)
    except (GeometryError, ConfigError) as e:
        logger.error(f"{e}")
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        sys.exit(main_with_args(args))
    except SystemExit:
        raise
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
