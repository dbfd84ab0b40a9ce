"""
Text formatting of projection results.

Distances are printed in metres to 3 decimal places.
"""

from __future__ import annotations
from typing import Iterable, List
import math

from .projection import CORNER_ORDER, EdgeDistances, Frustum, PlaneProjectionResult

_CORNER_LABELS = dict(zip(CORNER_ORDER, ("Top-Left", "Top-Right", "Bottom-Left", "Bottom-Right")))


def fmt_m(value: float) -> str:
    return f"{value + 0.0:.3f}m"


def fmt_vec(v: Iterable[float]) -> str:
    # + 0.0 folds negative zero so it prints as 0.000
    x, y, z = (float(c) + 0.0 for c in v)
    return f"({x:.3f}, {y:.3f}, {z:.3f})"


def format_edge_distances(edges: EdgeDistances) -> str:
    lines = [f"Distances from nearest point to display edges ({edges.mode.value}):"]
    for name in ("left", "top", "right", "bottom"):
        lines.append(f"  {name.capitalize()}: {fmt_m(getattr(edges, name))}")
    return "\n".join(lines)


def format_frustum(frustum: Frustum) -> str:
    return "\n".join([
        f"Camera Near Plane Frustum (distance: {frustum.near_distance}m):",
        f"  Top: {frustum.top:.3f}",
        f"  Left: {frustum.left:.3f}",
        f"  Right: {frustum.right:.3f}",
        f"  Bottom: {frustum.bottom:.3f}",
    ])


def format_projection(result: PlaneProjectionResult) -> str:
    """Multi-line report of one display's projection."""
    np_ = result.nearest_point
    lines: List[str] = []
    title = result.display.name or "Display"
    lines.append(f"=== {title} ===")
    lines.append("Offcenter Projection Parameters:")
    lines.append(f"  Eye to nearest point: {fmt_m(np_.distance)}")
    if np_.distance < 0:
        lines.append("  Warning: display faces away from the eye")
    lines.append(f"  Eye to display centre: {fmt_m(result.eye_to_display_distance)}")
    lines.append("Nearest Point on Plane:")
    lines.append(f"  Position: {fmt_vec(np_.point)}")
    lines.append(f"  Normal: {fmt_vec(np_.normal)}")
    lines.append("Corner vectors from nearest point:")
    for key, vec in zip(CORNER_ORDER, result.corners_relative_to_nearest):
        lines.append(f"  {_CORNER_LABELS[key]}: {fmt_vec(vec)}")
    lines.append(format_edge_distances(result.edge_distances))
    fov = f"Field of view: {result.fov_horizontal:.2f}° × {result.fov_vertical:.2f}°"
    if not (math.isnan(result.horizontal_asymmetry) or math.isnan(result.vertical_asymmetry)):
        fov += (f" (asymmetry h={result.horizontal_asymmetry:.3f},"
                f" v={result.vertical_asymmetry:.3f})")
    lines.append(fov)
    lines.append(format_frustum(result.frustum))
    return "\n".join(lines)


def single_line_summary(result: PlaneProjectionResult) -> str:
    f = result.frustum
    name = result.display.name or "display"
    return (f"[{name}] distance={fmt_m(result.nearest_point.distance)}, "
            f"frustum(near={f.near_distance:g}) l={f.left:.4f} r={f.right:.4f} "
            f"t={f.top:.4f} b={f.bottom:.4f}")
