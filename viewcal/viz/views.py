# viewcal/viz/views.py
from __future__ import annotations

from typing import Iterable, Literal, Tuple
import numpy as np

from viewcal.projection import TL, TR, BL, BR

__all__ = [
    "VIEW_AXES",
    "OUTLINE_ORDER",
    "project_to_view",
    "outline",
    "to_canvas",
    "view_limits",
]

ViewName = Literal["top", "left", "front"]

# (horizontal, vertical) eye-space axis indices per orthographic view
#   top   : X right, Z forward (up on screen)
#   left  : Z right, Y up
#   front : X right, Y up
VIEW_AXES = {
    "top": (0, 2),
    "left": (2, 1),
    "front": (0, 1),
}

# TL, TR, BL, BR -> closed perimeter TL, TR, BR, BL
OUTLINE_ORDER = (TL, TR, BR, BL)


def project_to_view(points: np.ndarray | Iterable[Iterable[float]], view: ViewName) -> np.ndarray:
    """Orthographic projection of (N,3) eye-space points to (N,2) view coordinates."""
    try:
        h, v = VIEW_AXES[view]
    except KeyError:
        raise ValueError(f"view must be one of {sorted(VIEW_AXES)}, got {view!r}") from None
    P = np.atleast_2d(np.asarray(points, dtype=float))
    return P[:, [h, v]]


def outline(corners3d: np.ndarray, view: ViewName) -> np.ndarray:
    """Closed 5-point perimeter of a display's corners in a view."""
    ordered = np.asarray(corners3d, dtype=float)[list(OUTLINE_ORDER)]
    xy = project_to_view(ordered, view)
    return np.vstack([xy, xy[:1]])


def to_canvas(points_2d: np.ndarray, width_px: float, height_px: float, scale: float) -> np.ndarray:
    """
    Map view coordinates (metres) to canvas pixels with the eye at the canvas centre.
    Screen Y grows downwards, so the vertical axis is inverted.
    """
    P = np.atleast_2d(np.asarray(points_2d, dtype=float))
    ox, oy = 0.5 * width_px, 0.5 * height_px
    return np.column_stack([ox + P[:, 0] * scale, oy - P[:, 1] * scale])


def view_limits(point_sets: Iterable[np.ndarray], pad: float = 0.05) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Axis bounds covering all point sets and the eye, with fractional padding."""
    arrays = [np.atleast_2d(np.asarray(p, dtype=float)) for p in point_sets]
    arrays.append(np.zeros((1, 2)))
    both = np.vstack(arrays)
    xmin, ymin = both.min(axis=0)
    xmax, ymax = both.max(axis=0)
    dx, dy = xmax - xmin, ymax - ymin
    ex = pad if dx < 1e-12 else pad * dx
    ey = pad if dy < 1e-12 else pad * dy
    return (float(xmin - ex), float(xmax + ex)), (float(ymin - ey), float(ymax + ey))
