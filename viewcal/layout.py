"""
Placement helpers for multi-display rigs.

Positions a rotated display so that one of its edges meets an edge of a
reference display, and measures how closely two displays actually meet.
"""

from __future__ import annotations
from typing import Dict, Literal, Tuple
import numpy as np

from .geometry import Display, rotation_matrix
from .projection import TL, TR, BL, BR, _local_corners, display_corners


def edge_midpoints(corners: np.ndarray) -> Dict[str, np.ndarray]:
    """Midpoints of the left/right/top/bottom edges of (4,3) TL, TR, BL, BR corners."""
    c = np.asarray(corners, dtype=float)
    return {
        "left": 0.5 * (c[TL] + c[BL]),
        "right": 0.5 * (c[TR] + c[BR]),
        "top": 0.5 * (c[TL] + c[TR]),
        "bottom": 0.5 * (c[BL] + c[BR]),
    }


def place_adjacent(
    reference: Display,
    *,
    width: float,
    height: float,
    yaw: float = 0.0,
    pitch: float = 0.0,
    roll: float = 0.0,
    side: Literal["right", "left"] = "right",
    name: str | None = None,
) -> Display:
    """
    Build a display whose inner edge midpoint coincides with the reference's outer edge midpoint.

    side="right": new display's local-left edge meets the reference's right edge.
    side="left":  new display's local-right edge meets the reference's left edge.
    """
    if side not in ("right", "left"):
        raise ValueError("side must be 'right' or 'left'")
    target = edge_midpoints(display_corners(reference))[side]

    inner = "left" if side == "right" else "right"
    R = rotation_matrix(yaw, pitch, roll)
    local = _local_corners(width, height) @ R.T
    offset = edge_midpoints(local)[inner]

    x, y, z = (target - offset).tolist()
    return Display(width=width, height=height, x=x, y=y, z=z,
                   yaw=yaw, pitch=pitch, roll=roll, name=name)


def shared_edge_gap(left_display: Display, right_display: Display) -> Tuple[float, float]:
    """
    Distances (top, bottom) between the left display's right corners and the
    right display's left corners. Both are ~0 for displays that touch.
    """
    a = display_corners(left_display)
    b = display_corners(right_display)
    top = float(np.linalg.norm(a[TR] - b[TL]))
    bottom = float(np.linalg.norm(a[BR] - b[BL]))
    return top, bottom
