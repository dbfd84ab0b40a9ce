"""
Off-center projection engine.

Given a Display, compute the point on its plane nearest the eye, the four
corners in eye space, the distances from that nearest point to each edge
(two algorithms), and asymmetric frustum parameters for a camera placed at
the eye. Every function is pure: inputs are never mutated and each call
returns freshly built arrays.

Corner order everywhere in this package: top-left, top-right, bottom-left,
bottom-right (indices TL, TR, BL, BR below).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union
import logging
import math
import numpy as np

from .geometry import (
    EPS,
    DegenerateGeometryError,
    Display,
    InvalidDisplayError,
    local_axes,
    plane_normal,
    rotation_matrix,
)

logger = logging.getLogger(__name__)

__all__ = [
    "CORNER_ORDER",
    "TL", "TR", "BL", "BR",
    "DEFAULT_NEAR_DISTANCE",
    "EdgeDistanceMode",
    "NearestPoint",
    "EdgeDistances",
    "Frustum",
    "PlaneProjectionResult",
    "nearest_point_on_plane",
    "display_corners",
    "corners_relative_to",
    "edge_distances",
    "near_plane_frustum",
    "project_display",
]

CORNER_ORDER = ("top_left", "top_right", "bottom_left", "bottom_right")
TL, TR, BL, BR = 0, 1, 2, 3

DEFAULT_NEAR_DISTANCE = 0.1

# (start, end) corner indices of each edge segment
_EDGE_SEGMENTS = {
    "left": (TL, BL),
    "top": (TL, TR),
    "right": (TR, BR),
    "bottom": (BL, BR),
}
EDGE_NAMES = ("left", "right", "top", "bottom")


class EdgeDistanceMode(str, Enum):
    """Edge-distance algorithm."""
    STABLE = "stable"    # project onto rotated local axes
    PRECISE = "precise"  # literal point-to-segment distance (legacy)


# ----------------------------
# Result containers
# ----------------------------

@dataclass(frozen=True, eq=False)
class NearestPoint:
    """
    Foot of the perpendicular from the eye onto the display plane.

    distance is signed along the viewing direction: positive when the eye
    is in front of the display face, negative when the panel faces away.
    """
    point: np.ndarray
    distance: float
    normal: np.ndarray

    @property
    def x(self) -> float:
        return float(self.point[0])

    @property
    def y(self) -> float:
        return float(self.point[1])

    @property
    def z(self) -> float:
        return float(self.point[2])


@dataclass(frozen=True, eq=False)
class EdgeDistances:
    left: float
    right: float
    top: float
    bottom: float
    nearest_points: Dict[str, np.ndarray]
    magnitudes: Dict[str, float]
    mode: EdgeDistanceMode = EdgeDistanceMode.STABLE

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in EDGE_NAMES}


@dataclass(frozen=True, eq=False)
class Frustum:
    near_distance: float
    left: float
    right: float
    top: float
    bottom: float
    scaled_corners: np.ndarray = field(repr=False, default=None)

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        """(near, left, right, top, bottom) for an off-axis projection matrix."""
        return (self.near_distance, self.left, self.right, self.top, self.bottom)


@dataclass(frozen=True, eq=False)
class PlaneProjectionResult:
    display: Display
    nearest_point: NearestPoint
    corners: np.ndarray                      # (4,3) TL, TR, BL, BR
    corners_relative_to_nearest: np.ndarray  # (4,3)
    edge_distances: EdgeDistances
    frustum: Frustum
    eye_to_display_distance: float
    corner_distances: np.ndarray             # (4,)
    angles_to_corners: np.ndarray            # (4,2) horizontal, vertical [deg]
    fov_horizontal: float
    fov_vertical: float
    horizontal_asymmetry: float
    vertical_asymmetry: float

    @property
    def eye_to_nearest_distance(self) -> float:
        return self.nearest_point.distance


# ----------------------------
# Core geometry
# ----------------------------

def nearest_point_on_plane(display: Display) -> NearestPoint:
    """
    Nearest point on the (infinite) display plane from the eye at the origin.
    A plane through the eye gives distance 0 and the origin; that is not an error.
    """
    normal = plane_normal(display)
    s = float(np.dot(display.position, normal))
    return NearestPoint(point=normal * s, distance=-s, normal=normal)


def _local_corners(width: float, height: float) -> np.ndarray:
    hw, hh = 0.5 * width, 0.5 * height
    return np.array(
        [
            [-hw,  hh, 0.0],  # top-left
            [ hw,  hh, 0.0],  # top-right
            [-hw, -hh, 0.0],  # bottom-left
            [ hw, -hh, 0.0],  # bottom-right
        ],
        dtype=float,
    )


def display_corners(display: Display) -> np.ndarray:
    """Four corners in eye space, rotated then translated by the display position."""
    R = rotation_matrix(display.yaw, display.pitch, display.roll)
    return _local_corners(display.width, display.height) @ R.T + display.position


def corners_relative_to(corners: np.ndarray, nearest: Union[NearestPoint, np.ndarray]) -> np.ndarray:
    origin = nearest.point if isinstance(nearest, NearestPoint) else np.asarray(nearest, dtype=float)
    return np.asarray(corners, dtype=float) - origin


# ----------------------------
# Edge distances
# ----------------------------

def _unit(v: np.ndarray, what: str) -> Tuple[np.ndarray, float]:
    length = float(np.linalg.norm(v))
    if length < EPS:
        raise DegenerateGeometryError(f"Zero-length {what} edge")
    return v / length, length


def _stable_from_frame(cx: float, cy: float, half_w: float, half_h: float,
                       lx: np.ndarray, ly: np.ndarray) -> EdgeDistances:
    left = cx - half_w
    right = cx + half_w
    top = cy + half_h
    bottom = cy - half_h
    signed = {"left": left, "right": right, "top": top, "bottom": bottom}
    nearest_points = {
        "left": lx * left,
        "right": lx * right,
        "top": ly * top,
        "bottom": ly * bottom,
    }
    return EdgeDistances(
        left=left, right=right, top=top, bottom=bottom,
        nearest_points=nearest_points,
        magnitudes={k: abs(v) for k, v in signed.items()},
        mode=EdgeDistanceMode.STABLE,
    )


def _stable_edge_distances(display: Display) -> EdgeDistances:
    nearest = nearest_point_on_plane(display)
    lx, ly = local_axes(display)
    rel_center = display.position - nearest.point
    cx = float(np.dot(rel_center, lx))
    cy = float(np.dot(rel_center, ly))
    return _stable_from_frame(cx, cy, 0.5 * display.width, 0.5 * display.height, lx, ly)


def _stable_from_corners(corners: np.ndarray) -> EdgeDistances:
    # Rebuild the local frame from the corners themselves.
    lx, width = _unit(corners[TR] - corners[TL], "top")
    ly, height = _unit(corners[TL] - corners[BL], "left")
    center = corners.mean(axis=0)
    cx = float(np.dot(center, lx))
    cy = float(np.dot(center, ly))
    return _stable_from_frame(cx, cy, 0.5 * width, 0.5 * height, lx, ly)


def _precise_edge_distances(corners: np.ndarray) -> EdgeDistances:
    """Point-to-segment distance from the local origin to each edge."""
    distances: Dict[str, float] = {}
    nearest_points: Dict[str, np.ndarray] = {}
    for name, (i, j) in _EDGE_SEGMENTS.items():
        start = corners[i]
        u, length = _unit(corners[j] - start, name)
        t = -float(np.dot(start, u))
        t = max(0.0, min(length, t))
        p = start + u * t
        nearest_points[name] = p
        distances[name] = float(np.linalg.norm(p))
    return EdgeDistances(
        left=distances["left"], right=distances["right"],
        top=distances["top"], bottom=distances["bottom"],
        nearest_points=nearest_points,
        magnitudes=dict(distances),
        mode=EdgeDistanceMode.PRECISE,
    )


def edge_distances(
    display: Optional[Display] = None,
    *,
    mode: Union[EdgeDistanceMode, str] = EdgeDistanceMode.STABLE,
    corners_relative: Optional[np.ndarray] = None,
) -> EdgeDistances:
    """
    Distances from the nearest point to the left/right/top/bottom edges.

    Args:
        display: Display to evaluate. May be omitted when corners_relative is given.
        mode: STABLE (signed offsets on the rotated local axes) or PRECISE
            (clamped point-to-segment distances).
        corners_relative: (4,3) corners already expressed relative to the
            nearest point; reused as-is instead of recomputing them.

    Returns:
        EdgeDistances with signed values, per-edge nearest points (relative to
        the nearest point) and absolute magnitudes.

    Raises:
        DegenerateGeometryError: if an edge has zero length.
    """
    mode = EdgeDistanceMode(mode)
    if corners_relative is None and display is None:
        raise TypeError("edge_distances requires a display or corners_relative")

    if corners_relative is not None:
        rel = np.asarray(corners_relative, dtype=float)
        if rel.shape != (4, 3):
            raise ValueError(f"corners_relative must have shape (4, 3), got {rel.shape}")
        if mode is EdgeDistanceMode.STABLE:
            return _stable_from_corners(rel)
        return _precise_edge_distances(rel)

    if mode is EdgeDistanceMode.STABLE:
        return _stable_edge_distances(display)
    nearest = nearest_point_on_plane(display)
    return _precise_edge_distances(corners_relative_to(display_corners(display), nearest))


# ----------------------------
# Frustum
# ----------------------------

def _frustum_from(corners_rel: np.ndarray, eye_to_nearest: float, near_distance: float) -> Frustum:
    try:
        near = float(near_distance)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidDisplayError(f"near_distance must be a number, got {near_distance!r}") from e
    if not math.isfinite(near) or near <= 0:
        raise InvalidDisplayError(f"near_distance must be positive and finite, got {near}")
    if abs(eye_to_nearest) < EPS:
        raise DegenerateGeometryError(
            "Display plane passes through the eye; cannot compute projection"
        )
    scale = near / eye_to_nearest
    scaled = np.asarray(corners_rel, dtype=float) * scale
    return Frustum(
        near_distance=near,
        left=float(scaled[TL, 0]),
        right=float(scaled[TR, 0]),
        top=float(scaled[TL, 1]),
        bottom=float(scaled[BL, 1]),
        scaled_corners=scaled,
    )


def near_plane_frustum(
    source: Union[Display, PlaneProjectionResult],
    near_distance: float = DEFAULT_NEAR_DISTANCE,
) -> Frustum:
    """
    Asymmetric frustum (left, right, top, bottom) at the given near-clip distance.

    The corners relative to the nearest point are scaled by
    near_distance / eye_to_nearest_distance; top/left come from the top-left
    corner, right from top-right and bottom from bottom-left.

    Raises:
        DegenerateGeometryError: if the display plane passes through the eye.
        InvalidDisplayError: if near_distance is not a positive finite number.
    """
    if isinstance(source, PlaneProjectionResult):
        return _frustum_from(source.corners_relative_to_nearest,
                             source.nearest_point.distance, near_distance)
    nearest = nearest_point_on_plane(source)
    rel = corners_relative_to(display_corners(source), nearest)
    return _frustum_from(rel, nearest.distance, near_distance)


# ----------------------------
# Aggregate
# ----------------------------

def _angular_extents(corners: np.ndarray) -> Tuple[np.ndarray, float, float, float, float]:
    horizontal = np.degrees(np.arctan2(corners[:, 0], corners[:, 2]))
    vertical = np.degrees(np.arctan2(corners[:, 1], corners[:, 2]))
    left = min(horizontal[TL], horizontal[BL])
    right = max(horizontal[TR], horizontal[BR])
    bottom = min(vertical[BL], vertical[BR])
    top = max(vertical[TL], vertical[TR])
    fov_h = float(right - left)
    fov_v = float(top - bottom)
    # asymmetry is undefined for a zero angular span (panel seen edge-on)
    asym_h = float((right + left) / fov_h) if abs(fov_h) > EPS else math.nan
    asym_v = float((top + bottom) / fov_v) if abs(fov_v) > EPS else math.nan
    return np.column_stack([horizontal, vertical]), fov_h, fov_v, asym_h, asym_v


def project_display(
    display: Display,
    *,
    near_distance: float = DEFAULT_NEAR_DISTANCE,
    mode: Union[EdgeDistanceMode, str] = EdgeDistanceMode.STABLE,
) -> PlaneProjectionResult:
    """
    Full projection of one display: nearest point, corners, edge distances and frustum.

    Raises:
        DegenerateGeometryError: if the display plane passes through the eye.
    """
    nearest = nearest_point_on_plane(display)
    corners = display_corners(display)
    rel = corners_relative_to(corners, nearest)
    mode = EdgeDistanceMode(mode)
    if mode is EdgeDistanceMode.STABLE:
        edges = _stable_edge_distances(display)
    else:
        edges = _precise_edge_distances(rel)
    frustum = _frustum_from(rel, nearest.distance, near_distance)
    angles, fov_h, fov_v, asym_h, asym_v = _angular_extents(corners)

    logger.debug(
        "projected display %s: distance=%.6f frustum=%s",
        display.name or "<unnamed>", nearest.distance, frustum.as_tuple(),
    )
    return PlaneProjectionResult(
        display=display,
        nearest_point=nearest,
        corners=corners,
        corners_relative_to_nearest=rel,
        edge_distances=edges,
        frustum=frustum,
        eye_to_display_distance=float(np.linalg.norm(display.position)),
        corner_distances=np.linalg.norm(corners, axis=1),
        angles_to_corners=angles,
        fov_horizontal=fov_h,
        fov_vertical=fov_v,
        horizontal_asymmetry=asym_h,
        vertical_asymmetry=asym_v,
    )
