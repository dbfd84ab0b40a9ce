"""
Display View Calibrator

Off-center (asymmetric-frustum) projection geometry for physical display
panels arranged around a fixed eye point, for multi-monitor viewing
calibration.
"""

__version__ = "1.0.0"

from .geometry import (
    Display,
    GeometryError,
    InvalidDisplayError,
    DegenerateGeometryError,
    rotate_vector,
    rotation_matrix,
    plane_normal,
    local_axes,
)
from .projection import (
    EdgeDistanceMode,
    PlaneProjectionResult,
    nearest_point_on_plane,
    display_corners,
    edge_distances,
    near_plane_frustum,
    project_display,
)

__all__ = [
    "Display",
    "GeometryError",
    "InvalidDisplayError",
    "DegenerateGeometryError",
    "rotate_vector",
    "rotation_matrix",
    "plane_normal",
    "local_axes",
    "EdgeDistanceMode",
    "PlaneProjectionResult",
    "nearest_point_on_plane",
    "display_corners",
    "edge_distances",
    "near_plane_frustum",
    "project_display",
]
