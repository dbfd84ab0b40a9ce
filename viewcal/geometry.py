"""
Display descriptors and rotation primitives for off-center projection.

This module provides the Display value type, the error classes raised by
the projection engine, and the fixed roll -> pitch -> yaw rotation used to
place every panel in eye space (eye at the origin, displays along +Z).
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace as _dc_replace
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import math
import numpy as np

logger = logging.getLogger(__name__)

EPS = 1e-12

# Local axes of an unrotated display: +X right, +Y up, normal facing the eye.
LOCAL_X = (1.0, 0.0, 0.0)
LOCAL_Y = (0.0, 1.0, 0.0)
BASE_NORMAL = (0.0, 0.0, -1.0)


class GeometryError(Exception):
    """Base class for projection geometry failures."""
    pass


class InvalidDisplayError(GeometryError, ValueError):
    """Raised when a display descriptor has non-finite or out-of-range values."""
    pass


class DegenerateGeometryError(GeometryError, ArithmeticError):
    """Raised when the geometry admits no projection (eye on plane, zero-length edge)."""
    pass


# ----------------------------
# Display value type
# ----------------------------

_NUMERIC_FIELDS = ("width", "height", "x", "y", "z", "yaw", "pitch", "roll")
# keys that describe derived state and are never carried on a Display
_DERIVED_KEYS = ("nearestPoint",)


@dataclass(frozen=True)
class Display:
    """
    Physical display panel in eye space.

    width, height: full size in metres (> 0)
    x, y, z:       centre position in metres, eye at the origin
    yaw:           rotation about +Y in degrees
    pitch:         rotation about +X in degrees
    roll:          rotation about +Z in degrees (applied first)
    name:          optional label, ignored by the engine
    extras:        pass-through attributes (border width/colour, legacy keys)
    """
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    name: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        for name in _NUMERIC_FIELDS:
            raw = getattr(self, name)
            if isinstance(raw, bool):
                raise InvalidDisplayError(f"Display {name} must be a number, got {raw!r}")
            try:
                val = float(raw)
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidDisplayError(f"Display {name} must be a number, got {raw!r}") from e
            if not math.isfinite(val):
                raise InvalidDisplayError(f"Display {name} must be finite, got {val}")
            object.__setattr__(self, name, val)
        if self.width <= 0 or self.height <= 0:
            raise InvalidDisplayError(
                f"Display dimensions must be positive, got {self.width} × {self.height}"
            )
        object.__setattr__(self, "extras", dict(self.extras or {}))

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def angles(self) -> Tuple[float, float, float]:
        """(yaw, pitch, roll) in degrees."""
        return self.yaw, self.pitch, self.roll

    def replace(self, **changes) -> "Display":
        """Return a copy with the given fields changed (validated again)."""
        return _dc_replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Display":
        """
        Build a Display from a configuration-document entry.
        Unknown keys are kept in `extras`; derived keys such as `nearestPoint` are dropped.
        """
        if not isinstance(data, Mapping):
            raise InvalidDisplayError(f"Display entry must be a mapping, got {type(data).__name__}")
        missing = [k for k in ("width", "height") if k not in data]
        if missing:
            raise InvalidDisplayError(f"Display entry missing key(s): {', '.join(missing)}")
        known = {f.name for f in fields(cls)} - {"extras"}
        kwargs = {k: data[k] for k in known if k in data}
        extras = {
            k: v for k, v in data.items()
            if k not in known and k not in _DERIVED_KEYS
        }
        for k in _DERIVED_KEYS:
            if k in data:
                logger.debug("Dropping derived key %r from display entry", k)
        return cls(extras=extras, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the configuration-document shape (extras merged back in)."""
        out: Dict[str, Any] = dict(self.extras)
        for name in _NUMERIC_FIELDS:
            out[name] = getattr(self, name)
        if self.name is not None:
            out["name"] = self.name
        return out


# ----------------------------
# Rotation (roll -> pitch -> yaw)
# ----------------------------

def rot_roll(deg: float) -> np.ndarray:
    """Rotation about +Z: x' = x cos - y sin, y' = x sin + y cos."""
    c, s = math.cos(math.radians(deg)), math.sin(math.radians(deg))
    return np.array([[c, -s, 0.0],
                     [s,  c, 0.0],
                     [0.0, 0.0, 1.0]], dtype=float)


def rot_pitch(deg: float) -> np.ndarray:
    """Rotation about +X: y' = y cos - z sin, z' = y sin + z cos."""
    c, s = math.cos(math.radians(deg)), math.sin(math.radians(deg))
    return np.array([[1.0, 0.0, 0.0],
                     [0.0, c, -s],
                     [0.0, s,  c]], dtype=float)


def rot_yaw(deg: float) -> np.ndarray:
    """Rotation about +Y: x' = x cos - z sin, z' = x sin + z cos."""
    c, s = math.cos(math.radians(deg)), math.sin(math.radians(deg))
    return np.array([[c, 0.0, -s],
                     [0.0, 1.0, 0.0],
                     [s, 0.0,  c]], dtype=float)


def rotation_matrix(yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0) -> np.ndarray:
    """Composite rotation applying roll first, then pitch, then yaw."""
    return rot_yaw(yaw) @ rot_pitch(pitch) @ rot_roll(roll)


def rotate_vector(v, yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0) -> np.ndarray:
    """Return a rotated copy of a 3-vector (angles in degrees)."""
    vec = np.asarray(v, dtype=float).reshape(3)
    return rotation_matrix(yaw, pitch, roll) @ vec


def local_axes(display: Display) -> Tuple[np.ndarray, np.ndarray]:
    """Rotated local (right, up) unit axes of a display."""
    R = rotation_matrix(display.yaw, display.pitch, display.roll)
    return R @ np.array(LOCAL_X), R @ np.array(LOCAL_Y)


def plane_normal(display: Display) -> np.ndarray:
    """
    Unit normal of the display plane.
    Starts at (0,0,-1) facing the eye; roll spins about that axis so only
    pitch and yaw are applied.
    """
    n = rotate_vector(BASE_NORMAL, yaw=display.yaw, pitch=display.pitch, roll=0.0)
    return n / np.linalg.norm(n)
