"""Common 16:9 display sizes (diagonal inches -> width, height in metres)."""

from __future__ import annotations
from typing import Dict, Tuple, Union

from .geometry import Display

DISPLAY_PRESETS: Dict[str, Tuple[float, float]] = {
    "27": (0.598, 0.336),
    "32": (0.708, 0.398),
    "40": (0.886, 0.498),
    "43": (0.952, 0.535),
    "50": (1.107, 0.623),
    "55": (1.218, 0.685),
    "65": (1.440, 0.810),
    "75": (1.660, 0.934),
}


def _key(diagonal: Union[str, int, float]) -> str:
    if isinstance(diagonal, float) and diagonal.is_integer():
        diagonal = int(diagonal)
    return str(diagonal).strip().rstrip('"')


def preset_size(diagonal: Union[str, int, float]) -> Tuple[float, float]:
    """Return (width, height) for a preset diagonal such as 65 or "65"."""
    key = _key(diagonal)
    if key not in DISPLAY_PRESETS:
        known = ", ".join(DISPLAY_PRESETS)
        raise KeyError(f"Unknown display preset {diagonal!r}; known presets: {known}")
    return DISPLAY_PRESETS[key]


def display_from_preset(diagonal: Union[str, int, float], **pose) -> Display:
    w, h = preset_size(diagonal)
    return Display(width=w, height=h, **pose)
