"""Tests for Display construction, validation and dict conversion."""

import dataclasses
import math
import pytest

from viewcal.geometry import Display, GeometryError, InvalidDisplayError


def test_numeric_fields_are_coerced_to_float():
    d = Display(width="1.44", height=0.81, x=0, y=0, z="1.16")
    assert d.width == 1.44 and isinstance(d.x, float)
    assert d.z == 1.16


@pytest.mark.parametrize("kwargs", [
    {"width": 0.0, "height": 1.0},
    {"width": 1.0, "height": -0.5},
    {"width": float("nan"), "height": 1.0},
    {"width": 1.0, "height": 1.0, "z": float("inf")},
    {"width": 1.0, "height": 1.0, "yaw": float("-inf")},
    {"width": 1.0, "height": 1.0, "pitch": "abc"},
    {"width": 1.0, "height": 1.0, "roll": None},
    {"width": True, "height": 1.0},
    {"width": 10 ** 400, "height": 1.0},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(InvalidDisplayError):
        Display(**kwargs)


def test_invalid_display_error_is_value_error_and_geometry_error():
    with pytest.raises(ValueError):
        Display(width=-1.0, height=1.0)
    with pytest.raises(GeometryError, match="positive"):
        Display(width=-1.0, height=1.0)


def test_display_is_immutable_and_replace_revalidates():
    d = Display(width=1.0, height=1.0, z=1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.z = 2.0
    moved = d.replace(z=2.0)
    assert moved.z == 2.0 and d.z == 1.0
    with pytest.raises(InvalidDisplayError):
        d.replace(width=0.0)


def test_from_dict_keeps_extras_and_drops_derived_state():
    entry = {
        "width": 1.44, "height": 0.81, "distance": 1.16,
        "yaw": 0, "pitch": 0, "roll": 0, "x": 0, "y": 0, "z": 1.16,
        "showBorders": True, "borderWidthCm": 1.4, "borderColor": "black",
        "nearestPoint": {"x": 0, "y": 0, "z": 1.16, "distance": -1.16},
    }
    d = Display.from_dict(entry)
    assert d.z == 1.16
    assert d.extras == {"distance": 1.16, "showBorders": True,
                        "borderWidthCm": 1.4, "borderColor": "black"}
    out = d.to_dict()
    assert "nearestPoint" not in out
    assert out["borderColor"] == "black"
    assert Display.from_dict(out) == d


def test_from_dict_defaults_missing_pose_to_zero():
    d = Display.from_dict({"width": 1.0, "height": 0.5, "name": "Left"})
    assert (d.x, d.y, d.z, d.yaw, d.pitch, d.roll) == (0.0,) * 6
    assert d.name == "Left"
    assert d.to_dict()["name"] == "Left"


def test_from_dict_requires_size():
    with pytest.raises(InvalidDisplayError, match="width"):
        Display.from_dict({"height": 1.0})
    with pytest.raises(InvalidDisplayError, match="mapping"):
        Display.from_dict([1.0, 1.0])


def test_extras_do_not_affect_equality():
    a = Display(width=1.0, height=1.0, extras={"borderColor": "red"})
    b = Display(width=1.0, height=1.0)
    assert a == b
    assert hash(a) == hash(b)
    assert math.isclose(a.position[2], 0.0)
