"""Tests for the roll -> pitch -> yaw rotation and the plane normal."""

import math
import numpy as np
import pytest

from viewcal.geometry import (
    Display,
    local_axes,
    plane_normal,
    rotate_vector,
    rotation_matrix,
)


def test_zero_rotation_is_identity():
    assert np.allclose(rotation_matrix(0.0, 0.0, 0.0), np.eye(3))


@pytest.mark.parametrize("v, kwargs, expected", [
    ((1.0, 0.0, 0.0), {"yaw": 90.0}, (0.0, 0.0, 1.0)),
    ((0.0, 1.0, 0.0), {"pitch": 90.0}, (0.0, 0.0, 1.0)),
    ((1.0, 0.0, 0.0), {"roll": 90.0}, (0.0, 1.0, 0.0)),
])
def test_elemental_rotations(v, kwargs, expected):
    assert np.allclose(rotate_vector(v, **kwargs), expected, atol=1e-12)


def test_roll_is_applied_before_pitch():
    # roll takes +X to +Y, pitch then takes +Y to +Z
    out = rotate_vector((1.0, 0.0, 0.0), yaw=0.0, pitch=90.0, roll=90.0)
    assert np.allclose(out, (0.0, 0.0, 1.0), atol=1e-12)


def test_yaw_round_trip():
    v = np.array([0.3, -1.2, 2.5])
    for yaw in (-170.0, -47.0, 0.0, 12.5, 47.0, 90.0, 181.0):
        back = rotate_vector(rotate_vector(v, yaw=yaw), yaw=-yaw)
        assert np.allclose(back, v, atol=1e-9)


def test_rotation_preserves_length_and_does_not_touch_input():
    v = np.array([0.5, 0.25, -1.0])
    before = v.copy()
    out = rotate_vector(v, yaw=33.0, pitch=-12.0, roll=71.0)
    assert np.array_equal(v, before)
    assert math.isclose(np.linalg.norm(out), np.linalg.norm(v), rel_tol=1e-12)


def test_plane_normal_faces_eye_when_unrotated():
    d = Display(width=1.0, height=1.0, z=2.0)
    assert np.allclose(plane_normal(d), (0.0, 0.0, -1.0))


def test_roll_does_not_change_normal():
    d0 = Display(width=1.0, height=1.0, z=2.0, yaw=20.0, pitch=10.0)
    d1 = d0.replace(roll=37.0)
    assert np.allclose(plane_normal(d0), plane_normal(d1), atol=1e-12)


def test_plane_normal_yaw_90_points_along_x():
    d = Display(width=1.0, height=1.0, z=2.0, yaw=90.0)
    assert np.allclose(plane_normal(d), (1.0, 0.0, 0.0), atol=1e-12)


def test_local_axes_are_orthonormal_and_perpendicular_to_normal():
    d = Display(width=1.0, height=0.5, x=0.2, z=1.5, yaw=25.0, pitch=-15.0, roll=40.0)
    lx, ly = local_axes(d)
    n = plane_normal(d)
    assert math.isclose(np.linalg.norm(lx), 1.0, rel_tol=1e-12)
    assert math.isclose(np.linalg.norm(ly), 1.0, rel_tol=1e-12)
    assert abs(np.dot(lx, ly)) < 1e-12
    assert abs(np.dot(lx, n)) < 1e-12
    assert abs(np.dot(ly, n)) < 1e-12
