"""Smoke tests for the PNG three-view and the HTML 3D view."""

import matplotlib.pyplot as plt
import pytest

from viewcal.geometry import Display
from viewcal.layout import place_adjacent
from viewcal.viz.plot3d import plot_displays_3d
from viewcal.viz.plots import _near_plane_point, plot_three_views


def _rig():
    centre = Display(width=1.44, height=0.81, z=1.16, name="Centre",
                     extras={"borderColor": "black"})
    right = place_adjacent(centre, width=1.44, height=0.81, yaw=47.0, name="Right")
    odd = Display(width=0.5, height=0.3, x=-1.0, z=0.8, extras={"borderColor": "not-a-colour"})
    return [centre, right, odd]


def test_three_views_png(tmp_path):
    out = tmp_path / "views.png"
    assert plot_three_views(_rig(), str(out), selected=0, near_distance=0.1) == str(out)
    assert out.exists() and out.stat().st_size > 0


def test_three_views_returns_figure(tmp_path):
    fig = plot_three_views(_rig(), str(tmp_path / "v.png"), sight_lines=False, return_fig=True)
    try:
        assert len(fig.axes) == 3
        assert [ax.get_title() for ax in fig.axes][0].startswith("Top view")
    finally:
        plt.close(fig)


def test_three_views_with_display_through_eye(tmp_path):
    edge_on = Display(width=1.0, height=1.0, z=1.0, yaw=90.0)
    out = plot_three_views([edge_on], str(tmp_path / "edge.png"), selected=0, near_distance=0.1)
    assert (tmp_path / "edge.png").exists() and out.endswith("edge.png")


def test_3d_html(tmp_path):
    out = tmp_path / "rig.html"
    assert plot_displays_3d(_rig(), str(out)) == str(out)
    html = out.read_text(encoding="utf-8")
    assert "plotly" in html.lower()


def test_3d_figure_traces(tmp_path):
    rig = _rig()
    fig = plot_displays_3d(rig, str(tmp_path / "rig.html"), return_fig=True)
    # mesh, edge loop and nearest-point ray per display, plus the eye
    assert len(fig.data) == 3 * len(rig) + 1


def test_near_plane_marker_stays_in_front_of_eye():
    back = Display(width=1.0, height=1.0, z=1.0, yaw=180.0)
    p = _near_plane_point(back, 0.1)
    assert p[2] == pytest.approx(0.1)
    assert _near_plane_point(back, 1.0) is None
