import math

from viewcal.geometry import Display
from viewcal.projection import project_display
from viewcal.report import fmt_m, fmt_vec, format_projection, single_line_summary


def test_formatters():
    assert fmt_m(1.16) == "1.160m"
    assert fmt_vec((0.0, -0.72, 1.16)) == "(0.000, -0.720, 1.160)"


def test_full_report_for_centred_display():
    text = format_projection(project_display(Display(width=1.44, height=0.81, z=1.16)))
    assert text.splitlines()[0] == "=== Display ==="
    assert "Eye to nearest point: 1.160m" in text
    assert "Position: (0.000, 0.000, 1.160)" in text
    assert "Top-Left: (-0.720, 0.405, 0.000)" in text
    assert "Bottom-Right: (0.720, -0.405, 0.000)" in text
    assert "  Left: -0.720m" in text
    assert "  Bottom: -0.405m" in text
    assert "Camera Near Plane Frustum (distance: 0.1m):" in text
    assert "  Top: 0.035" in text
    assert "  Left: -0.062" in text
    assert "asymmetry" in text
    assert "Warning" not in text


def test_report_names_display_and_warns_when_facing_away():
    text = format_projection(project_display(Display(width=1.0, height=1.0, z=1.0, yaw=180.0, name="Back")))
    assert text.startswith("=== Back ===")
    assert "Eye to nearest point: -1.000m" in text
    assert "faces away" in text


def test_precise_mode_is_labelled():
    text = format_projection(project_display(Display(width=1.0, height=1.0, z=1.0), mode="precise"))
    assert "(precise)" in text


def test_single_line_summary():
    res = project_display(Display(width=1.44, height=0.81, z=1.16, name="Centre"))
    line = single_line_summary(res)
    assert line.startswith("[Centre] distance=1.160m")
    assert "near=0.1" in line
    assert f"t={0.405 * 0.1 / 1.16:.4f}" in line
    assert "\n" not in line
    assert not math.isnan(res.horizontal_asymmetry)


def test_negative_zero_prints_as_zero():
    assert fmt_vec((-0.0, 0.0, -1.16)) == "(0.000, 0.000, -1.160)"
    assert fmt_m(-0.0) == "0.000m"
