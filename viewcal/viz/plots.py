# PLOTTING PRINCIPLE: never massage visuals. Render computed geometry as-is.

from __future__ import annotations
from typing import Optional, Sequence
import logging
import numpy as np
import matplotlib
matplotlib.use("Agg")  # safe headless default
import matplotlib.pyplot as plt
from matplotlib.colors import is_color_like

from viewcal.geometry import Display
from viewcal.projection import display_corners, nearest_point_on_plane
from .views import VIEW_AXES, outline, project_to_view, view_limits

logger = logging.getLogger(__name__)

_VIEW_TITLES = {
    "top": ("Top view (X–Z)", "X [m]", "Z [m]"),
    "left": ("Left view (Z–Y)", "Z [m]", "Y [m]"),
    "front": ("Front view (X–Y)", "X [m]", "Y [m]"),
}
_SELECTED = "orange"
_DEFAULT_COLORS = {"top": "blue", "left": "green", "front": "purple"}


def _display_color(display: Display, view: str) -> str:
    c = display.extras.get("borderColor")
    if c and is_color_like(c):
        return c
    return _DEFAULT_COLORS[view]


def _near_plane_point(display: Display, near_distance: Optional[float]):
    """Point where the eye->nearest-point ray crosses the near plane, or None."""
    if near_distance is None:
        return None
    nearest = nearest_point_on_plane(display)
    distance = abs(nearest.distance)
    if distance < 1e-12 or abs(near_distance - distance) <= 1e-3:
        return None
    return nearest.point * (near_distance / distance)


def _draw_view(ax, displays: Sequence[Display], view: str, selected: Optional[int],
               near_distance: Optional[float], sight_lines: bool) -> None:
    title, xlabel, ylabel = _VIEW_TITLES[view]
    point_sets = []
    for i, d in enumerate(displays):
        is_sel = selected is not None and i == selected
        corners = display_corners(d)
        loop = outline(corners, view)
        point_sets.append(loop)
        color = _SELECTED if is_sel else _display_color(d, view)
        label = d.name or f"Display {i + 1}"
        ax.fill(loop[:, 0], loop[:, 1], color=color, alpha=0.2 if is_sel else 0.1)
        ax.plot(loop[:, 0], loop[:, 1], color=color, lw=2.5 if is_sel else 1.5, label=label)

        if sight_lines:
            for c in project_to_view(corners, view):
                ax.plot([0.0, c[0]], [0.0, c[1]], color=color, lw=0.5, alpha=0.3)

        nearest = nearest_point_on_plane(d)
        (npx, npy), = project_to_view(nearest.point, view)
        ax.plot([0.0, npx], [0.0, npy], color=color, lw=0.8, ls="--")
        ax.plot(npx, npy, "o", color=color, ms=4)
        point_sets.append(np.array([[npx, npy]]))

        if is_sel:
            npp = _near_plane_point(d, near_distance)
            if npp is not None:
                (qx, qy), = project_to_view(npp, view)
                ax.plot(qx, qy, "s", color="black", ms=4)
                ax.annotate(f"Near plane ({near_distance:.3f}m)", (qx, qy),
                            textcoords="offset points", xytext=(6, -10), fontsize=7)

    ax.plot(0.0, 0.0, "o", color="red", ms=6, label="Eye")
    (x0, x1), (y0, y1) = view_limits(point_sets)
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)


def plot_three_views(
    displays: Sequence[Display],
    out_png: str,
    *,
    selected: Optional[int] = None,
    near_distance: Optional[float] = None,
    sight_lines: bool = True,
    return_fig: bool = False,
):
    """
    Render top/left/front orthographic views of a display set to a PNG.

    Args:
        displays: displays to draw (eye at the origin)
        out_png: output path
        selected: index of the highlighted display, if any
        near_distance: when set, mark the near-plane point of the selected display
        sight_lines: draw eye->corner lines
        return_fig: return the Figure instead of closing it
    """
    fig, axes = plt.subplots(1, len(VIEW_AXES), figsize=(15, 5))
    for ax, view in zip(axes, VIEW_AXES):
        _draw_view(ax, displays, view, selected, near_distance, sight_lines)
    handles, labels = axes[0].get_legend_handles_labels()
    if handles:
        fig.legend(handles, labels, loc="lower center", ncol=min(len(labels), 6), frameon=False)
    fig.tight_layout(rect=(0, 0.08, 1, 1))
    fig.savefig(out_png, dpi=120)
    logger.info("Three-view plot written to %s", out_png)
    if return_fig:
        return fig
    plt.close(fig)
    return out_png
