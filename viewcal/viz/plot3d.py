# PLOTTING PRINCIPLE: never massage visuals. Render computed geometry as-is.

from __future__ import annotations
from typing import Sequence
import logging
import numpy as np

from viewcal.geometry import Display
from viewcal.projection import display_corners, nearest_point_on_plane
from .views import OUTLINE_ORDER

logger = logging.getLogger(__name__)


def _edge_loop(q: np.ndarray):
    loop = np.vstack([q, q[0:1]])
    return loop[:, 0], loop[:, 1], loop[:, 2]


def plot_displays_3d(displays: Sequence[Display], out_html: str, *, return_fig: bool = False):
    """Interactive 3D HTML of the displays, their nearest points and the eye."""
    import plotly.graph_objects as go

    traces = []
    for i, d in enumerate(displays):
        name = d.name or f"Display {i + 1}"
        q = display_corners(d)[list(OUTLINE_ORDER)]
        x, y, z = q[:, 0], q[:, 1], q[:, 2]
        # faces: (0,1,2) and (0,2,3) - two triangles forming the quad
        traces.append(go.Mesh3d(x=x, y=y, z=z, i=[0, 0], j=[1, 2], k=[2, 3],
                                opacity=0.5, name=name, flatshading=True, showscale=False))
        ex, ey, ez = _edge_loop(q)
        traces.append(go.Scatter3d(x=ex, y=ey, z=ez, mode="lines",
                                   line=dict(width=3), name=f"{name} edge", showlegend=False))
        p = nearest_point_on_plane(d).point
        traces.append(go.Scatter3d(x=[0.0, p[0]], y=[0.0, p[1]], z=[0.0, p[2]],
                                   mode="lines+markers", line=dict(dash="dash", width=2),
                                   marker=dict(size=3), name=f"{name} nearest point"))

    traces.append(go.Scatter3d(x=[0.0], y=[0.0], z=[0.0], mode="markers",
                               marker=dict(size=6, color="red"), name="Eye"))

    fig = go.Figure(data=traces)
    fig.update_layout(
        title=f"Display rig – 3D ({len(displays)} display(s))",
        scene=dict(xaxis_title="X [m]", yaxis_title="Y [m]", zaxis_title="Z [m]",
                   aspectmode="data"),
    )
    fig.write_html(out_html, include_plotlyjs="cdn")
    logger.info("3D plot written to %s", out_html)
    if return_fig:
        return fig
    return out_html
