from .views import (
    VIEW_AXES,
    OUTLINE_ORDER,
    project_to_view,
    outline,
    to_canvas,
    view_limits,
)

__all__ = [
    "VIEW_AXES",
    "OUTLINE_ORDER",
    "project_to_view",
    "outline",
    "to_canvas",
    "view_limits",
]
