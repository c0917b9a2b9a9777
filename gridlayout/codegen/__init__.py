"""CSS and HTML code generation for grid layouts."""

from .lib import (
    BREAKPOINT_MEDIA,
    DEFAULT_PARENT_CLASS,
    RESPONSIVE_ORDER,
    Placement,
    format_track_size,
    generate_child_css,
    generate_child_css_area,
    generate_full_css,
    generate_html,
    generate_parent_grid_css,
    generate_parent_grid_css_with_areas,
    generate_responsive_css,
    generate_template_areas,
    get_child_placement,
    resolve_area_name,
    to_class_name,
)

__all__ = [
    "BREAKPOINT_MEDIA",
    "RESPONSIVE_ORDER",
    "DEFAULT_PARENT_CLASS",
    "Placement",
    "to_class_name",
    "resolve_area_name",
    "format_track_size",
    "get_child_placement",
    "generate_parent_grid_css",
    "generate_child_css",
    "generate_template_areas",
    "generate_parent_grid_css_with_areas",
    "generate_child_css_area",
    "generate_full_css",
    "generate_html",
    "generate_responsive_css",
]
