"""CSS and HTML generation for grid layouts.

Produces clean, minimal, readable output for the grid container and its
children. Two placement strategies are supported:

- Line-based: every child gets explicit ``grid-row`` / ``grid-column`` lines.
- Named areas: the container carries a ``grid-template-areas`` matrix and
  every child gets ``grid-area: name``.

All functions are pure and total over a structurally valid layout: bad
track sizes, blank area names and mismatched track lists are replaced with
safe defaults so the output is always well-formed.
"""

import re
from enum import Enum
from typing import Any, NamedTuple, Sequence

from gridlayout.geometry import bounding_box
from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    GridDefinition,
    LayoutState,
    PlaceItems,
)

DEFAULT_PARENT_CLASS = "parent"
DEFAULT_CHILD_CLASS = "child"
INDENT = "  "

# Media query breakpoints (min-width), mobile first.
BREAKPOINT_MEDIA: dict[BreakpointId, str] = {
    BreakpointId.DESKTOP: "1200px",
    BreakpointId.TABLET: "768px",
    BreakpointId.MOBILE: "0px",
}
RESPONSIVE_ORDER: tuple[BreakpointId, ...] = (
    BreakpointId.MOBILE,
    BreakpointId.TABLET,
    BreakpointId.DESKTOP,
)

_WHITESPACE = re.compile(r"\s+")


class Placement(NamedTuple):
    """Line-based placement of a child, ready for ``grid-row``/``grid-column``."""

    row: str
    column: str


# =============================================================================
# Formatting helpers
# =============================================================================


def _value_of(value: Any) -> Any:
    """Unwrap enum members so f-strings print the CSS keyword."""
    return value.value if isinstance(value, Enum) else value


def _format_number(value: int | float) -> str:
    """Print integral floats without a fractional part (``1.0`` -> ``1``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _sanitize(name: str | None) -> str:
    """Trim and collapse whitespace runs to single hyphens."""
    return _WHITESPACE.sub("-", (name or "").strip())


def to_class_name(name: str | None) -> str:
    """Sanitize a human name for use as a CSS class.

    Example:
        >>> to_class_name("  main   content ")
        'main-content'
        >>> to_class_name("   ")
        'child'
    """
    return _sanitize(name) or DEFAULT_CHILD_CLASS


def resolve_area_name(child: GridChild) -> str:
    """Area name of a child: ``area_name`` if set, else ``name``, sanitized.

    Unlike class names there is no fallback, so a blank name yields ``""``.
    """
    raw = child.area_name if child.area_name is not None else child.name
    return _sanitize(raw)


def format_track_size(size: Any) -> str:
    """Format a single track size for CSS.

    Unknown or corrupt values render as ``1fr``.
    """
    kind = getattr(size, "type", None)
    if kind == "fr":
        return f"{_format_number(size.value)}fr"
    if kind == "px":
        return f"{_format_number(size.value)}px"
    if kind == "percent":
        return f"{_format_number(size.value)}%"
    if kind == "auto":
        return "auto"
    if kind == "minmax":
        return f"minmax({size.min}, {size.max})"
    return "1fr"


def _track_list(sizes: Sequence[Any], count: int) -> str:
    """Explicit track list, or an equal-fraction repeat when sizes don't fit."""
    if len(sizes) == count:
        return " ".join(format_track_size(s) for s in sizes)
    return f"repeat({count}, 1fr)"


def _gap_lines(grid: GridDefinition) -> list[str]:
    if grid.row_gap == grid.column_gap == grid.gap:
        return [f"gap: {_format_number(grid.gap)}px;"]
    return [
        f"row-gap: {_format_number(grid.row_gap)}px;",
        f"column-gap: {_format_number(grid.column_gap)}px;",
    ]


def _self_alignment_lines(child: GridChild) -> list[str]:
    lines = []
    if child.justify_self:
        lines.append(f"justify-self: {_value_of(child.justify_self)};")
    if child.align_self:
        lines.append(f"align-self: {_value_of(child.align_self)};")
    return lines


def _rule(selector_class: str, declarations: Sequence[str]) -> str:
    body = "\n".join(f"{INDENT}{line}" for line in declarations)
    return f".{selector_class} {{\n{body}\n}}"


# =============================================================================
# Placement
# =============================================================================


def get_child_placement(cells: Sequence[GridCell]) -> Placement:
    """Compute 1-based grid lines for a (rectangular) cell list.

    A single-track span renders as ``"start"``, longer spans as
    ``"start / end"``. Empty input places the child at ``auto``.
    """
    if not cells:
        return Placement(row="auto", column="auto")
    min_row, max_row, min_col, max_col = bounding_box(cells)
    row_start, row_end = min_row + 1, max_row + 2
    col_start, col_end = min_col + 1, max_col + 2

    row = f"{row_start}" if row_end - row_start == 1 else f"{row_start} / {row_end}"
    column = f"{col_start}" if col_end - col_start == 1 else f"{col_start} / {col_end}"
    return Placement(row=row, column=column)


# =============================================================================
# Line-based generation
# =============================================================================


def _parent_declarations(grid: GridDefinition) -> list[str]:
    lines = [
        f"grid-template-rows: {_track_list(grid.row_sizes, grid.row_count)};",
        f"grid-template-columns: {_track_list(grid.column_sizes, grid.column_count)};",
    ]
    lines.extend(_gap_lines(grid))
    if grid.place_items != PlaceItems.STRETCH:
        lines.append(f"place-items: {_value_of(grid.place_items)};")
    return lines


def generate_parent_grid_css(
    grid: GridDefinition, parent_class: str = DEFAULT_PARENT_CLASS
) -> str:
    """Generate the grid container rule (display, tracks, gap, place-items)."""
    return _rule(
        to_class_name(parent_class),
        ["display: grid;", *_parent_declarations(grid)],
    )


def generate_child_css(child: GridChild, child_class: str | None = None) -> str:
    """Generate a line-based rule for one child."""
    cls = to_class_name(child_class if child_class is not None else child.name)
    row, column = get_child_placement(child.cells)
    return _rule(
        cls,
        [f"grid-row: {row};", f"grid-column: {column};", *_self_alignment_lines(child)],
    )


# =============================================================================
# Named-area generation
# =============================================================================


def generate_template_areas(
    row_count: int, column_count: int, children: Sequence[GridChild]
) -> str:
    """Build the ``grid-template-areas`` value from children.

    Each child's bounding box is painted with its area name; cells nobody
    covers stay ``.``. Children with a blank area name or no cells are
    skipped, cells outside the grid are ignored, and where boxes overlap
    the later child wins.
    """
    matrix: list[list[str | None]] = [[None] * column_count for _ in range(row_count)]
    for child in children:
        area = resolve_area_name(child)
        if not area or not child.cells:
            continue
        min_row, max_row, min_col, max_col = bounding_box(child.cells)
        for r in range(min_row, min(max_row, row_count - 1) + 1):
            for c in range(min_col, min(max_col, column_count - 1) + 1):
                matrix[r][c] = area
    rows = (" ".join(name or "." for name in row) for row in matrix)
    return f"\n{INDENT}".join(f'"{row}"' for row in rows)


def generate_parent_grid_css_with_areas(
    grid: GridDefinition,
    children: Sequence[GridChild],
    parent_class: str = DEFAULT_PARENT_CLASS,
) -> str:
    """Generate the container rule with a ``grid-template-areas`` block.

    Without children the areas block is meaningless, so the plain
    container rule is returned instead.
    """
    if not children:
        return generate_parent_grid_css(grid, parent_class)
    areas = generate_template_areas(grid.row_count, grid.column_count, children)
    return _rule(
        to_class_name(parent_class),
        [
            "display: grid;",
            "grid-template-areas:",
            f"{areas};",
            *_parent_declarations(grid),
        ],
    )


def generate_child_css_area(child: GridChild, child_class: str | None = None) -> str:
    """Generate a ``grid-area`` rule for one child.

    A child without a usable area name falls back to line-based placement.
    """
    cls = to_class_name(child_class if child_class is not None else child.name)
    area = resolve_area_name(child)
    if not area:
        return generate_child_css(child, cls)
    return _rule(cls, [f"grid-area: {area};", *_self_alignment_lines(child)])


# =============================================================================
# Whole-layout generation
# =============================================================================


def generate_full_css(
    config: BreakpointConfig,
    use_areas: bool,
    parent_class: str = DEFAULT_PARENT_CLASS,
) -> str:
    """Generate container and child rules for one breakpoint.

    Args:
        config: Breakpoint configuration to render.
        use_areas: Named-area placement instead of line-based.
        parent_class: Container class name.

    Returns:
        Rules separated by blank lines; container only if there are no
        children.
    """
    if use_areas:
        parent = generate_parent_grid_css_with_areas(
            config.grid, config.children, parent_class
        )
        child_blocks = [generate_child_css_area(ch) for ch in config.children]
    else:
        parent = generate_parent_grid_css(config.grid, parent_class)
        child_blocks = [generate_child_css(ch) for ch in config.children]
    return "\n\n".join([parent, *child_blocks])


def generate_html(
    children: Sequence[GridChild], parent_class: str = DEFAULT_PARENT_CLASS
) -> str:
    """Generate the markup skeleton: one wrapper, one empty div per child."""
    lines = [f'<div class="{to_class_name(parent_class)}">']
    lines.extend(f'{INDENT}<div class="{to_class_name(ch.name)}"></div>' for ch in children)
    lines.append("</div>")
    return "\n".join(lines)


def generate_responsive_css(
    state: LayoutState,
    use_areas: bool,
    parent_class: str = DEFAULT_PARENT_CLASS,
) -> str:
    """Generate CSS for all breakpoints, mobile first.

    The mobile rules are emitted unwrapped; tablet and desktop follow in
    ``@media (min-width: ...)`` blocks.
    """
    parts: list[str] = []
    for bp in RESPONSIVE_ORDER:
        block = generate_full_css(state.breakpoints.get(bp), use_areas, parent_class)
        if bp == BreakpointId.MOBILE:
            parts.append(block)
        else:
            parts.append(f"@media (min-width: {BREAKPOINT_MEDIA[bp]}) {{\n{block}\n}}")
    return "\n\n".join(parts)


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
