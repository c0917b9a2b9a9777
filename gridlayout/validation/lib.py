"""Layout validation and static analysis.

This module reports structural issues in a layout before or after code
generation. Findings are advisory: the generators already self-heal every
issue reported here, so a layout with errors still renders.
"""

from dataclasses import dataclass
from typing import Iterable

from gridlayout.geometry import cell_key, cell_key_set, is_rectangular_selection
from gridlayout.schema import BreakpointConfig, BreakpointId, GridChild, LayoutState


@dataclass
class ValidationError:
    """Represents a validation finding in a layout.

    Attributes:
        child_id: ID of the child involved, or None for grid-level issues.
        message: Human-readable description.
        error_type: Category of the finding.
        breakpoint: Breakpoint the finding belongs to, if known.
    """

    child_id: str | None
    message: str
    error_type: str
    breakpoint: str | None = None


def validate_config(
    config: BreakpointConfig, breakpoint: BreakpointId | str | None = None
) -> list[ValidationError]:
    """Validate one breakpoint configuration.

    Performs the following checks:
        - Unique child IDs
        - Children cover at least one cell
        - Child cells form a rectangle
        - Child cells lie inside the grid
        - No cell is claimed by two children
        - Track size lists match the track counts

    Args:
        config: Configuration to check.
        breakpoint: Label attached to each finding.

    Returns:
        list[ValidationError]: Findings (empty if valid).

    Example:
        >>> for e in validate_config(state.active_config):
        ...     print(f"{e.child_id}: {e.message}")
    """
    label = BreakpointId(breakpoint).value if breakpoint is not None else None
    errors: list[ValidationError] = []

    errors.extend(_check_duplicate_ids(config.children))
    for child in config.children:
        errors.extend(_check_child_shape(child, config))
    errors.extend(_check_overlaps(config.children))
    errors.extend(_check_tracks(config))

    for error in errors:
        error.breakpoint = label
    return errors


def validate_layout(state: LayoutState) -> list[ValidationError]:
    """Validate every breakpoint of a layout."""
    errors: list[ValidationError] = []
    for bp in BreakpointId:
        errors.extend(validate_config(state.breakpoints.get(bp), bp))
    return errors


def is_valid(state: LayoutState) -> bool:
    """Check if a layout has no validation findings."""
    return not validate_layout(state)


def _check_duplicate_ids(children: Iterable[GridChild]) -> list[ValidationError]:
    counts: dict[str, int] = {}
    for child in children:
        counts[child.id] = counts.get(child.id, 0) + 1
    return [
        ValidationError(
            child_id=child_id,
            message=f"Duplicate ID '{child_id}' appears {count} times",
            error_type="duplicate_id",
        )
        for child_id, count in counts.items()
        if count > 1
    ]


def _check_child_shape(
    child: GridChild, config: BreakpointConfig
) -> list[ValidationError]:
    if not child.cells:
        return [
            ValidationError(
                child_id=child.id,
                message=f"Child '{child.name}' covers no cells",
                error_type="empty_cells",
            )
        ]

    errors: list[ValidationError] = []
    unique = cell_key_set(child.cells)
    if len(unique) != len(child.cells) or not is_rectangular_selection(child.cells):
        errors.append(
            ValidationError(
                child_id=child.id,
                message=f"Child '{child.name}' cells do not form a rectangle",
                error_type="non_rectangular",
            )
        )

    grid = config.grid
    outside = sorted(
        (r, c) for r, c in unique if r >= grid.row_count or c >= grid.column_count
    )
    if outside:
        errors.append(
            ValidationError(
                child_id=child.id,
                message=(
                    f"Child '{child.name}' has {len(outside)} cell(s) outside the "
                    f"{grid.row_count}x{grid.column_count} grid"
                ),
                error_type="out_of_bounds",
            )
        )
    return errors


def _check_overlaps(children: Iterable[GridChild]) -> list[ValidationError]:
    errors: list[ValidationError] = []
    owners: dict[tuple[int, int], GridChild] = {}
    for child in children:
        clashes: dict[str, GridChild] = {}
        for cell in child.cells:
            owner = owners.get(cell_key(cell))
            if owner is not None and owner.id != child.id:
                clashes[owner.id] = owner
        for owner in clashes.values():
            errors.append(
                ValidationError(
                    child_id=child.id,
                    message=(
                        f"Child '{child.name}' overlaps '{owner.name}'; named-area "
                        f"output keeps the later child"
                    ),
                    error_type="overlap",
                )
            )
        for cell in child.cells:
            owners[cell_key(cell)] = child
    return errors


def _check_tracks(config: BreakpointConfig) -> list[ValidationError]:
    grid = config.grid
    errors: list[ValidationError] = []
    for axis, sizes, count in (
        ("row", grid.row_sizes, grid.row_count),
        ("column", grid.column_sizes, grid.column_count),
    ):
        if len(sizes) != count:
            errors.append(
                ValidationError(
                    child_id=None,
                    message=(
                        f"{len(sizes)} {axis} size(s) for {count} {axis}(s); "
                        f"rendering repeat({count}, 1fr)"
                    ),
                    error_type="track_mismatch",
                )
            )
    return errors


__all__ = [
    "ValidationError",
    "validate_config",
    "validate_layout",
    "is_valid",
]
