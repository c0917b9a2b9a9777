"""Selection geometry over grid cell sets.

Pure functions used when a pointer selection becomes a child:
- Composite cell keys and key sets
- Rectangle test and bounding-box expansion
- Greedy partition of an irregular cell set into rectangles
"""

from typing import Iterable, Sequence

from gridlayout.schema import GridCell

CellKey = tuple[int, int]


def cell_key(cell: GridCell) -> CellKey:
    """Canonical identity of a cell: its ``(row, column)`` pair."""
    return (cell.row, cell.column)


def cell_key_set(cells: Iterable[GridCell]) -> set[CellKey]:
    """Build a lookup set of cell keys. Duplicate cells collapse."""
    return {cell_key(c) for c in cells}


def bounding_box(cells: Sequence[GridCell]) -> tuple[int, int, int, int]:
    """Compute ``(min_row, max_row, min_col, max_col)`` of a cell list.

    Raises:
        ValueError: If ``cells`` is empty.
    """
    if not cells:
        raise ValueError("bounding_box() requires at least one cell")
    rows = [c.row for c in cells]
    cols = [c.column for c in cells]
    return min(rows), max(rows), min(cols), max(cols)


def is_rectangular_selection(cells: Sequence[GridCell]) -> bool:
    """Check whether ``cells`` fill their bounding box exactly.

    The check compares the cell count with the bounding-box area, so it
    assumes ``cells`` holds no duplicates.

    Returns:
        False for an empty list, otherwise whether the count matches.
    """
    if not cells:
        return False
    min_row, max_row, min_col, max_col = bounding_box(cells)
    return len(cells) == (max_row - min_row + 1) * (max_col - min_col + 1)


def expand_to_bounding_box(cells: Sequence[GridCell]) -> list[GridCell]:
    """Return every cell of the bounding box of ``cells``, row-major.

    Gaps in the input are filled in, so any pointer selection becomes a
    valid rectangle.
    """
    if not cells:
        return []
    min_row, max_row, min_col, max_col = bounding_box(cells)
    return [
        GridCell(row=r, column=c)
        for r in range(min_row, max_row + 1)
        for c in range(min_col, max_col + 1)
    ]


def split_into_rectangles(cells: Iterable[GridCell]) -> list[list[GridCell]]:
    """Partition a cell set into disjoint axis-aligned rectangles.

    Greedy sweep: take the smallest remaining ``(row, column)`` as seed,
    grow right while the next column is present, then grow down while the
    whole column span of the next row is present. Emit the rectangle,
    remove its cells and repeat. Not guaranteed to be minimal in count.

    Args:
        cells: Any cells; duplicates are ignored.

    Returns:
        Rectangles in seed order, each a row-major list of cells.
    """
    remaining = cell_key_set(cells)
    rectangles: list[list[GridCell]] = []

    while remaining:
        r0, c0 = min(remaining)

        c_end = c0
        while (r0, c_end + 1) in remaining:
            c_end += 1

        r_end = r0
        while all((r_end + 1, c) in remaining for c in range(c0, c_end + 1)):
            r_end += 1

        region = [
            GridCell(row=r, column=c)
            for r in range(r0, r_end + 1)
            for c in range(c0, c_end + 1)
        ]
        remaining.difference_update(cell_key(c) for c in region)
        rectangles.append(region)

    return rectangles


__all__ = [
    "CellKey",
    "cell_key",
    "cell_key_set",
    "bounding_box",
    "is_rectangular_selection",
    "expand_to_bounding_box",
    "split_into_rectangles",
]
