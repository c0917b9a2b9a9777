"""Selection geometry: rectangle tests, expansion and partitioning."""

from .lib import (
    CellKey,
    bounding_box,
    cell_key,
    cell_key_set,
    expand_to_bounding_box,
    is_rectangular_selection,
    split_into_rectangles,
)

__all__ = [
    "CellKey",
    "cell_key",
    "cell_key_set",
    "bounding_box",
    "is_rectangular_selection",
    "expand_to_bounding_box",
    "split_into_rectangles",
]
