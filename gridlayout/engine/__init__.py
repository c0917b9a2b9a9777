"""Layout state engine: undo-tracked edits and the interactive designer.

Example usage:
    >>> from gridlayout.engine import GridDesigner
    >>> from gridlayout.schema import GridCell
    >>> designer = GridDesigner()
    >>> designer.start_selection(GridCell(row=0, column=0))
    >>> designer.end_selection()
"""

from .lib import CHILD_NAME_PREFIX, LayoutEngine, LayoutHistory, next_child_name
from .session import GridDesigner, InteractionSession

__all__ = [
    "CHILD_NAME_PREFIX",
    "LayoutHistory",
    "LayoutEngine",
    "next_child_name",
    "InteractionSession",
    "GridDesigner",
]
