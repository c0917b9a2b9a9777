"""gridlayout: CSS Grid layout designer engine.

Edit a three-breakpoint grid layout with undo/redo, then generate clean CSS
and HTML from it.

Example usage:
    >>> from gridlayout import GridDesigner, GridCell
    >>> designer = GridDesigner()
    >>> designer.start_selection(GridCell(row=0, column=0))
    >>> designer.add_to_selection(GridCell(row=1, column=1))
    >>> designer.end_selection()
    >>> print(designer.generate_css())
"""

from .engine import GridDesigner, InteractionSession, LayoutEngine, LayoutHistory
from .schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    GridDefinition,
    LayoutExport,
    LayoutState,
    default_layout_state,
    export_layout_json,
    parse_layout_export,
)

__version__ = "0.1.0"

__all__ = [
    "GridDesigner",
    "InteractionSession",
    "LayoutEngine",
    "LayoutHistory",
    "BreakpointConfig",
    "BreakpointId",
    "GridCell",
    "GridChild",
    "GridDefinition",
    "LayoutExport",
    "LayoutState",
    "default_layout_state",
    "export_layout_json",
    "parse_layout_export",
]
