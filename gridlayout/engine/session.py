"""Pointer interaction state and the designer facade.

``InteractionSession`` holds what the input surface is doing right now:
the cells being dragged over and the selected child. It is never part of
undo history. ``GridDesigner`` combines a session with a ``LayoutEngine``
and keeps the two consistent across breakpoint switches, deletes, undo and
imports.
"""

from dataclasses import dataclass, replace
from typing import Callable

from gridlayout.geometry import cell_key
from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    GridDefinition,
    LayoutState,
)

from .lib import LayoutEngine


@dataclass(frozen=True)
class InteractionSession:
    """Transient selection state of the designer surface.

    Attributes:
        pending_cells: Cells touched by the current drag, in touch order.
        is_selecting: Whether a drag is in progress.
        selected_child_id: Child highlighted for editing, if any.
    """

    pending_cells: tuple[GridCell, ...] = ()
    is_selecting: bool = False
    selected_child_id: str | None = None

    def start(self, cell: GridCell) -> "InteractionSession":
        return replace(self, pending_cells=(cell,), is_selecting=True)

    def add(self, cell: GridCell) -> "InteractionSession":
        """Append ``cell`` unless it is already pending."""
        key = cell_key(cell)
        if any(cell_key(c) == key for c in self.pending_cells):
            return self
        return replace(self, pending_cells=self.pending_cells + (cell,))

    def finish(self) -> "InteractionSession":
        return replace(self, pending_cells=(), is_selecting=False)

    def cleared(self) -> "InteractionSession":
        """Drop both the pending drag and the selected child."""
        return InteractionSession()

    def select(self, child_id: str | None) -> "InteractionSession":
        return replace(self, selected_child_id=child_id)


class GridDesigner:
    """Single entry point for an interactive grid editing session.

    Example:
        >>> designer = GridDesigner()
        >>> designer.start_selection(GridCell(row=0, column=0))
        >>> designer.add_to_selection(GridCell(row=1, column=1))
        >>> [child] = designer.end_selection()
        >>> child.name
        'child1'

    Args:
        engine: Engine to drive. A default one is created when omitted.
    """

    def __init__(self, engine: LayoutEngine | None = None):
        self.engine = engine if engine is not None else LayoutEngine()
        self.session = InteractionSession()

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def state(self) -> LayoutState:
        return self.engine.state

    @property
    def active_config(self) -> BreakpointConfig:
        return self.engine.active_config

    @property
    def pending_selection(self) -> tuple[GridCell, ...]:
        return self.session.pending_cells

    @property
    def is_selecting(self) -> bool:
        return self.session.is_selecting

    @property
    def selected_child_id(self) -> str | None:
        return self.session.selected_child_id

    @property
    def selected_child(self) -> GridChild | None:
        if self.session.selected_child_id is None:
            return None
        return self.active_config.find_child(self.session.selected_child_id)

    @property
    def can_undo(self) -> bool:
        return self.engine.can_undo

    @property
    def can_redo(self) -> bool:
        return self.engine.can_redo

    @property
    def use_named_areas(self) -> bool:
        return self.engine.use_named_areas

    # =========================================================================
    # Selection
    # =========================================================================

    def start_selection(self, cell: GridCell) -> None:
        self.session = self.session.start(cell)

    def add_to_selection(self, cell: GridCell) -> None:
        self.session = self.session.add(cell)

    def end_selection(self, split: bool = False) -> list[GridChild]:
        """Commit the pending cells as children and reset the drag.

        The pending selection is cleared whether or not the commit was
        accepted.
        """
        cells = self.session.pending_cells
        self.session = self.session.finish()
        return self.engine.commit_selection(cells, split=split)

    def clear_selection(self) -> None:
        self.session = self.session.finish()

    def select_child(self, child_id: str | None) -> None:
        self.session = self.session.select(child_id)

    # =========================================================================
    # Engine operations with session side effects
    # =========================================================================

    def set_active_breakpoint(self, breakpoint: BreakpointId | str) -> None:
        self.engine.set_active_breakpoint(breakpoint)
        self.session = self.session.cleared()

    def delete_child(self, child_id: str) -> bool:
        deleted = self.engine.delete_child(child_id)
        if deleted and self.session.selected_child_id == child_id:
            self.session = self.session.select(None)
        return deleted

    def undo(self) -> bool:
        """Undo the last edit and drop the child selection."""
        restored = self.engine.undo()
        if restored:
            self.session = self.session.select(None)
        return restored

    def redo(self) -> bool:
        return self.engine.redo()

    def import_layout(self, text: str | bytes) -> bool:
        imported = self.engine.import_layout(text)
        if imported:
            self.session = self.session.select(None)
        return imported

    # =========================================================================
    # Pass-throughs
    # =========================================================================

    def resize_rows(self, delta: int) -> int:
        return self.engine.resize_rows(delta)

    def resize_columns(self, delta: int) -> int:
        return self.engine.resize_columns(delta)

    def mutate_grid_definition(
        self, updater: Callable[[GridDefinition], GridDefinition]
    ) -> None:
        self.engine.mutate_grid_definition(updater)

    def snapshot(self) -> None:
        self.engine.snapshot()

    def update_child(
        self, child_id: str, updater: Callable[[GridChild], GridChild]
    ) -> None:
        self.engine.update_child(child_id, updater)

    def set_child_lock(self, child_id: str, locked: bool) -> None:
        self.engine.set_child_lock(child_id, locked)

    def set_child_name(self, child_id: str, name: str) -> None:
        self.engine.set_child_name(child_id, name)

    def set_use_named_areas(self, enabled: bool) -> None:
        self.engine.set_use_named_areas(enabled)

    def export_layout(self) -> str:
        return self.engine.export_layout()

    def generate_css(
        self, responsive: bool = False, parent_class: str | None = None
    ) -> str:
        return self.engine.generate_css(responsive, parent_class)

    def generate_html(self, parent_class: str | None = None) -> str:
        return self.engine.generate_html(parent_class)


__all__ = ["InteractionSession", "GridDesigner"]
