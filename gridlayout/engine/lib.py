"""Undo-tracked layout state engine.

``LayoutEngine`` owns the current ``LayoutState`` and a bounded two-stack
``LayoutHistory``. Every mutation replaces the state with a new frozen value,
so a history snapshot is simply a reference to the previous state.

Example:
    >>> engine = LayoutEngine()
    >>> engine.commit_selection([GridCell(row=0, column=0), GridCell(row=1, column=1)])
    >>> print(engine.generate_css())
    >>> engine.undo()
"""

import logging
from collections import deque
from typing import Callable, Iterable

from gridlayout.codegen import generate_full_css, generate_html, generate_responsive_css
from gridlayout.config import EnvVar, get_environment, get_history_limit, get_max_tracks, get_parent_class
from gridlayout.geometry import cell_key, cell_key_set, expand_to_bounding_box, split_into_rectangles
from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    GridDefinition,
    HistoryEntry,
    LayoutImportError,
    LayoutState,
    default_layout_state,
    default_track_size,
    export_layout_json,
    parse_layout_export,
)

logger = logging.getLogger(__name__)

CHILD_NAME_PREFIX = "child"


# =============================================================================
# History
# =============================================================================


class LayoutHistory:
    """Bounded undo/redo stacks of layout snapshots.

    Args:
        limit: Maximum depth of each stack. Defaults to ``GRID_HISTORY_LIMIT``.
    """

    def __init__(self, limit: int | None = None):
        self._limit = get_history_limit(limit)
        self._undo: deque[HistoryEntry] = deque(maxlen=self._limit)
        self._redo: deque[HistoryEntry] = deque(maxlen=self._limit)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push(self, state: LayoutState) -> None:
        """Record a pre-mutation snapshot and invalidate the redo stack."""
        self._undo.append(HistoryEntry(state))
        self._redo.clear()

    def undo(self, current: LayoutState) -> LayoutState | None:
        """Pop the latest snapshot, parking ``current`` on the redo stack.

        Returns:
            The restored state, or None when there is nothing to undo.
        """
        if not self._undo:
            return None
        entry = self._undo.pop()
        self._redo.append(HistoryEntry(current))
        return entry.state

    def redo(self, current: LayoutState) -> LayoutState | None:
        """Reapply the most recently undone snapshot.

        Returns:
            The restored state, or None when there is nothing to redo.
        """
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._undo.append(HistoryEntry(current))
        return entry.state

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


# =============================================================================
# Engine
# =============================================================================


def next_child_name(children: Iterable[GridChild]) -> str:
    """Return the lowest ``childN`` (N >= 1) not used by any child name."""
    used = {child.name for child in children}
    n = 1
    while f"{CHILD_NAME_PREFIX}{n}" in used:
        n += 1
    return f"{CHILD_NAME_PREFIX}{n}"


class LayoutEngine:
    """Owner of the layout state and its undo history.

    Operations act on the active breakpoint unless stated otherwise.
    Rejected operations leave both state and history untouched.

    Args:
        state: Initial layout. Defaults to ``default_layout_state()``.
        history_limit: Undo depth. Defaults to ``GRID_HISTORY_LIMIT``.
        max_tracks: Upper clamp for row/column counts. Defaults to
            ``GRID_MAX_TRACKS``.
        use_named_areas: Placement strategy for generated CSS. Defaults to
            ``GRID_USE_AREAS``.
    """

    def __init__(
        self,
        state: LayoutState | None = None,
        history_limit: int | None = None,
        max_tracks: int | None = None,
        use_named_areas: bool | None = None,
    ):
        self.state = state if state is not None else default_layout_state()
        self.history = LayoutHistory(history_limit)
        self.max_tracks = get_max_tracks(max_tracks)
        self.use_named_areas = get_environment(
            EnvVar.GRID_USE_AREAS, override=use_named_areas
        )

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def active_breakpoint(self) -> BreakpointId:
        return BreakpointId(self.state.active_breakpoint)

    @property
    def active_config(self) -> BreakpointConfig:
        return self.state.active_config

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def snapshot(self) -> None:
        """Push the current state onto the undo stack."""
        self.history.push(self.state)

    def _replace_config(self, config: BreakpointConfig) -> None:
        self.state = self.state.with_config(config)

    def set_active_breakpoint(self, breakpoint: BreakpointId | str) -> None:
        """Switch the edited breakpoint. Not undo-tracked."""
        self.state = self.state.with_active_breakpoint(breakpoint)
        logger.debug(f"Active breakpoint set to {self.active_breakpoint.value}")

    def set_use_named_areas(self, enabled: bool) -> None:
        """Switch CSS placement strategy. Not undo-tracked."""
        self.use_named_areas = bool(enabled)

    # -------------------------------------------------------------------------
    # Grid definition
    # -------------------------------------------------------------------------

    def mutate_grid_definition(
        self, updater: Callable[[GridDefinition], GridDefinition]
    ) -> None:
        """Replace the active grid definition with ``updater(grid)``.

        Does not push history; call ``snapshot()`` first when the change
        should be undoable.
        """
        config = self.active_config
        self._replace_config(config.model_copy(update={"grid": updater(config.grid)}))

    def _resize(self, axis: str, delta: int) -> int:
        count_field, sizes_field = f"{axis}_count", f"{axis}_sizes"
        grid = self.active_config.grid
        old_count = getattr(grid, count_field)
        new_count = max(1, min(self.max_tracks, old_count + delta))

        sizes = tuple(getattr(grid, sizes_field))
        if new_count > old_count:
            sizes += tuple(default_track_size() for _ in range(new_count - old_count))
        else:
            sizes = sizes[:new_count]

        self.snapshot()
        self.mutate_grid_definition(
            lambda g: g.model_copy(update={count_field: new_count, sizes_field: sizes})
        )
        logger.debug(f"Resized {axis}s {old_count} -> {new_count}")
        return new_count

    def resize_rows(self, delta: int) -> int:
        """Add (positive) or remove (negative) rows, clamped to ``[1, max_tracks]``.

        Returns:
            The new row count.
        """
        return self._resize("row", delta)

    def resize_columns(self, delta: int) -> int:
        """Add or remove columns, clamped to ``[1, max_tracks]``.

        Returns:
            The new column count.
        """
        return self._resize("column", delta)

    # -------------------------------------------------------------------------
    # Children
    # -------------------------------------------------------------------------

    def _locked_cells(self) -> set[tuple[int, int]]:
        locked: set[tuple[int, int]] = set()
        for child in self.active_config.children:
            if child.locked:
                locked |= cell_key_set(child.cells)
        return locked

    def commit_selection(
        self, cells: Iterable[GridCell], split: bool = False
    ) -> list[GridChild]:
        """Turn a pointer selection into one or more children.

        The selection is expanded to its bounding box, or with ``split``
        partitioned into rectangles. Each region becomes a new unlocked child
        with the lowest unused ``childN`` name.

        Args:
            cells: Selected cells, in any order and possibly with duplicates.
            split: Partition into rectangles instead of expanding.

        Returns:
            The created children. Empty when the selection is empty or any
            region overlaps a locked child; nothing is recorded then.
        """
        cells = list(cells)
        if not cells:
            return []

        regions = split_into_rectangles(cells) if split else [expand_to_bounding_box(cells)]
        locked = self._locked_cells()
        if any(cell_key(c) in locked for region in regions for c in region):
            logger.warning("Selection overlaps a locked child; nothing created")
            return []

        self.snapshot()
        children = list(self.active_config.children)
        created: list[GridChild] = []
        for region in regions:
            name = next_child_name(children)
            child = GridChild.create(
                name,
                region,
                area_name=name if self.use_named_areas else None,
            )
            children.append(child)
            created.append(child)

        self._replace_config(
            self.active_config.model_copy(update={"children": tuple(children)})
        )
        logger.debug(f"Created {', '.join(c.name for c in created)}")
        return created

    def delete_child(self, child_id: str) -> bool:
        """Remove a child from the active breakpoint.

        Returns:
            True if a child was removed. Unknown IDs change nothing.
        """
        config = self.active_config
        if config.find_child(child_id) is None:
            logger.warning(f"No child '{child_id}' in {self.active_breakpoint.value}")
            return False

        self.snapshot()
        children = tuple(c for c in config.children if c.id != child_id)
        self._replace_config(config.model_copy(update={"children": children}))
        logger.debug(f"Deleted child {child_id}")
        return True

    def update_child(
        self, child_id: str, updater: Callable[[GridChild], GridChild]
    ) -> None:
        """Replace one child with ``updater(child)``. Not undo-tracked."""
        config = self.active_config
        children = tuple(
            updater(c) if c.id == child_id else c for c in config.children
        )
        self._replace_config(config.model_copy(update={"children": children}))

    def set_child_lock(self, child_id: str, locked: bool) -> None:
        self.update_child(child_id, lambda c: c.model_copy(update={"locked": locked}))

    def set_child_name(self, child_id: str, name: str) -> None:
        """Rename a child. Blank names keep the current name.

        With named areas on, the area name follows the new name; otherwise
        it is cleared.
        """

        def rename(child: GridChild) -> GridChild:
            new_name = name.strip() or child.name
            area = new_name if self.use_named_areas else None
            return child.model_copy(update={"name": new_name, "area_name": area})

        self.update_child(child_id, rename)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False if there is none."""
        restored = self.history.undo(self.state)
        if restored is None:
            return False
        self.state = restored
        return True

    def redo(self) -> bool:
        """Reapply the last undone snapshot. Returns False if there is none."""
        restored = self.history.redo(self.state)
        if restored is None:
            return False
        self.state = restored
        return True

    # -------------------------------------------------------------------------
    # Persistence and output
    # -------------------------------------------------------------------------

    def export_layout(self) -> str:
        """Serialize the current layout as an export document."""
        return export_layout_json(self.state)

    def import_layout(self, text: str | bytes) -> bool:
        """Replace the layout with an export document.

        On success both history stacks are cleared. On failure the current
        state is kept.

        Returns:
            True if the document was accepted.
        """
        try:
            export = parse_layout_export(text)
        except LayoutImportError as e:
            logger.warning(f"Layout import rejected: {e}")
            return False

        self.state = export.layout
        self.history.clear()
        logger.debug(f"Imported layout exported at {export.exported_at}")
        return True

    def generate_css(
        self, responsive: bool = False, parent_class: str | None = None
    ) -> str:
        """Render CSS for the active breakpoint, or every breakpoint."""
        parent = get_parent_class(parent_class)
        if responsive:
            return generate_responsive_css(self.state, self.use_named_areas, parent)
        return generate_full_css(self.active_config, self.use_named_areas, parent)

    def generate_html(self, parent_class: str | None = None) -> str:
        """Render the markup skeleton for the active breakpoint."""
        return generate_html(self.active_config.children, get_parent_class(parent_class))


__all__ = [
    "CHILD_NAME_PREFIX",
    "LayoutHistory",
    "LayoutEngine",
    "next_child_name",
]
