"""Layout model: grid, children, breakpoints and the export envelope.

Example usage:
    >>> from gridlayout.schema import default_layout_state, export_layout_json
    >>> state = default_layout_state()
    >>> state.active_config.grid.column_count
    4
    >>> text = export_layout_json(state)
"""

from .lib import (
    EXPORT_VERSION,
    TRACK_TYPES,
    AutoTrack,
    BreakpointConfig,
    BreakpointId,
    Breakpoints,
    FrTrack,
    GridCell,
    GridChild,
    GridDefinition,
    HistoryEntry,
    LayoutExport,
    LayoutImportError,
    LayoutState,
    MinMaxTrack,
    PercentTrack,
    PlaceItems,
    PxTrack,
    SelfAlignment,
    TrackSize,
    auto,
    default_breakpoint_config,
    default_grid_definition,
    default_layout_state,
    default_track_size,
    export_layout_json,
    fr,
    minmax,
    parse_layout_export,
    percent,
    px,
)

__all__ = [
    # Vocabularies
    "BreakpointId",
    "PlaceItems",
    "SelfAlignment",
    # Cells and tracks
    "GridCell",
    "FrTrack",
    "PxTrack",
    "PercentTrack",
    "AutoTrack",
    "MinMaxTrack",
    "TrackSize",
    "TRACK_TYPES",
    "fr",
    "px",
    "percent",
    "auto",
    "minmax",
    "default_track_size",
    # Models
    "GridDefinition",
    "GridChild",
    "BreakpointConfig",
    "Breakpoints",
    "LayoutState",
    "HistoryEntry",
    "LayoutExport",
    "LayoutImportError",
    "EXPORT_VERSION",
    # Serialization
    "export_layout_json",
    "parse_layout_export",
    # Defaults
    "default_grid_definition",
    "default_breakpoint_config",
    "default_layout_state",
]
