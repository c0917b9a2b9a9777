"""Authoritative layout model for the grid designer.

This module is the single source of truth for the data the engine edits and
the generators render:
- Cell, track and alignment vocabularies
- Grid, child and per-breakpoint configuration models
- The export envelope and its JSON (de)serialization
- Factories for default instances

All models are frozen. Collections are tuples, so a model value can be
shared freely (undo snapshots, generator input) without defensive copies.
Updates go through ``model_copy(update=...)`` and replace only the touched
branch of the tree.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Iterable, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1

# Shared model configuration. Attributes are snake_case in Python and
# camelCase on the wire, matching files written by the browser tool.
_MODEL_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
    "use_enum_values": True,
}


# =============================================================================
# Vocabularies
# =============================================================================


class BreakpointId(str, Enum):
    """The three responsive configurations every layout carries."""

    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


class PlaceItems(str, Enum):
    """Container alignment (CSS place-items)."""

    START = "start"
    END = "end"
    CENTER = "center"
    STRETCH = "stretch"
    NORMAL = "normal"


class SelfAlignment(str, Enum):
    """Per-child alignment override (CSS justify-self / align-self)."""

    START = "start"
    END = "end"
    CENTER = "center"
    STRETCH = "stretch"


# =============================================================================
# Cells and tracks
# =============================================================================


class GridCell(BaseModel):
    """Single grid cell identified by zero-based row and column."""

    row: Annotated[int, Field(ge=0)]
    column: Annotated[int, Field(ge=0)]

    model_config = _MODEL_CONFIG


class FrTrack(BaseModel):
    """Fractional track, e.g. ``1fr``."""

    type: Literal["fr"] = "fr"
    value: int | float = 1

    model_config = _MODEL_CONFIG


class PxTrack(BaseModel):
    """Fixed pixel track, e.g. ``200px``."""

    type: Literal["px"] = "px"
    value: int | float

    model_config = _MODEL_CONFIG


class PercentTrack(BaseModel):
    """Percentage track, e.g. ``25%``."""

    type: Literal["percent"] = "percent"
    value: int | float

    model_config = _MODEL_CONFIG


class AutoTrack(BaseModel):
    """Content-sized track."""

    type: Literal["auto"] = "auto"

    model_config = _MODEL_CONFIG


class MinMaxTrack(BaseModel):
    """``minmax(min, max)`` track. Bounds are kept as opaque CSS strings."""

    type: Literal["minmax"] = "minmax"
    min: str
    max: str

    model_config = _MODEL_CONFIG


TrackSize = Annotated[
    Union[FrTrack, PxTrack, PercentTrack, AutoTrack, MinMaxTrack],
    Field(discriminator="type"),
]

_TRACK_ADAPTER: TypeAdapter = TypeAdapter(TrackSize)
TRACK_TYPES = (FrTrack, PxTrack, PercentTrack, AutoTrack, MinMaxTrack)


def fr(value: int | float = 1) -> FrTrack:
    return FrTrack(value=value)


def px(value: int | float) -> PxTrack:
    return PxTrack(value=value)


def percent(value: int | float) -> PercentTrack:
    return PercentTrack(value=value)


def auto() -> AutoTrack:
    return AutoTrack()


def minmax(min_size: str, max_size: str) -> MinMaxTrack:
    return MinMaxTrack(min=min_size, max=max_size)


def default_track_size() -> FrTrack:
    """Track size used for newly added rows and columns."""
    return fr(1)


def _heal_track(item: Any) -> Any:
    """Return a valid track for ``item``, substituting ``1fr`` if corrupt."""
    if isinstance(item, TRACK_TYPES):
        return item
    try:
        return _TRACK_ADAPTER.validate_python(item)
    except ValidationError:
        logger.warning(f"Replacing unrecognized track size {item!r} with 1fr")
        return default_track_size()


# =============================================================================
# Grid and children
# =============================================================================


class GridDefinition(BaseModel):
    """Grid container definition: tracks, gaps and item alignment.

    Attributes:
        row_count: Number of rows (>= 1).
        column_count: Number of columns (>= 1).
        row_sizes: One size per row. A length mismatch with ``row_count``
            means "unspecified" and renders as ``repeat(n, 1fr)``.
        column_sizes: One size per column, same rule as ``row_sizes``.
        gap: Shorthand gap in pixels.
        row_gap: Row gap in pixels.
        column_gap: Column gap in pixels.
        place_items: Container item alignment.
    """

    row_count: Annotated[int, Field(ge=1)]
    column_count: Annotated[int, Field(ge=1)]
    row_sizes: tuple[TrackSize, ...] = ()
    column_sizes: tuple[TrackSize, ...] = ()
    gap: int | float = 16
    row_gap: int | float = 16
    column_gap: int | float = 16
    place_items: PlaceItems = Field(default=PlaceItems.STRETCH, validate_default=True)

    model_config = _MODEL_CONFIG

    @field_validator("row_sizes", "column_sizes", mode="before")
    @classmethod
    def _heal_track_sizes(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(_heal_track(item) for item in value)
        return value


class GridChild(BaseModel):
    """A named rectangular region of the grid.

    Attributes:
        id: Unique identifier, generated on creation.
        name: Human label, also the default area and class name.
        cells: Cells covered by the child. Forms a rectangle when created
            through the engine.
        locked: Locked children block new selections over their cells.
        area_name: Explicit name for ``grid-template-areas`` output.
        justify_self: Optional inline-axis alignment override.
        align_self: Optional block-axis alignment override.
    """

    id: str
    name: str
    cells: tuple[GridCell, ...] = ()
    locked: bool = False
    area_name: str | None = None
    justify_self: SelfAlignment | None = None
    align_self: SelfAlignment | None = None

    model_config = _MODEL_CONFIG

    @classmethod
    def create(
        cls, name: str, cells: Iterable[GridCell], **kwargs: Any
    ) -> "GridChild":
        """Factory method to create a new child with a generated ID."""
        return cls(id=str(uuid4()), name=name, cells=tuple(cells), **kwargs)


class BreakpointConfig(BaseModel):
    """Grid definition and child list of one breakpoint."""

    grid: GridDefinition
    children: tuple[GridChild, ...] = ()

    model_config = _MODEL_CONFIG

    def find_child(self, child_id: str) -> GridChild | None:
        """Return the child with ``child_id``, if present."""
        return next((c for c in self.children if c.id == child_id), None)


class Breakpoints(BaseModel):
    """Exactly one configuration per breakpoint."""

    desktop: BreakpointConfig
    tablet: BreakpointConfig
    mobile: BreakpointConfig

    model_config = _MODEL_CONFIG

    def get(self, breakpoint: BreakpointId | str) -> BreakpointConfig:
        return getattr(self, BreakpointId(breakpoint).value)

    def replace(
        self, breakpoint: BreakpointId | str, config: BreakpointConfig
    ) -> "Breakpoints":
        return self.model_copy(update={BreakpointId(breakpoint).value: config})


class LayoutState(BaseModel):
    """Full layout: active breakpoint plus every breakpoint configuration."""

    active_breakpoint: BreakpointId = Field(
        default=BreakpointId.DESKTOP, validate_default=True
    )
    breakpoints: Breakpoints

    model_config = _MODEL_CONFIG

    @property
    def active_config(self) -> BreakpointConfig:
        """Configuration targeted by single-breakpoint operations."""
        return self.breakpoints.get(self.active_breakpoint)

    def with_config(
        self,
        config: BreakpointConfig,
        breakpoint: BreakpointId | str | None = None,
    ) -> "LayoutState":
        """Return a state with one breakpoint configuration replaced.

        Args:
            config: New configuration.
            breakpoint: Target breakpoint. Defaults to the active one.
        """
        target = breakpoint if breakpoint is not None else self.active_breakpoint
        return self.model_copy(
            update={"breakpoints": self.breakpoints.replace(target, config)}
        )

    def with_active_breakpoint(self, breakpoint: BreakpointId | str) -> "LayoutState":
        return self.model_copy(
            update={"active_breakpoint": BreakpointId(breakpoint).value}
        )


@dataclass(frozen=True)
class HistoryEntry:
    """Undo/redo stack element: a layout snapshot and when it was taken."""

    state: LayoutState
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# Export envelope
# =============================================================================


def _utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    return (
        datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


class LayoutExport(BaseModel):
    """The only persisted shape: a versioned layout snapshot."""

    version: Literal[1]
    layout: LayoutState
    exported_at: str = Field(default_factory=_utc_now_iso)

    model_config = _MODEL_CONFIG

    @field_validator("version", mode="before")
    @classmethod
    def _exact_version(cls, value: Any) -> Any:
        # bool is an int subclass and "1" would be coerced; both are rejected.
        if type(value) is not int or value != EXPORT_VERSION:
            raise ValueError(f"Unsupported layout export version: {value!r}")
        return value


class LayoutImportError(ValueError):
    """Raised when text cannot be read as a layout export."""


def export_layout_json(state: LayoutState, exported_at: str | None = None) -> str:
    """Serialize ``state`` as a pretty-printed export document.

    Args:
        state: Layout to export.
        exported_at: Timestamp override, mostly for tests.

    Returns:
        UTF-8 friendly JSON text with camelCase keys.
    """
    envelope = LayoutExport(
        version=EXPORT_VERSION,
        layout=state,
        exported_at=exported_at or _utc_now_iso(),
    )
    return envelope.model_dump_json(by_alias=True, indent=2, exclude_none=True)


def parse_layout_export(text: str | bytes) -> LayoutExport:
    """Parse and validate an export document.

    Args:
        text: JSON text as produced by ``export_layout_json``.

    Returns:
        The validated export envelope.

    Raises:
        LayoutImportError: On malformed JSON, an unsupported version, a
            missing breakpoint, an unknown active breakpoint or any other
            shape error.
    """
    try:
        return LayoutExport.model_validate_json(text)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise LayoutImportError(f"Invalid layout export: {problems}") from e


# =============================================================================
# Defaults
# =============================================================================


def default_grid_definition(row_count: int = 3, column_count: int = 4) -> GridDefinition:
    """Create a grid with equal fractional tracks and 16px gaps."""
    return GridDefinition(
        row_count=row_count,
        column_count=column_count,
        row_sizes=tuple(default_track_size() for _ in range(row_count)),
        column_sizes=tuple(default_track_size() for _ in range(column_count)),
        gap=16,
        row_gap=16,
        column_gap=16,
        place_items=PlaceItems.STRETCH,
    )


def default_breakpoint_config(
    row_count: int = 3, column_count: int = 4
) -> BreakpointConfig:
    """Create an empty breakpoint configuration."""
    return BreakpointConfig(grid=default_grid_definition(row_count, column_count))


def default_layout_state() -> LayoutState:
    """Create the initial layout: desktop 3x4, tablet 3x3, mobile 4x2."""
    return LayoutState(
        active_breakpoint=BreakpointId.DESKTOP,
        breakpoints=Breakpoints(
            desktop=default_breakpoint_config(3, 4),
            tablet=default_breakpoint_config(3, 3),
            mobile=default_breakpoint_config(4, 2),
        ),
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
