"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Engine and designer fixtures with fixed limits
- Common layout fixtures
"""

import pytest
from dotenv import load_dotenv

from gridlayout.engine import GridDesigner, LayoutEngine
from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    LayoutState,
    default_grid_definition,
    default_layout_state,
)

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def engine() -> LayoutEngine:
    """Engine with the stock limits, independent of the environment.

    Returns:
        LayoutEngine with history_limit=50, max_tracks=20 and line-based
        placement.
    """
    return LayoutEngine(history_limit=50, max_tracks=20, use_named_areas=False)


@pytest.fixture
def designer(engine: LayoutEngine) -> GridDesigner:
    """Designer facade wrapping the ``engine`` fixture."""
    return GridDesigner(engine)


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_state() -> LayoutState:
    """Holy-grail layout on desktop: header, sidebar, content, footer.

    Returns:
        LayoutState with four children on a 3x4 desktop grid.
    """

    def block(rows: range, cols: range) -> tuple[GridCell, ...]:
        return tuple(GridCell(row=r, column=c) for r in rows for c in cols)

    children = (
        GridChild(id="h", name="header", cells=block(range(0, 1), range(0, 4))),
        GridChild(id="s", name="sidebar", cells=block(range(1, 2), range(0, 1))),
        GridChild(id="m", name="content", cells=block(range(1, 2), range(1, 4))),
        GridChild(id="f", name="footer", cells=block(range(2, 3), range(0, 4))),
    )
    config = BreakpointConfig(grid=default_grid_definition(3, 4), children=children)
    return default_layout_state().with_config(config, BreakpointId.DESKTOP)
