"""Uniform access to the grid position of any known panel variant.

The panel set is closed: a panel kind that is not listed in
``POSITIONED_PANEL_TYPES`` has no grid position as far as layout is
concerned, and is skipped rather than rejected. Supporting a new panel
kind means adding it here.
"""

from typing import Any, Optional

from obsgrid.dashboards.models import (
    GaugePanel,
    GridPos,
    StatPanel,
    TablePanel,
    TimeSeriesPanel,
)

POSITIONED_PANEL_TYPES = (TimeSeriesPanel, StatPanel, TablePanel, GaugePanel)


def panel_grid_pos(panel: Any) -> Optional[GridPos]:
    """Return the panel's live GridPos, or None for unknown panels."""
    if isinstance(panel, POSITIONED_PANEL_TYPES):
        return panel.grid_pos
    return None


def set_panel_position(panel: Any, x: int, y: int, w: int, h: int) -> bool:
    """Write all four coordinates of a panel in one assignment.

    Returns:
        False (and leaves the panel untouched) if the panel kind is unknown
    """
    if not isinstance(panel, POSITIONED_PANEL_TYPES):
        return False
    panel.grid_pos = GridPos(x=x, y=y, w=w, h=h)
    return True
