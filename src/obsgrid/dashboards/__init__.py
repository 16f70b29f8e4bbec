"""Grafana dashboard declarations and grid layout.

Build dashboards from typed models, then lay them out on the 24-column
Grafana grid before rendering.
"""

from obsgrid.dashboards.grid import (
    COLUMNS,
    DEFAULT_PANEL_HEIGHT,
    DEFAULT_PANEL_WIDTH,
    ROW_HEADER_HEIGHT,
    full_width,
    half_width,
    quarter_width,
    third_width,
)
from obsgrid.dashboards.layout import (
    LayoutPlan,
    OverflowPolicy,
    Placement,
    assign_panel_ids,
    compute_layout,
    plan_layout,
    row_header_offsets,
)
from obsgrid.dashboards.models import (
    Dashboard,
    GaugePanel,
    GridPos,
    Row,
    StatPanel,
    TablePanel,
    Target,
    TimeRange,
    TimeSeriesPanel,
)
from obsgrid.dashboards.positions import (
    POSITIONED_PANEL_TYPES,
    panel_grid_pos,
    set_panel_position,
)

__all__ = [
    # Grid
    "COLUMNS",
    "DEFAULT_PANEL_WIDTH",
    "DEFAULT_PANEL_HEIGHT",
    "ROW_HEADER_HEIGHT",
    "full_width",
    "half_width",
    "third_width",
    "quarter_width",
    # Models
    "Dashboard",
    "Row",
    "GridPos",
    "Target",
    "TimeRange",
    "TimeSeriesPanel",
    "StatPanel",
    "TablePanel",
    "GaugePanel",
    # Positions
    "POSITIONED_PANEL_TYPES",
    "panel_grid_pos",
    "set_panel_position",
    # Layout
    "OverflowPolicy",
    "LayoutPlan",
    "Placement",
    "compute_layout",
    "plan_layout",
    "row_header_offsets",
    "assign_panel_ids",
]
