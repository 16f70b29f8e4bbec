"""Grafana dashboard data models.

Provides typed Python models for dashboard declarations. Values are built
with fluent ``with_*`` methods and laid out by
:func:`obsgrid.dashboards.layout.compute_layout` before rendering.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, TypeVar

from obsgrid.dashboards.grid import COLUMNS, ROW_HEADER_HEIGHT

# Legend placement options.
LEGEND_BOTTOM = "bottom"
LEGEND_RIGHT = "right"

# Tooltip mode options.
TOOLTIP_SINGLE = "single"
TOOLTIP_ALL = "all"
TOOLTIP_NONE = "none"

# Color mode options for stat panels.
COLOR_MODE_VALUE = "value"
COLOR_MODE_BACKGROUND = "background"
COLOR_MODE_NONE = "none"

# Graph mode options for stat panels.
GRAPH_MODE_NONE = "none"
GRAPH_MODE_AREA = "area"

REDUCE_LAST_NOT_NULL = "lastNotNull"

# Current Grafana dashboard schema version.
SCHEMA_VERSION = 39


@dataclass
class GridPos:
    """Panel position and size in the dashboard grid."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to Grafana ``gridPos`` format."""
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridPos":
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            w=int(data.get("w", 0)),
            h=int(data.get("h", 0)),
        )


@dataclass
class Target:
    """Prometheus query target for a panel."""

    expr: str  # PromQL expression
    legend_format: str = "{{label}}"
    ref_id: str = "A"
    interval: Optional[str] = None
    instant: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Grafana JSON format."""
        result = {
            "expr": self.expr,
            "legendFormat": self.legend_format,
            "refId": self.ref_id,
        }
        if self.interval:
            result["interval"] = self.interval
        if self.instant:
            result["instant"] = True
        return result


P = TypeVar("P", bound="BasePanel")


@dataclass
class BasePanel:
    """Fields and builder methods shared by every panel variant."""

    title: str
    description: Optional[str] = None
    datasource: Optional[str] = None
    unit: Optional[str] = None
    targets: List[Target] = field(default_factory=list)
    grid_pos: GridPos = field(default_factory=GridPos)

    # Assigned by assign_panel_ids()
    id: int = 0

    panel_type = ""

    def with_size(self: P, w: int, h: int) -> P:
        """Set the panel width and height, leaving its position alone."""
        self.grid_pos.w = w
        self.grid_pos.h = h
        return self

    def with_position(self: P, x: int, y: int) -> P:
        self.grid_pos.x = x
        self.grid_pos.y = y
        return self

    def with_description(self: P, description: str) -> P:
        self.description = description
        return self

    def with_datasource(self: P, datasource: str) -> P:
        self.datasource = datasource
        return self

    def with_unit(self: P, unit: str) -> P:
        self.unit = unit
        return self

    def with_targets(self: P, *targets: Target) -> P:
        self.targets = list(targets)
        return self

    def add_target(self: P, target: Target) -> P:
        self.targets.append(target)
        return self

    def _options(self) -> Dict[str, Any]:
        return {}

    def _field_defaults(self) -> Dict[str, Any]:
        defaults: Dict[str, Any] = {}
        if self.unit:
            defaults["unit"] = self.unit
        return defaults

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Grafana JSON format."""
        result: Dict[str, Any] = {
            "id": self.id,
            "type": self.panel_type,
            "title": self.title,
            "gridPos": self.grid_pos.to_dict(),
            "targets": [t.to_dict() for t in self.targets],
        }

        if self.description:
            result["description"] = self.description
        if self.datasource:
            result["datasource"] = self.datasource

        defaults = self._field_defaults()
        if defaults:
            result["fieldConfig"] = {"defaults": defaults}

        options = self._options()
        if options:
            result["options"] = options

        return result


@dataclass
class TimeSeriesPanel(BasePanel):
    """Time series graph panel."""

    legend_placement: str = LEGEND_BOTTOM
    show_legend: bool = True
    tooltip_mode: str = TOOLTIP_SINGLE

    panel_type = "timeseries"

    def with_legend_position(self, placement: str) -> "TimeSeriesPanel":
        self.legend_placement = placement
        self.show_legend = True
        return self

    def hide_legend(self) -> "TimeSeriesPanel":
        self.show_legend = False
        return self

    def with_tooltip(self, mode: str) -> "TimeSeriesPanel":
        self.tooltip_mode = mode
        return self

    def _options(self) -> Dict[str, Any]:
        return {
            "legend": {
                "displayMode": "list" if self.show_legend else "hidden",
                "placement": self.legend_placement,
                "showLegend": self.show_legend,
            },
            "tooltip": {"mode": self.tooltip_mode},
        }


@dataclass
class StatPanel(BasePanel):
    """Single-value stat panel."""

    color_mode: str = COLOR_MODE_VALUE
    graph_mode: str = GRAPH_MODE_NONE
    reduce_calcs: List[str] = field(default_factory=lambda: [REDUCE_LAST_NOT_NULL])

    panel_type = "stat"

    def color_by_value(self) -> "StatPanel":
        self.color_mode = COLOR_MODE_VALUE
        return self

    def color_by_background(self) -> "StatPanel":
        self.color_mode = COLOR_MODE_BACKGROUND
        return self

    def with_graph_mode(self, mode: str) -> "StatPanel":
        self.graph_mode = mode
        return self

    def with_reduce_calc(self, *calcs: str) -> "StatPanel":
        self.reduce_calcs = list(calcs)
        return self

    def _options(self) -> Dict[str, Any]:
        return {
            "colorMode": self.color_mode,
            "graphMode": self.graph_mode,
            "orientation": "auto",
            "reduceOptions": {"calcs": list(self.reduce_calcs)},
        }


@dataclass
class TablePanel(BasePanel):
    """Tabular panel."""

    show_header: bool = True

    panel_type = "table"

    def hide_header(self) -> "TablePanel":
        self.show_header = False
        return self

    def _options(self) -> Dict[str, Any]:
        return {"showHeader": self.show_header}


@dataclass
class GaugePanel(BasePanel):
    """Gauge panel with optional bounds."""

    min: Optional[float] = None
    max: Optional[float] = None

    panel_type = "gauge"

    def with_range(self, minimum: float, maximum: float) -> "GaugePanel":
        self.min = minimum
        self.max = maximum
        return self

    def _field_defaults(self) -> Dict[str, Any]:
        defaults = super()._field_defaults()
        if self.min is not None:
            defaults["min"] = self.min
        if self.max is not None:
            defaults["max"] = self.max
        return defaults

    def _options(self) -> Dict[str, Any]:
        return {"showThresholdLabels": False, "showThresholdMarkers": True}


@dataclass
class Row:
    """Dashboard row (container for panels)."""

    title: str
    collapsed: bool = False
    panels: List[Any] = field(default_factory=list)

    def with_panels(self, *panels: Any) -> "Row":
        self.panels = list(panels)
        return self

    def add_panel(self, panel: Any) -> "Row":
        self.panels.append(panel)
        return self

    def collapse(self) -> "Row":
        """Hide this row's panels by default."""
        self.collapsed = True
        return self

    def expand(self) -> "Row":
        self.collapsed = False
        return self

    def to_dict(self, y: int = 0) -> Dict[str, Any]:
        """Convert the row header to Grafana JSON format.

        A collapsed row carries its panels; an expanded row's panels are
        siblings of the header in the dashboard's panel list.
        """
        panels = []
        if self.collapsed:
            panels = [p.to_dict() for p in self.panels if isinstance(p, BasePanel)]
        return {
            "type": "row",
            "title": self.title,
            "collapsed": self.collapsed,
            "gridPos": {"x": 0, "y": y, "w": COLUMNS, "h": ROW_HEADER_HEIGHT},
            "panels": panels,
        }


@dataclass
class TimeRange:
    """Default dashboard time range."""

    start: str = "now-6h"
    end: str = "now"

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.start, "to": self.end}


@dataclass
class Dashboard:
    """Complete Grafana dashboard declaration."""

    uid: str
    title: str
    rows: List[Optional[Row]] = field(default_factory=list)

    # Metadata
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    time: Optional[TimeRange] = None
    refresh: Optional[str] = None
    timezone: str = "browser"
    editable: bool = True
    schema_version: int = SCHEMA_VERSION

    def with_description(self, description: str) -> "Dashboard":
        self.description = description
        return self

    def with_tags(self, *tags: str) -> "Dashboard":
        self.tags = list(tags)
        return self

    def with_time(self, start: str, end: str) -> "Dashboard":
        self.time = TimeRange(start, end)
        return self

    def with_refresh(self, refresh: str) -> "Dashboard":
        self.refresh = refresh
        return self

    def with_timezone(self, timezone: str) -> "Dashboard":
        self.timezone = timezone
        return self

    def make_editable(self) -> "Dashboard":
        self.editable = True
        return self

    def read_only(self) -> "Dashboard":
        self.editable = False
        return self

    def with_rows(self, *rows: Row) -> "Dashboard":
        self.rows = list(rows)
        return self

    def add_row(self, row: Row) -> "Dashboard":
        self.rows.append(row)
        return self

    def iter_panels(self) -> Iterator[Any]:
        """Yield every panel in row order, skipping empty row slots."""
        for row in self.rows:
            if row is None:
                continue
            yield from row.panels

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Grafana JSON format.

        Panels keep their current grid positions, so run compute_layout()
        (and assign_panel_ids()) first.
        """
        from obsgrid.dashboards.layout import row_header_offsets

        offsets = iter(row_header_offsets(self))
        panels: List[Dict[str, Any]] = []
        for row in self.rows:
            if row is None:
                continue
            panels.append(row.to_dict(y=next(offsets)))
            if not row.collapsed:
                panels.extend(p.to_dict() for p in row.panels if isinstance(p, BasePanel))

        result: Dict[str, Any] = {
            "uid": self.uid,
            "title": self.title,
            "tags": list(self.tags),
            "timezone": self.timezone,
            "editable": self.editable,
            "schemaVersion": self.schema_version,
            "panels": panels,
        }

        if self.description:
            result["description"] = self.description
        if self.time:
            result["time"] = self.time.to_dict()
        if self.refresh:
            result["refresh"] = self.refresh

        return result
