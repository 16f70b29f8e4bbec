"""
Dashboard YAML loader.

Builds a Dashboard declaration from a YAML document.

Expected structure:
    dashboard:
      uid: api-overview
      title: API Overview
      tags: [api]
      time: {from: now-6h, to: now}

    rows:
      - title: Traffic
        collapsed: false
        panels:
          - type: timeseries
            title: Requests
            width: 12
            height: 8
            unit: reqps
            targets:
              - expr: sum(rate(http_requests_total[5m]))
                legend: "{{service}}"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from obsgrid.core.errors import ValidationError
from obsgrid.dashboards.models import (
    BasePanel,
    Dashboard,
    GaugePanel,
    Row,
    StatPanel,
    TablePanel,
    Target,
    TimeSeriesPanel,
)

PANEL_TYPES: dict[str, type[BasePanel]] = {
    "timeseries": TimeSeriesPanel,
    "stat": StatPanel,
    "table": TablePanel,
    "gauge": GaugePanel,
}


class DashboardLoadError(ValidationError):
    """Raised when a dashboard declaration cannot be loaded."""


def load_dashboard(file_path: str | Path) -> Dashboard:
    """
    Load a dashboard declaration from a YAML file.

    Raises:
        DashboardLoadError: If the file is missing, is not valid YAML,
            or does not describe a dashboard
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise DashboardLoadError(f"Dashboard file not found: {file_path}")

    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DashboardLoadError(f"Invalid YAML in {file_path}: {e}") from e

    return parse_dashboard(data, source=str(file_path))


def parse_dashboard(data: Any, source: str = "<memory>") -> Dashboard:
    """Build a Dashboard from already-parsed YAML data."""
    if not isinstance(data, dict) or not isinstance(data.get("dashboard"), dict):
        raise DashboardLoadError(
            "Missing 'dashboard' section", details={"source": source}
        )

    meta = data["dashboard"]
    title = meta.get("title")
    if not title:
        raise DashboardLoadError("Dashboard must have a title", details={"source": source})

    dashboard = Dashboard(uid=str(meta.get("uid", "")), title=str(title))

    if meta.get("description"):
        dashboard.with_description(str(meta["description"]))
    tags = meta.get("tags")
    if tags is not None:
        if not isinstance(tags, list):
            raise DashboardLoadError(
                "'tags' must be a list", details={"source": source, "tags": tags}
            )
        dashboard.with_tags(*[str(t) for t in tags])
    if isinstance(meta.get("time"), dict):
        dashboard.with_time(
            str(meta["time"].get("from", "now-6h")), str(meta["time"].get("to", "now"))
        )
    if meta.get("refresh"):
        dashboard.with_refresh(str(meta["refresh"]))
    if meta.get("timezone"):
        dashboard.with_timezone(str(meta["timezone"]))
    if not _flag(meta, "editable", True, {"source": source}):
        dashboard.read_only()

    rows = data.get("rows") or []
    if not isinstance(rows, list):
        raise DashboardLoadError("'rows' must be a list", details={"source": source})

    for index, row_data in enumerate(rows):
        dashboard.add_row(_parse_row(row_data, index, source))

    return dashboard


def _parse_row(data: Any, index: int, source: str) -> Row:
    if not isinstance(data, dict):
        raise DashboardLoadError(
            f"Row {index} must be a mapping", details={"source": source}
        )

    row = Row(title=str(data.get("title", f"Row {index + 1}")))
    if _flag(data, "collapsed", False, {"source": source, "row": row.title}):
        row.collapse()

    for panel_data in data.get("panels") or []:
        row.add_panel(_parse_panel(panel_data, row.title, source))

    return row


def _parse_panel(data: Any, row_title: str, source: str) -> BasePanel:
    if not isinstance(data, dict):
        raise DashboardLoadError(
            "Panel must be a mapping", details={"source": source, "row": row_title}
        )

    panel_type = data.get("type", "timeseries")
    panel_cls = PANEL_TYPES.get(panel_type)
    if panel_cls is None:
        raise DashboardLoadError(
            f"Unknown panel type: {panel_type}",
            details={"source": source, "row": row_title, "known": ", ".join(PANEL_TYPES)},
        )

    title = str(data.get("title", ""))
    panel = panel_cls(title=title)

    width = _dimension(data, "width", title, source)
    height = _dimension(data, "height", title, source)
    panel.with_size(width, height)

    if data.get("description"):
        panel.with_description(str(data["description"]))
    if data.get("datasource"):
        panel.with_datasource(str(data["datasource"]))
    if data.get("unit"):
        panel.with_unit(str(data["unit"]))

    for ref, target in enumerate(data.get("targets") or []):
        panel.add_target(_parse_target(target, ref, title, source))

    if isinstance(panel, GaugePanel) and ("min" in data or "max" in data):
        panel.min = data.get("min")
        panel.max = data.get("max")

    return panel


def _dimension(data: dict[str, Any], key: str, title: str, source: str) -> int:
    """Read an optional non-negative integer size (0 when absent)."""
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DashboardLoadError(
            f"Panel {key} must be a non-negative integer",
            details={"source": source, "panel": title, key: value},
        )
    return value


def _parse_target(data: Any, ref: int, title: str, source: str) -> Target:
    if isinstance(data, str):
        return Target(expr=data, ref_id=chr(ord("A") + ref % 26))
    if not isinstance(data, dict) or "expr" not in data:
        raise DashboardLoadError(
            "Target must be a query string or have an 'expr'",
            details={"source": source, "panel": title},
        )
    return Target(
        expr=str(data["expr"]),
        legend_format=str(data.get("legend", "{{label}}")),
        ref_id=str(data.get("ref_id", chr(ord("A") + ref % 26))),
        interval=data.get("interval"),
        instant=_flag(data, "instant", False, {"source": source, "panel": title}),
    )


def _flag(data: dict[str, Any], key: str, default: bool, details: dict[str, Any]) -> bool:
    """Read an optional boolean, rejecting quoted strings like 'false'."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise DashboardLoadError(f"'{key}' must be true or false", details={**details, key: value})
    return value
