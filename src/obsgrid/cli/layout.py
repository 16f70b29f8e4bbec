"""CLI command for computing and checking a dashboard's grid layout."""

import json
from typing import Any, Optional

from obsgrid.cli.ux import console, error, header, print_table, success, warning
from obsgrid.config import load_settings
from obsgrid.core.errors import LayoutError, format_error_message
from obsgrid.dashboards.grid import COLUMNS, ROW_HEADER_HEIGHT
from obsgrid.dashboards.layout import (
    OverflowPolicy,
    assign_panel_ids,
    compute_layout,
    row_header_offsets,
)
from obsgrid.dashboards.loader import DashboardLoadError, load_dashboard
from obsgrid.dashboards.models import Dashboard
from obsgrid.dashboards.positions import panel_grid_pos
from obsgrid.dashboards.validator import LayoutValidationResult, validate_layout


def layout_command(
    dashboard_file: str,
    policy: Optional[str] = None,
    output: str = "text",
) -> int:
    """
    Lay out a YAML dashboard declaration and report panel positions.

    Args:
        dashboard_file: Path to dashboard YAML file
        policy: Overflow policy (defaults to OBSGRID_OVERFLOW_POLICY)
        output: "text" for a table, "json" for per-panel records,
            "grafana" for the full dashboard JSON

    Returns:
        Exit code (0 for success, 12 for layout errors)
    """
    policy = policy or load_settings().overflow_policy

    try:
        dashboard = load_dashboard(dashboard_file)
        assign_panel_ids(dashboard)
        compute_layout(dashboard, OverflowPolicy(policy))
    except (DashboardLoadError, LayoutError) as e:
        error(format_error_message(e), stderr=output != "text")
        return e.exit_code

    result = validate_layout(dashboard)

    if output == "json":
        print(json.dumps(layout_records(dashboard), indent=2))
        return result.get_exit_code()

    if output == "grafana":
        print(json.dumps(dashboard.to_dict(), indent=2))
        return result.get_exit_code()

    header(f"Layout: {dashboard.title}")
    _display_positions(dashboard)
    _display_result(result)
    return result.get_exit_code()


def layout_records(dashboard: Dashboard) -> list[dict[str, Any]]:
    """Flatten a laid-out dashboard into one record per panel."""
    records = []
    for row in dashboard.rows:
        if row is None:
            continue
        for panel in row.panels:
            pos = panel_grid_pos(panel)
            if pos is None:
                continue
            records.append(
                {
                    "row": row.title,
                    "collapsed": row.collapsed,
                    "id": panel.id,
                    "title": panel.title,
                    "type": panel.panel_type,
                    "gridPos": pos.to_dict(),
                }
            )
    return records


def _display_positions(dashboard: Dashboard) -> None:
    """Display row headers and panel positions as a table."""
    offsets = iter(row_header_offsets(dashboard))
    rows: list[list[str]] = []

    for row in dashboard.rows:
        if row is None:
            continue
        label = f"{row.title} (collapsed)" if row.collapsed else row.title
        row_y = next(offsets)
        rows.append(
            [
                f"[bold]{label}[/bold]",
                "row",
                "0",
                str(row_y),
                str(COLUMNS),
                str(ROW_HEADER_HEIGHT),
            ]
        )
        for panel in row.panels:
            pos = panel_grid_pos(panel)
            if pos is None:
                continue
            rows.append(
                [
                    f"  {panel.title}",
                    panel.panel_type,
                    str(pos.x),
                    str(pos.y),
                    str(pos.w),
                    str(pos.h),
                ]
            )

    print_table("Grid positions", ["Panel", "Type", "x", "y", "w", "h"], rows)


def _display_result(result: LayoutValidationResult) -> None:
    """Display validation issues and the final verdict."""
    console.print()
    for issue in result.issues:
        prefix = f"[muted]({issue.rule})[/muted]"
        if issue.is_error:
            console.print(f"  [error]✗[/error] {issue.message} {prefix}")
        else:
            console.print(f"  [warning]⚠[/warning] {issue.message} {prefix}")

    if not result.passed:
        error(f"Layout has {len(result.errors)} error(s) across {result.checked} panels")
    elif result.warnings:
        warning(f"Layout valid with {len(result.warnings)} warning(s)")
    else:
        success(f"Layout valid: {result.checked} panels placed")
