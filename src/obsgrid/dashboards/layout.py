"""Grid auto-layout for dashboards.

Panels are laid out top to bottom, left to right, row by row:

- every row starts with a header band of ``ROW_HEADER_HEIGHT``
- panels without a declared size get ``DEFAULT_PANEL_WIDTH`` x
  ``DEFAULT_PANEL_HEIGHT``
- a panel that would cross the right edge of the grid starts a new visual
  line, below the tallest panel of the current one
- collapsed rows contribute only their header; their panels keep whatever
  position they had

Usage:
    from obsgrid.dashboards.layout import compute_layout

    compute_layout(dashboard)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from obsgrid.core.errors import LayoutError
from obsgrid.dashboards.grid import (
    COLUMNS,
    DEFAULT_PANEL_HEIGHT,
    DEFAULT_PANEL_WIDTH,
    ROW_HEADER_HEIGHT,
)
from obsgrid.dashboards.models import Dashboard, GridPos, Row
from obsgrid.dashboards.positions import panel_grid_pos, set_panel_position

logger = structlog.get_logger()


class OverflowPolicy(str, Enum):
    """How to treat panels declared wider than the grid."""

    TOLERATE = "tolerate"  # place with the declared width
    CLAMP = "clamp"  # shrink to the full grid width
    REJECT = "reject"  # raise LayoutError before anything is written


@dataclass
class Placement:
    """Computed position for one panel."""

    panel: Any
    grid_pos: GridPos
    row_index: int


@dataclass
class LayoutPlan:
    """Result of laying out a dashboard without touching its panels."""

    placements: list[Placement] = field(default_factory=list)
    row_offsets: list[int] = field(default_factory=list)
    height: int = 0

    def apply(self) -> None:
        """Write every planned position to its panel."""
        for placement in self.placements:
            pos = placement.grid_pos
            set_panel_position(placement.panel, pos.x, pos.y, pos.w, pos.h)


def plan_layout(
    dashboard: Dashboard | None,
    policy: OverflowPolicy | str = OverflowPolicy.TOLERATE,
) -> LayoutPlan:
    """Compute panel positions for a dashboard without mutating it.

    Args:
        dashboard: Dashboard to lay out (None yields an empty plan)
        policy: Handling of panels wider than the grid

    Returns:
        LayoutPlan with one placement per laid-out panel

    Raises:
        LayoutError: If policy is REJECT and a panel is wider than the grid
    """
    plan = LayoutPlan()
    if dashboard is None:
        return plan

    policy = OverflowPolicy(policy)
    cursor_y = 0

    for row_index, row in enumerate(dashboard.rows):
        if row is None:
            continue

        row_start_y = cursor_y
        plan.row_offsets.append(row_start_y)
        cursor_y += ROW_HEADER_HEIGHT

        if row.collapsed:
            continue

        cursor_x = 0
        line_max_height = 0

        for panel in row.panels:
            grid_pos = panel_grid_pos(panel)
            if grid_pos is None:
                if panel is not None:
                    logger.debug(
                        "panel_skipped",
                        row=row.title,
                        panel_type=type(panel).__name__,
                    )
                continue

            width = grid_pos.w if grid_pos.w > 0 else DEFAULT_PANEL_WIDTH
            height = grid_pos.h if grid_pos.h > 0 else DEFAULT_PANEL_HEIGHT

            if width > COLUMNS:
                width = _resolve_overflow(policy, row, panel, width)

            # Wrap to a new visual line
            if cursor_x + width > COLUMNS:
                cursor_x = 0
                cursor_y += line_max_height
                line_max_height = 0

            plan.placements.append(
                Placement(
                    panel=panel,
                    grid_pos=GridPos(x=cursor_x, y=cursor_y, w=width, h=height),
                    row_index=row_index,
                )
            )

            cursor_x += width
            if height > line_max_height:
                line_max_height = height

        if row.panels and line_max_height > 0:
            cursor_y += line_max_height

    plan.height = cursor_y
    return plan


def _resolve_overflow(policy: OverflowPolicy, row: Row, panel: Any, width: int) -> int:
    if policy is OverflowPolicy.REJECT:
        raise LayoutError(
            f"Panel '{panel.title}' is wider than the grid",
            details={"row": row.title, "panel": panel.title, "width": width, "columns": COLUMNS},
        )
    if policy is OverflowPolicy.CLAMP:
        logger.debug("panel_width_clamped", row=row.title, panel=panel.title, width=width)
        return COLUMNS
    return width


def compute_layout(
    dashboard: Dashboard | None,
    policy: OverflowPolicy | str = OverflowPolicy.TOLERATE,
) -> Dashboard | None:
    """Assign grid positions to every panel of a dashboard, in place.

    Input ``x``/``y`` values of laid-out panels are overwritten; zero
    ``w``/``h`` values are replaced by the defaults. Under the REJECT policy
    the dashboard is left untouched when an error is raised.

    Returns:
        The same dashboard, or None if None was given
    """
    if dashboard is None:
        return None

    plan = plan_layout(dashboard, policy)
    plan.apply()

    logger.debug(
        "dashboard_layout_computed",
        dashboard=dashboard.uid,
        rows=len(plan.row_offsets),
        panels=len(plan.placements),
        height=plan.height,
    )
    return dashboard


def row_header_offsets(dashboard: Dashboard | None) -> list[int]:
    """Return the y of each row header, skipping empty row slots."""
    return plan_layout(dashboard).row_offsets


def assign_panel_ids(dashboard: Dashboard | None, start: int = 1) -> int:
    """Number known panels in row order.

    Returns:
        The next unused ID
    """
    next_id = start
    if dashboard is None:
        return next_id

    for panel in dashboard.iter_panels():
        if panel_grid_pos(panel) is None:
            continue
        panel.id = next_id
        next_id += 1
    return next_id
