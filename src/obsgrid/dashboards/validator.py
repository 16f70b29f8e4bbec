"""
Dashboard layout validation.

Checks the current grid positions of a dashboard's panels against the
grid: sizes must be positive, panels must stay inside the column budget,
and no two visible panels may overlap. A panel wider than the grid is a
warning rather than a bounds error. Panels in collapsed rows are hidden
and not checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any

from obsgrid.core.errors import ExitCode
from obsgrid.dashboards.grid import COLUMNS
from obsgrid.dashboards.models import Dashboard, GridPos
from obsgrid.dashboards.positions import panel_grid_pos

RULE_NON_POSITIVE_SIZE = "non_positive_size"
RULE_OUT_OF_BOUNDS = "out_of_bounds"
RULE_OVER_WIDE = "over_wide"
RULE_OVERLAP = "overlap"

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass
class LayoutIssue:
    """A single layout problem."""

    rule: str
    severity: str
    message: str
    row: str | None = None
    panel: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR


@dataclass
class LayoutValidationResult:
    """Result of validating a dashboard layout."""

    issues: list[LayoutIssue] = field(default_factory=list)
    checked: int = 0

    @property
    def errors(self) -> list[LayoutIssue]:
        return [i for i in self.issues if i.severity == SEVERITY_ERROR]

    @property
    def warnings(self) -> list[LayoutIssue]:
        return [i for i in self.issues if i.severity == SEVERITY_WARNING]

    @property
    def passed(self) -> bool:
        """Whether the layout has no errors (warnings are advisory)."""
        return not self.errors

    def get_exit_code(self) -> int:
        """Get exit code based on validation results."""
        if self.errors:
            return ExitCode.VALIDATION_ERROR
        return ExitCode.SUCCESS


@dataclass
class _Box:
    row: str
    panel: str
    pos: GridPos


def _overlaps(a: GridPos, b: GridPos) -> bool:
    return a.x < b.x + b.w and b.x < a.x + a.w and a.y < b.y + b.h and b.y < a.y + a.h


def _panel_title(panel: Any) -> str:
    return getattr(panel, "title", None) or type(panel).__name__


def validate_layout(dashboard: Dashboard | None) -> LayoutValidationResult:
    """Validate the positions of all visible panels of a dashboard.

    Args:
        dashboard: Dashboard whose panels have been laid out

    Returns:
        LayoutValidationResult listing every issue found
    """
    result = LayoutValidationResult()
    if dashboard is None:
        return result

    boxes: list[_Box] = []

    for row in dashboard.rows:
        if row is None or row.collapsed:
            continue

        for panel in row.panels:
            pos = panel_grid_pos(panel)
            if pos is None:
                continue

            result.checked += 1
            box = _Box(row=row.title, panel=_panel_title(panel), pos=pos)
            result.issues.extend(_check_panel(box))
            if pos.w > 0 and pos.h > 0:
                boxes.append(box)

    for first, second in combinations(boxes, 2):
        if _overlaps(first.pos, second.pos):
            result.issues.append(
                LayoutIssue(
                    rule=RULE_OVERLAP,
                    severity=SEVERITY_ERROR,
                    message=f"'{first.panel}' overlaps '{second.panel}'",
                    row=second.row,
                    panel=second.panel,
                )
            )

    return result


def _check_panel(box: _Box) -> list[LayoutIssue]:
    """Check a single panel against the grid bounds."""
    issues = []
    pos = box.pos

    if pos.w < 1 or pos.h < 1:
        issues.append(
            LayoutIssue(
                rule=RULE_NON_POSITIVE_SIZE,
                severity=SEVERITY_ERROR,
                message=f"'{box.panel}' has size {pos.w}x{pos.h}",
                row=box.row,
                panel=box.panel,
            )
        )

    if pos.w > COLUMNS:
        issues.append(
            LayoutIssue(
                rule=RULE_OVER_WIDE,
                severity=SEVERITY_WARNING,
                message=f"'{box.panel}' is {pos.w} wide, grid has {COLUMNS} columns",
                row=box.row,
                panel=box.panel,
            )
        )

    if pos.x < 0 or (pos.w <= COLUMNS and pos.x + pos.w > COLUMNS):
        issues.append(
            LayoutIssue(
                rule=RULE_OUT_OF_BOUNDS,
                severity=SEVERITY_ERROR,
                message=f"'{box.panel}' spans columns {pos.x}..{pos.x + pos.w}",
                row=box.row,
                panel=box.panel,
            )
        )

    return issues
