"""Grafana grid constants and common panel widths."""

# Number of columns in the Grafana grid.
COLUMNS = 24

DEFAULT_PANEL_WIDTH = 12
DEFAULT_PANEL_HEIGHT = 8

# Height of the header band drawn above every row.
ROW_HEADER_HEIGHT = 1


def full_width() -> int:
    """Full grid width (24)."""
    return COLUMNS


def half_width() -> int:
    """Half the grid width (12)."""
    return COLUMNS // 2


def third_width() -> int:
    """A third of the grid width (8)."""
    return COLUMNS // 3


def quarter_width() -> int:
    """A quarter of the grid width (6)."""
    return COLUMNS // 4
