"""
CLI commands for obsgrid.
"""

from obsgrid.cli.layout import layout_command

__all__ = [
    "layout_command",
]
