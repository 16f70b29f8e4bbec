"""Core modules for obsgrid - centralized definitions and utilities."""

from obsgrid.core.errors import (
    ConfigurationError,
    ExitCode,
    LayoutError,
    ObsGridError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "ObsGridError",
    "ConfigurationError",
    "ValidationError",
    "LayoutError",
    "main_with_error_handling",
    "format_error_message",
]
