"""Root test configuration."""

import logging

import pytest
import structlog

from obsgrid.dashboards.models import Dashboard, Row, StatPanel, TablePanel, TimeSeriesPanel


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def service_dashboard():
    """A typical service dashboard: stats, graphs and a collapsed details row."""
    return Dashboard(uid="api-overview", title="API Overview").with_rows(
        Row("Summary").with_panels(
            StatPanel("Availability").with_size(6, 4),
            StatPanel("Error Rate").with_size(6, 4),
            StatPanel("p99 Latency").with_size(6, 4),
            StatPanel("Throughput").with_size(6, 4),
        ),
        Row("Traffic").with_panels(
            TimeSeriesPanel("Requests"),
            TimeSeriesPanel("Errors"),
            TimeSeriesPanel("Latency").with_size(24, 10),
        ),
        Row("Details").collapse().with_panels(
            TablePanel("Top Endpoints").with_size(24, 8),
        ),
    )


@pytest.fixture
def dashboard_yaml(tmp_path):
    """Write a dashboard declaration to a temporary YAML file."""

    def _write(content: str):
        path = tmp_path / "dashboard.yaml"
        path.write_text(content)
        return path

    return _write
