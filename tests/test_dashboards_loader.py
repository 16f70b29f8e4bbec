"""Tests for dashboards/loader.py."""

from pathlib import Path

import pytest

from obsgrid.core.errors import ExitCode, ValidationError
from obsgrid.dashboards.layout import compute_layout
from obsgrid.dashboards.loader import DashboardLoadError, load_dashboard, parse_dashboard
from obsgrid.dashboards.models import GaugePanel, StatPanel, TablePanel, TimeSeriesPanel
from obsgrid.dashboards.validator import validate_layout

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"

SERVICE_DASHBOARD = """
dashboard:
  uid: api-overview
  title: API Overview
  description: Golden signals for the API
  tags: [api, prod]
  time: {from: now-1h, to: now}
  refresh: 30s

rows:
  - title: Summary
    panels:
      - type: stat
        title: Availability
        width: 6
        height: 4
        unit: percent
        targets:
          - expr: avg(up{service="api"})
      - type: gauge
        title: CPU
        width: 6
        height: 4
        min: 0
        max: 100
  - title: Traffic
    panels:
      - title: Requests
        targets:
          - expr: sum(rate(http_requests_total[5m])) by (status)
            legend: "{{status}}"
          - sum(rate(http_requests_total[1h]))
  - title: Details
    collapsed: true
    panels:
      - type: table
        title: Top Endpoints
        width: 24
"""


class TestLoadDashboard:
    """Tests for load_dashboard()."""

    def test_load_service_dashboard(self, dashboard_yaml):
        dashboard = load_dashboard(dashboard_yaml(SERVICE_DASHBOARD))

        assert dashboard.uid == "api-overview"
        assert dashboard.title == "API Overview"
        assert dashboard.description == "Golden signals for the API"
        assert dashboard.tags == ["api", "prod"]
        assert dashboard.time.to_dict() == {"from": "now-1h", "to": "now"}
        assert dashboard.refresh == "30s"
        assert [r.title for r in dashboard.rows] == ["Summary", "Traffic", "Details"]
        assert [r.collapsed for r in dashboard.rows] == [False, False, True]

    def test_panel_kinds_and_sizes(self, dashboard_yaml):
        dashboard = load_dashboard(dashboard_yaml(SERVICE_DASHBOARD))
        stat, gauge = dashboard.rows[0].panels
        (requests,) = dashboard.rows[1].panels
        (table,) = dashboard.rows[2].panels

        assert isinstance(stat, StatPanel)
        assert isinstance(gauge, GaugePanel)
        assert isinstance(requests, TimeSeriesPanel)
        assert isinstance(table, TablePanel)
        assert (stat.grid_pos.w, stat.grid_pos.h) == (6, 4)
        assert (requests.grid_pos.w, requests.grid_pos.h) == (0, 0)
        assert (table.grid_pos.w, table.grid_pos.h) == (24, 0)
        assert stat.unit == "percent"
        assert (gauge.min, gauge.max) == (0, 100)

    def test_targets(self, dashboard_yaml):
        dashboard = load_dashboard(dashboard_yaml(SERVICE_DASHBOARD))
        requests = dashboard.rows[1].panels[0]

        assert [t.ref_id for t in requests.targets] == ["A", "B"]
        assert requests.targets[0].legend_format == "{{status}}"
        assert requests.targets[1].expr == "sum(rate(http_requests_total[1h]))"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DashboardLoadError, match="not found"):
            load_dashboard(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, dashboard_yaml):
        with pytest.raises(DashboardLoadError, match="Invalid YAML"):
            load_dashboard(dashboard_yaml("dashboard: [unclosed"))

    def test_load_error_is_validation_error(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            load_dashboard(tmp_path / "missing.yaml")

        assert exc_info.value.exit_code == ExitCode.VALIDATION_ERROR


class TestShippedExample:
    """The example declaration in examples/ loads and lays out cleanly."""

    def test_api_overview(self):
        dashboard = load_dashboard(EXAMPLES_DIR / "api-overview.yaml")
        compute_layout(dashboard)
        summary, traffic, endpoints = dashboard.rows

        assert [p.grid_pos.x for p in summary.panels] == [0, 6, 12, 18]
        assert [p.grid_pos.y for p in traffic.panels] == [6, 6, 14]
        assert endpoints.collapsed is True
        assert validate_layout(dashboard).passed


class TestParseDashboard:
    """Tests for parse_dashboard()."""

    def test_minimal(self):
        dashboard = parse_dashboard({"dashboard": {"title": "Empty"}})

        assert dashboard.title == "Empty"
        assert dashboard.uid == ""
        assert dashboard.rows == []

    def test_read_only(self):
        dashboard = parse_dashboard({"dashboard": {"title": "t", "editable": False}})

        assert dashboard.editable is False

    def test_missing_dashboard_section(self):
        with pytest.raises(DashboardLoadError, match="Missing 'dashboard' section"):
            parse_dashboard({"rows": []})

    def test_not_a_mapping(self):
        with pytest.raises(DashboardLoadError):
            parse_dashboard(None)

    def test_missing_title(self):
        with pytest.raises(DashboardLoadError, match="title"):
            parse_dashboard({"dashboard": {"uid": "x"}})

    def test_rows_must_be_list(self):
        with pytest.raises(DashboardLoadError, match="'rows' must be a list"):
            parse_dashboard({"dashboard": {"title": "t"}, "rows": {"title": "x"}})

    def test_default_row_title(self):
        dashboard = parse_dashboard({"dashboard": {"title": "t"}, "rows": [{}]})

        assert dashboard.rows[0].title == "Row 1"

    def test_unknown_panel_type(self):
        data = {
            "dashboard": {"title": "t"},
            "rows": [{"title": "r", "panels": [{"type": "heatmap", "title": "h"}]}],
        }

        with pytest.raises(DashboardLoadError, match="Unknown panel type: heatmap") as exc_info:
            parse_dashboard(data)

        assert exc_info.value.details["row"] == "r"

    @pytest.mark.parametrize("width", [-1, "wide", 1.5, True])
    def test_invalid_width(self, width):
        data = {
            "dashboard": {"title": "t"},
            "rows": [{"title": "r", "panels": [{"title": "p", "width": width}]}],
        }

        with pytest.raises(DashboardLoadError, match="width must be a non-negative integer"):
            parse_dashboard(data)

    def test_scalar_tags_rejected(self, dashboard_yaml):
        path = dashboard_yaml("dashboard:\n  title: t\n  tags: api\n")

        with pytest.raises(DashboardLoadError, match="'tags' must be a list") as exc_info:
            load_dashboard(path)

        assert exc_info.value.details["tags"] == "api"

    def test_quoted_collapsed_rejected(self, dashboard_yaml):
        path = dashboard_yaml(
            "dashboard:\n  title: t\nrows:\n  - title: r\n    collapsed: 'false'\n"
        )

        with pytest.raises(DashboardLoadError, match="'collapsed' must be true or false") as exc_info:
            load_dashboard(path)

        assert exc_info.value.details["row"] == "r"

    def test_empty_collapsed_uses_default(self):
        dashboard = parse_dashboard(
            {"dashboard": {"title": "t"}, "rows": [{"title": "r", "collapsed": None}]}
        )

        assert dashboard.rows[0].collapsed is False

    @pytest.mark.parametrize("value", ["no", 0, "false"])
    def test_non_boolean_editable_rejected(self, value):
        with pytest.raises(DashboardLoadError, match="'editable' must be true or false"):
            parse_dashboard({"dashboard": {"title": "t", "editable": value}})

    def test_target_without_expr(self):
        data = {
            "dashboard": {"title": "t"},
            "rows": [{"title": "r", "panels": [{"title": "p", "targets": [{"legend": "x"}]}]}],
        }

        with pytest.raises(DashboardLoadError, match="expr"):
            parse_dashboard(data)
