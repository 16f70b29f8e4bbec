"""obsgrid - typed observability declarations with Grafana grid auto-layout."""

__version__ = "0.1.0"
