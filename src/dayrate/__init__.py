"""Daily rating charts: score normalization, smoothing, axis labels and sample data."""

__version__ = "0.1.0"
