"""Balance summaries and forecasts for personal finance accounts."""

__version__ = "0.1.0"
