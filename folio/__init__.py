"""Portfolio document reconciliation: classification, projection, timeline, search and commands."""

__version__ = "1.0.0"
