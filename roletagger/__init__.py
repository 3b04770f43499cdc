"""Role tagging for the recruiting dashboard."""

__version__ = "0.1.0"
