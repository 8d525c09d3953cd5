"""Merge, filtering and aggregation services built on normalized records."""
