"""Keyword taxonomies for free-text survey answers."""
