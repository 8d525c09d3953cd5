"""Adapters that load raw survey rows from the static export and the live feed."""
