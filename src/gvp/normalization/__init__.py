"""Normalization of raw survey rows into canonical GVP records."""
