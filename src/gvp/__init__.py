"""gvp: normalization and aggregation of Garbage Vulnerable Point surveys.

This package contains the core source code for the GVP tracker, including
modules for loading both survey channels, reconciling their field dialects,
classifying free-text answers, deduplicating points, and computing the
percentage breakdowns shown on the dashboard.
"""
