"""Netto-It: German net salary estimator."""

__version__ = "1.0.0"
