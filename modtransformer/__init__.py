"""Converts nested widget call expressions into a single Modifier chain."""

__version__ = "1.0.0"
