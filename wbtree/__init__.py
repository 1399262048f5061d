"""Immutable weight-balanced trees: ordered maps and sets with rank, select and set operations."""

__version__ = "0.1.0"