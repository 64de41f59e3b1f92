"""Billbook — personal income and expense tracker backend."""

__version__ = "0.1.0"
