"""BFHL API: numeric utilities and one-word answers over HTTP."""

__version__ = "1.0.0"
