"""Paperbase - content-addressed research document store."""

__version__ = "0.1.0"
