"""Songbook - a small media library backend with favorites."""

__version__ = "0.1.0"
