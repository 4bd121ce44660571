"""Classify published release assets into a catalog of downloadables."""

__version__ = "0.1.0"
