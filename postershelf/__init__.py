"""Postershelf: user-owned poster collections."""

__version__ = "0.1.0"
