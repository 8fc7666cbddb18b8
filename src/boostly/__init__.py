"""Boostly peer-recognition credits service."""

__version__ = "0.2.0"
