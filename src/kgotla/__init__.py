"""Kgotla discussion forum API."""

__version__ = "0.1.0"
