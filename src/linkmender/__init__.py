"""Linkmender: keep markdown links intact when the files they point to move."""

__version__ = "0.1.0"
