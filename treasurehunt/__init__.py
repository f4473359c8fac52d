"""Treasure hunts stored as binary record files: hunt commands, scores and an interactive hub."""

__version__ = "0.1.0"