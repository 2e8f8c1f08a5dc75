"""Guided box breathing: 4 s inhale, hold, exhale, hold, drawn on a breath graph."""

__version__ = "1.0.0"
