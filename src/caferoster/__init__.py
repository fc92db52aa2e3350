"""Café roster: weekly staff-to-shift assignment."""

__version__ = "0.1.0"
