"""Toolkit-independent state and settings models for the panels of a signal acquisition front end."""

__version__ = "1.0.1"