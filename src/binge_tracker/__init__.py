"""Binge Tracker - release cadence inference and season lifecycle tracking."""

__version__ = "0.1.0"
