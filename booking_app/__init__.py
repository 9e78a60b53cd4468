"""Appointment booking backend: availability computation and booking workflow."""

__version__ = "1.0.0"
