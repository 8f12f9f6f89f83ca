"""Hands-free takeoff dictation: spoken line items into structured records."""

__version__ = "0.1.0"
