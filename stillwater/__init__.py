"""Stillwater - validated local record store for a wellness journal."""

__version__ = "0.1.0"
