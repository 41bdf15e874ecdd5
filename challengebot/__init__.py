"""Automation for the BlackScale Media registration challenge."""

__version__ = "0.1.0"
