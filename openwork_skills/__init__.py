"""OpenWork skill package manager."""

__version__ = "0.1.0"
