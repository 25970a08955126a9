"""Personal study tracker with knowledge debt scoring."""

__version__ = "0.1.0"
