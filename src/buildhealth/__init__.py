"""Build health scoring from issue counts per severity."""

__version__ = "1.0.0"
