"""Version information for kitecli."""

__version__ = "0.1.0"
