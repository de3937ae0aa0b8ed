"""chronomark — relative-speed tables for command-line benchmark results."""

__version__ = "0.1.0"
