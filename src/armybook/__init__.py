"""Schema, cost calculator and query tools for Age of Fantasy army books."""

__version__ = "0.1.0"
