"""5/3/1 load and progression calculator."""

__version__ = "0.1.0"
