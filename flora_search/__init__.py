"""Flora Search - semantic flower catalog search."""

__version__ = "0.1.0"
