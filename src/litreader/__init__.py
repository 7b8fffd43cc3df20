"""Document structuring and search core for LitReader."""

__version__ = "0.1.0"
