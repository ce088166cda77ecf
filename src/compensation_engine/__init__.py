"""CTC decomposition engine for monthly pay structures."""

__version__ = "1.0.0"
