"""earnmove: average earnings moves and next earnings dates, cached in Redis."""

__version__ = "0.1.0"
