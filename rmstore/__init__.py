"""Page frames, LRU frame replacement, catalog metadata, log records and transaction bookkeeping for a small relational database."""

__version__ = "0.1.0"