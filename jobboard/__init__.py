"""Job board aggregator: merges local postings with an external provider feed."""

__version__ = "1.0.0"
