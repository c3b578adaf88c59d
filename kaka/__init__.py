"""URL normalization and Bloom-filter deduplication for web crawlers."""

__version__ = "0.1.0"