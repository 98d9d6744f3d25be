"""Brand collection migration: import dirty brands, normalize, seed, export."""

__version__ = '1.0.0'
