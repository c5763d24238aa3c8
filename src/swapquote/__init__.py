"""SwapQuote - cross-chain swap quote aggregation service."""

__version__ = "0.1.0"
