"""Web boundary layer for the quote service.

Everything in this layer is read-only: it fetches quotes, statuses and
token lists from the aggregator and prepares deposit instructions. It
never holds keys, signs, or broadcasts transactions.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
