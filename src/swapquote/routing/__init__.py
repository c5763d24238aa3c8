"""Quote aggregation and route normalization.

Stages, in pipeline order:
- swapkit: fetch raw routes from the SwapKit aggregator
- normalizer: raw provider payload -> canonical Route
- validators: per-provider invariants, folded into route warnings
- filters: drop unusable routes, recipient sanity check
- ranking: best expected output first
"""

from swapquote.routing.base import (
    PartialProviderFailure,
    ProviderKind,
    ProviderValidationResult,
    QuoteStage,
    Route,
    SwapRequest,
)
from swapquote.routing.filters import check_recipient, filter_routes, is_usable_route
from swapquote.routing.normalizer import classify_provider, normalize_route, normalize_routes
from swapquote.routing.ranking import best_route, rank_routes
from swapquote.routing.swapkit import SwapKitClient
from swapquote.routing.validators import annotate_route, get_validator, validate_route

__all__ = [
    # Types
    "PartialProviderFailure",
    "ProviderKind",
    "ProviderValidationResult",
    "QuoteStage",
    "Route",
    "SwapRequest",
    # Upstream
    "SwapKitClient",
    # Stages
    "classify_provider",
    "normalize_route",
    "normalize_routes",
    "annotate_route",
    "get_validator",
    "validate_route",
    "filter_routes",
    "check_recipient",
    "is_usable_route",
    "rank_routes",
    "best_route",
]
