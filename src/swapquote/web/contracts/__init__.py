"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from swapquote.web.contracts.assets import AssetInfo, AssetListResponse
from swapquote.web.contracts.status import SwapNotFoundResponse, SwapStatusResponse
from swapquote.web.contracts.swaps import (
    IntegrationReport,
    IntegrationTestResponse,
    ProviderReport,
    ProviderStatus,
    ReportSummary,
    RouteModel,
    SwapDetailsRequest,
    SwapDetailsResponse,
)

__all__ = [
    # Quote contracts
    "SwapDetailsRequest",
    "SwapDetailsResponse",
    "RouteModel",
    "ProviderStatus",
    # Diagnostics
    "IntegrationTestResponse",
    "IntegrationReport",
    "ReportSummary",
    "ProviderReport",
    # Status contracts
    "SwapStatusResponse",
    "SwapNotFoundResponse",
    # Asset contracts
    "AssetInfo",
    "AssetListResponse",
]
