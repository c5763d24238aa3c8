"""Supported asset endpoints."""

from fastapi import APIRouter, Depends, Response

from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.assets import AssetListResponse
from swapquote.web.dependencies import get_swapkit_client
from swapquote.web.services.asset_service import AssetService

router = APIRouter(tags=["assets"])


@router.options("/supported-assets")
async def supported_assets_preflight() -> Response:
    """CORS preflight."""
    return Response(status_code=200)


@router.get("/supported-assets", response_model=AssetListResponse)
async def get_supported_assets(
    client: SwapKitClient = Depends(get_swapkit_client),
) -> AssetListResponse:
    """List tokens supported by any provider, with per-provider stats."""
    return await AssetService(client).list_assets()
