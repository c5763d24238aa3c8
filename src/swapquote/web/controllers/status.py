"""Swap status endpoints."""

from typing import Union

from fastapi import APIRouter, Depends, Response

from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.status import SwapNotFoundResponse, SwapStatusResponse
from swapquote.web.dependencies import get_swapkit_client
from swapquote.web.services.status_service import StatusService

router = APIRouter(tags=["status"])


@router.options("/swap-status/{tx_hash}")
async def swap_status_preflight(tx_hash: str) -> Response:
    """CORS preflight."""
    return Response(status_code=200)


@router.get("/swap-status/{tx_hash}", response_model=None)
async def get_swap_status(
    tx_hash: str,
    client: SwapKitClient = Depends(get_swapkit_client),
) -> Union[SwapStatusResponse, SwapNotFoundResponse]:
    """Get progress of a submitted swap. Unknown hashes return status "not_found"."""
    return await StatusService(client).get_status(tx_hash)
