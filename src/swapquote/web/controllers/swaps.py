"""Swap details endpoints."""

from typing import Union

from fastapi import APIRouter, Depends, Response

from swapquote.config import Settings, get_settings
from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.swaps import (
    IntegrationTestResponse,
    SwapDetailsRequest,
    SwapDetailsResponse,
)
from swapquote.web.dependencies import get_swapkit_client
from swapquote.web.services.integration_service import IntegrationReporter
from swapquote.web.services.quote_service import QuoteService, build_swap_request

router = APIRouter(tags=["swaps"])

TEST_INTEGRATIONS_ACTION = "test-integrations"


@router.options("/swap-details")
async def swap_details_preflight() -> Response:
    """CORS preflight."""
    return Response(status_code=200)


@router.post("/swap-details", response_model=None)
async def get_swap_details(
    body: SwapDetailsRequest,
    client: SwapKitClient = Depends(get_swapkit_client),
    settings: Settings = Depends(get_settings),
) -> Union[IntegrationTestResponse, SwapDetailsResponse]:
    """Get ranked swap routes, or run provider integration tests.

    A body of {"action": "test-integrations"} runs the canned integration
    suite instead of quoting. An empty route list is still a 200.
    """
    if body.action == TEST_INTEGRATIONS_ACTION:
        report = await IntegrationReporter(client, settings).run()
        return IntegrationTestResponse(report=report)

    request = build_swap_request(body)
    return await QuoteService(client, settings).get_swap_details(request)
