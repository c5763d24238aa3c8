"""Quote service: the request pipeline from raw aggregator payload to ranked routes.

This service only prepares quotes. It never signs or submits transactions;
the user sends funds to the returned deposit address themselves.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from swapquote.config import Settings
from swapquote.errors import RequestValidationError, UpstreamError
from swapquote.routing.base import (
    PartialProviderFailure,
    QuoteStage,
    Route,
    SwapRequest,
    parse_amount,
)
from swapquote.routing.filters import check_recipient, filter_routes
from swapquote.routing.normalizer import normalize_routes
from swapquote.routing.ranking import best_route, rank_routes
from swapquote.routing.swapkit import SwapKitClient
from swapquote.routing.validators import advise_route, annotate_route
from swapquote.web.contracts.swaps import (
    ProviderErrorModel,
    ProviderStatus,
    RouteModel,
    SwapDetailsRequest,
    SwapDetailsResponse,
)
from swapquote.web.services.integration_service import (
    compute_integration_status,
    parse_provider_errors,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("fromAsset", "toAsset", "amount", "recipient")


@dataclass
class QuoteResult:
    """Outcome of one pass through the quote pipeline."""

    routes: list[Route]
    best_route: Optional[Route]
    integration_status: dict[str, ProviderStatus]
    provider_errors: list[PartialProviderFailure] = field(default_factory=list)
    expires_in: int = 0


def build_swap_request(body: SwapDetailsRequest) -> SwapRequest:
    """Validate the request body into a SwapRequest.

    Raises:
        RequestValidationError: on missing fields or a non-positive amount
    """
    if not (body.from_asset and body.to_asset and body.amount and body.recipient):
        raise RequestValidationError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")

    if parse_amount(body.amount) <= 0:
        raise RequestValidationError("Amount must be a positive number")

    return SwapRequest(
        from_asset=body.from_asset.strip(),
        to_asset=body.to_asset.strip(),
        amount=body.amount.strip(),
        recipient=body.recipient.strip(),
    )


class QuoteService:
    """Fetches, normalizes, validates, filters and ranks swap routes."""

    def __init__(self, client: SwapKitClient, settings: Settings):
        self.client = client
        self.settings = settings

    @staticmethod
    def _enter(stage: QuoteStage, request: SwapRequest) -> None:
        logger.debug(f"[{request.from_asset}->{request.to_asset}] stage={stage.value}")

    async def get_routes(self, request: SwapRequest) -> QuoteResult:
        """Run the full pipeline for one request.

        Raises:
            UpstreamError: if the aggregator returned nothing recoverable
        """
        self._enter(QuoteStage.RECEIVED, request)
        logger.info(
            f"Getting swap routes: {request.amount} {request.from_asset} -> {request.to_asset} "
            f"(recipient {request.recipient})"
        )

        self._enter(QuoteStage.FETCHING, request)
        try:
            payload = await self.client.fetch_quote(request)
        except UpstreamError:
            self._enter(QuoteStage.FETCH_FAILED, request)
            raise
        self._enter(QuoteStage.FETCHED, request)

        provider_errors = parse_provider_errors(payload)
        for failure in provider_errors:
            logger.warning(f"Provider {failure.provider} failed: {failure.message}")

        self._enter(QuoteStage.NORMALIZING, request)
        routes = normalize_routes(
            payload.get("routes") or [], request.recipient, debug=self.settings.debug
        )

        self._enter(QuoteStage.VALIDATING, request)
        routes = [annotate_route(route) for route in routes]
        if self.settings.provider_advisories:
            routes = [advise_route(route, request.from_asset, request.to_asset) for route in routes]

        self._enter(QuoteStage.FILTERING, request)
        routes = check_recipient(filter_routes(routes), request)

        self._enter(QuoteStage.RANKING, request)
        ranked = rank_routes(routes)
        best = best_route(ranked)

        if best:
            logger.info(
                f"Got {len(ranked)} route(s). Best: {best.provider.value} ({best.expected_output})"
            )
        else:
            logger.warning(f"No usable routes for {request.from_asset} -> {request.to_asset}")

        self._enter(QuoteStage.RESPONDED, request)
        return QuoteResult(
            routes=ranked,
            best_route=best,
            integration_status=compute_integration_status(ranked, provider_errors),
            provider_errors=provider_errors,
            expires_in=self.settings.quote_ttl_seconds if ranked else 0,
        )

    async def get_swap_details(self, request: SwapRequest) -> SwapDetailsResponse:
        """Get ranked routes for a swap request as an API response."""
        result = await self.get_routes(request)
        return SwapDetailsResponse(
            routes=[RouteModel.from_route(route) for route in result.routes],
            expires_in=result.expires_in,
            best_route=RouteModel.from_route(result.best_route) if result.best_route else None,
            integration_status=result.integration_status,
            provider_errors=[ProviderErrorModel(**f.to_dict()) for f in result.provider_errors],
        )
