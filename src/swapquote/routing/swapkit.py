"""SwapKit aggregator client.

SwapKit quotes THORChain, MayaChain and ChainFlip in one call and relays each
provider's payload mostly as-is.
API docs: https://docs.swapkit.dev/
"""

import logging
from typing import Any, Optional

import httpx

from swapquote.config import Settings
from swapquote.errors import ConfigurationError, UpstreamError
from swapquote.routing.base import ProviderKind, SwapRequest

logger = logging.getLogger(__name__)

SWAPKIT_MAINNET = "https://api.swapkit.dev"


def _parse_json(response: httpx.Response) -> Optional[Any]:
    """Parse a response body as JSON, None if empty or malformed."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class SwapKitClient:
    """Async client for the SwapKit quote, status and token endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = SWAPKIT_MAINNET,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize SwapKit client.

        Args:
            api_key: SwapKit API key
            base_url: API base URL
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not api_key:
            raise ConfigurationError("SWAPKIT_API_KEY not found in environment variables")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "SwapKitClient":
        return cls(
            api_key=settings.swapkit_api_key,
            base_url=settings.swapkit_api_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"accept": "application/json", "x-api-key": self.api_key},
        )

    async def fetch_quote(self, request: SwapRequest) -> dict:
        """Request routes from all providers in a single call.

        A non-2xx response whose JSON body still carries routes or
        providerErrors is a partial failure and is returned as-is.

        Raises:
            UpstreamError: if the aggregator is unreachable or sent
                nothing recoverable
        """
        providers = [kind.value for kind in ProviderKind.known()]
        logger.info(f"Requesting quote from providers: {', '.join(providers)}")

        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.base_url}/quote",
                    json={
                        "sellAsset": request.from_asset,
                        "buyAsset": request.to_asset,
                        "sellAmount": request.amount,
                        "recipientAddress": request.recipient,
                        "providers": providers,
                    },
                )
        except httpx.HTTPError as e:
            raise UpstreamError(f"SwapKit quote request failed: {type(e).__name__}: {e}") from e

        payload = _parse_json(response)

        if response.is_success:
            if not isinstance(payload, dict):
                raise UpstreamError("SwapKit quote API returned an unreadable body", response.status_code)
            return payload

        logger.error(f"SwapKit quote error {response.status_code}: {response.text[:500]}")

        if isinstance(payload, dict):
            routes = payload.get("routes")
            if isinstance(routes, list) and routes:
                logger.warning(f"SwapKit returned {response.status_code} but has {len(routes)} routes")
                return payload
            if isinstance(payload.get("providerErrors"), list):
                logger.warning(f"SwapKit provider errors: {payload['providerErrors']}")
                return payload

        raise UpstreamError(f"SwapKit quote API error: {response.status_code}", response.status_code)

    async def fetch_status(self, tx_hash: str) -> Optional[dict]:
        """Get swap progress for a transaction hash (None if unknown)."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/status/{tx_hash}")
        except httpx.HTTPError as e:
            raise UpstreamError(f"SwapKit status request failed: {type(e).__name__}: {e}") from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise UpstreamError(f"SwapKit status API error: {response.status_code}", response.status_code)

        payload = _parse_json(response)
        if not isinstance(payload, dict):
            raise UpstreamError("SwapKit status API returned an unreadable body", response.status_code)
        return payload

    async def fetch_tokens(self, provider: str) -> list:
        """Get the token list a provider supports."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/tokens", params={"provider": provider})
        except httpx.HTTPError as e:
            raise UpstreamError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise UpstreamError(f"{response.status_code}: {response.text[:200]}", response.status_code)

        payload = _parse_json(response)
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in ("tokens", "data"):
                if isinstance(payload.get(key), list):
                    return payload[key]
        raise UpstreamError("Unexpected response format", response.status_code)
