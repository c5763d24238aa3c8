"""Supported asset listing across providers."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from swapquote.errors import AllProvidersFailedError, UpstreamError
from swapquote.routing.base import ProviderKind
from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.assets import AssetInfo, AssetListResponse

logger = logging.getLogger(__name__)


@dataclass
class ProviderTokens:
    """Token list fetch outcome for one provider, successful or not."""

    provider: str
    tokens: list = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and len(self.tokens) > 0


def normalize_token(token: dict, provider: str) -> AssetInfo:
    """Map a raw token entry onto AssetInfo with fallbacks for missing fields."""
    symbol = token.get("symbol") or token.get("ticker")
    chain = token.get("chain") or "UNKNOWN"

    return AssetInfo(
        identifier=token.get("identifier") or f"{token.get('chain')}.{symbol}",
        symbol=symbol or "UNKNOWN",
        ticker=token.get("ticker") or token.get("symbol") or "UNKNOWN",
        chain=chain,
        name=token.get("name") or symbol or "Unknown Token",
        decimals=token.get("decimals") or 18,
        logo_uri=token.get("logoURI") or token.get("logo"),
        coingecko_id=token.get("coingeckoId"),
        address=token.get("address"),
        supported_providers=[provider],
        preferred_provider=provider,
    )


class AssetService:
    """Lists tokens supported by any provider, deduplicated by identifier."""

    def __init__(self, client: SwapKitClient):
        self.client = client

    async def _fetch(self, provider: str) -> ProviderTokens:
        try:
            tokens = await self.client.fetch_tokens(provider)
        except UpstreamError as e:
            logger.error(f"Failed to fetch tokens for {provider}: {e}")
            return ProviderTokens(provider=provider, error=str(e))

        logger.info(f"Received {len(tokens)} tokens from {provider}")
        return ProviderTokens(provider=provider, tokens=tokens)

    async def list_assets(self) -> AssetListResponse:
        """Fetch every provider's token list concurrently and merge them.

        Raises:
            AllProvidersFailedError: if no provider returned any tokens
        """
        providers = [kind.value for kind in ProviderKind.known()]
        logger.info(f"Fetching tokens from providers: {', '.join(providers)}")

        results = await asyncio.gather(*(self._fetch(provider) for provider in providers))

        provider_stats: dict[str, Union[int, str]] = {}
        provider_errors: dict[str, str] = {}
        for result in results:
            if result.error is not None:
                provider_stats[result.provider] = "error"
                provider_errors[result.provider] = result.error
            else:
                provider_stats[result.provider] = len(result.tokens)

        if not any(result.succeeded for result in results):
            logger.error("All providers failed or returned empty results")
            raise AllProvidersFailedError(provider_stats, provider_errors)

        assets: dict[str, AssetInfo] = {}
        for result in results:
            if result.error is not None:
                continue
            for token in result.tokens:
                if not isinstance(token, dict):
                    continue
                asset = normalize_token(token, result.provider)
                existing = assets.get(asset.identifier)
                if existing is None:
                    assets[asset.identifier] = asset
                elif result.provider not in existing.supported_providers:
                    existing.supported_providers.append(result.provider)

        logger.info(f"Processed {len(assets)} unique tokens")

        return AssetListResponse(
            assets=list(assets.values()),
            provider_stats=provider_stats,
            provider_errors=provider_errors or None,
            total_providers=len(providers),
        )
