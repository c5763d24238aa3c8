"""Supported asset contracts."""

from typing import Optional, Union

from pydantic import Field

from swapquote.web.contracts.swaps import CamelModel


class AssetInfo(CamelModel):
    """A token supported by at least one provider."""

    identifier: str = Field(..., description="Chain-qualified id (e.g., ETH.USDC-0xa0b8...)")
    symbol: str
    ticker: str
    chain: str
    name: str
    decimals: int = 18
    logo_uri: Optional[str] = Field(None, alias="logoURI")
    coingecko_id: Optional[str] = None
    address: Optional[str] = None
    supported_providers: list[str] = Field(default_factory=list)
    preferred_provider: str


class AssetListResponse(CamelModel):
    """Deduplicated asset list across providers."""

    assets: list[AssetInfo] = Field(default_factory=list)
    provider_stats: dict[str, Union[int, str]] = Field(
        default_factory=dict, description="Token count per provider, or 'error'"
    )
    provider_errors: Optional[dict[str, str]] = None
    total_providers: int = 0
