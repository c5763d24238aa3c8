"""Chain metadata and recipient address format checks.

Asset identifiers are chain-qualified: CHAIN.SYMBOL[-CONTRACT]
(e.g., BTC.BTC, ETH.ETH, ETH.USDT-0xdac17f...). The chain prefix selects
the address pattern used to sanity-check a swap recipient.
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChainConfig:
    """Address format for a blockchain."""

    name: str
    address_pattern: str

    def matches(self, address: str) -> bool:
        """Check if address fits this chain's format."""
        return re.fullmatch(self.address_pattern, address) is not None


_EVM_ADDRESS = r"0x[a-fA-F0-9]{40}"

# ======================
# Chain Configurations
# ======================

CHAINS: dict[str, ChainConfig] = {
    # Bitcoin - Legacy P2PKH, P2SH, Bech32
    "BTC": ChainConfig(
        name="Bitcoin",
        address_pattern=r"[13][a-km-zA-HJ-NP-Z1-9]{25,34}|bc1[a-z0-9]{39,59}",
    ),
    "LTC": ChainConfig(
        name="Litecoin",
        address_pattern=r"[LM3][a-km-zA-HJ-NP-Z1-9]{26,33}|ltc1[a-z0-9]{39,59}",
    ),
    "DOGE": ChainConfig(
        name="Dogecoin",
        address_pattern=r"D[5-9A-HJ-NP-U][1-9A-HJ-NP-Za-km-z]{32}",
    ),
    # EVM chains share the 0x + 40 hex format
    "ETH": ChainConfig(
        name="Ethereum",
        address_pattern=_EVM_ADDRESS,
    ),
    "AVAX": ChainConfig(
        name="Avalanche C-Chain",
        address_pattern=_EVM_ADDRESS,
    ),
    "BSC": ChainConfig(
        name="BNB Smart Chain",
        address_pattern=_EVM_ADDRESS,
    ),
    # Cosmos SDK chains
    "GAIA": ChainConfig(
        name="Cosmos Hub",
        address_pattern=r"cosmos[a-z0-9]{39}",
    ),
    "THOR": ChainConfig(
        name="THORChain",
        address_pattern=r"thor[a-z0-9]{39}",
    ),
    "MAYA": ChainConfig(
        name="Maya Protocol",
        address_pattern=r"maya[a-z0-9]{39}",
    ),
    # Solana - base58, 32-44 chars
    "SOL": ChainConfig(
        name="Solana",
        address_pattern=r"[1-9A-HJ-NP-Za-km-z]{32,44}",
    ),
}

# Alternate prefixes seen in asset identifiers
CHAIN_ALIASES = {
    "ATOM": "GAIA",
}


# ======================
# Helper Functions
# ======================


def get_chain(symbol: str) -> Optional[ChainConfig]:
    """Get chain configuration by chain prefix."""
    key = symbol.upper()
    return CHAINS.get(CHAIN_ALIASES.get(key, key))


def parse_chain(asset: str) -> str:
    """Extract the chain prefix from a chain-qualified asset identifier."""
    return asset.split(".", 1)[0].upper()


def is_valid_address(address: str, chain: str) -> bool:
    """Check a recipient address against the chain's format.

    Addresses shorter than 10 characters are always rejected. Chains
    without a known pattern accept anything else.
    """
    if not address or len(address) < 10:
        return False

    config = get_chain(chain)
    if config is None:
        return True
    return config.matches(address)
