"""Core route types shared by every pipeline stage."""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

from swapquote.chains import parse_chain

logger = logging.getLogger(__name__)


class ProviderKind(str, Enum):
    """Liquidity networks the aggregator is asked for."""

    THORCHAIN = "THORCHAIN"
    MAYACHAIN = "MAYACHAIN"
    CHAINFLIP = "CHAINFLIP"
    UNKNOWN = "Unknown"

    @classmethod
    def known(cls) -> list["ProviderKind"]:
        """Providers requested upstream, in preference order."""
        return [cls.MAYACHAIN, cls.THORCHAIN, cls.CHAINFLIP]

    @property
    def key(self) -> str:
        """Lowercase key used in status and report payloads."""
        return self.value.lower()

    @property
    def requires_memo(self) -> bool:
        """Whether deposits to this provider need a memo."""
        return self in (ProviderKind.THORCHAIN, ProviderKind.MAYACHAIN)


class QuoteStage(str, Enum):
    """Quote request state machine states."""

    RECEIVED = "received"
    FETCHING = "fetching"
    FETCH_FAILED = "fetch_failed"
    FETCHED = "fetched"
    NORMALIZING = "normalizing"
    VALIDATING = "validating"
    FILTERING = "filtering"
    RANKING = "ranking"
    RESPONDED = "responded"


@dataclass(frozen=True)
class SwapRequest:
    """A user's swap request."""

    from_asset: str  # e.g., "BTC.BTC"
    to_asset: str  # e.g., "ETH.USDT-0xdac17f..."
    amount: str
    recipient: str

    @property
    def to_chain(self) -> str:
        """Destination chain prefix."""
        return parse_chain(self.to_asset)

    def to_dict(self) -> dict:
        return {
            "fromAsset": self.from_asset,
            "toAsset": self.to_asset,
            "amount": self.amount,
            "recipient": self.recipient,
        }


@dataclass(frozen=True)
class Route:
    """One provider's canonical proposal for executing a swap.

    Routes are never mutated: stages that add diagnostics return a copy
    via with_warnings().
    """

    provider: ProviderKind
    deposit_address: str = ""
    memo: str = ""
    expected_output: str = "0"
    expected_output_max_slippage: str = "0"
    fees: tuple = ()
    estimated_time: str = "5-10 min"
    price_impact: float = 0.0
    warnings: tuple[str, ...] = ()
    total_fees: float = 0.0
    # Raw label before classification and provider metadata (not serialized)
    provider_label: Optional[str] = field(default=None, compare=False)
    meta: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def output_amount(self) -> Decimal:
        """Expected output as a Decimal (0 when unparseable)."""
        return parse_amount(self.expected_output)

    def with_warnings(self, *messages: str) -> "Route":
        """Return a copy with messages appended to warnings."""
        if not messages:
            return self
        return replace(self, warnings=self.warnings + tuple(messages))

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "provider": self.provider.value,
            "depositAddress": self.deposit_address,
            "memo": self.memo,
            "expectedOutput": self.expected_output,
            "expectedOutputMaxSlippage": self.expected_output_max_slippage,
            "fees": list(self.fees),
            "estimatedTime": self.estimated_time,
            "priceImpact": self.price_impact,
            "warnings": list(self.warnings),
            "totalFees": self.total_fees,
        }


@dataclass
class ProviderValidationResult:
    """Outcome of checking one route against its provider's invariants."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    required_fields: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PartialProviderFailure:
    """A provider that errored while the aggregator call as a whole succeeded."""

    provider: str
    message: str

    @classmethod
    def from_payload(cls, entry: Any) -> "PartialProviderFailure":
        """Build from one entry of the upstream providerErrors array."""
        if isinstance(entry, Mapping):
            provider = str(entry.get("provider") or "Unknown")
            message = entry.get("message") or entry.get("error") or "Unknown error"
            return cls(provider=provider, message=str(message))
        return cls(provider="Unknown", message=str(entry))

    def to_dict(self) -> dict:
        return {"provider": self.provider, "message": self.message}


def parse_amount(value: Any) -> Decimal:
    """Parse a decimal amount, treating anything unparseable as zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount
