"""Provider-specific route validation.

Each provider kind has its own invariants on an already-normalized Route.
Validation never drops or restructures a route; callers fold the result into
the route's warnings with annotate_route().
"""

import logging
from abc import ABC, abstractmethod
from typing import Mapping

from swapquote.routing.base import ProviderKind, ProviderValidationResult, Route, parse_amount

logger = logging.getLogger(__name__)

MIN_DEPOSIT_ADDRESS_LENGTH = 20
MIN_MEMO_LENGTH = 10
MAX_BROKER_COMMISSION = 0.05


class RouteValidator(ABC):
    """Abstract base class for provider validators."""

    required_fields: tuple[str, ...] = ()

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Provider name used in messages."""
        pass

    @abstractmethod
    def check(self, route: Route, errors: list[str], warnings: list[str]) -> None:
        """Append provider-specific errors and warnings."""
        pass

    def validate(self, route: Route) -> ProviderValidationResult:
        errors: list[str] = []
        warnings: list[str] = []
        self.check(route, errors, warnings)
        return ProviderValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            required_fields=list(self.required_fields),
        )


class MemoChainValidator(RouteValidator):
    """THORChain-style networks: deposit to a vault with a swap memo."""

    required_fields = ("depositAddress", "memo")

    def check(self, route: Route, errors: list[str], warnings: list[str]) -> None:
        if len(route.deposit_address) <= MIN_DEPOSIT_ADDRESS_LENGTH:
            errors.append(f"{self.display_name} requires valid inbound address")

        if len(route.memo) <= MIN_MEMO_LENGTH:
            errors.append(f"{self.display_name} requires memo for cross-chain swaps")

        # Well-formed memos carry destination chain/address after a colon
        if route.memo and ":" not in route.memo:
            warnings.append(f"{self.display_name} memo should contain destination chain and address")

        if route.output_amount <= 0:
            errors.append("Invalid expected output amount")


class ThorChainValidator(MemoChainValidator):
    display_name = "THORChain"


class MayaChainValidator(MemoChainValidator):
    display_name = "MayaChain"


class ChainFlipValidator(RouteValidator):
    """ChainFlip deposit channels; memo is optional."""

    display_name = "ChainFlip"
    required_fields = ("depositAddress",)

    def check(self, route: Route, errors: list[str], warnings: list[str]) -> None:
        if len(route.deposit_address) <= MIN_DEPOSIT_ADDRESS_LENGTH:
            errors.append("ChainFlip requires valid deposit address")

        if not route.memo:
            warnings.append("ChainFlip route has no memo - this may be normal for native swaps")

        chainflip_meta = route.meta.get("chainflip")
        if not isinstance(chainflip_meta, Mapping):
            return

        commission = chainflip_meta.get("brokerCommission")
        if commission and parse_amount(commission) > MAX_BROKER_COMMISSION:
            warnings.append("High broker commission detected")

        channel = chainflip_meta.get("depositChannel")
        if channel and "0x" not in str(channel):
            warnings.append("Unexpected deposit channel format")


class UnknownProviderValidator(RouteValidator):
    display_name = "Unknown"

    def check(self, route: Route, errors: list[str], warnings: list[str]) -> None:
        errors.append(f"Unknown provider: {route.provider_label or route.provider.value}")


_VALIDATORS: dict[ProviderKind, RouteValidator] = {
    ProviderKind.THORCHAIN: ThorChainValidator(),
    ProviderKind.MAYACHAIN: MayaChainValidator(),
    ProviderKind.CHAINFLIP: ChainFlipValidator(),
    ProviderKind.UNKNOWN: UnknownProviderValidator(),
}

_missing = set(ProviderKind) - set(_VALIDATORS)
if _missing:
    raise RuntimeError(f"No validator registered for: {sorted(k.value for k in _missing)}")


def get_validator(kind: ProviderKind) -> RouteValidator:
    """Get the validator for a provider kind."""
    return _VALIDATORS[kind]


def validate_route(route: Route) -> ProviderValidationResult:
    """Validate a route against its provider's invariants."""
    return get_validator(route.provider).validate(route)


def annotate_route(route: Route) -> Route:
    """Validate and return a copy carrying errors and warnings as route warnings."""
    result = validate_route(route)
    if not result.is_valid:
        logger.warning(f"{route.provider.value} route failed validation: {'; '.join(result.errors)}")
    return route.with_warnings(*result.errors, *result.warnings)


def provider_advisories(kind: ProviderKind, from_asset: str, to_asset: str) -> list[str]:
    """Informational notes about a provider for a given asset pair."""
    notes: list[str] = []
    from_upper, to_upper = from_asset.upper(), to_asset.upper()

    if kind is ProviderKind.THORCHAIN:
        if "BTC" in from_upper and "ETH" in to_upper:
            notes.append("BTC to ETH swaps on THORChain typically take 10-20 minutes")

    elif kind is ProviderKind.MAYACHAIN:
        notes.append("MayaChain is a fork of THORChain - ensure you understand the differences")
        if "BTC" in from_upper:
            notes.append("Bitcoin swaps on MayaChain may have different fee structures")

    elif kind is ProviderKind.CHAINFLIP:
        notes.append("ChainFlip uses native assets without wrapped tokens")
        if "BTC" in from_upper or "BTC" in to_upper:
            notes.append("ChainFlip Bitcoin integration is newer - monitor for any issues")

    return notes


def advise_route(route: Route, from_asset: str, to_asset: str) -> Route:
    return route.with_warnings(*provider_advisories(route.provider, from_asset, to_asset))
