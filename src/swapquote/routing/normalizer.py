"""Normalize raw aggregator routes into canonical Route records.

The aggregator relays each provider's own payload shape, so field names for
the same concept differ per provider (and per API version). Every field is
resolved from an ordered list of candidate locations; normalization never
fails and falls back to defaults instead.
"""

import json
import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow, localcontext
from typing import Any, Mapping, Optional

from swapquote.routing.base import ProviderKind, Route, parse_amount
from swapquote.routing.extract import field_path, first_present, first_truthy, scaled

logger = logging.getLogger(__name__)

DEFAULT_ESTIMATED_TIME = "5-10 min"

# Placeholders some providers leave in memos for the caller to fill in
MEMO_PLACEHOLDERS = ("{destinationAddress}", "{recipientAddress}")

PROVIDER_LABEL_FIELDS = (
    field_path("providers", 0),
    field_path("provider"),
    field_path("meta", "provider"),
    field_path("legs", 0, "provider"),
)

# Substring -> provider; checked in order against the upper-cased label
PROVIDER_KEYWORDS = (
    ("MAYA", ProviderKind.MAYACHAIN),
    ("CACAO", ProviderKind.MAYACHAIN),
    ("THOR", ProviderKind.THORCHAIN),
    ("RUNE", ProviderKind.THORCHAIN),
    ("CHAINFLIP", ProviderKind.CHAINFLIP),
    ("FLIP", ProviderKind.CHAINFLIP),
)

DEPOSIT_ADDRESS_FIELDS = (
    field_path("transaction", "from"),
    field_path("transaction", "depositAddress"),
    field_path("inboundAddress"),
    field_path("targetAddress"),
    field_path("depositAddress"),
    field_path("meta", "chainflip", "depositAddress"),
    field_path("meta", "mayachain", "depositAddress"),
    field_path("meta", "mayachain", "inboundAddress"),
    field_path("meta", "thorchain", "inboundAddress"),
)

MEMO_FIELDS = (
    field_path("transaction", "memo"),
    field_path("memo"),
    field_path("meta", "memo"),
    field_path("meta", "mayachain", "memo"),
    field_path("meta", "thorchain", "memo"),
)

EXPECTED_OUTPUT_FIELDS = (
    field_path("expectedBuyAmount"),
    field_path("expectedOutput"),
    field_path("expectedOutputUSD"),
    field_path("buyAmount"),
    field_path("outAmount"),
    field_path("toAmount"),
    field_path("outputAmount"),
    field_path("amountOut"),
    field_path("expectedAmountOut"),
    field_path("expected_amount_out"),
    field_path("quote", "expectedOutput"),
    field_path("quote", "buyAmount"),
    field_path("meta", "expectedOutput"),
    field_path("legs", -1, "buyAmount"),
    field_path("steps", -1, "outputAmount"),
)

MAX_SLIPPAGE_OUTPUT_FIELDS = (
    field_path("expectedBuyAmountMaxSlippage"),
    field_path("expectedOutputMaxSlippage"),
    field_path("minOutput"),
)

FEE_FIELDS = (
    field_path("fees"),
    field_path("totalFees"),
    field_path("networkFees"),
    field_path("quote", "fees"),
)

ESTIMATED_TIME_FIELDS = (
    field_path("estimatedTime"),
    field_path("timeEstimate"),
    field_path("duration"),
    field_path("quote", "estimatedTime"),
)

PRICE_IMPACT_FIELDS = (
    field_path("meta", "priceImpact"),
    field_path("priceImpact"),
    field_path("slippage"),
    scaled(field_path("totalSlippageBps"), 100),
)

UPSTREAM_WARNING_FIELDS = (
    field_path("warnings"),
    field_path("alerts"),
    field_path("errors"),
)


# ======================
# Field resolvers
# ======================


def classify_provider(label: Optional[str]) -> ProviderKind:
    """Map a free-form provider label onto ProviderKind."""
    if not label:
        return ProviderKind.UNKNOWN
    upper = label.upper()
    for keyword, kind in PROVIDER_KEYWORDS:
        if keyword in upper:
            return kind
    return ProviderKind.UNKNOWN


def resolve_provider_label(raw: Any) -> Optional[str]:
    """Find the provider label, unwrapping object-shaped providers."""
    label = first_truthy(raw, PROVIDER_LABEL_FIELDS)
    if isinstance(label, Mapping):
        label = first_truthy(
            label, (field_path("name"), field_path("protocol"), field_path("type"))
        )
    if isinstance(label, str) and label:
        return label
    return None


def resolve_memo(raw: Any, recipient: str) -> str:
    """Find the memo and fill in the recipient placeholder."""
    memo = first_truthy(raw, MEMO_FIELDS)
    return substitute_recipient(str(memo) if memo else "", recipient)


def substitute_recipient(memo: str, recipient: str) -> str:
    """Replace the first occurrence of each recipient placeholder."""
    for placeholder in MEMO_PLACEHOLDERS:
        if placeholder in memo:
            memo = memo.replace(placeholder, recipient, 1)
    return memo


def _finite_only(value: Any) -> Any:
    """Replace non-finite floats (inf, nan) anywhere in a JSON value with None."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Mapping):
        return {key: _finite_only(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite_only(item) for item in value]
    return value


def resolve_fees(raw: Any) -> tuple:
    """Resolve fees into a sequence.

    The first list-valued candidate wins. A present non-list value is
    wrapped; no value at all yields an empty sequence.
    """
    candidates = [extract(raw) for extract in FEE_FIELDS]
    for value in candidates:
        if isinstance(value, list):
            return tuple(_finite_only(fee) for fee in value)
    for value in candidates:
        if value is not None:
            return (_finite_only(value),)
    return ()


def calculate_total_fees(fees: tuple) -> float:
    """Sum the numeric amount of each fee entry."""
    total = Decimal("0")
    with localcontext() as ctx:
        # Absurd amounts saturate to Infinity instead of raising
        ctx.traps[Overflow] = False
        ctx.traps[InvalidOperation] = False
        for fee in fees:
            amount = fee.get("amount") if isinstance(fee, Mapping) else fee
            total += parse_amount(amount)
    return _finite_float(total)


def _finite_float(value: Decimal) -> float:
    if not value.is_finite():
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def _minutes(seconds: float) -> str:
    if not math.isfinite(seconds) or seconds <= 0:
        return DEFAULT_ESTIMATED_TIME
    try:
        minutes = (Decimal(str(seconds)) / 60).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context holds
        return DEFAULT_ESTIMATED_TIME
    return f"{int(minutes)} min"


def _as_number(value: Any) -> float:
    """Coerce to a finite float; anything else is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, float):
        return value if math.isfinite(value) else 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return 0.0
    return _finite_float(parse_amount(value))


def format_estimated_time(estimated: Any) -> str:
    """Render an estimated time value as "<n> min".

    Numbers are seconds. Mappings use "total" when set, otherwise the sum
    of the inbound/swap/outbound legs.
    """
    if isinstance(estimated, Mapping):
        total = estimated.get("total")
        if total and _as_number(total):
            return _minutes(_as_number(total))
        legs = sum(_as_number(estimated.get(part) or 0) for part in ("inbound", "swap", "outbound"))
        return _minutes(legs) if legs > 0 else DEFAULT_ESTIMATED_TIME
    if isinstance(estimated, (int, float)) and not isinstance(estimated, bool):
        return _minutes(_as_number(estimated))
    return DEFAULT_ESTIMATED_TIME


def resolve_price_impact(raw: Any) -> float:
    value = first_truthy(raw, PRICE_IMPACT_FIELDS)
    return _as_number(value) if value is not None else 0.0


def resolve_upstream_warnings(raw: Any) -> tuple[str, ...]:
    """Carry over warnings the aggregator attached to the route."""
    for extract in UPSTREAM_WARNING_FIELDS:
        entries = extract(raw)
        if isinstance(entries, list) and entries:
            messages = []
            for entry in entries:
                if isinstance(entry, Mapping):
                    entry = entry.get("message") or entry.get("code") or json.dumps(entry)
                messages.append(str(entry))
            return tuple(messages)
    return ()


# ======================
# Route normalization
# ======================


def normalize_route(raw: Any, recipient: str) -> Route:
    """Build a canonical Route from one raw provider route."""
    label = resolve_provider_label(raw)
    provider = classify_provider(label)
    if label is None:
        logger.warning("Could not determine provider for route")

    expected = first_present(raw, EXPECTED_OUTPUT_FIELDS)
    expected_output = str(expected) if expected is not None else "0"
    max_slippage = first_present(raw, MAX_SLIPPAGE_OUTPUT_FIELDS)

    deposit_address = first_truthy(raw, DEPOSIT_ADDRESS_FIELDS)
    fees = resolve_fees(raw)
    meta = raw.get("meta") if isinstance(raw, Mapping) else None

    return Route(
        provider=provider,
        deposit_address=str(deposit_address) if deposit_address else "",
        memo=resolve_memo(raw, recipient),
        expected_output=expected_output,
        expected_output_max_slippage=(
            str(max_slippage) if max_slippage is not None else expected_output
        ),
        fees=fees,
        estimated_time=format_estimated_time(first_truthy(raw, ESTIMATED_TIME_FIELDS)),
        price_impact=resolve_price_impact(raw),
        warnings=resolve_upstream_warnings(raw),
        total_fees=calculate_total_fees(fees),
        provider_label=label,
        meta=meta if isinstance(meta, Mapping) else {},
    )


def normalize_routes(raw_routes: Any, recipient: str, debug: bool = False) -> list[Route]:
    """Normalize every raw route, logging a summary per route."""
    if not isinstance(raw_routes, list):
        logger.warning(f"Invalid routes data: expected list, got {type(raw_routes).__name__}")
        return []

    logger.info(f"Normalizing {len(raw_routes)} routes for recipient {recipient}")

    routes = []
    for index, raw in enumerate(raw_routes, start=1):
        if debug:
            logger.debug(f"Raw route {index}: {json.dumps(raw, default=str)}")

        route = normalize_route(raw, recipient)
        logger.info(
            f"Route {index} normalized: provider={route.provider.value} "
            f"deposit_address_len={len(route.deposit_address)} memo_len={len(route.memo)} "
            f"expected_output={route.expected_output} fees={len(route.fees)}"
        )
        if not route.deposit_address:
            logger.warning(f"Route {index} ({route.provider.value}) missing deposit address")
        elif route.provider.requires_memo and not route.memo:
            logger.warning(f"{route.provider.value} route {index} missing memo")
        routes.append(route)

    return routes
