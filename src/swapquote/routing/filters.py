"""Drop structurally unusable routes and sanity-check the recipient."""

import logging
from typing import Optional

from swapquote.chains import get_chain, is_valid_address
from swapquote.routing.base import ProviderKind, Route, SwapRequest

logger = logging.getLogger(__name__)

MIN_USABLE_DEPOSIT_ADDRESS_LENGTH = 5


def rejection_reason(route: Route) -> Optional[str]:
    """Why a route is unusable, or None if it should be kept.

    Memo presence is deliberately not checked here: a THORChain/MayaChain
    route without a memo is kept and only carries the validator's error.
    """
    if route.provider is ProviderKind.UNKNOWN:
        return "Unknown provider"
    if not route.deposit_address:
        return "No deposit address"
    if len(route.deposit_address) <= MIN_USABLE_DEPOSIT_ADDRESS_LENGTH:
        return "Invalid deposit address length"
    if route.output_amount <= 0:
        return "Non-positive expected output"
    return None


def is_usable_route(route: Route) -> bool:
    return rejection_reason(route) is None


def filter_routes(routes: list[Route]) -> list[Route]:
    """Keep usable routes, preserving arrival order."""
    kept = []
    for route in routes:
        reason = rejection_reason(route)
        if reason:
            logger.warning(
                f"Filtering out route: provider={route.provider_label or route.provider.value} "
                f"deposit_address_len={len(route.deposit_address)} reason={reason}"
            )
            continue
        kept.append(route)

    logger.info(f"Kept {len(kept)} usable routes out of {len(routes)}")
    return kept


def check_recipient(routes: list[Route], request: SwapRequest) -> list[Route]:
    """Warn on every route if the recipient doesn't fit the destination chain."""
    chain = request.to_chain
    if is_valid_address(request.recipient, chain):
        return routes

    config = get_chain(chain)
    network = config.name if config else chain
    logger.warning(f"Recipient {request.recipient} does not look like a {network} address")
    message = f"Recipient address format does not match {chain} network"
    return [route.with_warnings(message) for route in routes]
