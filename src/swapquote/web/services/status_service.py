"""Swap status lookups."""

import logging
from typing import Union

from swapquote.errors import UpstreamError
from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.status import SwapNotFoundResponse, SwapStatusResponse

logger = logging.getLogger(__name__)


class StatusService:
    """Read-only view of a submitted swap's progress."""

    def __init__(self, client: SwapKitClient):
        self.client = client

    async def get_status(self, tx_hash: str) -> Union[SwapStatusResponse, SwapNotFoundResponse]:
        logger.info(f"Checking swap status for transaction: {tx_hash}")

        try:
            data = await self.client.fetch_status(tx_hash)
        except UpstreamError as e:
            raise UpstreamError(str(e), e.status, error="Failed to get swap status") from e

        if data is None:
            return SwapNotFoundResponse()

        return SwapStatusResponse(
            status=data.get("status") or "unknown",
            observed_in=data.get("observedIn") or data.get("chain"),
            tx_hash=tx_hash,
            final_tx_hash=data.get("outTxHash") or data.get("finalTxHash"),
            final_tx_explorer_url=data.get("outTxUrl") or data.get("explorerUrl"),
            in_amount=data.get("inAmount"),
            out_amount=data.get("outAmount"),
            provider=data.get("provider"),
            timestamp=data.get("timestamp") or data.get("createdAt"),
        )
