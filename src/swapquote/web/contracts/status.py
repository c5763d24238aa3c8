"""Swap status contracts."""

from typing import Any, Literal, Optional

from pydantic import Field

from swapquote.web.contracts.swaps import CamelModel


class SwapStatusResponse(CamelModel):
    """Progress of a submitted swap, as tracked by the aggregator."""

    status: str = Field(..., description="Aggregator status (pending, swapping, completed, ...)")
    observed_in: Optional[str] = Field(None, description="Chain where the inbound tx was seen")
    tx_hash: str = Field(..., description="Inbound transaction hash")
    final_tx_hash: Optional[str] = Field(None, description="Outbound transaction hash")
    final_tx_explorer_url: Optional[str] = Field(None, description="Explorer link for outbound tx")
    in_amount: Optional[Any] = None
    out_amount: Optional[Any] = None
    provider: Optional[Any] = None
    timestamp: Optional[Any] = None


class SwapNotFoundResponse(CamelModel):
    status: Literal["not_found"] = "not_found"
    message: str = "Transaction not found or not yet processed"
