"""Swap quote request and response contracts.

Wire format is camelCase; Python attributes stay snake_case.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from swapquote.routing.base import Route


class CamelModel(BaseModel):
    """Base for contracts serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SwapDetailsRequest(CamelModel):
    """Body of the quote endpoint: a swap request or a diagnostics action."""

    from_asset: Optional[str] = Field(None, description="Source asset (e.g., BTC.BTC)")
    to_asset: Optional[str] = Field(None, description="Destination asset (e.g., ETH.ETH)")
    amount: Optional[str] = Field(None, description="Amount of source asset to swap")
    recipient: Optional[str] = Field(None, description="Destination address")
    action: Optional[str] = Field(None, description="'test-integrations' to run diagnostics")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_string(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class RouteModel(CamelModel):
    """A canonical route as returned to clients."""

    provider: str = Field(..., description="THORCHAIN, MAYACHAIN or CHAINFLIP")
    deposit_address: str = Field(..., description="Where to send the source asset")
    memo: str = Field("", description="Instruction string to attach to the deposit")
    expected_output: str = Field(..., description="Estimated destination amount")
    expected_output_max_slippage: str = Field(..., description="Output at max slippage")
    fees: list[Any] = Field(default_factory=list)
    estimated_time: str = Field(..., description="Human-readable duration")
    price_impact: float = 0.0
    warnings: list[str] = Field(default_factory=list)
    total_fees: float = 0.0

    @classmethod
    def from_route(cls, route: Route) -> "RouteModel":
        return cls.model_validate(route.to_dict())


class ProviderStatus(CamelModel):
    """Live health of one provider, derived from the latest routes."""

    available: bool = False
    functional: bool = False
    issues: list[str] = Field(default_factory=list)


class ProviderErrorModel(CamelModel):
    provider: str
    message: str


class SwapDetailsResponse(CamelModel):
    """Ranked routes for a swap request."""

    routes: list[RouteModel] = Field(default_factory=list)
    expires_in: int = Field(0, description="Seconds the routes stay valid")
    best_route: Optional[RouteModel] = None
    integration_status: dict[str, ProviderStatus] = Field(default_factory=dict)
    provider_errors: list[ProviderErrorModel] = Field(default_factory=list)


class ReportSummary(CamelModel):
    total_tests: int = 0
    passed: int = 0
    failed: int = 0
    success_rate: int = 0


class ProviderReport(CamelModel):
    passed: int = 0
    failed: int = 0
    issues: list[str] = Field(default_factory=list)
    status: Literal["FUNCTIONAL", "ISSUES", "NOT_TESTED"] = "NOT_TESTED"


class IntegrationReport(CamelModel):
    """Provider integration health report."""

    timestamp: str
    summary: ReportSummary
    providers: dict[str, ProviderReport]
    test_parameters: list[dict[str, str]] = Field(default_factory=list)
    test_cases: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class IntegrationTestResponse(CamelModel):
    action: Literal["integration-test"] = "integration-test"
    report: IntegrationReport
