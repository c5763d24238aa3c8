"""Provider integration diagnostics.

Two views of provider health:
- compute_integration_status(): cheap snapshot from the routes of one
  request, attached to every quote response.
- IntegrationReporter: runs canned swap requests against the live
  aggregator and scores every route that survives filtering.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from swapquote.config import Settings
from swapquote.errors import UpstreamError
from swapquote.routing.base import PartialProviderFailure, ProviderKind, Route, SwapRequest
from swapquote.routing.filters import filter_routes
from swapquote.routing.normalizer import classify_provider, normalize_routes
from swapquote.routing.swapkit import SwapKitClient
from swapquote.web.contracts.swaps import (
    IntegrationReport,
    ProviderReport,
    ProviderStatus,
    ReportSummary,
)

logger = logging.getLogger(__name__)

PASSING_SCORE = 70

# Score deductions
MISSING_DEPOSIT_ADDRESS_PENALTY = 30
INVALID_OUTPUT_PENALTY = 25
MISSING_REQUIRED_MEMO_PENALTY = 25
MISSING_OPTIONAL_MEMO_PENALTY = 5
INVALID_FEES_PENALTY = 15
MISSING_ESTIMATED_TIME_PENALTY = 10


@dataclass(frozen=True)
class IntegrationTestCase:
    """A canned swap request used to exercise providers."""

    name: str
    request: SwapRequest


PRIMARY_TEST_CASE = IntegrationTestCase(
    name="BTC to ETH (Primary Test)",
    request=SwapRequest(
        from_asset="BTC.BTC",
        to_asset="ETH.ETH",
        amount="0.001",
        recipient="0x742d35Cc6681C63581B87b8b26Ff4c6A8Db73543",
    ),
)


@dataclass
class RouteScore:
    score: int
    issues: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.score >= PASSING_SCORE


def score_route(route: Route) -> RouteScore:
    """Score a normalized route out of 100."""
    issues: list[str] = []
    score = 100

    if not route.deposit_address:
        issues.append("Missing deposit address")
        score -= MISSING_DEPOSIT_ADDRESS_PENALTY

    if route.output_amount <= 0:
        issues.append("Invalid expected output")
        score -= INVALID_OUTPUT_PENALTY

    if not route.memo:
        if route.provider.requires_memo:
            issues.append(f"{route.provider.value} missing required memo")
            score -= MISSING_REQUIRED_MEMO_PENALTY
        elif route.provider is ProviderKind.CHAINFLIP:
            issues.append("ChainFlip route has no memo (may be normal)")
            score -= MISSING_OPTIONAL_MEMO_PENALTY

    if not isinstance(route.fees, (list, tuple)):
        issues.append("Missing or invalid fees structure")
        score -= INVALID_FEES_PENALTY

    if not route.estimated_time:
        issues.append("Missing estimated time")
        score -= MISSING_ESTIMATED_TIME_PENALTY

    return RouteScore(score=max(0, score), issues=issues)


def _add_issue(issues: list[str], issue: str) -> None:
    if issue not in issues:
        issues.append(issue)


def compute_integration_status(
    routes: Iterable[Route],
    provider_errors: Iterable[PartialProviderFailure] = (),
) -> dict[str, ProviderStatus]:
    """Derive per-provider availability from one set of routes."""
    status = {kind.key: ProviderStatus() for kind in ProviderKind.known()}

    for route in routes:
        entry = status.get(route.provider.key)
        if entry is None:
            continue
        entry.available = True

        has_deposit_address = len(route.deposit_address) > 10
        has_valid_output = route.output_amount > 0
        has_memo_when_needed = not route.provider.requires_memo or len(route.memo) > 5

        if has_deposit_address and has_valid_output and has_memo_when_needed:
            entry.functional = True
            continue

        if not has_deposit_address:
            _add_issue(entry.issues, "Missing or invalid deposit address")
        if not has_valid_output:
            _add_issue(entry.issues, "Missing or invalid expected output")
        if not has_memo_when_needed:
            _add_issue(entry.issues, "Missing required memo")

    for failure in provider_errors:
        entry = status.get(classify_provider(failure.provider).key)
        if entry is not None:
            _add_issue(entry.issues, f"Provider error: {failure.message}")

    return status


def parse_provider_errors(payload: dict) -> list[PartialProviderFailure]:
    entries = payload.get("providerErrors")
    if not isinstance(entries, list):
        return []
    return [PartialProviderFailure.from_payload(entry) for entry in entries]


def _round_percent(passed: int, total: int) -> int:
    if total == 0:
        return 0
    percent = Decimal(passed * 100) / Decimal(total)
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class IntegrationReporter:
    """Runs canned requests through fetch -> normalize -> filter and scores routes."""

    def __init__(
        self,
        client: SwapKitClient,
        settings: Settings,
        test_cases: Optional[list[IntegrationTestCase]] = None,
    ):
        self.client = client
        self.settings = settings
        self.test_cases = test_cases or [PRIMARY_TEST_CASE]

    async def run(self) -> IntegrationReport:
        """Run every test case and build a fresh report."""
        logger.info(f"Starting provider integration tests ({len(self.test_cases)} cases)")

        providers = {kind.key: ProviderReport() for kind in ProviderKind.known()}
        summary = ReportSummary()

        for index, case in enumerate(self.test_cases):
            if index and self.settings.integration_test_delay > 0:
                await asyncio.sleep(self.settings.integration_test_delay)
            await self._run_case(case, summary, providers)

        summary.success_rate = _round_percent(summary.passed, summary.total_tests)
        for result in providers.values():
            if result.passed > 0:
                result.status = "FUNCTIONAL"
            elif result.issues:
                result.status = "ISSUES"

        report = IntegrationReport(
            timestamp=datetime.now(timezone.utc).isoformat(),
            summary=summary,
            providers=providers,
            test_parameters=[case.request.to_dict() for case in self.test_cases],
            test_cases=[case.name for case in self.test_cases],
            recommendations=self._recommendations(summary, providers),
        )
        logger.info(
            f"Integration tests done: {summary.passed}/{summary.total_tests} passed "
            f"({summary.success_rate}%)"
        )
        return report

    async def _run_case(
        self,
        case: IntegrationTestCase,
        summary: ReportSummary,
        providers: dict[str, ProviderReport],
    ) -> None:
        logger.info(
            f"Testing {case.name}: {case.request.amount} {case.request.from_asset} -> "
            f"{case.request.to_asset}"
        )

        try:
            payload = await self.client.fetch_quote(case.request)
        except UpstreamError as e:
            logger.error(f"Test '{case.name}' failed: {e}")
            summary.total_tests += 1
            summary.failed += 1
            suspect = providers.get(classify_provider(str(e)).key)
            if suspect is not None:
                suspect.issues.append(f"Test error: {e}")
            return

        raw_routes = payload.get("routes")
        if not isinstance(raw_routes, list):
            logger.error(f"No routes returned for test '{case.name}'")
            summary.total_tests += 1
            summary.failed += 1
            for failure in parse_provider_errors(payload):
                logger.info(f"Provider error: {failure.provider}: {failure.message}")
                result = providers.get(classify_provider(failure.provider).key)
                if result is not None:
                    result.issues.append(failure.message)
            return

        routes = filter_routes(normalize_routes(raw_routes, case.request.recipient))
        seen = set()
        for route in routes:
            seen.add(route.provider.key)
            scored = score_route(route)
            summary.total_tests += 1
            result = providers[route.provider.key]

            if scored.passed:
                summary.passed += 1
                result.passed += 1
                logger.info(f"{route.provider.value} validation passed (score: {scored.score})")
            else:
                summary.failed += 1
                result.failed += 1
                result.issues.extend(scored.issues)
                logger.warning(f"{route.provider.value} validation failed: {scored.issues}")

        for key, result in providers.items():
            if key not in seen:
                logger.warning(f"{key} missing from '{case.name}'")
                result.issues.append(f"Not available for {case.name}")

    @staticmethod
    def _recommendations(summary: ReportSummary, providers: dict[str, ProviderReport]) -> list[str]:
        recommendations = []

        if providers[ProviderKind.MAYACHAIN.key].passed == 0:
            recommendations.append(
                "MayaChain integration needs attention - check API endpoint and data extraction"
            )
        if providers[ProviderKind.CHAINFLIP.key].passed == 0:
            recommendations.append(
                "ChainFlip integration needs attention - check API response format and memo handling"
            )
        if providers[ProviderKind.THORCHAIN.key].passed == 0:
            recommendations.append(
                "THORChain integration needs attention despite usually being stable"
            )
        if summary.success_rate < 50:
            recommendations.append(
                "Overall integration health is poor - consider reviewing SwapKit API version compatibility"
            )

        return recommendations
