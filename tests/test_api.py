"""Tests for the FastAPI endpoints."""

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from swapquote.api.app import create_app
from swapquote.config import Settings, get_settings
from swapquote.web.dependencies import get_swapkit_client

from payloads import ETH_RECIPIENT, chainflip_route, maya_route, thor_route

SWAP_BODY = {
    "fromAsset": "BTC.BTC",
    "toAsset": "ETH.ETH",
    "amount": "0.001",
    "recipient": ETH_RECIPIENT,
}


class FakeUpstream:
    """Answers mock SwapKit requests by path with (status, kwargs) replies."""

    def __init__(self):
        self.quote = (200, {"json": {"routes": []}})
        self.status = (404, {})
        self.tokens = (200, {"json": []})
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        if request.url.path == "/quote":
            status_code, kwargs = self.quote
        elif request.url.path.startswith("/status/"):
            status_code, kwargs = self.status
        else:
            status_code, kwargs = self.tokens
        return httpx.Response(status_code, **kwargs)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def test_app(settings, make_client, upstream):
    """Create test application talking to the fake upstream."""
    app = create_app()
    app.dependency_overrides[get_swapkit_client] = lambda: make_client(upstream)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "swapquote"}

    @pytest.mark.asyncio
    async def test_detailed_health_redacts_key(self, client):
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["aggregator"]["configured"] is True
        assert data["aggregator"]["providers"] == ["MAYACHAIN", "THORCHAIN", "CHAINFLIP"]
        config = data["config"]
        assert config["environment"] == "test"
        assert config["swapkit"]["api_key"] == "***"

    @pytest.mark.asyncio
    async def test_detailed_health_degraded_without_key(self, client, monkeypatch):
        monkeypatch.setenv("SWAPKIT_API_KEY", "")
        get_settings.cache_clear()
        try:
            response = await client.get("/health/detailed")
        finally:
            get_settings.cache_clear()

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["aggregator"]["configured"] is False


class TestSwapDetailsEndpoint:
    """Tests for POST /swap-details."""

    @pytest.mark.asyncio
    async def test_preflight(self, client):
        response = await client.options("/swap-details")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_cors_headers(self, client):
        response = await client.options(
            "/swap-details",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_routes_ranked(self, client, upstream):
        routes = [maya_route(), thor_route(), chainflip_route()]
        upstream.quote = (200, {"json": {"routes": routes}})

        response = await client.post("/swap-details", json=SWAP_BODY)

        assert response.status_code == 200
        data = response.json()
        assert [r["provider"] for r in data["routes"]] == ["CHAINFLIP", "THORCHAIN", "MAYACHAIN"]
        assert data["bestRoute"]["provider"] == "CHAINFLIP"
        assert data["expiresIn"] == 900
        assert data["providerErrors"] == []
        assert data["integrationStatus"]["thorchain"]["functional"] is True

        thor = data["routes"][1]
        assert thor["memo"] == f"=:ETH.ETH:{ETH_RECIPIENT}"
        assert thor["estimatedTime"] == "11 min"
        assert thor["totalFees"] == 0.0004
        assert set(thor) == {
            "provider",
            "depositAddress",
            "memo",
            "expectedOutput",
            "expectedOutputMaxSlippage",
            "fees",
            "estimatedTime",
            "priceImpact",
            "warnings",
            "totalFees",
        }

    @pytest.mark.asyncio
    async def test_malformed_route_does_not_sink_response(self, client, upstream):
        """Extreme numbers and junk entries in one route leave the others intact."""
        broken = thor_route(
            estimatedTime=1e30,
            priceImpact=float("inf"),
            fees=[{"amount": float("inf"), "asset": "ETH.ETH"}, {"amount": "1e1000000"}],
        )
        # json.dumps writes inf as an Infinity token, which json.loads reads back
        body = json.dumps({"routes": [chainflip_route(), broken, None, "x", 7]})
        upstream.quote = (
            200,
            {"content": body.encode(), "headers": {"content-type": "application/json"}},
        )

        response = await client.post(
            "/swap-details", json=SWAP_BODY, headers={"Origin": "https://app.example.com"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        routes = response.json()["routes"]
        assert [r["provider"] for r in routes] == ["CHAINFLIP", "THORCHAIN"]
        thor = routes[1]
        assert thor["estimatedTime"] == "5-10 min"
        assert thor["priceImpact"] == 0.0
        assert thor["totalFees"] == 0.0
        assert thor["fees"][0] == {"amount": None, "asset": "ETH.ETH"}

    @pytest.mark.asyncio
    async def test_no_routes_is_not_an_error(self, client):
        response = await client.post("/swap-details", json=SWAP_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["routes"] == []
        assert data["bestRoute"] is None
        assert data["expiresIn"] == 0

    @pytest.mark.asyncio
    async def test_missing_fields(self, client, upstream):
        response = await client.post("/swap-details", json={"fromAsset": "BTC.BTC"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing required fields: fromAsset, toAsset, amount, recipient"
        }
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_non_positive_amount(self, client):
        response = await client.post("/swap-details", json={**SWAP_BODY, "amount": "0"})

        assert response.status_code == 400
        assert response.json()["error"] == "Amount must be a positive number"

    @pytest.mark.asyncio
    async def test_unreadable_body(self, client):
        response = await client.post(
            "/swap-details",
            content=b"not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    @pytest.mark.asyncio
    async def test_upstream_failure(self, client, upstream):
        upstream.quote = (502, {"text": "Bad Gateway"})

        response = await client.post("/swap-details", json=SWAP_BODY)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to get swap details"
        assert "502" in data["message"]

    @pytest.mark.asyncio
    async def test_missing_api_key(self, test_app, client):
        test_app.dependency_overrides.pop(get_swapkit_client)
        test_app.dependency_overrides[get_settings] = lambda: Settings(swapkit_api_key="")

        response = await client.post("/swap-details", json=SWAP_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "Service misconfigured"

    @pytest.mark.asyncio
    async def test_integration_action(self, client, upstream):
        upstream.quote = (200, {"json": {"routes": [thor_route()]}})

        response = await client.post("/swap-details", json={"action": "test-integrations"})

        assert response.status_code == 200
        data = response.json()
        assert data["action"] == "integration-test"
        report = data["report"]
        assert report["summary"]["totalTests"] == 1
        assert report["summary"]["successRate"] == 100
        assert report["providers"]["thorchain"]["status"] == "FUNCTIONAL"
        assert report["testCases"] == ["BTC to ETH (Primary Test)"]


class TestSwapStatusEndpoint:
    """Tests for GET /swap-status/{tx_hash}."""

    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.get("/swap-status/abc123")

        assert response.status_code == 200
        assert response.json() == {
            "status": "not_found",
            "message": "Transaction not found or not yet processed",
        }

    @pytest.mark.asyncio
    async def test_found(self, client, upstream):
        body = {"status": "swapping", "observedIn": "BTC", "outTxHash": "0xout"}
        upstream.status = (200, {"json": body})

        response = await client.get("/swap-status/abc123")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "swapping"
        assert data["txHash"] == "abc123"
        assert data["observedIn"] == "BTC"
        assert data["finalTxHash"] == "0xout"

    @pytest.mark.asyncio
    async def test_upstream_failure(self, client, upstream):
        upstream.status = (500, {})

        response = await client.get("/swap-status/abc123")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to get swap status"


class TestSupportedAssetsEndpoint:
    """Tests for GET /supported-assets."""

    @pytest.mark.asyncio
    async def test_assets(self, client, upstream):
        tokens = [{"identifier": "BTC.BTC", "symbol": "BTC", "chain": "BTC"}]
        upstream.tokens = (200, {"json": {"tokens": tokens}})

        response = await client.get("/supported-assets")

        assert response.status_code == 200
        data = response.json()
        assert len(data["assets"]) == 1
        assert data["assets"][0]["supportedProviders"] == ["MAYACHAIN", "THORCHAIN", "CHAINFLIP"]
        assert data["providerStats"] == {"MAYACHAIN": 1, "THORCHAIN": 1, "CHAINFLIP": 1}
        assert data["totalProviders"] == 3

    @pytest.mark.asyncio
    async def test_all_providers_failed(self, client, upstream):
        upstream.tokens = (503, {"text": "unavailable"})

        response = await client.get("/supported-assets")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "All providers failed"
        assert data["providerStats"] == {
            "MAYACHAIN": "error",
            "THORCHAIN": "error",
            "CHAINFLIP": "error",
        }
