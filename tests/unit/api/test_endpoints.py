"""Tests for the read-only HTTP API."""

import pytest
from fastapi.testclient import TestClient

from feerouter.api import main
from feerouter.api.endpoints import get_router, set_default_router
from feerouter.api.main import app, serve, status_for
from feerouter.errors import (
    IndexOutOfBounds,
    InvalidAmount,
    NoPoolAvailable,
    NotPositionOwner,
    SlippageExceeded,
)
from tests.helpers import (
    ALICE,
    BOB,
    DAI,
    USDC,
    WETH,
    make_exact_input_request,
    make_increase_request,
)


@pytest.fixture
def client(funded):
    """Test client serving the funded deployment's router."""
    app.dependency_overrides[get_router] = lambda: funded.router
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_router_not_configured(self):
        set_default_router(None)
        response = TestClient(app).get("/stats")

        assert response.status_code == 503


class TestServe:
    def test_serve_installs_router(self, funded, monkeypatch):
        started = []
        monkeypatch.setattr(main, "configure_logging", lambda level: None)
        monkeypatch.setattr(
            main.uvicorn, "run", lambda served, host, port: started.append((served, host, port))
        )

        try:
            serve(funded.router, host="127.0.0.1", port=9000)
            response = TestClient(app).get("/stats")
        finally:
            set_default_router(None)

        assert started == [(app, "127.0.0.1", 9000)]
        assert response.status_code == 200


class TestQuotes:
    def test_exact_input(self, client):
        response = client.get(
            "/quote/exact-input", params={"token_in": WETH, "token_out": USDC, "amount_in": 10}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["fee"] == 3000
        assert data["amount"] == "20000"
        assert data["is_exact_input"] is True
        assert [probe["fee"] for probe in data["probes"]] == [500, 3000, 10000]

    def test_exact_output(self, client):
        response = client.get(
            "/quote/exact-output",
            params={"token_in": WETH, "token_out": USDC, "amount_out": 2_000_000},
        )

        assert response.status_code == 200
        assert response.json()["amount"] == "1000"
        assert response.json()["is_exact_input"] is False

    def test_no_pool_is_404(self, client):
        response = client.get(
            "/quote/exact-input", params={"token_in": WETH, "token_out": DAI, "amount_in": 10}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "NoPoolAvailable"

    def test_zero_amount_is_422(self, client):
        response = client.get(
            "/quote/exact-input", params={"token_in": WETH, "token_out": USDC, "amount_in": 0}
        )

        assert response.status_code == 422
        assert response.json()["error"] == "InvalidAmount"

    def test_malformed_token_is_422(self, client):
        response = client.get(
            "/quote/exact-input", params={"token_in": "0x1234", "token_out": USDC, "amount_in": 1}
        )

        assert response.status_code == 422


class TestCallers:
    def test_slippage_default(self, client):
        response = client.get(f"/callers/{ALICE}/slippage")

        assert response.json() == {
            "caller": ALICE,
            "tolerance_bps": 50,
            "configured": False,
            "default_bps": 50,
        }

    def test_slippage_configured_zero(self, client, funded):
        funded.router.set_slippage_tolerance(ALICE, 0)

        data = client.get(f"/callers/{ALICE}/slippage").json()

        assert data["tolerance_bps"] == 0
        assert data["configured"] is True

    def test_swap_history(self, client, funded):
        funded.router.swap_exact_input(ALICE, make_exact_input_request(amount_in=10))

        listing = client.get(f"/callers/{ALICE}/swaps").json()
        last = client.get(f"/callers/{ALICE}/swaps/last").json()
        first = client.get(f"/callers/{ALICE}/swaps/0").json()

        assert listing["count"] == 1
        assert listing["swaps"][0] == last == first
        assert last["amount_in"] == "10"
        assert last["amount_out"] == "20000"
        assert last["fee"] == 3000

    def test_swap_history_empty(self, client):
        assert client.get(f"/callers/{BOB}/swaps").json()["count"] == 0

        last = client.get(f"/callers/{BOB}/swaps/last")
        indexed = client.get(f"/callers/{BOB}/swaps/0")

        assert last.status_code == 404
        assert last.json()["error"] == "NoSwapsFound"
        assert indexed.status_code == 404
        assert indexed.json()["error"] == "IndexOutOfBounds"

    def test_liquidity_history(self, client, funded):
        token_id = funded.positions.mint(ALICE, WETH, USDC)
        funded.router.increase_liquidity(ALICE, make_increase_request(token_id))

        listing = client.get(f"/callers/{ALICE}/liquidity").json()
        last = client.get(f"/callers/{ALICE}/liquidity/last").json()

        assert listing["count"] == 1
        assert last["token_id"] == token_id
        assert last["liquidity"] == "3000"
        assert client.get(f"/callers/{ALICE}/liquidity/1").status_code == 404
        assert client.get(f"/callers/{BOB}/liquidity/last").status_code == 404

    def test_malformed_caller_is_422(self, client):
        assert client.get("/callers/not-an-address/swaps").status_code == 422

    def test_stats(self, client, funded):
        funded.router.swap_exact_input(ALICE, make_exact_input_request(amount_in=10))
        funded.router.swap_exact_input(BOB, make_exact_input_request(amount_in=10))

        assert client.get("/stats").json() == {"total_swaps": 2, "total_liquidity_actions": 0}


class TestStatusMapping:
    @pytest.mark.parametrize(
        "error,status",
        [
            (NoPoolAvailable(WETH, USDC, (500,)), 404),
            (IndexOutOfBounds(1, 0), 404),
            (InvalidAmount(), 422),
            (SlippageExceeded(60, 50), 400),
            (NotPositionOwner(1, BOB, ALICE), 400),
        ],
    )
    def test_status_for(self, error, status):
        assert status_for(error) == status
