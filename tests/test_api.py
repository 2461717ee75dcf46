"""
Tests for FastAPI endpoints.

Uses TestClient to test API endpoints without running a server.
The catalog dependency is pointed at the packaged sample catalog.
"""

import pytest
from fastapi.testclient import TestClient

from gearsel.api.server import app, get_catalog


@pytest.fixture
def client(catalog):
    """Create test client."""
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def example_request():
    """Example candidate request for testing."""
    return {
        "motor_id": "M0002",
        "ratio": 10,
        "conditions": {
            "hours_per_day": 8,
            "load_type": "uniform",
            "mounting_direction": "horizontal",
        },
    }


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_ok(self, client):
        """Test that health endpoint returns healthy status."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestRootEndpoint:
    """Tests for / endpoint (HTML UI)."""

    def test_root_returns_html(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Gearbox Selector" in response.text


class TestReferenceEndpoints:
    """Tests for /load-types and /catalog-status."""

    def test_load_types(self, client):
        response = client.get("/load-types")

        assert response.status_code == 200
        data = response.json()
        assert data["load_types"] == ["uniform", "moderate_shock", "heavy_shock"]
        assert data["load_factors"]["heavy_shock"] == 2.0

    def test_catalog_status(self, client):
        data = client.get("/catalog-status").json()
        assert data["motors"] == 5


class TestMotorEndpoints:
    """Tests for /motors."""

    def test_list_motors(self, client):
        response = client.get("/motors")

        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_filter_motors(self, client):
        data = client.get("/motors", params={"brand": "Mitsubishi", "q": "kr"}).json()
        assert [m["id"] for m in data] == ["M0001"]

    def test_get_motor(self, client):
        data = client.get("/motors/M0002").json()
        assert data["model_name"] == "MSMF082L1U2M"

    def test_unknown_motor_is_404(self, client):
        assert client.get("/motors/M9999").status_code == 404


class TestReducerEndpoints:
    """Tests for /reducers and /ratios."""

    def test_all_reducers(self, client):
        assert len(client.get("/reducers").json()) == 5

    def test_compatible_reducers(self, client):
        data = client.get("/reducers", params={"motor_id": "M0002", "type": "Inline"}).json()
        assert {r["model_name"] for r in data} == {"GPB060", "GPB090"}

    def test_reducers_unknown_motor(self, client):
        assert client.get("/reducers", params={"motor_id": "nope"}).status_code == 404

    def test_ratios(self, client):
        data = client.get("/ratios", params={"motor_id": "M0002", "series": "GPL"}).json()

        assert data["ratios"] == [5.0, 10.0, 16.0]
        assert data["types"] == ["Inline", "Precision"]


class TestCandidatesEndpoint:
    """Tests for POST /candidates."""

    def test_candidates_ranked(self, client, example_request):
        response = client.post("/candidates", json=example_request)

        assert response.status_code == 200
        data = response.json()
        assert [c["reducer"]["model_name"] for c in data["candidates"]] == ["GPB090", "GPL060", "GPB060"]
        assert data["candidates"][0]["suitability"] == "suitable"
        assert data["candidates"][0]["bushing"]["code"] == "B1419"
        assert data["load_factor"] == 1.25

    def test_unknown_motor_is_404(self, client, example_request):
        example_request["motor_id"] = "M9999"
        assert client.post("/candidates", json=example_request).status_code == 404

    def test_invalid_ratio_is_rejected(self, client, example_request):
        example_request["ratio"] = 0
        assert client.post("/candidates", json=example_request).status_code == 422


class TestSelectEndpoint:
    """Tests for POST /select."""

    def test_select(self, client, example_request):
        response = client.post("/select", json={**example_request, "reducer_id": "reducer-GPB-90"})

        assert response.status_code == 200
        data = response.json()
        assert data["suitability"] == "suitable"
        assert data["adapter"]["type"] == "SV2"
        assert data["drawings"]["pdf"] == ["pdf/GPB/GPB090-L1-(14-70-90-M6).PDF"]

    def test_incompatible_reducer_is_400(self, client, example_request):
        response = client.post("/select", json={**example_request, "reducer_id": "reducer-GPB-42"})
        assert response.status_code == 400

    def test_unknown_reducer_is_404(self, client, example_request):
        response = client.post("/select", json={**example_request, "reducer_id": "nope"})
        assert response.status_code == 404


class TestDrawingsEndpoint:
    """Tests for GET /drawings."""

    def test_exact(self, client):
        params = {"series": "GPB", "size": 42, "stage": "L1", "bore": 8, "tap": "M3"}
        data = client.get("/drawings", params=params).json()

        assert data["step"] == ["dwg/GPB/GPB042-L1-(8-30-45-M3).STEP"]

    def test_no_match_is_empty(self, client):
        params = {"series": "GPB", "size": 42, "stage": "L1", "bore": 8, "tap": "M9"}
        data = client.get("/drawings", params=params).json()

        assert data == {"pdf": [], "step": []}
