"""Tests for the Flask API."""

import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _payload(**overrides):
    data = {
        "disputed_amount": 5000,
        "reference_date": "2025-07-01",
        "positions": [{"code": "3100"}, {"code": "3104"}],
    }
    data.update(overrides)
    return data


class TestFlaskApi:
    """Test the Flask routes and responses."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_api_info(self, client):
        body = client.get("/api").get_json()
        assert body["status"] == "ok"
        assert "calculate" in body["endpoints"]

    def test_calculate(self, client):
        response = client.post("/calculate", json=_payload())

        assert response.status_code == 200
        body = response.get_json()
        assert body["totals"]["gross_total"]["value"] == 1078.44

    def test_calculate_cors_header(self, client):
        response = client.post("/calculate", json=_payload(), headers={"Origin": "http://localhost:3000"})
        assert response.headers.get("Access-Control-Allow-Origin") == "*"

    def test_calculate_no_body(self, client):
        response = client.post("/calculate", data="")
        assert response.status_code == 400
        assert response.get_json()["status"] == "failed"

    def test_calculate_invalid_json(self, client):
        response = client.post("/calculate", data="{not json", content_type="application/json")
        assert response.status_code == 400

    def test_calculate_unknown_position(self, client):
        response = client.post("/calculate", json=_payload(positions=[{"code": "9999"}]))

        assert response.status_code == 400
        body = response.get_json()
        assert body["status"] == "validation_failed"
        assert "9999" in body["error"]

    def test_calculate_missing_amount(self, client):
        response = client.post("/calculate", json={"positions": [{"code": "3100"}]})
        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_calculate_malformed_amount(self, client):
        response = client.post("/calculate", json=_payload(disputed_amount="abc"))
        assert response.status_code == 400

    def test_positions(self, client):
        body = client.get("/positions?q=Termin").get_json()
        assert [p["code"] for p in body["positions"]] == ["3104", "3202"]

    def test_positions_without_query(self, client):
        assert client.get("/positions").get_json() == {"positions": []}

    def test_presets(self, client):
        body = client.get("/presets").get_json()
        assert len(body["presets"]) == 5

    def test_base_fee(self, client):
        body = client.get("/base_fee?amount=5000&date=2025-07-01").get_json()
        assert body["base_fee"] == 354.5

    def test_base_fee_missing_amount(self, client):
        response = client.get("/base_fee")
        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"
