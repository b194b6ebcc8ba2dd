"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import lambda_handler

PAYLOAD = {
    "disputed_amount": 5000,
    "reference_date": "2025-07-01",
    "positions": [{"code": "3100"}, {"code": "3104"}],
}


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"
        assert "environment" in body

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "endpoints" in body

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/calculate"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_calculate_success(self):
        """POST /calculate returns the calculation."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(PAYLOAD)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["totals"]["gross_total"]["value"] == 1078.44
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_http_api_format(self):
        """HTTP API (v2) events use rawPath and requestContext."""
        event = {
            "rawPath": "/calculate",
            "requestContext": {"http": {"method": "POST"}},
            "body": json.dumps(PAYLOAD),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_base64_body(self):
        event = {
            "httpMethod": "POST",
            "path": "/calculate",
            "body": base64.b64encode(json.dumps(PAYLOAD).encode("utf-8")).decode("ascii"),
            "isBase64Encoded": True,
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_dict_body(self):
        event = {"httpMethod": "POST", "path": "/calculate", "body": PAYLOAD}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_empty_body(self):
        event = {"httpMethod": "POST", "path": "/calculate", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400

    def test_invalid_json(self):
        event = {"httpMethod": "POST", "path": "/calculate", "body": "{not json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert "Invalid JSON" in json.loads(response["body"])["error"]

    def test_unknown_position(self):
        payload = dict(PAYLOAD, positions=[{"code": "9999"}])
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_positions(self):
        event = {"httpMethod": "GET", "path": "/positions", "queryStringParameters": {"q": "7002"}}
        response = lambda_handler(event, None)

        body = json.loads(response["body"])
        assert body["positions"][0]["code"] == "7002"

    def test_positions_without_parameters(self):
        event = {"httpMethod": "GET", "path": "/positions", "queryStringParameters": None}
        response = lambda_handler(event, None)

        assert json.loads(response["body"]) == {"positions": []}

    def test_presets(self):
        response = lambda_handler({"httpMethod": "GET", "path": "/presets"}, None)
        assert len(json.loads(response["body"])["suggestions"]) == 8

    def test_base_fee(self):
        event = {
            "httpMethod": "GET",
            "path": "/base_fee",
            "queryStringParameters": {"amount": "1000000", "date": "2025-07-01"},
        }
        response = lambda_handler(event, None)

        assert json.loads(response["body"])["base_fee"] == 5502.0

    def test_base_fee_invalid_amount(self):
        event = {"httpMethod": "GET", "path": "/base_fee", "queryStringParameters": {"amount": "lots"}}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
