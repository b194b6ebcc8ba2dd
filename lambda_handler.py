"""
AWS Lambda handler for the RVG Fee Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os
from decimal import InvalidOperation

from rvg_engine import CalculationProcessor

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize processor (reused across warm invocations)
processor = CalculationProcessor()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /calculate
    - GET /positions?q=
    - GET /presets
    - GET /base_fee?amount=&date=
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")
    params = event.get("queryStringParameters") or {}

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/calculate" and http_method == "POST":
        return handle_calculate(event)
    elif path == "/positions" and http_method == "GET":
        return _response(200, processor.search_positions(params.get("q", "")))
    elif path == "/presets" and http_method == "GET":
        return _response(200, processor.list_presets())
    elif path == "/base_fee" and http_method == "GET":
        return handle_base_fee(params)
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "RVG Fee Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate": "/calculate [POST]",
                "positions": "/positions?q= [GET]",
                "presets": "/presets [GET]",
                "base_fee": "/base_fee?amount=&date= [GET]",
                "health": "/health [GET]",
            },
        },
    )


def handle_base_fee(params):
    """Base fee (rate 1.0) for a disputed amount."""
    try:
        return _response(200, processor.base_fee(params["amount"], params.get("date")))
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.error(f"Validation error: {str(e)}")
        return _response(
            400,
            {
                "error": "amount (number) and optional date (YYYY-MM-DD) are required",
                "status": "validation_failed",
            },
        )


def handle_calculate(event):
    """Run a fee calculation through the RVG engine."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not isinstance(input_data, dict):
            return _response(400, {"error": "No input data provided", "status": "failed"})

        # Log request
        codes = [p.get("code") for p in input_data.get("positions", []) if isinstance(p, dict)]
        logger.info(f"Calculating {input_data.get('disputed_amount')} with positions {codes}")

        result = processor.process_from_dict(input_data)

        logger.info(f"Calculation done: gross {result['totals']['gross_total']['value']}")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError, InvalidOperation) as e:
        # Validation errors (missing fields, unknown VV positions, invalid types)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Log details but return a generic message
        logger.error(f"Unexpected calculation error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during calculation", "status": "failed"})
