from decimal import InvalidOperation

from flask import Flask, request, jsonify
from flask_cors import CORS
from rvg_engine import CalculationProcessor
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (case management UI and invoice service call the API)
CORS(app)

# Initialize the calculation processor
processor = CalculationProcessor()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "RVG Fee Calculator API",
        "version": "1.0",
        "endpoints": {
            "calculate": "/calculate [POST]",
            "positions": "/positions?q= [GET]",
            "presets": "/presets [GET]",
            "base_fee": "/base_fee?amount=&date= [GET]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/calculate", methods=["POST"])
def calculate():
    """
    Calculate RVG fees for a disputed amount and a list of VV positions
    """
    try:
        # Get input data
        input_data = request.get_json(force=True, silent=True)

        if not input_data or not isinstance(input_data, dict):
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        # Log request
        codes = [p.get("code") for p in input_data.get("positions", []) if isinstance(p, dict)]
        logger.info(f"Calculating {input_data.get('disputed_amount')} with positions {codes}")

        result = processor.process_from_dict(input_data)

        logger.info(f"Calculation done: gross {result['totals']['gross_total']['value']}")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError, InvalidOperation) as e:
        # Validation errors, including unknown VV positions
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Calculation error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during calculation",
            "status": "failed"
        }), 500


@app.route("/positions", methods=["GET"])
def positions():
    """Search the VV catalog"""
    return jsonify(processor.search_positions(request.args.get("q", ""))), 200


@app.route("/presets", methods=["GET"])
def presets():
    """Presets for common case types and disputed amount suggestions"""
    return jsonify(processor.list_presets()), 200


@app.route("/base_fee", methods=["GET"])
def base_fee():
    """Base fee (rate 1.0) for a disputed amount"""
    try:
        return jsonify(processor.base_fee(request.args["amount"], request.args.get("date"))), 200
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": "amount (number) and optional date (YYYY-MM-DD) are required",
            "status": "validation_failed"
        }), 400


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
