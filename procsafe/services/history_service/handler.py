"""History Service HTTP handler.

Serves the procedure selector, the static catalog entry and the
tailored safety prompts for a pasted history.

Patient history is never logged raw - the analyzer logs a hash and
length only.
"""
import logging
import os

from flask import Flask, request, jsonify

from procsafe.shared.models import UnknownProcedureError
from procsafe.services.catalog_service import get_procedure, list_procedures, parse_procedure_id
from .analyzer import HistoryAnalyzer
from .config import AnalyzerConfig

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Initialize analyzer with configuration
config = AnalyzerConfig(
    rules_version=os.getenv("RULES_VERSION", AnalyzerConfig.rules_version),
    log_matched_groups=os.getenv("LOG_MATCHED_GROUPS", "true").lower() == "true",
)
analyzer = HistoryAnalyzer(config=config)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint.

    Returns:
        200 with service status
    """
    return jsonify({
        "status": "healthy",
        "service": "history-service",
        "rules_version": config.rules_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies analyzer is initialized.

    Returns:
        200 if ready, 503 if not
    """
    if analyzer is None:
        return jsonify({"status": "not_ready", "reason": "analyzer_not_initialized"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/procedures", methods=["GET"])
def procedures():
    """List every procedure in display order, for the selector."""
    return jsonify({
        "procedures": [info.to_dict() for info in list_procedures()],
    }), 200


@app.route("/procedures/<procedure_id>", methods=["GET"])
def procedure_detail(procedure_id: str):
    """Return the static catalog entry for one procedure.

    Returns:
        200 with the entry, 404 if the procedure is unknown
    """
    try:
        pid = parse_procedure_id(procedure_id)
    except UnknownProcedureError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(get_procedure(pid).to_dict()), 200


@app.route("/analyze", methods=["POST"])
def analyze():
    """Analyze a patient history against the selected procedure.

    Request Body:
        {
            "procedure": "iv_cannulation",
            "history": "78F with AF on apixaban." (optional, default "")
        }

    Response:
        {
            "procedure": "iv_cannulation",
            "issues": [{"category", "text", "severity", "tags"}, ...],
            "prompts": [...],      # every issue except red flags
            "red_flags": [...],    # red-flag issues only
            "rules_version": "2026.10.19",
            "matched_groups": ["anticoagulants"],
            "analysis_latency_ms": 0.05,
            "analyzed_at": "..."
        }

    Error Handling:
        Validation problems return 4xx. Unexpected errors return 500,
        never an empty issue list: a failed analysis must not read as
        "no concerns".
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "empty_body"})
        return jsonify({"error": "Request body required"}), 400

    procedure_value = data.get("procedure")
    if not procedure_value:
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "missing_procedure"})
        return jsonify({"error": "Missing required field: procedure"}), 400

    history = data.get("history", "")
    if history is None:
        history = ""
    if not isinstance(history, str):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "history_not_string"})
        return jsonify({"error": "Field 'history' must be a string"}), 400

    try:
        procedure = parse_procedure_id(procedure_value)
    except UnknownProcedureError as e:
        return jsonify({"error": str(e)}), 404

    try:
        result = analyzer.analyze(history, procedure)
    except Exception as e:
        logger.error(
            "ANALYZE_ERROR",
            extra={
                "error": str(e),
                "error_type": type(e).__name__,
                "procedure": procedure.value,
            }
        )
        return jsonify({
            "error": "History analysis failed - review history manually",
            "rules_version": config.rules_version,
        }), 500

    return jsonify(result.to_dict()), 200


if __name__ == "__main__":
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Run development server
    port = int(os.getenv("PORT", "8002"))
    app.run(host="0.0.0.0", port=port, debug=False)
