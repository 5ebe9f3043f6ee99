from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from pydantic import ValidationError
from config.settings import Config
from models.message import ReportGenerationRequest
from services.openai_provider import generate_report_with_chunking
from utils.errors import ConfigurationError, ProviderError, http_status_for
from utils.logger import get_logger
from utils.rate_limit import build_rate_key, check_rate_limit, client_ip

logger = get_logger(__name__)

report_bp = Blueprint('report', __name__)


@report_bp.route('/generate', methods=['POST'])
@jwt_required()
def generate_report():
    current_user = get_jwt_identity()

    rl = check_rate_limit(
        build_rate_key(["report", current_user, client_ip(request)]),
        capacity=5,
        refill_rate_per_sec=0.05,
    )
    if not rl.allowed:
        return jsonify({"error": "Rate limit exceeded. Try again later."}), 429

    try:
        data = ReportGenerationRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid request", "errors": e.errors(include_context=False)}), 400

    try:
        report = generate_report_with_chunking(
            Config.OPENAI_API_KEY,
            data.base_instruction,
            data.messages,
            threshold_count=data.threshold_count or Config.REPORT_THRESHOLD_COUNT,
            max_parts=data.max_parts or Config.REPORT_MAX_PARTS,
            model=data.model,
        )
        return jsonify({"report": report}), 200
    except ConfigurationError as e:
        logger.error(f"Report generation is not configured: {e}")
        return jsonify({"error": "Report service is not configured"}), http_status_for(e)
    except ProviderError as e:
        logger.error(f"Report generation failed for user {current_user}: {e}")
        return jsonify({"error": "Failed to generate report. Please try again."}), http_status_for(e)
    except Exception as e:
        logger.error(f"Unexpected error generating report: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to generate report"}), 500
