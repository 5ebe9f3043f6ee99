from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity
from pydantic import ValidationError
from config.settings import Config
from models.message import ChatRequest, TitleRequest
from services.gemini_provider import call_gemini_api, call_gemini_for_title
from services.persona_service import list_personas
from utils.errors import ProviderError, http_status_for
from utils.logger import get_logger
from utils.rate_limit import build_rate_key, check_rate_limit, client_ip

logger = get_logger(__name__)

chat_bp = Blueprint('chat', __name__)


@chat_bp.route('/personas', methods=['GET'])
def personas():
    return jsonify({"personas": list_personas()}), 200


@chat_bp.route('/message', methods=['POST'])
@jwt_required()
def send_message():
    current_user = get_jwt_identity()

    rl = check_rate_limit(
        build_rate_key(["chat", current_user, client_ip(request)]),
        capacity=20,
        refill_rate_per_sec=0.5,
    )
    if not rl.allowed:
        return jsonify({"error": "Rate limit exceeded. Try again later."}), 429

    try:
        data = ChatRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid request", "errors": e.errors(include_context=False)}), 400

    try:
        result = call_gemini_api(data.messages, Config.GEMINI_API_KEY, data.active_role)
        return jsonify({"reply": result["cleaned"], "role": data.active_role}), 200
    except ProviderError as e:
        logger.error(f"Advisor chat failed for user {current_user}: {e}")
        return jsonify({"error": "The advisor could not respond. Please try again."}), http_status_for(e)
    except Exception as e:
        logger.error(f"Unexpected chat error: {str(e)}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500


@chat_bp.route('/title', methods=['POST'])
@jwt_required()
def generate_title():
    current_user = get_jwt_identity()

    rl = check_rate_limit(
        build_rate_key(["ai-title", current_user, client_ip(request)]),
        capacity=10,
        refill_rate_per_sec=0.2,
    )
    if not rl.allowed:
        return jsonify({"title": "Rate limit exceeded. Try again later."}), 429

    try:
        data = TitleRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"title": "Error generating title", "errors": e.errors(include_context=False)}), 400

    try:
        title = call_gemini_for_title(data.userMsg)
        return jsonify({"title": title}), 200
    except ProviderError as e:
        logger.error(f"server error in generating AI title: {e}")
        return jsonify({"title": "Error generating title"}), 200
    except Exception as e:
        logger.error(f"Unexpected error generating AI title: {str(e)}", exc_info=True)
        return jsonify({"title": "Error generating title"}), 500
