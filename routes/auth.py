from datetime import timedelta
from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token
from pydantic import ValidationError
from config.settings import Config
from models.user import LoginRequest, RegisterRequest
from services.auth_service import AuthError, authenticate_user, register_user
from utils.logger import get_logger

logger = get_logger(__name__)

auth_bp = Blueprint('auth', __name__)


def _token_response(user, status=200):
    access_token = create_access_token(
        identity=user.id,
        expires_delta=timedelta(days=Config.JWT_EXPIRES_DAYS),
    )
    return jsonify({
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "plan": user.plan,
        "token": access_token,
    }), status


@auth_bp.route('/register', methods=['POST'])
def register():
    try:
        data = RegisterRequest.model_validate(request.get_json(silent=True) or {})
        user = register_user(data.email, data.password, data.name)
        logger.info(f"Registered user {user.id}")
        return _token_response(user, status=201)
    except ValidationError as e:
        return jsonify({"message": "Invalid request", "errors": e.errors(include_context=False)}), 400
    except AuthError as e:
        logger.error(f"Registration error: {e}")
        return jsonify({"message": str(e)}), e.status
    except Exception as e:
        logger.error(f"Error occurred during registration: {str(e)}")
        return jsonify({"message": "Registration failed"}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Handle email/password login and return a JWT for the user.
    """
    try:
        data = LoginRequest.model_validate(request.get_json(silent=True) or {})
        user = authenticate_user(data.email, data.password)
        return _token_response(user)
    except ValidationError as e:
        return jsonify({"message": "Invalid request", "errors": e.errors(include_context=False)}), 400
    except AuthError as e:
        logger.error(f"Login error: {e}")
        return jsonify({"message": str(e)}), e.status
    except Exception as e:
        logger.error(f"Error occurred during login: {str(e)}")
        return jsonify({"message": "Login failed"}), 500
