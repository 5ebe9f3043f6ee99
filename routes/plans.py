from flask import Blueprint, jsonify, request
from services.plan_service import get_plans as list_plans
from utils.logger import get_logger

logger = get_logger(__name__)

plans_bp = Blueprint('plans', __name__)


@plans_bp.route('/plans', methods=['GET'])
def get_plans():
    """
    Returns the pricing plans priced for the requested billing cycle.
    """
    billing_cycle = request.args.get("billing", "monthly")
    try:
        plans = list_plans(billing_cycle)
        return jsonify({"plans": [plan.model_dump() for plan in plans]}), 200
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    except Exception as e:
        logger.error(f"Error getting plans: {str(e)}")
        return jsonify({"message": "Failed to retrieve plans", "error": str(e)}), 500
