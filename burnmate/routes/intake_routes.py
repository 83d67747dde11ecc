# burnmate/routes/intake_routes.py
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id, same_user_required
from ..models.intake import Intake
from ..utils import parse_optional_datetime, to_number

intake_bp = Blueprint("intake", __name__)


@intake_bp.route("", methods=["POST"])
@jwt_required()
def add_intake():
    """
    Body:
    {
      "name": "Banana",
      "calories": 105,
      "protein": 1.3,                       # optional, defaults to 0
      "timestamp": "2025-11-21T08:00:00Z"   # optional, defaults to now
    }
    """
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    if not name:
        return jsonify({"message": "name is required"}), 400

    try:
        calories = to_number(data.get("calories"))
        protein = to_number(data.get("protein")) if data.get("protein") is not None else 0
    except (TypeError, ValueError):
        return jsonify({"message": "calories and protein must be numbers"}), 400

    try:
        when = parse_optional_datetime(data.get("timestamp")) or datetime.utcnow()
    except ValueError:
        return jsonify({"message": "invalid timestamp"}), 400

    try:
        intake = Intake(
            user_id=current_user_id(),
            name=name,
            calories=calories,
            protein=protein,
            timestamp=when,
        )
        db.session.add(intake)
        db.session.commit()
        return jsonify(intake.to_dict()), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Failed to log intake: {e}")
        return jsonify({"message": "Server error"}), 500


@intake_bp.route("/<user_id>", methods=["GET"])
@same_user_required("user_id")
def list_intake(user_id):
    """Optional inclusive ``from`` / ``to`` ISO bounds on the timestamp."""
    try:
        start = parse_optional_datetime(request.args.get("from"))
        end = parse_optional_datetime(request.args.get("to"))
    except ValueError:
        return jsonify({"message": "from/to must be ISO dates"}), 400

    try:
        q = Intake.query.filter(Intake.user_id == int(user_id))
        if start is not None:
            q = q.filter(Intake.timestamp >= start)
        if end is not None:
            q = q.filter(Intake.timestamp <= end)
        rows = q.order_by(Intake.timestamp.desc(), Intake.id.desc()).all()
    except Exception as e:
        current_app.logger.exception(f"Failed to list intake: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify([i.to_dict() for i in rows]), 200


@intake_bp.route("/<int:intake_id>", methods=["DELETE"])
@jwt_required()
def delete_intake(intake_id: int):
    intake = db.session.get(Intake, intake_id)
    if not intake:
        return jsonify({"message": "Not found"}), 404

    if intake.user_id != current_user_id():
        return jsonify({"message": "Forbidden"}), 403

    try:
        db.session.delete(intake)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Failed to delete intake: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify({"ok": True}), 200
