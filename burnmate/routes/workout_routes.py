# burnmate/routes/workout_routes.py

from datetime import datetime
from typing import List

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id, same_user_required
from ..models.workout import Workout
from ..utils import parse_optional_datetime, to_number

workouts_bp = Blueprint("workouts", __name__)


# ------------------------------
# POST /api/workout
# ------------------------------
@workouts_bp.route("/workout", methods=["POST"])
@jwt_required()
def create_workout():
    """
    Expected body:
    {
      "type": "Running",
      "duration": 30,            # minutes
      "caloriesBurned": 300,
      "date": "2025-11-21T07:30:00"   # optional, defaults to now
    }
    """
    user_id = current_user_id()
    data = request.get_json(silent=True) or {}

    workout_type = (data.get("type") or "").strip()
    if not workout_type:
        return jsonify({"message": "type is required"}), 400

    try:
        duration = to_number(data.get("duration"))
        calories_burned = to_number(data.get("caloriesBurned"))
    except (TypeError, ValueError):
        return jsonify({"message": "duration and caloriesBurned must be numbers"}), 400

    try:
        when = parse_optional_datetime(data.get("date")) or datetime.utcnow()
    except ValueError:
        return jsonify({"message": "invalid date"}), 400

    try:
        workout = Workout(
            user_id=user_id,
            type=workout_type,
            duration=duration,
            calories_burned=calories_burned,
            date=when,
        )
        db.session.add(workout)
        db.session.commit()

        return jsonify(workout.to_dict()), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Failed to log workout: {e}")
        return jsonify({"message": "Server error"}), 500


# ------------------------------
# GET /api/workouts/<user_id>
# ------------------------------
@workouts_bp.route("/workouts/<user_id>", methods=["GET"])
@same_user_required("user_id")
def list_workouts(user_id):
    try:
        rows: List[Workout] = (
            Workout.query.filter_by(user_id=int(user_id))
            .order_by(Workout.date.desc(), Workout.id.desc())
            .all()
        )
    except Exception as e:
        current_app.logger.exception(f"Failed to list workouts: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify([w.to_dict() for w in rows]), 200
