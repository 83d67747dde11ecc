# burnmate/routes/leaderboard_routes.py
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required

from ..leaderboard import build_leaderboard
from ..models.workout import Workout

leaderboard_bp = Blueprint("leaderboard", __name__)

USER_WORKOUTS_LIMIT = 50


@leaderboard_bp.route("", methods=["GET"])
def global_leaderboard():
    """
    Returns:
    [
      {
        "userId": "2",
        "name": "Alice",
        "avatarUrl": "https://...",
        "totalCalories": 1234,
        "workoutsCount": 5,
        "rank": 1
      },
      ...
    ]
    """
    try:
        entries = build_leaderboard()
    except Exception as e:
        current_app.logger.exception(f"Leaderboard aggregation failed: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify([e.to_dict() for e in entries]), 200


@leaderboard_bp.route("/<user_id>/workouts", methods=["GET"])
@jwt_required()
def leaderboard_user_workouts(user_id):
    """Any signed-in user may look at another user's latest workouts."""
    try:
        owner_id = int(user_id)
    except ValueError:
        return jsonify({"message": "User not found"}), 404

    try:
        rows = (
            Workout.query.filter_by(user_id=owner_id)
            .order_by(Workout.date.desc(), Workout.id.desc())
            .limit(USER_WORKOUTS_LIMIT)
            .all()
        )
    except Exception as e:
        current_app.logger.exception(f"Failed to load leaderboard workouts: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify([w.to_summary_dict() for w in rows]), 200
