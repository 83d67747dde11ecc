# burnmate/routes/profile_routes.py
from flask import Blueprint, current_app, request, jsonify
from .. import db
from ..auth import same_user_required
from ..models.user import GENDERS, User
from ..utils import to_optional_int

profile_bp = Blueprint("profile", __name__)


@profile_bp.route("/<user_id>", methods=["GET"])
@same_user_required("user_id")
def get_profile(user_id):
    try:
        user = db.session.get(User, int(user_id))
    except Exception as e:
        current_app.logger.exception(f"Profile lookup error: {e}")
        return jsonify({"message": "Server error"}), 500

    if not user:
        return jsonify({"message": "User not found"}), 404
    return jsonify(user.to_dict()), 200


@profile_bp.route("/<user_id>", methods=["PUT"])
@same_user_required("user_id")
def update_profile(user_id):
    data = request.get_json(silent=True) or {}

    user = db.session.get(User, int(user_id))
    if not user:
        return jsonify({"message": "User not found"}), 404

    # only fields present in the body are touched
    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"message": "name cannot be empty"}), 400
        user.name = name

    if "bio" in data:
        user.bio = data.get("bio") or ""

    if "avatarUrl" in data:
        user.avatar_url = data.get("avatarUrl") or ""

    if "age" in data:
        try:
            user.age = to_optional_int(data.get("age"))
        except (TypeError, ValueError):
            return jsonify({"message": "invalid age"}), 400

    if "gender" in data:
        gender = data.get("gender")
        if gender not in GENDERS:
            return jsonify({"message": "invalid gender"}), 400
        user.gender = gender

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Profile update error: {e}")
        return jsonify({"message": "Server error"}), 500

    return jsonify(user.to_dict()), 200
