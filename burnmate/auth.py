# burnmate/auth.py
from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required


def current_user_id() -> int:
    return int(get_jwt_identity())


def same_user_required(param: str):
    """
    Require a valid token whose identity equals the ``param`` URL segment.
    Anything else is answered with 403.
    """

    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            if str(get_jwt_identity()) != str(kwargs.get(param)):
                return jsonify({"message": "Forbidden"}), 403
            return fn(*args, **kwargs)

        return wrapper

    return decorator
