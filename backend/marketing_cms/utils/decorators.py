from functools import wraps
from flask import current_app, jsonify
from flask_jwt_extended import get_jwt
from sqlalchemy.exc import SQLAlchemyError

from marketing_cms.extensions import db


def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def error_body(message, envelope="error"):
    if envelope == "success":
        return {"success": False, "error": message}
    return {"error": message}


def db_error_boundary(message, envelope="error"):
    """
    Convert persistence failures inside a route into a fixed 500 response.

    envelope:
    - "error":   {"error": message}
    - "success": {"success": false, "error": message}
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                current_app.logger.exception(message)
                return jsonify(error_body(message, envelope)), 500
        return wrapper
    return decorator
