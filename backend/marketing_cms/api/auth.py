from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
)

from marketing_cms.extensions import db
from marketing_cms.models.user import User
from marketing_cms.utils.decorators import db_error_boundary
from marketing_cms.utils.forms import request_data
from marketing_cms.utils.rate_limit import rate_limit

auth_bp = Blueprint("auth", __name__)


def _token_claims(user):
    return {"username": user.username, "role": user.role}


def _public_user(user):
    return {"id": user.id, "username": user.username, "role": user.role}


def _current_user():
    identity = get_jwt_identity()
    try:
        return db.session.get(User, int(identity))
    except (TypeError, ValueError):
        return None


@auth_bp.route("/login", methods=["POST"])
@rate_limit("login")
@db_error_boundary("Server error")
def login():
    data = request_data()

    username = data.get("username")
    password = data.get("password")

    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        return jsonify({"error": "Username and password are required"}), 400

    user = User.query.filter_by(username=username).first()

    if not user or not user.check_password(password):
        current_app.logger.warning("Failed login for username=%s", username)
        return jsonify({"error": "Invalid credentials"}), 401

    identity = str(user.id)
    claims = _token_claims(user)

    access_token = create_access_token(identity=identity, additional_claims=claims)
    refresh_token = create_refresh_token(identity=identity, additional_claims=claims)

    return jsonify({
        "success": True,
        "access_token": access_token,
        "refresh_token": refresh_token,
        "user": _public_user(user),
    }), 200


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
@db_error_boundary("Server error")
def refresh():
    user = _current_user()
    if user is None:
        return jsonify({"error": "User not found", "code": "USER_NOT_FOUND"}), 401

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims=_token_claims(user),
    )

    return jsonify({"success": True, "access_token": access_token}), 200


@auth_bp.route("/verify", methods=["GET"])
@jwt_required()
@db_error_boundary("Server error")
def verify():
    user = _current_user()
    if user is None:
        return jsonify({"valid": False, "error": "User not found"}), 401

    return jsonify({"valid": True, "user": _public_user(user)}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
@db_error_boundary("Server error")
def me():
    user = _current_user()
    if user is None:
        return jsonify({"authenticated": False, "error": "User not found"}), 401

    return jsonify({"authenticated": True, "user": _public_user(user)}), 200
