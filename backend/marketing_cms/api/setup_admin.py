import hmac

from flask import request, jsonify, current_app

from marketing_cms.extensions import db
from marketing_cms.models.user import MIN_PASSWORD_LENGTH, User
from marketing_cms.utils.decorators import db_error_boundary
from marketing_cms.utils.forms import request_data
from marketing_cms.utils.rate_limit import rate_limit
from .auth import auth_bp


def setup_token_matches(provided, expected):
    """
    Constant-time comparison of the setup header against the configured secret.
    An unset secret never matches.
    """
    if not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


@auth_bp.route("/create-admin", methods=["POST"])
@rate_limit("setup", envelope="success")
@db_error_boundary("Failed to create user", envelope="success")
def create_admin():
    # One-time: refused once any user exists, whatever the token
    if db.session.query(User.id).first() is not None:
        current_app.logger.warning("Setup admin attempt blocked: a user already exists")
        return jsonify({
            "success": False,
            "error": "Admin user already exists. Use the proper admin management flow to create additional users.",
            "code": "ADMIN_ALREADY_EXISTS",
        }), 409

    setup_token = request.headers.get("X-Setup-Token")
    if not setup_token:
        current_app.logger.warning("Setup admin attempt without token")
        return jsonify({
            "success": False,
            "error": "Setup token is required",
            "code": "NO_SETUP_TOKEN",
        }), 401

    if not setup_token_matches(setup_token, current_app.config.get("SETUP_SECRET_TOKEN")):
        current_app.logger.warning("Setup admin attempt with invalid token")
        return jsonify({
            "success": False,
            "error": "Invalid setup token",
            "code": "INVALID_SETUP_TOKEN",
        }), 403

    data = request_data()
    username = data.get("username")
    password = data.get("password")

    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        return jsonify({"success": False, "error": "Username and password are required"}), 400

    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({
            "success": False,
            "error": f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        }), 400

    user = User(username=username, role="admin")
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info("Admin user created via setup endpoint username=%s", username)

    return jsonify({
        "success": True,
        "message": "Admin user created successfully",
        "username": user.username,
    }), 201
