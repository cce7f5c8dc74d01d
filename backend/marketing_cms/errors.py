from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from marketing_cms.extensions import db, jwt
from marketing_cms.utils.media import UploadError


class ValidationError(ValueError):
    """Request payload failed validation; rendered as a 400."""


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({"error": error.description})
        response.status_code = error.code or 500
        return response

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        max_mb = (current_app.config.get("MAX_CONTENT_LENGTH") or 0) // (1024 * 1024)
        response = jsonify({"error": f"File too large. Maximum size is {max_mb}MB"})
        response.status_code = 413
        return response

    @app.errorhandler(ValidationError)
    @app.errorhandler(UploadError)
    def handle_bad_input(error):
        response = jsonify({"error": str(error)})
        response.status_code = 400
        return response

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled database error")
        response = jsonify({"error": "Server error"})
        response.status_code = 500
        return response


# ------------------------
# JWT responses
# ------------------------

@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({"error": "Access token required"}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({"error": "Invalid token"}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "Token expired", "code": "TOKEN_EXPIRED"}), 401
