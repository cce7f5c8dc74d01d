from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from marketing_cms.extensions import db

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    database = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Health check database query failed")
        database = "error"

    status_code = 200 if database == "ok" else 503
    return jsonify({
        "status": "ok" if database == "ok" else "degraded",
        "service": current_app.config.get("SERVICE_NAME", "marketing-cms"),
        "database": database,
    }), status_code
