from flask import Flask, send_from_directory, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .logging_config import configure_logging
from .middleware.request_id import request_id_middleware
from .api import api_bp
from .errors import register_error_handlers
from .cli import register_commands
from flask_swagger_ui import get_swaggerui_blueprint
import os

DEFAULT_SECRETS = {None, "", "dev-secret"}
UPLOAD_CACHE_SECONDS = 365 * 24 * 60 * 60


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    if config_name == "production" and app.config.get("SECRET_KEY") in DEFAULT_SECRETS:
        raise RuntimeError("SECRET_KEY must be set in production")

    # /api/blog and /api/blog/ are the same resource
    app.url_map.strict_slashes = False

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Per-app rate limit windows, see utils.rate_limit
    app.extensions["rate_limiters"] = {}

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    request_id_middleware(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Uploaded media
    # -------------------------------------------------
    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploads")
    def serve_upload(filename):
        return send_from_directory(
            current_app.config["UPLOAD_FOLDER"],
            filename,
            max_age=UPLOAD_CACHE_SECONDS,
        )

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/site.yaml", methods=["GET"], endpoint="openapi_site")
    def serve_openapi():
        return send_from_directory(
            os.path.join(current_app.root_path, "api"),
            "openapi.yaml",
            mimetype="application/yaml",
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/site.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Marketing Site CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
