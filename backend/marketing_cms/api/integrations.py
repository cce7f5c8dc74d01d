from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.integration import Integration
from marketing_cms.normalizers.integration import normalize_integration
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields, to_int
from marketing_cms.utils.media import LOGO_EXTENSIONS, pop_upload, delete_file, discard_on_failure
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request

integrations_bp = Blueprint("integrations", __name__)

INTEGRATION_FIELDS = ("name", "description", "category", "website_url", "display_order", "status")
REQUIRED_FIELDS = ("name", "category")
INTEGRATION_STATUSES = {"active", "inactive"}

DEFAULT_LIMIT = 20
MAX_LIMIT = 500


def _integrations():
    return CollectionGateway(
        Integration,
        db.session,
        order_by=(Integration.display_order.asc(), Integration.id.asc()),
    )


def _coerce(fields):
    if "display_order" in fields:
        display_order = to_int(fields["display_order"], 0)
        fields["display_order"] = display_order

    if "status" in fields:
        if fields["status"] is None:
            del fields["status"]
        elif fields["status"] not in INTEGRATION_STATUSES:
            return "Status must be active or inactive"

    return None


# ------------------------
# Public
# ------------------------

@integrations_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch integrations")
def list_integrations():
    page_request = parse_page_request(
        request.args,
        default_limit=DEFAULT_LIMIT,
        max_limit=MAX_LIMIT,
    )

    items, meta = _integrations().page(
        page_request,
        status="active",
        category=request.args.get("category") or None,
    )

    return jsonify(normalize_pagination(items, normalize_integration, meta)), 200


@integrations_bp.route("/category/<category>", methods=["GET"])
@db_error_boundary("Failed to fetch integrations")
def list_integrations_by_category(category):
    items = _integrations().all(status="active", category=category)

    return jsonify([normalize_integration(item) for item in items]), 200


@integrations_bp.route("/<int:integration_id>", methods=["GET"])
@db_error_boundary("Failed to fetch integrations")
def get_integration(integration_id):
    integration = _integrations().find_one(id=integration_id, status="active")
    if integration is None:
        return jsonify({"error": "Integration not found"}), 404

    return jsonify(normalize_integration(integration)), 200


# ------------------------
# Admin
# ------------------------

@integrations_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch integrations")
def admin_list_integrations():
    page_request = parse_page_request(
        request.args,
        default_limit=DEFAULT_LIMIT,
        max_limit=MAX_LIMIT,
    )

    items, meta = _integrations().page(
        page_request,
        status=request.args.get("status") or None,
        category=request.args.get("category") or None,
    )

    return jsonify(normalize_pagination(items, normalize_integration, meta)), 200


@integrations_bp.route("/admin/<int:integration_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch integrations")
def admin_get_integration(integration_id):
    integration = _integrations().get(integration_id)
    if integration is None:
        return jsonify({"error": "Integration not found"}), 404

    return jsonify(normalize_integration(integration)), 200


@integrations_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save integration")
def create_integration():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Name and category are required"}), 400

    fields = pick(data, INTEGRATION_FIELDS)
    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    logo = pop_upload(request.files, "logo", "integrations", "integration", LOGO_EXTENSIONS)
    if logo:
        fields["logo_url"] = logo

    with discard_on_failure(logo):
        integration = _integrations().create(fields)

    return jsonify(normalize_integration(integration)), 201


@integrations_bp.route("/admin/<int:integration_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save integration")
def update_integration(integration_id):
    integrations = _integrations()
    integration = integrations.get(integration_id)
    if integration is None:
        return jsonify({"error": "Integration not found"}), 404

    enforce_optimistic_lock(integration)

    fields = pick(request_data(), INTEGRATION_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "Name and category cannot be empty"}), 400

    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    old_logo = integration.logo_url
    logo = pop_upload(request.files, "logo", "integrations", "integration", LOGO_EXTENSIONS)
    if logo:
        fields["logo_url"] = logo

    with discard_on_failure(logo):
        integrations.update(integration, fields)

    if logo and old_logo:
        delete_file(old_logo)

    return jsonify(normalize_integration(integration)), 200


@integrations_bp.route("/admin/<int:integration_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete integration")
def delete_integration(integration_id):
    if not _integrations().delete(integration_id):
        return jsonify({"error": "Integration not found"}), 404

    return jsonify({"message": "Integration deleted successfully"}), 200
