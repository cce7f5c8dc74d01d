from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.integration_request import IntegrationRequest, INTEGRATION_REQUEST_STATUSES
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data
from marketing_cms.utils.pagination import parse_page_request
from marketing_cms.utils.sanitize import sanitize_email

integration_requests_bp = Blueprint("integration_requests", __name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_COMPANY_NAME = 255
MAX_MESSAGE = 2000


def _requests():
    return CollectionGateway(
        IntegrationRequest,
        db.session,
        order_by=(IntegrationRequest.created_at.desc(), IntegrationRequest.id.desc()),
    )


def _optional_text(data, field):
    value = data.get(field)
    if value is None:
        return None
    return str(value).strip() or None


def validate_request(data):
    """Returns (fields, errors) for a public integration request."""
    errors = []

    email = sanitize_email(data.get("email"))
    if not email:
        errors.append({"field": "email", "message": "Valid email is required"})

    company_name = _optional_text(data, "company_name")
    if company_name and len(company_name) > MAX_COMPANY_NAME:
        errors.append({
            "field": "company_name",
            "message": f"Company name must be at most {MAX_COMPANY_NAME} characters",
        })

    message = _optional_text(data, "message")
    if message and len(message) > MAX_MESSAGE:
        errors.append({
            "field": "message",
            "message": f"Message must be at most {MAX_MESSAGE} characters",
        })

    fields = {"email": email, "company_name": company_name, "message": message}
    return fields, errors


@integration_requests_bp.route("/", methods=["POST"])
@db_error_boundary("Server error")
def submit_request():
    fields, errors = validate_request(request_data())
    if errors:
        return jsonify({"error": errors[0]["message"], "errors": errors}), 400

    integration_request = _requests().create(fields)

    return jsonify({
        "message": "Integration request submitted successfully",
        "id": integration_request.id,
    }), 201


# ------------------------
# Admin
# ------------------------

@integration_requests_bp.route("/admin", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def list_requests():
    page_request = parse_page_request(
        request.args,
        default_limit=DEFAULT_LIMIT,
        max_limit=MAX_LIMIT,
    )

    items, meta = _requests().page(
        page_request,
        status=request.args.get("status") or None,
    )

    return jsonify(normalize_pagination(items, lambda item: item.to_dict(), meta)), 200


@integration_requests_bp.route("/admin/<int:request_id>", methods=["PATCH"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def update_request_status(request_id):
    status = request_data().get("status")
    if status not in INTEGRATION_REQUEST_STATUSES:
        return jsonify({"error": "Invalid status"}), 400

    integration_requests = _requests()
    integration_request = integration_requests.get(request_id)
    if integration_request is None:
        return jsonify({"error": "Integration request not found"}), 404

    integration_requests.update(integration_request, {"status": status})

    return jsonify(integration_request.to_dict()), 200


@integration_requests_bp.route("/admin/<int:request_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def delete_request(request_id):
    if not _requests().delete(request_id):
        return jsonify({"error": "Integration request not found"}), 404

    return jsonify({"message": "Integration request deleted successfully"}), 200
