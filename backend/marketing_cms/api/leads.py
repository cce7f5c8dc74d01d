from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.lead import Lead
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data
from marketing_cms.utils.pagination import parse_page_request
from marketing_cms.utils.rate_limit import rate_limit
from marketing_cms.utils.sanitize import sanitize_email, sanitize_text, sanitize_phone, sanitize_path
from marketing_cms.utils.stats import count_windows, count_by

leads_bp = Blueprint("leads", __name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def _leads():
    return CollectionGateway(
        Lead,
        db.session,
        order_by=(Lead.created_at.desc(), Lead.id.desc()),
    )


def _first(data, *keys):
    """Forms post snake_case, the site widgets post camelCase."""
    for key in keys:
        if data.get(key):
            return data[key]
    return None


def clean_lead(data):
    """
    Sanitize a public lead submission.

    Returns (fields, error). Text is trimmed, capped and HTML-escaped;
    the email is validated and lower-cased.
    """
    if not data.get("name") or not data.get("email"):
        return None, "Name and email are required"

    email = sanitize_email(data["email"])
    if not email:
        return None, "Invalid email address"

    name = sanitize_text(data["name"], 100)
    if not name:
        return None, "Name and email are required"

    restaurant_type = _first(data, "restaurant_type", "restaurantType")
    form_type = _first(data, "form_type", "formType")
    source_page = _first(data, "source_page", "source")

    return {
        "name": name,
        "email": email,
        "company": sanitize_text(data["company"], 200) if data.get("company") else None,
        "phone": sanitize_phone(data.get("phone")),
        "message": sanitize_text(data["message"], 2000) if data.get("message") else None,
        "restaurant_type": sanitize_text(restaurant_type, 100) if restaurant_type else None,
        "form_type": sanitize_text(form_type, 50) if form_type else "contact",
        "source_page": sanitize_path(source_page),
    }, None


# ------------------------
# Public
# ------------------------

@leads_bp.route("/", methods=["POST"])
@rate_limit("lead", envelope="success")
@db_error_boundary("Failed to capture lead", envelope="success")
def capture_lead():
    fields, error = clean_lead(request_data())
    if error:
        return jsonify({"success": False, "error": error}), 400

    lead = _leads().create(fields)
    current_app.logger.info("Lead captured id=%s form_type=%s", lead.id, lead.form_type)

    return jsonify({
        "success": True,
        "message": "Lead captured successfully",
        "leadId": lead.id,
    }), 201


# ------------------------
# Admin
# ------------------------

@leads_bp.route("/", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch leads", envelope="success")
def list_leads():
    page_request = parse_page_request(
        request.args,
        default_limit=DEFAULT_LIMIT,
        max_limit=MAX_LIMIT,
    )

    leads, meta = _leads().page(
        page_request,
        form_type=request.args.get("form_type") or None,
    )

    body = normalize_pagination(leads, lambda lead: lead.to_dict(), meta, items_key="leads")
    body["success"] = True
    return jsonify(body), 200


@leads_bp.route("/stats", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch stats", envelope="success")
def lead_stats():
    stats = count_windows(db.session, Lead)
    stats["byType"] = count_by(db.session, Lead.form_type)
    stats["bySource"] = count_by(
        db.session,
        Lead.source_page,
        "source",
        limit=5,
        exclude_null=True,
    )

    return jsonify({"success": True, "stats": stats}), 200


@leads_bp.route("/<int:lead_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch lead", envelope="success")
def get_lead(lead_id):
    lead = _leads().get(lead_id)
    if lead is None:
        return jsonify({"success": False, "error": "Lead not found"}), 404

    return jsonify({"success": True, "lead": lead.to_dict()}), 200


@leads_bp.route("/<int:lead_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete lead", envelope="success")
def delete_lead(lead_id):
    if not _leads().delete(lead_id):
        return jsonify({"success": False, "error": "Lead not found"}), 404

    return jsonify({"success": True, "message": "Lead deleted successfully"}), 200
