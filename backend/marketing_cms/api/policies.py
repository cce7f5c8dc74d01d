from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.policy_page import PolicyPage
from marketing_cms.normalizers.policy import normalize_policy
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields
from marketing_cms.utils.localization import resolve_language
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock

policies_bp = Blueprint("policies", __name__)

POLICY_FIELDS = (
    "slug",
    "title_en", "title_ar", "title_es", "title_pt",
    "content_en", "content_ar", "content_es", "content_pt",
    "meta_description", "status",
)
REQUIRED_FIELDS = ("slug", "title_en", "content_en")
POLICY_STATUSES = {"published", "draft"}


def _policies():
    return CollectionGateway(
        PolicyPage,
        db.session,
        order_by=(PolicyPage.title_en.asc(),),
    )


def _validate_status(fields):
    if "status" in fields:
        if fields["status"] is None:
            del fields["status"]
        elif fields["status"] not in POLICY_STATUSES:
            return "Status must be published or draft"
    return None


# ------------------------
# Public
# ------------------------

@policies_bp.route("/", methods=["GET"])
@db_error_boundary("Server error")
def list_policies():
    lang = resolve_language(request.args.get("lang"))

    pages = _policies().all(status="published")

    return jsonify({"data": [normalize_policy(page, lang) for page in pages]}), 200


@policies_bp.route("/<slug>", methods=["GET"])
@db_error_boundary("Server error")
def get_policy(slug):
    lang = resolve_language(request.args.get("lang"))

    page = _policies().find_one(slug=slug, status="published")
    if page is None:
        return jsonify({"error": "Policy page not found"}), 404

    return jsonify(normalize_policy(page, lang)), 200


# ------------------------
# Admin
# ------------------------

@policies_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def admin_list_policies():
    pages = _policies().all()

    return jsonify({"data": [normalize_policy(page) for page in pages]}), 200


@policies_bp.route("/admin/<int:policy_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def admin_get_policy(policy_id):
    page = _policies().get(policy_id)
    if page is None:
        return jsonify({"error": "Policy page not found"}), 404

    return jsonify(normalize_policy(page)), 200


@policies_bp.route("/admin", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def create_policy():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Slug, title (English), and content (English) are required"}), 400

    fields = pick(data, POLICY_FIELDS)
    error = _validate_status(fields)
    if error:
        return jsonify({"error": error}), 400

    policies = _policies()
    if policies.find_one(slug=fields["slug"]):
        return jsonify({"error": "A policy page with this slug already exists"}), 400

    page = policies.create(fields)

    return jsonify({
        "success": True,
        "message": "Policy page created successfully",
        "data": normalize_policy(page),
    }), 201


@policies_bp.route("/admin/<int:policy_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def update_policy(policy_id):
    policies = _policies()
    page = policies.get(policy_id)
    if page is None:
        return jsonify({"error": "Policy page not found"}), 404

    enforce_optimistic_lock(page)

    fields = pick(request_data(), POLICY_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "Slug, title (English), and content (English) cannot be empty"}), 400

    error = _validate_status(fields)
    if error:
        return jsonify({"error": error}), 400

    # Slug collision check
    if "slug" in fields and fields["slug"] != page.slug:
        if policies.find_one(slug=fields["slug"]):
            return jsonify({"error": "A policy page with this slug already exists"}), 400

    policies.update(page, fields)

    return jsonify({
        "success": True,
        "message": "Policy page updated successfully",
        "data": normalize_policy(page),
    }), 200


@policies_bp.route("/admin/<int:policy_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def delete_policy(policy_id):
    if not _policies().delete(policy_id):
        return jsonify({"error": "Policy page not found"}), 404

    return jsonify({
        "success": True,
        "message": "Policy page deleted successfully",
    }), 200
