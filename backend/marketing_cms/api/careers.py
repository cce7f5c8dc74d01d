from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.job_application import JobApplication, JOB_APPLICATION_STATUSES
from marketing_cms.models.job_listing import JobListing, JOB_LISTING_STATUSES
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields
from marketing_cms.utils.media import (
    DOCUMENT_EXTENSIONS,
    pop_upload,
    delete_file,
    discard_on_failure,
)
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request
from marketing_cms.utils.rate_limit import rate_limit
from marketing_cms.utils.sanitize import sanitize_email, sanitize_text, sanitize_phone, sanitize_path
from marketing_cms.utils.stats import count_windows, count_by

careers_bp = Blueprint("careers", __name__)

LISTING_FIELDS = (
    "title", "department", "location", "type",
    "description", "requirements", "application_link", "status",
)
REQUIRED_FIELDS = ("title", "department", "location")

# optional free-text column -> max length
APPLICATION_TEXT_FIELDS = {
    "address": 200,
    "city": 100,
    "country": 100,
    "expertise": 200,
    "message": 2000,
}


def _listings():
    return CollectionGateway(
        JobListing,
        db.session,
        order_by=(JobListing.created_at.desc(), JobListing.id.desc()),
    )


def _applications():
    return CollectionGateway(
        JobApplication,
        db.session,
        order_by=(JobApplication.created_at.desc(), JobApplication.id.desc()),
    )


def _validate_status(fields):
    if "status" in fields:
        if fields["status"] is None:
            del fields["status"]
        elif fields["status"] not in JOB_LISTING_STATUSES:
            return "Status must be active or inactive"
    return None


def _first(data, *keys):
    """The careers page posts camelCase, admin tools post snake_case."""
    for key in keys:
        if data.get(key):
            return data[key]
    return None


def _text(value, max_length):
    return sanitize_text(value, max_length) or None


def clean_application(data):
    """
    Sanitize a public job application.

    Returns (fields, error). Names and email are required; every other
    field is optional, trimmed, capped and HTML-escaped.
    """
    first_name = _text(_first(data, "first_name", "firstName"), 100)
    last_name = _text(_first(data, "last_name", "lastName"), 100)
    raw_email = data.get("email")

    if not first_name or not last_name or not raw_email:
        return None, "First name, last name, and email are required"

    email = sanitize_email(raw_email)
    if not email:
        return None, "Invalid email address"

    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": sanitize_phone(data.get("phone")),
        "linkedin": sanitize_path(data.get("linkedin")),
    }
    for column, max_length in APPLICATION_TEXT_FIELDS.items():
        fields[column] = _text(data.get(column), max_length)

    return fields, None


# ------------------------
# Public
# ------------------------

@careers_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch job listings")
def list_listings():
    listings = _listings().all(status="active")

    return jsonify([listing.to_dict() for listing in listings]), 200


@careers_bp.route("/<int:listing_id>", methods=["GET"])
@db_error_boundary("Failed to fetch job listings")
def get_listing(listing_id):
    listing = _listings().find_one(id=listing_id, status="active")
    if listing is None:
        return jsonify({"error": "Job listing not found"}), 404

    return jsonify(listing.to_dict()), 200


@careers_bp.route("/apply", methods=["POST"])
@rate_limit("apply", envelope="success")
@db_error_boundary("Failed to submit application", envelope="success")
def apply():
    fields, error = clean_application(request_data())
    if error:
        return jsonify({"success": False, "error": error}), 400

    cv = pop_upload(request.files, "cv", "applications", "cv", DOCUMENT_EXTENSIONS, kind="document")
    fields["cv_path"] = cv

    with discard_on_failure(cv):
        application = _applications().create(fields)

    current_app.logger.info("Job application received id=%s", application.id)

    return jsonify({
        "success": True,
        "message": "Application submitted successfully",
        "applicationId": application.id,
    }), 201


# ------------------------
# Admin: stats
# ------------------------

@careers_bp.route("/stats", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch stats", envelope="success")
def careers_stats():
    listings = {
        "total": _listings().count(),
        "byDepartment": count_by(db.session, JobListing.department),
        "byLocation": count_by(db.session, JobListing.location),
        "byType": count_by(db.session, JobListing.type),
        "byStatus": count_by(db.session, JobListing.status),
    }

    applications = count_windows(db.session, JobApplication)
    applications["byStatus"] = count_by(db.session, JobApplication.status)

    return jsonify({
        "success": True,
        "stats": {"listings": listings, "applications": applications},
    }), 200


# ------------------------
# Admin: listings
# ------------------------

@careers_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch job listings")
def admin_list_listings():
    page_request = parse_page_request(request.args)

    listings, meta = _listings().page(
        page_request,
        status=request.args.get("status") or None,
        department=request.args.get("department") or None,
    )

    return jsonify(normalize_pagination(listings, lambda listing: listing.to_dict(), meta)), 200


@careers_bp.route("/admin/<int:listing_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch job listings")
def admin_get_listing(listing_id):
    listing = _listings().get(listing_id)
    if listing is None:
        return jsonify({"error": "Job listing not found"}), 404

    return jsonify(listing.to_dict()), 200


@careers_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save job listing")
def create_listing():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Title, department, and location are required"}), 400

    fields = pick(data, LISTING_FIELDS)
    error = _validate_status(fields)
    if error:
        return jsonify({"error": error}), 400

    if fields.get("type") is None:
        fields.pop("type", None)

    listing = _listings().create(fields)

    return jsonify(listing.to_dict()), 201


@careers_bp.route("/admin/<int:listing_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save job listing")
def update_listing(listing_id):
    listings = _listings()
    listing = listings.get(listing_id)
    if listing is None:
        return jsonify({"error": "Job listing not found"}), 404

    enforce_optimistic_lock(listing)

    fields = pick(request_data(), LISTING_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS + ("type",)):
        return jsonify({"error": "Title, department, location, and type cannot be empty"}), 400

    error = _validate_status(fields)
    if error:
        return jsonify({"error": error}), 400

    listings.update(listing, fields)

    return jsonify(listing.to_dict()), 200


@careers_bp.route("/admin/<int:listing_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete job listing")
def delete_listing(listing_id):
    if not _listings().delete(listing_id):
        return jsonify({"error": "Job listing not found"}), 404

    return jsonify({"message": "Job listing deleted successfully"}), 200


# ------------------------
# Admin: applications
# ------------------------

@careers_bp.route("/applications", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch applications")
def list_applications():
    page_request = parse_page_request(request.args)

    applications, meta = _applications().page(
        page_request,
        status=request.args.get("status") or None,
    )

    return jsonify(normalize_pagination(applications, lambda item: item.to_dict(), meta)), 200


@careers_bp.route("/applications/<int:application_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to update application", envelope="success")
def update_application_status(application_id):
    status = request_data().get("status")
    if status not in JOB_APPLICATION_STATUSES:
        return jsonify({"success": False, "error": "Invalid status"}), 400

    applications = _applications()
    application = applications.get(application_id)
    if application is None:
        return jsonify({"success": False, "error": "Application not found"}), 404

    applications.update(application, {"status": status})

    return jsonify({"success": True, "application": application.to_dict()}), 200


@careers_bp.route("/applications/<int:application_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete application", envelope="success")
def delete_application(application_id):
    applications = _applications()
    application = applications.get(application_id)
    if application is None:
        return jsonify({"success": False, "error": "Application not found"}), 404

    cv_path = application.cv_path
    applications.delete(application_id)
    delete_file(cv_path)

    return jsonify({"success": True, "message": "Application deleted successfully"}), 200
