from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import func

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.testimonial import Testimonial
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.normalizers.testimonial import normalize_testimonial
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields, to_int, to_bool
from marketing_cms.utils.localization import resolve_language
from marketing_cms.utils.media import (
    LOGO_EXTENSIONS,
    UploadError,
    pop_upload,
    delete_file,
    discard_on_failure,
)
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request
from marketing_cms.utils.stats import count_windows, count_by

testimonials_bp = Blueprint("testimonials", __name__)

TESTIMONIAL_FIELDS = (
    "name", "company",
    "headline", "headline_ar", "headline_es", "headline_pt",
    "content", "content_ar", "content_es", "content_pt",
    "rating", "is_active",
)
REQUIRED_FIELDS = ("name", "company", "content")

# upload field -> column
UPLOAD_FIELDS = ("image", "company_logo")


def _testimonials():
    return CollectionGateway(
        Testimonial,
        db.session,
        order_by=(Testimonial.created_at.desc(), Testimonial.id.desc()),
    )


def _coerce(fields):
    """Form posts send every value as a string."""
    if "rating" in fields:
        rating = to_int(fields["rating"])
        if rating is None or not 1 <= rating <= 5:
            return "Rating must be an integer between 1 and 5"
        fields["rating"] = rating

    if "is_active" in fields:
        fields["is_active"] = to_bool(fields["is_active"])

    return None


def _attach_uploads(fields):
    saved = {}
    try:
        for field in UPLOAD_FIELDS:
            url = pop_upload(request.files, field, "testimonials", "testimonial", LOGO_EXTENSIONS)
            if url:
                saved[field] = url
    except UploadError:
        for url in saved.values():
            delete_file(url)
        raise
    fields.update(saved)
    return saved


# ------------------------
# Public
# ------------------------

@testimonials_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch testimonials")
def list_testimonials():
    lang = resolve_language(request.args.get("lang"))
    page_request = parse_page_request(request.args)

    items, meta = _testimonials().page(page_request, is_active=True)

    return jsonify(normalize_pagination(
        items,
        lambda item: normalize_testimonial(item, lang),
        meta,
    )), 200


@testimonials_bp.route("/<int:testimonial_id>", methods=["GET"])
@db_error_boundary("Failed to fetch testimonials")
def get_testimonial(testimonial_id):
    lang = resolve_language(request.args.get("lang"))

    testimonial = _testimonials().find_one(id=testimonial_id, is_active=True)
    if testimonial is None:
        return jsonify({"error": "Testimonial not found"}), 404

    return jsonify(normalize_testimonial(testimonial, lang)), 200


# ------------------------
# Admin
# ------------------------

@testimonials_bp.route("/stats", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch stats", envelope="success")
def testimonial_stats():
    stats = count_windows(db.session, Testimonial)
    stats["byRating"] = count_by(db.session, Testimonial.rating)

    average = db.session.query(func.avg(Testimonial.rating)).scalar()
    stats["averageRating"] = round(float(average), 2) if average is not None else 0

    return jsonify({"success": True, "stats": stats}), 200


@testimonials_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch testimonials")
def admin_list_testimonials():
    page_request = parse_page_request(request.args)

    items, meta = _testimonials().page(page_request)

    return jsonify(normalize_pagination(items, normalize_testimonial, meta)), 200


@testimonials_bp.route("/admin/<int:testimonial_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch testimonials")
def admin_get_testimonial(testimonial_id):
    testimonial = _testimonials().get(testimonial_id)
    if testimonial is None:
        return jsonify({"error": "Testimonial not found"}), 404

    return jsonify(normalize_testimonial(testimonial)), 200


@testimonials_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save testimonial")
def create_testimonial():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Name, company, and content are required"}), 400

    fields = pick(data, TESTIMONIAL_FIELDS)
    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    saved = _attach_uploads(fields)
    with discard_on_failure(*saved.values()):
        testimonial = _testimonials().create(fields)

    return jsonify(normalize_testimonial(testimonial)), 201


@testimonials_bp.route("/admin/<int:testimonial_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save testimonial")
def update_testimonial(testimonial_id):
    testimonials = _testimonials()
    testimonial = testimonials.get(testimonial_id)
    if testimonial is None:
        return jsonify({"error": "Testimonial not found"}), 404

    enforce_optimistic_lock(testimonial)

    fields = pick(request_data(), TESTIMONIAL_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "Name, company, and content cannot be empty"}), 400

    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    replaced = {field: getattr(testimonial, field) for field in UPLOAD_FIELDS}
    saved = _attach_uploads(fields)

    with discard_on_failure(*saved.values()):
        testimonials.update(testimonial, fields)

    for field in saved:
        delete_file(replaced[field])

    return jsonify(normalize_testimonial(testimonial)), 200


@testimonials_bp.route("/admin/<int:testimonial_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete testimonial")
def delete_testimonial(testimonial_id):
    if not _testimonials().delete(testimonial_id):
        return jsonify({"error": "Testimonial not found"}), 404

    return jsonify({"message": "Testimonial deleted successfully"}), 200
