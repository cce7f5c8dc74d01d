from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.team_member import TeamMember
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.normalizers.team import normalize_team_member
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields, to_int
from marketing_cms.utils.localization import resolve_language
from marketing_cms.utils.media import pop_upload, delete_file, discard_on_failure
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request

team_bp = Blueprint("team", __name__)

TEAM_FIELDS = (
    "name_en", "name_ar", "name_es", "name_pt",
    "title_en", "title_ar", "title_es", "title_pt",
    "bio_en", "bio_ar", "bio_es", "bio_pt",
    "department", "email", "linkedin", "image",
    "display_order", "status",
)
REQUIRED_FIELDS = ("name_en", "title_en", "department")
TEAM_STATUSES = {"active", "inactive"}


def _members():
    return CollectionGateway(
        TeamMember,
        db.session,
        order_by=(TeamMember.display_order.asc(), TeamMember.created_at.desc(), TeamMember.id.desc()),
    )


def _coerce(fields):
    if "display_order" in fields:
        fields["display_order"] = to_int(fields["display_order"], 0)

    if "status" in fields:
        if fields["status"] is None:
            del fields["status"]
        elif fields["status"] not in TEAM_STATUSES:
            return "Status must be active or inactive"

    return None


# ------------------------
# Public
# ------------------------

@team_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch team members")
def list_members():
    lang = resolve_language(request.args.get("lang"))

    members = _members().all(status="active")

    return jsonify([normalize_team_member(member, lang) for member in members]), 200


@team_bp.route("/<int:member_id>", methods=["GET"])
@db_error_boundary("Failed to fetch team members")
def get_member(member_id):
    lang = resolve_language(request.args.get("lang"))

    member = _members().find_one(id=member_id, status="active")
    if member is None:
        return jsonify({"error": "Team member not found"}), 404

    return jsonify(normalize_team_member(member, lang)), 200


# ------------------------
# Admin
# ------------------------

@team_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch team members")
def admin_list_members():
    page_request = parse_page_request(request.args)

    members, meta = _members().page(
        page_request,
        department=request.args.get("department") or None,
    )

    return jsonify(normalize_pagination(members, normalize_team_member, meta)), 200


@team_bp.route("/admin/<int:member_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch team members")
def admin_get_member(member_id):
    member = _members().get(member_id)
    if member is None:
        return jsonify({"error": "Team member not found"}), 404

    return jsonify(normalize_team_member(member)), 200


@team_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save team member")
def create_member():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Name (English), title (English), and department are required"}), 400

    fields = pick(data, TEAM_FIELDS)
    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    image = pop_upload(request.files, "image", "team", "team")
    if image:
        fields["image"] = image

    with discard_on_failure(image):
        member = _members().create(fields)

    return jsonify(normalize_team_member(member)), 201


@team_bp.route("/admin/<int:member_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save team member")
def update_member(member_id):
    members = _members()
    member = members.get(member_id)
    if member is None:
        return jsonify({"error": "Team member not found"}), 404

    enforce_optimistic_lock(member)

    fields = pick(request_data(), TEAM_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "Name (English), title (English), and department cannot be empty"}), 400

    error = _coerce(fields)
    if error:
        return jsonify({"error": error}), 400

    old_image = member.image
    image = pop_upload(request.files, "image", "team", "team")
    if image:
        fields["image"] = image

    with discard_on_failure(image):
        members.update(member, fields)

    if image and old_image:
        delete_file(old_image)

    return jsonify(normalize_team_member(member)), 200


@team_bp.route("/admin/<int:member_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete team member")
def delete_member(member_id):
    if not _members().delete(member_id):
        return jsonify({"error": "Team member not found"}), 404

    return jsonify({"message": "Team member deleted successfully"}), 200
