from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.video_gallery import VideoGallery
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.normalizers.video import normalize_video
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import request_data, pick, missing_fields, cleared_fields, to_int, to_bool
from marketing_cms.utils.localization import resolve_language
from marketing_cms.utils.media import pop_upload, delete_file, discard_on_failure
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request

videos_bp = Blueprint("video_galleries", __name__)

VIDEO_FIELDS = (
    "title_en", "title_ar", "title_es", "title_pt",
    "description_en", "description_ar", "description_es", "description_pt",
    "video_url", "thumbnail_url", "logo_url",
    "duration", "display_order", "is_active",
)
REQUIRED_FIELDS = ("title_en", "video_url")


def _videos():
    return CollectionGateway(
        VideoGallery,
        db.session,
        order_by=(VideoGallery.display_order.asc(), VideoGallery.id.asc()),
    )


def _coerce(fields):
    if "duration" in fields:
        fields["duration"] = to_int(fields["duration"])
    if "display_order" in fields:
        fields["display_order"] = to_int(fields["display_order"], 0)
    if "is_active" in fields:
        fields["is_active"] = to_bool(fields["is_active"])


# ------------------------
# Public
# ------------------------

@videos_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch videos")
def list_videos():
    lang = resolve_language(request.args.get("lang"))
    page_request = parse_page_request(request.args)

    videos, meta = _videos().page(page_request, is_active=True)

    return jsonify(normalize_pagination(
        videos,
        lambda video: normalize_video(video, lang),
        meta,
    )), 200


@videos_bp.route("/<int:video_id>", methods=["GET"])
@db_error_boundary("Failed to fetch videos")
def get_video(video_id):
    lang = resolve_language(request.args.get("lang"))

    video = _videos().find_one(id=video_id, is_active=True)
    if video is None:
        return jsonify({"error": "Video not found"}), 404

    return jsonify(normalize_video(video, lang)), 200


# ------------------------
# Admin
# ------------------------

@videos_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch videos")
def admin_list_videos():
    page_request = parse_page_request(request.args)

    videos, meta = _videos().page(page_request)

    return jsonify(normalize_pagination(videos, normalize_video, meta)), 200


@videos_bp.route("/admin/<int:video_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch videos")
def admin_get_video(video_id):
    video = _videos().get(video_id)
    if video is None:
        return jsonify({"error": "Video not found"}), 404

    return jsonify(normalize_video(video)), 200


@videos_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save video")
def create_video():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "Title (English) and video URL are required"}), 400

    fields = pick(data, VIDEO_FIELDS)
    _coerce(fields)

    thumbnail = pop_upload(request.files, "thumbnail", "videos", "video")
    if thumbnail:
        fields["thumbnail_url"] = thumbnail

    with discard_on_failure(thumbnail):
        video = _videos().create(fields)

    return jsonify(normalize_video(video)), 201


@videos_bp.route("/admin/<int:video_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save video")
def update_video(video_id):
    videos = _videos()
    video = videos.get(video_id)
    if video is None:
        return jsonify({"error": "Video not found"}), 404

    enforce_optimistic_lock(video)

    fields = pick(request_data(), VIDEO_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "Title (English) and video URL cannot be empty"}), 400

    _coerce(fields)

    old_thumbnail = video.thumbnail_url
    thumbnail = pop_upload(request.files, "thumbnail", "videos", "video")
    if thumbnail:
        fields["thumbnail_url"] = thumbnail

    with discard_on_failure(thumbnail):
        videos.update(video, fields)

    if thumbnail and old_thumbnail:
        delete_file(old_thumbnail)

    return jsonify(normalize_video(video)), 200


@videos_bp.route("/admin/<int:video_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete video")
def delete_video(video_id):
    if not _videos().delete(video_id):
        return jsonify({"error": "Video not found"}), 404

    return jsonify({"message": "Video deleted successfully"}), 200
