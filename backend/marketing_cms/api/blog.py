# marketing_cms/api/blog.py
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.collections import CollectionGateway
from marketing_cms.extensions import db
from marketing_cms.models.blog_post import BlogPost
from marketing_cms.normalizers.blog import normalize_blog_post
from marketing_cms.normalizers.pagination import normalize_pagination
from marketing_cms.utils.decorators import roles_required, db_error_boundary
from marketing_cms.utils.forms import (
    request_data,
    pick,
    missing_fields,
    cleared_fields,
    unique_slug,
)
from marketing_cms.utils.localization import SUPPORTED_LANGUAGES, resolve_language
from marketing_cms.utils.media import pop_upload, delete_file, discard_on_failure
from marketing_cms.utils.optimistic_lock import enforce_optimistic_lock
from marketing_cms.utils.pagination import parse_page_request
from marketing_cms.utils.stats import count_windows, count_by

blog_bp = Blueprint("blog", __name__)

BLOG_FIELDS = (
    "title_en", "title_ar", "title_es", "title_pt",
    "content_en", "content_ar", "content_es", "content_pt",
    "status", "language",
)
REQUIRED_FIELDS = ("title_en", "content_en")
BLOG_STATUSES = {"draft", "published"}


def _posts():
    return CollectionGateway(
        BlogPost,
        db.session,
        order_by=(BlogPost.created_at.desc(), BlogPost.id.desc()),
    )


def _validate_choices(fields):
    if fields.get("status") is not None and fields["status"] not in BLOG_STATUSES:
        return "Status must be draft or published"
    if fields.get("language") is not None and fields["language"] not in SUPPORTED_LANGUAGES:
        return "Unsupported language"
    return None


# ------------------------
# Public
# ------------------------

@blog_bp.route("/", methods=["GET"])
@db_error_boundary("Failed to fetch blog posts")
def list_posts():
    lang = resolve_language(request.args.get("lang"))
    page_request = parse_page_request(request.args)

    posts, meta = _posts().page(page_request, status="published")

    return jsonify(normalize_pagination(
        posts,
        lambda post: normalize_blog_post(post, lang),
        meta,
    )), 200


@blog_bp.route("/<slug>", methods=["GET"])
@db_error_boundary("Failed to fetch blog posts")
def get_post(slug):
    lang = resolve_language(request.args.get("lang"))

    post = _posts().find_one(slug=slug, status="published")
    if post is None:
        return jsonify({"error": "Post not found"}), 404

    return jsonify(normalize_blog_post(post, lang)), 200


# ------------------------
# Admin
# ------------------------

@blog_bp.route("/stats", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch stats", envelope="success")
def blog_stats():
    stats = count_windows(db.session, BlogPost)
    stats["byStatus"] = count_by(db.session, BlogPost.status)
    stats["byLanguage"] = count_by(db.session, BlogPost.language)

    return jsonify({"success": True, "stats": stats}), 200


@blog_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch blog posts")
def admin_list_posts():
    page_request = parse_page_request(request.args)

    posts, meta = _posts().page(page_request, status=request.args.get("status"))

    return jsonify(normalize_pagination(posts, normalize_blog_post, meta)), 200


@blog_bp.route("/admin/<int:post_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to fetch blog posts")
def admin_get_post(post_id):
    post = _posts().get(post_id)
    if post is None:
        return jsonify({"error": "Post not found"}), 404

    return jsonify(normalize_blog_post(post)), 200


@blog_bp.route("/admin/create", methods=["POST"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save blog post")
def create_post():
    data = request_data()

    if missing_fields(data, REQUIRED_FIELDS):
        return jsonify({"error": "English title and content are required"}), 400

    fields = pick(data, BLOG_FIELDS)
    error = _validate_choices(fields)
    if error:
        return jsonify({"error": error}), 400

    fields["status"] = fields.get("status") or "draft"
    fields["language"] = fields.get("language") or "en"
    fields["slug"] = unique_slug(fields["title_en"])

    image = pop_upload(request.files, "featured_image", "blog", "blog")
    if image:
        fields["featured_image"] = image

    with discard_on_failure(image):
        post = _posts().create(fields)

    return jsonify(normalize_blog_post(post)), 201


@blog_bp.route("/admin/<int:post_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save blog post")
def update_post(post_id):
    posts = _posts()
    post = posts.get(post_id)
    if post is None:
        return jsonify({"error": "Post not found"}), 404

    enforce_optimistic_lock(post)

    fields = pick(request_data(), BLOG_FIELDS)
    if cleared_fields(fields, REQUIRED_FIELDS):
        return jsonify({"error": "English title and content cannot be empty"}), 400

    # Blank status/language keep the current value
    for key in ("status", "language"):
        if key in fields and fields[key] is None:
            del fields[key]

    error = _validate_choices(fields)
    if error:
        return jsonify({"error": error}), 400

    old_image = post.featured_image
    image = pop_upload(request.files, "featured_image", "blog", "blog")
    if image:
        fields["featured_image"] = image

    with discard_on_failure(image):
        posts.update(post, fields)

    if image and old_image:
        delete_file(old_image)

    return jsonify(normalize_blog_post(post)), 200


@blog_bp.route("/admin/<int:post_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to delete blog post")
def delete_post(post_id):
    if not _posts().delete(post_id):
        return jsonify({"error": "Post not found"}), 404

    return jsonify({"message": "Post deleted successfully"}), 200
