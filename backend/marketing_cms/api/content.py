from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from marketing_cms.application.site_content import load_documents, replace_documents, upsert_document
from marketing_cms.extensions import db
from marketing_cms.models.site_content import SiteContent
from marketing_cms.utils.decorators import roles_required, db_error_boundary

content_bp = Blueprint("content", __name__)


@content_bp.route("/", methods=["GET"])
@db_error_boundary("Server error")
def get_all_content():
    return jsonify(load_documents(db.session)), 200


@content_bp.route("/<page>", methods=["GET"])
@db_error_boundary("Server error")
def get_page_content(page):
    row = SiteContent.query.filter_by(page=page).first()
    if row is None:
        return jsonify({"error": "Page content not found"}), 404

    return jsonify(row.content), 200


# ------------------------
# Admin
# ------------------------

@content_bp.route("/admin/all", methods=["GET"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Server error")
def admin_get_all_content():
    return jsonify(load_documents(db.session)), 200


@content_bp.route("/admin/update", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save content", envelope="success")
def replace_content():
    # A non-object body raises ValidationError, answered as a plain {"error"} 400
    content = replace_documents(db.session, request.get_json(silent=True))

    return jsonify({
        "success": True,
        "message": "Content updated successfully",
        "content": content,
    }), 200


@content_bp.route("/admin/<page>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
@db_error_boundary("Failed to save content", envelope="success")
def update_page_content(page):
    saved = upsert_document(db.session, page, request.get_json(silent=True))

    return jsonify({
        "success": True,
        "message": f"Page '{page}' updated successfully",
        "content": saved,
    }), 200
