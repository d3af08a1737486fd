"""Inquiry comments mounted under ``/api/study/<study_id>/comment``."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from models import db
from services import comment as comment_service
from services import metoo as metoo_service
from utils.auth import auth_required, get_current_user
from utils.request_validation import parse_json_request

comment_bp = Blueprint("comment", __name__)


@comment_bp.route("", methods=["GET"])
def list_comments(study_id: str):
    """Threads in creation order; ``metoo`` reflects the caller, if any."""

    threads = comment_service.list_comments(db.session, study_id, get_current_user())
    return jsonify({"message": "OK", "data": threads}), HTTPStatus.OK


@comment_bp.route("", methods=["POST"])
@auth_required
def create_comment(study_id: str):
    payload = parse_json_request(request)
    comment = comment_service.create_comment(
        db.session,
        get_current_user(),
        study_id,
        payload.get("content"),
        payload.get("replyTo"),
    )
    return jsonify({"message": "Comment created.", "data": comment.to_dict()}), HTTPStatus.CREATED


@comment_bp.route("/<comment_id>", methods=["PATCH"])
@auth_required
def update_comment(study_id: str, comment_id: str):
    payload = parse_json_request(request)
    comment = comment_service.update_comment(
        db.session, get_current_user(), study_id, comment_id, payload.get("content")
    )
    return jsonify({"message": "Comment updated.", "data": comment.to_dict()}), HTTPStatus.OK


@comment_bp.route("/<comment_id>", methods=["DELETE"])
@auth_required
def delete_comment(study_id: str, comment_id: str):
    removed = comment_service.delete_comment(db.session, get_current_user(), study_id, comment_id)
    message = "Comment deleted." if removed else "Comment hidden; its replies remain."
    return jsonify({"message": message}), HTTPStatus.OK


@comment_bp.route("/<comment_id>/metoo", methods=["POST"])
@auth_required
def register_metoo(study_id: str, comment_id: str):
    metoo = metoo_service.register_metoo(db.session, get_current_user(), study_id, comment_id)
    count = metoo_service.count_metoos(db.session, metoo.comment_id)
    return jsonify({"message": "Metoo registered.", "metooCount": count}), HTTPStatus.CREATED


@comment_bp.route("/<comment_id>/metoo", methods=["DELETE"])
@auth_required
def delete_metoo(study_id: str, comment_id: str):
    comment = metoo_service.delete_metoo(db.session, get_current_user(), study_id, comment_id)
    count = metoo_service.count_metoos(db.session, comment.id)
    return jsonify({"message": "Metoo removed.", "metooCount": count}), HTTPStatus.OK
