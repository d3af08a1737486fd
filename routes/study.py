"""Study blueprint: listing, CRUD and bookmarks."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from models import db
from services import bookmark as bookmark_service
from services import study as study_service
from utils.auth import auth_required, get_current_user
from utils.pagination import parse_page_args
from utils.request_validation import parse_json_request

study_bp = Blueprint("study", __name__)


@study_bp.route("", methods=["GET"])
def list_studies():
    """Return a page of studies matching the query filters."""

    page_no, limit = parse_page_args(request.args)
    studies, total, pages = study_service.list_studies(db.session, request.args, page_no, limit)
    return (
        jsonify(
            {
                "message": "OK",
                "studies": [study.to_dict() for study in studies],
                "pageNo": page_no,
                "pages": pages,
                "total": total,
            }
        ),
        HTTPStatus.OK,
    )


@study_bp.route("", methods=["POST"])
@auth_required
def create_study():
    payload = parse_json_request(request)
    study = study_service.create_study(db.session, get_current_user(), payload)
    current_app.logger.info("Study %s created by %s", study.id, study.host_id)
    return jsonify({"message": "Study created.", "id": study.id}), HTTPStatus.CREATED


@study_bp.route("/<study_id>", methods=["GET"])
def get_study(study_id: str):
    study = study_service.view_study(db.session, study_id)
    data = study.to_dict()
    user = get_current_user()
    data["bookmarked"] = bool(user and bookmark_service.is_bookmarked(db.session, user, study))
    return jsonify({"message": "OK", "data": data}), HTTPStatus.OK


@study_bp.route("/<study_id>", methods=["PATCH"])
@auth_required
def update_study(study_id: str):
    payload = parse_json_request(request)
    study = study_service.update_study(db.session, get_current_user(), study_id, payload)
    return jsonify({"message": "Study updated.", "data": study.to_dict()}), HTTPStatus.OK


@study_bp.route("/<study_id>", methods=["DELETE"])
@auth_required
def delete_study(study_id: str):
    study_service.delete_study(db.session, get_current_user(), study_id)
    current_app.logger.info("Study %s deleted", study_id)
    return jsonify({"message": "Study deleted."}), HTTPStatus.OK


@study_bp.route("/<study_id>/bookmark", methods=["POST"])
@auth_required
def add_bookmark(study_id: str):
    study = bookmark_service.add_bookmark(db.session, get_current_user(), study_id)
    return (
        jsonify({"message": "Bookmarked.", "bookmarkCount": study.bookmark_count}),
        HTTPStatus.CREATED,
    )


@study_bp.route("/<study_id>/bookmark", methods=["DELETE"])
@auth_required
def remove_bookmark(study_id: str):
    study = bookmark_service.remove_bookmark(db.session, get_current_user(), study_id)
    return (
        jsonify({"message": "Bookmark removed.", "bookmarkCount": study.bookmark_count}),
        HTTPStatus.OK,
    )
