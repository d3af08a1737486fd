"""Notice board blueprint; writes are restricted to administrators."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from models import db
from services import notice as notice_service
from utils.auth import admin_required, get_current_user
from utils.pagination import parse_page_args
from utils.request_validation import parse_json_request

notice_bp = Blueprint("notice", __name__)


@notice_bp.route("", methods=["GET"])
def list_notices():
    page_no, limit = parse_page_args(request.args)
    notices, total, pages = notice_service.list_notices(db.session, page_no, limit)
    return (
        jsonify(
            {
                "message": "OK",
                "data": [notice.to_dict() for notice in notices],
                "pageNo": page_no,
                "pages": pages,
                "total": total,
            }
        ),
        HTTPStatus.OK,
    )


@notice_bp.route("/<notice_id>", methods=["GET"])
def get_notice(notice_id: str):
    notice = notice_service.view_notice(db.session, notice_id)
    return jsonify({"message": "OK", "data": notice.to_dict()}), HTTPStatus.OK


@notice_bp.route("", methods=["POST"])
@admin_required
def create_notice():
    payload = parse_json_request(request)
    notice = notice_service.create_notice(db.session, get_current_user(), payload)
    current_app.logger.info("Notice %s posted", notice.id)
    return jsonify({"message": "Notice created.", "id": notice.id}), HTTPStatus.CREATED


@notice_bp.route("/<notice_id>", methods=["PATCH"])
@admin_required
def update_notice(notice_id: str):
    payload = parse_json_request(request)
    notice = notice_service.update_notice(db.session, notice_id, payload)
    return jsonify({"message": "Notice updated.", "data": notice.to_dict()}), HTTPStatus.OK


@notice_bp.route("/<notice_id>", methods=["DELETE"])
@admin_required
def delete_notice(notice_id: str):
    notice_service.delete_notice(db.session, notice_id)
    return jsonify({"message": "Notice deleted."}), HTTPStatus.OK
