"""Join workflow mounted under ``/api/study/user``."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from models import db
from services import profile as profile_service
from services import study_user as study_user_service
from utils.auth import auth_required, get_current_user
from utils.request_validation import parse_json_request

study_user_bp = Blueprint("study_user", __name__)


@study_user_bp.route("/<study_id>", methods=["POST"])
@auth_required
def join_study(study_id: str):
    payload = parse_json_request(request, allow_empty=True)
    application = study_user_service.join_study(
        db.session, get_current_user(), study_id, payload.get("tempBio")
    )
    return jsonify({"message": "Join request sent.", "data": application.to_dict()}), HTTPStatus.CREATED


@study_user_bp.route("/<study_id>", methods=["GET"])
@auth_required
def list_members(study_id: str):
    applications = study_user_service.list_members(db.session, get_current_user(), study_id)
    data = []
    for application in applications:
        item = application.to_dict()
        profile = profile_service.find_profile(db.session, application.user_id)
        item["userName"] = profile.user_name if profile else None
        data.append(item)
    return jsonify({"message": "OK", "data": data}), HTTPStatus.OK


@study_user_bp.route("/<study_id>", methods=["PATCH"])
@auth_required
def update_temp_bio(study_id: str):
    payload = parse_json_request(request, allow_empty=True)
    application = study_user_service.update_temp_bio(
        db.session, get_current_user(), study_id, payload.get("tempBio")
    )
    return jsonify({"message": "Join request updated.", "data": application.to_dict()}), HTTPStatus.OK


@study_user_bp.route("/<study_id>", methods=["DELETE"])
@auth_required
def withdraw(study_id: str):
    study_user_service.withdraw(db.session, get_current_user(), study_id)
    return jsonify({"message": "Join request withdrawn."}), HTTPStatus.OK


@study_user_bp.route("/<study_id>/accept", methods=["PATCH"])
@auth_required
def set_acceptance(study_id: str):
    payload = parse_json_request(request, required_keys=("userId",))
    accept = payload.get("accept")
    if not isinstance(accept, bool):
        raise BadRequest("accept must be boolean.")
    if not isinstance(payload["userId"], str):
        raise BadRequest("userId must be a string.")

    application = study_user_service.set_acceptance(
        db.session, get_current_user(), study_id, payload["userId"], accept
    )
    message = "Applicant accepted." if accept else "Applicant rejected."
    return jsonify({"message": message, "data": application.to_dict()}), HTTPStatus.OK
