"""Profile blueprint mounted under ``/api/user/profile``."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from models import db
from services import profile as profile_service
from utils.auth import auth_required, get_current_user
from utils.request_validation import parse_json_request

profile_bp = Blueprint("profile", __name__)


@profile_bp.route("/duplicate", methods=["GET"])
def check_user_name():
    """``data`` is true when the user name is still available."""
    user_name = (request.args.get("username") or "").strip()
    if not user_name:
        raise BadRequest("username is required.")
    available = not profile_service.is_user_name_taken(db.session, user_name)
    return jsonify({"message": "OK", "data": available}), HTTPStatus.OK


@profile_bp.route("/<user_id>", methods=["POST"])
@auth_required
def create_profile(user_id: str):
    payload = parse_json_request(request, required_keys=("userName", "dept"))
    profile = profile_service.create_profile(db.session, get_current_user(), user_id, payload)
    return jsonify({"message": "Profile created.", "data": profile.to_dict()}), HTTPStatus.CREATED


@profile_bp.route("/<user_id>", methods=["GET"])
def get_profile(user_id: str):
    profile = profile_service.get_profile(db.session, user_id)
    return jsonify({"message": "OK", "data": profile.to_dict()}), HTTPStatus.OK


@profile_bp.route("/<user_id>", methods=["PATCH"])
@auth_required
def update_profile(user_id: str):
    payload = parse_json_request(request)
    profile = profile_service.update_profile(db.session, get_current_user(), user_id, payload)
    return jsonify({"message": "Profile updated.", "data": profile.to_dict()}), HTTPStatus.OK
