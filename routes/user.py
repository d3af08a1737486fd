"""Account blueprint: signup, e-mail verification, login and passwords."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, g, jsonify, request
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    set_access_cookies,
    set_refresh_cookies,
    unset_jwt_cookies,
)

from models import db
from services import bookmark as bookmark_service
from services import study_user as study_user_service
from services import user as user_service
from utils.auth import auth_required, get_current_user
from utils.request_validation import parse_json_request

user_bp = Blueprint("user", __name__)


def _mailer():
    return current_app.extensions["mail"]


@user_bp.route("", methods=["POST"])
def signup():
    """Register a GUEST account and mail the verification link."""
    payload = parse_json_request(request, required_keys=("email", "password"))
    user = user_service.create_user(
        db.session,
        payload.get("email"),
        payload.get("password"),
        allowed_domain=current_app.config["ALLOWED_EMAIL_DOMAIN"],
    )
    current_app.logger.info("Registered user %s", user.id)
    _mailer().send_signup_mail(user.email, user.id, user.token)

    return jsonify({"message": "Signup mail sent.", "id": user.id}), HTTPStatus.CREATED


@user_bp.route("/<user_id>/role", methods=["PATCH"])
def verify_signup(user_id: str):
    """Confirm the mailed token and promote the user to USER."""
    payload = parse_json_request(request, required_keys=("token",))
    user = user_service.confirm_signup(db.session, user_id, payload.get("token"))
    current_app.logger.info("Verified user %s", user.id)
    return jsonify({"message": "Email verified.", "data": user.to_dict()}), HTTPStatus.OK


@user_bp.route("/login", methods=["POST"])
def login():
    payload = parse_json_request(request, required_keys=("email", "password"))
    user = user_service.authenticate(db.session, payload.get("email"), payload.get("password"))

    response = jsonify({"message": "Logged in.", "data": user.to_dict()})
    set_access_cookies(response, create_access_token(identity=user.id))
    set_refresh_cookies(response, create_refresh_token(identity=user.id))
    return response, HTTPStatus.OK


@user_bp.route("/logout", methods=["PATCH"])
@auth_required
def logout():
    user_service.logout_user(db.session, get_current_user())
    response = jsonify({"message": "Logged out."})
    g.refreshed_access_token = None
    unset_jwt_cookies(response)
    return response, HTTPStatus.OK


@user_bp.route("", methods=["GET"])
@auth_required
def get_me():
    return jsonify({"message": "OK", "data": get_current_user().to_dict()}), HTTPStatus.OK


@user_bp.route("", methods=["DELETE"])
@auth_required
def delete_me():
    user = get_current_user()
    user_id = user.id
    user_service.delete_user(db.session, user)
    current_app.logger.info("Deleted user %s", user_id)

    response = jsonify({"message": "Account deleted."})
    g.refreshed_access_token = None
    unset_jwt_cookies(response)
    return response, HTTPStatus.OK


@user_bp.route("/password", methods=["PATCH"])
def request_password_reset():
    payload = parse_json_request(request, required_keys=("email",))
    user = user_service.request_password_reset(db.session, payload.get("email"))
    _mailer().send_password_reset_mail(user.email, user.token)
    return jsonify({"message": "Password reset mail sent."}), HTTPStatus.OK


@user_bp.route("/<token>/password", methods=["PATCH"])
def reset_password(token: str):
    payload = parse_json_request(request, required_keys=("email", "password"))
    user = user_service.reset_password(
        db.session, token, payload.get("email"), payload.get("password")
    )
    current_app.logger.info("Password reset for user %s", user.id)
    return jsonify({"message": "Password changed."}), HTTPStatus.OK


@user_bp.route("/bookmark", methods=["GET"])
@auth_required
def list_bookmarks():
    studies = bookmark_service.list_bookmarked_studies(db.session, get_current_user())
    return jsonify({"message": "OK", "data": [study.to_dict() for study in studies]}), HTTPStatus.OK


@user_bp.route("/study/applied", methods=["GET"])
@auth_required
def list_applied_studies():
    applications = study_user_service.list_applied(db.session, get_current_user())
    data = []
    for application in applications:
        item = application.study.to_summary()
        item["isAccepted"] = application.is_accepted
        item["tempBio"] = application.temp_bio
        data.append(item)
    return jsonify({"message": "OK", "data": data}), HTTPStatus.OK
