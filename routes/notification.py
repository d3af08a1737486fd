"""Notification inbox mounted under ``/api/user/notification``."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from models import db
from services import notification as notification_service
from utils.auth import auth_required, get_current_user

notification_bp = Blueprint("notification", __name__)


@notification_bp.route("", methods=["GET"])
@auth_required
def list_notifications():
    notifications = notification_service.list_notifications(db.session, get_current_user())
    return jsonify({"message": "OK", "data": [item.to_dict() for item in notifications]}), HTTPStatus.OK


@notification_bp.route("/<int:notification_id>", methods=["PATCH"])
@auth_required
def mark_read(notification_id: int):
    notification = notification_service.mark_read(db.session, get_current_user(), notification_id)
    return jsonify({"message": "Marked as read.", "data": notification.to_dict()}), HTTPStatus.OK


@notification_bp.route("/<int:notification_id>", methods=["DELETE"])
@auth_required
def delete_notification(notification_id: int):
    notification_service.delete_notification(db.session, get_current_user(), notification_id)
    return jsonify({"message": "Notification deleted."}), HTTPStatus.OK
