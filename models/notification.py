"""Per-user notification model."""

from . import db, isoformat, utcnow


NOTIFICATION_TYPES = ("NEW_COMMENT", "NEW_REPLY", "NEW_APPLY", "ACCEPTED", "REJECTED")


class Notification(db.Model):
    """A message delivered to a user about activity on a study."""

    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    study_id = db.Column(
        db.String(36),
        db.ForeignKey("studies.id", ondelete="CASCADE"),
        nullable=True,
    )
    title = db.Column(db.String(100), nullable=False)
    about = db.Column(db.String(255), nullable=False)
    type = db.Column(
        db.Enum(*NOTIFICATION_TYPES, name="notification_type_enum"), nullable=False
    )
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="notifications")
    study = db.relationship("Study", back_populates="notifications")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "studyId": self.study_id,
            "title": self.title,
            "about": self.about,
            "type": self.type,
            "isRead": self.is_read,
            "createdAt": isoformat(self.created_at),
        }
