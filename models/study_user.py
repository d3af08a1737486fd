"""Join request model linking applicants to studies."""

from . import db, isoformat, utcnow


class StudyUser(db.Model):
    """Represents a user's application to a study.

    The composite primary key keeps one row per (study, user) pair.
    """

    __tablename__ = "study_users"

    study_id = db.Column(
        db.String(36),
        db.ForeignKey("studies.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    is_accepted = db.Column(db.Boolean, nullable=False, default=False)
    temp_bio = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    study = db.relationship("Study", back_populates="applicants")
    user = db.relationship("User", back_populates="applications")

    def to_dict(self) -> dict:
        """Serialize the application."""

        return {
            "studyId": self.study_id,
            "userId": self.user_id,
            "isAccepted": self.is_accepted,
            "tempBio": self.temp_bio,
            "createdAt": isoformat(self.created_at),
        }
