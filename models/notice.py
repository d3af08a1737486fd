"""Administrator notice model."""

from . import db, isoformat, new_uuid, utcnow


class Notice(db.Model):
    """A site-wide announcement written by an administrator."""

    __tablename__ = "notices"

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    title = db.Column(db.String(200), nullable=False)
    about = db.Column(db.Text, nullable=False)
    views = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    host_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    host = db.relationship("User", back_populates="notices")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "about": self.about,
            "views": self.views,
            "createdAt": isoformat(self.created_at),
            "hostId": self.host_id,
        }
