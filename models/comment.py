"""Inquiry comment and metoo flag models."""

from . import db, isoformat, new_uuid, utcnow

DELETED_COMMENT_CONTENT = "This comment has been deleted."


class Comment(db.Model):
    """An inquiry posted under a study, optionally replying to another."""

    __tablename__ = "comments"

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    study_id = db.Column(
        db.String(36),
        db.ForeignKey("studies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    parent_id = db.Column(
        db.String(36),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    content = db.Column(db.Text, nullable=False)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    study = db.relationship("Study", back_populates="comments")
    author = db.relationship("User", back_populates="comments")
    parent = db.relationship("Comment", remote_side=[id], back_populates="replies")
    replies = db.relationship(
        "Comment",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
    metoos = db.relationship(
        "Metoo",
        back_populates="comment",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )

    def tombstone(self) -> None:
        """Replace content and drop the author, keeping the thread intact."""

        self.content = DELETED_COMMENT_CONTENT
        self.user_id = None
        self.is_deleted = True

    def to_dict(self) -> dict:
        """Serialize the comment without its replies."""

        return {
            "id": self.id,
            "studyId": self.study_id,
            "userId": self.user_id,
            "replyTo": self.parent_id,
            "content": self.content,
            "isDeleted": self.is_deleted,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class Metoo(db.Model):
    """A user's "me too" flag on a comment."""

    __tablename__ = "metoos"

    comment_id = db.Column(
        db.String(36),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    comment = db.relationship("Comment", back_populates="metoos")
    user = db.relationship("User", back_populates="metoos")
