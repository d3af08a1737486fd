"""User model definition."""

from werkzeug.security import check_password_hash, generate_password_hash

from . import db, isoformat, new_uuid, utcnow


USER_ROLES = ("GUEST", "USER", "ADMIN")


class User(db.Model):
    """Represents a platform account.

    Accounts start as ``GUEST`` and become ``USER`` once the signup mail
    link is confirmed.
    """

    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role_enum"),
        nullable=False,
        default="GUEST",
        server_default=db.text("'GUEST'"),
    )
    is_logout = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    token = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    profile = db.relationship(
        "UserProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    hosted_studies = db.relationship(
        "Study",
        back_populates="host",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    applications = db.relationship(
        "StudyUser",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    comments = db.relationship("Comment", back_populates="author", lazy="dynamic")
    metoos = db.relationship(
        "Metoo", back_populates="user", cascade="all, delete-orphan", lazy="dynamic"
    )
    notifications = db.relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    notices = db.relationship(
        "Notice", back_populates="host", cascade="all, delete-orphan", lazy="dynamic"
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    @property
    def is_verified(self) -> bool:
        return self.role != "GUEST"

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
