"""UserProfile model definition."""

from . import db


class UserProfile(db.Model):
    """Public profile attached one-to-one to a verified user."""

    __tablename__ = "user_profiles"

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email = db.Column(db.String(255), nullable=False)
    user_name = db.Column(db.String(50), unique=True, nullable=False)
    dept = db.Column(db.String(100), nullable=False)
    grade = db.Column(db.Integer, nullable=False, default=1)
    bio = db.Column(db.String(255), nullable=False, default="")
    user_about = db.Column(db.Text, nullable=False, default="")
    show_dept = db.Column(db.Boolean, nullable=False, default=True)
    show_grade = db.Column(db.Boolean, nullable=False, default=True)
    on_break = db.Column(db.Boolean, nullable=False, default=False)
    link1 = db.Column(db.String(255), nullable=False, default="")
    link2 = db.Column(db.String(255), nullable=False, default="")
    link3 = db.Column(db.String(255), nullable=False, default="")
    categories = db.Column(db.String(255), nullable=False, default="")
    image = db.Column(db.String(255), nullable=False, default="")

    user = db.relationship("User", back_populates="profile")

    @property
    def category_list(self) -> list[str]:
        return [code for code in (self.categories or "").split(",") if code]

    @property
    def links(self) -> list[str]:
        return [self.link1, self.link2, self.link3]

    def to_dict(self) -> dict:
        """Serialize the profile."""

        return {
            "userId": self.user_id,
            "email": self.email,
            "userName": self.user_name,
            "dept": self.dept,
            "grade": self.grade,
            "bio": self.bio,
            "userAbout": self.user_about,
            "showDept": self.show_dept,
            "showGrade": self.show_grade,
            "onBreak": self.on_break,
            "links": self.links,
            "categories": self.category_list,
            "image": self.image,
        }
