"""Study listing model and bookmark association."""

from sqlalchemy import and_, or_

from . import db, isoformat, new_uuid, utcnow

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
FREQUENCIES = ("once", "twice", "more")
LOCATIONS = ("no_contact", "cafe", "library", "study_room", "else")


bookmarks = db.Table(
    "bookmarks",
    db.Column(
        "user_id",
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "study_id",
        db.String(36),
        db.ForeignKey("studies.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


def _join_set(values) -> str:
    return ",".join(values or [])


def _split_set(raw) -> list[str]:
    return [value for value in (raw or "").split(",") if value]


class Study(db.Model):
    """A study-group listing owned by its host."""

    __tablename__ = "studies"

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    title = db.Column(db.String(200), nullable=False)
    study_about = db.Column(db.Text, nullable=False)
    weekday = db.Column(db.String(64), nullable=False)
    frequency = db.Column(
        db.Enum(*FREQUENCIES, name="study_frequency_enum"), nullable=False
    )
    location = db.Column(db.String(128), nullable=False)
    capacity = db.Column(db.Integer, nullable=False)
    members_count = db.Column(db.Integer, nullable=False, default=0)
    vacancy = db.Column(db.Integer, nullable=False)
    is_open = db.Column(db.Boolean, nullable=False, default=True, index=True)
    category_code = db.Column(
        db.Integer, db.ForeignKey("categories.code"), nullable=False, index=True
    )
    due_date = db.Column(db.DateTime, nullable=False)
    views = db.Column(db.Integer, nullable=False, default=0)
    bookmark_count = db.Column(db.Integer, nullable=False, default=0)
    host_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    host = db.relationship("User", back_populates="hosted_studies")
    category = db.relationship("Category")
    bookmarked_by = db.relationship(
        "User",
        secondary=bookmarks,
        backref=db.backref("bookmarked_studies", lazy="dynamic"),
        lazy="dynamic",
    )
    applicants = db.relationship(
        "StudyUser",
        back_populates="study",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    comments = db.relationship(
        "Comment",
        back_populates="study",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    notifications = db.relationship(
        "Notification",
        back_populates="study",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )

    @property
    def weekdays(self) -> list[str]:
        return _split_set(self.weekday)

    @weekdays.setter
    def weekdays(self, values) -> None:
        self.weekday = _join_set(values)

    @property
    def locations(self) -> list[str]:
        return _split_set(self.location)

    @locations.setter
    def locations(self, values) -> None:
        self.location = _join_set(values)

    def sync_vacancy(self) -> None:
        """Recompute ``vacancy`` and close the study once it is full."""

        self.vacancy = self.capacity - self.members_count
        if self.vacancy <= 0:
            self.is_open = False

    def to_dict(self) -> dict:
        """Serialize the study to a dictionary."""

        return {
            "id": self.id,
            "createdAt": isoformat(self.created_at),
            "title": self.title,
            "studyAbout": self.study_about,
            "weekday": self.weekdays,
            "frequency": self.frequency,
            "location": self.locations,
            "capacity": self.capacity,
            "membersCount": self.members_count,
            "vacancy": self.vacancy,
            "isOpen": self.is_open,
            "categoryCode": self.category_code,
            "dueDate": isoformat(self.due_date),
            "views": self.views,
            "bookmarkCount": self.bookmark_count,
            "hostId": self.host_id,
        }

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "createdAt": isoformat(self.created_at),
            "views": self.views,
            "bookmarkCount": self.bookmark_count,
            "membersCount": self.members_count,
            "capacity": self.capacity,
            "isOpen": self.is_open,
        }

    @staticmethod
    def open_filter(query):
        """Filter for studies still accepting applicants."""

        now = utcnow()
        return query.filter(
            and_(Study.is_open.is_(True), Study.due_date >= now)
        )

    @staticmethod
    def set_contains(column, value: str):
        """Membership test against a comma separated set column."""

        return or_(
            column == value,
            column.like(f"{value},%"),
            column.like(f"%,{value}"),
            column.like(f"%,{value},%"),
        )
