"""Study category model."""

from . import db


class Category(db.Model):
    """A study category identified by a numeric code (e.g. 100)."""

    __tablename__ = "categories"

    code = db.Column(db.Integer, primary_key=True, autoincrement=False)
    main = db.Column(db.String(50), nullable=False)
    sub = db.Column(db.String(50), nullable=True)
