"""Seed the study category table."""

from app import create_app
from models import db
from models.category import Category

# code -> (main, sub); codes ending in 00 are main categories
CATEGORIES = {
    100: ("Academics", None),
    101: ("Academics", "Major courses"),
    102: ("Academics", "General education"),
    103: ("Academics", "Graduate school"),
    200: ("Employment", None),
    201: ("Employment", "Interview"),
    202: ("Employment", "Aptitude test"),
    203: ("Employment", "Cover letter"),
    300: ("Language", None),
    301: ("Language", "TOEIC"),
    302: ("Language", "TOEFL"),
    303: ("Language", "Conversation"),
    400: ("Certification", None),
    401: ("Certification", "IT"),
    402: ("Certification", "Finance"),
    500: ("Hobby", None),
    600: ("Other", None),
}


def seed_categories(session) -> int:
    """Insert or update every category; returns the number of new rows."""
    created = 0
    for code, (main, sub) in CATEGORIES.items():
        category = session.get(Category, code)
        if category is None:
            session.add(Category(code=code, main=main, sub=sub))
            created += 1
        else:
            category.main = main
            category.sub = sub
    session.commit()
    return created


def main() -> None:
    app = create_app()
    with app.app_context():
        created = seed_categories(db.session)
        print(f"Categories seeded: {created} new, {len(CATEGORIES)} total")


if __name__ == "__main__":
    main()
