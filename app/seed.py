"""
Seed the database with demo users and posts.

Usage: python -m app.seed
"""
from sqlalchemy.orm import Session

from .database import SessionLocal, engine, Base
from .logging_config import get_logger
from .models.user import User
from .services import posts as feed
from .services import users

logger = get_logger("seed")

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("alice", "alice@example.com"),
    ("bob", "bob@example.com"),
]

DEMO_POSTS = [
    ("alice", "Hello SocialFeed! First post here."),
    ("bob", "Just finished a 10k run, feeling great."),
    ("alice", "Anyone have good book recommendations?"),
]


def seed(db: Session) -> bool:
    """Insert demo data. Returns False when it is already present."""
    if db.query(User).filter(User.username == DEMO_USERS[0][0]).first():
        logger.info("Demo data already present, nothing to do")
        return False

    accounts = {}
    for username, email in DEMO_USERS:
        user, _ = users.register(db, username, email, DEMO_PASSWORD, DEMO_PASSWORD)
        accounts[username] = user.id

    created = [feed.create_post(db, accounts[author], text=text) for author, text in DEMO_POSTS]

    first = created[0]
    feed.toggle_like(db, first.id, accounts["bob"])
    feed.add_comment(db, first.id, accounts["bob"], "Welcome aboard!")

    logger.info("Database seeded", users=len(accounts), posts=len(created))
    return True


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
