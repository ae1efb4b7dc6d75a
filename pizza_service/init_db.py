# pizza_service/init_db.py
#
# Usage: python -m pizza_service.init_db

from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import config
from .authorization import Admin
from .db import Database
from .logging_config import setup_logging
from .models import User
from .services.users import create_user, get_user_by_email

logger = logging.getLogger(__name__)


def seed_default_admin(db: Session) -> Optional[User]:
    """Create the configured bootstrap admin unless it exists or no password is set."""
    if not config.DEFAULT_ADMIN_PASSWORD:
        return None

    existing = get_user_by_email(db, config.DEFAULT_ADMIN_EMAIL)
    if existing is not None:
        return existing

    user = create_user(
        db,
        config.DEFAULT_ADMIN_NAME,
        config.DEFAULT_ADMIN_EMAIL,
        config.DEFAULT_ADMIN_PASSWORD,
        roles=[Admin()],
    )
    logger.info("Seeded default admin %s", user.email)
    return user


def init_db(database: Database) -> None:
    database.open()
    db = database.session()
    try:
        seed_default_admin(db)
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    database = Database(config.DATABASE_URL)
    try:
        init_db(database)
    finally:
        database.close()
    print("Database initialized successfully!")
