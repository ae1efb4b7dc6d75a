# pizza_service/reset_db.py
#
# Drops every table and recreates an empty schema. Point DATABASE_URL at the
# test database before running: python -m pizza_service.reset_db

from dotenv import load_dotenv
load_dotenv()

import logging

from . import config
from .db import Database
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def reset_db(database: Database) -> None:
    logger.info("Dropping all tables to start fresh...")
    database.drop_all()
    database.open()


if __name__ == "__main__":
    setup_logging()
    database = Database(config.DATABASE_URL)
    try:
        reset_db(database)
    finally:
        database.close()
    print("Database reset.")
