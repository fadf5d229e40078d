"""
Create the bookings and schedule tables.

Usage: python scripts/init_db.py   (reads DATABASE_URL from the environment / .env)
"""

import logging

from sqlalchemy import inspect, text

from barbershop.config import settings
from barbershop.database import SessionLocal, engine, init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    logger.info(f"Using database: {engine.url.render_as_string(hide_password=True)}")
    init_db()

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        tables = inspect(engine).get_table_names()
        logger.info(f"Tables present: {', '.join(sorted(tables))}")
    finally:
        db.close()

    if not settings.admin_secret:
        logger.warning("ADMIN_SECRET is not set: schedule writes are open to everyone")


if __name__ == "__main__":
    main()
