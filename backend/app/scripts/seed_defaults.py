"""Seed Defaults Script

Creates the default authority, permissions, ADMIN/USER roles and the admin account.
Run with: python -m app.scripts.seed_defaults
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from app.database import SessionLocal
from app.services.auth import seed_defaults

logger = logging.getLogger("raas")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    db = SessionLocal()
    try:
        seed_defaults(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("default_seed_failed", extra={"error": str(e)})
        return 1
    finally:
        db.close()
    logger.info("default_seed_done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
