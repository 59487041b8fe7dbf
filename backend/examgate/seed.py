"""Create the exam configuration singleton and a bootstrap admin if missing.

Run with ``python -m examgate.seed``.
"""
import logging

from sqlalchemy.orm import Session

from .config import ADMIN_EMAIL, ADMIN_NAME
from .database import atomic, create_tables, get_db_session
from .exam_config.service import ExamConfigService
from .models import User, Role
from .utils import normalize_email

logger = logging.getLogger(__name__)


def ensure_admin(db: Session) -> User:
    admin = db.query(User).filter(User.role == Role.ADMIN).first()
    if admin is not None:
        logger.info("Admin user already exists.")
        return admin
    with atomic(db):
        admin = User(email=normalize_email(ADMIN_EMAIL), name=ADMIN_NAME, role=Role.ADMIN)
        db.add(admin)
    logger.info("Admin user created.")
    return admin


def seed_defaults(db: Session) -> None:
    ExamConfigService(db).ensure_config()
    ensure_admin(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
    with get_db_session() as db:
        seed_defaults(db)
