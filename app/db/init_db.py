import logging

from app.db.base import Base
from app.db.session import engine

# Register every model on Base.metadata
from app.models import admin, discount, plan, user, user_subscription  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=engine) -> None:
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
