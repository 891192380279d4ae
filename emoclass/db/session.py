import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from emoclass.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """
    Engine for `url`. SQLite needs cross-thread access because FastAPI runs
    sync routes and background tasks in a thread pool.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=1800,
        echo=False,
        connect_args=connect_args,
    )


_db_url = str(settings.DATABASE_URL)
logger.info("Using DATABASE_URL: %s...", _db_url[:20])

engine = build_engine(_db_url)

SessionLocal = sessionmaker(engine, expire_on_commit=False, class_=Session)


def get_db() -> Iterator[Session]:
    """
    Request-scoped session dependency.
    """
    with SessionLocal() as session:
        yield session
