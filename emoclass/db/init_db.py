import logging
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from emoclass.db.session import engine
from emoclass.db.models import Base

logger = logging.getLogger(__name__)

@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, max=4),
    reraise=True,
)
def init_db(bind: Engine = engine) -> None:
    """Create tables that do not exist yet. Retries while the database is still coming up."""
    try:
        Base.metadata.create_all(bind)
        logger.info("Database tables initialized successfully")
    except OperationalError as e:
        logger.warning("Database not reachable while initializing tables: %s", e)
        raise

if __name__ == "__main__":
    from emoclass.core.logging import configure_logging
    configure_logging()
    init_db()
