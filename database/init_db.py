import logging
from sqlalchemy import create_engine, text
from tenacity import retry, stop_after_attempt, wait_fixed

from core.config_loader import load_config
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db(engine):
    """Create the pgvector extension and all tables, waiting for the database to come up."""
    logger.info("Initializing database...")
    try:
        with engine.connect() as connection:
            connection.execute(text("CREATE EXTENSION IF NOT EXISTS vector;"))
            connection.commit()
            logger.info("Checked/Created 'vector' extension.")

        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")

    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db(create_engine(load_config().database.url))
