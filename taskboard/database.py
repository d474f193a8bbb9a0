import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    import taskboard.config as _cfg

    # Only apply sqlite-specific connect_args when using sqlite
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
    else:
        # Single writer: keep the pool tiny, and pre-ping to survive idle
        # disconnects from hosted databases
        engine = create_engine(
            database_url,
            pool_size=_cfg.DB_POOL_SIZE,
            max_overflow=0,
            pool_pre_ping=True,
        )
    logger.info("database engine created", extra={"backend": "db"})
    return engine
