"""
SQLAlchemy ORM database configuration for catalog and sales rule lookups.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

# Logger
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.database")

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()

# psycopg3 driver for postgres URLs
DATABASE_URL = configs.DATABASE_URL
if DATABASE_URL.startswith("postgresql://"):
    DATABASE_URL = DATABASE_URL.replace("postgresql://", "postgresql+psycopg://", 1)

Base = declarative_base()

if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False}, echo=False)
else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=10,           # Number of connections to maintain in pool
        max_overflow=20,        # Additional connections beyond pool_size
        pool_pre_ping=True,     # Validate connections before use
        pool_recycle=3600,      # Recycle connections after 1 hour
        echo=False,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for request-scoped sessions."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables():
    # models register their tables on Base.metadata when imported
    from freeproduct.models import catalog, rules  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("create_tables | tables=%s" % sorted(Base.metadata.tables.keys()))


def close_db_pool():
    engine.dispose()
