from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import logging

from string_analyzer.config import DATABASE_URL

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

try:
    engine = create_engine(
        DATABASE_URL,
        connect_args=connect_args,
        pool_pre_ping=True,   # prevents "MySQL server has gone away" issues
        pool_recycle=280,     # helps with idle connection timeouts
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base = declarative_base()
except Exception as e:
    logger.error(f"Failed to create SQLAlchemy engine: {e}")
    raise


# ------------------------------------------------------------------------------
# DB DEPENDENCY
# ------------------------------------------------------------------------------
def get_db():
    """Dependency to provide a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(bind=None):
    """Initialize database tables (runs once on startup)."""
    from string_analyzer.models import string_record  # noqa: F401  ensure models are imported
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully.")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
