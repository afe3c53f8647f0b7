from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv
import logging

load_dotenv()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE URL HANDLING
# ------------------------------------------------------------------------------

DEFAULT_DATABASE_URL = "sqlite:///./strings.db"


def resolve_database_url(url: str = None) -> str:
    """Normalise the configured URL into one SQLAlchemy can load a driver for."""
    if not url:
        logger.warning(f"DATABASE_URL not found in environment, using {DEFAULT_DATABASE_URL}")
        return DEFAULT_DATABASE_URL

    # Hosted MySQL URLs come without a driver; SQLAlchemy expects "mysql+pymysql://"
    if url.startswith("mysql://"):
        url = url.replace("mysql://", "mysql+pymysql://", 1)
    return url


def engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sessions are handed across FastAPI's worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # prevents "MySQL server has gone away" issues
        "pool_recycle": 280,     # helps with idle connection timeouts
    }


DATABASE_URL = resolve_database_url(os.getenv("DATABASE_URL"))

# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
try:
    engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base = declarative_base()
except Exception as e:
    logger.error(f"Failed to create SQLAlchemy engine: {e}")
    raise e


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
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully.")
