import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from jobloom.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.SQLALCHEMY_DATABASE_URI

# Create SQLAlchemy engine
if DATABASE_URL.startswith("sqlite"):
    # Single shared connection so an in-memory database survives across sessions
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> bool:
    """
    Connect to the database and make sure the jobs table exists.

    A failure is logged and swallowed so the API still starts; requests that
    touch storage will then fail with a 500 until the database is reachable.

    Returns:
        True if the database was reachable, False otherwise
    """
    from jobloom.models import job  # noqa: F401  Import models to register them

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False

    logger.info("Database connected")
    return True
