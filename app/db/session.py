from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from app.core.config import settings

logger = logging.getLogger("app")

# Check if DATABASE_URL is properly set
if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is not set or empty!")
    raise ValueError("DATABASE_URL environment variable is required")

try:
    if settings.DATABASE_URL.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive across sessions
        engine = create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,  # Check connection before using from pool
            pool_recycle=3600,   # Recycle connections after 1 hour
        )
    logger.info("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Create session factory for database interactions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()

# Database session dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Each request gets its own session; every save commits on its own, so two
# saves in one request are two independent writes.
