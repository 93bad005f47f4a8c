from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings
import logging

# Set up logging
logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": True,  # Auto-reconnect on broken connections
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,   # Recycle connections after 30 minutes
    }


try:
    engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
    logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
except Exception as e:
    logger.error(f"❌ Database engine creation failed: {e}")
    raise

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Registers the models on Base.metadata for Alembic and create_all
from app import models
