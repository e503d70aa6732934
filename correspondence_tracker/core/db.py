# correspondence_tracker/core/db.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from correspondence_tracker.core.config import settings
from correspondence_tracker.utils.logger import get_logger

# --- Configure logging ---
logger = get_logger(__name__)


def enable_sqlite_foreign_keys(bind: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.
    SQLite ships with it off, so ondelete rules and references are not checked otherwise.
    """
    @event.listens_for(bind, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Create database engine ---
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
engine = create_engine(settings.database_url, echo=settings.db_echo, connect_args=connect_args)
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# --- Create sessionmaker ---
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# --- Create declarative base ---
Base = declarative_base()


def get_db():
    """
    Method for obtaining database session object
    """
    db = SessionLocal()
    try:
        yield db
        logger.debug("Committing DB transaction")
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Error in DB transaction", error_message=str(e))
        raise
    finally:
        db.close()


def init_db() -> None:
    """
    Create all tables known to the metadata. Used for local SQLite setups,
    production schemas are managed with alembic.
    """
    # Import models so they register on Base.metadata
    import correspondence_tracker.models  # noqa: F401

    logger.info("Creating database tables", database_url=settings.database_url.split("@")[-1])
    Base.metadata.create_all(bind=engine)
