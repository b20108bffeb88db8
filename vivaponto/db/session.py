"""
Database session management
"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from vivaponto.core.config import settings
from vivaponto.db.base import Base

# Register every model with Base.metadata before create_all
import vivaponto.models  # noqa: F401


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite ignores ON DELETE clauses unless foreign_keys is switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


_is_sqlite = settings.DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args,
)

if _is_sqlite:
    enable_sqlite_foreign_keys(engine)
    # Create all tables automatically on startup for SQLite
    Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
