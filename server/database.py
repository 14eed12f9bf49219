# server/database.py

from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from core import config
from models import Base


# -------------------------------
# Process-wide Engine
# -------------------------------

# Built on first use and shared by every request in the process.
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_database_url: str = config.DATABASE_URL


def get_engine() -> Engine:
    global _engine, _session_factory

    if _engine is None:
        connect_args = {}
        if _database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        _engine = create_engine(_database_url, connect_args=connect_args)
        _session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=_engine
        )

    return _engine


def SessionLocal():
    get_engine()
    return _session_factory()


def reset_engine(database_url: Optional[str] = None) -> None:
    """
    Disposes the cached engine so the next call builds a fresh one,
    optionally pointing it at a different database.
    """
    global _engine, _session_factory, _database_url

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
    if database_url:
        _database_url = database_url


def init_db():
    # Registers the tables on Base.metadata before creating them.
    import models.user  # noqa: F401
    import models.account  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
