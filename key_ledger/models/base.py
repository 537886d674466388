"""
Database engine, session management, and base model.

Every table inherits from Base. The blob store opens its own
short-lived sessions from SessionLocal; HTTP requests that need
a raw session (the health check) get one from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from key_ledger.config import get_settings

settings = get_settings()


def build_engine(url: str):
    """
    Create an engine for the given URL.

    SQLite connections are bound to the thread that created them
    unless check_same_thread is disabled. The store is shared by
    request worker threads, so it must be.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


# --- Engine ---
engine = build_engine(settings.DATABASE_URL)

# --- Session Factory ---
# autocommit=False means every write is committed explicitly,
# so a blob is either fully replaced or left as it was.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


# --- Base Model Class ---
class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed even if
    the endpoint raises.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
