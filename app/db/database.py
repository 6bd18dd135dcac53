"""
Database engine and session factory construction.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool


def is_memory_url(database_url: str) -> bool:
    """True for SQLite URLs that never touch disk."""
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def create_db_engine(database_url: str) -> Engine:
    """Create an engine suited to the configured backend."""
    if database_url.startswith("postgresql"):
        return create_engine(database_url, poolclass=NullPool)

    if is_memory_url(database_url):
        # One shared connection, otherwise every session sees an empty database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # Needed for SQLite
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose objects stay readable after the session closes."""
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )
