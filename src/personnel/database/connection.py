"""
Database connection and store management
"""

import logging
from typing import Optional

from personnel.config.settings import DATABASE_SCHEMES, DATABASE_URL
from personnel.database.base import PersonStore
from personnel.database.memory_store import InMemoryPersonStore
from personnel.database.postgres_store import PostgresPersonStore
from personnel.database.sqlite_store import SqlitePersonStore

logger = logging.getLogger(__name__)

# Global person store
person_store: Optional[PersonStore] = None


async def open_store(database_url: str) -> PersonStore:
    """
    Open the store matching a database URL

    Args:
        database_url: sqlite:///<path>, memory:// or postgres(ql)://...

    Returns:
        Ready-to-use PersonStore
    """
    scheme, separator, location = database_url.partition("://")
    backend = DATABASE_SCHEMES.get(scheme.lower()) if separator else None
    if backend is None:
        raise ValueError(f"Unsupported DATABASE_URL scheme: {database_url.split('://')[0]!r}")

    if backend == "memory":
        return InMemoryPersonStore()
    if backend == "sqlite":
        # sqlite:///relative.db -> "relative.db", sqlite:////abs/path.db -> "/abs/path.db"
        path = location[1:] if location.startswith("/") else location
        return SqlitePersonStore(path or ":memory:")

    # asyncpg expects the postgresql:// form
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return await PostgresPersonStore.connect(database_url)


async def init_database(database_url: Optional[str] = None):
    """Initialize the global person store"""
    global person_store
    person_store = await open_store(database_url or DATABASE_URL)

    # Test connection
    await person_store.ping()

    logger.info(f"Database initialized successfully ({type(person_store).__name__})")


async def close_database():
    """Close the global person store"""
    global person_store
    if person_store:
        await person_store.close()
        person_store = None
    logger.info("Database connections closed")


def get_person_store() -> PersonStore:
    """Get the person store instance"""
    if person_store is None:
        raise RuntimeError("Database not initialized")
    return person_store
