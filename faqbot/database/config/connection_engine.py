"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Creates the Engine (connection pool + SQL execution entry point) from `settings.DB_URL`.
- Defines shared MetaData for table and schema objects.
- Exposes a Declarative Base class for ORM models.
- Provides schema bootstrap helpers (`init_db`, `reset_db`).

Notes
-----
- The default URL is an in-memory SQLite database. Every connection to
  ``sqlite://`` would get its own empty database, so the engine is pinned to a
  single shared connection (`StaticPool`) for the lifetime of the process.
- Pointing `DB_URL` at PostgreSQL/MySQL swaps in durable storage without code changes.
- All ORM models must inherit from `declarativeBase` to participate in schema creation.
"""


from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData
from faqbot.database.config.config import settings


def build_engine(db_url: str):
    """
    Create an Engine for the given URL.

    Parameters
    ----------
    db_url : str
        SQLAlchemy connection URL.

    Returns
    -------
    Engine
        The configured engine. In-memory SQLite URLs share one connection
        across threads; everything else uses the driver's default pool.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url)


# --------------------------------------------------------------------
# Engine object: core interface to the database.
# --------------------------------------------------------------------
connection_engine = build_engine(settings.DB_URL)
"""Engine object: Core interface to the database.
Responsible for managing connections, executing SQL, and pooling.
"""

metadata = MetaData()
"""
Metadata object: Stores schema-level information about tables, constraints, indexes, etc. Shared across all models.
"""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base: Root class for ORM models.
All model classes should inherit from this to gain ORM features and automatic schema generation.
 """


def init_db() -> None:
    """Create every table registered on `declarativeBase` that does not exist yet."""
    # Entities register themselves on import
    import faqbot.database.entities.faq  # noqa: F401
    import faqbot.database.entities.chat_message  # noqa: F401

    metadata.create_all(connection_engine)


def reset_db() -> None:
    """Drop and recreate the schema. Used by tests to get an empty store."""
    init_db()
    metadata.drop_all(connection_engine)
    metadata.create_all(connection_engine)
