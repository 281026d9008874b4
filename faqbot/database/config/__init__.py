"""
The `config` package provides two core building blocks for establishing and managing database connections.

Contents:
    - config: Configuration layer - strongly typed app settings loaded from environment variables (with .env support), exposed through a singleton Settings object
    - connection_engine: Database layer - SQLAlchemy bootstrap that creates the Engine from `DB_URL` (in-memory SQLite by default), shared MetaData, the declarative base for ORM models, and the `init_db`/`reset_db` schema helpers

Together they provide environment-driven configuration and a swappable storage backend.
"""
