"""
The `database` package is responsible for all interactions with the application's store.
It provides configuration, entity definitions, data access and service functions
for the FAQ knowledge base and the chat log.

Contents:
    - config:
        Application settings and the SQLAlchemy engine (in-memory SQLite by
        default, any SQLAlchemy URL through `DB_URL`).

    - entities:
        SQLAlchemy entity models: `Faq` and `ChatMessage`.

    - daos:
        Data Access Objects providing the queries for each entity.

    - core:
        Service functions used by the router and the chat orchestrator
        (create/search/update FAQs, usage increments, chat log, stats, seeding).

    - helpers:
        The `@transactional` decorator that manages sessions, commits,
        rollbacks and serializes concurrent writers.
"""
