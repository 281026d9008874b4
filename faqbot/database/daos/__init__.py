"""
DAOs Package — Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package provides the Data Access Layer for the application.
It encapsulates all interactions with SQLAlchemy ORM entities, providing
clean CRUD APIs for the service layer while hiding direct query details.

Conventions
-----------
- SQLAlchemy 2.0 typed mappings (Mapped[...] / mapped_column)
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log and surface exceptions so upper layers decide error policy
- Unknown ids are reported through return values, never exceptions

Contents
--------
- FaqDao
    Knowledge-base persistence:
    * Creates, fetches, updates and deletes FAQs
    * Case-insensitive substring search (question / answer / category)
    * Lists distinct categories and counts the corpus
    * Atomically increments usage counters

- ChatMessageDao
    Append-only chat log:
    * Creates messages
    * Fetches messages newest-first, optionally limited
    * Counts all / recent / resolved turns for the stats endpoint
"""
