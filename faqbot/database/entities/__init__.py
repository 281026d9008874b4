"""
Entities Package — SQLAlchemy 2.0 ORM Models
============================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes are consumed by the DAOs (`daos` package).

Tech Stack & Conventions
------------------------
- UUID4 string primary keys (portable across SQLite and server databases)
- Naive UTC timestamps
- SQLAlchemy 2.0 style `Mapped[...]` + `mapped_column(...)`
- No foreign keys between the two tables: a chat message's FAQ attribution
  is a loose identifier, not a constraint

Contents
--------
- Faq
    One curated knowledge-base entry.
    * Fields: `id`, `question`, `answer`, `category` (default "General"),
      `usage_count`, `created_at`, `updated_at`

- ChatMessage
    One logged chat turn.
    * Fields: `id`, `user_message`, `ai_response`, `confidence` (0-100, nullable),
      `resolved` ("true" | "false"), `created_at`
"""
