"""
Database Transaction Management
===============================

This module provides utilities for managing SQLAlchemy database sessions
using Python context variables and a decorator-based transaction wrapper.

It allows seamless propagation of a database session across function calls
without explicitly threading it through arguments. Functions can be safely
decorated with ``@transactional`` to ensure they run inside a managed
transactional context.

Key features
~~~~~~~~~~~~
- Context variable to store the active session
- Implicit reuse of existing sessions
- Automatic commit and rollback handling
- Clean session closure after execution
- Outermost transactions are serialized by a process-wide lock, so two
  request handlers never interleave writes on the shared store
"""

from functools import wraps
import contextvars
import threading
from sqlalchemy.orm import sessionmaker
from faqbot.database.config.connection_engine import connection_engine

db_session_context = contextvars.ContextVar("db_session_context", default=None)
"""Context variable storing the active SQLAlchemy session."""

SessionFactory = sessionmaker(bind=connection_engine, expire_on_commit=False)
"""Session factory bound to the application engine."""

_transaction_lock = threading.RLock()
"""Guards the single shared store; held for the whole outermost transaction."""


def transactional(func):
    """
    Decorator to wrap functions in a managed SQLAlchemy transaction.

    Ensures that:
    - If a session already exists in context, it is reused.
    - Otherwise, a new session is created, committed, and closed while holding
      the transaction lock.
    - On errors, the session is rolled back and closed, and the error re-raised.

    Parameters
    ----------
    func : callable
        The function to wrap. It must accept a `session` keyword argument.

    Returns
    -------
    callable
        The wrapped function, executed within a database transaction.

    Example
    -------
    >>> @transactional
    ... def count_faqs(session=None):
    ...     return FaqDao().countFaqs(session)
    ...
    >>> count_faqs()
    """
    @wraps(func)
    def wrap_func(*args, **kwargs):
        session = db_session_context.get()
        if session:
            return func(*args, session=session, **kwargs)

        with _transaction_lock:
            session = SessionFactory()
            token = db_session_context.set(session)
            try:
                result = func(*args, session=session, **kwargs)
                session.flush()
                session.commit()
            except Exception as e:
                session.rollback()
                raise e
            finally:
                session.close()
                db_session_context.reset(token)

        return result

    return wrap_func
