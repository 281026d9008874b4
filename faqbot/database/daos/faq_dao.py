"""
FAQ DAO

Purpose
-------
Provides a thin data-access layer for the `Faq` ORM entity:
- Create, fetch (all / by id / distinct categories), update, delete
- Case-insensitive substring search over question, answer and category
- Atomic usage-counter increment

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller (no session
  creation inside the DAO). Transaction boundaries live in the service layer
  (`faqbot.database.core.funcs`, via `@transactional`).
- Every listing is ordered most-recently-touched first
  (`updated_at` desc, then `created_at` desc).
- `incrementUsage` is a single `UPDATE ... SET usage_count = usage_count + 1`
  so two concurrent increments are both counted.

Usage
-----
.. code-block:: python

    from sqlalchemy.orm import Session
    from faqbot.database.config.connection_engine import connection_engine
    from faqbot.database.daos.faq_dao import FaqDao

    dao = FaqDao()
    with Session(connection_engine) as session:
        faqs = dao.fetchAll(session)
        dao.incrementUsage(session, faq_id=faqs[0].id, timestamp=...)
        session.commit()

Error Handling
--------------
- Methods log unexpected exceptions and re-raise them.
- Unknown ids are not errors: fetches return None, deletes and increments
  report how many rows they touched.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from faqbot.database.entities.faq import Faq

logger = logging.getLogger(__name__)


class FaqDao:
    """
    Data Access Object (DAO) for managing Faq entities.
    Provides CRUD, search and usage operations on the `faqs` table.
    """

    def createFaq(self, session: Session, faq: Faq) -> Faq:
        """
        Stage a new FAQ record.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        faq : Faq
            Faq entity instance to be added.

        Returns
        -------
        Faq
            The staged entity.
        """
        try:
            session.add(faq)
            session.flush()
            return faq
        except Exception as e:
            logger.error("Error in FaqDao.createFaq. Error: %s", e)
            raise e

    def fetchAll(self, session: Session) -> List[Faq]:
        """
        Fetch every FAQ, most recently touched first.

        Returns
        -------
        list[Faq]
        """
        try:
            return (
                session.query(Faq)
                .order_by(desc(Faq.updated_at), desc(Faq.created_at))
                .all()
            )
        except Exception as e:
            logger.error("Error in FaqDao.fetchAll. Error: %s", e)
            raise e

    def fetchById(self, session: Session, faq_id: str) -> Optional[Faq]:
        """
        Fetch one FAQ by id.

        Returns
        -------
        Faq | None
            The entity, or None if the id is unknown.
        """
        try:
            return session.get(Faq, faq_id)
        except Exception as e:
            logger.error("Error in FaqDao.fetchById. Error: %s", e)
            raise e

    def searchFaqs(self, session: Session, query: str) -> List[Faq]:
        """
        Filter the corpus by a case-insensitive substring.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        query : str
            Search text. Blank or whitespace-only text matches everything.

        Returns
        -------
        list[Faq]
            Matching entries in `fetchAll` order. No ranking is applied.
        """
        faqs = self.fetchAll(session)
        if not query.strip():
            return faqs

        term = query.casefold()
        return [
            faq for faq in faqs
            if term in faq.question.casefold()
            or term in faq.answer.casefold()
            or term in faq.category.casefold()
        ]

    def fetchCategories(self, session: Session) -> List[str]:
        """Return the distinct categories in use, sorted alphabetically."""
        try:
            rows = session.query(Faq.category).distinct().order_by(Faq.category).all()
            return [row[0] for row in rows]
        except Exception as e:
            logger.error("Error in FaqDao.fetchCategories. Error: %s", e)
            raise e

    def countFaqs(self, session: Session) -> int:
        """Return the size of the corpus."""
        try:
            return session.query(Faq).count()
        except Exception as e:
            logger.error("Error in FaqDao.countFaqs. Error: %s", e)
            raise e

    def updateFaq(self, session: Session, faq_id: str, fields: dict, timestamp: datetime) -> Optional[Faq]:
        """
        Merge the given fields over an existing FAQ and refresh `updated_at`.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        faq_id : str
            Id of the FAQ to update.
        fields : dict
            Subset of {"question", "answer", "category"} to overwrite.
        timestamp : datetime
            New `updated_at` value.

        Returns
        -------
        Faq | None
            The updated entity, or None if the id is unknown.
        """
        try:
            faq = session.get(Faq, faq_id)
            if faq is None:
                return None
            for key, value in fields.items():
                setattr(faq, key, value)
            faq.updated_at = timestamp
            session.flush()
            return faq
        except Exception as e:
            logger.error("Error in FaqDao.updateFaq. Error: %s", e)
            raise e

    def deleteFaq(self, session: Session, faq_id: str) -> bool:
        """
        Delete a FAQ by id.

        Returns
        -------
        bool
            True if a row was removed, False if the id was unknown.
        """
        try:
            deleted = (
                session.query(Faq)
                .filter(Faq.id == faq_id)
                .delete(synchronize_session=False)
            )
            return deleted > 0
        except Exception as e:
            logger.error("Error in FaqDao.deleteFaq. Error: %s", e)
            raise e

    def incrementUsage(self, session: Session, faq_id: str, timestamp: datetime) -> bool:
        """
        Atomically add one to `usage_count` and refresh `updated_at`.

        Returns
        -------
        bool
            True if a FAQ was touched, False if the id was unknown.
        """
        try:
            touched = (
                session.query(Faq)
                .filter(Faq.id == faq_id)
                .update(
                    {Faq.usage_count: Faq.usage_count + 1, Faq.updated_at: timestamp},
                    synchronize_session=False,
                )
            )
            return touched > 0
        except Exception as e:
            logger.error("Error in FaqDao.incrementUsage. Error: %s", e)
            raise e
