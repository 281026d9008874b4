"""
Chat Message DAO

Purpose
-------
Data-access layer for the `ChatMessage` ORM entity. The chat log is
append-only, so the DAO only creates and reads:
- Message creation
- Retrieval newest-first (all, or the first `limit`)
- Aggregates used by the stats endpoint

Design
------
- Requires an active SQLAlchemy `Session` provided by the caller.
- Methods log unexpected exceptions and re-raise them.
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from faqbot.database.entities.chat_message import ChatMessage

logger = logging.getLogger(__name__)


class ChatMessageDao:
    """
    Data Access Object (DAO) for the chat log.
    """

    def createMessage(self, session: Session, chat_message: ChatMessage) -> ChatMessage:
        """Stage a new chat message and return it."""
        try:
            session.add(chat_message)
            session.flush()
            return chat_message
        except Exception as e:
            logger.error("Error in ChatMessageDao.createMessage. Error: %s", e)
            raise e

    def fetchMessages(self, session: Session, limit: int | None = None) -> List[ChatMessage]:
        """
        Fetch chat messages, newest first.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        limit : int | None
            Maximum number of rows. None returns the whole log.

        Returns
        -------
        list[ChatMessage]
        """
        try:
            query = session.query(ChatMessage).order_by(desc(ChatMessage.created_at))
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except Exception as e:
            logger.error("Error in ChatMessageDao.fetchMessages. Error: %s", e)
            raise e

    def countMessages(self, session: Session) -> int:
        """Total number of logged turns."""
        try:
            return session.query(ChatMessage).count()
        except Exception as e:
            logger.error("Error in ChatMessageDao.countMessages. Error: %s", e)
            raise e

    def countMessagesSince(self, session: Session, since: datetime) -> int:
        """Number of turns logged strictly after `since`."""
        try:
            return session.query(ChatMessage).filter(ChatMessage.created_at > since).count()
        except Exception as e:
            logger.error("Error in ChatMessageDao.countMessagesSince. Error: %s", e)
            raise e

    def countResolved(self, session: Session) -> int:
        """Number of turns whose `resolved` flag is "true"."""
        try:
            return session.query(ChatMessage).filter(ChatMessage.resolved == "true").count()
        except Exception as e:
            logger.error("Error in ChatMessageDao.countResolved. Error: %s", e)
            raise e
