"""
Service-layer operations for the FAQ knowledge base and the chat log.

All storage functions are wrapped with the `@transactional` decorator, which
manages SQLAlchemy sessions and transactions automatically. Each function
accepts (and uses) an injected `session: Session` provided by the decorator.

Results are returned as frozen pydantic snapshots (`FaqRecord`,
`ChatMessageRecord`) built inside the transaction, so callers never share
mutable ORM objects across request handlers.

Not-found is an expected outcome here: lookups and updates return None,
deletes return False and usage increments silently do nothing.
"""

import logging
import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from faqbot.api.models import ChatMessageRecord, FaqContextItem, FaqRecord, FaqUpdate, StatsReply
from faqbot.database.daos.chat_message_dao import ChatMessageDao
from faqbot.database.daos.faq_dao import FaqDao
from faqbot.database.entities.chat_message import ChatMessage
from faqbot.database.entities.faq import DEFAULT_CATEGORY, Faq
from faqbot.database.helpers.transactionManagement import transactional
from faqbot.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 10
"""How many chat messages `get_recent_chat_messages` returns when no limit is given."""

MAX_RECENT_LIMIT = 2**31 - 1
"""Upper bound applied to history limits so they stay within the database's integer range."""

MONTHLY_WINDOW = timedelta(days=30)
"""Trailing window counted as "monthly queries" by the stats endpoint."""

ALL_CATEGORIES = "All Categories"
"""Category filter value meaning "no filter"."""

DEFAULT_FAQS = [
    {
        "question": "What are your business hours?",
        "answer": "Our business hours are Monday through Friday, 9:00 AM to 6:00 PM EST. We also offer limited weekend support on Saturdays from 10:00 AM to 2:00 PM EST.",
        "category": "General",
    },
    {
        "question": "How do I reset my password?",
        "answer": "To reset your password, click on the 'Forgot Password' link on the login page and follow the instructions sent to your email address.",
        "category": "Technical",
    },
    {
        "question": "What payment methods do you accept?",
        "answer": "We accept all major credit cards (Visa, MasterCard, American Express), PayPal, and bank transfers for enterprise customers.",
        "category": "Billing",
    },
]
"""Demo corpus created at startup on an empty store."""


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _require_text(name: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value.strip()


def _normalize_category(value) -> str:
    if value is None:
        return DEFAULT_CATEGORY
    if not isinstance(value, str):
        raise ValidationError("category must be a string")
    return value.strip() or DEFAULT_CATEGORY


# --------------------------------------------------------------------
# FAQ knowledge base
# --------------------------------------------------------------------

@transactional
def get_all_faqs(session: Session) -> List[FaqRecord]:
    """
    Snapshot the whole corpus, most recently touched first.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).

    Returns
    -------
    list[FaqRecord]
    """
    faq_dao = FaqDao()
    return [FaqRecord.model_validate(faq) for faq in faq_dao.fetchAll(session)]


@transactional
def get_faq_by_id(session: Session, faq_id: str) -> Optional[FaqRecord]:
    """Return one FAQ, or None if the id is unknown."""
    faq = FaqDao().fetchById(session, faq_id)
    return FaqRecord.model_validate(faq) if faq is not None else None


@transactional
def create_faq(session: Session, question: str, answer: str, category: Optional[str] = None) -> FaqRecord:
    """
    Create a new FAQ.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    question : str
        Question text. Must not be blank.
    answer : str
        Answer text. Must not be blank.
    category : str | None, optional
        Category label. Empty or omitted means "General".

    Returns
    -------
    FaqRecord
        The created entry: `usage_count == 0` and `created_at == updated_at`.

    Raises
    ------
    ValidationError
        If question or answer is blank. Nothing is written.
    """
    question = _require_text("question", question)
    answer = _require_text("answer", answer)
    category = _normalize_category(category)

    faq = Faq(
        faq_id=str(uuid.uuid4()),
        question=question,
        answer=answer,
        category=category,
        created_at=utcnow(),
    )
    FaqDao().createFaq(session, faq)
    logger.info("Created FAQ %s in category %s", faq.id, faq.category)
    return FaqRecord.model_validate(faq)


@transactional
def update_faq(session: Session, faq_id: str, data: FaqUpdate) -> Optional[FaqRecord]:
    """
    Merge the fields present in `data` over an existing FAQ.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    faq_id : str
        Id of the FAQ to update.
    data : FaqUpdate
        Partial payload. Only fields the client set are applied.

    Returns
    -------
    FaqRecord | None
        The updated entry, or None if the id is unknown.

    Raises
    ------
    ValidationError
        If a provided question/answer is blank or null. Nothing is written.
    """
    fields = {}
    for key, value in data.model_dump(exclude_unset=True).items():
        if key == "category":
            fields[key] = _normalize_category(value)
        else:
            fields[key] = _require_text(key, value)

    faq = FaqDao().updateFaq(session, faq_id, fields, timestamp=utcnow())
    if faq is None:
        return None
    logger.info("Updated FAQ %s (%s)", faq_id, ", ".join(sorted(fields)) or "touch")
    return FaqRecord.model_validate(faq)


@transactional
def delete_faq(session: Session, faq_id: str) -> bool:
    """Delete a FAQ. Returns False (not an error) if the id is unknown."""
    deleted = FaqDao().deleteFaq(session, faq_id)
    if deleted:
        logger.info("Deleted FAQ %s", faq_id)
    return deleted


@transactional
def search_faqs(session: Session, query: str) -> List[FaqRecord]:
    """
    Case-insensitive substring filter over question, answer and category.

    A blank or whitespace-only query returns the full corpus. Results keep the
    `get_all_faqs` ordering; there is no ranking.
    """
    return [FaqRecord.model_validate(faq) for faq in FaqDao().searchFaqs(session, query or "")]


@transactional
def list_faqs(session: Session, search: Optional[str] = None, category: Optional[str] = None) -> List[FaqRecord]:
    """
    Listing used by the admin table: optional text search, then optional exact category filter.

    `category == "All Categories"` (or empty) disables the category filter.
    """
    faq_dao = FaqDao()
    faqs = faq_dao.searchFaqs(session, search) if search else faq_dao.fetchAll(session)
    if category and category != ALL_CATEGORIES:
        faqs = [faq for faq in faqs if faq.category == category]
    return [FaqRecord.model_validate(faq) for faq in faqs]


@transactional
def get_categories(session: Session) -> List[str]:
    """Distinct categories currently in use, sorted."""
    return FaqDao().fetchCategories(session)


@transactional
def increment_faq_usage(session: Session, faq_id: str) -> None:
    """
    Record that a chat answer was attributed to a FAQ.

    Adds one to `usage_count` and refreshes `updated_at`. Unknown ids are a
    silent no-op: the attribution comes from the language model and may name
    an entry that was deleted meanwhile.
    """
    if not FaqDao().incrementUsage(session, faq_id, timestamp=utcnow()):
        logger.debug("Ignoring usage increment for unknown FAQ %s", faq_id)


@transactional
def get_faq_context(session: Session) -> List[FaqContextItem]:
    """The full corpus projected to `{id, question, answer}` for grounding."""
    return [FaqContextItem.model_validate(faq) for faq in FaqDao().fetchAll(session)]


@transactional
def seed_default_faqs(session: Session) -> int:
    """
    Create the demo corpus if the FAQ table is empty.

    Returns
    -------
    int
        Number of FAQs created (0 if the store already had entries).
    """
    if FaqDao().countFaqs(session) > 0:
        return 0
    for faq in DEFAULT_FAQS:
        create_faq(question=faq["question"], answer=faq["answer"], category=faq["category"])
    logger.info("Seeded %d default FAQs", len(DEFAULT_FAQS))
    return len(DEFAULT_FAQS)


# --------------------------------------------------------------------
# Chat log
# --------------------------------------------------------------------

@transactional
def create_chat_message(
    session: Session,
    user_message: str,
    ai_response: str,
    confidence: Optional[int] = None,
    resolved: bool = True,
) -> ChatMessageRecord:
    """
    Append one exchange to the chat log.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    user_message : str
        What the user asked.
    ai_response : str
        What the assistant answered.
    confidence : int | None, optional
        Confidence of the answer; clamped to [0, 100]. Default: absent.
    resolved : bool, optional
        Resolution flag. Default: True.

    Returns
    -------
    ChatMessageRecord
        The persisted exchange.
    """
    chat_message = ChatMessage(
        message_id=str(uuid.uuid4()),
        user_message=user_message,
        ai_response=ai_response,
        confidence=confidence,
        resolved=resolved,
        created_at=utcnow(),
    )
    ChatMessageDao().createMessage(session, chat_message)
    return ChatMessageRecord.model_validate(chat_message)


@transactional
def get_all_chat_messages(session: Session) -> List[ChatMessageRecord]:
    """Every logged exchange, newest first."""
    return [ChatMessageRecord.model_validate(m) for m in ChatMessageDao().fetchMessages(session)]


@transactional
def get_recent_chat_messages(session: Session, limit: int = DEFAULT_RECENT_LIMIT) -> List[ChatMessageRecord]:
    """
    The first `limit` exchanges of the newest-first log.

    `limit <= 0` returns an empty list rather than raising; oversized limits
    are capped at `MAX_RECENT_LIMIT`.
    """
    if limit is None:
        limit = DEFAULT_RECENT_LIMIT
    if limit <= 0:
        return []
    limit = min(limit, MAX_RECENT_LIMIT)
    return [ChatMessageRecord.model_validate(m) for m in ChatMessageDao().fetchMessages(session, limit=limit)]


def format_resolution_rate(resolved: int, total: int) -> str:
    """
    Render resolved/total as a whole percentage string, rounding half up.

    An empty log counts as fully resolved ("100%").
    """
    if total <= 0:
        return "100%"
    return f"{math.floor(resolved * 100 / total + 0.5)}%"


@transactional
def get_stats(session: Session, now: Optional[datetime] = None) -> StatsReply:
    """
    Aggregate numbers for the admin dashboard.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    now : datetime | None, optional
        Reference time (naive UTC). Defaults to the current time.

    Returns
    -------
    StatsReply
        Corpus size, turns in the trailing 30 days and the resolution rate.
    """
    now = now or utcnow()
    faq_dao = FaqDao()
    message_dao = ChatMessageDao()
    total = message_dao.countMessages(session)
    return StatsReply(
        total_faqs=faq_dao.countFaqs(session),
        monthly_queries=message_dao.countMessagesSince(session, now - MONTHLY_WINDOW),
        resolution_rate=format_resolution_rate(message_dao.countResolved(session), total),
    )
