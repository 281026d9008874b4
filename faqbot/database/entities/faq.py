"""
Faq ORM Model
=============

The ``Faq`` ORM model represents one curated question/answer pair of the
knowledge base, stored in the ``faqs`` table. It is implemented with
SQLAlchemy 2.0-style typing.

Key features
~~~~~~~~~~~~
- UUID4 string primary key (``id``), assigned at creation and never changed
- Question and answer text (both required)
- Free-form ``category`` (defaults to ``"General"``)
- ``usage_count`` incremented each time the answer engine attributes a reply to this entry
- ``created_at`` set once; ``updated_at`` refreshed on every edit or usage increment

Integration notes
~~~~~~~~~~~~~~~~~
- Timestamps are naive UTC datetimes so that ordering and comparisons behave
  the same on SQLite and server databases.
- Chat messages never hold a foreign key to this table; deleting a FAQ leaves
  the chat log untouched.
"""

from faqbot.database.config.connection_engine import declarativeBase
from sqlalchemy import DateTime, Integer, String, TEXT
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

DEFAULT_CATEGORY = "General"
"""Category assigned when the caller omits one or sends an empty string."""


class Faq(declarativeBase):
    """
    ORM model for the `faqs` table.

    Attributes
    ----------
    id : str
        Primary key. UUID4 string.
    question : str
        The question as users would ask it.
    answer : str
        The curated answer.
    category : str
        Grouping label shown in the admin panel (e.g., "Billing").
    usage_count : int
        Number of chat turns attributed to this entry. Never decreases.
    created_at : datetime
        Creation time (naive UTC).
    updated_at : datetime
        Last edit or usage time (naive UTC). Always >= `created_at`.
    """

    __tablename__ = 'faqs'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    """Primary key. UUID of the FAQ."""

    question: Mapped[str] = mapped_column(TEXT, nullable=False)
    """Question text (cannot be null)."""

    answer: Mapped[str] = mapped_column(TEXT, nullable=False)
    """Answer text (cannot be null)."""

    category: Mapped[str] = mapped_column(TEXT, nullable=False, default=DEFAULT_CATEGORY)
    """Category label."""

    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    """How many answers were attributed to this FAQ."""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    """Timestamp when the FAQ was created."""

    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    """Timestamp when the FAQ was last touched."""

    def __init__(self, faq_id: str, question: str, answer: str, category: str, created_at: datetime):
        """
        Initialize a new Faq object with `usage_count = 0` and `updated_at == created_at`.

        Parameters
        ----------
        faq_id : str
            Unique identifier for the FAQ.
        question : str
            Question text.
        answer : str
            Answer text.
        category : str
            Category label.
        created_at : datetime
            Creation timestamp (naive UTC).
        """
        self.id = faq_id
        self.question = question
        self.answer = answer
        self.category = category
        self.usage_count = 0
        self.created_at = created_at
        self.updated_at = created_at

    def __str__(self) -> str:
        return f"Faq: id:{self.id}, category: {self.category}, question: {self.question}, usage: {self.usage_count}"
