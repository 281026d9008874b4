"""
ChatMessage ORM Model
=====================

The ``ChatMessage`` ORM model represents one logged chat turn: the user's
message, the assistant's reply, the reply's confidence and whether the turn
counts as resolved. Rows are appended once per turn and never updated.

Key features
~~~~~~~~~~~~
- UUID4 string primary key (``id``)
- ``user_message`` / ``ai_response`` text
- Optional ``confidence`` in [0, 100]
- ``resolved`` persisted as the text ``"true"``/``"false"``
- Naive UTC ``created_at`` timestamp
"""

from faqbot.database.config.connection_engine import declarativeBase
from sqlalchemy import DateTime, Integer, String, TEXT
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime


class ChatMessage(declarativeBase):
    """
    ORM model for the `chat_messages` table.

    Attributes
    ----------
    id : str
        Primary key. UUID4 string.
    user_message : str
        The (trimmed) user message.
    ai_response : str
        The assistant reply that was shown to the user.
    confidence : int | None
        Confidence of the reply, clamped to [0, 100].
    resolved : str
        ``"true"`` or ``"false"``.
    created_at : datetime
        Creation time (naive UTC).
    """

    __tablename__ = 'chat_messages'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    """Primary key. UUID of the chat message."""

    user_message: Mapped[str] = mapped_column(TEXT, nullable=False)
    """What the user asked."""

    ai_response: Mapped[str] = mapped_column(TEXT, nullable=False)
    """What the assistant answered."""

    confidence: Mapped[int | None] = mapped_column(Integer, nullable=True)
    """Confidence of the answer (0-100), nullable."""

    resolved: Mapped[str] = mapped_column(TEXT, nullable=False, default="true")
    """Resolution flag stored as text."""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    """Timestamp when the turn was logged."""

    def __init__(
        self,
        message_id: str,
        user_message: str,
        ai_response: str,
        confidence: int | None,
        resolved: bool,
        created_at: datetime,
    ):
        """
        Initialize a new ChatMessage object.

        Parameters
        ----------
        message_id : str
            Unique identifier of the message.
        user_message : str
            The user's message.
        ai_response : str
            The assistant's reply.
        confidence : int | None
            Confidence of the reply. Clamped to [0, 100] when present.
        resolved : bool
            Whether the turn is counted as resolved.
        created_at : datetime
            Creation timestamp (naive UTC).
        """
        self.id = message_id
        self.user_message = user_message
        self.ai_response = ai_response
        self.confidence = None if confidence is None else max(0, min(100, int(confidence)))
        self.resolved = "true" if resolved else "false"
        self.created_at = created_at

    def __str__(self) -> str:
        return (
            f"ChatMessage: id:{self.id}, "
            f"confidence: {self.confidence}, "
            f"resolved: {self.resolved}, "
            f"time_created: {self.created_at}"
        )
