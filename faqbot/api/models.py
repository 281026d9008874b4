"""
Pydantic models used for request/response validation and API data contracts.

Each class defines the structure of data expected in API endpoints, ensuring
validation and automatic OpenAPI schema generation. The `*Record` models are
also the immutable snapshots returned by the service layer, so no caller ever
holds a live ORM object.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def utc_isoformat(value: datetime) -> str:
    """Render a stored (naive UTC) timestamp as ISO 8601 with an explicit UTC offset."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class FaqCreate(BaseModel):
    """Payload of `POST /api/faqs`."""
    question: str = Field(..., description="Question text. Must not be blank.", examples=["What is your refund policy?"])
    answer: str = Field(..., description="Answer text. Must not be blank.", examples=["30 days, no questions asked."])
    category: Optional[str] = Field(None, description="Category label. Defaults to 'General'.", examples=["Billing"])


class FaqUpdate(BaseModel):
    """
    Partial payload of `PUT /api/faqs/{id}`.

    Only the fields the client actually sent are merged over the stored entry.
    """
    question: Optional[str] = None
    """New question text (optional)."""
    answer: Optional[str] = None
    """New answer text (optional)."""
    category: Optional[str] = None
    """New category (optional)."""


class FaqRecord(BaseModel):
    """
    Snapshot of a stored FAQ.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    """Unique identifier of the FAQ."""
    question: str
    answer: str
    category: str
    usage_count: int
    """How many chat answers were attributed to this FAQ."""
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at", when_used="json")
    def _serialize_timestamps(self, value: datetime) -> str:
        return utc_isoformat(value)


class FaqContextItem(BaseModel):
    """The `{id, question, answer}` projection of a FAQ handed to the answer engine."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    question: str
    answer: str


class ChatMessageRecord(BaseModel):
    """
    Snapshot of one logged chat turn.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    user_message: str
    ai_response: str
    confidence: Optional[int] = None
    """Confidence of the reply (0-100), if known."""
    resolved: bool = True
    created_at: datetime

    @field_serializer("created_at", when_used="json")
    def _serialize_created_at(self, value: datetime) -> str:
        return utc_isoformat(value)

    @field_validator("resolved", mode="before")
    @classmethod
    def _parse_resolved(cls, value):
        # Persisted as the text "true"/"false"
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value


class AnswerResult(BaseModel):
    """What the answer engine produces for one question."""
    response: str
    """Reply text shown to the user."""
    confidence: int = Field(0, ge=0, le=100)
    """Confidence in [0, 100]."""
    suggested_faq_id: Optional[str] = None
    """Id of the FAQ the reply was based on, when the model names one."""


class ChatRequest(BaseModel):
    """Payload of `POST /api/chat`."""
    message: Optional[str] = None
    """The user's message. Blank or missing messages are rejected with 400."""


class ChatReply(BaseModel):
    """Response of `POST /api/chat`."""
    id: str
    response: str
    confidence: Optional[int] = None
    timestamp: datetime

    @field_serializer("timestamp", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return utc_isoformat(value)


class SuggestionRequest(BaseModel):
    """Payload of `POST /api/faqs/suggestions`."""
    message: Optional[str] = None


class SuggestionReply(BaseModel):
    """Candidate FAQ questions proposed for a user message."""
    suggestions: List[str] = Field(default_factory=list)


class StatsReply(BaseModel):
    """
    Aggregate usage statistics for the admin panel.
    """
    total_faqs: int = Field(..., serialization_alias="totalFaqs")
    """Size of the FAQ corpus."""
    monthly_queries: int = Field(..., serialization_alias="monthlyQueries")
    """Chat turns logged in the trailing 30 days."""
    resolution_rate: str = Field(..., serialization_alias="resolutionRate")
    """Share of resolved turns, e.g. "100%"."""
