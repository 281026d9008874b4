"""
FastAPI Router — FAQs • Chat • Stats
====================================

Purpose
-------
Defines the HTTP API of the FAQ assistant:
- FAQ administration: list/search/filter, categories, read, create, update, delete
- FAQ suggestions: candidate FAQ questions for a user message
- Chat: answer one user message from the FAQ corpus and log the exchange
- Chat history and aggregate stats for the admin dashboard

Key Notes
---------
- Input validation via Pydantic models in `faqbot.api.models`; body
  validation failures are turned into 400 responses by the app (see `faqbot.main`).
- Unknown ids map to 404; `ValidationError` maps to 400.
- Completion-service outages never surface here: the answer engine degrades
  them into a normal zero-confidence reply. Only unexpected failures give 500.
- The answer engine is injected with the `get_answer_engine` dependency so
  tests can substitute a fake.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from faqbot.api.answer_engine import AnswerEngine
from faqbot.api.chat_service import handle_chat_turn
from faqbot.api.models import (
    ChatMessageRecord,
    ChatReply,
    ChatRequest,
    FaqCreate,
    FaqRecord,
    FaqUpdate,
    StatsReply,
    SuggestionReply,
    SuggestionRequest,
)
from faqbot.database.config.config import settings
from faqbot.database.core.funcs import (
    create_faq,
    delete_faq,
    get_categories,
    get_faq_by_id,
    get_recent_chat_messages,
    get_stats,
    list_faqs,
    update_faq,
)
from faqbot.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
"""Creates the FastAPI router in which we define its routes"""


def get_answer_engine(request: Request) -> AnswerEngine:
    """Return the answer engine built at startup (`app.state.answer_engine`)."""
    engine = getattr(request.app.state, "answer_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Answer engine is not initialized")
    return engine


@router.get('/health')
async def health():
    """Liveness probe."""
    return {"status": "ok"}


# -----------------------
# FAQ administration
# -----------------------

@router.get('/faqs', response_model=List[FaqRecord])
async def get_faqs(search: Optional[str] = None, category: Optional[str] = None):
    """List FAQs, most recently touched first.

    Query:
        search: case-insensitive substring over question/answer/category.
        category: exact category; "All Categories" means no filter.
    """
    try:
        return list_faqs(search=search, category=category)
    except Exception:
        logger.exception("Failed to fetch FAQs")
        raise HTTPException(status_code=500, detail="Failed to fetch FAQs")


@router.get('/faqs/categories', response_model=List[str])
async def get_faq_categories():
    """Distinct categories in use, for the admin filter dropdown."""
    return get_categories()


@router.post('/faqs/suggestions', response_model=SuggestionReply)
async def suggest_faqs(data: SuggestionRequest, engine: AnswerEngine = Depends(get_answer_engine)):
    """Propose 3-5 FAQ questions related to a user message (empty list if the model is unavailable)."""
    if not data.message or not data.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    suggestions = await engine.suggest_faqs(data.message.strip())
    return SuggestionReply(suggestions=suggestions)


@router.get('/faqs/{faq_id}', response_model=FaqRecord)
async def get_faq(faq_id: str):
    """Fetch one FAQ or 404."""
    faq = get_faq_by_id(faq_id=faq_id)
    if faq is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return faq


@router.post('/faqs', response_model=FaqRecord, status_code=201)
async def new_faq(data: FaqCreate):
    """Create a FAQ. Blank question/answer → 400."""
    try:
        return create_faq(question=data.question, answer=data.answer, category=data.category)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_faq", "reason": str(e)})


@router.put('/faqs/{faq_id}', response_model=FaqRecord)
async def edit_faq(faq_id: str, data: FaqUpdate):
    """Merge the provided fields over an existing FAQ. Unknown id → 404."""
    try:
        faq = update_faq(faq_id=faq_id, data=data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_faq", "reason": str(e)})
    if faq is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return faq


@router.delete('/faqs/{faq_id}', status_code=204)
async def remove_faq(faq_id: str):
    """Delete a FAQ. 204 on success, 404 if the id is unknown."""
    if not delete_faq(faq_id=faq_id):
        raise HTTPException(status_code=404, detail="FAQ not found")
    return Response(status_code=204)


# -----------------------
# Chat
# -----------------------

@router.post('/chat', response_model=ChatReply)
async def chat_endpoint(data: ChatRequest, engine: AnswerEngine = Depends(get_answer_engine)):
    """Answer one user message from the FAQ corpus and log the exchange.

    Response:
        200: {"id", "response", "confidence", "timestamp"}
        400: missing/blank message
        500: unexpected internal failure
    """
    try:
        chat_message = await handle_chat_turn(data.message, engine)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Chat error")
        raise HTTPException(status_code=500, detail="Failed to process chat message")

    return ChatReply(
        id=chat_message.id,
        response=chat_message.ai_response,
        confidence=chat_message.confidence,
        timestamp=chat_message.created_at,
    )


@router.get('/chat/history', response_model=List[ChatMessageRecord])
async def chat_history(limit: Optional[int] = None):
    """Most recent chat exchanges, newest first (default limit from settings)."""
    if limit is None:
        limit = settings.CHAT_HISTORY_DEFAULT_LIMIT
    try:
        return get_recent_chat_messages(limit=limit)
    except Exception:
        logger.exception("Failed to fetch chat history")
        raise HTTPException(status_code=500, detail="Failed to fetch chat history")


# -----------------------
# Stats
# -----------------------

@router.get('/stats', response_model=StatsReply)
async def stats():
    """Corpus size, chat turns in the last 30 days and the resolution rate."""
    try:
        return get_stats()
    except Exception:
        logger.exception("Failed to fetch stats")
        raise HTTPException(status_code=500, detail="Failed to fetch stats")
