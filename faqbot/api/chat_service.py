"""
Chat turn orchestration.

`handle_chat_turn` is the request-level policy behind `POST /api/chat`:

1. reject blank input (`ValidationError`, nothing written);
2. snapshot the FAQ corpus as `{id, question, answer}`;
3. ask the answer engine;
4. bump the usage counter of the attributed FAQ, if any (unknown ids are ignored);
5. append the exchange to the chat log with `resolved=True`;
6. return the persisted exchange.

There are no retries here: completion-service failures were already turned
into a degraded answer by the engine, so once validation passes every turn
is logged and answered.
"""

import logging

from faqbot.api.answer_engine import AnswerEngine
from faqbot.api.models import ChatMessageRecord
from faqbot.database.core.funcs import create_chat_message, get_faq_context, increment_faq_usage
from faqbot.errors import ValidationError

logger = logging.getLogger(__name__)


async def handle_chat_turn(user_message, engine: AnswerEngine) -> ChatMessageRecord:
    """
    Answer and log one chat turn.

    Args:
        user_message: Raw message from the client.
        engine (AnswerEngine): The answer engine to consult.

    Returns:
        ChatMessageRecord: The logged exchange (carries the confidence).

    Raises:
        ValidationError: If the message is missing or blank after trimming.
    """
    if not isinstance(user_message, str) or not user_message.strip():
        raise ValidationError("Message is required")
    message = user_message.strip()

    faq_context = get_faq_context()
    result = await engine.answer(message, faq_context)

    if result.suggested_faq_id:
        increment_faq_usage(faq_id=result.suggested_faq_id)

    # Every turn counts as resolved, including degraded zero-confidence answers
    chat_message = create_chat_message(
        user_message=message,
        ai_response=result.response,
        confidence=result.confidence,
        resolved=True,
    )
    logger.info(
        "Chat turn %s answered (confidence=%s, faq=%s)",
        chat_message.id, result.confidence, result.suggested_faq_id,
    )
    return chat_message
