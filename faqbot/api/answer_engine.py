"""
FAQ Answer Engine
=================

Purpose
-------
Turns one free-text user question plus a snapshot of the FAQ corpus into a
grounded answer with a confidence score and an optional FAQ attribution.

Flow
----
1. Render the corpus as a grounding block (`prompt_utilities.format_faq_context`).
2. Build the instruction prompt (prefer a direct FAQ match, fall back to a
   best-effort answer, politely decline unrelated questions, reply as JSON).
3. Call the chat model bound to `response_format={"type": "json_object"}`.
4. Parse the JSON defensively; unusable output becomes a safe default.
5. Clamp the confidence into [0, 100].
6. Keep `suggestedFaqId` only when the model names one. Callers still have to
   tolerate ids that no longer exist.

Failure semantics
-----------------
Any failure of the completion call (network, quota, timeout, malformed
payload) is logged and converted into a degraded but successful result: a
fixed apologetic message, `confidence = 0`, no attribution. `answer()` never
raises for these cases.

Configuration (settings)
------------------------
- settings.API_KEY             : OpenAI API key (falls back to `OPENAI_API_KEY`). Without
                                 a key the app still boots and every chat turn gets
                                 the outage reply.
- settings.OPEN_AI_MODEL       : Chat model name.
- settings.LLM_TEMPERATURE     : Sampling temperature.
- settings.LLM_MAX_TOKENS      : Completion length budget.
- settings.LLM_TIMEOUT_SECONDS : Wall-clock budget of one call.
"""

import asyncio
import logging
import os
from typing import List, Optional, Sequence

from langchain_openai import ChatOpenAI

from faqbot.api.models import AnswerResult, FaqContextItem
from faqbot.api.prompt_utilities import build_answer_messages, build_suggestion_messages
from faqbot.api.utils import coerce_confidence, parse_llm_json
from faqbot.database.config.config import settings

logger = logging.getLogger(__name__)

PARSE_FALLBACK_RESPONSE = "I apologize, but I encountered an error processing your request."
"""Reply used when the model answered but its output could not be used."""

OUTAGE_FALLBACK_RESPONSE = (
    "I apologize, but I'm experiencing technical difficulties. "
    "Please try again later or contact our support team directly."
)
"""Reply used when the completion service could not be reached."""

MAX_SUGGESTIONS = 5


class AnswerEngine:
    """
    Grounded FAQ answering on top of a LangChain chat model.

    Args:
        model: Any LangChain chat model (a `ChatOpenAI` in production, a fake in tests),
            or None when no completion service is configured.
        timeout (float | None): Seconds to wait for one completion before degrading.
            None waits until the call completes or fails.
    """

    def __init__(self, model, timeout: Optional[float] = None):
        self.model = model
        self.json_model = model.bind(response_format={"type": "json_object"}) if model is not None else None
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "AnswerEngine":
        """Build the production engine from `settings`."""
        if not (settings.API_KEY or os.getenv("OPENAI_API_KEY")):
            logger.warning("No OpenAI API key configured; chat replies will use the outage fallback")
            return cls(None, timeout=settings.LLM_TIMEOUT_SECONDS)
        model = ChatOpenAI(
            model=settings.OPEN_AI_MODEL,
            api_key=settings.API_KEY or None,
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
            max_retries=1,
        )
        return cls(model, timeout=settings.LLM_TIMEOUT_SECONDS)

    async def _complete_json(self, messages):
        if self.json_model is None:
            raise RuntimeError("No completion service configured (set API_KEY)")
        response = await asyncio.wait_for(self.json_model.ainvoke(messages), timeout=self.timeout)
        return parse_llm_json(response)

    async def answer(self, user_message: str, faq_context: Sequence[FaqContextItem]) -> AnswerResult:
        """
        Answer one question from the FAQ corpus.

        Args:
            user_message (str): The (trimmed) user question.
            faq_context (Sequence[FaqContextItem]): `{id, question, answer}` snapshot of the corpus.

        Returns:
            AnswerResult: reply text, confidence in [0, 100] and optional `suggested_faq_id`.
            Never raises on completion-service failures; see module docstring.
        """
        messages = build_answer_messages(user_message, faq_context)
        try:
            payload = await self._complete_json(messages)
        except ValueError as e:
            logger.warning("Unusable answer from completion service: %s", e)
            return AnswerResult(response=PARSE_FALLBACK_RESPONSE, confidence=0)
        except Exception:
            logger.exception("Completion service call failed")
            return AnswerResult(response=OUTAGE_FALLBACK_RESPONSE, confidence=0)

        return interpret_answer_payload(payload)

    async def suggest_faqs(self, user_message: str) -> List[str]:
        """
        Propose 3-5 FAQ questions related to a user message.

        Returns:
            list[str]: Candidate questions; empty on any completion-service failure.
        """
        messages = build_suggestion_messages(user_message)
        try:
            payload = await self._complete_json(messages)
        except Exception:
            logger.exception("FAQ suggestion request failed")
            return []

        if isinstance(payload, dict):
            payload = payload.get("suggestions", [])
        if not isinstance(payload, list):
            return []
        suggestions = [item.strip() for item in payload if isinstance(item, str) and item.strip()]
        return suggestions[:MAX_SUGGESTIONS]


def interpret_answer_payload(payload) -> AnswerResult:
    """
    Map a parsed model payload onto an `AnswerResult`.

    - Not an object, or no usable "response" text → parse fallback, confidence 0, no attribution.
    - "confidence" is coerced and clamped; missing or non-numeric means 0.
    - "suggestedFaqId" (or the older "suggestedFaq") is kept only when it is a non-blank string.
    """
    if not isinstance(payload, dict):
        logger.warning("Completion payload is not a JSON object: %r", type(payload).__name__)
        return AnswerResult(response=PARSE_FALLBACK_RESPONSE, confidence=0)

    response = payload.get("response")
    if not isinstance(response, str) or not response.strip():
        logger.warning("Completion payload has no response text")
        return AnswerResult(response=PARSE_FALLBACK_RESPONSE, confidence=0)

    suggested = payload.get("suggestedFaqId", payload.get("suggestedFaq"))
    if not isinstance(suggested, str) or not suggested.strip():
        suggested = None

    return AnswerResult(
        response=response.strip(),
        confidence=coerce_confidence(payload.get("confidence")),
        suggested_faq_id=suggested.strip() if suggested else None,
    )
