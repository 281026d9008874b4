"""Tests for chat turn orchestration."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from faqbot.api.answer_engine import OUTAGE_FALLBACK_RESPONSE, AnswerEngine
from faqbot.api.chat_service import handle_chat_turn
from faqbot.api.models import AnswerResult
from faqbot.database.core.funcs import create_faq, get_all_chat_messages, get_faq_by_id
from faqbot.errors import ValidationError


def engine_for(chat_model_factory, payload: dict) -> AnswerEngine:
    return AnswerEngine(chat_model_factory(json.dumps(payload)))


class TestHandleChatTurn:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   ", "\n\t", None])
    async def test_blank_message_is_rejected_before_logging(self, chat_model_factory, message) -> None:
        model = chat_model_factory('{"response": "x", "confidence": 1}')
        engine = AnswerEngine(model)

        with pytest.raises(ValidationError):
            await handle_chat_turn(message, engine)

        assert get_all_chat_messages() == []
        model.bind.return_value.ainvoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_attributed_answer_bumps_usage_once(self, chat_model_factory) -> None:
        faq = create_faq(question="Hours?", answer="9-6 EST")
        engine = engine_for(
            chat_model_factory,
            {"response": "We open at 9.", "confidence": 120, "suggestedFaqId": faq.id},
        )

        logged = await handle_chat_turn("  What time do you open  ", engine)

        assert logged.confidence == 100
        assert logged.user_message == "What time do you open"
        assert logged.ai_response == "We open at 9."
        assert logged.resolved is True
        assert get_faq_by_id(faq_id=faq.id).usage_count == 1
        assert [m.id for m in get_all_chat_messages()] == [logged.id]

    @pytest.mark.asyncio
    async def test_increment_called_exactly_once_with_attributed_id(self, chat_model_factory) -> None:
        engine = engine_for(chat_model_factory, {"response": "9-6", "confidence": 90, "suggestedFaqId": "f1"})

        with patch("faqbot.api.chat_service.increment_faq_usage") as increment:
            await handle_chat_turn("What time do you open", engine)

        increment.assert_called_once_with(faq_id="f1")

    @pytest.mark.asyncio
    async def test_engine_receives_trimmed_message_and_corpus(self, chat_model_factory) -> None:
        faq = create_faq(question="Hours?", answer="9-6 EST")
        engine = MagicMock()
        engine.answer = AsyncMock(return_value=AnswerResult(response="ok", confidence=50))

        await handle_chat_turn("  hours  ", engine)

        message, context = engine.answer.call_args.args
        assert message == "hours"
        assert [(item.id, item.question, item.answer) for item in context] == [(faq.id, "Hours?", "9-6 EST")]

    @pytest.mark.asyncio
    async def test_unknown_attribution_is_tolerated(self, chat_model_factory) -> None:
        faq = create_faq(question="Hours?", answer="9-6 EST")
        engine = engine_for(chat_model_factory, {"response": "ok", "confidence": 80, "suggestedFaqId": "deleted-faq"})

        logged = await handle_chat_turn("hours", engine)

        assert logged.confidence == 80
        assert get_faq_by_id(faq_id=faq.id).usage_count == 0

    @pytest.mark.asyncio
    async def test_no_attribution_means_no_increment(self, chat_model_factory) -> None:
        engine = engine_for(chat_model_factory, {"response": "Sorry, I can only help with our services.", "confidence": 30})

        with patch("faqbot.api.chat_service.increment_faq_usage") as increment:
            await handle_chat_turn("What's the weather?", engine)

        increment.assert_not_called()

    @pytest.mark.asyncio
    async def test_degraded_answer_is_still_logged_as_resolved(self, chat_model_factory) -> None:
        engine = AnswerEngine(chat_model_factory(side_effect=TimeoutError("upstream")))

        logged = await handle_chat_turn("hours", engine)

        assert logged.ai_response == OUTAGE_FALLBACK_RESPONSE
        assert logged.confidence == 0
        assert logged.resolved is True
        assert len(get_all_chat_messages()) == 1
