"""Tests for the FAQ knowledge-base service functions."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from faqbot.api.models import FaqUpdate
from faqbot.database.core.funcs import (
    DEFAULT_FAQS,
    create_faq,
    delete_faq,
    get_all_faqs,
    get_categories,
    get_faq_by_id,
    get_faq_context,
    increment_faq_usage,
    list_faqs,
    search_faqs,
    seed_default_faqs,
    update_faq,
)
from faqbot.errors import ValidationError


@pytest.fixture
def corpus():
    """Three FAQs created oldest → newest."""
    hours = create_faq(question="What are your hours?", answer="9-6 EST", category="General")
    refund = create_faq(question="What is your refund policy?", answer="30 days, no questions asked", category="Billing")
    reset = create_faq(question="How do I reset my password?", answer="Use the Forgot Password link", category="Technical")
    return hours, refund, reset


class TestCreate:
    def test_new_entry_starts_unused(self) -> None:
        faq = create_faq(question="What is your refund policy?", answer="30 days, no questions asked", category="Billing")

        assert faq.usage_count == 0
        assert faq.category == "Billing"
        assert faq.created_at == faq.updated_at
        assert faq.id

    def test_ids_are_unique(self) -> None:
        first = create_faq(question="Q1", answer="A1")
        second = create_faq(question="Q2", answer="A2")

        assert first.id != second.id

    @pytest.mark.parametrize("category", [None, "", "   "])
    def test_category_defaults_to_general(self, category) -> None:
        faq = create_faq(question="Q", answer="A", category=category)

        assert faq.category == "General"

    @pytest.mark.parametrize("question,answer", [("", "A"), ("Q", ""), ("   ", "A"), ("Q", "\n\t")])
    def test_blank_question_or_answer_is_rejected(self, question, answer) -> None:
        with pytest.raises(ValidationError):
            create_faq(question=question, answer=answer)

        assert get_all_faqs() == []

    def test_created_entry_is_retrievable(self) -> None:
        faq = create_faq(question="Q", answer="A")

        assert get_faq_by_id(faq_id=faq.id) == faq


class TestRead:
    def test_get_all_is_most_recent_first(self, corpus) -> None:
        hours, refund, reset = corpus

        assert [faq.id for faq in get_all_faqs()] == [reset.id, refund.id, hours.id]

    def test_unknown_id_is_absent(self) -> None:
        assert get_faq_by_id(faq_id="missing") is None

    def test_context_projection_keeps_order(self, corpus) -> None:
        context = get_faq_context()

        assert [item.id for item in context] == [faq.id for faq in get_all_faqs()]
        assert context[0].question == "How do I reset my password?"
        assert context[0].answer == "Use the Forgot Password link"

    def test_categories_are_distinct_and_sorted(self, corpus) -> None:
        create_faq(question="Another billing question", answer="Yes", category="Billing")

        assert get_categories() == ["Billing", "General", "Technical"]


class TestUpdate:
    def test_merges_only_provided_fields(self, corpus) -> None:
        hours, _, _ = corpus

        updated = update_faq(faq_id=hours.id, data=FaqUpdate(answer="8-5 PST"))

        assert updated.answer == "8-5 PST"
        assert updated.question == hours.question
        assert updated.category == hours.category
        assert updated.created_at == hours.created_at
        assert updated.updated_at >= hours.updated_at

    def test_update_moves_entry_to_front(self, corpus) -> None:
        hours, _, _ = corpus

        update_faq(faq_id=hours.id, data=FaqUpdate(category="Support"))

        assert get_all_faqs()[0].id == hours.id

    def test_unknown_id_returns_none(self) -> None:
        assert update_faq(faq_id="missing", data=FaqUpdate(question="Q")) is None

    def test_blank_question_is_rejected(self, corpus) -> None:
        hours, _, _ = corpus

        with pytest.raises(ValidationError):
            update_faq(faq_id=hours.id, data=FaqUpdate(question=" "))

        assert get_faq_by_id(faq_id=hours.id).question == hours.question

    def test_explicit_null_answer_is_rejected(self, corpus) -> None:
        hours, _, _ = corpus

        with pytest.raises(ValidationError):
            update_faq(faq_id=hours.id, data=FaqUpdate.model_validate({"answer": None}))

    def test_blank_category_falls_back_to_general(self, corpus) -> None:
        _, refund, _ = corpus

        updated = update_faq(faq_id=refund.id, data=FaqUpdate(category=""))

        assert updated.category == "General"


class TestDelete:
    def test_delete_existing(self, corpus) -> None:
        hours, _, _ = corpus

        assert delete_faq(faq_id=hours.id) is True
        assert get_faq_by_id(faq_id=hours.id) is None
        assert len(get_all_faqs()) == 2

    def test_delete_unknown_returns_false(self) -> None:
        assert delete_faq(faq_id="missing") is False


class TestSearch:
    def test_matches_question_case_insensitively(self, corpus) -> None:
        _, refund, _ = corpus

        assert [faq.id for faq in search_faqs(query="REFUND")] == [refund.id]

    def test_matches_answer(self, corpus) -> None:
        hours, _, _ = corpus

        assert [faq.id for faq in search_faqs(query="6 est")] == [hours.id]

    def test_matches_category(self, corpus) -> None:
        _, _, reset = corpus

        assert [faq.id for faq in search_faqs(query="technical")] == [reset.id]

    def test_results_keep_get_all_order(self, corpus) -> None:
        hours, refund, _ = corpus

        # "what" appears in two questions
        assert [faq.id for faq in search_faqs(query="what")] == [refund.id, hours.id]

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_returns_everything(self, corpus, query) -> None:
        assert search_faqs(query=query) == get_all_faqs()

    def test_no_match(self, corpus) -> None:
        assert search_faqs(query="shipping") == []


class TestListFaqs:
    def test_category_filter(self, corpus) -> None:
        _, refund, _ = corpus

        assert [faq.id for faq in list_faqs(category="Billing")] == [refund.id]

    def test_all_categories_means_no_filter(self, corpus) -> None:
        assert list_faqs(category="All Categories") == get_all_faqs()

    def test_search_and_category_combine(self, corpus) -> None:
        assert list_faqs(search="what", category="Technical") == []


class TestIncrementUsage:
    def test_increments_and_refreshes_updated_at(self, corpus) -> None:
        hours, _, _ = corpus

        increment_faq_usage(faq_id=hours.id)
        first = get_faq_by_id(faq_id=hours.id)
        increment_faq_usage(faq_id=hours.id)
        second = get_faq_by_id(faq_id=hours.id)

        assert first.usage_count == 1
        assert second.usage_count == 2
        assert first.updated_at >= hours.updated_at
        assert second.updated_at >= first.updated_at
        assert second.created_at == hours.created_at

    def test_used_entry_moves_to_front(self, corpus) -> None:
        hours, _, _ = corpus

        increment_faq_usage(faq_id=hours.id)

        assert get_all_faqs()[0].id == hours.id

    def test_unknown_id_is_a_noop(self, corpus) -> None:
        before = get_all_faqs()

        increment_faq_usage(faq_id="missing")

        assert get_all_faqs() == before

    def test_concurrent_increments_are_all_counted(self, corpus) -> None:
        hours, _, _ = corpus

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(lambda _: increment_faq_usage(faq_id=hours.id), range(40)))

        assert get_faq_by_id(faq_id=hours.id).usage_count == 40


class TestSeeding:
    def test_seeds_empty_store(self) -> None:
        assert seed_default_faqs() == len(DEFAULT_FAQS)

        faqs = get_all_faqs()
        assert {faq.category for faq in faqs} == {"General", "Technical", "Billing"}
        assert all(faq.usage_count == 0 for faq in faqs)

    def test_does_not_seed_twice(self) -> None:
        seed_default_faqs()

        assert seed_default_faqs() == 0
        assert len(get_all_faqs()) == len(DEFAULT_FAQS)

    def test_does_not_touch_existing_corpus(self, corpus) -> None:
        assert seed_default_faqs() == 0
        assert len(get_all_faqs()) == 3
