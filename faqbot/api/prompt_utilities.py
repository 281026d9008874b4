"""
Prompt construction for the FAQ answer engine.

Functions
---------
format_faq_context(faqs) -> str
    Render the FAQ corpus as the grounding block of the prompt.
build_answer_messages(user_message, faqs) -> list[BaseMessage]
    System + user messages asking for a grounded, JSON-shaped answer.
build_suggestion_messages(user_message) -> list[BaseMessage]
    System + user messages asking for candidate FAQ questions.

The templates are LangChain `PromptTemplate`s. Both prompts require the model
to answer with a single JSON object; the caller binds
`response_format={"type": "json_object"}` on the chat model as well.
"""

from typing import Iterable, List

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import PromptTemplate

from faqbot.api.models import FaqContextItem

ANSWER_SYSTEM_PROMPT = "You are a helpful customer support AI assistant. Always respond with valid JSON."
"""System message of every answer request."""

SUGGESTION_SYSTEM_PROMPT = "Generate relevant FAQ suggestions. Respond with a JSON object."
"""System message of every suggestion request."""

EMPTY_CONTEXT = "(The knowledge base is currently empty.)"

ANSWER_PROMPT = PromptTemplate.from_template(
    """You are a helpful AI assistant for customer support. Use the following FAQ knowledge base to answer user questions accurately and helpfully.

FAQ Knowledge Base:
{faq_context}

User Question: {user_message}

Instructions:
1. If the question is directly answered in the FAQ, use that information
2. If the question is related but not exactly covered, provide a helpful response based on the available information
3. If the question is completely outside the scope of the FAQs, politely indicate that and offer to help with topics you can assist with
4. Always be friendly, professional, and concise
5. Respond with JSON in this exact format: {{"response": "your answer here", "confidence": 85, "suggestedFaqId": "faq_id_if_applicable"}}

The confidence should be 0-100 representing how confident you are in your answer.
Only include suggestedFaqId if you used a specific FAQ to answer the question, and copy its id exactly as shown in the knowledge base."""
)
"""Grounded answer prompt. Placeholders: `faq_context`, `user_message`."""

SUGGESTION_PROMPT = PromptTemplate.from_template(
    """Based on this user message: "{user_message}", suggest 3-5 potential FAQ questions that might be relevant.
Respond with JSON in this exact format: {{"suggestions": ["question 1", "question 2", "question 3"]}}"""
)
"""FAQ suggestion prompt. Placeholder: `user_message`."""


def format_faq_context(faqs: Iterable[FaqContextItem]) -> str:
    """
    Serialize the corpus into question/answer pairs tagged with their ids.

    Parameters
    ----------
    faqs : Iterable[FaqContextItem]
        The `{id, question, answer}` projection of the corpus, in corpus order.

    Returns
    -------
    str
        Entries separated by blank lines, e.g.::

            [FAQ id: f1]
            Q: Hours?
            A: 9-6 EST
    """
    blocks = [f"[FAQ id: {faq.id}]\nQ: {faq.question}\nA: {faq.answer}" for faq in faqs]
    return "\n\n".join(blocks) if blocks else EMPTY_CONTEXT


def build_answer_messages(user_message: str, faqs: Iterable[FaqContextItem]) -> List[BaseMessage]:
    """Chat messages for one grounded answer request."""
    prompt = ANSWER_PROMPT.format(faq_context=format_faq_context(faqs), user_message=user_message)
    return [SystemMessage(content=ANSWER_SYSTEM_PROMPT), HumanMessage(content=prompt)]


def build_suggestion_messages(user_message: str) -> List[BaseMessage]:
    """Chat messages for one FAQ suggestion request."""
    prompt = SUGGESTION_PROMPT.format(user_message=user_message)
    return [SystemMessage(content=SUGGESTION_SYSTEM_PROMPT), HumanMessage(content=prompt)]
