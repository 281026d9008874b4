"""
API Package — FastAPI Router • Models • Answer Engine • Chat Orchestration
=========================================================================

Mission
-------
This package defines the backend's HTTP interface and the FAQ-grounded
answering flow behind it.

Contents
--------
- fast_api
    FastAPI router (prefix `/api`) with endpoints for:
      • FAQs: list/search/filter, categories, read, create, update, delete
      • FAQ suggestions for a user message
      • Chat (/chat): answer one message and log it; chat history
      • Stats: corpus size, monthly queries, resolution rate

- models
    Pydantic data contracts: request payloads (FaqCreate, FaqUpdate,
    ChatRequest, SuggestionRequest), responses (ChatReply, StatsReply,
    SuggestionReply) and the immutable snapshots returned by the service
    layer (FaqRecord, ChatMessageRecord, FaqContextItem, AnswerResult).

- answer_engine
    `AnswerEngine`: grounding prompt → LangChain chat model (JSON mode) →
    defensive parsing → confidence clamp → optional FAQ attribution.
    Completion-service failures degrade to a zero-confidence apology.

- prompt_utilities
    LangChain `PromptTemplate`s and the FAQ grounding-block serializer.

- utils
    Model-output helpers: content normalization, JSON parsing with
    `json_repair` fallback, confidence coercion.

- chat_service
    `handle_chat_turn`: validate → snapshot corpus → answer → usage
    increment → log exchange.
"""
