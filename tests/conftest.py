"""Shared fixtures: an empty in-memory store per test and fake chat models."""

import os

# Must be set before faqbot.database.config.config builds the settings singleton
os.environ["DB_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SEED_DEFAULT_FAQS"] = "false"
os.environ.setdefault("API_KEY", "sk-test")

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from faqbot.database.config.connection_engine import reset_db


@pytest.fixture(autouse=True)
def clean_store():
    """Every test starts from an empty schema."""
    reset_db()
    yield


@pytest.fixture
def chat_model_factory():
    """Build a fake LangChain chat model.

    `model.bind(...)` returns an object whose `ainvoke` is an AsyncMock that
    either returns an AIMessage with `content` or raises `side_effect`.
    """

    def make(content: str = "", side_effect=None) -> MagicMock:
        json_model = MagicMock()
        json_model.ainvoke = AsyncMock(return_value=AIMessage(content=content), side_effect=side_effect)
        model = MagicMock()
        model.bind.return_value = json_model
        return model

    return make
