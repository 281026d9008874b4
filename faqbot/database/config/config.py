"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Every field carries a development default, so the service boots without a `.env`.
- `extra="ignore"`: unknown env vars are ignored (not an error).

Usage
-----
from faqbot.database.config.config import settings

# Example
db_url = settings.DB_URL
openai_model = settings.OPEN_AI_MODEL

Security
--------
- Never commit secrets or the `.env` file to source control.
- Prefer runtime environment variables in production (K8s/Secrets Manager/etc.).
"""


from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    API_KEY: str = Field("", description="OpenAI API key used by the answer engine.")
    OPEN_AI_MODEL: str = Field("gpt-4o-mini", description="OpenAI chat model name (e.g., `gpt-4o-mini`).")
    LLM_TEMPERATURE: float = Field(0.7, description="Sampling temperature for FAQ answers (consistency over creativity).")
    LLM_MAX_TOKENS: int = Field(500, description="Upper bound on the completion length of a single answer.")
    LLM_TIMEOUT_SECONDS: float = Field(30.0, description="Seconds to wait for the completion service before degrading.")
    DB_URL: str = Field("sqlite+pysqlite:///:memory:", description="SQLAlchemy URL. The default is a volatile in-memory store.")
    FRONTEND_URL: str = Field("http://localhost:5173", description="Base URL of the frontend client application (CORS origin).")
    SEED_DEFAULT_FAQS: bool = Field(True, description="Seed the demo FAQ corpus at startup when the table is empty.")
    CHAT_HISTORY_DEFAULT_LIMIT: int = Field(50, description="Default `limit` of the chat history endpoint.")
    LOG_LEVEL: str = Field("INFO", description="Root logging level (e.g., `DEBUG`, `INFO`).")
    HOST: str = Field("127.0.0.1", description="Interface the bundled uvicorn server binds to.")
    PORT: int = Field(8000, description="Port the bundled uvicorn server listens on.")

# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the .env file"""
