"""
FastAPI application bootstrap with: \n
- Lifespan-managed initialization (schema, demo FAQ corpus, answer engine) \n
- CORS configured for the frontend \n
- 400 responses for malformed request bodies \n
- The `/api` router \n

Environment contract (from `settings`): \n
- FRONTEND_URL: allowed CORS origin. \n
- SEED_DEFAULT_FAQS: seed the demo corpus on an empty store. \n
- LOG_LEVEL: root logging level. \n
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from faqbot.api.answer_engine import AnswerEngine
from faqbot.api.fast_api import router
from faqbot.database.config.config import settings
from faqbot.database.config.connection_engine import init_db
from faqbot.database.core.funcs import seed_default_faqs

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("uvicorn")
"""Logger instance for capturing and emitting Uvicorn server logs."""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Create the schema.
        * If SEED_DEFAULT_FAQS, seed the demo corpus on an empty store.
        * Build the answer engine and attach it to `app.state` (unless one was
          injected already, e.g. by tests).
    - On shutdown (after yielding): nothing to release; the default store is
      in-memory and disappears with the process.
    """
    init_db()
    if settings.SEED_DEFAULT_FAQS:
        seeded = seed_default_faqs()
        logger.info("Knowledge base ready (%d default FAQs seeded)", seeded)

    if getattr(app.state, "answer_engine", None) is None:
        app.state.answer_engine = AnswerEngine.from_settings()
        logger.info("Answer engine ready (model=%s)", settings.OPEN_AI_MODEL)

    try:
        yield
    finally:
        logger.info("App shutting down.")


app = FastAPI(title="FAQ Assistant", lifespan=lifespan)
"""Instantiates the FastAPI application object with the lifespan handler above."""

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies and query parameters as 400 instead of FastAPI's default 422."""
    return JSONResponse(
        status_code=400,
        content={"detail": {"error": "invalid_request", "reason": jsonable_encoder(exc.errors())}},
    )


app.include_router(router)


def run() -> None:
    """Serve the app with uvicorn on `settings.HOST`:`settings.PORT` (console script `faqbot`)."""
    uvicorn.run("faqbot.main:app", host=settings.HOST, port=settings.PORT)
