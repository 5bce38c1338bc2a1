from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from stayvision.api.conversation_service import ConversationService
from stayvision.core.config import ApiSettings
from stayvision.services.feedback import FeedbackSink


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


@lru_cache(maxsize=1)
def get_conversation_service() -> ConversationService:
    return ConversationService.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_feedback_sink() -> FeedbackSink:
    return FeedbackSink()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        get_conversation_service.cache_clear()
