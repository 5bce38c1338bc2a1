"""Service layer: language model clients and the feedback sink."""
from __future__ import annotations

from stayvision.services.feedback import FeedbackSink
from stayvision.services.fallback import KeywordFallbackClient
from stayvision.services.llm import (
    JSON_RESPONSE_FORMAT,
    ChatModelClient,
    ModelClient,
    build_model_client,
    create_chat_model,
)

__all__ = [
    "JSON_RESPONSE_FORMAT",
    "ChatModelClient",
    "FeedbackSink",
    "KeywordFallbackClient",
    "ModelClient",
    "build_model_client",
    "create_chat_model",
]
