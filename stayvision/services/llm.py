"""Thin async wrapper around the chat completion model."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from stayvision.core.config import ApiSettings
from stayvision.core.errors import UpstreamFailureError
from stayvision.core.schemas import ChatMessage

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT: Dict[str, str] = {"type": "json_object"}

PromptMessage = Union[BaseMessage, ChatMessage, Mapping[str, Any]]


class ModelClient(Protocol):
    """Contract consumed by the orchestrator and the conversation graph."""

    async def complete(
        self,
        messages: Sequence[PromptMessage],
        *,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        ...


def to_langchain_message(message: PromptMessage) -> BaseMessage:
    """Normalise wire-format messages into LangChain message objects."""

    if isinstance(message, BaseMessage):
        return message
    if isinstance(message, ChatMessage):
        role, content = message.role, message.content
    else:
        role, content = message.get("role"), message.get("content", "")

    if role == "system":
        return SystemMessage(content=content)
    if role == "assistant":
        return AIMessage(content=content)
    if role == "user":
        return HumanMessage(content=content)
    raise ValueError(f"Unsupported message role: {role!r}")


def message_text(message: Any) -> str:
    """Extract plain text from a chat model reply."""

    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                chunks.append(chunk)
        return "\n".join(chunks)
    return "" if content is None else str(content)


class ChatModelClient:
    """Calls a LangChain chat model and returns the assistant text.

    Any failure raised by the underlying transport is reported as
    ``UpstreamFailureError`` so callers only deal with the domain taxonomy.
    """

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    def __repr__(self) -> str:
        model_name = getattr(self.llm, "model_name", None) or type(self.llm).__name__
        return f"ChatModelClient(llm='{model_name}')"

    async def complete(
        self,
        messages: Sequence[PromptMessage],
        *,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        prompt = [to_langchain_message(message) for message in messages]
        model = self.llm.bind(response_format=response_format) if response_format else self.llm
        logger.debug("Calling chat model with %d message(s), response_format=%s", len(prompt), response_format)

        try:
            reply = await model.ainvoke(prompt)
        except Exception as exc:
            logger.error(f"Chat model call failed: {exc}")
            raise UpstreamFailureError(f"Chat model call failed: {exc}") from exc

        text = message_text(reply).strip()
        logger.debug("Chat model replied with %d characters", len(text))
        return text


def create_chat_model(settings: ApiSettings) -> BaseChatModel:
    kwargs: Dict[str, Any] = {
        "model": settings.openai_model,
        "temperature": settings.llm_temperature,
        "api_key": settings.ensure("openai_api_key"),
    }
    if settings.llm_timeout_seconds is not None:
        kwargs["timeout"] = settings.llm_timeout_seconds
    return ChatOpenAI(**kwargs)


def build_model_client(settings: ApiSettings) -> ModelClient:
    """Return the OpenAI-backed client, or the offline fallback without credentials."""

    if settings.has_model_credentials:
        return ChatModelClient(create_chat_model(settings))

    from stayvision.services.fallback import KeywordFallbackClient

    logger.warning("OPENAI_API_KEY is not set; using the offline keyword fallback client")
    return KeywordFallbackClient()
