"""Tests for the chat model wrapper and client selection."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from stayvision.core.config import ApiSettings
from stayvision.core.errors import UpstreamFailureError
from stayvision.core.schemas import ChatMessage
from stayvision.services.fallback import KeywordFallbackClient
from stayvision.services.llm import (
    JSON_RESPONSE_FORMAT,
    ChatModelClient,
    build_model_client,
    message_text,
    to_langchain_message,
)


class FakeChatModel:
    """Records invocations the way a bound LangChain chat model would receive them."""

    def __init__(self, reply: Any = None, error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.bound: List[Dict[str, Any]] = []
        self.prompts: List[List[Any]] = []

    def bind(self, **kwargs: Any) -> "FakeChatModel":
        self.bound.append(kwargs)
        return self

    async def ainvoke(self, prompt: List[Any]) -> Any:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.mark.parametrize(
    "message, expected_type",
    [
        ({"role": "system", "content": "s"}, SystemMessage),
        ({"role": "user", "content": "u"}, HumanMessage),
        (ChatMessage(role="assistant", content="a"), AIMessage),
    ],
)
def test_to_langchain_message(message, expected_type):
    converted = to_langchain_message(message)

    assert isinstance(converted, expected_type)


def test_to_langchain_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        to_langchain_message({"role": "tool", "content": "x"})


def test_message_text_joins_text_chunks():
    message = AIMessage(content=[{"type": "text", "text": "Hello"}, "there", {"type": "image_url"}])

    assert message_text(message) == "Hello\nthere"


@pytest.mark.asyncio
async def test_chat_model_client_returns_stripped_text():
    llm = FakeChatModel(reply=AIMessage(content="  Who is coming along?  \n"))
    client = ChatModelClient(llm)

    text = await client.complete([{"role": "system", "content": "Ask a question"}])

    assert text == "Who is coming along?"
    assert llm.bound == []
    assert isinstance(llm.prompts[0][0], SystemMessage)


@pytest.mark.asyncio
async def test_chat_model_client_binds_response_format():
    llm = FakeChatModel(reply=AIMessage(content="{}"))
    client = ChatModelClient(llm)

    await client.complete([HumanMessage(content="json please")], response_format=JSON_RESPONSE_FORMAT)

    assert llm.bound == [{"response_format": {"type": "json_object"}}]


@pytest.mark.asyncio
async def test_chat_model_client_wraps_transport_errors():
    client = ChatModelClient(FakeChatModel(error=TimeoutError("read timed out")))

    with pytest.raises(UpstreamFailureError) as excinfo:
        await client.complete([HumanMessage(content="hi")])

    assert excinfo.value.status_code == 502
    assert isinstance(excinfo.value.__cause__, TimeoutError)


def test_build_model_client_without_key_uses_fallback():
    client = build_model_client(ApiSettings(openai_api_key=None))

    assert isinstance(client, KeywordFallbackClient)


def test_build_model_client_with_key_uses_openai():
    settings = ApiSettings(openai_api_key="sk-test", openai_model="gpt-4o-mini", llm_timeout_seconds=12.5)

    client = build_model_client(settings)

    assert isinstance(client, ChatModelClient)
    assert client.llm.model_name == "gpt-4o-mini"
    assert client.llm.temperature == 0.7
