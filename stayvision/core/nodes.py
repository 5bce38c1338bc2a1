"""LangGraph nodes for the stateless conversation endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Sequence

from langchain_core.messages import AIMessage, AnyMessage, HumanMessage, SystemMessage
from langgraph.runtime import Runtime

from stayvision.core.post_processing import parse_simulation_result
from stayvision.core.prompts import (
    ITINERARY_REQUEST_MESSAGE,
    build_itinerary_system_prompt,
    build_welcome_message,
)
from stayvision.core.schemas import ConversationContext, ConversationState
from stayvision.services.llm import JSON_RESPONSE_FORMAT, ModelClient, message_text

logger = logging.getLogger(__name__)

RESULTS_AFTER_USER_MESSAGES = 4
EARLY_RESULTS_AFTER_USER_MESSAGES = 3
TERMINATION_KEYWORDS = ("thank", "that's all", "sounds good")


def count_user_messages(messages: Sequence[AnyMessage]) -> int:
    return sum(1 for message in messages if isinstance(message, HumanMessage))


def should_generate_results(messages: Sequence[AnyMessage]) -> bool:
    """Decide whether the conversation has gathered enough to build the itinerary.

    Four guest messages always suffice; three suffice when any message in the
    history contains a closing phrase such as "thank" or "sounds good".
    """
    user_messages = count_user_messages(messages)
    if user_messages >= RESULTS_AFTER_USER_MESSAGES:
        return True
    if user_messages >= EARLY_RESULTS_AFTER_USER_MESSAGES:
        return any(
            keyword in message_text(message).lower()
            for message in messages
            for keyword in TERMINATION_KEYWORDS
        )
    return False


def route_conversation(state: ConversationState) -> Literal["welcome", "itinerary", "reply"]:
    """Pick the node that answers this request."""

    only_system = all(isinstance(message, SystemMessage) for message in state.messages)
    if not state.user_message and only_system:
        return "welcome"
    if should_generate_results(state.messages):
        logger.info("Conversation has enough detail; generating itinerary")
        return "itinerary"
    return "reply"


def make_welcome_node(client: ModelClient):
    """Return the node that produces the opening assistant message."""

    async def node(state: ConversationState, runtime: Runtime[ConversationContext]) -> Dict[str, Any]:
        context = runtime.context
        if context.system_prompt:
            content = await client.complete([SystemMessage(content=context.system_prompt)])
        else:
            content = build_welcome_message(context.property)
        return {"messages": [AIMessage(content=content, name="welcome")]}

    return node


def make_reply_node(client: ModelClient):
    """Return the node that asks the model for the next assistant turn."""

    async def node(state: ConversationState, runtime: Runtime[ConversationContext]) -> Dict[str, Any]:
        content = await client.complete(state.messages)
        return {"messages": [AIMessage(content=content, name="reply")]}

    return node


def make_itinerary_node(client: ModelClient):
    """Return the node that turns the conversation into a simulation result."""

    async def node(state: ConversationState, runtime: Runtime[ConversationContext]) -> Dict[str, Any]:
        context = runtime.context
        system_prompt = context.system_prompt or build_itinerary_system_prompt(context.property)

        prompt: List[AnyMessage] = [SystemMessage(content=system_prompt)]
        prompt.extend(message for message in state.messages if not isinstance(message, SystemMessage))
        prompt.append(HumanMessage(content=ITINERARY_REQUEST_MESSAGE))

        raw = await client.complete(prompt, response_format=JSON_RESPONSE_FORMAT)
        results = parse_simulation_result(raw)
        logger.info("Generated itinerary for %s with %d day(s)", context.property.id, len(results.itinerary))
        return {"completed": True, "results": results}

    return node
