from typing import Any, List, Mapping, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from stayvision.api.schemas import ConversationResponse
from stayvision.core.schemas import ChatMessage, Property, SimulationResult
from stayvision.services.llm import message_text


def _role_for(message: BaseMessage) -> str:
    if isinstance(message, SystemMessage):
        return "system"
    if isinstance(message, HumanMessage):
        return "user"
    if isinstance(message, AIMessage):
        return "assistant"
    raise ValueError(f"Unsupported message type in conversation: {type(message).__name__}")


def _messages_to_wire(raw_messages: Sequence[Any]) -> List[ChatMessage]:
    rendered: List[ChatMessage] = []
    for message in raw_messages:
        if isinstance(message, BaseMessage):
            rendered.append(ChatMessage(role=_role_for(message), content=message_text(message)))
        elif isinstance(message, ChatMessage):
            rendered.append(message)
        else:
            rendered.append(ChatMessage.model_validate(message))
    return rendered


def _result_to_response(property: Property, result: Mapping[str, Any]) -> ConversationResponse:
    completed = bool(result.get("completed"))
    results: Optional[SimulationResult] = result.get("results") if completed else None
    return ConversationResponse(
        success=True,
        property=property,
        messages=_messages_to_wire(result.get("messages", [])),
        completed=completed,
        results=results,
    )
