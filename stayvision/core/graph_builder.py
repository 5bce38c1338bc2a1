from typing import Any

from langgraph.graph import END, START, StateGraph

from stayvision.core.nodes import (
    make_itinerary_node,
    make_reply_node,
    make_welcome_node,
    route_conversation,
)
from stayvision.core.schemas import ConversationContext, ConversationState
from stayvision.services.llm import ModelClient


def build_conversation_graph(*, client: ModelClient) -> Any:
    """Wire the conversation nodes into a compiled LangGraph state machine.

    Every request carries the whole history, so the graph is compiled without a
    checkpointer.
    """

    graph_builder = StateGraph(state_schema=ConversationState, context_schema=ConversationContext)

    graph_builder.add_node("welcome", make_welcome_node(client))
    graph_builder.add_node("reply", make_reply_node(client))
    graph_builder.add_node("itinerary", make_itinerary_node(client))

    graph_builder.add_conditional_edges(START, route_conversation, ["welcome", "itinerary", "reply"])

    graph_builder.add_edge("welcome", END)
    graph_builder.add_edge("reply", END)
    graph_builder.add_edge("itinerary", END)

    return graph_builder.compile()
