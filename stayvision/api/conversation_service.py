import logging
from typing import Any, List, Mapping, Optional, Tuple

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from stayvision.api.schemas import ConversationRequest
from stayvision.core.catalog import PropertyCatalog, get_catalog
from stayvision.core.config import ApiSettings
from stayvision.core.errors import PropertyNotFoundError
from stayvision.core.graph_builder import build_conversation_graph
from stayvision.core.prompts import build_default_system_prompt
from stayvision.core.schemas import ConversationContext, ConversationState, Property
from stayvision.services.llm import ModelClient, build_model_client, to_langchain_message

logger = logging.getLogger(__name__)


class ConversationService:
    """Container for the conversation graph and its dependencies.

    Each call to ``respond`` is self-contained: the front end resends the full
    history, the service resolves the property, seeds the system prompt when the
    conversation is new, and runs the graph once.

    Attributes:
        catalog: Property catalog used to resolve request ids
        client: Model client shared by every graph node
        graph: Compiled LangGraph conversation graph
    """

    def __init__(self, catalog: PropertyCatalog, client: ModelClient) -> None:
        self.catalog = catalog
        self.client = client
        self.graph = build_conversation_graph(client=client)

    @classmethod
    def from_settings(cls, settings: ApiSettings) -> "ConversationService":
        return cls(get_catalog(), build_model_client(settings))

    def __repr__(self) -> str:
        return (
            f"ConversationService(\n"
            f"  client={self.client!r},\n"
            f"  properties={len(self.catalog)},\n"
            f"  graph_compiled={self.graph is not None}\n"
            f")"
        )

    def resolve_property(self, property_id: str) -> Property:
        prop = self.catalog.lookup(property_id)
        if prop is None:
            logger.info("Unknown property requested: %s", property_id)
            raise PropertyNotFoundError(property_id)
        return prop

    @staticmethod
    def build_history(
        property: Property,
        messages: List[BaseMessage],
        user_message: Optional[str],
        system_prompt: Optional[str],
    ) -> List[BaseMessage]:
        """Append the new guest message and seed the system prompt for new conversations."""

        history = list(messages)
        if user_message:
            history.append(HumanMessage(content=user_message))

        if not history or (len(history) == 1 and user_message):
            history.insert(0, SystemMessage(content=system_prompt or build_default_system_prompt(property)))
        return history

    async def respond(self, request: ConversationRequest) -> Tuple[Property, Mapping[str, Any]]:
        """Run one conversation turn.

        Returns:
            Tuple containing the resolved property and the final graph state.

        Raises:
            PropertyNotFoundError: before any model call when the id is unknown
            UpstreamFailureError: when the model call fails
            MalformedModelOutputError: when the itinerary cannot be parsed
        """
        prop = self.resolve_property(request.property_id)

        user_message = request.user_message or None
        history = self.build_history(
            prop,
            [to_langchain_message(message) for message in request.messages],
            user_message,
            request.system_prompt,
        )
        logger.info(
            "Conversation turn for %s: %d message(s), new user message: %s",
            prop.id,
            len(history),
            user_message is not None,
        )

        result = await self.graph.ainvoke(
            ConversationState(messages=history, user_message=user_message),
            context=ConversationContext(property=prop, system_prompt=request.system_prompt),
        )
        return prop, result
