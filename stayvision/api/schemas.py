from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stayvision.core.schemas import ChatMessage, Feedback, Property, SimulationResult


class ConversationRequest(BaseModel):
    """Request payload for one turn of the conversation endpoint."""

    property_id: str = Field(description="Catalog id of the property being previewed")
    messages: List[ChatMessage] = Field(
        default_factory=list,
        description="Conversation history returned by the previous call",
    )
    user_message: Optional[str] = Field(
        default=None, description="The guest's new message, if any"
    )
    system_prompt: Optional[str] = Field(
        default=None, description="Custom system prompt overriding the default"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationResponse(BaseModel):
    """Updated conversation and, once complete, the generated preview."""

    success: bool = True
    property: Property
    messages: List[ChatMessage]
    completed: bool = False
    results: Optional[SimulationResult] = Field(
        default=None, description="Generated itinerary when completed is true"
    )


class FeedbackRequest(Feedback):
    """Request payload used to submit feedback about a preview."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class FeedbackResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "StayVision API is running"


class ErrorResponse(BaseModel):
    error: str


class PropertyListResponse(BaseModel):
    properties: List[Property]
    count: int


__all__ = [
    "ConversationRequest",
    "ConversationResponse",
    "FeedbackRequest",
    "FeedbackResponse",
    "HealthResponse",
    "ErrorResponse",
    "PropertyListResponse",
]
