"""Pydantic data models for the StayVision "Simulate Your Stay" flow.

Key model categories:
- Property / Review: the static rental catalog
- ConversationStep: one question-answer exchange of a guided session
- Activity / DayItinerary / SimulationResult: the generated stay preview
- ChatMessage: role/content pairs exchanged with the HTTP front end
- Feedback: satisfaction ratings collected after a preview
- ConversationState / ConversationContext: LangGraph state and runtime context
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional

from langchain_core.messages import AnyMessage
from langgraph.graph.message import add_messages
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stayvision.core.types import (
    ActivityType,
    Count,
    MessageRole,
    NonEmptyStr,
    Rating,
    SatisfactionScore,
)

ACTIVITY_TYPES = ("arrival", "meal", "activity", "rest", "departure")


class Review(BaseModel):
    """A guest review attached to a property."""

    id: str
    author: str
    rating: Rating
    date: str = Field(description="Display date, e.g. '15th January 2025'")
    comment: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class Property(BaseModel):
    """A rentable holiday property with descriptive metadata and reviews.

    Monetary values are display strings (``"£778"``) because they are only ever
    shown to the guest or embedded in prompts. The model is frozen: catalog
    entries are created once at import time and never mutated.
    """

    id: str
    name: str
    location: str
    image: str
    price: Optional[str] = None
    original_price: Optional[str] = None
    sleeps: Count
    bedrooms: Count
    bathrooms: Count
    dogs_allowed: Count = 0
    rating: Rating
    description: str
    features: List[str] = Field(default_factory=list)
    nearby_attractions: List[str] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_prompt_json(self) -> str:
        """Indented JSON rendering embedded in the model prompts."""

        return self.model_dump_json(by_alias=True, indent=2)


class ConversationStep(BaseModel):
    """A question shown to the guest and, once given, their answer."""

    id: str = Field(description="Phase tag: 'initial', 'follow-up-1', ...")
    question: str
    user_answer: str = ""
    is_completed: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Activity(BaseModel):
    """One timed entry of a day plan."""

    time: str
    description: str
    location: Optional[str] = None
    type: ActivityType

    model_config = ConfigDict(frozen=True)


class DayItinerary(BaseModel):
    day: int = Field(ge=1)
    title: str
    activities: List[Activity] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SimulationResult(BaseModel):
    """Generated stay preview: a day-by-day itinerary plus tips and highlights.

    ``offline`` is only ever true for the placeholder produced by the keyword
    fallback client, so front ends can label it as such.
    """

    itinerary: List[DayItinerary]
    personalized_tips: List[str] = Field(alias="personalizedTips")
    highlights: List[str]
    offline: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ChatMessage(BaseModel):
    """Role/content pair used on the HTTP conversation protocol."""

    role: MessageRole
    content: str


class Feedback(BaseModel):
    """Guest satisfaction feedback about a generated preview."""

    property_id: NonEmptyStr
    rating: SatisfactionScore
    feedback: Optional[Literal["positive", "negative"]] = None
    answers: Dict[str, str] = Field(default_factory=dict)
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationContext(BaseModel):
    """Runtime context for one invocation of the conversation graph."""

    property: Property
    system_prompt: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ConversationState(BaseModel):
    """LangGraph state for the stateless conversation endpoint.

    Attributes:
        messages: Full conversation history including the system prompt
        user_message: The guest's latest message, if one was sent with the request
        completed: True once the final itinerary has been generated
        results: The parsed simulation result when ``completed`` is true
    """

    messages: Annotated[List[AnyMessage], add_messages] = Field(default_factory=list)
    user_message: Optional[str] = None
    completed: bool = False
    results: Optional[SimulationResult] = None

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "ACTIVITY_TYPES",
    "Review",
    "Property",
    "ConversationStep",
    "Activity",
    "DayItinerary",
    "SimulationResult",
    "ChatMessage",
    "Feedback",
    "ConversationContext",
    "ConversationState",
]
