"""Error taxonomy shared by the orchestrator, the graph and the HTTP layer."""
from __future__ import annotations

from typing import Optional


class StayVisionError(Exception):
    """Base class for all errors surfaced to the interactive layer."""

    status_code: int = 500
    public_message: str = "Failed to process conversation"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.public_message)


class PropertyNotFoundError(StayVisionError):
    """Raised when a property id does not resolve in the catalog."""

    status_code = 404
    public_message = "Property not found"

    def __init__(self, property_id: str) -> None:
        self.property_id = property_id
        super().__init__(f"Property '{property_id}' not found")


class UpstreamFailureError(StayVisionError):
    """The language model call failed (network, HTTP status, rate limiting)."""

    status_code = 502
    public_message = "The itinerary assistant is unavailable right now. Please try again."


class MalformedModelOutputError(StayVisionError):
    """The model replied, but not with a usable simulation result."""

    status_code = 502
    public_message = "We couldn't read the generated itinerary. Please try again."

    def __init__(self, message: Optional[str] = None, *, raw_output: Optional[str] = None) -> None:
        self.raw_output = raw_output
        super().__init__(message)


class InvalidTransitionError(StayVisionError, ValueError):
    """An orchestrator operation was called from a phase that does not allow it."""

    public_message = "That action is not available at this point of the conversation."
