"""Shared type aliases used across the data models."""
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, StringConstraints

Rating = Annotated[float, Field(ge=0, le=5)]
Count = Annotated[int, Field(ge=0)]
SatisfactionScore = Annotated[int, Field(ge=1, le=10)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ActivityType = Literal["arrival", "meal", "activity", "rest", "departure"]
MessageRole = Literal["system", "user", "assistant"]
