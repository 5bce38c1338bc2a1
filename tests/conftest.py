"""Pytest configuration and shared test doubles for StayVision."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest

# Ensure the project root is on sys.path so that import stayvision works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stayvision.core.catalog import get_catalog  # noqa: E402
from stayvision.core.schemas import Property  # noqa: E402
from stayvision.services.llm import message_text, to_langchain_message  # noqa: E402


class StubModelClient:
    """Captures prompts and yields preconfigured replies in order.

    A reply that is an ``Exception`` instance is raised instead of returned.
    """

    def __init__(self, replies: Optional[Sequence[Union[str, Exception]]] = None) -> None:
        self.replies: List[Union[str, Exception]] = list(replies or [])
        self.calls: List[Tuple[List[Any], Optional[Dict[str, Any]]]] = []

    def queue(self, *replies: Union[str, Exception]) -> None:
        self.replies.extend(replies)

    async def complete(self, messages, *, response_format=None) -> str:
        self.calls.append(([to_langchain_message(m) for m in messages], response_format))
        if not self.replies:  # pragma: no cover - protects against missing test fixtures
            raise AssertionError("No stubbed reply left for model call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def prompt_text(self, index: int = -1) -> str:
        messages, _ = self.calls[index]
        return "\n".join(message_text(message) for message in messages)


def make_itinerary_payload(days: int = 3, activities_per_day: int = 5) -> Dict[str, Any]:
    kinds = ["arrival", "meal", "activity", "rest", "meal", "activity", "departure"]
    return {
        "itinerary": [
            {
                "day": day,
                "title": f"Day {day} at the farm",
                "activities": [
                    {
                        "time": f"{9 + slot}:00",
                        "description": f"Activity {slot + 1} of day {day}",
                        "type": kinds[slot % len(kinds)],
                    }
                    for slot in range(activities_per_day)
                ],
            }
            for day in range(1, days + 1)
        ],
        "personalizedTips": [
            "Book the Italian restaurant next door early",
            "Bring walking boots for Hollingworth Lake",
            "Use the boot room for muddy gear",
            "Light the wood burner on the first evening",
        ],
        "highlights": [
            "BBQ in the vast garden",
            "Hike in Piethorne Valley",
            "Dinner next door",
        ],
    }


def make_itinerary_json(**kwargs: Any) -> str:
    return json.dumps(make_itinerary_payload(**kwargs))


@pytest.fixture
def wildhouse() -> Property:
    return get_catalog().lookup("wildhouse-farm")


@pytest.fixture
def stub_client() -> StubModelClient:
    return StubModelClient()
