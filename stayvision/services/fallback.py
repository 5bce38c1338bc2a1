"""Offline stand-in for the chat model.

``KeywordFallbackClient`` implements the same ``complete`` contract as
``ChatModelClient`` but never leaves the process. It recognises which phase of
the conversation a prompt belongs to and answers with canned questions or a
placeholder itinerary assembled from keywords found in the guest's answers.
Placeholder itineraries carry ``"offline": true``.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.messages import HumanMessage

from stayvision.core.prompts import ITINERARY_REQUEST_MESSAGE, READY_SENTINEL
from stayvision.services.llm import PromptMessage, message_text, to_langchain_message

logger = logging.getLogger(__name__)

FALLBACK_QUESTIONS = [
    "Lovely! Who's joining you on this trip? (e.g. family with young kids, a group of friends, couple + dog)",
    "What do you most enjoy doing on holiday? (e.g. hiking, BBQs, local dining)",
    "Any special requests or must-haves for your stay? (e.g. pet-friendly cafés, cycle storage)",
]

_FOLLOW_UP_COUNT = re.compile(r"Number of follow-up questions asked:\s*(\d+)")
_GUEST_PREFERENCES = re.compile(r"User Preferences:(.*?)Output Instructions:", re.DOTALL)
_PROPERTY_NAME = re.compile(r'"name":\s*"([^"]+)"')
_STAY_AT = re.compile(r"stay at (.+?) in ")
_INTRO_NAME = re.compile(r"name of the property \(([^)]+)\)")

_KEYWORDS = {
    "dog": ("dog", "puppy", "pup"),
    "hiking": ("hik", "walk", "trail", "fell"),
    "bbq": ("bbq", "barbecue", "grill"),
    "family": ("kid", "child", "family", "famil"),
    "cycling": ("cycl", "bike"),
    "dining": ("restaurant", "dining", "food", "eat"),
}


class KeywordFallbackClient:
    """Heuristic chat client used when no model API key is configured."""

    def __init__(self, questions: Optional[Sequence[str]] = None) -> None:
        self.questions = list(questions or FALLBACK_QUESTIONS)
        self.calls = 0

    def __repr__(self) -> str:
        return f"KeywordFallbackClient(questions={len(self.questions)})"

    async def complete(
        self,
        messages: Sequence[PromptMessage],
        *,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        self.calls += 1
        converted = [to_langchain_message(message) for message in messages]
        prompt_text = "\n".join(message_text(message) for message in converted)

        if response_format or '"personalizedTips"' in prompt_text:
            logger.info("Fallback client producing placeholder itinerary")
            return json.dumps(self._itinerary(converted, prompt_text))

        follow_up = _FOLLOW_UP_COUNT.search(prompt_text)
        if follow_up:
            asked = int(follow_up.group(1))
            if asked < len(self.questions):
                return self.questions[asked]
            return READY_SENTINEL

        intro = _INTRO_NAME.search(prompt_text)
        if intro:
            return (
                f"Welcome to {intro.group(1)}! It's a wonderful base for a relaxing break. "
                "Could you tell me a bit about your vacation preferences?"
            )

        guest_turns = sum(1 for message in converted if isinstance(message, HumanMessage))
        index = min(max(guest_turns - 1, 0), len(self.questions) - 1)
        return self.questions[index]

    def _itinerary(self, messages: List[Any], prompt_text: str) -> Dict[str, Any]:
        guest_text = _guest_text(messages, prompt_text).lower()
        flags = {name: any(word in guest_text for word in words) for name, words in _KEYWORDS.items()}
        match = _PROPERTY_NAME.search(prompt_text) or _STAY_AT.search(prompt_text)
        place = match.group(1) if match else "the property"

        outdoor = "a guided hike on the nearest trail" if flags["hiking"] else "a gentle stroll around the area"
        dinner = "BBQ in the garden" if flags["bbq"] else "dinner at a local restaurant"
        morning = "Morning dog walk" if flags["dog"] else "Slow morning with coffee"

        days = [
            {
                "day": 1,
                "title": f"Arriving at {place}",
                "activities": [
                    {"time": "15:00", "description": f"Check in and settle into {place}", "type": "arrival"},
                    {"time": "16:00", "description": "Unpack and explore the house and garden", "type": "rest"},
                    {"time": "17:00", "description": f"Short walk: {outdoor}", "type": "activity"},
                    {"time": "19:00", "description": dinner.capitalize(), "type": "meal"},
                    {"time": "21:00", "description": "Evening by the fire", "type": "rest"},
                ],
            },
            {
                "day": 2,
                "title": "A full day out",
                "activities": [
                    {"time": "08:00", "description": morning, "type": "activity"},
                    {"time": "09:00", "description": "Breakfast at the house", "type": "meal"},
                    {"time": "10:30", "description": outdoor.capitalize(), "type": "activity"},
                    {"time": "13:00", "description": "Picnic lunch", "type": "meal"},
                    {"time": "15:00", "description": "Downtime back at the property", "type": "rest"},
                    {"time": "19:00", "description": dinner.capitalize(), "type": "meal"},
                ],
            },
            {
                "day": 3,
                "title": "Last morning",
                "activities": [
                    {"time": "08:30", "description": "Relaxed breakfast", "type": "meal"},
                    {"time": "09:30", "description": morning, "type": "activity"},
                    {"time": "10:30", "description": "Pack up and tidy", "type": "rest"},
                    {"time": "11:00", "description": "Check out", "type": "departure"},
                    {"time": "11:30", "description": "One last stop at a nearby attraction", "type": "activity"},
                ],
            },
        ]

        tips = ["This preview was generated offline; connect the assistant for a tailored plan."]
        if flags["dog"]:
            tips.append("Pack a towel for muddy paws and check dog-friendly pubs in advance.")
        if flags["hiking"]:
            tips.append("Bring waterproofs and sturdy boots; the weather can turn quickly.")
        if flags["family"]:
            tips.append("Plan one shorter outing per day so younger travellers stay fresh.")
        if flags["cycling"]:
            tips.append("Use the property's bike storage and plan routes the night before.")
        if flags["dining"]:
            tips.append("Book restaurant tables ahead, especially for weekend evenings.")
        generic_tips = [
            "Stock up on groceries on the way in to save time on day one.",
            "Keep one evening free to simply enjoy the house.",
            "Check opening times for nearby attractions before setting off.",
        ]
        tips.extend(generic_tips[: max(0, 4 - len(tips))])

        highlights = [f"Settling into {place}", "A full day shaped around your interests", "An unhurried last morning"]
        return {
            "itinerary": days,
            "personalizedTips": tips[:6],
            "highlights": highlights,
            "offline": True,
        }


def _guest_text(messages: List[Any], prompt_text: str) -> str:
    """Text written by the guest, excluding the property data embedded in prompts."""

    preferences = _GUEST_PREFERENCES.search(prompt_text)
    if preferences:
        return preferences.group(1)
    return " ".join(
        message_text(message)
        for message in messages
        if isinstance(message, HumanMessage) and message_text(message) != ITINERARY_REQUEST_MESSAGE
    )
