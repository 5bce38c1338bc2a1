"""Tests for the offline keyword fallback client."""
from __future__ import annotations

import json

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from stayvision.core.orchestrator import ConversationOrchestrator, ConversationPhase
from stayvision.core.post_processing import parse_simulation_result
from stayvision.core.prompts import (
    ITINERARY_REQUEST_MESSAGE,
    READY_SENTINEL,
    build_itinerary_system_prompt,
)
from stayvision.core.schemas import ConversationStep, SimulationResult
from stayvision.services.fallback import FALLBACK_QUESTIONS, KeywordFallbackClient
from stayvision.services.llm import JSON_RESPONSE_FORMAT


@pytest.mark.asyncio
async def test_offline_session_completes_with_offline_result(wildhouse):
    client = KeywordFallbackClient()
    orchestrator = ConversationOrchestrator(wildhouse, client)

    step = await orchestrator.start()
    assert step.question.startswith("Welcome to Wildhouse Farm!")

    outcome = await orchestrator.submit_answer("A long weekend in the countryside")
    questions = []
    for answer in ["family of four with our dog", "hiking and BBQs", "nothing else"]:
        assert isinstance(outcome, ConversationStep)
        questions.append(outcome.question)
        outcome = await orchestrator.submit_answer(answer)

    assert questions == FALLBACK_QUESTIONS
    assert isinstance(outcome, SimulationResult)
    assert outcome.offline is True
    assert orchestrator.phase is ConversationPhase.COMPLETED
    assert len(outcome.itinerary) == 3
    for day in outcome.itinerary:
        assert 5 <= len(day.activities) <= 7
    assert outcome.itinerary[0].title == "Arriving at Wildhouse Farm"
    assert 4 <= len(outcome.personalized_tips) <= 6
    assert outcome.personalized_tips[0].startswith("This preview was generated offline")
    assert any("paws" in tip for tip in outcome.personalized_tips)
    assert any("boots" in tip for tip in outcome.personalized_tips)
    assert len(outcome.highlights) == 3


@pytest.mark.asyncio
async def test_short_question_list_yields_ready_sentinel(wildhouse):
    client = KeywordFallbackClient(questions=["Who is coming?"])
    orchestrator = ConversationOrchestrator(wildhouse, client)
    await orchestrator.start()

    first = await orchestrator.submit_answer("a quiet break")
    final = await orchestrator.submit_answer("just the two of us")

    assert first.question == "Who is coming?"
    assert isinstance(final, SimulationResult)
    assert orchestrator.follow_ups_asked == 1


@pytest.mark.asyncio
async def test_follow_up_prompt_past_question_list_returns_sentinel():
    client = KeywordFallbackClient(questions=["Only question?"])

    reply = await client.complete([SystemMessage(content="Number of follow-up questions asked: 1")])

    assert reply == READY_SENTINEL


@pytest.mark.asyncio
async def test_chat_history_gets_question_by_guest_turns():
    client = KeywordFallbackClient()
    history = [
        SystemMessage(content="You are StayVision."),
        AIMessage(content="Welcome!"),
        HumanMessage(content="We love cycling"),
        AIMessage(content=FALLBACK_QUESTIONS[0]),
        HumanMessage(content="Two adults"),
    ]

    reply = await client.complete(history)

    assert reply == FALLBACK_QUESTIONS[1]
    assert client.calls == 1


@pytest.mark.asyncio
async def test_chat_itinerary_uses_guest_keywords_only(wildhouse):
    client = KeywordFallbackClient()
    messages = [
        SystemMessage(content=build_itinerary_system_prompt(wildhouse)),
        HumanMessage(content="We are keen cyclists"),
        HumanMessage(content="We want to book restaurants"),
        HumanMessage(content=ITINERARY_REQUEST_MESSAGE),
    ]

    raw = await client.complete(messages, response_format=JSON_RESPONSE_FORMAT)

    payload = json.loads(raw)
    assert payload["offline"] is True
    result = parse_simulation_result(raw)
    assert result.itinerary[0].title == "Arriving at Wildhouse Farm"
    tips = " ".join(result.personalized_tips)
    assert "bike storage" in tips
    assert "restaurant tables" in tips
    assert "paws" not in tips
