"""Tests for the terminal session driver and command line entry point."""
from __future__ import annotations

from typing import Iterable, List

import pytest

from conftest import StubModelClient, make_itinerary_json
from stayvision import cli
from stayvision.core.errors import UpstreamFailureError
from stayvision.core.orchestrator import ConversationOrchestrator, ConversationPhase
from stayvision.core.post_processing import parse_simulation_result
from stayvision.core.prompts import READY_SENTINEL
from stayvision.services.feedback import FeedbackSink

INTRO = "Welcome to Wildhouse Farm! What brings you here?"


class ScriptedConsole:
    """Feeds prepared answers to ``ask`` and records everything shown."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.output: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def say(self, text: str) -> None:
        self.output.append(text)

    @property
    def transcript(self) -> str:
        return "\n".join(self.output)


@pytest.mark.asyncio
async def test_run_session_reaches_result_and_collects_feedback(wildhouse, stub_client):
    stub_client.queue(INTRO, "Who is coming?", READY_SENTINEL, make_itinerary_json())
    orchestrator = ConversationOrchestrator(wildhouse, stub_client)
    console = ScriptedConsole(["", "a cosy weekend", "family of four", "8", "y"])
    sink = FeedbackSink()

    result = await cli.run_session(orchestrator, ask=console.ask, say=console.say, sink=sink)

    assert result is not None
    assert orchestrator.phase is ConversationPhase.COMPLETED
    assert INTRO in console.output
    assert "Day 1: Day 1 at the farm" in console.transcript
    assert len(sink) == 1
    feedback = sink.entries[0]
    assert feedback.rating == 8
    assert feedback.feedback == "positive"
    assert feedback.answers == {"initial": "a cosy weekend", "follow-up-1": "family of four"}


@pytest.mark.asyncio
async def test_run_session_retries_after_upstream_failure(wildhouse):
    client = StubModelClient([UpstreamFailureError("timeout"), INTRO, READY_SENTINEL, make_itinerary_json()])
    orchestrator = ConversationOrchestrator(wildhouse, client)
    console = ScriptedConsole(["r", "just the two of us"])

    result = await cli.run_session(orchestrator, ask=console.ask, say=console.say)

    assert result is not None
    assert any(line.startswith("Something went wrong") for line in console.output)


@pytest.mark.asyncio
async def test_run_session_quit_after_failure(wildhouse):
    client = StubModelClient([UpstreamFailureError("timeout")])
    orchestrator = ConversationOrchestrator(wildhouse, client)
    console = ScriptedConsole(["q"])

    result = await cli.run_session(orchestrator, ask=console.ask, say=console.say)

    assert result is None
    assert orchestrator.phase is ConversationPhase.ERRORED


def test_collect_feedback_skips_invalid_rating(wildhouse, stub_client):
    orchestrator = ConversationOrchestrator(wildhouse, stub_client)
    console = ScriptedConsole(["42"])
    sink = FeedbackSink()

    assert cli.collect_feedback(orchestrator, sink, console.ask, console.say) is None
    assert len(sink) == 0
    assert "Ratings go from 1 to 10" in console.transcript


def test_render_result_marks_offline_previews():
    payload = make_itinerary_json()
    online = parse_simulation_result(payload)
    offline = online.model_copy(update={"offline": True})

    assert "Offline preview" not in cli.render_result(online)
    assert cli.render_result(offline).startswith("[Offline preview")
    assert "Highlights:" in cli.render_result(online)


def test_main_lists_properties(capsys):
    assert cli.main(["properties"]) == 0

    out = capsys.readouterr().out
    assert "wildhouse-farm" in out
    assert "mountain-lodge" in out


def test_main_simulate_unknown_property(capsys):
    assert cli.main(["simulate", "does-not-exist"]) == 2

    assert "Unknown property" in capsys.readouterr().out
