"""
Command line entry point for StayVision.

Commands:
    serve               Run the HTTP API with uvicorn
    properties          List the properties available for a preview
    simulate <id>       Run a guided "Simulate Your Stay" session in the terminal
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from functools import partial
from typing import Callable, List, Optional

from dotenv import load_dotenv

from stayvision.core.catalog import get_catalog
from stayvision.core.config import ApiSettings
from stayvision.core.errors import StayVisionError
from stayvision.core.orchestrator import ConversationOrchestrator, ConversationPhase
from stayvision.core.schemas import Feedback, SimulationResult
from stayvision.services.feedback import FeedbackSink
from stayvision.services.llm import build_model_client

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Echo = Callable[[str], None]

RETRY_CHOICES = {"r": "retry", "n": "restart", "q": "quit"}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render_result(result: SimulationResult) -> str:
    """Plain-text rendering of a simulation result."""

    lines: List[str] = []
    if result.offline:
        lines.append("[Offline preview: generated without the AI assistant]")
    for day in result.itinerary:
        lines.append(f"Day {day.day}: {day.title}")
        for activity in day.activities:
            where = f" @ {activity.location}" if activity.location else ""
            lines.append(f"  {activity.time:>8}  [{activity.type}] {activity.description}{where}")
    lines.append("")
    lines.append("Personalised tips:")
    lines.extend(f"  - {tip}" for tip in result.personalized_tips)
    lines.append("Highlights:")
    lines.extend(f"  * {highlight}" for highlight in result.highlights)
    return "\n".join(lines)


def collect_feedback(
    orchestrator: ConversationOrchestrator,
    sink: FeedbackSink,
    ask: Prompt,
    say: Echo,
) -> Optional[Feedback]:
    """Optionally ask for a 1-10 rating and a thumbs up/down."""

    raw_rating = ask("Rate this preview from 1 to 10 (blank to skip): ").strip()
    if not raw_rating:
        return None
    try:
        rating = int(raw_rating)
    except ValueError:
        say("Please enter a whole number; skipping feedback.")
        return None
    if not 1 <= rating <= 10:
        say("Ratings go from 1 to 10; skipping feedback.")
        return None

    verdict = ask("Did you like it? [y/n]: ").strip().lower()
    tag = "positive" if verdict.startswith("y") else "negative" if verdict.startswith("n") else None
    feedback = Feedback(
        property_id=orchestrator.property.id,
        rating=rating,
        feedback=tag,
        answers=dict(orchestrator.answers),
    )
    sink.record(feedback)
    say("Thank you for your feedback!")
    return feedback


async def run_session(
    orchestrator: ConversationOrchestrator,
    *,
    ask: Prompt = input,
    say: Echo = print,
    sink: Optional[FeedbackSink] = None,
) -> Optional[SimulationResult]:
    """Drive one orchestrator through to a result, a quit, or end of input.

    Errors are shown as dismissible messages; the guest can retry the failed
    step, restart from scratch, or quit.
    """
    say(f"Simulating your stay at {orchestrator.property.name}, {orchestrator.property.location}")
    say("Thinking...")
    pending = orchestrator.start

    while True:
        try:
            await pending()
        except StayVisionError as exc:
            say(f"Something went wrong: {exc.public_message}")
            choice = RETRY_CHOICES.get(ask("[r]etry, [n]ew session or [q]uit? ").strip().lower()[:1], "quit")
            if choice == "quit":
                return None
            if choice == "restart":
                orchestrator.restart()
                pending = orchestrator.start
            else:
                pending = orchestrator.retry
            continue

        if orchestrator.phase is ConversationPhase.COMPLETED:
            break

        say(orchestrator.current_step.question)
        answer = ask("> ").strip()
        while not answer:
            answer = ask("> ").strip()
        say("Thinking...")
        pending = partial(orchestrator.submit_answer, answer)

    result = orchestrator.result
    say(render_result(result))
    if sink is not None:
        collect_feedback(orchestrator, sink, ask, say)
    return result


def _cmd_properties(args: argparse.Namespace) -> int:
    for prop in get_catalog():
        print(f"{prop.id:<18} {prop.name} ({prop.location}) sleeps {prop.sleeps}, rating {prop.rating}")
    return 0


def _cmd_simulate(args: argparse.Namespace) -> int:
    prop = get_catalog().lookup(args.property_id)
    if prop is None:
        print(f"Unknown property '{args.property_id}'. Available: {', '.join(get_catalog().ids())}")
        return 2

    settings = ApiSettings.from_env()
    if args.offline:
        settings.openai_api_key = None
    client = build_model_client(settings)
    logger.info("Simulating %s with %r", prop.id, client)
    orchestrator = ConversationOrchestrator(prop, client, max_follow_ups=args.max_follow_ups)
    try:
        result = asyncio.run(run_session(orchestrator, sink=FeedbackSink()))
    except (EOFError, KeyboardInterrupt):
        print()
        return 130
    return 0 if result is not None else 1


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = ApiSettings.from_env()
    uvicorn.run(
        "stayvision.api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stayvision", description="StayVision: Simulate Your Stay")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT or 3000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=_cmd_serve)

    listing = subparsers.add_parser("properties", help="List available properties")
    listing.set_defaults(handler=_cmd_properties)

    simulate = subparsers.add_parser("simulate", help="Run a guided stay simulation in the terminal")
    simulate.add_argument("property_id", help="Property id, e.g. wildhouse-farm")
    simulate.add_argument(
        "--offline",
        action="store_true",
        help="Use the keyword fallback instead of the language model",
    )
    simulate.add_argument(
        "--max-follow-ups",
        type=int,
        default=3,
        help="Maximum follow-up questions before the itinerary is generated (default: 3)",
    )
    simulate.set_defaults(handler=_cmd_simulate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or ApiSettings.from_env().log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
