"""Session state machine for the guided "Simulate Your Stay" conversation."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, Union

from langchain_core.messages import SystemMessage

from stayvision.core.errors import InvalidTransitionError, StayVisionError
from stayvision.core.post_processing import parse_simulation_result
from stayvision.core.prompts import (
    MAX_FOLLOW_UP_QUESTIONS,
    build_final_prompt,
    build_follow_up_prompt,
    build_introduction_prompt,
    contains_ready_sentinel,
)
from stayvision.core.schemas import ConversationStep, Property, SimulationResult
from stayvision.services.llm import JSON_RESPONSE_FORMAT, ModelClient

logger = logging.getLogger(__name__)

INITIAL_STEP_ID = "initial"


class ConversationPhase(str, Enum):
    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    ERRORED = "errored"


StepOutcome = Union[ConversationStep, SimulationResult]


class ConversationOrchestrator:
    """Owns one guided session: its steps, answers, result and phase.

    Phases move ``not_started -> awaiting_answer -> finalizing -> completed``;
    any model call may instead land in ``errored``, from which ``retry`` re-runs
    the failed call and ``restart`` throws the session away. At most one model
    call is in flight because every operation is awaited to completion before
    the next is accepted.

    The follow-up cap wins over the model: once ``max_follow_ups`` questions
    beyond the initial one have been answered, the session finalizes even if the
    model never emits the ready sentinel.

    Attributes:
        property: The property being previewed
        client: Model client used for every phase
        max_follow_ups: Cap on follow-up questions (the initial question is not counted)
        steps: Questions issued so far, in order
        answers: Ordered mapping of step id to the guest's answer
        result: The simulation result once ``completed``
        error: The last error while ``errored``
    """

    def __init__(
        self,
        property: Property,
        client: ModelClient,
        *,
        max_follow_ups: int = MAX_FOLLOW_UP_QUESTIONS,
    ) -> None:
        if max_follow_ups < 0:
            raise ValueError("max_follow_ups must be non-negative")
        self.property = property
        self.client = client
        self.max_follow_ups = max_follow_ups
        self._reset()

    def __repr__(self) -> str:
        return (
            f"ConversationOrchestrator(property='{self.property.id}', phase={self.phase.value}, "
            f"steps={len(self.steps)}, follow_ups_asked={self.follow_ups_asked})"
        )

    def _reset(self) -> None:
        self.phase = ConversationPhase.NOT_STARTED
        self.steps: List[ConversationStep] = []
        self.answers: Dict[str, str] = {}
        self.result: Optional[SimulationResult] = None
        self.error: Optional[StayVisionError] = None
        self._failed_action: Optional[Callable[[], Awaitable[StepOutcome]]] = None

    @property
    def current_step(self) -> Optional[ConversationStep]:
        if self.phase is ConversationPhase.AWAITING_ANSWER and self.steps:
            return self.steps[-1]
        return None

    @property
    def follow_ups_asked(self) -> int:
        return sum(1 for step in self.steps if step.id != INITIAL_STEP_ID)

    def _require(self, *phases: ConversationPhase) -> None:
        if self.phase not in phases:
            allowed = ", ".join(phase.value for phase in phases)
            raise InvalidTransitionError(
                f"Cannot perform this action in phase '{self.phase.value}' (allowed: {allowed})"
            )

    async def start(self) -> ConversationStep:
        """Ask the model for the opening message and issue the initial step."""

        self._require(ConversationPhase.NOT_STARTED)
        logger.info("Starting stay simulation for %s", self.property.id)
        return await self._run(self._introduce)

    async def submit_answer(self, answer: str) -> StepOutcome:
        """Record the guest's answer and move the session forward.

        Returns the next ``ConversationStep`` while more questions are needed,
        or the final ``SimulationResult`` once the session completes.

        Raises:
            ValueError: if the answer is blank (state is left untouched)
            InvalidTransitionError: if no question is awaiting an answer
            UpstreamFailureError / MalformedModelOutputError: after moving to ``errored``
        """
        self._require(ConversationPhase.AWAITING_ANSWER)
        text = (answer or "").strip()
        if not text:
            raise ValueError("Answer must not be empty")

        step = self.steps[-1]
        step.user_answer = text
        step.is_completed = True
        self.answers[step.id] = text
        logger.info("Recorded answer for step %s (%d answer(s) so far)", step.id, len(self.answers))

        if self.follow_ups_asked >= self.max_follow_ups:
            logger.info("Follow-up cap of %d reached; finalizing", self.max_follow_ups)
            return await self._run(self._finalize)
        return await self._run(self._ask_follow_up)

    async def retry(self) -> StepOutcome:
        """Re-run the model call that moved the session into ``errored``."""

        self._require(ConversationPhase.ERRORED)
        action = self._failed_action
        if action is None:
            raise InvalidTransitionError("Nothing to retry")
        logger.info("Retrying failed step for %s", self.property.id)
        self.error = None
        return await self._run(action)

    def restart(self) -> None:
        """Discard every step, answer and result and return to ``not_started``."""

        self._require(
            ConversationPhase.NOT_STARTED,
            ConversationPhase.COMPLETED,
            ConversationPhase.ERRORED,
        )
        logger.info("Restarting stay simulation for %s", self.property.id)
        self._reset()

    async def _run(self, action: Callable[[], Awaitable[StepOutcome]]) -> StepOutcome:
        try:
            return await action()
        except StayVisionError as exc:
            logger.error(f"Stay simulation for {self.property.id} failed: {exc}")
            # a failed finalization retries the itinerary, not the follow-up that led to it
            was_finalizing = self.phase is ConversationPhase.FINALIZING
            self.phase = ConversationPhase.ERRORED
            self.error = exc
            self._failed_action = self._finalize if was_finalizing else action
            self.result = None
            raise

    async def _introduce(self) -> ConversationStep:
        prompt = build_introduction_prompt(self.property)
        text = await self.client.complete([SystemMessage(content=prompt)])
        step = ConversationStep(id=INITIAL_STEP_ID, question=text)
        self.steps.append(step)
        self.phase = ConversationPhase.AWAITING_ANSWER
        return step

    async def _ask_follow_up(self) -> StepOutcome:
        questions = [step.question for step in self.steps if step.id != INITIAL_STEP_ID]
        prompt = build_follow_up_prompt(
            self.property,
            self.answers,
            questions,
            self.follow_ups_asked,
            self.max_follow_ups,
        )
        text = await self.client.complete([SystemMessage(content=prompt)])

        if contains_ready_sentinel(text):
            logger.info("Model signalled it is ready after %d follow-up(s)", self.follow_ups_asked)
            return await self._finalize()

        step = ConversationStep(id=f"follow-up-{self.follow_ups_asked + 1}", question=text)
        self.steps.append(step)
        self.phase = ConversationPhase.AWAITING_ANSWER
        return step

    async def _finalize(self) -> SimulationResult:
        self.phase = ConversationPhase.FINALIZING
        prompt = build_final_prompt(self.property, self.answers)
        raw = await self.client.complete(
            [SystemMessage(content=prompt)],
            response_format=JSON_RESPONSE_FORMAT,
        )
        result = parse_simulation_result(raw)
        self.result = result
        self.phase = ConversationPhase.COMPLETED
        self._failed_action = None
        logger.info(
            "Stay simulation for %s completed with %d day(s)", self.property.id, len(result.itinerary)
        )
        return result
