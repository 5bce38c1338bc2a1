import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from stayvision.core.errors import MalformedModelOutputError
from stayvision.core.schemas import SimulationResult

logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)
REQUIRED_RESULT_FIELDS = ("itinerary", "personalizedTips", "highlights")
EXPECTED_DAYS = 3


def strip_code_fence(raw_output: str) -> str:
    """Return the body of the first fenced code block, or the stripped text."""

    stripped = (raw_output or "").strip()
    match = _CODE_BLOCK_PATTERN.search(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def extract_json_payload(raw_output: str) -> Dict[str, Any]:
    """Decode the model's reply into a JSON object.

    Raises:
        MalformedModelOutputError: if the text is empty, not JSON, or not an object.
    """
    body = strip_code_fence(raw_output)
    if not body:
        raise MalformedModelOutputError("Model returned an empty response", raw_output=raw_output)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse raw LLM output as JSON: %s", exc)
        raise MalformedModelOutputError(
            f"Model response is not valid JSON: {exc}", raw_output=raw_output
        ) from exc

    if not isinstance(payload, dict):
        raise MalformedModelOutputError(
            f"Expected a JSON object, got {type(payload).__name__}", raw_output=raw_output
        )
    return payload


def parse_simulation_result(raw_output: str) -> SimulationResult:
    """Convert raw model output into a validated ``SimulationResult``.

    Missing or non-list ``itinerary``/``personalizedTips``/``highlights`` are
    rejected outright; nothing is backfilled.
    """
    payload = extract_json_payload(raw_output)

    missing = [name for name in REQUIRED_RESULT_FIELDS if name not in payload]
    if missing:
        raise MalformedModelOutputError(
            f"Model response is missing required fields: {', '.join(missing)}",
            raw_output=raw_output,
        )
    not_lists = [name for name in REQUIRED_RESULT_FIELDS if not isinstance(payload[name], list)]
    if not_lists:
        raise MalformedModelOutputError(
            f"Expected arrays for fields: {', '.join(not_lists)}", raw_output=raw_output
        )

    try:
        result = SimulationResult.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Simulation result failed validation: %s", exc)
        raise MalformedModelOutputError(
            f"Model response does not match the itinerary shape: {exc.error_count()} error(s)",
            raw_output=raw_output,
        ) from exc

    if len(result.itinerary) != EXPECTED_DAYS:
        logger.warning("Expected %d itinerary days, model returned %d", EXPECTED_DAYS, len(result.itinerary))
    return result
