"""In-memory feedback sink; entries are logged and kept for the process lifetime."""
from __future__ import annotations

import logging
from typing import List

from stayvision.core.schemas import Feedback

logger = logging.getLogger(__name__)


class FeedbackSink:
    """Collects guest feedback. Nothing here survives a restart."""

    def __init__(self) -> None:
        self._entries: List[Feedback] = []

    def record(self, feedback: Feedback) -> None:
        self._entries.append(feedback)
        logger.info(
            "Feedback received: property=%s rating=%s feedback=%s answers=%d",
            feedback.property_id,
            feedback.rating,
            feedback.feedback,
            len(feedback.answers),
        )

    @property
    def entries(self) -> List[Feedback]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
