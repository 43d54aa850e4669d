"""In-memory store for user feedback on assistant messages."""

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Feedback:
    message_id: str
    feedback: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "message_id": self.message_id,
            "feedback": self.feedback,
            "timestamp": self.timestamp.isoformat(),
        }


class FeedbackStore:
    """Append-only feedback log kept for the life of the process."""

    def __init__(self):
        self._items: list[Feedback] = []
        self._lock = threading.Lock()

    def add(self, message_id: str, feedback: str) -> Feedback:
        item = Feedback(message_id=message_id, feedback=feedback, timestamp=datetime.now(UTC))
        with self._lock:
            self._items.append(item)
        logger.info(f"Feedback received: {item.to_dict()}")
        return item

    def items(self) -> list[Feedback]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


_feedback_store = FeedbackStore()


def get_feedback_store() -> FeedbackStore:
    """Process-wide feedback store."""
    return _feedback_store
