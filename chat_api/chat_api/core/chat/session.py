"""Per-session conversation state.

Each session owns its message list and a lock that serializes chat turns, so
concurrent requests never interleave their ephemeral context entries.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum

from chat_api.core.chat.prompts import render_system_persona
from chat_api.core.config import get_chat_max_sessions, get_chat_max_turns

logger = logging.getLogger(__name__)


class ChatPhase(str, Enum):
    IDLE = "idle"
    ENRICHING = "enriching"
    INVOKING = "invoking"
    SETTLING = "settling"


@dataclass
class ConversationSession:
    """Conversation history: persona first, then durable user/assistant pairs."""

    session_id: str
    messages: list[dict[str, str]]
    max_turns: int = 0  # 0 keeps every turn
    phase: ChatPhase = ChatPhase.IDLE
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def create(cls, session_id: str | None = None, max_turns: int | None = None) -> "ConversationSession":
        return cls(
            session_id=session_id or uuid.uuid4().hex,
            messages=[{"role": "system", "content": render_system_persona()}],
            max_turns=get_chat_max_turns() if max_turns is None else max_turns,
        )

    @property
    def history(self) -> list[dict[str, str]]:
        """Durable turns after the persona."""
        return self.messages[1:]

    def trim_history(self) -> int:
        """Drop the oldest user/assistant pairs beyond max_turns.

        Returns:
            Number of messages removed
        """
        if self.max_turns <= 0:
            return 0
        excess = len(self.messages) - 1 - 2 * self.max_turns
        if excess <= 0:
            return 0
        del self.messages[1 : 1 + excess]
        logger.info(f"Session {self.session_id}: trimmed {excess} oldest messages")
        return excess


class SessionStore:
    """In-memory registry of conversation sessions keyed by session id.

    Holds at most max_sessions sessions; the least recently used one is
    evicted when a new session would exceed the limit.
    """

    def __init__(self, max_turns: int | None = None, max_sessions: int | None = None):
        self.max_turns = max_turns
        self.max_sessions = max_sessions  # None reads CHAT_MAX_SESSIONS on use
        self._sessions: OrderedDict[str, ConversationSession] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str | None = None) -> ConversationSession:
        """Return the session for a key, creating it on first use.

        A missing key starts a new session with a generated id.
        """
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]
            session = ConversationSession.create(session_id, max_turns=self.max_turns)
            self._sessions[session.session_id] = session
            logger.info(f"Created conversation session {session.session_id}")
            self._evict()
            return session

    def _evict(self) -> None:
        limit = get_chat_max_sessions() if self.max_sessions is None else self.max_sessions
        if limit <= 0:
            return
        while len(self._sessions) > limit:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted idle conversation session {evicted_id}")

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


_session_store = SessionStore()


def get_session_store() -> SessionStore:
    """Process-wide session store."""
    return _session_store
