"""In-memory registry of creature sessions, keyed by creature id.

Process-wide, guarded by one lock.  Each session still owns its own seed,
RNG system, tracker and engine.
"""

from __future__ import annotations

import threading

from protozoa.session import CreatureSession


class SessionRegistry:
    def __init__(self) -> None:
        self._sessions: dict[str, CreatureSession] = {}
        self._lock = threading.Lock()

    def add(self, session: CreatureSession) -> CreatureSession:
        """Register *session*; an existing session for the same creature wins."""
        if session.creature is None:
            raise ValueError("Cannot register a session without a creature")
        with self._lock:
            return self._sessions.setdefault(session.creature.id, session)

    def get(self, creature_id: str) -> CreatureSession | None:
        with self._lock:
            return self._sessions.get(creature_id)

    def ids(self) -> list[str]:
        with self._lock:
            return sorted(self._sessions)

    def reset_state(self) -> None:
        with self._lock:
            self._sessions.clear()


# Module-level singleton
registry = SessionRegistry()
