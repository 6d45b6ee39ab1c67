"""Per-creature append-only evolution history."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from protozoa.evolution.history_store import JsonlHistoryStore
from protozoa.evolution.models import EvolutionEntry

logger = logging.getLogger(__name__)


class EvolutionTracker:
    """Holds history in memory, optionally mirrored to a JSONL store.

    Writes for one creature are serialized by :meth:`writer`; the lock is
    re-entrant so :meth:`track_evolution` can be called while holding it.
    """

    def __init__(self, store: JsonlHistoryStore | None = None) -> None:
        self._store = store
        self._history: dict[str, list[EvolutionEntry]] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def writer(self, creature_id: str) -> Iterator[None]:
        with self._lock_for(creature_id):
            yield

    def track_evolution(self, entry: EvolutionEntry) -> None:
        with self._lock_for(entry.creature_id):
            entries = self._entries(entry.creature_id)
            if self._store is not None:
                self._store.append(entry)
            entries.append(entry)
        logger.debug(
            "Tracked evolution for %s at %d confirmations (%d mutations)",
            entry.creature_id, entry.confirmations, len(entry.mutations),
        )

    def get_evolution_history(self, creature_id: str) -> tuple[EvolutionEntry, ...]:
        with self._lock_for(creature_id):
            return tuple(self._entries(creature_id))

    def get_total_mutations(self, creature_id: str) -> int:
        return sum(len(e.mutations) for e in self.get_evolution_history(creature_id))

    def clear_history(self, creature_id: str) -> None:
        with self._lock_for(creature_id):
            self._history.pop(creature_id, None)
            if self._store is not None:
                self._store.delete(creature_id)

    def clear_all_history(self) -> None:
        with self._locks_guard:
            self._history.clear()
            if self._store is not None:
                self._store.delete_all()

    # ------------------------------------------------------------------

    def _lock_for(self, creature_id: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(creature_id)
            if lock is None:
                lock = self._locks[creature_id] = threading.RLock()
            return lock

    def _entries(self, creature_id: str) -> list[EvolutionEntry]:
        entries = self._history.get(creature_id)
        if entries is None:
            entries = self._store.load(creature_id) if self._store is not None else []
            self._history[creature_id] = entries
        return entries
