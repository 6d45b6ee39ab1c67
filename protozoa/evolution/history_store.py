"""JSONL mirror of evolution history — one ``<creature_id>.jsonl`` per creature.

Uses only stdlib (json, pathlib). No database dependency.
"""

from __future__ import annotations

import json
from pathlib import Path

from protozoa.evolution.models import EvolutionEntry


class JsonlHistoryStore:
    """Appends entries to ``{base_dir}/{creature_id}.jsonl``."""

    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, creature_id: str) -> Path:
        return self._base_dir / f"{creature_id}.jsonl"

    def append(self, entry: EvolutionEntry) -> None:
        with self.path_for(entry.creature_id).open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), default=str) + "\n")

    def load(self, creature_id: str) -> list[EvolutionEntry]:
        path = self.path_for(creature_id)
        if not path.exists():
            return []
        entries: list[EvolutionEntry] = []
        with path.open(encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    entries.append(EvolutionEntry.from_dict(json.loads(line)))
        return entries

    def delete(self, creature_id: str) -> None:
        self.path_for(creature_id).unlink(missing_ok=True)

    def delete_all(self) -> None:
        for path in self._base_dir.glob("*.jsonl"):
            path.unlink()
