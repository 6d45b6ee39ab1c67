"""Per-creature context: generation block, tracker and engine in one place."""

from __future__ import annotations

import logging

from protozoa.config.schema import EngineConfig
from protozoa.core.errors import EngineNotInitializedError
from protozoa.core.types import BlockData
from protozoa.creature.generator import CreatureGenerator
from protozoa.creature.models import Creature
from protozoa.evolution.engine import EvolutionEngine
from protozoa.evolution.history_store import JsonlHistoryStore
from protozoa.evolution.models import EvolutionEntry, EvolutionResult
from protozoa.evolution.mutations import MutationService, ReferenceMutationService
from protozoa.evolution.tracker import EvolutionTracker
from protozoa.group.traits import TraitRepository

logger = logging.getLogger(__name__)


class CreatureSession:
    """Owns exactly one creature once :meth:`generate` has run."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        repository: TraitRepository | None = None,
        mutation_service: MutationService | None = None,
        tracker: EvolutionTracker | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        if tracker is None:
            storage_dir = self.config.history.storage_dir
            tracker = EvolutionTracker(JsonlHistoryStore(storage_dir) if storage_dir else None)
        self.tracker = tracker
        self.generator = CreatureGenerator(self.config, repository)
        self.engine = EvolutionEngine(
            self.config.evolution,
            self.tracker,
            mutation_service or ReferenceMutationService(self.config.evolution),
        )
        self.creature: Creature | None = None
        self.block: BlockData | None = None

    def generate(self, block: BlockData) -> Creature:
        creature = self.generator.generate(block)
        self.block = block
        self.creature = creature
        return creature

    def evolve(self, block: BlockData) -> EvolutionResult:
        if self.creature is None:
            raise EngineNotInitializedError("Session has no creature; call generate() first")
        return self.engine.evolve_creature(self.creature, block)

    def history(self) -> tuple[EvolutionEntry, ...]:
        if self.creature is None:
            return ()
        return self.tracker.get_evolution_history(self.creature.id)
