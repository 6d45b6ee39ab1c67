from protozoa.creature.generator import CreatureGenerator
from protozoa.creature.models import Creature, creature_id

__all__ = ["Creature", "CreatureGenerator", "creature_id"]
