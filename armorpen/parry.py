"""
Damage to whatever parried a melee attack.

A parry always succeeds; this module only decides how hard the parrying
object is hit. Creatures take a random fraction of the blow through their own
damage pipeline, objects are resolved against their own armor stats.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Union

from .attack import AttackDescriptor
from .defs import DamageDefRegistry
from .entities import DamageableLayer, LivingCombatant
from .penetration import (
    PENETRATION_RAND_VARIATION,
    LayerPenetrationModel,
    PenetrationState,
)

logger = logging.getLogger(__name__)


PARRY_PAWN_MAX_FACTOR = 0.5       # Creatures take at most half of a parried blow
PARRY_OBJECT_DAMAGE_FACTOR = 0.1  # Objects take a tenth before armor


class ParryResolver:
    """Applies the damage of a parried attack to the parrying defender."""

    def __init__(
        self,
        defs: DamageDefRegistry,
        rng: Optional[random.Random] = None,
        penetration_variation: float = PENETRATION_RAND_VARIATION,
    ):
        """
        Initialize the parry resolver.

        Args:
            defs: Damage definition registry.
            rng: Optional random number generator for reproducible results.
            penetration_variation: Half-width of the penetration roll.
        """
        self.defs = defs
        self.rng = rng or random.Random()
        self.penetration_model = LayerPenetrationModel(
            defs, rng=self.rng, variation=penetration_variation
        )

    def apply_parry(
        self,
        attack: AttackDescriptor,
        defender: Union[LivingCombatant, DamageableLayer],
    ) -> None:
        """
        Damage the defender that parried an attack.

        Args:
            attack: The parried attack.
            defender: A living combatant, or the object used to parry.
        """
        damage_def = attack.damage_def

        if defender.is_living:
            factor = self.rng.random() * PARRY_PAWN_MAX_FACTOR
            defender.take_attack(attack.with_amount(math.ceil(attack.amount * factor)))
            return

        if damage_def.armor_category is None:
            defender.take_damage(damage_def, math.ceil(attack.amount))
            return

        armor = defender.stat(damage_def.armor_rating_stat)
        if damage_def.is_ambient:
            amount = math.ceil(attack.amount * min(1.0, max(0.0, armor)))
            defender.take_damage(damage_def, amount)
            return

        state = PenetrationState(attack.amount * PARRY_OBJECT_DAMAGE_FACTOR, attack.armor_penetration)
        penetrated = self.penetration_model.try_penetrate(damage_def, armor, state, defender)
        logger.debug(
            "%s parried %s (%s)",
            defender.name, damage_def.name, "penetrated" if penetrated else "deflected",
        )
