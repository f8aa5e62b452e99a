"""
Single-layer penetration and ambient attenuation models.

LayerPenetrationModel resolves one attack against one layer of armor:
it rolls for deflection, reduces damage and remaining penetration by the
penetration/armor ratio, and feeds structural damage back into the layer.

AmbientAttenuationModel handles heat and electricity, which are not
deflected by individual layers but reduced by the summed armor percentage
of everything covering the hit region.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .body import BodyRegion
from .defs import DamageDef, DamageDefRegistry
from .entities import ArmorTarget, DamageableLayer

logger = logging.getLogger(__name__)


PENETRATION_RAND_VARIATION = 0.05   # Penetration roll spread, +- this amount
SOFT_ARMOR_MIN_DAMAGE_FACTOR = 0.2  # Soft armor always takes this share of sharp damage

# Damage multiplier by penetration/armor ratio, clamped outside these points
DAMAGE_CURVE_RATIOS = (0.5, 1.0, 2.0)
DAMAGE_CURVE_MULTIPLIERS = (0.0, 0.5, 1.0)


@dataclass
class PenetrationState:
    """
    Damage and penetration left in an attack while it passes through layers.

    Attributes:
        amount: Remaining damage.
        penetration: Remaining armor penetration.
    """
    amount: float
    penetration: float

    def clamp(self) -> None:
        self.amount = max(0.0, self.amount)
        self.penetration = max(0.0, self.penetration)

    def copy(self) -> PenetrationState:
        return PenetrationState(self.amount, self.penetration)


def damage_multiplier(penetration: float, armor: float) -> float:
    """
    Fraction of damage that passes a layer.

    Piecewise linear over penetration/armor: half the armor or less stops
    everything, equal values let half through, double the armor or more
    passes all of it.

    Args:
        penetration: Remaining armor penetration.
        armor: Armor value of the layer.

    Returns:
        Multiplier from 0.0 to 1.0. Layers without armor let everything pass.
    """
    if armor <= 0:
        return 1.0
    return float(np.interp(penetration / armor, DAMAGE_CURVE_RATIOS, DAMAGE_CURVE_MULTIPLIERS))


class LayerPenetrationModel:
    """
    Resolves an attack against a single armor layer.

    The model itself is stateless apart from its configuration and random
    source; the attack's remaining damage and penetration travel in a
    PenetrationState that is updated in place.
    """

    def __init__(
        self,
        defs: DamageDefRegistry,
        rng: Optional[random.Random] = None,
        variation: float = PENETRATION_RAND_VARIATION,
    ):
        """
        Initialize the penetration model.

        Args:
            defs: Damage definition registry (for the soft material table).
            rng: Optional random number generator for reproducible results.
            variation: Half-width of the penetration roll.
        """
        self.defs = defs
        self.rng = rng or random.Random()
        self.variation = variation

    def roll_penetration(self, penetration: float) -> float:
        return self.rng.uniform(penetration - self.variation, penetration + self.variation)

    def try_penetrate(
        self,
        damage_def: DamageDef,
        armor_amount: float,
        state: PenetrationState,
        layer: Optional[DamageableLayer] = None,
    ) -> bool:
        """
        Try to get an attack through one layer of armor.

        Only sharp attacks can be deflected. Whether deflected or not, the
        remaining damage is scaled by the penetration/armor ratio; a
        deflected attack keeps its penetration for the blunt follow-up
        unless its definition deals no damage on deflection.

        When a layer is given, it takes structural damage: hard armor takes
        the damage that got through (at least 1), soft armor only takes
        damage from sharp attacks, at least a fifth of the incoming amount.

        Args:
            damage_def: Kind of damage being resolved.
            armor_amount: Armor value of the layer against this damage.
            state: Remaining damage and penetration, updated in place.
            layer: The armor object to damage, if any.

        Returns:
            False if the attack was deflected, True otherwise.
        """
        roll = self.roll_penetration(state.penetration)
        deflected = damage_def.is_sharp and armor_amount > roll

        no_damage = deflected and damage_def.no_damage_on_deflect
        multiplier = 0.0 if no_damage else damage_multiplier(state.penetration, armor_amount)

        new_amount = state.amount * multiplier
        new_penetration = (
            state.penetration if deflected and not no_damage else state.penetration * multiplier
        )

        if layer is not None:
            self._damage_layer(damage_def, layer, state.amount, new_amount)

        state.amount = new_amount
        state.penetration = new_penetration
        state.clamp()
        return not deflected

    def _damage_layer(
        self,
        damage_def: DamageDef,
        layer: DamageableLayer,
        amount: float,
        new_amount: float,
    ) -> None:
        if self.defs.is_soft_material(layer.stuff_categories):
            if not damage_def.is_sharp:
                return
            armor_damage = max(amount * SOFT_ARMOR_MIN_DAMAGE_FACTOR, amount - new_amount)
        else:
            armor_damage = max(1.0, new_amount)
        layer.take_damage(damage_def, math.ceil(armor_damage))


class AmbientAttenuationModel:
    """Flat percentage reduction for ambient damage such as heat and electricity."""

    def post_armor_damage(
        self,
        amount: float,
        armor_rating_stat: str,
        target: ArmorTarget,
        region: BodyRegion,
    ) -> float:
        """
        Reduce ambient damage by the target's summed armor percentage.

        The target's own stat and then every layer covering the region each
        subtract their stat from a multiplier starting at 1.0.

        Args:
            amount: Incoming damage.
            armor_rating_stat: Stat id of the relevant armor category.
            target: The creature being hit.
            region: The body region being hit.

        Returns:
            Damage after armor, from 0 to the original amount (unrounded).
        """
        multiplier = 1.0 - target.stat(armor_rating_stat)
        if multiplier <= 0:
            return 0.0
        for layer in target.layers_outer_to_inner():
            if layer.covers(region):
                multiplier -= layer.stat(armor_rating_stat)
            if multiplier <= 0:
                multiplier = 0.0
                break
        return amount * multiplier
