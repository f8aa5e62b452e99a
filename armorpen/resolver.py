"""
Armor resolution for attacks against creatures.

PenetrationResolver takes an attack, the creature it hits and the body region
it lands on, and works out how much damage gets through:

1. A shield blocking the region gets the first chance to stop the attack.
2. Worn apparel covering the region is tested from the outer shell inward.
   A deflected sharp attack becomes blunt and is tested against the same
   layer again.
3. Natural armor is tested along the chain of parents the attack must
   pass, from the outermost one in toward the hit region.

Ambient damage (heat, electricity) skips all of this and is reduced by a flat
armor percentage instead.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .attack import AttackDescriptor
from .body import BodyRegion
from .defs import (
    BODY_PART_DENSITY_STAT,
    COVERED_BY_NATURAL_ARMOR,
    RIGHT_ARM,
    DamageDefRegistry,
    load_damage_defs,
)
from .deflection import DeflectionRedirector
from .entities import ArmorLayer, ArmorTarget
from .penetration import (
    PENETRATION_RAND_VARIATION,
    AmbientAttenuationModel,
    LayerPenetrationModel,
    PenetrationState,
)
from .shields import ShieldCoverageTable

logger = logging.getLogger(__name__)


@dataclass
class ArmorResolution:
    """
    Result of resolving an attack against a creature's armor.

    Attributes:
        attack: The attack after armor, with an integer damage amount. Its
            damage definition and hit region change when it was deflected.
        deflected: The armor stopped the attack completely.
        armor_reduced: Armor lowered the damage or converted the attack
            without stopping it.
        shield_absorbed: A shield stopped the attack.
    """
    attack: AttackDescriptor
    deflected: bool = False
    armor_reduced: bool = False
    shield_absorbed: bool = False

    def __str__(self) -> str:
        if self.shield_absorbed:
            return "Absorbed by shield"
        if self.deflected:
            return "Deflected by armor"
        region = self.attack.hit_region.name if self.attack.hit_region else "unknown"
        status = " (reduced)" if self.armor_reduced else ""
        return f"{self.attack.amount} {self.attack.damage_def.name} damage to {region}{status}"


class PenetrationResolver:
    """
    Resolves attacks through shield, apparel and natural armor.

    A resolver owns its random source. Attacks against the same creature must
    be resolved one at a time, since layers take structural damage.
    """

    def __init__(
        self,
        defs: DamageDefRegistry,
        rng: Optional[random.Random] = None,
        shield_coverage: Optional[ShieldCoverageTable] = None,
        penetration_variation: float = PENETRATION_RAND_VARIATION,
    ):
        """
        Initialize the penetration resolver.

        Args:
            defs: Damage definition registry.
            rng: Optional random number generator for reproducible results.
            shield_coverage: Coverage descriptors for shield definitions.
            penetration_variation: Half-width of the penetration roll.
        """
        self.defs = defs
        self.rng = rng or random.Random()
        self.shield_coverage = shield_coverage if shield_coverage is not None else ShieldCoverageTable()
        self.penetration_model = LayerPenetrationModel(
            defs, rng=self.rng, variation=penetration_variation
        )
        self.ambient_model = AmbientAttenuationModel()
        self.redirector = DeflectionRedirector(defs)

    def resolve(
        self,
        attack: AttackDescriptor,
        target: ArmorTarget,
        hit_region: BodyRegion,
    ) -> ArmorResolution:
        """
        Work out the damage an attack deals after armor.

        Args:
            attack: The incoming attack.
            target: The creature being hit.
            hit_region: The body region the attack lands on.

        Returns:
            ArmorResolution with the adjusted attack and outcome flags.
        """
        damage_def = attack.damage_def
        if damage_def.armor_category is None:
            return ArmorResolution(attack=attack)

        if damage_def.is_ambient:
            amount = math.ceil(self.ambient_model.post_armor_damage(
                attack.amount, damage_def.armor_rating_stat, target, hit_region
            ))
            return ArmorResolution(attack=attack.with_amount(amount), deflected=amount <= 0)

        state = PenetrationState(float(attack.amount), attack.armor_penetration)
        involve_armor = damage_def.harm_all_layers_until_outside
        current = attack

        if involve_armor:
            layers = tuple(target.layers_outer_to_inner())
            # First shield in draw order
            shield = next((layer for layer in reversed(layers) if layer.is_shield), None)

            if shield is not None and self._shield_blocks(attack, target, shield, hit_region):
                armor = shield.stat(damage_def.armor_rating_stat)
                if not self.penetration_model.try_penetrate(damage_def, armor, state, shield):
                    logger.debug("%s absorbed by shield %s", damage_def.name, shield.name)
                    self._apply_secondary_damage(attack, shield)
                    return ArmorResolution(
                        attack=attack.with_amount(0), deflected=True, shield_absorbed=True
                    )

            current, stopped = self._resolve_apparel(current, layers, hit_region, state)
            if stopped:
                return ArmorResolution(attack=current.with_amount(0), deflected=True)

        current, stopped = self._resolve_natural_armor(
            current, target, hit_region, state, involve_armor
        )
        if stopped:
            return ArmorResolution(attack=current.with_amount(0), deflected=True)

        converted = current.damage_def is not damage_def
        result = ArmorResolution(
            attack=current.with_amount(math.ceil(state.amount)),
            armor_reduced=converted or state.amount < attack.amount,
        )
        logger.debug("Resolved %s: %s", damage_def.name, result)
        return result

    def _shield_blocks(
        self,
        attack: AttackDescriptor,
        target: ArmorTarget,
        shield: ArmorLayer,
        hit_region: BodyRegion,
    ) -> bool:
        """Check whether a worn shield stands between the attack and the region."""
        coverage = self.shield_coverage.coverage_for(shield)
        if coverage is None or not coverage.covers(hit_region):
            return False
        if attack.is_melee:
            # Weapon arm is exposed while swinging
            return not (target.is_busy and hit_region.is_in_group(RIGHT_ARM))
        return True

    def _apply_secondary_damage(self, attack: AttackDescriptor, shield: ArmorLayer) -> None:
        """Replay a blocked projectile's secondary damage against the shield."""
        for secondary in attack.secondary_damage:
            if shield.destroyed:
                break
            secondary_def = secondary.damage_def
            if secondary_def.armor_category is None:
                continue
            secondary_state = PenetrationState(float(secondary.amount), attack.armor_penetration)
            self.penetration_model.try_penetrate(
                secondary_def,
                shield.stat(secondary_def.armor_rating_stat),
                secondary_state,
                shield,
            )

    def _penetrate_layer(
        self,
        attack: AttackDescriptor,
        layer: ArmorLayer,
        state: PenetrationState,
    ) -> bool:
        armor = layer.stat(attack.damage_def.armor_rating_stat)
        return self.penetration_model.try_penetrate(attack.damage_def, armor, state, layer)

    def _resolve_apparel(
        self,
        attack: AttackDescriptor,
        layers: Sequence[ArmorLayer],
        hit_region: BodyRegion,
        state: PenetrationState,
    ) -> tuple[AttackDescriptor, bool]:
        """
        Pass the attack through worn layers, outer shell first.

        Args:
            attack: The attack so far.
            layers: Snapshot of the worn layers, outer to inner.
            hit_region: The region being hit.
            state: Remaining damage and penetration, updated in place.

        Returns:
            Tuple of (attack after apparel, stopped). The attack is the blunt
            conversion if any layer deflected it.
        """
        for layer in layers:
            if not layer.covers(hit_region):
                continue
            if not self._penetrate_layer(attack, layer, state):
                attack = self.redirector.deflect(attack, hit_region)
                logger.debug("Deflected by %s, converted to %s", layer.name, attack.damage_def.name)
                # The converted attack still has to get through the deflecting layer
                if state.amount > 0 and not layer.destroyed:
                    self._penetrate_layer(attack, layer, state)
            if state.amount <= 0:
                return attack, True
        return attack, False

    def _resolve_natural_armor(
        self,
        attack: AttackDescriptor,
        target: ArmorTarget,
        hit_region: BodyRegion,
        state: PenetrationState,
        involve_armor: bool,
    ) -> tuple[AttackDescriptor, bool]:
        """
        Pass the attack through body tissue, from the outermost parent inward.

        Naturally armored regions reduce damage for real. Other regions only
        check whether the attack is stopped; their reduction is computed on a
        throwaway copy so bare tissue never soaks up damage.

        Returns:
            Tuple of (attack after natural armor, stopped).
        """
        chain = hit_region.inside_chain() if involve_armor else [hit_region]
        density = target.stat(BODY_PART_DENSITY_STAT)

        for region in reversed(chain):
            naturally_armored = region.is_in_group(COVERED_BY_NATURAL_ARMOR)
            if naturally_armored:
                armor = density + target.stat(attack.damage_def.armor_rating_stat)
                penetrated = self.penetration_model.try_penetrate(attack.damage_def, armor, state)
            else:
                probe = state.copy()
                penetrated = self.penetration_model.try_penetrate(attack.damage_def, density, probe)
                state.penetration = probe.penetration

            if not penetrated:
                attack = attack.with_hit_region(region)
                if naturally_armored and target.fully_armored:
                    attack = self.redirector.deflect(attack, region)
                    armor = density + target.stat(attack.damage_def.armor_rating_stat)
                    self.penetration_model.try_penetrate(attack.damage_def, armor, state)
                logger.debug("Stopped by natural armor at %s", region.name)
                break
            if state.amount <= 0:
                return attack, True
        return attack, False


# Convenience function for quick armor simulations
def simulate_attacks(
    attack: AttackDescriptor,
    target: ArmorTarget,
    hit_region: BodyRegion,
    num_attacks: int = 1,
    seed: Optional[int] = None,
    defs: Optional[DamageDefRegistry] = None,
    shield_coverage: Optional[ShieldCoverageTable] = None,
) -> list[ArmorResolution]:
    """
    Resolve the same attack repeatedly against one target.

    Layers keep the structural damage of earlier attacks, so later results
    reflect worn-down armor. Destroyed layers no longer protect.

    Args:
        attack: The attack to repeat.
        target: The creature being hit.
        hit_region: The body region every attack lands on.
        num_attacks: Number of attacks to resolve.
        seed: Random seed for reproducibility.
        defs: Damage definition registry, the bundled one by default.
        shield_coverage: Coverage descriptors for shield definitions.

    Returns:
        List of ArmorResolution, one per attack.
    """
    if defs is None:
        defs = load_damage_defs()
    rng = random.Random(seed) if seed is not None else random.Random()
    resolver = PenetrationResolver(defs, rng=rng, shield_coverage=shield_coverage)
    return [resolver.resolve(attack, target, hit_region) for _ in range(num_attacks)]
