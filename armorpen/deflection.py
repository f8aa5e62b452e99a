"""
Conversion of deflected attacks into blunt trauma.

A sharp attack that fails to get through a layer still carries its energy
into the body. It is re-issued as blunt damage without penetration, aimed at
the nearest exposed ancestor of the region it was meant for.
"""

from __future__ import annotations

from dataclasses import replace

from .attack import AttackDescriptor
from .body import BodyRegion
from .defs import DamageDefRegistry


class DeflectionRedirector:
    """Turns deflected attacks into blunt attacks on an outer body region."""

    def __init__(self, defs: DamageDefRegistry):
        self.defs = defs

    def deflect(self, attack: AttackDescriptor, hit_region: BodyRegion) -> AttackDescriptor:
        """
        Build the blunt follow-up of a deflected attack.

        Args:
            attack: The attack that was deflected.
            hit_region: The region the attack was resolving against.

        Returns:
            A copy of the attack with Blunt damage, zero penetration and the
            outermost parent of hit_region as its target. Every other field
            is carried over unchanged.
        """
        return replace(
            attack,
            damage_def=self.defs.blunt,
            armor_penetration=0.0,
            hit_region=hit_region.outermost_parent(),
        )
