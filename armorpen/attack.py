"""
Attack descriptors passed through the armorpen resolvers.

An AttackDescriptor is produced fresh for every attack event and is never
mutated: each resolution stage returns an adjusted copy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from .body import BodyPartDepth, BodyPartHeight, BodyRegion
from .defs import DamageDef


@dataclass(frozen=True)
class SecondaryDamage:
    """
    Extra damage carried by a projectile on top of its main hit.

    Attributes:
        damage_def: Kind of damage dealt (e.g. 'Flame' on an incendiary round).
        amount: Raw damage amount.
    """
    damage_def: DamageDef
    amount: float


@dataclass(frozen=True)
class WeaponInfo:
    """
    The parts of a weapon the resolvers care about.

    Attributes:
        name: Display name of the weapon.
        is_melee: True for melee weapons, False for ranged ones.
        secondary_damage: Sub-attacks replayed against a blocking shield.
    """
    name: str
    is_melee: bool = False
    secondary_damage: tuple[SecondaryDamage, ...] = ()


@dataclass(frozen=True)
class AttackDescriptor:
    """
    A single incoming attack.

    Attributes:
        damage_def: Kind of damage dealt.
        amount: Raw damage amount. Resolvers return integers here.
        armor_penetration: Attacker's capacity to defeat armor.
        angle: Impact angle in degrees, -1 when unknown.
        weapon: Weapon the attack came from, if any.
        instigator: Whoever caused the attack, passed through untouched.
        hit_region: Body region the attack lands on, if already forced.
        height: Vertical band of the body aimed at.
        depth: Whether the attack aims at outer or inner regions.
        weapon_part_group: Body part group of a natural weapon (fists, teeth).
        weapon_linked_effect: Status effect applied along with the damage.
        instant_permanent_injury: The wound becomes permanent immediately.
        allow_propagation: Excess damage may spread to other regions.
    """
    damage_def: DamageDef
    amount: float
    armor_penetration: float = 0.0
    angle: float = -1.0
    weapon: Optional[WeaponInfo] = None
    instigator: Any = None
    hit_region: Optional[BodyRegion] = None
    height: BodyPartHeight = BodyPartHeight.UNDEFINED
    depth: BodyPartDepth = BodyPartDepth.UNDEFINED
    weapon_part_group: Optional[str] = None
    weapon_linked_effect: Optional[str] = None
    instant_permanent_injury: bool = False
    allow_propagation: bool = True

    @property
    def is_melee(self) -> bool:
        return self.weapon is not None and self.weapon.is_melee

    @property
    def secondary_damage(self) -> tuple[SecondaryDamage, ...]:
        if self.weapon is None:
            return ()
        return self.weapon.secondary_damage

    def with_amount(self, amount: float) -> AttackDescriptor:
        return replace(self, amount=amount)

    def with_hit_region(self, region: BodyRegion) -> AttackDescriptor:
        return replace(self, hit_region=region)
