"""
Interfaces the armorpen resolvers consume, plus reference implementations.

The resolvers never own equipment or creature definitions. They only query
the properties described by the protocols below. The dataclasses in this
module are plain containers implementing those protocols, useful for tests,
scripts and simple simulations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Protocol, Sequence

from .attack import AttackDescriptor
from .body import BodyRegion
from .defs import DamageDef


# =============================================================================
# CONSUMED INTERFACES
# =============================================================================

class DamageableLayer(Protocol):
    """Anything that carries armor stats and can take structural damage."""

    name: str
    is_living: bool
    stuff_categories: frozenset[str]

    @property
    def destroyed(self) -> bool:
        ...

    def stat(self, stat_id: str) -> float:
        ...

    def take_damage(self, damage_def: DamageDef, amount: int) -> None:
        ...


class ArmorLayer(DamageableLayer, Protocol):
    """
    A worn layer (apparel or shield).

    `def_name` identifies the layer's definition; shields are looked up by it
    in the coverage side-table.
    """

    def_name: str
    is_shield: bool

    def covers(self, region: BodyRegion) -> bool:
        ...


class ArmorTarget(Protocol):
    """A creature whose layers an attack must pass through."""

    fully_armored: bool
    is_busy: bool

    def stat(self, stat_id: str) -> float:
        ...

    def layers_outer_to_inner(self) -> Sequence[ArmorLayer]:
        """Worn layers that are still intact, outer shell first."""
        ...


class LivingCombatant(Protocol):
    """A defender that runs its own damage pipeline for parried blows."""

    is_living: bool

    def take_attack(self, attack: AttackDescriptor) -> None:
        ...


# =============================================================================
# REFERENCE IMPLEMENTATIONS
# =============================================================================

@dataclass(eq=False)
class ArmoredObject:
    """
    An inanimate object with armor stats and hit points.

    Used directly for parry targets (a parrying weapon, a barricade) and as
    the base of worn apparel.

    Attributes:
        name: Display name.
        stats: Stat values keyed by stat id (e.g. 'ArmorRating_Sharp').
        stuff_categories: Material families the object is made from.
        hit_points: Remaining structural integrity.
        def_name: Definition identity, defaults to the name.
    """
    name: str
    stats: dict[str, float] = field(default_factory=dict)
    stuff_categories: frozenset[str] = field(default_factory=frozenset)
    hit_points: int = 100
    def_name: str = ""

    is_living: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not self.def_name:
            self.def_name = self.name

    @property
    def destroyed(self) -> bool:
        return self.hit_points <= 0

    def stat(self, stat_id: str) -> float:
        return self.stats.get(stat_id, 0.0)

    def take_damage(self, damage_def: DamageDef, amount: int) -> None:
        """Reduce hit points; destroyed objects ignore further damage."""
        if self.destroyed or amount <= 0:
            return
        self.hit_points = max(0, self.hit_points - amount)

    @classmethod
    def from_json(cls, data: dict) -> ArmoredObject:
        return cls(
            name=data["name"],
            stats=dict(data.get("stats", {})),
            stuff_categories=frozenset(data.get("stuff_categories", ())),
            hit_points=data.get("hit_points", 100),
            def_name=data.get("def_name", ""),
        )


@dataclass(eq=False)
class Apparel(ArmoredObject):
    """
    A piece of worn equipment.

    Attributes:
        coverage: Region names or body part group names the apparel covers.
    """
    coverage: frozenset[str] = field(default_factory=frozenset)

    is_shield: ClassVar[bool] = False

    def covers(self, region: BodyRegion) -> bool:
        return region.name in self.coverage or not self.coverage.isdisjoint(region.groups)

    @classmethod
    def from_json(cls, data: dict) -> Apparel:
        base = ArmoredObject.from_json(data)
        return cls(
            name=base.name,
            stats=base.stats,
            stuff_categories=base.stuff_categories,
            hit_points=base.hit_points,
            def_name=base.def_name,
            coverage=frozenset(data.get("coverage", ())),
        )


@dataclass(eq=False)
class Shield(Apparel):
    """A handheld shield. Its blocking coverage lives in a ShieldCoverageTable."""

    is_shield: ClassVar[bool] = True


@dataclass(eq=False)
class Combatant:
    """
    A creature that can be attacked.

    Attributes:
        name: Display name.
        stats: Stat values keyed by stat id (body density, natural armor).
        apparel: Worn layers in draw order, skin first and shell last.
        fully_armored: Mechanoid-like creature whose plating converts
            stopped hits into blunt trauma.
        is_busy: Currently winding up, attacking or recovering.
        attacks_taken: Attacks handed over by parries, in arrival order.
    """
    name: str
    stats: dict[str, float] = field(default_factory=dict)
    apparel: list[Apparel] = field(default_factory=list)
    fully_armored: bool = False
    is_busy: bool = False
    attacks_taken: list[AttackDescriptor] = field(default_factory=list)

    is_living: ClassVar[bool] = True

    def stat(self, stat_id: str) -> float:
        return self.stats.get(stat_id, 0.0)

    def layers_outer_to_inner(self) -> tuple[Apparel, ...]:
        # Destroyed layers fall off and protect nothing
        return tuple(layer for layer in reversed(self.apparel) if not layer.destroyed)

    def take_attack(self, attack: AttackDescriptor) -> None:
        self.attacks_taken.append(attack)

    @classmethod
    def from_json(cls, data: dict) -> Combatant:
        """
        Create a Combatant from JSON data.

        Apparel entries with "shield": true become Shield instances.

        Args:
            data: Dictionary with name, stats, apparel and class flags.

        Returns:
            A configured Combatant.
        """
        apparel: list[Apparel] = []
        for entry in data.get("apparel", ()):
            layer_cls = Shield if entry.get("shield", False) else Apparel
            apparel.append(layer_cls.from_json(entry))
        return cls(
            name=data["name"],
            stats=dict(data.get("stats", {})),
            apparel=apparel,
            fully_armored=data.get("fully_armored", False),
            is_busy=data.get("is_busy", False),
        )
