"""
Damage definitions and material configuration for the armorpen engine.

This module holds the process-wide, immutable configuration the resolvers
consume: which damage definitions exist, which armor category (if any) each
one is resolved against, the flags that change how deflection works, and
which material families count as soft armor.

The configuration is loaded once (usually from the bundled JSON file) and
passed by reference into every resolver. Nothing in here is mutated after
load.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional


DEFAULT_DEFS_PATH = Path(__file__).parent / "data" / "damage_defs.json"

# Stat ids queried on combatants and layers
BODY_PART_DENSITY_STAT = "BodyPartDensity"  # Armor provided by sheer meat

# Body part group names the engine reacts to
COVERED_BY_NATURAL_ARMOR = "CoveredByNaturalArmor"
RIGHT_ARM = "RightArm"  # Exposed while the defender is mid-action

DEFAULT_SOFT_STUFF_CATEGORIES = frozenset({"Fabric", "Leathery"})


class ArmorCategory(Enum):
    """Armor categories a damage definition can be resolved against."""
    SHARP = "Sharp"
    BLUNT = "Blunt"
    HEAT = "Heat"
    ELECTRIC = "Electric"

    @property
    def armor_rating_stat(self) -> str:
        """Stat id holding armor against this category."""
        return f"ArmorRating_{self.value}"


@dataclass(frozen=True)
class DamageDef:
    """
    A damage definition, i.e. the kind of harm an attack deals.

    Attributes:
        name: Unique definition name (e.g. 'Cut', 'Bullet', 'Burn').
        armor_category: Category armor is checked against. None means the
            damage ignores armor entirely.
        is_ambient: Resolved by flat percentage attenuation (heat, electricity)
            instead of per-layer deflection.
        no_damage_on_deflect: A deflected hit deals no damage at all.
        harm_all_layers_until_outside: Whether the hit passes the apparel
            stack and the parent body parts on its way in.
    """
    name: str
    armor_category: Optional[ArmorCategory] = None
    is_ambient: bool = False
    no_damage_on_deflect: bool = False
    harm_all_layers_until_outside: bool = True

    @property
    def armor_rating_stat(self) -> Optional[str]:
        if self.armor_category is None:
            return None
        return self.armor_category.armor_rating_stat

    @property
    def is_sharp(self) -> bool:
        return self.armor_category is ArmorCategory.SHARP

    @property
    def is_blunt(self) -> bool:
        return self.armor_category is ArmorCategory.BLUNT

    @classmethod
    def from_json(cls, name: str, data: dict) -> DamageDef:
        """
        Create a DamageDef from its JSON entry.

        Args:
            name: The definition name (the key in the JSON mapping).
            data: Dictionary with the definition's properties.

        Returns:
            A configured DamageDef instance.
        """
        category = data.get("armor_category")
        return cls(
            name=name,
            armor_category=ArmorCategory(category) if category else None,
            is_ambient=data.get("is_ambient", False),
            no_damage_on_deflect=data.get("no_damage_on_deflect", False),
            harm_all_layers_until_outside=data.get("harm_all_layers_until_outside", True),
        )


@dataclass(frozen=True)
class DamageDefRegistry:
    """
    Immutable lookup of damage definitions and material classes.

    Attributes:
        defs: Damage definitions keyed by name.
        blunt_def_name: Definition deflected sharp attacks are converted to.
        soft_stuff_categories: Material families treated as soft armor.
    """
    defs: Mapping[str, DamageDef]
    blunt_def_name: str = "Blunt"
    soft_stuff_categories: frozenset[str] = field(default=DEFAULT_SOFT_STUFF_CATEGORIES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "defs", MappingProxyType(dict(self.defs)))
        blunt = self.defs.get(self.blunt_def_name)
        if blunt is None or not blunt.is_blunt:
            raise ValueError(
                f"Deflection target '{self.blunt_def_name}' must be a Blunt damage definition"
            )

    def __contains__(self, name: str) -> bool:
        return name in self.defs

    def get(self, name: str) -> DamageDef:
        """
        Look up a damage definition by name.

        Raises:
            KeyError: If no definition with that name exists.
        """
        if name not in self.defs:
            raise KeyError(f"Damage definition '{name}' not found")
        return self.defs[name]

    @property
    def blunt(self) -> DamageDef:
        """The definition used for deflected attacks."""
        return self.defs[self.blunt_def_name]

    def is_soft_material(self, stuff_categories: frozenset[str]) -> bool:
        """Check whether a layer made of these stuff categories is soft armor."""
        return not self.soft_stuff_categories.isdisjoint(stuff_categories)

    @classmethod
    def from_json(cls, data: dict) -> DamageDefRegistry:
        """
        Build a registry from the JSON configuration layout.

        Args:
            data: Dictionary with 'damage_defs', and optionally
                'blunt_def' and 'soft_stuff_categories'.

        Returns:
            A configured, immutable DamageDefRegistry.
        """
        defs = {
            name: DamageDef.from_json(name, entry)
            for name, entry in data.get("damage_defs", {}).items()
        }
        soft = data.get("soft_stuff_categories")
        return cls(
            defs=defs,
            blunt_def_name=data.get("blunt_def", "Blunt"),
            soft_stuff_categories=(
                frozenset(soft) if soft is not None else DEFAULT_SOFT_STUFF_CATEGORIES
            ),
        )


def load_damage_defs(filepath: str | Path | None = None) -> DamageDefRegistry:
    """
    Load the damage definition registry from a JSON file.

    Args:
        filepath: Path to a damage definition file. Defaults to the
            definitions bundled with the package.

    Returns:
        The loaded DamageDefRegistry.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    if filepath is None:
        filepath = DEFAULT_DEFS_PATH
    with open(filepath, "r") as f:
        return DamageDefRegistry.from_json(json.load(f))
