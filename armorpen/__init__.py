"""armorpen: layered armor penetration and deflection engine."""

from .attack import (
    AttackDescriptor,
    SecondaryDamage,
    WeaponInfo,
)

from .body import (
    BodyPartDepth,
    BodyPartHeight,
    BodyRegion,
    build_body,
)

from .defs import (
    # Enums
    ArmorCategory,
    # Classes
    DamageDef,
    DamageDefRegistry,
    # Stat and group ids
    BODY_PART_DENSITY_STAT,
    COVERED_BY_NATURAL_ARMOR,
    RIGHT_ARM,
    # Loading
    load_damage_defs,
)

from .deflection import DeflectionRedirector

from .entities import (
    # Protocols
    ArmorLayer,
    ArmorTarget,
    DamageableLayer,
    LivingCombatant,
    # Reference implementations
    Apparel,
    ArmoredObject,
    Combatant,
    Shield,
)

from .parry import ParryResolver

from .penetration import (
    AmbientAttenuationModel,
    LayerPenetrationModel,
    PenetrationState,
    damage_multiplier,
)

from .resolver import (
    ArmorResolution,
    PenetrationResolver,
    simulate_attacks,
)

from .shields import (
    ShieldCoverage,
    ShieldCoverageTable,
)

__all__ = [
    # Attack module
    "AttackDescriptor",
    "SecondaryDamage",
    "WeaponInfo",
    # Body module
    "BodyPartDepth",
    "BodyPartHeight",
    "BodyRegion",
    "build_body",
    # Defs module
    "ArmorCategory",
    "DamageDef",
    "DamageDefRegistry",
    "BODY_PART_DENSITY_STAT",
    "COVERED_BY_NATURAL_ARMOR",
    "RIGHT_ARM",
    "load_damage_defs",
    # Deflection module
    "DeflectionRedirector",
    # Entities module
    "ArmorLayer",
    "ArmorTarget",
    "DamageableLayer",
    "LivingCombatant",
    "Apparel",
    "ArmoredObject",
    "Combatant",
    "Shield",
    # Parry module
    "ParryResolver",
    # Penetration module
    "AmbientAttenuationModel",
    "LayerPenetrationModel",
    "PenetrationState",
    "damage_multiplier",
    # Resolver module
    "ArmorResolution",
    "PenetrationResolver",
    "simulate_attacks",
    # Shields module
    "ShieldCoverage",
    "ShieldCoverageTable",
]
