"""
Unit tests for damage definitions and the registry.

Run with: python -m pytest tests/test_defs.py -v
"""

import json

import pytest

from armorpen.defs import (
    ArmorCategory,
    DamageDef,
    DamageDefRegistry,
    DEFAULT_SOFT_STUFF_CATEGORIES,
    load_damage_defs,
)


@pytest.fixture
def sample_defs_data() -> dict:
    """Minimal damage definition configuration."""
    return {
        "blunt_def": "Blunt",
        "soft_stuff_categories": ["Fabric"],
        "damage_defs": {
            "Cut": {"armor_category": "Sharp"},
            "Blunt": {"armor_category": "Blunt"},
            "Flame": {"armor_category": "Heat", "is_ambient": True},
            "Surgical": {"harm_all_layers_until_outside": False},
        },
    }


class TestDamageDef:
    """Tests for the DamageDef class."""

    def test_from_json_sharp(self):
        """Sharp definitions expose the sharp armor stat."""
        damage_def = DamageDef.from_json("Cut", {"armor_category": "Sharp"})

        assert damage_def.name == "Cut"
        assert damage_def.armor_category is ArmorCategory.SHARP
        assert damage_def.armor_rating_stat == "ArmorRating_Sharp"
        assert damage_def.is_sharp
        assert not damage_def.is_blunt
        assert not damage_def.is_ambient
        assert damage_def.harm_all_layers_until_outside

    def test_from_json_uncategorized(self):
        """Definitions without a category have no armor stat."""
        damage_def = DamageDef.from_json("Surgical", {"harm_all_layers_until_outside": False})

        assert damage_def.armor_category is None
        assert damage_def.armor_rating_stat is None
        assert not damage_def.harm_all_layers_until_outside

    def test_from_json_flags(self):
        """Ambient and no-damage-on-deflect flags are read."""
        flame = DamageDef.from_json("Flame", {"armor_category": "Heat", "is_ambient": True})
        tranq = DamageDef.from_json(
            "Tranquilizer", {"armor_category": "Sharp", "no_damage_on_deflect": True}
        )

        assert flame.is_ambient
        assert flame.armor_rating_stat == "ArmorRating_Heat"
        assert tranq.no_damage_on_deflect

    def test_unknown_category_rejected(self):
        """An unknown armor category is a configuration error."""
        with pytest.raises(ValueError):
            DamageDef.from_json("Weird", {"armor_category": "Psychic"})


class TestDamageDefRegistry:
    """Tests for the DamageDefRegistry class."""

    def test_from_json(self, sample_defs_data):
        """Registry is built from the JSON layout."""
        registry = DamageDefRegistry.from_json(sample_defs_data)

        assert "Cut" in registry
        assert "Bullet" not in registry
        assert registry.get("Flame").is_ambient
        assert registry.blunt.name == "Blunt"
        assert registry.soft_stuff_categories == frozenset({"Fabric"})

    def test_get_unknown_raises(self, sample_defs_data):
        """Looking up a missing definition raises KeyError."""
        registry = DamageDefRegistry.from_json(sample_defs_data)

        with pytest.raises(KeyError, match="Bullet"):
            registry.get("Bullet")

    def test_missing_blunt_def_raises(self, sample_defs_data):
        """Registry refuses a deflection target that does not exist."""
        sample_defs_data["blunt_def"] = "Crush"

        with pytest.raises(ValueError):
            DamageDefRegistry.from_json(sample_defs_data)

    def test_non_blunt_deflection_target_raises(self, sample_defs_data):
        """Registry refuses a deflection target that is not Blunt."""
        sample_defs_data["blunt_def"] = "Cut"

        with pytest.raises(ValueError):
            DamageDefRegistry.from_json(sample_defs_data)

    def test_defs_are_read_only(self, sample_defs_data):
        """The definition mapping cannot be modified after load."""
        registry = DamageDefRegistry.from_json(sample_defs_data)

        with pytest.raises(TypeError):
            registry.defs["Bullet"] = DamageDef("Bullet", ArmorCategory.SHARP)

    def test_soft_material(self, sample_defs_data):
        """Any soft stuff category makes a layer soft."""
        registry = DamageDefRegistry.from_json(sample_defs_data)

        assert registry.is_soft_material(frozenset({"Fabric"}))
        assert registry.is_soft_material(frozenset({"Fabric", "Metallic"}))
        assert not registry.is_soft_material(frozenset({"Metallic"}))
        assert not registry.is_soft_material(frozenset())

    def test_default_soft_categories(self, sample_defs_data):
        """Fabric and leather are soft when the file does not say otherwise."""
        del sample_defs_data["soft_stuff_categories"]
        registry = DamageDefRegistry.from_json(sample_defs_data)

        assert registry.soft_stuff_categories == DEFAULT_SOFT_STUFF_CATEGORIES
        assert registry.is_soft_material(frozenset({"Leathery"}))


class TestLoadDamageDefs:
    """Tests for loading definitions from disk."""

    def test_load_bundled_defs(self):
        """The bundled file loads and covers every category."""
        registry = load_damage_defs()

        categories = {d.armor_category for d in registry.defs.values()}
        assert {ArmorCategory.SHARP, ArmorCategory.BLUNT, ArmorCategory.HEAT,
                ArmorCategory.ELECTRIC} <= categories
        assert registry.get("Bullet").is_sharp
        assert registry.get("Tranquilizer").no_damage_on_deflect
        assert registry.get("Surgical").armor_category is None

    def test_load_from_file(self, sample_defs_data, tmp_path):
        """Definitions load from a custom file."""
        filepath = tmp_path / "damage_defs.json"
        with open(filepath, "w") as f:
            json.dump(sample_defs_data, f)

        registry = load_damage_defs(filepath)

        assert set(registry.defs) == {"Cut", "Blunt", "Flame", "Surgical"}

    def test_load_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_damage_defs(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        """A malformed file raises a JSON error."""
        filepath = tmp_path / "broken.json"
        filepath.write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            load_damage_defs(filepath)
