#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["numpy"]
# ///
"""
Deflection Odds Calculator for armorpen

Prints the damage multiplier curve and the Monte-Carlo chance that a sharp
attack is deflected by a given armor value, for a range of penetration values.

Usage:
    python scripts/deflection_odds.py --armor 0.5
    python scripts/deflection_odds.py --armor 1.2 --pen-min 0.5 --pen-max 2.5 --samples 50000
"""

import argparse
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from armorpen.penetration import PENETRATION_RAND_VARIATION, damage_multiplier


def deflection_chance(penetration, armor, samples, rng, variation=PENETRATION_RAND_VARIATION):
    """Fraction of uniform penetration rolls that fall below the armor value."""
    rolls = rng.uniform(penetration - variation, penetration + variation, size=samples)
    return float(np.mean(armor > rolls))


def build_table(armor, pen_min, pen_max, steps, samples, seed):
    rng = np.random.default_rng(seed)
    rows = []
    for penetration in np.linspace(pen_min, pen_max, steps):
        rows.append({
            'penetration': float(penetration),
            'ratio': float(penetration / armor) if armor > 0 else float('inf'),
            'multiplier': damage_multiplier(float(penetration), armor),
            'deflect': deflection_chance(float(penetration), armor, samples, rng),
        })
    return rows


def main():
    parser = argparse.ArgumentParser(description="Tabulate armor deflection odds")
    parser.add_argument("--armor", type=float, required=True, help="Armor value of the layer")
    parser.add_argument("--pen-min", type=float, default=0.0, help="Lowest penetration to test")
    parser.add_argument("--pen-max", type=float, default=None, help="Highest penetration (default 2.5x armor)")
    parser.add_argument("--steps", type=int, default=11, help="Number of penetration values")
    parser.add_argument("--samples", type=int, default=10000, help="Rolls per penetration value")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    pen_max = args.pen_max if args.pen_max is not None else args.armor * 2.5
    rows = build_table(args.armor, args.pen_min, pen_max, args.steps, args.samples, args.seed)

    print(f"Armor {args.armor:.2f} (roll spread +-{PENETRATION_RAND_VARIATION})")
    print("=" * 52)
    print(f"{'Pen':>8} {'Pen/Armor':>10} {'Dmg mult':>10} {'Deflect %':>12}")
    print("-" * 52)
    for row in rows:
        print(
            f"{row['penetration']:8.3f} {row['ratio']:10.2f} "
            f"{row['multiplier']:10.2f} {row['deflect'] * 100:11.1f}%"
        )


if __name__ == "__main__":
    main()
