"""
Shield coverage side-table.

Which body regions a shield blocks is a property of the shield's definition,
not of the worn layer. Coverage descriptors are registered per definition
name and looked up once per attack. A shield without a descriptor is a
configuration error: it is reported once and treated as covering nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .body import BodyRegion
from .entities import ArmorLayer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShieldCoverage:
    """
    Regions a shield definition protects.

    Attributes:
        covered_groups: Region names or body part group names blocked by the
            shield.
    """
    covered_groups: frozenset[str] = field(default_factory=frozenset)

    def covers(self, region: BodyRegion) -> bool:
        return region.name in self.covered_groups or not self.covered_groups.isdisjoint(region.groups)


class ShieldCoverageTable:
    """Coverage descriptors keyed by shield definition name."""

    def __init__(self, coverages: Optional[Mapping[str, ShieldCoverage]] = None):
        self._coverages: dict[str, ShieldCoverage] = dict(coverages or {})
        self._reported: set[str] = set()

    def __len__(self) -> int:
        return len(self._coverages)

    def register(self, def_name: str, coverage: ShieldCoverage) -> None:
        self._coverages[def_name] = coverage

    def coverage_for(self, shield: ArmorLayer) -> Optional[ShieldCoverage]:
        """
        Look up the coverage of a worn shield.

        Args:
            shield: The shield-class layer.

        Returns:
            The registered coverage, or None if the definition has none.
        """
        coverage = self._coverages.get(shield.def_name)
        if coverage is None and shield.def_name not in self._reported:
            self._reported.add(shield.def_name)
            logger.error(
                "Shield %s is a shield layer but has no coverage descriptor",
                shield.def_name,
            )
        return coverage

    @classmethod
    def from_json(cls, data: dict) -> ShieldCoverageTable:
        """
        Build a table from a mapping of definition name to covered groups.

        Example: {"HeaterShield": ["Torso", "LeftArm"]}
        """
        return cls({
            def_name: ShieldCoverage(covered_groups=frozenset(groups))
            for def_name, groups in data.items()
        })
