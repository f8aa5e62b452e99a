"""
Body region tree for the armorpen engine.

Bodies are trees of regions. Every region except the root has a parent, and
a depth telling whether it is exposed (Outside) or protected by its parents
(Inside). Group memberships tag regions the resolvers treat specially, such
as naturally armored plates or the arm that swings a weapon.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BodyPartDepth(Enum):
    """Whether a region is directly exposed or sits beneath its parent."""
    UNDEFINED = "undefined"
    INSIDE = "inside"
    OUTSIDE = "outside"


class BodyPartHeight(Enum):
    """Vertical band of the body an attack is aimed at."""
    UNDEFINED = "undefined"
    BOTTOM = "bottom"
    MIDDLE = "middle"
    TOP = "top"


@dataclass(eq=False)
class BodyRegion:
    """
    A single node in a body tree.

    Regions compare by identity, so two limbs with the same name on
    different bodies never alias each other.

    Attributes:
        name: Display name of the region (e.g. 'Torso', 'Heart').
        depth: Outside (exposed) or Inside (protected by the parent).
        parent: Enclosing region, None for the root.
        groups: Group memberships (e.g. 'CoveredByNaturalArmor').
        children: Regions directly attached to this one.
    """
    name: str
    depth: BodyPartDepth = BodyPartDepth.OUTSIDE
    parent: Optional[BodyRegion] = field(default=None, repr=False)
    groups: frozenset[str] = field(default_factory=frozenset)
    children: list[BodyRegion] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.parent.children.append(self)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def is_in_group(self, group: str) -> bool:
        return group in self.groups

    def outermost_parent(self) -> BodyRegion:
        """
        Find the first region at or above this one with Outside depth.

        Returns:
            This region if it is already Outside or has no parent, otherwise
            the nearest Outside ancestor, or the root when none is Outside.
        """
        current = self
        while current.parent is not None and current.depth is not BodyPartDepth.OUTSIDE:
            current = current.parent
        return current

    def inside_chain(self) -> list[BodyRegion]:
        """
        Collect the regions an attack passes on its way to this one.

        Starting from this region, climbs to the parent for as long as the
        current region is Inside. The first non-Inside region reached is
        included, so a heart inside a ribcage yields [heart, ribcage, torso].

        Returns:
            Regions ordered from this one outward.
        """
        chain = [self]
        current = self
        while current.parent is not None and current.depth is BodyPartDepth.INSIDE:
            current = current.parent
            chain.append(current)
        return chain

    def iter_tree(self):
        """Yield this region and all of its descendants, depth-first."""
        yield self
        for child in self.children:
            yield from child.iter_tree()


def build_body(data: dict, parent: Optional[BodyRegion] = None) -> dict[str, BodyRegion]:
    """
    Build a body tree from nested dictionaries.

    Each node is a dict with 'name', optional 'depth' ('inside'/'outside'),
    optional 'groups' list and optional 'parts' list of child nodes.

    Args:
        data: The root node description.
        parent: Region to attach the new subtree to.

    Returns:
        Every created region keyed by name.

    Raises:
        ValueError: If two regions in the tree share a name.
    """
    region = BodyRegion(
        name=data["name"],
        depth=BodyPartDepth(data.get("depth", "outside")),
        parent=parent,
        groups=frozenset(data.get("groups", ())),
    )
    regions = {region.name: region}
    for child in data.get("parts", ()):
        for name, sub in build_body(child, parent=region).items():
            if name in regions:
                raise ValueError(f"Duplicate body region name '{name}'")
            regions[name] = sub
    return regions
