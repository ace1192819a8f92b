#!/usr/bin/env python3
# src/carbonkit/core/domain/models/bond.py

"""
Domain model representing a chemical bond between two atoms.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


class BondCategory(Enum):
    """Enumeration of bond categories."""

    SIGMA = "sigma"
    PI_SYSTEM = "pi-system"
    AROMATIC = "aromatic"


class BondStereo(Enum):
    """Drawing stereo markers, carried but not interpreted by the engine."""

    WEDGE = "wedge"
    DASH = "dash"
    WAVY = "wavy"


# Each aromatic bond counts as one and a half toward the valence sum
AROMATIC_VALENCE_CONTRIBUTION = 1.5


def category_for_order(bond_order: int) -> BondCategory:
    """Category of a non-aromatic bond with the given order."""
    return BondCategory.PI_SYSTEM if bond_order > 1 else BondCategory.SIGMA


@dataclass(frozen=True)
class Bond:
    """Represents a chemical bond between two atoms."""

    bond_id: str
    atom1_id: str
    atom2_id: str
    bond_order: int = 1
    category: BondCategory = BondCategory.SIGMA
    stereo: Optional[BondStereo] = None

    def __post_init__(self):
        if self.bond_order not in (1, 2, 3):
            raise ValueError(f"Bond order must be 1, 2 or 3, got {self.bond_order}")

    @property
    def atom_ids(self) -> Tuple[str, str]:
        return (self.atom1_id, self.atom2_id)

    @property
    def is_aromatic(self) -> bool:
        return self.category is BondCategory.AROMATIC

    @property
    def valence_contribution(self) -> float:
        """Amount this bond adds to the valence sum of each endpoint."""
        if self.is_aromatic:
            return AROMATIC_VALENCE_CONTRIBUTION
        return float(self.bond_order)

    def involves(self, atom_id: str) -> bool:
        return atom_id == self.atom1_id or atom_id == self.atom2_id

    def connects(self, atom_a: str, atom_b: str) -> bool:
        return (self.atom1_id == atom_a and self.atom2_id == atom_b) or (
            self.atom1_id == atom_b and self.atom2_id == atom_a
        )

    def other(self, atom_id: str) -> str:
        """Return the endpoint opposite ``atom_id``."""
        if atom_id == self.atom1_id:
            return self.atom2_id
        if atom_id == self.atom2_id:
            return self.atom1_id
        raise ValueError(f"Atom {atom_id} is not an endpoint of bond {self.bond_id}")

    def with_order(self, bond_order: int) -> "Bond":
        """Return a copy with a new order and the matching category."""
        return replace(
            self, bond_order=bond_order, category=category_for_order(bond_order)
        )
