#!/usr/bin/env python3
# src/carbonkit/core/domain/models/atom.py

"""
Domain model representing an explicit (non-hydrogen) atom in an organic molecule.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class Element(Enum):
    """Elements supported by the organic graph engine."""

    CARBON = "C"
    OXYGEN = "O"
    NITROGEN = "N"
    SULFUR = "S"
    PHOSPHORUS = "P"
    FLUORINE = "F"
    CHLORINE = "Cl"
    BROMINE = "Br"
    IODINE = "I"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def max_valence(self) -> int:
        return _MAX_VALENCE[self]

    @property
    def atomic_weight(self) -> float:
        return ATOMIC_WEIGHTS[self.value]

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def is_halogen(self) -> bool:
        return self in HALOGENS

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element":
        """Look up an element by its symbol (e.g. ``"Cl"``)."""
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unsupported element symbol: {symbol!r}") from None


class Hybridization(Enum):
    """Orbital hybridization derived from the bonds at an atom."""

    SP = "sp"
    SP2 = "sp2"
    SP3 = "sp3"


_MAX_VALENCE = {
    Element.CARBON: 4,
    Element.OXYGEN: 2,
    Element.NITROGEN: 5,
    Element.SULFUR: 2,
    Element.PHOSPHORUS: 3,
    Element.FLUORINE: 1,
    Element.CHLORINE: 1,
    Element.BROMINE: 1,
    Element.IODINE: 1,
}

# Standard atomic weights (g/mol), hydrogen included for formula work
ATOMIC_WEIGHTS = {
    "C": 12.011,
    "H": 1.008,
    "O": 15.999,
    "N": 14.007,
    "S": 32.065,
    "P": 30.974,
    "F": 18.998,
    "Cl": 35.453,
    "Br": 79.904,
    "I": 126.904,
}

HALOGENS = frozenset(
    {Element.FLUORINE, Element.CHLORINE, Element.BROMINE, Element.IODINE}
)


def max_valence(element: Element) -> int:
    """Return the maximum total bond order an element may carry."""
    return element.max_valence


@dataclass(frozen=True)
class AtomNode:
    """Represents one explicit atom of a molecule graph.

    ``implicit_hydrogens`` and ``hybridization`` are derived from the bond set
    and are refreshed by the graph recompute functions after every edit.
    """

    atom_id: str
    element: Element
    position: Tuple[float, float] = (0.0, 0.0)
    implicit_hydrogens: int = 0
    hybridization: Hybridization = Hybridization.SP3

    @property
    def symbol(self) -> str:
        return self.element.symbol

    @property
    def is_carbon(self) -> bool:
        return self.element is Element.CARBON

    def with_derived(
        self, implicit_hydrogens: int, hybridization: Hybridization
    ) -> "AtomNode":
        """Return a copy carrying new derived values."""
        return replace(
            self, implicit_hydrogens=implicit_hydrogens, hybridization=hybridization
        )
