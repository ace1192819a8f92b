"""Domain model for functional groups detected on a molecule graph."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class FunctionalGroupType(Enum):
    """Functional group families recognised by the derivation engine."""

    ALCOHOL = "alcohol"
    CARBONYL = "carbonyl"
    CARBOXYLIC_ACID = "carboxylic-acid"
    AMINE = "amine"
    ESTER = "ester"
    ETHER = "ether"
    ALDEHYDE = "aldehyde"
    KETONE = "ketone"
    NITRO = "nitro"
    ALKYL_HALIDE = "alkyl-halide"
    AMIDE = "amide"
    NITRILE = "nitrile"


@dataclass(frozen=True)
class DetectedFunctionalGroup:
    """A functional group match. Recomputed on demand, never stored on a graph."""

    group_type: FunctionalGroupType
    atom_ids: Tuple[str, ...]
    attachment_atom_id: str

    @property
    def name(self) -> str:
        return self.group_type.value
