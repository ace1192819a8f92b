"""Domain model classes."""

from .atom import AtomNode, Element, Hybridization, max_valence
from .bond import Bond, BondCategory, BondStereo
from .functional_group import DetectedFunctionalGroup, FunctionalGroupType
from .molecule_graph import (
    MoleculeGraph,
    make_bond,
    new_atom_id,
    recompute_derived,
    recompute_hybridization,
    recompute_implicit_hydrogens,
    validate_valence,
)
from .mutation_result import MutationResult
from .substituent import SubstituentKind
from .validation_summary import ValidationSummary

__all__ = [
    "AtomNode",
    "Bond",
    "BondCategory",
    "BondStereo",
    "DetectedFunctionalGroup",
    "Element",
    "FunctionalGroupType",
    "Hybridization",
    "MoleculeGraph",
    "MutationResult",
    "SubstituentKind",
    "ValidationSummary",
    "make_bond",
    "max_valence",
    "new_atom_id",
    "recompute_derived",
    "recompute_hybridization",
    "recompute_implicit_hydrogens",
    "validate_valence",
]
