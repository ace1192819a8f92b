"""Core business logic services."""

from .derivation import (
    DerivedProperties,
    compute_formula,
    compute_molecular_weight,
    compute_unsaturation_degree,
    detect_functional_groups,
    get_derived_properties,
    validate_molecule,
)
from .editing_service import MoleculeEditingService
from .notation_service import (
    NotationService,
    compute_iupac_name,
    generate_smiles,
    get_smiles_by_formula,
    is_valid_smiles,
)

__all__ = [
    "DerivedProperties",
    "MoleculeEditingService",
    "NotationService",
    "compute_formula",
    "compute_iupac_name",
    "compute_molecular_weight",
    "compute_unsaturation_degree",
    "detect_functional_groups",
    "generate_smiles",
    "get_derived_properties",
    "get_smiles_by_formula",
    "is_valid_smiles",
    "validate_molecule",
]
