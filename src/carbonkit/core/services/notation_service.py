"""Service for naming molecules and writing SMILES."""

import logging
from typing import Optional

from rdkit import Chem, RDLogger

from ...exceptions import MoleculeGraphError
from ..domain.implementations.iupac_name_generator import IUPACNameGenerator
from ..domain.implementations.smiles_generator import SMILESGenerator
from ..domain.interfaces.notation_generator import NotationGenerator
from ..domain.models.molecule_graph import MoleculeGraph
from .derivation import compute_formula

# Keyed by ASCII formula; both Hill and condensed forms are accepted
FORMULA_SMILES = {
    "CH4": "C",
    "C2H6": "CC",
    "C3H8": "CCC",
    "C4H10": "CCCC",
    "C6H6": "c1ccccc1",
    "CH4O": "CO",
    "CH3OH": "CO",
    "C2H6O": "CCO",
    "C2H5OH": "CCO",
    "CH2O": "C=O",
    "C2H4O2": "CC(=O)O",
    "C7H8": "Cc1ccccc1",
}

DEFAULT_FORMULA_SMILES = "C"

_ASCII_DIGITS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")


def get_smiles_by_formula(formula: str) -> str:
    """Look up a SMILES string for a handful of well-known formulas.

    Accepts subscript or ASCII digits. Unknown formulas give ``"C"``.
    """
    key = formula.strip().translate(_ASCII_DIGITS)
    return FORMULA_SMILES.get(key, DEFAULT_FORMULA_SMILES)


def is_valid_smiles(smiles: str) -> bool:
    """Syntactic SMILES check using RDKit's parser without sanitization."""
    if not smiles or not smiles.strip():
        return False
    RDLogger.DisableLog("rdApp.error")
    try:
        return Chem.MolFromSmiles(smiles, sanitize=False) is not None
    finally:
        RDLogger.EnableLog("rdApp.error")


class NotationService:
    """Service producing IUPAC names and SMILES for molecule graphs."""

    def __init__(
        self,
        name_generator: Optional[NotationGenerator] = None,
        smiles_generator: Optional[NotationGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize service with naming and SMILES strategies."""
        self._name_generator = name_generator or IUPACNameGenerator()
        self._smiles_generator = smiles_generator or SMILESGenerator()
        self.logger = logger or logging.getLogger(__name__)

    def iupac_name(self, graph: MoleculeGraph) -> str:
        return self._name_generator.generate(graph)

    def smiles(self, graph: MoleculeGraph) -> str:
        """SMILES by traversal only."""
        return self._smiles_generator.generate(graph)

    def smiles_for(self, graph: MoleculeGraph) -> str:
        """
        SMILES by traversal, falling back to the formula lookup table.

        Args:
            graph: Molecule graph with derived fields computed

        Returns:
            SMILES string, empty only for an empty graph
        """
        if not graph.atoms:
            return ""
        try:
            smiles = self._smiles_generator.generate(graph)
        except MoleculeGraphError as e:
            self.logger.warning(f"SMILES traversal failed: {e}")
            smiles = ""
        if smiles:
            return smiles

        formula = compute_formula(graph)
        self.logger.debug(f"Using formula lookup for {formula}")
        return get_smiles_by_formula(formula)


_default_service = NotationService()


def compute_iupac_name(graph: MoleculeGraph) -> str:
    return _default_service.iupac_name(graph)


def generate_smiles(graph: MoleculeGraph) -> str:
    return _default_service.smiles(graph)
