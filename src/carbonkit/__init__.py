"""Organic molecule graph engine: editing, derived properties, IUPAC names and SMILES."""

from .config import DEFAULT_SETTINGS, EngineSettings, configure_logging
from .core.domain.models.molecule_graph import MoleculeGraph, recompute_derived
from .core.services.editing_service import MoleculeEditingService
from .core.services.notation_service import NotationService
from .exceptions import GraphStructureError, MoleculeGraphError

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "GraphStructureError",
    "MoleculeEditingService",
    "MoleculeGraph",
    "MoleculeGraphError",
    "NotationService",
    "configure_logging",
    "recompute_derived",
]
