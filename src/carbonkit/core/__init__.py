"""Core domain models, interfaces and services for molecule graphs."""

from .domain.models.molecule_graph import MoleculeGraph
from .domain.interfaces.notation_generator import NotationGenerator
from .services.editing_service import MoleculeEditingService
from .services.notation_service import NotationService

__all__ = [
    "MoleculeGraph",
    "NotationGenerator",
    "MoleculeEditingService",
    "NotationService",
]
