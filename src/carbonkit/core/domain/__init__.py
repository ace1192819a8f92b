"""Core domain models and interfaces."""

from .models.molecule_graph import MoleculeGraph
from .models.mutation_result import MutationResult
from .interfaces.notation_generator import NotationGenerator

__all__ = [
    "MoleculeGraph",
    "MutationResult",
    "NotationGenerator",
]
