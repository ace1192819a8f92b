"""Interface for line-notation and naming strategies."""

from abc import ABC, abstractmethod
from ..models.molecule_graph import MoleculeGraph


class NotationGenerator(ABC):
    """Abstract base class for strategies that turn a graph into text."""

    @abstractmethod
    def generate(self, graph: MoleculeGraph) -> str:
        """
        Produce the textual representation of a molecule graph.

        Args:
            graph: Molecule graph with derived fields computed

        Returns:
            Name or notation string
        """
        pass
