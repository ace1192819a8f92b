"""Editing session holding the current molecule graph."""

import logging
from typing import Any, Callable, List, Optional

from ..domain.models.molecule_graph import MoleculeGraph, recompute_derived
from ..domain.models.mutation_result import MutationResult
from ..domain.models.validation_summary import ValidationSummary
from .derivation import DerivedProperties, get_derived_properties, validate_molecule
from .notation_service import NotationService

Mutation = Callable[..., MutationResult]


class MoleculeEditingService:
    """
    Single-slot editing session.

    Holds the current graph, applies mutation operations to it, and keeps an
    undo history plus a saved snapshot that ``reset`` returns to. Graphs are
    immutable values, so history entries are the previous graphs themselves.
    """

    def __init__(
        self,
        graph: Optional[MoleculeGraph] = None,
        notation_service: Optional[NotationService] = None,
        logger: Optional[logging.Logger] = None,
        history_limit: Optional[int] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self._notation = notation_service or NotationService(logger=self.logger)
        self._history_limit = history_limit
        self._history: List[MoleculeGraph] = []
        self._current = recompute_derived(graph or MoleculeGraph.empty())
        self._snapshot = self._current

    @property
    def current(self) -> MoleculeGraph:
        return self._current

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def load(self, graph: MoleculeGraph) -> MoleculeGraph:
        """Replace the session contents and make them the reset point."""
        self._current = recompute_derived(graph)
        self._snapshot = self._current
        self._history.clear()
        self.logger.info(f"Loaded molecule with {len(self._current)} atoms")
        return self._current

    def apply(self, operation: Mutation, *args: Any, **kwargs: Any) -> MutationResult:
        """
        Apply a mutation operation to the current graph.

        Args:
            operation: Callable taking the current graph first and returning
                a MutationResult (e.g. ``mutations.extend_chain``)
            *args: Further positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            The operation's result. On failure the current graph is unchanged.
        """
        name = getattr(operation, "__name__", repr(operation))
        result = operation(self._current, *args, **kwargs)
        if not result.success:
            self.logger.info(f"{name} failed: {result.error}")
            return result

        self._history.append(self._current)
        if self._history_limit is not None and len(self._history) > self._history_limit:
            self._history.pop(0)
        self._current = result.graph
        self.logger.debug(f"{name} applied, {len(self._current)} atoms")
        return result

    def undo(self) -> bool:
        """Step back one successful mutation. Returns False with no history."""
        if not self._history:
            return False
        self._current = self._history.pop()
        return True

    def save_snapshot(self) -> None:
        self._snapshot = self._current

    def reset(self) -> MoleculeGraph:
        """Return to the saved snapshot and drop the undo history."""
        self._current = self._snapshot
        self._history.clear()
        return self._current

    def properties(self) -> DerivedProperties:
        return get_derived_properties(self._current)

    def validate(self) -> ValidationSummary:
        return validate_molecule(self._current)

    def iupac_name(self) -> str:
        return self._notation.iupac_name(self._current)

    def smiles(self) -> str:
        return self._notation.smiles_for(self._current)
