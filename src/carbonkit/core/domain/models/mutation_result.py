"""Domain model for the outcome of a structural edit."""

from dataclasses import dataclass
from typing import Optional

from .molecule_graph import MoleculeGraph


@dataclass(frozen=True)
class MutationResult:
    """Either a success carrying the new graph or a failure carrying a reason."""

    success: bool
    graph: Optional[MoleculeGraph] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, graph: MoleculeGraph) -> "MutationResult":
        return cls(success=True, graph=graph)

    @classmethod
    def failure(cls, reason: str) -> "MutationResult":
        return cls(success=False, error=reason)

    def __bool__(self) -> bool:
        return self.success
