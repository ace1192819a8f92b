"""Abstract storage contracts shared by the repositories."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar

from ..domain.models.molecule_graph import MoleculeGraph

T = TypeVar("T")
P = TypeVar("P")


class Repository(ABC, Generic[T]):
    """
    Keyed collection of entities with create/read/update/delete access.

    Implementations decide where entities live; callers only see this contract.
    ``not_found`` is the ``KeyError`` subclass raised by ``require``.
    """

    not_found: Type[KeyError] = KeyError

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Return the entity stored under ``id``, or None."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """Return every stored entity."""
        pass

    @abstractmethod
    def create(self, entity: T) -> T:
        """Store a new entity and return it."""
        pass

    @abstractmethod
    def update(self, entity: T) -> T:
        """Replace a stored entity and return it."""
        pass

    @abstractmethod
    def delete(self, id: str) -> None:
        """Remove the entity stored under ``id``."""
        pass

    def exists(self, id: str) -> bool:
        return self.get(id) is not None

    def require(self, id: str) -> T:
        """
        Return the entity stored under ``id``.

        Raises:
            KeyError: ``not_found`` when nothing is stored under ``id``
        """
        entity = self.get(id)
        if entity is None:
            raise self.not_found(id)
        return entity


class GraphRepository(Repository[T], Generic[T, P]):
    """Repository whose entities can be instantiated as new molecule graphs."""

    @abstractmethod
    def build(self, id: str, params: Optional[P] = None) -> MoleculeGraph:
        """
        Build a fresh graph from the entity stored under ``id``.

        Args:
            id: Entity key
            params: Optional sizing parameters understood by the implementation

        Raises:
            KeyError: ``not_found`` when nothing is stored under ``id``
        """
        pass
