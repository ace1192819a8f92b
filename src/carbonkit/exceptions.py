"""Exception types raised by the molecule graph engine."""


class MoleculeGraphError(ValueError):
    """Base class for structural errors in a molecule graph."""


class GraphStructureError(MoleculeGraphError):
    """Raised when atoms and bonds do not form a well-formed graph."""


class InvalidAtomReferenceError(GraphStructureError):
    """Raised when a bond or query references an atom that does not exist."""

    def __init__(self, atom_id: str):
        super().__init__(f"Atom {atom_id} not found")
        self.atom_id = atom_id


class SelfBondError(GraphStructureError):
    """Raised when a bond would connect an atom to itself."""

    def __init__(self, atom_id: str):
        super().__init__(f"Cannot bond atom {atom_id} to itself")
        self.atom_id = atom_id


class TemplateNotFoundError(KeyError):
    """Raised when a template name is not known to the repository."""
