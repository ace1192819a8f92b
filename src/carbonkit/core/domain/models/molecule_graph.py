#!/usr/bin/env python3
# src/carbonkit/core/domain/models/molecule_graph.py

"""
Domain model representing an organic molecule as an immutable atom/bond graph.

Hydrogens are never explicit nodes: each atom carries an implicit hydrogen
count derived from its bonds. Edits produce new graph values; nothing here
mutates a graph in place.
"""

import math
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from ....exceptions import GraphStructureError, InvalidAtomReferenceError, SelfBondError
from .atom import AtomNode, Element, Hybridization, max_valence
from .bond import Bond, BondCategory, category_for_order
from .validation_summary import ValidationSummary

# Valence used when filling open sites with hydrogen. Nitrogen may carry up to
# five bonds but is saturated with hydrogen at three.
_HYDROGEN_VALENCE = {Element.NITROGEN: 3}

# (lower bound exclusive, upper bound inclusive, note) for expanded valence
_EXPANDED_VALENCE = {
    Element.NITROGEN: (3, 5, "expanded valence, likely N⁺"),
    Element.SULFUR: (2, 6, "expanded valence"),
    Element.PHOSPHORUS: (3, 5, "expanded valence"),
}


def new_atom_id() -> str:
    """Generate an opaque identifier for a new atom."""
    return f"atom-{uuid.uuid4().hex[:12]}"


def new_bond_id() -> str:
    """Generate an opaque identifier for a new bond."""
    return f"bond-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class MoleculeGraph:
    """Immutable graph of explicit atoms and the bonds between them.

    Construction checks structural well-formedness only: unique atom ids,
    bonds between distinct known atoms and at most one bond per atom pair.
    Chemical rules (valence, connectivity) are checked separately so that
    mutation code can build a candidate graph and report on it.

    Raises:
        GraphStructureError: If the atoms and bonds are not a well-formed graph
    """

    atoms: Tuple[AtomNode, ...] = ()
    bonds: Tuple[Bond, ...] = ()
    _atom_index: Dict[str, AtomNode] = field(
        init=False, repr=False, compare=False, default=None
    )
    _adjacency: Dict[str, List[Bond]] = field(
        init=False, repr=False, compare=False, default=None
    )

    def __post_init__(self):
        object.__setattr__(self, "atoms", tuple(self.atoms))
        object.__setattr__(self, "bonds", tuple(self.bonds))

        atom_index: Dict[str, AtomNode] = {}
        for atom in self.atoms:
            if atom.atom_id in atom_index:
                raise GraphStructureError(f"Duplicate atom id {atom.atom_id}")
            atom_index[atom.atom_id] = atom

        adjacency: Dict[str, List[Bond]] = {atom_id: [] for atom_id in atom_index}
        seen_pairs = set()
        for bond in self.bonds:
            for endpoint in bond.atom_ids:
                if endpoint not in atom_index:
                    raise InvalidAtomReferenceError(endpoint)
            if bond.atom1_id == bond.atom2_id:
                raise SelfBondError(bond.atom1_id)
            pair = frozenset(bond.atom_ids)
            if pair in seen_pairs:
                raise GraphStructureError(
                    f"Atoms {bond.atom1_id} and {bond.atom2_id} are already bonded"
                )
            seen_pairs.add(pair)
            adjacency[bond.atom1_id].append(bond)
            adjacency[bond.atom2_id].append(bond)

        object.__setattr__(self, "_atom_index", atom_index)
        object.__setattr__(self, "_adjacency", adjacency)

    @classmethod
    def empty(cls) -> "MoleculeGraph":
        return cls((), ())

    def __len__(self) -> int:
        return len(self.atoms)

    @property
    def atom_ids(self) -> List[str]:
        return [atom.atom_id for atom in self.atoms]

    def has_atom(self, atom_id: str) -> bool:
        return atom_id in self._atom_index

    def get_atom(self, atom_id: str) -> AtomNode:
        """Look up an atom by id.

        Raises:
            InvalidAtomReferenceError: If no atom has this id
        """
        try:
            return self._atom_index[atom_id]
        except KeyError:
            raise InvalidAtomReferenceError(atom_id) from None

    def incident_bonds(self, atom_id: str) -> List[Bond]:
        if atom_id not in self._adjacency:
            raise InvalidAtomReferenceError(atom_id)
        return list(self._adjacency[atom_id])

    def neighbors(self, atom_id: str) -> List[str]:
        """Ids of the atoms bonded to ``atom_id``, in bond order."""
        return [bond.other(atom_id) for bond in self.incident_bonds(atom_id)]

    def total_bond_order(self, atom_id: str) -> float:
        """Valence sum at an atom; aromatic bonds count 1.5."""
        return sum(bond.valence_contribution for bond in self.incident_bonds(atom_id))

    def is_terminal(self, atom_id: str) -> bool:
        return len(self.incident_bonds(atom_id)) <= 1

    def find_bond(self, atom_a: str, atom_b: str) -> Optional[Bond]:
        for bond in self._adjacency.get(atom_a, ()):
            if bond.connects(atom_a, atom_b):
                return bond
        return None

    def can_add_bond(self, atom_a: str, atom_b: str, bond_order: int = 1) -> bool:
        """Whether both atoms have room for ``bond_order`` more valence."""
        if not (self.has_atom(atom_a) and self.has_atom(atom_b)):
            return False
        return all(
            self.total_bond_order(atom_id) + bond_order
            <= max_valence(self.get_atom(atom_id).element)
            for atom_id in (atom_a, atom_b)
        )

    def has_room(self, atom_id: str, bond_order: int = 1) -> bool:
        """Whether a single atom can take ``bond_order`` more valence."""
        atom = self.get_atom(atom_id)
        return self.total_bond_order(atom_id) + bond_order <= max_valence(atom.element)

    def carbon_atoms(self) -> List[AtomNode]:
        return [atom for atom in self.atoms if atom.is_carbon]

    def terminal_carbons(self) -> List[AtomNode]:
        return [
            atom for atom in self.atoms if atom.is_carbon and self.is_terminal(atom.atom_id)
        ]

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph with element and bond attributes."""
        G = nx.Graph()
        for atom in self.atoms:
            G.add_node(atom.atom_id, element=atom.element.symbol)
        for bond in self.bonds:
            G.add_edge(
                bond.atom1_id,
                bond.atom2_id,
                bond_order=bond.bond_order,
                category=bond.category.value,
            )
        return G

    def is_connected(self) -> bool:
        """True for graphs with at most one atom or a single component."""
        if len(self.atoms) <= 1:
            return True
        return nx.is_connected(self.to_networkx())

    def has_path(self, atom_a: str, atom_b: str) -> bool:
        self.get_atom(atom_a)
        self.get_atom(atom_b)
        return nx.has_path(self.to_networkx(), atom_a, atom_b)

    # Structural edits. Each returns a new graph; derived fields are left as
    # they were and must be refreshed with recompute_derived().

    def with_atom(self, atom: AtomNode) -> "MoleculeGraph":
        return MoleculeGraph(self.atoms + (atom,), self.bonds)

    def with_bond(self, bond: Bond) -> "MoleculeGraph":
        return MoleculeGraph(self.atoms, self.bonds + (bond,))

    def with_replaced_bond(self, bond: Bond) -> "MoleculeGraph":
        bonds = tuple(bond if b.bond_id == bond.bond_id else b for b in self.bonds)
        return MoleculeGraph(self.atoms, bonds)

    def without_atoms(self, atom_ids: Iterable[str]) -> "MoleculeGraph":
        """Remove atoms together with every bond touching them."""
        doomed = set(atom_ids)
        for atom_id in doomed:
            self.get_atom(atom_id)
        atoms = tuple(a for a in self.atoms if a.atom_id not in doomed)
        bonds = tuple(
            b for b in self.bonds if b.atom1_id not in doomed and b.atom2_id not in doomed
        )
        return MoleculeGraph(atoms, bonds)


def make_bond(
    atom1_id: str,
    atom2_id: str,
    bond_order: int = 1,
    category: Optional[BondCategory] = None,
) -> Bond:
    """Create a bond with a fresh id and the category implied by its order."""
    return Bond(
        bond_id=new_bond_id(),
        atom1_id=atom1_id,
        atom2_id=atom2_id,
        bond_order=bond_order,
        category=category or category_for_order(bond_order),
    )


def implicit_hydrogen_count(graph: MoleculeGraph, atom_id: str) -> int:
    """Open valence of an atom, filled with hydrogen."""
    element = graph.get_atom(atom_id).element
    if element is Element.OXYGEN and _is_nitro_oxide(graph, atom_id):
        return 0
    valence = _HYDROGEN_VALENCE.get(element, max_valence(element))
    return max(0, math.floor(valence - graph.total_bond_order(atom_id)))


def _is_nitro_oxide(graph: MoleculeGraph, atom_id: str) -> bool:
    """Terminal O single-bonded to an N carrying more than three bonds.

    The oxygen balances the nitrogen's expanded valence (N⁺/O⁻ pair) and
    takes no hydrogen.
    """
    bonds = graph.incident_bonds(atom_id)
    if len(bonds) != 1 or bonds[0].bond_order != 1:
        return False
    partner = bonds[0].other(atom_id)
    return (
        graph.get_atom(partner).element is Element.NITROGEN
        and graph.total_bond_order(partner) > 3
    )


def hybridization_of(graph: MoleculeGraph, atom_id: str) -> Hybridization:
    bonds = graph.incident_bonds(atom_id)
    if any(bond.bond_order == 3 for bond in bonds):
        return Hybridization.SP
    if any(bond.bond_order == 2 or bond.is_aromatic for bond in bonds):
        return Hybridization.SP2
    return Hybridization.SP3


def recompute_implicit_hydrogens(graph: MoleculeGraph) -> MoleculeGraph:
    atoms = tuple(
        replace(atom, implicit_hydrogens=implicit_hydrogen_count(graph, atom.atom_id))
        for atom in graph.atoms
    )
    return MoleculeGraph(atoms, graph.bonds)


def recompute_hybridization(graph: MoleculeGraph) -> MoleculeGraph:
    atoms = tuple(
        replace(atom, hybridization=hybridization_of(graph, atom.atom_id))
        for atom in graph.atoms
    )
    return MoleculeGraph(atoms, graph.bonds)


def recompute_derived(graph: MoleculeGraph) -> MoleculeGraph:
    """Refresh implicit hydrogens and hybridization on every atom."""
    atoms = tuple(
        atom.with_derived(
            implicit_hydrogen_count(graph, atom.atom_id),
            hybridization_of(graph, atom.atom_id),
        )
        for atom in graph.atoms
    )
    return MoleculeGraph(atoms, graph.bonds)


def _format_order(total: float) -> str:
    return f"{total:g}"


def atom_labels(graph: MoleculeGraph) -> Dict[str, str]:
    """Human-readable label for each atom used in validation messages.

    An element that occurs once is labelled by name ("Carbon"); repeated
    elements are numbered in atom order ("C atom #2").
    """
    counts = Counter(atom.element for atom in graph.atoms)
    seen: Counter = Counter()
    labels = {}
    for atom in graph.atoms:
        if counts[atom.element] > 1:
            seen[atom.element] += 1
            labels[atom.atom_id] = f"{atom.element.symbol} atom #{seen[atom.element]}"
        else:
            labels[atom.atom_id] = atom.element.display_name
    return labels


def validate_valence(graph: MoleculeGraph) -> ValidationSummary:
    """Check every atom's valence sum against its element maximum.

    Exceeding the maximum is an error. Nitrogen, sulfur and phosphorus above
    their usual valence (but within the expanded range) produce warnings.
    """
    summary = ValidationSummary()
    labels = atom_labels(graph)

    for atom in graph.atoms:
        limit = max_valence(atom.element)
        total = graph.total_bond_order(atom.atom_id)
        label = labels[atom.atom_id]

        if total > limit:
            summary.errors.append(
                f"{label} has too many bonds "
                f"({_format_order(total)} bonds, maximum {limit})"
            )

        expanded = _EXPANDED_VALENCE.get(atom.element)
        if expanded is not None:
            lower, upper, note = expanded
            if lower < total <= upper:
                summary.warnings.append(
                    f"{label} has {_format_order(total)} bonds ({note})"
                )

    return summary
