#!/usr/bin/env python3
# src/carbonkit/core/domain/implementations/smiles_generator.py

"""
Non-canonical SMILES from a molecule graph by depth-first traversal.
"""

import itertools
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

import networkx as nx

from ..interfaces.notation_generator import NotationGenerator
from ..models.atom import AtomNode
from ..models.bond import Bond
from ..models.molecule_graph import MoleculeGraph

# Symbols that may be written without brackets
ORGANIC_SUBSET = frozenset({"B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I"})

_BOND_SYMBOLS = {1: "", 2: "=", 3: "#"}


def bond_symbol(bond: Bond) -> str:
    if bond.is_aromatic:
        return ""
    return _BOND_SYMBOLS[bond.bond_order]


def ring_label(number: int) -> str:
    return str(number) if number < 10 else f"%{number}"


class _Traversal:
    """DFS spanning tree of one connected component."""

    def __init__(self, graph: MoleculeGraph, start: str):
        self.graph = graph
        self.depth: Dict[str, int] = {}
        self.children: Dict[str, List[Tuple[Bond, str]]] = {}
        self.ring_bonds: Dict[str, List[Bond]] = {}
        self.subtree_size: Dict[str, int] = {}
        self._visit(start)

    def _visit(self, start: str):
        # Iterative DFS; neighbours are explored in bond order
        self.depth[start] = 0
        self.children[start] = []
        self.ring_bonds[start] = []
        seen_ring_bonds: Set[str] = set()
        stack: List[Tuple[str, Optional[Bond], List[Bond]]] = [
            (start, None, self.graph.incident_bonds(start))
        ]
        order = [start]

        while stack:
            atom_id, parent_bond, pending = stack[-1]
            if not pending:
                stack.pop()
                continue
            bond = pending.pop(0)
            if parent_bond is not None and bond.bond_id == parent_bond.bond_id:
                continue
            neighbor = bond.other(atom_id)
            if neighbor in self.depth:
                if bond.bond_id not in seen_ring_bonds:
                    seen_ring_bonds.add(bond.bond_id)
                    self.ring_bonds[atom_id].append(bond)
                    self.ring_bonds[neighbor].append(bond)
                continue
            self.depth[neighbor] = self.depth[atom_id] + 1
            self.children[atom_id].append((bond, neighbor))
            self.children[neighbor] = []
            self.ring_bonds[neighbor] = []
            order.append(neighbor)
            stack.append((neighbor, bond, self.graph.incident_bonds(neighbor)))

        for atom_id in reversed(order):
            self.subtree_size[atom_id] = 1 + sum(
                self.subtree_size[child] for _, child in self.children[atom_id]
            )


class SMILESGenerator(NotationGenerator):
    """Writes SMILES by depth-first traversal of each connected component.

    Within a component the walk starts at a terminal carbon, else any
    terminal atom, else the first carbon, else the first atom. At each atom
    all children but the last are written as parenthesised branches; the
    smallest subtrees become branches so that the longest path stays on the
    main line. Ring-closure digits are assigned in the order rings are
    opened, written on both ring atoms and never reused.

    Ring numbering state lives in the call, so one instance can be shared.
    """

    def generate(self, graph: MoleculeGraph) -> str:
        if graph is None or not graph.atoms:
            return ""

        ring_numbers = itertools.count(1)
        open_rings: Dict[str, int] = {}
        fragments = []
        for component in self._components(graph):
            start = self._choose_start(graph, component)
            traversal = _Traversal(graph, start)
            fragments.append(
                self._write(graph, traversal, start, ring_numbers, open_rings)
            )
        return ".".join(fragments)

    def _components(self, graph: MoleculeGraph) -> List[List[AtomNode]]:
        """Connected components, each in atom order, ordered by first atom."""
        index = {atom.atom_id: i for i, atom in enumerate(graph.atoms)}
        components = [
            sorted((graph.get_atom(a) for a in members), key=lambda a: index[a.atom_id])
            for members in nx.connected_components(graph.to_networkx())
        ]
        return sorted(components, key=lambda atoms: index[atoms[0].atom_id])

    def _choose_start(self, graph: MoleculeGraph, atoms: List[AtomNode]) -> str:
        preferences = (
            lambda a: a.is_carbon and graph.is_terminal(a.atom_id),
            lambda a: graph.is_terminal(a.atom_id),
            lambda a: a.is_carbon,
        )
        for prefer in preferences:
            for atom in atoms:
                if prefer(atom):
                    return atom.atom_id
        return atoms[0].atom_id

    def _atom_symbol(self, graph: MoleculeGraph, atom: AtomNode) -> str:
        symbol = atom.element.symbol
        if any(b.is_aromatic for b in graph.incident_bonds(atom.atom_id)):
            symbol = symbol.lower()
        if atom.element.symbol not in ORGANIC_SUBSET:
            symbol = f"[{symbol}]"
        return symbol

    def _write(
        self,
        graph: MoleculeGraph,
        traversal: _Traversal,
        start: str,
        ring_numbers: Iterator[int],
        open_rings: Dict[str, int],
    ) -> str:
        """Emit one component from its spanning tree.

        The stack holds either literal text or ``(prefix, atom_id)`` pairs;
        an atom's branches are pushed after its main-line child so they are
        written first.
        """
        parts: List[str] = []
        stack: List[Union[str, Tuple[str, str]]] = [("", start)]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            prefix, atom_id = item
            parts.append(prefix + self._atom_symbol(graph, graph.get_atom(atom_id)))

            for bond in traversal.ring_bonds[atom_id]:
                partner = bond.other(atom_id)
                if traversal.depth[partner] > traversal.depth[atom_id]:
                    number = next(ring_numbers)
                    open_rings[bond.bond_id] = number
                    parts.append(ring_label(number))
                else:
                    number = open_rings[bond.bond_id]
                    parts.append(bond_symbol(bond) + ring_label(number))

            children = sorted(
                traversal.children[atom_id],
                key=lambda entry: traversal.subtree_size[entry[1]],
            )
            if not children:
                continue
            bond, child = children[-1]
            stack.append((bond_symbol(bond), child))
            for bond, child in reversed(children[:-1]):
                stack.append(")")
                stack.append(("(" + bond_symbol(bond), child))
        return "".join(parts)
