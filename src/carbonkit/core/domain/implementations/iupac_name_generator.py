#!/usr/bin/env python3
# src/carbonkit/core/domain/implementations/iupac_name_generator.py

"""
Systematic (IUPAC-style) names for simple organic molecules.

Covers single acyclic carbon chains, single carbocycles and benzene rings.
Only the highest-priority functional group becomes the name suffix; lower
groups are not turned into prefixes.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

import networkx as nx

from ..interfaces.notation_generator import NotationGenerator
from ..models.atom import Element
from ..models.molecule_graph import MoleculeGraph

logger = logging.getLogger(__name__)

INVALID_STRUCTURE = "Invalid structure"
UNSUPPORTED_STRUCTURE = "Unsupported structure for IUPAC naming"

STEMS = {
    1: "meth",
    2: "eth",
    3: "prop",
    4: "but",
    5: "pent",
    6: "hex",
    7: "hept",
    8: "oct",
    9: "non",
    10: "dec",
    11: "undec",
    12: "dodec",
    13: "tridec",
    14: "tetradec",
    15: "pentadec",
    16: "hexadec",
    17: "heptadec",
    18: "octadec",
    19: "nonadec",
    20: "icos",
}

MULTIPLIERS = {
    2: "di",
    3: "tri",
    4: "tetra",
    5: "penta",
    6: "hexa",
    7: "hepta",
    8: "octa",
    9: "nona",
    10: "deca",
}

HALO_PREFIXES = {
    Element.FLUORINE: "fluoro",
    Element.CHLORINE: "chloro",
    Element.BROMINE: "bromo",
    Element.IODINE: "iodo",
}

_ALKYL_NAMES = {1: "methyl", 2: "ethyl", 3: "propyl"}


class GroupPriority(IntEnum):
    """Suffix-forming groups, lower value wins."""

    CARBOXYLIC_ACID = 1
    ALDEHYDE = 2
    KETONE = 3
    ALCOHOL = 4


_EXOCYCLIC = (GroupPriority.CARBOXYLIC_ACID, GroupPriority.ALDEHYDE)


def chain_stem(length: int) -> str:
    return STEMS.get(length, f"C{length}")


def alkyl_name(size: int) -> str:
    return _ALKYL_NAMES.get(size, chain_stem(size) + "yl")


def multiplier(count: int) -> str:
    return MULTIPLIERS.get(count, "") if count > 1 else ""


def format_substituents(
    substituents: Sequence[Tuple[str, int]], cite_locants: bool = True
) -> str:
    """Group, alphabetise and multiply substituent prefixes.

    ``[("methyl", 3), ("bromo", 2), ("methyl", 2)]`` gives
    ``"2-bromo-2,3-dimethyl"``.
    """
    grouped: Dict[str, List[int]] = {}
    for name, locant in substituents:
        grouped.setdefault(name, []).append(locant)

    parts = []
    for name in sorted(grouped):
        locants = sorted(grouped[name])
        prefix = multiplier(len(locants)) + name
        if cite_locants:
            parts.append(f"{','.join(str(l) for l in locants)}-{prefix}")
        else:
            parts.append(prefix)
    return ("-" if cite_locants else "").join(parts)


def _bonded_ids(
    graph: MoleculeGraph, atom_id: str, element: Element, order: int
) -> List[str]:
    found = []
    for bond in graph.incident_bonds(atom_id):
        if bond.is_aromatic or bond.bond_order != order:
            continue
        other = bond.other(atom_id)
        if graph.get_atom(other).element is element:
            found.append(other)
    return found


def principal_group_at(
    graph: MoleculeGraph, carbon_id: str
) -> Optional[GroupPriority]:
    """Suffix-forming group centred on a carbon, if any."""
    carbonyl = _bonded_ids(graph, carbon_id, Element.OXYGEN, 2)
    hydroxyl = [
        o
        for o in _bonded_ids(graph, carbon_id, Element.OXYGEN, 1)
        if graph.get_atom(o).implicit_hydrogens > 0
    ]
    if carbonyl and hydroxyl:
        return GroupPriority.CARBOXYLIC_ACID
    if carbonyl:
        others = [n for n in graph.neighbors(carbon_id) if n != carbonyl[0]]
        if all(graph.get_atom(n).is_carbon for n in others):
            if len(others) <= 1:
                return GroupPriority.ALDEHYDE
            return GroupPriority.KETONE
        return None
    if hydroxyl:
        return GroupPriority.ALCOHOL
    return None


def _branch_size(graph: MoleculeGraph, start: str, skeleton: Set[str]) -> int:
    """Carbons reachable from ``start`` without entering the parent skeleton."""
    seen = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for neighbor in graph.neighbors(current):
            if neighbor in seen or neighbor in skeleton:
                continue
            if graph.get_atom(neighbor).is_carbon:
                seen.add(neighbor)
                stack.append(neighbor)
    return len(seen)


def _prefix_for(
    graph: MoleculeGraph, atom_id: str, skeleton: Set[str]
) -> Optional[str]:
    atom = graph.get_atom(atom_id)
    if atom.is_carbon:
        return alkyl_name(_branch_size(graph, atom_id, skeleton))
    if atom.element.is_halogen:
        return HALO_PREFIXES[atom.element]
    if atom.element is Element.NITROGEN:
        oxygens = [
            n
            for n in graph.neighbors(atom_id)
            if graph.get_atom(n).element is Element.OXYGEN
        ]
        if len(oxygens) == 2:
            return "nitro"
        if atom.implicit_hydrogens > 0:
            return "amino"
    return None


@dataclass
class _Numbering:
    """One candidate numbering of a parent chain or ring."""

    atom_ids: List[str]
    principal_locants: List[int]
    unsaturations: List[Tuple[int, int]]
    substituents: List[Tuple[str, int]]

    @property
    def principal_locant(self) -> int:
        return self.principal_locants[0] if self.principal_locants else 0

    @property
    def enes(self) -> List[int]:
        return sorted(loc for loc, order in self.unsaturations if order == 2)

    @property
    def ynes(self) -> List[int]:
        return sorted(loc for loc, order in self.unsaturations if order == 3)

    @property
    def is_saturated(self) -> bool:
        return not self.unsaturations

    def sort_key(self):
        return (
            self.principal_locants,
            -len(self.unsaturations),
            sum(loc for loc, _ in self.unsaturations),
            -len(self.substituents),
            sorted(loc for _, loc in self.substituents),
            [loc for _, loc in sorted(self.substituents)],
        )


def _number(
    graph: MoleculeGraph,
    ordered: Sequence[str],
    cyclic: bool,
    principal_ids: Set[str],
    skip_ids: Set[str],
) -> _Numbering:
    locants = {atom_id: i + 1 for i, atom_id in enumerate(ordered)}
    skeleton = set(ordered)
    size = len(ordered)

    pairs = list(zip(ordered, ordered[1:]))
    if cyclic and size > 2:
        pairs.append((ordered[-1], ordered[0]))

    unsaturations = []
    for a, b in pairs:
        bond = graph.find_bond(a, b)
        if bond is None or bond.is_aromatic or bond.bond_order == 1:
            continue
        la, lb = locants[a], locants[b]
        # The ring-closing bond between positions n and 1 is cited as n
        locant = size if cyclic and {la, lb} == {1, size} else min(la, lb)
        unsaturations.append((locant, bond.bond_order))

    substituents = []
    for atom_id in ordered:
        for neighbor in graph.neighbors(atom_id):
            if neighbor in skeleton or neighbor in skip_ids:
                continue
            name = _prefix_for(graph, neighbor, skeleton)
            if name is not None:
                substituents.append((name, locants[atom_id]))

    principal_locants = sorted(locants[a] for a in principal_ids if a in locants)
    return _Numbering(list(ordered), principal_locants, unsaturations, substituents)


def _unsaturated_stem(
    stem: str, enes: List[int], ynes: List[int], cite_locants: bool
) -> str:
    """Stem plus the ane/ene/yne infix, without the terminal "e"."""
    if not enes and not ynes:
        return stem + "an"
    body = stem
    if cite_locants and (len(enes) > 1 or len(ynes) > 1):
        body += "a"
    for locants, tag in ((enes, "en"), (ynes, "yn")):
        if not locants:
            continue
        if cite_locants:
            cited = ",".join(str(l) for l in locants)
            body += f"-{cited}-{multiplier(len(locants))}{tag}"
        else:
            body += multiplier(len(locants)) + tag
    return body


def _with_suffix(
    body: str, group: Optional[GroupPriority], locants: List[int], cite_locant: bool
) -> str:
    """Append the suffix for ``group``, multiplied when it occurs more than once.

    ``hexan`` with a ketone at ``[2, 4]`` gives ``hexane-2,4-dione``.
    """
    if group is None:
        return body + "e"
    count = len(locants)
    if count > 1:
        # Terminal "e" is kept before a consonant multiplier
        body += "e"
    if group is GroupPriority.CARBOXYLIC_ACID:
        return body + multiplier(count) + "oic acid"
    if group is GroupPriority.ALDEHYDE:
        return body + multiplier(count) + "al"
    ending = multiplier(count) + ("one" if group is GroupPriority.KETONE else "ol")
    if count > 1 or cite_locant:
        return body + f"-{','.join(str(l) for l in locants)}-{ending}"
    return body + ending


def _with_ring_suffix(
    body: str, group: GroupPriority, locants: List[int], cite_locant: bool
) -> str:
    word = (
        "carboxylic acid"
        if group is GroupPriority.CARBOXYLIC_ACID
        else "carbaldehyde"
    )
    word = multiplier(len(locants)) + word
    if len(locants) > 1 or cite_locant:
        return body + "e" + f"-{','.join(str(l) for l in locants)}-{word}"
    return body + "e" + word


def _ring_walk(graph: MoleculeGraph, members: Set[str]) -> List[str]:
    """Order ring members by walking bonds around the ring."""
    start = next(a.atom_id for a in graph.atoms if a.atom_id in members)
    order = [start]
    while len(order) < len(members):
        step = next(
            (
                n
                for n in graph.neighbors(order[-1])
                if n in members and n not in order
            ),
            None,
        )
        if step is None:
            break
        order.append(step)
    return order


def _ring_numberings(ring: Sequence[str]) -> Iterator[List[str]]:
    """Every start position in both directions."""
    for start in range(len(ring)):
        forward = list(ring[start:]) + list(ring[:start])
        yield forward
        yield [forward[0]] + forward[1:][::-1]


def _carbon_paths(graph: MoleculeGraph, carbons: Sequence[str]) -> Iterator[List[str]]:
    """All simple carbon-only paths, found by depth-first search from each carbon."""
    carbon_set = set(carbons)
    for start in carbons:
        stack = [[start]]
        while stack:
            path = stack.pop()
            yield path
            for neighbor in graph.neighbors(path[-1]):
                if neighbor in carbon_set and neighbor not in path:
                    stack.append(path + [neighbor])


class IUPACNameGenerator(NotationGenerator):
    """Builds a systematic name from graph topology."""

    def generate(self, graph: MoleculeGraph) -> str:
        if graph is None or not graph.atoms:
            return INVALID_STRUCTURE
        if not graph.carbon_atoms():
            return UNSUPPORTED_STRUCTURE

        benzene = self._find_benzene_ring(graph)
        if benzene is not None:
            return self._name_benzene(graph, benzene)

        ring = self._find_carbon_ring(graph)
        if ring is not None:
            return self._name_ring(graph, ring)

        return self._name_chain(graph)

    def _find_benzene_ring(self, graph: MoleculeGraph) -> Optional[List[str]]:
        aromatic = {
            atom.atom_id
            for atom in graph.carbon_atoms()
            if any(b.is_aromatic for b in graph.incident_bonds(atom.atom_id))
        }
        if len(aromatic) != 6:
            return None
        ring = _ring_walk(graph, aromatic)
        if len(ring) != 6:
            logger.debug("Aromatic carbons do not form a single six-membered ring")
            return None
        return ring

    def _find_carbon_ring(self, graph: MoleculeGraph) -> Optional[List[str]]:
        carbons = [atom.atom_id for atom in graph.carbon_atoms()]
        if len(carbons) < 3:
            return None
        cycles = nx.cycle_basis(graph.to_networkx().subgraph(carbons))
        if not cycles:
            return None
        if len(cycles) > 1:
            logger.debug("Polycyclic skeleton, naming the first ring only")
        return _ring_walk(graph, set(cycles[0]))

    def _ring_groups(self, graph: MoleculeGraph, ring: Sequence[str]):
        """Principal group, its ring carbons, and exocyclic carbons to skip."""
        members = set(ring)
        on_ring: Dict[str, GroupPriority] = {}
        exocyclic: Dict[str, Tuple[str, GroupPriority]] = {}

        for atom_id in ring:
            own = principal_group_at(graph, atom_id)
            if own in (GroupPriority.KETONE, GroupPriority.ALCOHOL):
                on_ring[atom_id] = own
            for neighbor in graph.neighbors(atom_id):
                if neighbor in members or not graph.get_atom(neighbor).is_carbon:
                    continue
                group = principal_group_at(graph, neighbor)
                carbon_neighbors = [
                    n for n in graph.neighbors(neighbor) if graph.get_atom(n).is_carbon
                ]
                if group in _EXOCYCLIC and len(carbon_neighbors) == 1:
                    exocyclic[neighbor] = (atom_id, group)

        found = list(on_ring.values()) + [g for _, g in exocyclic.values()]
        if not found:
            return None, set(), set()
        top = min(found)
        principal_ids = {a for a, g in on_ring.items() if g is top}
        principal_ids |= {host for host, g in exocyclic.values() if g is top}
        skip_ids = {n for n, (_, g) in exocyclic.items() if g is top}
        return top, principal_ids, skip_ids

    def _best_ring_numbering(self, graph, ring, principal_ids, skip_ids) -> _Numbering:
        return min(
            (
                _number(graph, order, True, principal_ids, skip_ids)
                for order in _ring_numberings(ring)
            ),
            key=_Numbering.sort_key,
        )

    def _name_benzene(self, graph: MoleculeGraph, ring: List[str]) -> str:
        top, principal_ids, skip_ids = self._ring_groups(graph, ring)
        best = self._best_ring_numbering(graph, ring, principal_ids, skip_ids)
        if len(best.principal_locants) > 1:
            if top in _EXOCYCLIC:
                parent = _with_ring_suffix("benzen", top, best.principal_locants, True)
            else:
                parent = _with_suffix("benzen", top, best.principal_locants, True)
        else:
            parent = {
                GroupPriority.CARBOXYLIC_ACID: "benzoic acid",
                GroupPriority.ALDEHYDE: "benzaldehyde",
                GroupPriority.ALCOHOL: "phenol",
            }.get(top, "benzene")
        cite = not (top is None and len(best.substituents) == 1)
        return format_substituents(best.substituents, cite) + parent

    def _name_ring(self, graph: MoleculeGraph, ring: List[str]) -> str:
        top, principal_ids, skip_ids = self._ring_groups(graph, ring)
        best = self._best_ring_numbering(graph, ring, principal_ids, skip_ids)

        # A lone multiple bond in an unfunctionalised ring is always at 1
        cite_unsaturation = not (top is None and len(best.unsaturations) == 1)
        body = _unsaturated_stem(
            "cyclo" + chain_stem(len(ring)), best.enes, best.ynes, cite_unsaturation
        )
        if top in _EXOCYCLIC:
            parent = _with_ring_suffix(
                body, top, best.principal_locants, not best.is_saturated
            )
        else:
            parent = _with_suffix(
                body, top, best.principal_locants, not best.is_saturated
            )

        cite = not (top is None and best.is_saturated and len(best.substituents) == 1)
        return format_substituents(best.substituents, cite) + parent

    def _name_chain(self, graph: MoleculeGraph) -> str:
        carbons = [atom.atom_id for atom in graph.carbon_atoms()]
        groups = {c: principal_group_at(graph, c) for c in carbons}
        found = [g for g in groups.values() if g is not None]
        top = min(found) if found else None
        principal_ids = {c for c, g in groups.items() if top is not None and g is top}

        paths = list(_carbon_paths(graph, carbons))
        if principal_ids:
            # Parent chain carries as many principal groups as possible
            most = max(len(principal_ids.intersection(p)) for p in paths)
            paths = [p for p in paths if len(principal_ids.intersection(p)) == most]
        longest = max(len(p) for p in paths)
        best = min(
            (
                _number(graph, p, False, principal_ids, set())
                for p in paths
                if len(p) == longest
            ),
            key=_Numbering.sort_key,
        )

        length = len(best.atom_ids)
        if top in _EXOCYCLIC:
            cite_principal = False
        elif top is GroupPriority.ALCOHOL:
            cite_principal = not (
                length <= 2 or (best.is_saturated and best.principal_locant == 1)
            )
        else:
            cite_principal = True

        body = _unsaturated_stem(chain_stem(length), best.enes, best.ynes, length > 2)
        parent = _with_suffix(body, top, best.principal_locants, cite_principal)

        # A lone substituent on a one- or two-carbon parent has only one place to go
        lone = top is None and len(best.substituents) == 1
        cite = length > 2 or (length == 2 and not lone)
        return format_substituents(best.substituents, cite) + parent
