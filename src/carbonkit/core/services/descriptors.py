"""Extended molecular descriptors computed from graph topology."""

from dataclasses import dataclass
from typing import List, Optional

import networkx as nx

from ..domain.models.atom import Element
from ..domain.models.functional_group import FunctionalGroupType
from ..domain.models.molecule_graph import MoleculeGraph
from .derivation import (
    DerivedProperties,
    compute_molecular_weight,
    compute_unsaturation_degree,
    count_carbon_atoms,
    detect_functional_groups,
    detect_rings,
    get_derived_properties,
)

# Approximate polar surface contributions in square angstroms
TPSA_CONTRIBUTIONS = {
    "O-single": 20.23,
    "O-double": 17.07,
    "N-amine": 26.02,
    "N-amide": 29.1,
}

POLAR_GROUPS = frozenset(
    {
        FunctionalGroupType.ALCOHOL,
        FunctionalGroupType.CARBOXYLIC_ACID,
        FunctionalGroupType.CARBONYL,
        FunctionalGroupType.AMINE,
        FunctionalGroupType.AMIDE,
        FunctionalGroupType.ESTER,
        FunctionalGroupType.ETHER,
        FunctionalGroupType.NITRO,
    }
)

_POLAR_ELEMENTS = frozenset(
    {Element.OXYGEN, Element.NITROGEN, Element.SULFUR, Element.PHOSPHORUS}
)

# Group types reported by classify_molecule, in output order
_CLASS_LABELS = [
    (FunctionalGroupType.ALCOHOL, "alcohol"),
    (FunctionalGroupType.CARBOXYLIC_ACID, "carboxylic-acid"),
    (FunctionalGroupType.ESTER, "ester"),
    (FunctionalGroupType.AMINE, "amine"),
    (FunctionalGroupType.ALDEHYDE, "aldehyde"),
    (FunctionalGroupType.KETONE, "ketone"),
    (FunctionalGroupType.ETHER, "ether"),
    (FunctionalGroupType.AMIDE, "amide"),
    (FunctionalGroupType.NITRO, "nitro-compound"),
    (FunctionalGroupType.ALKYL_HALIDE, "alkyl-halide"),
]


def count_hydrogen_bond_donors(graph: MoleculeGraph) -> int:
    """Count O and N atoms carrying at least one hydrogen."""
    return sum(
        1
        for atom in graph.atoms
        if atom.element in (Element.OXYGEN, Element.NITROGEN)
        and atom.implicit_hydrogens > 0
    )


def count_hydrogen_bond_acceptors(graph: MoleculeGraph) -> int:
    """Count every oxygen plus each nitrogen that keeps a lone pair."""
    count = 0
    for atom in graph.atoms:
        if atom.element is Element.OXYGEN:
            count += 1
        elif atom.element is Element.NITROGEN:
            if graph.total_bond_order(atom.atom_id) < 4:
                count += 1
    return count


def count_rotatable_bonds(graph: MoleculeGraph) -> int:
    """Count non-aromatic single bonds between two non-terminal atoms."""
    count = 0
    for bond in graph.bonds:
        if bond.bond_order != 1 or bond.is_aromatic:
            continue
        if graph.is_terminal(bond.atom1_id) or graph.is_terminal(bond.atom2_id):
            continue
        count += 1
    return count


def _is_amide_nitrogen(graph: MoleculeGraph, atom_id: str) -> bool:
    for neighbor_id in graph.neighbors(atom_id):
        if not graph.get_atom(neighbor_id).is_carbon:
            continue
        for bond in graph.incident_bonds(neighbor_id):
            partner = graph.get_atom(bond.other(neighbor_id))
            if partner.element is Element.OXYGEN and bond.bond_order == 2:
                return True
    return False


def estimate_tpsa(graph: MoleculeGraph) -> float:
    """Estimate the topological polar surface area from O and N atoms."""
    tpsa = 0.0
    for atom in graph.atoms:
        if atom.element is Element.OXYGEN:
            double = any(b.bond_order == 2 for b in graph.incident_bonds(atom.atom_id))
            tpsa += TPSA_CONTRIBUTIONS["O-double" if double else "O-single"]
        elif atom.element is Element.NITROGEN:
            amide = _is_amide_nitrogen(graph, atom.atom_id)
            tpsa += TPSA_CONTRIBUTIONS["N-amide" if amide else "N-amine"]
    return round(tpsa, 2)


@dataclass
class LipinskiParameters:
    """Rule-of-five inputs. ``log_p`` is not computed and is always None."""

    molecular_weight: float
    log_p: Optional[float]
    hydrogen_bond_donors: int
    hydrogen_bond_acceptors: int
    passes_rule_of_five: bool


def calculate_lipinski_parameters(graph: MoleculeGraph) -> LipinskiParameters:
    """Rule of five without the logP criterion."""
    weight = compute_molecular_weight(graph)
    donors = count_hydrogen_bond_donors(graph)
    acceptors = count_hydrogen_bond_acceptors(graph)
    return LipinskiParameters(
        molecular_weight=weight,
        log_p=None,
        hydrogen_bond_donors=donors,
        hydrogen_bond_acceptors=acceptors,
        passes_rule_of_five=weight <= 500 and donors <= 5 and acceptors <= 10,
    )


def calculate_polarity(graph: MoleculeGraph) -> str:
    """Return ``"polar"`` or ``"nonpolar"``."""
    groups = detect_functional_groups(graph)
    if any(group.group_type in POLAR_GROUPS for group in groups):
        return "polar"
    if any(atom.element in _POLAR_ELEMENTS for atom in graph.atoms):
        return "polar"
    return "nonpolar"


def classify_molecule(graph: MoleculeGraph) -> List[str]:
    """Coarse classification labels: hydrocarbon type, groups and size."""
    labels = []
    group_types = {group.group_type for group in detect_functional_groups(graph)}

    if all(atom.is_carbon for atom in graph.atoms):
        if compute_unsaturation_degree(graph) == 0:
            labels.append("alkane")
        elif any(b.bond_order == 2 for b in graph.bonds):
            labels.append("alkene")
        elif any(b.bond_order == 3 for b in graph.bonds):
            labels.append("alkyne")

    if any(b.is_aromatic for b in graph.bonds):
        labels.append("aromatic")

    labels.extend(label for group, label in _CLASS_LABELS if group in group_types)

    carbons = count_carbon_atoms(graph)
    if carbons <= 4:
        labels.append("small-molecule")
    elif carbons <= 12:
        labels.append("medium-molecule")
    else:
        labels.append("large-molecule")
    return labels


def calculate_complexity_score(graph: MoleculeGraph) -> float:
    """Heuristic structural complexity score; larger means more complex."""
    score = float(len(graph.atoms))
    score += 2 * sum(1 for atom in graph.atoms if not atom.is_carbon)
    score += 3 * compute_unsaturation_degree(graph)
    score += 5 * len(detect_functional_groups(graph))
    score += 3 * sum(
        1 for atom in graph.carbon_atoms() if len(graph.neighbors(atom.atom_id)) > 2
    )
    score += 4 * len(detect_rings(graph))
    return score


def are_isomorphic(graph_a: MoleculeGraph, graph_b: MoleculeGraph) -> bool:
    """Whether two graphs describe the same constitution.

    Atoms must match on element and bonds on order and category; ids and
    positions are ignored.
    """
    if len(graph_a.atoms) != len(graph_b.atoms):
        return False
    if len(graph_a.bonds) != len(graph_b.bonds):
        return False

    def node_match(n1, n2):
        return n1["element"] == n2["element"]

    def edge_match(e1, e2):
        return e1["bond_order"] == e2["bond_order"] and e1["category"] == e2["category"]

    matcher = nx.isomorphism.GraphMatcher(
        graph_a.to_networkx(),
        graph_b.to_networkx(),
        node_match=node_match,
        edge_match=edge_match,
    )
    return matcher.is_isomorphic()


@dataclass
class ExtendedDerivedProperties:
    """Basic derived properties plus the descriptors in this module."""

    base: DerivedProperties
    smiles: str
    polarity: str
    hydrogen_bond_donors: int
    hydrogen_bond_acceptors: int
    rotatable_bonds: int
    tpsa: float
    lipinski: LipinskiParameters
    classifications: List[str]
    complexity_score: float


def get_extended_derived_properties(graph: MoleculeGraph) -> ExtendedDerivedProperties:
    from .notation_service import generate_smiles

    return ExtendedDerivedProperties(
        base=get_derived_properties(graph),
        smiles=generate_smiles(graph),
        polarity=calculate_polarity(graph),
        hydrogen_bond_donors=count_hydrogen_bond_donors(graph),
        hydrogen_bond_acceptors=count_hydrogen_bond_acceptors(graph),
        rotatable_bonds=count_rotatable_bonds(graph),
        tpsa=estimate_tpsa(graph),
        lipinski=calculate_lipinski_parameters(graph),
        classifications=classify_molecule(graph),
        complexity_score=calculate_complexity_score(graph),
    )
