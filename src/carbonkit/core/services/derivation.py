"""Properties derived purely from molecule graph topology.

Nothing computed here is stored on the graph. Every function reads the
atoms' implicit hydrogen counts, so graphs should have been through
``recompute_derived`` first.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Set

import networkx as nx

from ...config import DEFAULT_SETTINGS, EngineSettings
from ..domain.models.atom import ATOMIC_WEIGHTS, AtomNode, Element
from ..domain.models.functional_group import (
    DetectedFunctionalGroup,
    FunctionalGroupType,
)
from ..domain.models.molecule_graph import MoleculeGraph, validate_valence
from ..domain.models.validation_summary import ValidationSummary

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")

# Elements after C and H in Hill order
_HILL_REST = ["Br", "Cl", "F", "I", "N", "O", "P", "S"]

DISCONNECTED_ERROR = "Molecule has isolated fragments (disconnected components)"


def subscript_number(n: int) -> str:
    return str(n).translate(_SUBSCRIPTS)


def compute_formula(graph: MoleculeGraph) -> str:
    """Molecular formula in Hill order with Unicode subscript counts.

    Example: propanol gives ``C₃H₈O``. An empty graph gives ``""``.
    """
    counts = Counter(atom.element.symbol for atom in graph.atoms)
    hydrogens = sum(atom.implicit_hydrogens for atom in graph.atoms)
    if hydrogens:
        counts["H"] += hydrogens

    parts = []
    for symbol in ["C", "H"] + _HILL_REST:
        count = counts.get(symbol, 0)
        if count:
            parts.append(symbol)
            if count > 1:
                parts.append(subscript_number(count))
    return "".join(parts)


def compute_molecular_weight(graph: MoleculeGraph) -> float:
    """Sum of atomic weights of explicit atoms and implicit hydrogens (g/mol)."""
    weight = sum(atom.element.atomic_weight for atom in graph.atoms)
    weight += sum(atom.implicit_hydrogens for atom in graph.atoms) * ATOMIC_WEIGHTS["H"]
    return round(weight, 3)


def compute_unsaturation_degree(graph: MoleculeGraph) -> float:
    """Degree of unsaturation, ``(2C + 2 + N - H - X) / 2``, never negative.

    Counts rings plus double bonds plus twice the triple bonds.
    """
    carbons = nitrogens = halogens = hydrogens = 0
    for atom in graph.atoms:
        if atom.element is Element.CARBON:
            carbons += 1
        elif atom.element is Element.NITROGEN:
            nitrogens += 1
        elif atom.element.is_halogen:
            halogens += 1
        hydrogens += atom.implicit_hydrogens

    degree = (2 * carbons + 2 + nitrogens - hydrogens - halogens) / 2
    return max(0.0, degree)


def count_total_atoms(graph: MoleculeGraph) -> int:
    """Explicit atoms plus implicit hydrogens."""
    return len(graph.atoms) + sum(atom.implicit_hydrogens for atom in graph.atoms)


def count_carbon_atoms(graph: MoleculeGraph) -> int:
    return len(graph.carbon_atoms())


def _bonded(graph: MoleculeGraph, atom: AtomNode, element: Element, order: int):
    """Neighbours of ``atom`` with the given element, joined by a bond of ``order``."""
    found = []
    for bond in graph.incident_bonds(atom.atom_id):
        if bond.is_aromatic or bond.bond_order != order:
            continue
        neighbor = graph.get_atom(bond.other(atom.atom_id))
        if neighbor.element is element:
            found.append(neighbor)
    return found


def _classify_carbonyl(
    graph: MoleculeGraph, carbon: AtomNode
) -> Optional[DetectedFunctionalGroup]:
    """Classify the carbonyl family group centred on ``carbon``, if any.

    Priority is carboxylic acid, ester, amide, aldehyde/ketone. A C=O that
    fits none of these is reported as a generic carbonyl.
    """
    double_oxygens = _bonded(graph, carbon, Element.OXYGEN, 2)
    if not double_oxygens:
        return None
    carbonyl_oxygen = double_oxygens[0]
    single_oxygens = _bonded(graph, carbon, Element.OXYGEN, 1)

    hydroxyl = [o for o in single_oxygens if o.implicit_hydrogens > 0]
    if hydroxyl:
        return DetectedFunctionalGroup(
            FunctionalGroupType.CARBOXYLIC_ACID,
            (carbon.atom_id, carbonyl_oxygen.atom_id, hydroxyl[0].atom_id),
            carbon.atom_id,
        )

    bridging = [
        o
        for o in single_oxygens
        if o.implicit_hydrogens == 0 and len(graph.neighbors(o.atom_id)) == 2
    ]
    if bridging:
        return DetectedFunctionalGroup(
            FunctionalGroupType.ESTER,
            (carbon.atom_id, carbonyl_oxygen.atom_id, bridging[0].atom_id),
            carbon.atom_id,
        )

    nitrogens = _bonded(graph, carbon, Element.NITROGEN, 1)
    if nitrogens:
        return DetectedFunctionalGroup(
            FunctionalGroupType.AMIDE,
            (carbon.atom_id, carbonyl_oxygen.atom_id, nitrogens[0].atom_id),
            carbon.atom_id,
        )

    others = [
        graph.get_atom(n)
        for n in graph.neighbors(carbon.atom_id)
        if n != carbonyl_oxygen.atom_id
    ]
    atom_ids = (carbon.atom_id, carbonyl_oxygen.atom_id)
    if all(o.is_carbon for o in others):
        group_type = (
            FunctionalGroupType.ALDEHYDE
            if len(others) <= 1
            else FunctionalGroupType.KETONE
        )
        return DetectedFunctionalGroup(group_type, atom_ids, carbon.atom_id)
    return DetectedFunctionalGroup(
        FunctionalGroupType.CARBONYL, atom_ids, carbon.atom_id
    )


def detect_functional_groups(graph: MoleculeGraph) -> List[DetectedFunctionalGroup]:
    """Pattern-match functional groups on the graph.

    The carbonyl family is matched first. Oxygens and nitrogens already
    inside a carbonyl family group are then skipped by the alcohol, ether
    and amine patterns so that, for example, the OH of an acid is not also
    reported as an alcohol.

    Returns:
        Detected groups, carbonyl family first, each list in atom order
    """
    groups: List[DetectedFunctionalGroup] = []
    classified: Set[str] = set()

    for atom in graph.carbon_atoms():
        group = _classify_carbonyl(graph, atom)
        if group is not None:
            groups.append(group)
            classified.update(group.atom_ids)

    for atom in graph.atoms:
        if atom.is_carbon:
            for oxygen in _bonded(graph, atom, Element.OXYGEN, 1):
                if oxygen.implicit_hydrogens > 0 and oxygen.atom_id not in classified:
                    groups.append(
                        DetectedFunctionalGroup(
                            FunctionalGroupType.ALCOHOL,
                            (atom.atom_id, oxygen.atom_id),
                            atom.atom_id,
                        )
                    )
            for nitrogen in _bonded(graph, atom, Element.NITROGEN, 1):
                if (
                    nitrogen.implicit_hydrogens > 0
                    and nitrogen.atom_id not in classified
                ):
                    groups.append(
                        DetectedFunctionalGroup(
                            FunctionalGroupType.AMINE,
                            (atom.atom_id, nitrogen.atom_id),
                            atom.atom_id,
                        )
                    )
            for nitrogen in _bonded(graph, atom, Element.NITROGEN, 3):
                groups.append(
                    DetectedFunctionalGroup(
                        FunctionalGroupType.NITRILE,
                        (atom.atom_id, nitrogen.atom_id),
                        atom.atom_id,
                    )
                )
            for neighbor_id in graph.neighbors(atom.atom_id):
                neighbor = graph.get_atom(neighbor_id)
                if neighbor.element.is_halogen:
                    groups.append(
                        DetectedFunctionalGroup(
                            FunctionalGroupType.ALKYL_HALIDE,
                            (atom.atom_id, neighbor_id),
                            atom.atom_id,
                        )
                    )

        elif atom.element is Element.OXYGEN:
            if atom.implicit_hydrogens or atom.atom_id in classified:
                continue
            carbons = _bonded(graph, atom, Element.CARBON, 1)
            if len(carbons) == 2 and len(graph.neighbors(atom.atom_id)) == 2:
                groups.append(
                    DetectedFunctionalGroup(
                        FunctionalGroupType.ETHER,
                        (carbons[0].atom_id, atom.atom_id, carbons[1].atom_id),
                        carbons[0].atom_id,
                    )
                )

        elif atom.element is Element.NITROGEN:
            neighbors = [graph.get_atom(n) for n in graph.neighbors(atom.atom_id)]
            oxygens = [n for n in neighbors if n.element is Element.OXYGEN]
            carbons = [n for n in neighbors if n.is_carbon]
            if len(oxygens) == 2 and len(carbons) == 1:
                groups.append(
                    DetectedFunctionalGroup(
                        FunctionalGroupType.NITRO,
                        (carbons[0].atom_id, atom.atom_id)
                        + tuple(o.atom_id for o in oxygens),
                        carbons[0].atom_id,
                    )
                )

    return groups


def detect_rings(graph: MoleculeGraph) -> List[List[str]]:
    """Independent rings of the graph as lists of atom ids (cycle basis)."""
    if not graph.bonds:
        return []
    return [list(ring) for ring in nx.cycle_basis(graph.to_networkx())]


def validate_connectivity(graph: MoleculeGraph) -> ValidationSummary:
    summary = ValidationSummary()
    if not graph.is_connected():
        summary.errors.append(DISCONNECTED_ERROR)
    return summary


def validate_ring_strain(
    graph: MoleculeGraph, settings: EngineSettings = DEFAULT_SETTINGS
) -> ValidationSummary:
    """Advisory warnings for small and large rings."""
    summary = ValidationSummary()
    for ring in detect_rings(graph):
        size = len(ring)
        if size == 3:
            summary.warnings.append("Cyclopropane detected - high ring strain")
        elif size == 4:
            summary.warnings.append("Cyclobutane detected - significant ring strain")
        elif size > settings.large_ring_threshold:
            summary.warnings.append(
                f"Large ring detected ({size} atoms) - may be strained"
            )
    return summary


def validate_molecule(
    graph: MoleculeGraph, settings: EngineSettings = DEFAULT_SETTINGS
) -> ValidationSummary:
    """Full validation: valence, connectivity and ring strain.

    Valence and connectivity problems are errors; expanded valence and ring
    strain are warnings and never make the summary invalid.
    """
    return (
        validate_valence(graph)
        .merge(validate_connectivity(graph))
        .merge(validate_ring_strain(graph, settings))
    )


@dataclass
class DerivedProperties:
    """Bundle of the properties derived from a graph."""

    molecular_formula: str
    molecular_weight: float
    total_atoms: int
    carbon_count: int
    unsaturation_degree: float
    functional_groups: List[DetectedFunctionalGroup] = field(default_factory=list)


def get_derived_properties(graph: MoleculeGraph) -> DerivedProperties:
    return DerivedProperties(
        molecular_formula=compute_formula(graph),
        molecular_weight=compute_molecular_weight(graph),
        total_atoms=count_total_atoms(graph),
        carbon_count=count_carbon_atoms(graph),
        unsaturation_degree=compute_unsaturation_degree(graph),
        functional_groups=detect_functional_groups(graph),
    )
