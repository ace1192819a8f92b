"""Structural edit operations on molecule graphs.

Every operation follows the same contract: check preconditions on the input
graph, build a candidate graph, refresh implicit hydrogens and hybridization,
then validate valence and connectivity. The result is a ``MutationResult``;
failures are returned, never raised, and the input graph is never modified.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ...config import DEFAULT_SETTINGS, EngineSettings
from ...exceptions import GraphStructureError
from ..domain.models.atom import AtomNode, Element
from ..domain.models.molecule_graph import (
    MoleculeGraph,
    make_bond,
    new_atom_id,
    recompute_derived,
    validate_valence,
)
from ..domain.models.mutation_result import MutationResult
from ..domain.models.substituent import SubstituentKind
from .derivation import DISCONNECTED_ERROR

logger = logging.getLogger(__name__)

Position = Tuple[float, float]


def _fail(operation: str, reason: str) -> MutationResult:
    logger.debug(f"{operation} rejected: {reason}")
    return MutationResult.failure(reason)


def _finalize(operation: str, candidate: MoleculeGraph) -> MutationResult:
    """Recompute derived fields and run the post-edit checks."""
    graph = recompute_derived(candidate)
    valence = validate_valence(graph)
    if not valence.is_valid:
        return _fail(operation, ", ".join(valence.errors))
    if not graph.is_connected():
        return _fail(operation, DISCONNECTED_ERROR)
    return MutationResult.ok(graph)


def _element_label(atom: AtomNode) -> str:
    return "Carbon" if atom.is_carbon else atom.element.symbol


def _format_order(total: float) -> str:
    return f"{total:g}"


def _point(atom: AtomNode) -> np.ndarray:
    return np.asarray(atom.position, dtype=float)


def _as_position(vector: np.ndarray) -> Position:
    return (float(vector[0]), float(vector[1]))


def _unit(vector: np.ndarray) -> Optional[np.ndarray]:
    norm = np.linalg.norm(vector)
    if norm == 0:
        return None
    return vector / norm


def _mean_offset(parent: AtomNode, neighbors: Sequence[AtomNode]) -> np.ndarray:
    offsets = np.array([_point(n) - _point(parent) for n in neighbors])
    return offsets.mean(axis=0)


def _perpendicular(vector: np.ndarray) -> np.ndarray:
    """Rotate a 2D vector by 90 degrees."""
    return np.array([-vector[1], vector[0]])


def opposite_position(
    parent: AtomNode, neighbors: Sequence[AtomNode], length: float
) -> Position:
    """Place a new atom opposite the mean direction of existing bonds.

    With no neighbours, or neighbours that cancel out, the atom goes to the
    right of its parent.
    """
    origin = _point(parent)
    direction = None
    if neighbors:
        direction = _unit(-_mean_offset(parent, neighbors))
    if direction is None:
        direction = np.array([1.0, 0.0])
    return _as_position(origin + direction * length)


def _extension_position(
    parent: AtomNode, carbon_neighbors: Sequence[AtomNode], length: float
) -> Position:
    origin = _point(parent)
    direction = None
    if carbon_neighbors:
        direction = _unit(origin - _point(carbon_neighbors[0]))
    if direction is None:
        direction = np.array([1.0, 0.0])
    return _as_position(origin + direction * length)


def _branch_position(
    parent: AtomNode, neighbors: Sequence[AtomNode], length: float
) -> Position:
    origin = _point(parent)
    direction = None
    if len(neighbors) == 1:
        direction = _unit(_perpendicular(origin - _point(neighbors[0])))
    elif neighbors:
        direction = _unit(_perpendicular(_mean_offset(parent, neighbors)))
    if direction is None:
        # Straight up on the canvas
        direction = np.array([0.0, -1.0])
    return _as_position(origin + direction * length)


def _neighbor_atoms(graph: MoleculeGraph, atom_id: str) -> List[AtomNode]:
    return [graph.get_atom(n) for n in graph.neighbors(atom_id)]


def _carbon_with_room(
    graph: MoleculeGraph, operation: str, atom_id: str
) -> Union[AtomNode, MutationResult]:
    """Return the atom if it can take one more bond, else a failure."""
    if not graph.has_atom(atom_id):
        return _fail(operation, f"Atom {atom_id} not found")
    atom = graph.get_atom(atom_id)
    current = graph.total_bond_order(atom_id)
    limit = atom.element.max_valence
    if current >= limit:
        return _fail(
            operation,
            f"{_element_label(atom)} atom already has maximum bonds "
            f"({_format_order(current)}/{limit})",
        )
    return atom


def extend_chain(
    graph: MoleculeGraph,
    atom_id: str,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> MutationResult:
    """Add a carbon to a terminal atom, continuing the chain direction.

    Args:
        graph: Graph to extend
        atom_id: Atom with at most one carbon neighbour
        settings: Layout settings

    Returns:
        MutationResult carrying the extended graph
    """
    operation = "extend_chain"
    if not graph.has_atom(atom_id):
        return _fail(operation, f"Atom {atom_id} not found")

    carbon_neighbors = [n for n in _neighbor_atoms(graph, atom_id) if n.is_carbon]
    if len(carbon_neighbors) > 1:
        return _fail(
            operation,
            "Extend Chain only works on terminal or near-terminal carbons. "
            "Use Add Branch for internal carbons.",
        )

    parent = _carbon_with_room(graph, operation, atom_id)
    if isinstance(parent, MutationResult):
        return parent

    carbon = AtomNode(
        atom_id=new_atom_id(),
        element=Element.CARBON,
        position=_extension_position(parent, carbon_neighbors, settings.bond_length),
    )
    candidate = graph.with_atom(carbon).with_bond(make_bond(atom_id, carbon.atom_id))
    return _finalize(operation, candidate)


def shorten_chain(graph: MoleculeGraph, atom_id: str) -> MutationResult:
    """Remove a terminal atom (one with at most one bond)."""
    operation = "shorten_chain"
    if not graph.has_atom(atom_id):
        return _fail(operation, f"Atom {atom_id} not found")
    if not graph.is_terminal(atom_id):
        return _fail(operation, f"Atom {atom_id} is not terminal (has >1 bonds)")
    return _finalize(operation, graph.without_atoms([atom_id]))


def branch_carbon(
    graph: MoleculeGraph,
    atom_id: str,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> MutationResult:
    """Add a carbon side branch to any atom with valence to spare."""
    operation = "branch_carbon"
    parent = _carbon_with_room(graph, operation, atom_id)
    if isinstance(parent, MutationResult):
        return parent

    carbon = AtomNode(
        atom_id=new_atom_id(),
        element=Element.CARBON,
        position=_branch_position(
            parent, _neighbor_atoms(graph, atom_id), settings.bond_length
        ),
    )
    candidate = graph.with_atom(carbon).with_bond(make_bond(atom_id, carbon.atom_id))
    return _finalize(operation, candidate)


def cyclize(graph: MoleculeGraph, atom_a: str, atom_b: str) -> MutationResult:
    """Close a ring with a single bond between two connected atoms."""
    operation = "cyclize"
    if not (graph.has_atom(atom_a) and graph.has_atom(atom_b)):
        return _fail(operation, "One or both atoms not found")
    if atom_a == atom_b:
        return _fail(operation, f"Cannot bond atom {atom_a} to itself")
    if graph.find_bond(atom_a, atom_b) is not None:
        return _fail(operation, "Atoms are already bonded")
    if not graph.can_add_bond(atom_a, atom_b, 1):
        return _fail(operation, "One or both atoms would exceed valency")
    if not graph.has_path(atom_a, atom_b):
        return _fail(operation, "Nodes must be part of same chain to cyclize")

    try:
        candidate = graph.with_bond(make_bond(atom_a, atom_b))
    except GraphStructureError as e:
        return _fail(operation, str(e))
    return _finalize(operation, candidate)


def change_bond_order(
    graph: MoleculeGraph, atom_a: str, atom_b: str, bond_order: int
) -> MutationResult:
    """Set the order of an existing non-aromatic bond.

    Orders above one make the bond part of a pi system; order one makes it
    sigma again. Both endpoints must stay within their maximum valence.
    """
    operation = "change_bond_order"
    bond = graph.find_bond(atom_a, atom_b)
    if bond is None:
        return _fail(operation, "Bond not found between specified nodes")
    if bond.is_aromatic:
        return _fail(operation, "Cannot modify aromatic bonds")
    if bond_order not in (1, 2, 3):
        return _fail(operation, f"Bond order must be 1, 2 or 3, got {bond_order}")

    delta = bond_order - bond.bond_order
    for atom_id in bond.atom_ids:
        atom = graph.get_atom(atom_id)
        total = graph.total_bond_order(atom_id) + delta
        limit = atom.element.max_valence
        if total > limit:
            return _fail(
                operation,
                f"{_element_label(atom)} atom would exceed maximum bonds "
                f"({_format_order(total)} bonds, maximum {limit})",
            )

    return _finalize(operation, graph.with_replaced_bond(bond.with_order(bond_order)))


def unsaturate_bond(graph: MoleculeGraph, atom_a: str, atom_b: str) -> MutationResult:
    """Raise a bond's order by one (single to double, double to triple)."""
    bond = graph.find_bond(atom_a, atom_b)
    if bond is None:
        return _fail("unsaturate_bond", "Bond not found between specified nodes")
    if bond.is_aromatic:
        return _fail("unsaturate_bond", "Cannot unsaturate aromatic bonds")
    if bond.bond_order >= 3:
        return _fail(
            "unsaturate_bond", "Bond is already at maximum order (triple bond)"
        )
    return change_bond_order(graph, atom_a, atom_b, bond.bond_order + 1)


def saturate_bond(graph: MoleculeGraph, atom_a: str, atom_b: str) -> MutationResult:
    """Lower a bond's order by one (triple to double, double to single)."""
    bond = graph.find_bond(atom_a, atom_b)
    if bond is None:
        return _fail("saturate_bond", "Bond not found between specified nodes")
    if bond.is_aromatic:
        return _fail("saturate_bond", "Cannot saturate aromatic bonds")
    if bond.bond_order <= 1:
        return _fail("saturate_bond", "Bond is already at minimum order (single bond)")
    return change_bond_order(graph, atom_a, atom_b, bond.bond_order - 1)


def _resolve_halogen(halogen: Union[Element, str, None]) -> Optional[Element]:
    if halogen is None or isinstance(halogen, Element):
        return halogen
    return Element.from_symbol(halogen)


def attach_substituent(
    graph: MoleculeGraph,
    carbon_id: str,
    kind: SubstituentKind,
    halogen: Union[Element, str, None] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> MutationResult:
    """Attach a heteroatom substituent to a carbon as real atoms and bonds.

    Functional groups are not labelled here; they are detected afterwards
    from the resulting topology.

    Args:
        graph: Graph to edit
        carbon_id: Host carbon
        kind: Substituent to attach
        halogen: Halogen element (or symbol) for ``SubstituentKind.HALOGEN``
        settings: Layout settings

    Returns:
        MutationResult carrying the edited graph
    """
    operation = "attach_substituent"
    if not graph.has_atom(carbon_id):
        return _fail(operation, f"Atom {carbon_id} not found")
    host = graph.get_atom(carbon_id)
    if not host.is_carbon:
        return _fail(operation, "Substituents can only be attached to carbon atoms")

    label = kind.label
    if kind is SubstituentKind.HALOGEN:
        try:
            halogen_element = _resolve_halogen(halogen)
        except ValueError as e:
            return _fail(operation, str(e))
        if halogen_element is None:
            return _fail(operation, "Halogen type not specified")
        if not halogen_element.is_halogen:
            return _fail(operation, f"{halogen_element.symbol} is not a halogen")
        label = f"-{halogen_element.symbol}"

    host_order = 2 if kind is SubstituentKind.CARBONYL else 1
    if not graph.has_room(carbon_id, host_order):
        return _fail(
            operation,
            f"Carbon atom already has maximum bonds. Cannot attach {label} group",
        )

    position = opposite_position(
        host, _neighbor_atoms(graph, carbon_id), settings.substituent_bond_length
    )
    head_element = {
        SubstituentKind.HYDROXYL: Element.OXYGEN,
        SubstituentKind.CARBONYL: Element.OXYGEN,
        SubstituentKind.AMINO: Element.NITROGEN,
        SubstituentKind.NITRO: Element.NITROGEN,
    }.get(kind)
    if kind is SubstituentKind.HALOGEN:
        head_element = halogen_element

    head = AtomNode(atom_id=new_atom_id(), element=head_element, position=position)
    candidate = graph.with_atom(head).with_bond(
        make_bond(carbon_id, head.atom_id, host_order)
    )

    if kind is SubstituentKind.NITRO:
        offset = settings.nitro_oxygen_offset
        x, y = position
        double_oxygen = AtomNode(
            atom_id=new_atom_id(), element=Element.OXYGEN, position=(x - offset, y - offset)
        )
        single_oxygen = AtomNode(
            atom_id=new_atom_id(), element=Element.OXYGEN, position=(x + offset, y - offset)
        )
        candidate = (
            candidate.with_atom(double_oxygen)
            .with_atom(single_oxygen)
            .with_bond(make_bond(head.atom_id, double_oxygen.atom_id, 2))
            .with_bond(make_bond(head.atom_id, single_oxygen.atom_id, 1))
        )

    return _finalize(operation, candidate)


def _nitro_oxygens(graph: MoleculeGraph, nitrogen_id: str) -> List[str]:
    """Terminal oxygens of a nitrogen that carries exactly two of them."""
    oxygens = [
        n.atom_id
        for n in _neighbor_atoms(graph, nitrogen_id)
        if n.element is Element.OXYGEN and graph.is_terminal(n.atom_id)
    ]
    return oxygens if len(oxygens) == 2 else []


def remove_substituent(graph: MoleculeGraph, atom_id: str) -> MutationResult:
    """Remove a terminal heteroatom, taking nitro oxygens along with their N."""
    operation = "remove_substituent"
    if not graph.has_atom(atom_id):
        return _fail(operation, f"Atom {atom_id} not found")
    atom = graph.get_atom(atom_id)
    if atom.is_carbon:
        return _fail(
            operation,
            "Cannot remove carbon nodes using removeSubstituent "
            "(use shortenChain instead)",
        )

    doomed: List[str] = [atom_id]
    if atom.element is Element.NITROGEN:
        doomed.extend(_nitro_oxygens(graph, atom_id))

    remaining = [n for n in graph.neighbors(atom_id) if n not in doomed]
    if len(remaining) > 1:
        return _fail(
            operation, "Can only remove terminal heteroatoms (single bond to carbon)"
        )

    return _finalize(operation, graph.without_atoms(doomed))
