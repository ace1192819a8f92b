#!/usr/bin/env python3
# src/carbonkit/infrastructure/templates.py

"""
Starting skeletons for new molecules.

Templates are seeds for editing, not finished molecules: each builder returns
a valid graph with derived fields computed that the mutation operations can
then grow.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..core.domain.models.atom import AtomNode, Element
from ..core.domain.models.bond import Bond, BondCategory
from ..core.domain.models.molecule_graph import (
    MoleculeGraph,
    make_bond,
    new_atom_id,
    recompute_derived,
)


class TemplateType(Enum):
    """Kinds of starting skeleton."""

    BLANK_CANVAS = "blank-canvas"
    ALKANE_CHAIN = "alkane-chain"
    ALKENE_CHAIN = "alkene-chain"
    ALKYNE_CHAIN = "alkyne-chain"
    FATTY_ACID = "fatty-acid"
    ALCOHOL = "alcohol"
    AROMATIC_RING = "aromatic-ring"
    CYCLOALKANE = "cycloalkane"
    CARBONYL = "carbonyl"


@dataclass(frozen=True)
class TemplateParams:
    """Size parameters for a template. Unset values take the template default.

    Bond positions are 0-based indices into the chain's bonds.
    """

    chain_length: Optional[int] = None
    ring_size: Optional[int] = None
    double_bond_position: int = 0
    triple_bond_position: int = 0


@dataclass(frozen=True)
class ParamRange:
    minimum: int
    maximum: int
    default: int


@dataclass(frozen=True)
class TemplateMetadata:
    """Catalog entry describing a template and its adjustable sizes."""

    template_type: TemplateType
    name: str
    description: str
    chain_length: Optional[ParamRange] = None
    ring_size: Optional[ParamRange] = None
    default_params: TemplateParams = field(default_factory=TemplateParams)


def _clamp(value: Optional[int], default: int, low: int, high: int) -> int:
    return max(low, min(high, default if value is None else value))


def linear_position(index: int, settings: EngineSettings = DEFAULT_SETTINGS):
    """Horizontal chain layout on the canvas midline."""
    return (index * settings.bond_length, settings.canvas_center[1])


def ring_positions(
    size: int, settings: EngineSettings = DEFAULT_SETTINGS
) -> List[Tuple[float, float]]:
    """Points on a circle around the canvas centre, starting at the top."""
    angles = np.arange(size) * 2 * np.pi / size - np.pi / 2
    cx, cy = settings.canvas_center
    xs = cx + settings.ring_radius * np.cos(angles)
    ys = cy + settings.ring_radius * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def _carbon(position) -> AtomNode:
    return AtomNode(atom_id=new_atom_id(), element=Element.CARBON, position=position)


def _chain(
    length: int,
    orders: Optional[Dict[int, int]] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[List[AtomNode], List[Bond]]:
    """Carbon chain with bond ``i`` (between atoms i and i+1) of order ``orders[i]``."""
    orders = orders or {}
    atoms = [_carbon(linear_position(i, settings)) for i in range(length)]
    bonds = [
        make_bond(atoms[i].atom_id, atoms[i + 1].atom_id, orders.get(i, 1))
        for i in range(length - 1)
    ]
    return atoms, bonds


def _ring(
    size: int, category: BondCategory, settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    atoms = [_carbon(p) for p in ring_positions(size, settings)]
    bonds = [
        make_bond(atoms[i].atom_id, atoms[(i + 1) % size].atom_id, 1, category)
        for i in range(size)
    ]
    return recompute_derived(MoleculeGraph(tuple(atoms), tuple(bonds)))


def create_blank_canvas(settings: EngineSettings = DEFAULT_SETTINGS) -> MoleculeGraph:
    """A single carbon (methane) in the middle of the canvas."""
    return recompute_derived(MoleculeGraph((_carbon(settings.canvas_center),)))


def create_alkane_chain(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    low, high = settings.chain_length_limits
    length = _clamp(params.chain_length, 3, low, high)
    atoms, bonds = _chain(length, settings=settings)
    return recompute_derived(MoleculeGraph(tuple(atoms), tuple(bonds)))


def _unsaturated_chain(
    params: TemplateParams, order: int, position: int, settings: EngineSettings
) -> MoleculeGraph:
    _, high = settings.chain_length_limits
    length = _clamp(params.chain_length, 4, 2, high)
    position = max(0, min(length - 2, position))
    atoms, bonds = _chain(length, {position: order}, settings)
    return recompute_derived(MoleculeGraph(tuple(atoms), tuple(bonds)))


def create_alkene_chain(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    """Chain of at least two carbons with one C=C."""
    return _unsaturated_chain(params, 2, params.double_bond_position, settings)


def create_alkyne_chain(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    """Chain of at least two carbons with one C#C."""
    return _unsaturated_chain(params, 3, params.triple_bond_position, settings)


def create_fatty_acid(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    """
    Carboxyl carbon followed by ``chain_length`` further carbons.

    Args:
        params: ``chain_length`` counts the carbons after the carboxyl carbon
            (default 16)
        settings: Layout and size limits

    Returns:
        HOOC-(CH2)n-CH3 skeleton graph
    """
    low, high = settings.chain_length_limits
    length = _clamp(params.chain_length, 16, low, high)
    atoms, bonds = _chain(length + 1, settings=settings)

    carboxyl = atoms[0]
    x, y = carboxyl.position
    carbonyl_o = AtomNode(new_atom_id(), Element.OXYGEN, (x, y - settings.bond_length))
    hydroxyl_o = AtomNode(new_atom_id(), Element.OXYGEN, (x, y + settings.bond_length))
    atoms += [carbonyl_o, hydroxyl_o]
    bonds += [
        make_bond(carboxyl.atom_id, carbonyl_o.atom_id, 2),
        make_bond(carboxyl.atom_id, hydroxyl_o.atom_id, 1),
    ]
    return recompute_derived(MoleculeGraph(tuple(atoms), tuple(bonds)))


def create_alcohol(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    """Saturated chain with a hydroxyl on the last carbon."""
    low, high = settings.chain_length_limits
    length = _clamp(params.chain_length, 3, low, high)
    atoms, bonds = _chain(length, settings=settings)

    last = atoms[-1]
    x, y = last.position
    oxygen = AtomNode(new_atom_id(), Element.OXYGEN, (x, y + settings.bond_length))
    atoms.append(oxygen)
    bonds.append(make_bond(last.atom_id, oxygen.atom_id, 1))
    return recompute_derived(MoleculeGraph(tuple(atoms), tuple(bonds)))


def create_aromatic_ring(settings: EngineSettings = DEFAULT_SETTINGS) -> MoleculeGraph:
    """Benzene: six carbons joined by aromatic bonds of nominal order 1."""
    return _ring(6, BondCategory.AROMATIC, settings)


def create_cycloalkane(
    params: TemplateParams = TemplateParams(), settings: EngineSettings = DEFAULT_SETTINGS
) -> MoleculeGraph:
    low, high = settings.ring_size_limits
    size = _clamp(params.ring_size, 6, low, high)
    return _ring(size, BondCategory.SIGMA, settings)


def create_carbonyl(settings: EngineSettings = DEFAULT_SETTINGS) -> MoleculeGraph:
    """Formaldehyde C=O, ready for substituents on the carbon."""
    cx, cy = settings.canvas_center
    carbon = _carbon((cx, cy))
    oxygen = AtomNode(new_atom_id(), Element.OXYGEN, (cx, cy - settings.bond_length))
    bond = make_bond(carbon.atom_id, oxygen.atom_id, 2)
    return recompute_derived(MoleculeGraph((carbon, oxygen), (bond,)))


def create_template(
    template_type: TemplateType,
    params: Optional[TemplateParams] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> MoleculeGraph:
    """
    Build the skeleton for a template type.

    Args:
        template_type: Which skeleton to build
        params: Optional size parameters, clamped to the allowed ranges
        settings: Layout and size limits

    Returns:
        New molecule graph with derived fields computed
    """
    params = params or TemplateParams()
    if template_type is TemplateType.ALKANE_CHAIN:
        return create_alkane_chain(params, settings)
    if template_type is TemplateType.ALKENE_CHAIN:
        return create_alkene_chain(params, settings)
    if template_type is TemplateType.ALKYNE_CHAIN:
        return create_alkyne_chain(params, settings)
    if template_type is TemplateType.FATTY_ACID:
        return create_fatty_acid(params, settings)
    if template_type is TemplateType.ALCOHOL:
        return create_alcohol(params, settings)
    if template_type is TemplateType.AROMATIC_RING:
        return create_aromatic_ring(settings)
    if template_type is TemplateType.CYCLOALKANE:
        return create_cycloalkane(params, settings)
    if template_type is TemplateType.CARBONYL:
        return create_carbonyl(settings)
    return create_blank_canvas(settings)


TEMPLATE_CATALOG: List[TemplateMetadata] = [
    TemplateMetadata(
        TemplateType.BLANK_CANVAS,
        "Blank Canvas",
        "Start with single carbon, build from scratch",
    ),
    TemplateMetadata(
        TemplateType.ALKANE_CHAIN,
        "Alkane Chain",
        "Linear carbon skeleton with all single bonds",
        chain_length=ParamRange(1, 20, 3),
        default_params=TemplateParams(chain_length=3),
    ),
    TemplateMetadata(
        TemplateType.ALKENE_CHAIN,
        "Alkene Chain",
        "Linear chain with one C=C double bond",
        chain_length=ParamRange(2, 20, 4),
        default_params=TemplateParams(chain_length=4),
    ),
    TemplateMetadata(
        TemplateType.ALKYNE_CHAIN,
        "Alkyne Chain",
        "Linear chain with one C≡C triple bond",
        chain_length=ParamRange(2, 20, 4),
        default_params=TemplateParams(chain_length=4),
    ),
    TemplateMetadata(
        TemplateType.FATTY_ACID,
        "Fatty Acid",
        "HOOC-(CH₂)ₙ-CH₃ backbone with carboxyl group",
        chain_length=ParamRange(1, 20, 16),
        default_params=TemplateParams(chain_length=16),
    ),
    TemplateMetadata(
        TemplateType.ALCOHOL,
        "Alcohol Skeleton",
        "(CH₂)ₙ-OH backbone with hydroxyl group",
        chain_length=ParamRange(1, 20, 3),
        default_params=TemplateParams(chain_length=3),
    ),
    TemplateMetadata(
        TemplateType.AROMATIC_RING,
        "Aromatic Ring",
        "Benzene ring (C₆) with aromatic bonds",
    ),
    TemplateMetadata(
        TemplateType.CYCLOALKANE,
        "Cycloalkane",
        "Saturated ring (C₃-C₈)",
        ring_size=ParamRange(3, 8, 6),
        default_params=TemplateParams(ring_size=6),
    ),
    TemplateMetadata(
        TemplateType.CARBONYL,
        "Carbonyl Backbone",
        "C=O with editable attachments",
    ),
]
