import pytest

from carbonkit.core.domain.models.atom import AtomNode, Element
from carbonkit.core.domain.models.bond import Bond, BondCategory
from carbonkit.core.domain.models.molecule_graph import MoleculeGraph, recompute_derived

AROMATIC = "ar"


def build_graph(symbols, bonds):
    """
    Build a graph from element symbols and ``(i, j, order)`` bond tuples.

    Atom ids are ``a0, a1, ...`` in symbol order and bond ids ``b0, b1, ...``
    in bond order. An order of ``"ar"`` makes an aromatic bond.
    """
    atoms = tuple(
        AtomNode(atom_id=f"a{i}", element=Element.from_symbol(s), position=(i * 50.0, 300.0))
        for i, s in enumerate(symbols)
    )
    built = []
    for index, (i, j, order) in enumerate(bonds):
        if order == AROMATIC:
            built.append(Bond(f"b{index}", f"a{i}", f"a{j}", 1, BondCategory.AROMATIC))
        else:
            category = BondCategory.SIGMA if order == 1 else BondCategory.PI_SYSTEM
            built.append(Bond(f"b{index}", f"a{i}", f"a{j}", order, category))
    return recompute_derived(MoleculeGraph(atoms, tuple(built)))


def chain(length, orders=None):
    """Linear carbon chain; ``orders`` maps bond index to order."""
    orders = orders or {}
    return build_graph(
        ["C"] * length, [(i, i + 1, orders.get(i, 1)) for i in range(length - 1)]
    )


@pytest.fixture
def methane():
    return build_graph(["C"], [])


@pytest.fixture
def ethanol():
    return build_graph(["C", "C", "O"], [(0, 1, 1), (1, 2, 1)])


@pytest.fixture
def ethene():
    return chain(2, {0: 2})


@pytest.fixture
def acetylene():
    return chain(2, {0: 3})


@pytest.fixture
def isobutane():
    return build_graph(["C", "C", "C", "C"], [(0, 1, 1), (1, 2, 1), (1, 3, 1)])


@pytest.fixture
def benzene():
    return build_graph(["C"] * 6, [(i, (i + 1) % 6, AROMATIC) for i in range(6)])


@pytest.fixture
def acetic_acid():
    return build_graph(["C", "C", "O", "O"], [(0, 1, 1), (1, 2, 2), (1, 3, 1)])


@pytest.fixture
def butanol():
    return build_graph(
        ["C", "C", "C", "C", "O"], [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 4, 1)]
    )


@pytest.fixture
def cyclohexane():
    return build_graph(["C"] * 6, [(i, (i + 1) % 6, 1) for i in range(6)])
