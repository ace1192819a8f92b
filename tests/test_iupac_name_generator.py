import pytest
from conftest import AROMATIC, build_graph, chain

from carbonkit.core.domain.implementations.iupac_name_generator import (
    INVALID_STRUCTURE,
    UNSUPPORTED_STRUCTURE,
    IUPACNameGenerator,
    alkyl_name,
    chain_stem,
    format_substituents,
    multiplier,
)
from carbonkit.core.domain.models.molecule_graph import MoleculeGraph


@pytest.fixture
def namer():
    return IUPACNameGenerator()


def ring(size, orders=None):
    orders = orders or {}
    return [(i, (i + 1) % size, orders.get(i, 1)) for i in range(size)]


def test_helpers():
    assert chain_stem(4) == "but"
    assert chain_stem(20) == "icos"
    assert alkyl_name(2) == "ethyl"
    assert alkyl_name(5) == "pentyl"
    assert multiplier(1) == ""
    assert multiplier(3) == "tri"
    assert format_substituents([("methyl", 3), ("bromo", 2), ("methyl", 2)]) == (
        "2-bromo-2,3-dimethyl"
    )
    assert format_substituents([("methyl", 1)], cite_locants=False) == "methyl"


def test_invalid_and_unsupported(namer):
    assert namer.generate(MoleculeGraph.empty()) == INVALID_STRUCTURE
    assert namer.generate(build_graph(["O"], [])) == UNSUPPORTED_STRUCTURE


@pytest.mark.parametrize(
    "length,expected",
    [(1, "methane"), (2, "ethane"), (3, "propane"), (6, "hexane"), (10, "decane")],
)
def test_alkanes(namer, length, expected):
    assert namer.generate(chain(length)) == expected


def test_butanol_from_either_end(namer, butanol):
    reversed_butanol = build_graph(
        ["O", "C", "C", "C", "C"], [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 4, 1)]
    )
    assert namer.generate(butanol) == "butanol"
    assert namer.generate(reversed_butanol) == "butanol"


def test_alcohols(namer, ethanol):
    propan_2_ol = build_graph(["C", "C", "C", "O"], [(0, 1, 1), (1, 2, 1), (1, 3, 1)])
    assert namer.generate(build_graph(["C", "O"], [(0, 1, 1)])) == "methanol"
    assert namer.generate(ethanol) == "ethanol"
    assert namer.generate(propan_2_ol) == "propan-2-ol"


def test_branched_alkanes(namer, isobutane):
    methylbutane = build_graph(["C"] * 5, [(0, 1, 1), (1, 2, 1), (2, 3, 1), (1, 4, 1)])
    dimethyl = build_graph(
        ["C"] * 6, [(0, 1, 1), (1, 2, 1), (2, 3, 1), (1, 4, 1), (2, 5, 1)]
    )
    assert namer.generate(isobutane) == "2-methylpropane"
    assert namer.generate(methylbutane) == "2-methylbutane"
    assert namer.generate(dimethyl) == "2,3-dimethylbutane"


def test_halo_and_alkyl_prefixes(namer):
    # CH3-CH(Br)-CH(CH3)-CH3
    graph = build_graph(
        ["C", "C", "C", "C", "Br", "C"],
        [(0, 1, 1), (1, 2, 1), (2, 3, 1), (1, 4, 1), (2, 5, 1)],
    )
    assert namer.generate(graph) == "2-bromo-3-methylbutane"


def test_single_carbon_prefix_has_no_locant(namer):
    assert namer.generate(build_graph(["C", "Cl"], [(0, 1, 1)])) == "chloromethane"


def test_alkenes_and_alkynes(namer, ethene, acetylene):
    assert namer.generate(ethene) == "ethene"
    assert namer.generate(acetylene) == "ethyne"
    assert namer.generate(chain(4, {0: 2})) == "but-1-ene"
    assert namer.generate(chain(4, {2: 2})) == "but-1-ene"
    assert namer.generate(chain(4, {1: 2})) == "but-2-ene"
    assert namer.generate(chain(4, {0: 2, 2: 2})) == "buta-1,3-diene"
    assert namer.generate(chain(5, {1: 3})) == "pent-2-yne"


def test_carbonyl_compounds(namer, acetic_acid):
    acetaldehyde = build_graph(["C", "C", "O"], [(0, 1, 1), (1, 2, 2)])
    acetone = build_graph(["C", "C", "C", "O"], [(0, 1, 1), (1, 2, 1), (1, 3, 2)])
    assert namer.generate(acetic_acid) == "ethanoic acid"
    assert namer.generate(acetaldehyde) == "ethanal"
    assert namer.generate(acetone) == "propan-2-one"


def test_acid_outranks_alcohol(namer):
    # HO-CH2-CH2-COOH is numbered from the acid carbon
    graph = build_graph(
        ["O", "C", "C", "C", "O", "O"],
        [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 4, 2), (3, 5, 1)],
    )
    assert namer.generate(graph) == "propanoic acid"


def test_cycloalkanes(namer, cyclohexane):
    assert namer.generate(cyclohexane) == "cyclohexane"
    assert namer.generate(build_graph(["C"] * 3, ring(3))) == "cyclopropane"


def test_substituted_ring(namer):
    methylcyclohexane = build_graph(["C"] * 7, ring(6) + [(0, 6, 1)])
    dimethyl = build_graph(["C"] * 8, ring(6) + [(0, 6, 1), (2, 7, 1)])
    assert namer.generate(methylcyclohexane) == "methylcyclohexane"
    assert namer.generate(dimethyl) == "1,3-dimethylcyclohexane"


def test_unsaturated_rings(namer):
    assert namer.generate(build_graph(["C"] * 6, ring(6, {3: 2}))) == "cyclohexene"


def test_ring_functional_groups(namer):
    cyclohexanol = build_graph(["C"] * 6 + ["O"], ring(6) + [(0, 6, 1)])
    cyclohexanone = build_graph(["C"] * 6 + ["O"], ring(6) + [(2, 6, 2)])
    acid = build_graph(
        ["C"] * 7 + ["O", "O"], ring(6) + [(0, 6, 1), (6, 7, 2), (6, 8, 1)]
    )
    assert namer.generate(cyclohexanol) == "cyclohexanol"
    assert namer.generate(cyclohexanone) == "cyclohexanone"
    assert namer.generate(acid) == "cyclohexanecarboxylic acid"


def test_benzene_derivatives(namer, benzene):
    aromatic = [(i, (i + 1) % 6, AROMATIC) for i in range(6)]
    toluene = build_graph(["C"] * 7, aromatic + [(0, 6, 1)])
    phenol = build_graph(["C"] * 6 + ["O"], aromatic + [(3, 6, 1)])
    benzoic = build_graph(
        ["C"] * 7 + ["O", "O"], aromatic + [(0, 6, 1), (6, 7, 2), (6, 8, 1)]
    )
    xylene = build_graph(["C"] * 8, aromatic + [(0, 6, 1), (1, 7, 1)])
    assert namer.generate(benzene) == "benzene"
    assert namer.generate(toluene) == "methylbenzene"
    assert namer.generate(phenol) == "phenol"
    assert namer.generate(benzoic) == "benzoic acid"
    assert namer.generate(xylene) == "1,2-dimethylbenzene"


def test_name_is_independent_of_atom_order(namer):
    forward = build_graph(
        ["C", "C", "C", "C", "Br", "C"],
        [(0, 1, 1), (1, 2, 1), (2, 3, 1), (1, 4, 1), (2, 5, 1)],
    )
    shuffled = build_graph(
        ["C", "Br", "C", "C", "C", "C"],
        [(5, 4, 1), (4, 3, 1), (3, 2, 1), (4, 1, 1), (3, 0, 1)],
    )
    assert namer.generate(forward) == namer.generate(shuffled)


def test_repeated_principal_group_is_multiplied(namer):
    # CH3-CO-CH2-CO-CH2-CH3
    dione = build_graph(
        ["C"] * 6 + ["O", "O"],
        [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 4, 1), (4, 5, 1), (1, 6, 2), (3, 7, 2)],
    )
    diol = build_graph(["O", "C", "C", "O"], [(0, 1, 1), (1, 2, 1), (2, 3, 1)])
    diacid = build_graph(
        ["C"] * 4 + ["O"] * 4,
        [(0, 1, 1), (1, 2, 1), (2, 3, 1), (0, 4, 2), (0, 5, 1), (3, 6, 2), (3, 7, 1)],
    )
    assert namer.generate(dione) == "hexane-2,4-dione"
    assert namer.generate(diol) == "ethane-1,2-diol"
    assert namer.generate(diacid) == "butanedioic acid"


def test_repeated_principal_group_on_rings(namer):
    aromatic = [(i, (i + 1) % 6, AROMATIC) for i in range(6)]
    hydroquinone = build_graph(["C"] * 6 + ["O", "O"], aromatic + [(0, 6, 1), (3, 7, 1)])
    dione = build_graph(["C"] * 6 + ["O", "O"], ring(6) + [(0, 6, 2), (2, 7, 2)])
    assert namer.generate(hydroquinone) == "benzene-1,4-diol"
    assert namer.generate(dione) == "cyclohexane-1,3-dione"


def test_lone_substituent_on_two_carbon_parent(namer):
    chloroethane = build_graph(["C", "C", "Cl"], [(0, 1, 1), (1, 2, 1)])
    dichloro = build_graph(["C", "C", "Cl", "Cl"], [(0, 1, 1), (0, 2, 1), (1, 3, 1)])
    chloroethanol = build_graph(["C", "C", "O", "Cl"], [(0, 1, 1), (1, 2, 1), (0, 3, 1)])
    assert namer.generate(chloroethane) == "chloroethane"
    assert namer.generate(build_graph(["C", "C", "Br"], [(0, 1, 2), (1, 2, 1)])) == (
        "bromoethene"
    )
    assert namer.generate(dichloro) == "1,2-dichloroethane"
    assert namer.generate(chloroethanol) == "2-chloroethanol"
