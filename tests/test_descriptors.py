import pytest
from conftest import build_graph, chain

from carbonkit.core.services.descriptors import (
    are_isomorphic,
    calculate_complexity_score,
    calculate_lipinski_parameters,
    calculate_polarity,
    classify_molecule,
    count_hydrogen_bond_acceptors,
    count_hydrogen_bond_donors,
    count_rotatable_bonds,
    estimate_tpsa,
    get_extended_derived_properties,
)


def test_hydrogen_bond_counts(ethanol, acetic_acid, isobutane):
    assert count_hydrogen_bond_donors(ethanol) == 1
    assert count_hydrogen_bond_acceptors(ethanol) == 1
    assert count_hydrogen_bond_donors(acetic_acid) == 1
    assert count_hydrogen_bond_acceptors(acetic_acid) == 2
    assert count_hydrogen_bond_donors(isobutane) == 0


def test_rotatable_bonds(butanol, benzene):
    # C2-C3 and C3-C4 sit between non-terminal atoms
    assert count_rotatable_bonds(butanol) == 2
    assert count_rotatable_bonds(benzene) == 0


def test_tpsa(ethanol, acetic_acid):
    assert estimate_tpsa(ethanol) == pytest.approx(20.23)
    assert estimate_tpsa(acetic_acid) == pytest.approx(37.3)


def test_amide_nitrogen_tpsa():
    amide = build_graph(["C", "C", "O", "N"], [(0, 1, 1), (1, 2, 2), (1, 3, 1)])
    assert estimate_tpsa(amide) == pytest.approx(17.07 + 29.1)


def test_lipinski(ethanol):
    params = calculate_lipinski_parameters(ethanol)
    assert params.log_p is None
    assert params.molecular_weight == pytest.approx(46.069)
    assert params.passes_rule_of_five


def test_polarity(ethanol, isobutane):
    assert calculate_polarity(ethanol) == "polar"
    assert calculate_polarity(isobutane) == "nonpolar"


def test_classification(isobutane, ethene, benzene, ethanol):
    assert classify_molecule(isobutane) == ["alkane", "small-molecule"]
    assert classify_molecule(ethene) == ["alkene", "small-molecule"]
    assert classify_molecule(benzene) == ["aromatic", "medium-molecule"]
    assert classify_molecule(ethanol) == ["alcohol", "small-molecule"]
    assert classify_molecule(chain(13))[-1] == "large-molecule"


def test_complexity_grows_with_structure(isobutane, benzene):
    assert calculate_complexity_score(chain(4)) == 4.0
    assert calculate_complexity_score(isobutane) > calculate_complexity_score(chain(4))
    assert calculate_complexity_score(benzene) == 6 + 3 * 4 + 4


def test_isomorphism_ignores_ids_and_positions(ethanol):
    reordered = build_graph(["O", "C", "C"], [(0, 1, 1), (1, 2, 1)])
    assert are_isomorphic(ethanol, reordered)


def test_isomers_are_not_isomorphic(isobutane, ethene):
    assert not are_isomorphic(chain(4), isobutane)
    assert not are_isomorphic(ethene, chain(2))


def test_extended_properties(acetic_acid):
    props = get_extended_derived_properties(acetic_acid)
    assert props.smiles == "CC(=O)O"
    assert props.base.molecular_formula == "C₂H₄O₂"
    assert props.polarity == "polar"
    assert "carboxylic-acid" in props.classifications
