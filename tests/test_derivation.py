import pytest
from conftest import build_graph, chain

from carbonkit.core.domain.models.functional_group import FunctionalGroupType
from carbonkit.core.domain.models.molecule_graph import MoleculeGraph
from carbonkit.core.services.derivation import (
    DISCONNECTED_ERROR,
    compute_formula,
    compute_molecular_weight,
    compute_unsaturation_degree,
    count_total_atoms,
    detect_functional_groups,
    detect_rings,
    get_derived_properties,
    subscript_number,
    validate_molecule,
)


def group_names(graph):
    return [g.name for g in detect_functional_groups(graph)]


def test_subscript_number():
    assert subscript_number(12) == "₁₂"


def test_formula(methane, ethanol, benzene, acetic_acid):
    assert compute_formula(methane) == "CH₄"
    assert compute_formula(ethanol) == "C₂H₆O"
    assert compute_formula(benzene) == "C₆H₆"
    assert compute_formula(acetic_acid) == "C₂H₄O₂"
    assert compute_formula(MoleculeGraph.empty()) == ""


def test_formula_hill_order_for_heteroatoms():
    graph = build_graph(["C", "Cl", "N"], [(0, 1, 1), (0, 2, 1)])
    assert compute_formula(graph) == "CH₄ClN"


def test_molecular_weight(methane, ethanol):
    assert compute_molecular_weight(methane) == pytest.approx(16.043)
    assert compute_molecular_weight(ethanol) == pytest.approx(46.069)


def test_unsaturation_degree(ethanol, ethene, acetylene, benzene, cyclohexane):
    assert compute_unsaturation_degree(ethanol) == 0
    assert compute_unsaturation_degree(ethene) == 1
    assert compute_unsaturation_degree(acetylene) == 2
    assert compute_unsaturation_degree(benzene) == 4
    assert compute_unsaturation_degree(cyclohexane) == 1


def test_total_atoms_includes_hydrogens(ethanol):
    assert count_total_atoms(ethanol) == 9


def test_alcohol(ethanol):
    groups = detect_functional_groups(ethanol)
    assert [g.group_type for g in groups] == [FunctionalGroupType.ALCOHOL]
    assert groups[0].atom_ids == ("a1", "a2")
    assert groups[0].attachment_atom_id == "a1"


def test_carboxylic_acid_hides_its_hydroxyl(acetic_acid):
    assert group_names(acetic_acid) == ["carboxylic-acid"]


def test_aldehyde_and_ketone():
    acetaldehyde = build_graph(["C", "C", "O"], [(0, 1, 1), (1, 2, 2)])
    acetone = build_graph(["C", "C", "C", "O"], [(0, 1, 1), (1, 2, 1), (1, 3, 2)])
    assert group_names(acetaldehyde) == ["aldehyde"]
    assert group_names(acetone) == ["ketone"]


def test_ester_and_ether():
    # CH3-C(=O)-O-CH3
    ester = build_graph(
        ["C", "C", "O", "O", "C"], [(0, 1, 1), (1, 2, 2), (1, 3, 1), (3, 4, 1)]
    )
    ether = build_graph(["C", "O", "C"], [(0, 1, 1), (1, 2, 1)])
    assert group_names(ester) == ["ester"]
    assert group_names(ether) == ["ether"]


def test_amide_and_amine():
    amide = build_graph(["C", "C", "O", "N"], [(0, 1, 1), (1, 2, 2), (1, 3, 1)])
    amine = build_graph(["C", "N"], [(0, 1, 1)])
    assert group_names(amide) == ["amide"]
    assert group_names(amine) == ["amine"]


def test_nitrile_nitro_and_halide():
    nitrile = build_graph(["C", "C", "N"], [(0, 1, 1), (1, 2, 3)])
    nitro = build_graph(["C", "N", "O", "O"], [(0, 1, 1), (1, 2, 2), (1, 3, 1)])
    halide = build_graph(["C", "Br"], [(0, 1, 1)])
    assert group_names(nitrile) == ["nitrile"]
    assert group_names(nitro) == ["nitro"]
    assert group_names(halide) == ["alkyl-halide"]


def test_hydrocarbons_have_no_groups(isobutane, benzene):
    assert detect_functional_groups(isobutane) == []
    assert detect_functional_groups(benzene) == []


def test_detect_rings(benzene, cyclohexane, ethanol):
    assert len(detect_rings(benzene)) == 1
    assert sorted(detect_rings(cyclohexane)[0]) == [f"a{i}" for i in range(6)]
    assert detect_rings(ethanol) == []


def test_validate_molecule_ok(ethanol):
    summary = validate_molecule(ethanol)
    assert summary.is_valid
    assert summary.warnings == []


def test_disconnected_graph_is_invalid():
    summary = validate_molecule(build_graph(["C", "C", "C"], [(0, 1, 1)]))
    assert summary.errors == [DISCONNECTED_ERROR]


def test_ring_strain_warnings():
    cyclopropane = build_graph(["C"] * 3, [(0, 1, 1), (1, 2, 1), (2, 0, 1)])
    cyclobutane = build_graph(["C"] * 4, [(i, (i + 1) % 4, 1) for i in range(4)])
    cyclononane = build_graph(["C"] * 9, [(i, (i + 1) % 9, 1) for i in range(9)])

    assert validate_molecule(cyclopropane).warnings == [
        "Cyclopropane detected - high ring strain"
    ]
    assert validate_molecule(cyclobutane).warnings == [
        "Cyclobutane detected - significant ring strain"
    ]
    assert validate_molecule(cyclononane).warnings == [
        "Large ring detected (9 atoms) - may be strained"
    ]
    assert validate_molecule(cyclopropane).is_valid


def test_derived_properties_are_idempotent(ethanol):
    assert get_derived_properties(ethanol) == get_derived_properties(ethanol)


def test_derived_properties_bundle():
    props = get_derived_properties(chain(3))
    assert props.molecular_formula == "C₃H₈"
    assert props.carbon_count == 3
    assert props.total_atoms == 11
    assert props.unsaturation_degree == 0
    assert props.functional_groups == []
