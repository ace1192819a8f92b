"""Command-line interface for describing a template molecule."""

import argparse
import json
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from ...config import configure_logging
from ...core.domain.models.molecule_graph import MoleculeGraph
from ...core.services.derivation import validate_molecule
from ...core.services.descriptors import get_extended_derived_properties
from ...core.services.notation_service import NotationService, is_valid_smiles
from ...infrastructure.templates import TemplateParams, TemplateType, create_template


def describe(
    graph: MoleculeGraph, notation: Optional[NotationService] = None
) -> Dict[str, Any]:
    """
    Collect the queryable properties of a molecule into a JSON-ready dict.

    Args:
        graph: Molecule graph with derived fields computed
        notation: Service used for the name and SMILES

    Returns:
        Dictionary of formula, weight, descriptors, name, SMILES and validation
    """
    notation = notation or NotationService()
    props = get_extended_derived_properties(graph)
    validation = validate_molecule(graph)
    smiles = notation.smiles_for(graph)

    return {
        "iupac_name": notation.iupac_name(graph),
        "smiles": smiles,
        "smiles_parses": is_valid_smiles(smiles),
        "formula": props.base.molecular_formula,
        "molecular_weight": props.base.molecular_weight,
        "total_atoms": props.base.total_atoms,
        "carbon_count": props.base.carbon_count,
        "unsaturation_degree": props.base.unsaturation_degree,
        "functional_groups": [g.name for g in props.base.functional_groups],
        "polarity": props.polarity,
        "hydrogen_bond_donors": props.hydrogen_bond_donors,
        "hydrogen_bond_acceptors": props.hydrogen_bond_acceptors,
        "rotatable_bonds": props.rotatable_bonds,
        "tpsa": props.tpsa,
        "lipinski": asdict(props.lipinski),
        "classifications": props.classifications,
        "complexity_score": props.complexity_score,
        "valid": validation.is_valid,
        "errors": validation.errors,
        "warnings": validation.warnings,
    }


def params_from_args(args: argparse.Namespace) -> TemplateParams:
    return TemplateParams(
        chain_length=args.chain_length,
        ring_size=args.ring_size,
        double_bond_position=args.double_bond_position,
        triple_bond_position=args.triple_bond_position,
    )


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Build a template molecule and print its properties"
    )
    parser.add_argument(
        "template",
        choices=[t.value for t in TemplateType],
        help="Template to build",
    )
    parser.add_argument("--chain-length", type=int, help="Carbons in the chain")
    parser.add_argument("--ring-size", type=int, help="Ring size for cycloalkanes")
    parser.add_argument(
        "--double-bond-position",
        type=int,
        default=0,
        help="0-based bond index of the C=C in alkene chains",
    )
    parser.add_argument(
        "--triple-bond-position",
        type=int,
        default=0,
        help="0-based bond index of the C#C in alkyne chains",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("--log-file", help="Optional log file path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_report(report: Dict[str, Any]) -> None:
    print(f"Name:     {report['iupac_name']}")
    print(f"SMILES:   {report['smiles']}")
    print(f"Formula:  {report['formula']}")
    print(f"Weight:   {report['molecular_weight']} g/mol")
    print(f"Degree of unsaturation: {report['unsaturation_degree']:g}")
    groups: List[str] = report["functional_groups"]
    print(f"Functional groups: {', '.join(groups) if groups else 'none'}")
    print(f"Polarity: {report['polarity']}, TPSA {report['tpsa']}")
    passes = report["lipinski"]["passes_rule_of_five"]
    print(f"Lipinski rule of five: {'pass' if passes else 'fail'}")
    for error in report["errors"]:
        print(f"ERROR: {error}")
    for warning in report["warnings"]:
        print(f"WARNING: {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the describe CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    graph = create_template(TemplateType(args.template), params_from_args(args))
    logger.info(f"Built {args.template} template with {len(graph)} atoms")
    report = describe(graph)

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        _print_report(report)
    return 0 if report["valid"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
