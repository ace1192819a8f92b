"""Command-line interfaces and other presentation layer components."""

from .cli.build_catalog import main as build_catalog_main
from .cli.describe_molecule import main as describe_molecule_main

__all__ = [
    "build_catalog_main",
    "describe_molecule_main",
]
