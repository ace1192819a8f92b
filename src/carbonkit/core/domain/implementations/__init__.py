"""Concrete notation strategies."""

from .iupac_name_generator import IUPACNameGenerator
from .smiles_generator import SMILESGenerator

__all__ = ["IUPACNameGenerator", "SMILESGenerator"]
