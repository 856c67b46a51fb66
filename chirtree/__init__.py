"""
Chirtree - Lossless SMILES parser and molecular graph builder.

A zero-dependency library that parses SMILES into a syntax tree that keeps
every input character, and translates that tree into a molecular graph.

    >>> from chirtree import read_smiles
    >>> mol = read_smiles("CC(=O)O acetic acid")
    >>> mol.num_atoms, mol.name
    (4, 'acetic acid')

Submodules:
    chirtree.syntax    - Tokenizer, parser, syntax tree and typed views
    chirtree.transform - Hydrogen filling
"""

import logging

__version__ = "0.1.0"
__author__ = "Vladimir Lekić"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core types
from chirtree.types import Atom, Bond, Molecule, MoleculeView

# Parsing and translation
from chirtree.syntax import Parser, ParseOptions, SyntaxKind, SyntaxTree, parse
from chirtree.semantic import GraphBuilder, build_graph, read_smiles

# Exceptions
from chirtree.exceptions import (
    ChemError,
    DeprecatedSyntaxWarning,
    ParseError,
    RingError,
    SemanticError,
    SmilesSyntaxError,
    SmilesWarning,
)

# Element data
from chirtree.elements import Element, BondType, Parity, ORGANIC_SUBSET, AROMATIC_SUBSET

from chirtree.log import configure_logging

# Submodules
from chirtree import syntax, transform

__all__ = [
    # Types
    "Atom", "Bond", "Molecule", "MoleculeView",
    # Parsing
    "Parser", "ParseOptions", "SyntaxKind", "SyntaxTree", "parse",
    "GraphBuilder", "build_graph", "read_smiles",
    # Exceptions
    "ChemError", "ParseError", "SmilesSyntaxError", "SemanticError", "RingError",
    "SmilesWarning", "DeprecatedSyntaxWarning",
    # Elements
    "Element", "BondType", "Parity", "ORGANIC_SUBSET", "AROMATIC_SUBSET",
    # Logging
    "configure_logging",
    # Submodules
    "syntax", "transform",
]
