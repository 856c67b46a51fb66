"""Test configuration and fixtures for chirtree tests."""

from __future__ import annotations

import pytest

from chirtree.syntax import SyntaxKind, SyntaxTree, tokenize


def rdkit_mol(smiles: str):
    """Parse with RDKit, the reference implementation.

    Args:
        smiles: Input SMILES string.

    Returns:
        RDKit molecule.

    Raises:
        ValueError: If RDKit rejects the input.
    """
    from rdkit import Chem

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return mol


def rdkit_atom_count(smiles: str) -> int:
    """Get number of atoms from RDKit for comparison."""
    return rdkit_mol(smiles).GetNumAtoms()


def rdkit_bond_count(smiles: str) -> int:
    """Get number of bonds from RDKit for comparison."""
    return rdkit_mol(smiles).GetNumBonds()


def token_kinds(smiles: str) -> list[SyntaxKind]:
    """Kinds of the tokens the lexer produces for ``smiles``."""
    return [token.kind for token in tokenize(smiles)]


def node_kinds(tree: SyntaxTree) -> list[SyntaxKind]:
    """Pre-order kinds of every node (tokens excluded) in ``tree``."""
    return [e.kind for e in tree.root.descendants() if e.kind.is_node]


@pytest.fixture
def simple_smiles() -> list[str]:
    """Basic valid SMILES strings for smoke testing."""
    return [
        "C",
        "CC",
        "CCC",
        "CCCC",
        "CCO",
        "C=C",
        "C#C",
        "C=O",
        "C#N",
    ]


@pytest.fixture
def aromatic_smiles() -> list[str]:
    """Aromatic SMILES strings."""
    return [
        "c1ccccc1",
        "c1cnccc1",
        "c1ccncc1",
        "n1ccccc1",
        "c1ccc2ccccc2c1",
        "c1cc2ccccc2cc1",
    ]


@pytest.fixture
def ring_smiles() -> list[str]:
    """SMILES with ring closures."""
    return [
        "C1CC1",
        "C1CCC1",
        "C1CCCC1",
        "C1CCCCC1",
        "C1CC2CCCCC2C1",
        "C12CC1CC2",
    ]


@pytest.fixture
def charged_smiles() -> list[str]:
    """SMILES with charged atoms."""
    return [
        "[O-]",
        "[NH4+]",
        "[Na+]",
        "[Cl-]",
        "[O-]C=O",
        "[NH4+].[Cl-]",
        "[Na+].[Cl-]",
        "CC([O-])=O",
        "[N+](=O)[O-]",
    ]


@pytest.fixture
def chiral_smiles() -> list[str]:
    """SMILES with tetrahedral chirality."""
    return [
        "C[C@H](O)F",
        "C[C@@H](O)F",
        "F[C@H](Cl)Br",
        "F[C@@H](Cl)Br",
        "[C@H](Br)(Cl)F",
        "[C@@H](Br)(Cl)F",
        "C[C@H]1CCCCC1",
        "C[C@@H]1CCCCC1",
    ]


@pytest.fixture
def isotope_smiles() -> list[str]:
    """SMILES with isotopes."""
    return [
        "[2H]",
        "[13C]",
        "[14C]",
        "[2H]C([2H])([2H])[2H]",
        "C[13C](C)(C)C",
        "[35Cl]",
    ]


@pytest.fixture
def stereo_bond_smiles() -> list[str]:
    """SMILES with E/Z stereochemistry."""
    return [
        "F/C=C/F",
        r"F/C=C\F",
        "C/C=C/C",
        r"C/C=C\C",
        r"Cl/C=C/Cl",
        r"Cl/C=C\Cl",
    ]


@pytest.fixture
def multi_component_smiles() -> list[str]:
    """SMILES with multiple disconnected components."""
    return [
        "[Na+].[Cl-]",
        "O.O",
        "CO.OC",
        "[Na+].[Cl-].[NH4+].[Cl-]",
        "c1ccccc1.c1ccccc1",
    ]


@pytest.fixture
def invalid_smiles() -> list[str]:
    """Inputs that fail to parse."""
    return [
        "",
        "C-",
        "C(",
        "C()",
        "CC)",
        "C%1",
        "[C",
        "[C+1@H]",
        "[C:]",
        "C&C",
        "[]",
        "((",
    ]


@pytest.fixture
def complex_smiles() -> list[str]:
    """Complex real-world molecules."""
    return [
        # Aspirin
        "CC(=O)OC1=CC=CC=C1C(=O)O",
        # Caffeine
        "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
        # Ibuprofen
        "CC(C)Cc1ccc(cc1)C(C)C(=O)O",
        # Acetaminophen
        "CC(=O)Nc1ccc(O)cc1",
        # Naphthalene
        "c1ccc2ccccc2c1",
        # Anthracene
        "c1ccc2cc3ccccc3cc2c1",
        # Pyrene
        "c1cc2ccc3cccc4ccc(c1)c2c34",
        # Biphenyl
        "c1ccc(-c2ccccc2)cc1",
    ]
