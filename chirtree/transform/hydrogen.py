"""
Hydrogen filling.

Shorthand atoms (written without brackets) carry implicit hydrogens up to the
lowest normal valence of their element that fits their bonds. Bracket atoms
carry exactly the hydrogens written in the brackets.
"""

from __future__ import annotations

import logging

from chirtree.elements import BondType, Element, get_normal_valences
from chirtree.types import Molecule

logger = logging.getLogger(__name__)


def _bond_order_sum(mol: Molecule, atom_idx: int) -> int:
    total = 0
    for bond in mol.atoms[atom_idx].get_bonds(mol):
        # Aromaticity is accounted for per atom, not per bond
        total += 1 if bond.kind is BondType.AROMATIC else int(bond.order)
    return total


def implicit_hydrogens(mol: Molecule, atom_idx: int) -> int:
    """Number of implicit hydrogens on an atom.

    Args:
        mol: Molecule holding the atom.
        atom_idx: Atom index.

    Returns:
        Implicit hydrogen count. Always 0 for bracket atoms, wildcards and
        elements outside the organic subset, and when no normal valence
        accommodates the bonds.

    Example:
        >>> mol = read_smiles("c1ccccc1")
        >>> implicit_hydrogens(mol, 0)
        1
    """
    atom = mol.atoms[atom_idx]
    if atom.is_bracket or atom.element is None:
        return 0

    used = _bond_order_sum(mol, atom_idx)
    if atom.is_aromatic:
        used += 1
    for valence in get_normal_valences(atom.atomic_number):
        if valence >= used:
            return valence - used
    return 0


def total_hydrogens(mol: Molecule, atom_idx: int) -> int:
    """Hydrogens to attach to an atom: written count or implicit count."""
    atom = mol.atoms[atom_idx]
    if atom.is_bracket:
        return atom.hydrogens or 0
    return implicit_hydrogens(mol, atom_idx)


def add_explicit_hydrogens(mol: Molecule) -> Molecule:
    """Add explicit hydrogen atoms to a molecule.

    Hydrogens are appended after the existing atoms, each joined to its
    parent by a single bond. Bracket atoms have their hydrogen count reset
    to zero in the result, so calling this twice adds nothing the second
    time.

    Args:
        mol: Input molecule; it is not modified.

    Returns:
        New molecule with explicit hydrogens added.

    Example:
        >>> mol_h = add_explicit_hydrogens(read_smiles("CCO"))
        >>> mol_h.num_atoms
        9
    """
    counts = [total_hydrogens(mol, atom.idx) for atom in mol.atoms]
    new_mol = mol.copy()
    hydrogen = Element.from_symbol("H")

    for atom_idx, count in enumerate(counts):
        if new_mol.atoms[atom_idx].is_bracket:
            new_mol.atoms[atom_idx].hydrogens = 0
        for _ in range(count):
            h_idx = new_mol.add_atom("H", element=hydrogen, hydrogens=0, is_bracket=True)
            new_mol.add_bond(atom_idx, h_idx)

    logger.debug("added %d hydrogens", sum(counts))
    return new_mol
