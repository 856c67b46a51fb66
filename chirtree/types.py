"""
Core molecular data types.

This module defines the molecular graph produced from a syntax tree: Atom,
Bond and Molecule, plus MoleculeView, a read-only filtered window onto a
molecule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator

from .elements import BondType, Element, Parity

if TYPE_CHECKING:
    from typing import Self

AtomPredicate = Callable[["Atom"], bool]
BondPredicate = Callable[["Bond"], bool]


@dataclass(slots=True)
class Bond:
    """Represents a chemical bond between two atoms.

    Attributes:
        idx: Unique index of this bond in the molecule.
        atom1_idx: Index of the first atom (earlier in the SMILES string).
        atom2_idx: Index of the second atom.
        kind: Bond type; SINGLE when no symbol was written.
        is_ring_closure: Whether the bond comes from a ring-closure label.
    """

    idx: int
    atom1_idx: int
    atom2_idx: int
    kind: BondType = BondType.SINGLE
    is_ring_closure: bool = False

    def other_atom(self, atom_idx: int) -> int:
        """Get the index of the atom on the other end of this bond.

        Args:
            atom_idx: Index of one atom in the bond.

        Returns:
            Index of the other atom.

        Raises:
            ValueError: If atom_idx is not part of this bond.
        """
        if atom_idx == self.atom1_idx:
            return self.atom2_idx
        if atom_idx == self.atom2_idx:
            return self.atom1_idx
        raise ValueError(f"Atom {atom_idx} not in bond {self.idx}")

    @property
    def order(self) -> float:
        return self.kind.order

    def __contains__(self, atom_idx: int) -> bool:
        """Check if atom is part of this bond."""
        return atom_idx in (self.atom1_idx, self.atom2_idx)


@dataclass(slots=True)
class Atom:
    """Represents an atom in a molecule.

    Attributes:
        idx: Unique index of this atom; atoms are numbered in text order.
        symbol: Symbol as written (e.g., "C", "c", "Cl", "*").
        element: Resolved element, or None for the ``*`` wildcard.
        isotope: Mass number, or None for natural abundance.
        parity: Tetrahedral parity for ``@``/``@@`` (and ``@TH``/``@AL``
            forms), None otherwise.
        chirality: Chirality marker as written (``@``, ``@@``, ``@TB12``...).
        charge: Formal charge.
        hydrogens: Hydrogen count written in brackets, None for shorthand atoms.
        atom_class: Atom class number (reaction mapping).
        is_aromatic: Whether the symbol was written in lowercase.
        is_bracket: Whether the atom was written in brackets.
        bond_indices: Indices of bonds connected to this atom.
    """

    idx: int
    symbol: str
    element: Element | None = None
    isotope: int | None = None
    parity: Parity | None = None
    chirality: str | None = None
    charge: int = 0
    hydrogens: int | None = None
    atom_class: int | None = None
    is_aromatic: bool = False
    is_bracket: bool = False
    bond_indices: list[int] = field(default_factory=list)

    @property
    def atomic_number(self) -> int:
        """Atomic number, 0 for the wildcard."""
        return self.element.atomic_number if self.element is not None else 0

    @property
    def is_wildcard(self) -> bool:
        return self.element is None

    def neighbors(self, mol: "Molecule") -> Iterator[int]:
        """Iterate over indices of neighboring atoms.

        Args:
            mol: Parent molecule.

        Yields:
            Indices of atoms bonded to this atom.
        """
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx].other_atom(self.idx)

    def get_bonds(self, mol: "Molecule") -> Iterator[Bond]:
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx]


@dataclass
class Molecule:
    """Represents a molecular structure.

    An undirected graph of atoms connected by bonds. The translator builds
    it once; afterwards it is treated as read-only. Transformations return
    new molecules.

    Attributes:
        atoms: List of atoms in the molecule.
        bonds: List of bonds in the molecule.
        name: Title written after the SMILES string, if any.

    Example:
        >>> mol = Molecule()
        >>> c1 = mol.add_atom("C", element=Element.from_symbol("C"))
        >>> c2 = mol.add_atom("C", element=Element.from_symbol("C"))
        >>> mol.add_bond(c1, c2)
        0
        >>> mol.degree(c1)
        1
    """

    atoms: list[Atom] = field(default_factory=list)
    bonds: list[Bond] = field(default_factory=list)
    name: str | None = None

    def __len__(self) -> int:
        """Return number of atoms."""
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)

    def __getitem__(self, idx: int) -> Atom:
        return self.atoms[idx]

    def add_atom(
        self,
        symbol: str,
        *,
        element: Element | None = None,
        isotope: int | None = None,
        parity: Parity | None = None,
        chirality: str | None = None,
        charge: int = 0,
        hydrogens: int | None = None,
        atom_class: int | None = None,
        is_aromatic: bool = False,
        is_bracket: bool = False,
    ) -> int:
        """Add an atom to the molecule.

        Returns:
            Index of the newly added atom.
        """
        idx = len(self.atoms)
        self.atoms.append(Atom(
            idx=idx,
            symbol=symbol,
            element=element,
            isotope=isotope,
            parity=parity,
            chirality=chirality,
            charge=charge,
            hydrogens=hydrogens,
            atom_class=atom_class,
            is_aromatic=is_aromatic,
            is_bracket=is_bracket,
        ))
        return idx

    def add_bond(
        self,
        atom1_idx: int,
        atom2_idx: int,
        *,
        kind: BondType = BondType.SINGLE,
        is_ring_closure: bool = False,
    ) -> int:
        """Add a bond between two atoms.

        Args:
            atom1_idx: Index of the first atom.
            atom2_idx: Index of the second atom.
            kind: Bond type.
            is_ring_closure: Whether the bond closes a ring label.

        Returns:
            Index of the newly added bond.

        Raises:
            IndexError: If atom indices are out of bounds.
            ValueError: If both indices name the same atom.
        """
        if atom1_idx >= len(self.atoms) or atom2_idx >= len(self.atoms):
            raise IndexError(f"Atom index out of bounds: {atom1_idx}, {atom2_idx}")
        if atom1_idx == atom2_idx:
            raise ValueError(f"Cannot bond atom {atom1_idx} to itself")

        idx = len(self.bonds)
        self.bonds.append(Bond(
            idx=idx,
            atom1_idx=atom1_idx,
            atom2_idx=atom2_idx,
            kind=kind,
            is_ring_closure=is_ring_closure,
        ))
        self.atoms[atom1_idx].bond_indices.append(idx)
        self.atoms[atom2_idx].bond_indices.append(idx)
        return idx

    def neighbors(self, atom_idx: int) -> list[int]:
        """Indices of atoms bonded to ``atom_idx``, in bond order."""
        return list(self.atoms[atom_idx].neighbors(self))

    def degree(self, atom_idx: int) -> int:
        return len(self.atoms[atom_idx].bond_indices)

    def get_bond_between(self, atom1_idx: int, atom2_idx: int) -> Bond | None:
        """Find the bond between two atoms.

        Returns:
            Bond object if found, None otherwise.
        """
        for bond_idx in self.atoms[atom1_idx].bond_indices:
            bond = self.bonds[bond_idx]
            if atom2_idx in bond:
                return bond
        return None

    def ring_closures(self) -> list[Bond]:
        """Bonds created from ring-closure labels."""
        return [bond for bond in self.bonds if bond.is_ring_closure]

    def connected_components(self) -> list[list[int]]:
        """Find connected components in the molecule.

        Returns:
            List of components, each being a sorted list of atom indices.
        """
        visited: set[int] = set()
        components: list[list[int]] = []

        for start in range(len(self.atoms)):
            if start in visited:
                continue

            component: list[int] = []
            stack = [start]
            visited.add(start)

            while stack:
                atom_idx = stack.pop()
                component.append(atom_idx)

                for neighbor in self.atoms[atom_idx].neighbors(self):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        stack.append(neighbor)

            components.append(sorted(component))

        return components

    def copy(self) -> "Self":
        """Create a deep copy of the molecule.

        Elements are shared; they are immutable.
        """
        mol = Molecule(name=self.name)
        for atom in self.atoms:
            mol.atoms.append(Atom(
                idx=atom.idx,
                symbol=atom.symbol,
                element=atom.element,
                isotope=atom.isotope,
                parity=atom.parity,
                chirality=atom.chirality,
                charge=atom.charge,
                hydrogens=atom.hydrogens,
                atom_class=atom.atom_class,
                is_aromatic=atom.is_aromatic,
                is_bracket=atom.is_bracket,
                bond_indices=list(atom.bond_indices),
            ))
        for bond in self.bonds:
            mol.bonds.append(Bond(
                idx=bond.idx,
                atom1_idx=bond.atom1_idx,
                atom2_idx=bond.atom2_idx,
                kind=bond.kind,
                is_ring_closure=bond.is_ring_closure,
            ))
        return mol

    def filter(
        self,
        atom_predicate: AtomPredicate | None = None,
        bond_predicate: BondPredicate | None = None,
    ) -> MoleculeView:
        """Read-only view of the atoms and bonds matching the predicates.

        A bond is kept only if it matches ``bond_predicate`` and both of its
        atoms are kept.
        """
        return MoleculeView.of(self).filter(atom_predicate, bond_predicate)

    def carbon_skeleton(self) -> MoleculeView:
        """View restricted to carbon and wildcard atoms and the bonds between them."""
        return self.filter(lambda atom: atom.element is None or atom.atomic_number == 6)

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    @property
    def is_connected(self) -> bool:
        """Check if molecule is a single connected component."""
        return len(self.connected_components()) <= 1


class MoleculeView:
    """Filtered read-only sub-graph of a molecule.

    Views never copy atoms or bonds. Filtering a view returns a narrower
    view; filtering with the same predicate twice gives an equal view.

    Example:
        >>> view = read_smiles("CCO").carbon_skeleton()
        >>> view.atom_indices()
        [0, 1]
    """

    __slots__ = ("molecule", "_atoms", "_bonds")

    def __init__(self, molecule: Molecule, atoms: frozenset[int], bonds: frozenset[int]) -> None:
        self.molecule = molecule
        self._atoms = atoms
        self._bonds = bonds

    @classmethod
    def of(cls, molecule: Molecule) -> MoleculeView:
        """Unfiltered view of the whole molecule."""
        return cls(
            molecule,
            frozenset(range(len(molecule.atoms))),
            frozenset(range(len(molecule.bonds))),
        )

    def filter(
        self,
        atom_predicate: AtomPredicate | None = None,
        bond_predicate: BondPredicate | None = None,
    ) -> MoleculeView:
        mol = self.molecule
        atoms = frozenset(
            i for i in self._atoms
            if atom_predicate is None or atom_predicate(mol.atoms[i])
        )
        bonds = frozenset(
            i for i in self._bonds
            if mol.bonds[i].atom1_idx in atoms
            and mol.bonds[i].atom2_idx in atoms
            and (bond_predicate is None or bond_predicate(mol.bonds[i]))
        )
        return MoleculeView(mol, atoms, bonds)

    def atom_indices(self) -> list[int]:
        return sorted(self._atoms)

    def atoms(self) -> Iterator[Atom]:
        for idx in self.atom_indices():
            yield self.molecule.atoms[idx]

    def bonds(self) -> Iterator[Bond]:
        for idx in sorted(self._bonds):
            yield self.molecule.bonds[idx]

    def neighbors(self, atom_idx: int) -> list[int]:
        """Neighbors of ``atom_idx`` reachable through bonds in the view."""
        if atom_idx not in self._atoms:
            raise KeyError(f"Atom {atom_idx} not in view")
        atom = self.molecule.atoms[atom_idx]
        return [
            self.molecule.bonds[b].other_atom(atom_idx)
            for b in atom.bond_indices
            if b in self._bonds
        ]

    def degree(self, atom_idx: int) -> int:
        return len(self.neighbors(atom_idx))

    def to_molecule(self) -> Molecule:
        """Copy the view into a standalone molecule with renumbered atoms."""
        mapping = {old: new for new, old in enumerate(self.atom_indices())}
        mol = Molecule(name=self.molecule.name)
        for atom in self.atoms():
            mol.add_atom(
                atom.symbol,
                element=atom.element,
                isotope=atom.isotope,
                parity=atom.parity,
                chirality=atom.chirality,
                charge=atom.charge,
                hydrogens=atom.hydrogens,
                atom_class=atom.atom_class,
                is_aromatic=atom.is_aromatic,
                is_bracket=atom.is_bracket,
            )
        for bond in self.bonds():
            mol.add_bond(
                mapping[bond.atom1_idx],
                mapping[bond.atom2_idx],
                kind=bond.kind,
                is_ring_closure=bond.is_ring_closure,
            )
        return mol

    def __contains__(self, atom_idx: object) -> bool:
        return atom_idx in self._atoms

    def __len__(self) -> int:
        return len(self._atoms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoleculeView):
            return NotImplemented
        return (
            self.molecule is other.molecule
            and self._atoms == other._atoms
            and self._bonds == other._bonds
        )

    def __hash__(self) -> int:
        return hash((id(self.molecule), self._atoms, self._bonds))

    def __repr__(self) -> str:
        return f"MoleculeView(atoms={len(self._atoms)}, bonds={len(self._bonds)})"
