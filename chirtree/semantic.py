"""
Translation of a syntax tree into a molecular graph.

The walk is a depth-first pre-order traversal driven by an explicit stack,
so atoms are numbered in the order they appear in the text and deep trees do
not exhaust the interpreter stack. Ring closures are paired while walking:
the first occurrence of a label opens it, the second closes it with a bond.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from chirtree.elements import BondType, Element, Parity
from chirtree.exceptions import (
    ConflictingRingError,
    DanglingRingError,
    ElementNotFoundError,
    NodeNotFoundError,
    RingError,
    SemanticError,
    TreeNotFoundError,
    UnknownElementError,
)
from chirtree.syntax.ast import Indexed, Node, Root, Tree, Unindexed
from chirtree.syntax.parser import ParseOptions, parse
from chirtree.syntax.tree import SyntaxNode
from chirtree.types import Molecule

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _OpenRing:
    """First occurrence of a ring-closure label."""

    atom_idx: int
    symbol: str | None
    node: SyntaxNode


@dataclass(slots=True)
class _Visit:
    """A tree waiting to be visited, with the bond back to its parent atom."""

    tree: Tree
    parent_idx: int | None
    bond: BondType | None


@dataclass(slots=True)
class _Close:
    """A ring-closure label attached to an already created atom."""

    branch: Indexed
    atom_idx: int


_Work = Union[_Visit, _Close]


class GraphBuilder:
    """Builds a ``Molecule`` from a ``Root`` view.

    A builder is single use; call ``build`` once.

    Example:
        >>> root = Root.cast(parse("C1CC1").root)
        >>> GraphBuilder().build(root).num_bonds
        3
    """

    def __init__(self) -> None:
        self._mol = Molecule()
        self._rings: dict[int, _OpenRing] = {}

    def build(self, root: Root) -> Molecule:
        """Translate the tree under ``root``.

        Raises:
            SemanticError: On the first translation failure; see the
                subclasses in ``chirtree.exceptions``.
        """
        tree = root.tree()
        if tree is None:
            raise TreeNotFoundError(root.syntax)
        self._mol.name = root.title()

        stack: list[_Work] = [_Visit(tree, None, None)]
        while stack:
            work = stack.pop()
            if isinstance(work, _Close):
                self._ring_closure(work.branch, work.atom_idx)
                continue

            atom_idx = self._visit(work)
            pending: list[_Work] = []
            for branch in work.tree.branches():
                if isinstance(branch, Indexed):
                    pending.append(_Close(branch, atom_idx))
                else:
                    pending.append(self._branch(branch, atom_idx))
            stack.extend(reversed(pending))

        if self._rings:
            label, ring = next(iter(self._rings.items()))
            raise DanglingRingError(label, ring.atom_idx, ring.node)

        logger.debug(
            "built molecule: %d atoms, %d bonds",
            self._mol.num_atoms,
            self._mol.num_bonds,
        )
        return self._mol

    def _visit(self, work: _Visit) -> int:
        node = work.tree.node()
        if node is None:
            raise NodeNotFoundError(work.tree.syntax)
        atom_idx = self._add_atom(node)
        if work.parent_idx is not None and work.bond is not None:
            self._mol.add_bond(work.parent_idx, atom_idx, kind=work.bond)
        return atom_idx

    def _branch(self, branch: Unindexed, atom_idx: int) -> _Visit:
        tree = branch.tree()
        if tree is None:
            raise TreeNotFoundError(branch.syntax)
        if branch.is_dot:
            return _Visit(tree, atom_idx, None)
        edge = branch.edge()
        bond = BondType.from_symbol(edge.symbol) if edge is not None else BondType.SINGLE
        return _Visit(tree, atom_idx, bond)

    def _add_atom(self, node: Node) -> int:
        symbol = node.symbol()
        if symbol is None:
            raise ElementNotFoundError(node.syntax)

        element: Element | None = None
        if not symbol.is_wildcard:
            element = Element.from_symbol(symbol.text)
            if element is None:
                raise UnknownElementError(symbol.text, symbol.syntax)

        brackets = node.brackets()
        if brackets is None:
            return self._mol.add_atom(
                symbol.text,
                element=element,
                is_aromatic=symbol.is_aromatic,
            )

        isotope = brackets.isotope()
        parity_view = brackets.parity()
        hydrogens = brackets.hydrogens()
        charge = brackets.charge()
        atom_class = brackets.atom_class()

        parity: Parity | None = None
        chirality: str | None = None
        if parity_view is not None:
            chirality = parity_view.text
            index = parity_view.class_index()
            chiral_class = parity_view.chiral_class
            if chiral_class is None:
                parity = Parity.CLOCKWISE if parity_view.is_double else Parity.COUNTERCLOCKWISE
            elif chiral_class in ("TH", "AL"):
                parity = Parity.CLOCKWISE if index == 2 else Parity.COUNTERCLOCKWISE

        return self._mol.add_atom(
            symbol.text,
            element=element,
            isotope=isotope.value() if isotope is not None else None,
            parity=parity,
            chirality=chirality,
            charge=charge.value() if charge is not None else 0,
            hydrogens=hydrogens.count() if hydrogens is not None else 0,
            atom_class=atom_class.value() if atom_class is not None else None,
            is_aromatic=symbol.is_aromatic,
            is_bracket=True,
        )

    def _ring_closure(self, branch: Indexed, atom_idx: int) -> None:
        index = branch.index()
        if index is None:
            raise SemanticError("ring closure without a label", branch.syntax)
        label = index.label
        edge = branch.edge()
        symbol = edge.symbol if edge is not None else None

        opened = self._rings.pop(label, None)
        if opened is None:
            self._rings[label] = _OpenRing(atom_idx, symbol, branch.syntax)
            return

        if opened.atom_idx == atom_idx:
            raise RingError(f"ring {label} closes on its own atom {atom_idx}", label, branch.syntax)
        if self._mol.get_bond_between(opened.atom_idx, atom_idx) is not None:
            raise RingError(
                f"ring {label} duplicates the bond {opened.atom_idx}-{atom_idx}",
                label,
                branch.syntax,
            )
        if opened.symbol is not None and symbol is not None and opened.symbol != symbol:
            raise ConflictingRingError(label, opened.symbol, symbol, branch.syntax)

        chosen = opened.symbol if opened.symbol is not None else symbol
        kind = BondType.from_symbol(chosen) if chosen is not None else BondType.SINGLE
        self._mol.add_bond(opened.atom_idx, atom_idx, kind=kind, is_ring_closure=True)


def build_graph(root: Root) -> Molecule:
    """Translate a parsed SMILES tree into a molecular graph.

    Args:
        root: View over the ROOT node of a successfully parsed tree.

    Returns:
        The molecule. Atom indices follow text order.

    Raises:
        SemanticError: For unknown elements, out-of-range numbers, and
            dangling or conflicting ring closures.
    """
    return GraphBuilder().build(root)


def read_smiles(smiles: str, options: ParseOptions | None = None) -> Molecule:
    """Parse a SMILES string and build its molecular graph.

    Args:
        smiles: SMILES string, optionally followed by whitespace and a title.
        options: Parser configuration.

    Returns:
        The molecule.

    Raises:
        SmilesSyntaxError: If the input is not valid SMILES.
        SemanticError: If the tree cannot be translated.

    Example:
        >>> mol = read_smiles("CC(C)C")
        >>> mol.degree(1)
        3
    """
    tree = parse(smiles, options)
    root = Root.cast(tree.root)
    assert root is not None
    return build_graph(root)
