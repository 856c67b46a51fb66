"""
Typed views over the syntax tree.

A view wraps a ``SyntaxNode`` of one specific kind and exposes its children
through named accessors. Views hold no data of their own, so creating them
is cheap and they can be discarded freely.

    >>> root = Root.cast(parse("CC(=O)O").root)
    >>> [b.edge().symbol if b.edge() else None for b in root.tree().branches()]
    [None]

Numeric accessors (``Isotope.value`` and friends) convert digits and check
ranges, raising ``IntegerParseError`` for values that are out of bounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final, Iterator, Union

from chirtree.exceptions import IntegerParseError
from chirtree.syntax.kinds import SyntaxKind
from chirtree.syntax.tree import SyntaxNode, SyntaxToken

MAX_ISOTOPE: Final[int] = 999
MAX_CHARGE: Final[int] = 15

# Allowed permutation index per chirality class
CHIRAL_CLASS_LIMITS: Final[dict[str, int]] = {
    "TH": 2,
    "AL": 2,
    "SP": 3,
    "TB": 20,
    "OH": 30,
}


@dataclass(frozen=True, slots=True)
class AstNode:
    """Base class for typed views."""

    syntax: SyntaxNode

    KIND: ClassVar[SyntaxKind]

    @classmethod
    def cast(cls, node: SyntaxNode | None):
        """Wrap ``node`` if it has this view's kind, else return None."""
        if node is not None and node.kind is cls.KIND:
            return cls(node)
        return None

    @property
    def text(self) -> str:
        return self.syntax.text

    @property
    def range(self) -> tuple[int, int]:
        return self.syntax.range

    def _child(self, view: type[AstNode]):
        return view.cast(self.syntax.find_node(view.KIND))


def _unsigned_text(node: SyntaxNode | None) -> str | None:
    if node is None:
        return None
    unsigned = node.find_node(SyntaxKind.UNSIGNED)
    return unsigned.text if unsigned is not None else None


def _to_int(field: str, text: str, bounds: tuple[int, int | None], node: SyntaxNode) -> int:
    # int() rejects very long digit runs
    try:
        return int(text)
    except ValueError as exc:
        raise IntegerParseError(field, text, bounds, node) from exc


def _bounded(field: str, text: str, low: int, high: int | None, node: SyntaxNode) -> int:
    value = _to_int(field, text, (low, high), node)
    if value < low or (high is not None and value > high):
        raise IntegerParseError(field, text, (low, high), node)
    return value


class Root(AstNode):
    __slots__ = ()
    KIND = SyntaxKind.ROOT

    def tree(self) -> Tree | None:
        return self._child(Tree)

    def title(self) -> str | None:
        """Free text after the whitespace terminator, if any."""
        title = self.syntax.find_node(SyntaxKind.TITLE)
        if title is None:
            return None
        text = title.find_token(SyntaxKind.TEXT)
        return text.text if text is not None else None

    def error(self) -> SyntaxNode | None:
        """The ERROR node holding unparsed input after a failed parse."""
        return self.syntax.find_node(SyntaxKind.ERROR)


class Tree(AstNode):
    """A node followed by its ring closures and branches."""

    __slots__ = ()
    KIND = SyntaxKind.TREE

    def node(self) -> Node | None:
        return self._child(Node)

    def branches(self) -> Iterator[Branch]:
        """Ring closures and branches in source order.

        Parenthesized branches are unwrapped, so every item is either an
        ``Indexed`` or an ``Unindexed`` view. The continuing chain, when
        present, is always last.
        """
        branches = self.syntax.find_node(SyntaxKind.BRANCHES)
        if branches is None:
            return
        for child in branches.child_nodes():
            if child.kind is SyntaxKind.BRANCH:
                child = child.find_node(SyntaxKind.UNINDEXED)
                if child is None:
                    continue
            branch = _cast_branch(child)
            if branch is not None:
                yield branch


class Indexed(AstNode):
    """Ring-closure branch: optional bond symbol plus a label."""

    __slots__ = ()
    KIND = SyntaxKind.INDEXED

    def edge(self) -> Edge | None:
        return self._child(Edge)

    def index(self) -> Index | None:
        return self._child(Index)


class Unindexed(AstNode):
    """Branch leading to another tree, in parentheses or continuing the chain."""

    __slots__ = ()
    KIND = SyntaxKind.UNINDEXED

    def edge(self) -> Edge | None:
        return self._child(Edge)

    def tree(self) -> Tree | None:
        return self._child(Tree)

    @property
    def is_dot(self) -> bool:
        """Whether the branch is a ``.`` gap (no bond)."""
        return self.syntax.find_token(SyntaxKind.DOT) is not None

    @property
    def is_parenthesized(self) -> bool:
        parent = self.syntax.parent
        return parent is not None and parent.kind is SyntaxKind.BRANCH


Branch = Union[Indexed, Unindexed]


def _cast_branch(node: SyntaxNode) -> Branch | None:
    return Indexed.cast(node) or Unindexed.cast(node)


class Index(AstNode):
    """Ring-closure label: one digit, or ``%`` and two digits."""

    __slots__ = ()
    KIND = SyntaxKind.INDEX

    @property
    def label(self) -> int:
        """Numeric label; ``%01`` and ``1`` are the same label."""
        digits = "".join(
            t.text for t in self.syntax.child_tokens() if t.kind is SyntaxKind.DIGIT
        )
        return _to_int("ring label", digits, (0, 99), self.syntax)


class Edge(AstNode):
    """Explicit bond symbol."""

    __slots__ = ()
    KIND = SyntaxKind.EDGE

    @property
    def token(self) -> SyntaxToken:
        token = next(self.syntax.child_tokens(), None)
        assert token is not None, "EDGE without a token"
        return token

    @property
    def symbol(self) -> str:
        return self.token.text


class Node(AstNode):
    """An atom, written either as a bare symbol or in brackets."""

    __slots__ = ()
    KIND = SyntaxKind.NODE

    def symbol(self) -> Symbol | None:
        """The element symbol, looking inside brackets when needed."""
        brackets = self.brackets()
        if brackets is not None:
            return brackets.symbol()
        return self._child(Symbol)

    def brackets(self) -> Brackets | None:
        return self._child(Brackets)

    @property
    def is_bracket(self) -> bool:
        return self.syntax.find_node(SyntaxKind.BRACKETS) is not None


class Symbol(AstNode):
    """Element symbol (ELEMENT node)."""

    __slots__ = ()
    KIND = SyntaxKind.ELEMENT

    @property
    def is_wildcard(self) -> bool:
        return self.text == "*"

    @property
    def is_aromatic(self) -> bool:
        return self.text[:1].islower()


class Brackets(AstNode):
    """Bracket atom ``[isotope symbol parity hydrogens charge class]``."""

    __slots__ = ()
    KIND = SyntaxKind.BRACKETS

    def isotope(self) -> Isotope | None:
        return self._child(Isotope)

    def symbol(self) -> Symbol | None:
        return self._child(Symbol)

    def parity(self) -> Parity | None:
        return self._child(Parity)

    def hydrogens(self) -> Hydrogens | None:
        return self._child(Hydrogens)

    def charge(self) -> Charge | None:
        return self._child(Charge)

    def atom_class(self) -> AtomClass | None:
        return self._child(AtomClass)


class Isotope(AstNode):
    __slots__ = ()
    KIND = SyntaxKind.ISOTOPE

    def value(self) -> int:
        """Mass number, 0 to 999.

        Raises:
            IntegerParseError: If the number is above 999.
        """
        text = _unsigned_text(self.syntax) or ""
        return _bounded("isotope", text, 0, MAX_ISOTOPE, self.syntax)


class Parity(AstNode):
    """Chirality marker: ``@``, ``@@`` or ``@`` with a class and index."""

    __slots__ = ()
    KIND = SyntaxKind.PARITY

    @property
    def is_double(self) -> bool:
        """``@@``."""
        return sum(1 for t in self.syntax.child_tokens() if t.kind is SyntaxKind.AT) == 2

    @property
    def chiral_class(self) -> str | None:
        token = self.syntax.find_token(SyntaxKind.CHIRAL_CLASS)
        return token.text if token is not None else None

    def class_index(self) -> int | None:
        """Permutation index after the chirality class.

        Raises:
            IntegerParseError: If the index is outside the class's range
                (``TH``/``AL`` 1-2, ``SP`` 1-3, ``TB`` 1-20, ``OH`` 1-30).
        """
        chiral_class = self.chiral_class
        text = _unsigned_text(self.syntax)
        if chiral_class is None or text is None:
            return None
        return _bounded(
            f"{chiral_class} index", text, 1, CHIRAL_CLASS_LIMITS[chiral_class], self.syntax
        )


class Hydrogens(AstNode):
    __slots__ = ()
    KIND = SyntaxKind.HYDROGENS

    def count(self) -> int:
        """Attached hydrogens; a bare ``H`` means one."""
        text = _unsigned_text(self.syntax)
        if text is None:
            return 1
        return _to_int("hydrogens", text, (0, None), self.syntax)


class Charge(AstNode):
    """Formal charge: sign with optional magnitude, or a doubled sign."""

    __slots__ = ()
    KIND = SyntaxKind.CHARGE

    @property
    def is_doubled(self) -> bool:
        """Deprecated ``++`` / ``--`` form."""
        signed = self.syntax.find_node(SyntaxKind.SIGNED)
        return signed is not None and len(list(signed.child_tokens())) == 2

    def value(self) -> int:
        """Signed charge, -15 to 15.

        Raises:
            IntegerParseError: If the magnitude is above 15.
        """
        signed = self.syntax.find_node(SyntaxKind.SIGNED)
        if signed is None:
            return 0
        sign_token = signed.find_token(SyntaxKind.PLUS, SyntaxKind.MINUS)
        if sign_token is None:
            return 0
        sign = 1 if sign_token.kind is SyntaxKind.PLUS else -1
        if self.is_doubled:
            return 2 * sign
        text = _unsigned_text(signed)
        if text is None:
            return sign
        return sign * _bounded("charge", text, 0, MAX_CHARGE, self.syntax)


class AtomClass(AstNode):
    """Atom class ``:n``, used for reaction mapping."""

    __slots__ = ()
    KIND = SyntaxKind.CLASS

    def value(self) -> int:
        return _to_int("atom class", _unsigned_text(self.syntax) or "0", (0, None), self.syntax)
