"""
Custom exceptions for chirtree.

Syntax errors come from the parser, semantic errors from the translation of a
syntax tree into a molecular graph. Both derive from ``ChemError`` so callers
can catch everything the library raises for bad input in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet

if TYPE_CHECKING:
    from chirtree.syntax.kinds import SyntaxKind
    from chirtree.syntax.lexer import Token
    from chirtree.syntax.tree import SyntaxNode, SyntaxTree


class ChemError(Exception):
    """Base exception for all chemistry-related errors."""

    pass


class ParseError(ChemError):
    """Error during SMILES parsing.

    Attributes:
        position: Character position in the SMILES string where error occurred.
        smiles: The original SMILES string being parsed.
        message: Description of what went wrong.
    """

    def __init__(
        self,
        message: str,
        smiles: str | None = None,
        position: int | None = None,
    ) -> None:
        self.message = message
        self.smiles = smiles
        self.position = position

        parts = [message]
        if smiles is not None and position is not None:
            parts.append(f"\n  {smiles}")
            parts.append(f"\n  {' ' * position}^")
        elif smiles is not None:
            parts.append(f" in: {smiles}")

        super().__init__("".join(parts))


class SmilesSyntaxError(ParseError):
    """The input does not follow the SMILES grammar.

    Parsing stops at the first offending token.

    Attributes:
        expected: Token kinds that would have been accepted at the failure point.
        found: The offending token, or a synthetic ``END_OF_STRING`` token
            when the input ran out.
        tree: The partial syntax tree. The unparsed remainder sits under an
            ``ERROR`` node, so ``tree.text`` still equals the input.
    """

    def __init__(
        self,
        expected: AbstractSet[SyntaxKind],
        found: Token,
        smiles: str | None = None,
        tree: SyntaxTree | None = None,
    ) -> None:
        self.expected = frozenset(expected)
        self.found = found
        self.tree = tree
        alternatives = ", ".join(sorted(kind.describe() for kind in self.expected))
        super().__init__(
            f"expected one of {{{alternatives}}}, found {found}",
            smiles,
            found.start,
        )


class TreeBuilderError(ChemError):
    """Unbalanced or out-of-order use of the tree builder."""

    pass


class SemanticError(ChemError):
    """A syntactically valid tree could not be turned into a molecule.

    Attributes:
        node: Syntax node the error refers to, if any.
    """

    def __init__(self, message: str, node: SyntaxNode | None = None) -> None:
        self.message = message
        self.node = node
        if node is not None:
            start, end = node.range
            message = f"{message} at {start}..{end}"
        super().__init__(message)


class IntegerParseError(SemanticError, ValueError):
    """A numeric field is out of its allowed range.

    Attributes:
        field: Field name (``isotope``, ``charge``, ...).
        text: The digits as written.
        bounds: Inclusive ``(low, high)`` limits; ``high`` is None when the
            field has no upper limit.
    """

    def __init__(
        self,
        field: str,
        text: str,
        bounds: tuple[int, int | None],
        node: SyntaxNode | None = None,
    ) -> None:
        self.field = field
        self.text = text
        self.bounds = bounds
        low, high = bounds
        limit = f"{low}..{high}" if high is not None else f">= {low}"
        super().__init__(f"{field} {text!r} out of range {limit}", node)


class UnknownElementError(SemanticError):
    """Element symbol is not in the periodic table."""

    def __init__(self, symbol: str, node: SyntaxNode | None = None) -> None:
        self.symbol = symbol
        super().__init__(f"unknown element {symbol!r}", node)


class ElementNotFoundError(SemanticError):
    """A NODE has no ELEMENT child."""

    def __init__(self, node: SyntaxNode | None = None) -> None:
        super().__init__("node has no element", node)


class NodeNotFoundError(SemanticError):
    """A TREE has no NODE child."""

    def __init__(self, node: SyntaxNode | None = None) -> None:
        super().__init__("tree has no node", node)


class TreeNotFoundError(SemanticError):
    """A ROOT or branch has no TREE child."""

    def __init__(self, node: SyntaxNode | None = None) -> None:
        super().__init__("missing tree", node)


class RingError(SemanticError):
    """Invalid ring closure.

    Attributes:
        ring_index: The problematic ring closure label.
    """

    def __init__(
        self,
        message: str,
        ring_index: int | None = None,
        node: SyntaxNode | None = None,
    ) -> None:
        self.ring_index = ring_index
        super().__init__(message, node)


class DanglingRingError(RingError):
    """A ring-closure label was opened but never closed."""

    def __init__(self, ring_index: int, atom_idx: int, node: SyntaxNode | None = None) -> None:
        self.atom_idx = atom_idx
        super().__init__(
            f"unclosed ring {ring_index} opened on atom {atom_idx}",
            ring_index,
            node,
        )


class ConflictingRingError(RingError):
    """The two ends of a ring closure specify different bond symbols."""

    def __init__(
        self,
        ring_index: int,
        first: str,
        second: str,
        node: SyntaxNode | None = None,
    ) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"conflicting bonds {first!r} and {second!r} on ring {ring_index}",
            ring_index,
            node,
        )


class SmilesWarning(UserWarning):
    """Base class for warnings about questionable input."""

    pass


class DeprecatedSyntaxWarning(SmilesWarning):
    """Input uses notation that is accepted but deprecated (``++``, ``--``)."""

    pass
