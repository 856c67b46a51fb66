"""
Recursive-descent SMILES parser producing a lossless syntax tree.

Grammar (node kinds in parentheses)::

    root          := tree title? END_OF_STRING              (ROOT)
    title         := WHITESPACE TEXT?                       (TITLE)
    tree          := node branches?                         (TREE)
    branches      := (closure | parenthesized)* branch?     (BRANCHES)
    branch        := (edge | '.')? tree                     (UNINDEXED)
    closure       := edge? index                            (INDEXED)
    index         := DIGIT | '%' DIGIT DIGIT                (INDEX)
    parenthesized := '(' branch ')'                         (BRANCH)
    node          := brackets | IMPLICIT | '*'              (NODE)
    brackets      := '[' isotope? symbol parity? hydrogens? charge? class? ']'
    parity        := '@' ('@' | CHIRAL_CLASS unsigned)?
    hydrogens     := H unsigned?
    charge        := ('+' | '-') (unsigned | same sign)?
    class         := ':' unsigned

Trees are parsed in a loop rather than by recursion. Open parentheses are
kept on an explicit stack, so both chain length and branch nesting depth are
bounded by memory only.

Parsing stops at the first error. The unconsumed tokens are then wrapped in an
``ERROR`` node under the root so the partial tree still reproduces the input.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import AbstractSet, Final, FrozenSet

from chirtree.exceptions import DeprecatedSyntaxWarning, SmilesSyntaxError
from chirtree.syntax import grammar
from chirtree.syntax.cursor import TokenCursor
from chirtree.syntax.kinds import (
    BRACKET_SYMBOL_KINDS,
    CHARGE_SIGN_KINDS,
    NODE_START_KINDS,
    SyntaxKind,
)
from chirtree.syntax.lexer import Token, tokenize
from chirtree.syntax.tree import SyntaxTree, TreeBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Parser configuration.

    Attributes:
        allow_title: Accept whitespace followed by free text (a title) after
            the SMILES string. When False any whitespace is a syntax error.
        allow_deprecated_charge: Accept ``++`` and ``--`` as charges +2 and -2.
            A ``DeprecatedSyntaxWarning`` is issued each time.
    """

    allow_title: bool = True
    allow_deprecated_charge: bool = True


DEFAULT_OPTIONS: Final[ParseOptions] = ParseOptions()

# Optional bracket fields after the symbol, in order
_BRACKET_FIELDS: Final[tuple[FrozenSet[SyntaxKind], ...]] = (
    frozenset({SyntaxKind.AT}),
    frozenset({SyntaxKind.H}),
    CHARGE_SIGN_KINDS,
    frozenset({SyntaxKind.COLON}),
)

_DIGIT: Final[FrozenSet[SyntaxKind]] = frozenset({SyntaxKind.DIGIT})


class _Abort(Exception):
    """Unwinds the parser after the first syntax error."""

    def __init__(self, expected: AbstractSet[SyntaxKind], found: Token) -> None:
        super().__init__()
        self.expected = frozenset(expected)
        self.found = found


@dataclass(frozen=True, slots=True)
class Parse:
    """Result of a parse.

    Attributes:
        tree: Syntax tree; lossless even when parsing failed.
        errors: Zero or one syntax error.
    """

    tree: SyntaxTree
    errors: tuple[SmilesSyntaxError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> SyntaxTree:
        """Return the tree, raising the syntax error if there is one."""
        if self.errors:
            raise self.errors[0]
        return self.tree


class Parser:
    """SMILES parser.

    Example:
        >>> result = Parser("CC(=O)O").parse()
        >>> result.ok
        True
        >>> result.tree.text
        'CC(=O)O'
    """

    def __init__(self, smiles: str, options: ParseOptions | None = None) -> None:
        self._smiles = smiles
        self._options = options or DEFAULT_OPTIONS
        self._cursor = TokenCursor(tokenize(smiles))
        self._builder = TreeBuilder()
        # Offset and sign of each doubled charge seen
        self._deprecated: list[tuple[int, str]] = []

    def parse(self) -> Parse:
        """Run the parser once.

        Each deprecated ``++`` / ``--`` charge issues a
        ``DeprecatedSyntaxWarning`` attributed to the caller of this method.

        Returns:
            ``Parse`` with the tree and the error, if any.
        """
        result = self._run()
        for start, sign in self._deprecated:
            warnings.warn(
                f"deprecated charge {sign * 2!r} at {start}, write {sign}2 instead",
                DeprecatedSyntaxWarning,
                stacklevel=2,
            )
            logger.info("deprecated charge notation at %d in %r", start, self._smiles)
        return result

    def _run(self) -> Parse:
        builder = self._builder
        builder.start_node(SyntaxKind.ROOT)
        try:
            self._root()
        except _Abort as abort:
            while builder.depth > 1:
                builder.finish_node()
            builder.start_node(SyntaxKind.ERROR)
            for token in self._cursor.drain():
                builder.token(token.kind, token.text)
            builder.finish_node()
            builder.finish_node()
            tree = builder.finish()
            error = SmilesSyntaxError(abort.expected, abort.found, self._smiles, tree)
            logger.debug("syntax error in %r: %s", self._smiles, error.message)
            return Parse(tree, (error,))

        builder.finish_node()
        return Parse(builder.finish())

    # Helpers

    def _at(self, kind: SyntaxKind) -> bool:
        return self._cursor.at(kind)

    def _bump(self) -> Token:
        token = self._cursor.bump()
        self._builder.token(token.kind, token.text)
        return token

    def _error(self, expected: AbstractSet[SyntaxKind]) -> _Abort:
        found = self._cursor.peek_token()
        if found is None:
            found = Token(SyntaxKind.END_OF_STRING, "", len(self._smiles))
        return _Abort(expected, found)

    def _expect(self, kind: SyntaxKind, also: AbstractSet[SyntaxKind] = frozenset()) -> Token:
        if not self._at(kind):
            raise self._error(also | {kind})
        return self._bump()

    def _unsigned(self) -> None:
        self._builder.start_node(SyntaxKind.UNSIGNED)
        self._expect(SyntaxKind.DIGIT)
        while self._at(SyntaxKind.DIGIT):
            self._bump()
        self._builder.finish_node()

    # Productions

    def _root(self) -> None:
        self._tree()
        if self._at(SyntaxKind.WHITESPACE) and self._options.allow_title:
            self._title()
        if not self._cursor.at_end():
            expected = set(grammar.CHAIN_FOLLOW_KINDS)
            if self._options.allow_title:
                expected.add(SyntaxKind.WHITESPACE)
            raise self._error(expected)

    def _title(self) -> None:
        self._builder.start_node(SyntaxKind.TITLE)
        self._bump()
        if self._at(SyntaxKind.TEXT):
            self._bump()
        self._builder.finish_node()

    def _tree(self) -> None:
        builder = self._builder
        cursor = self._cursor
        base = builder.depth
        # Builder depth of every BRANCH still waiting for its ')', innermost last
        parens: list[int] = []
        while True:
            builder.start_node(SyntaxKind.TREE)
            self._node()
            if grammar.has_branches(cursor):
                builder.start_node(SyntaxKind.BRANCHES)
                if self._branches(parens):
                    continue
            # The tree ends here. Close it with the trees it continues, then
            # resume after the innermost open parenthesis.
            while parens:
                depth = parens.pop()
                while builder.depth > depth:
                    builder.finish_node()
                self._expect(SyntaxKind.RIGHT_PAREN, grammar.CHAIN_FOLLOW_KINDS)
                builder.finish_node()
                if self._branches(parens):
                    break
            else:
                while builder.depth > base:
                    builder.finish_node()
                return

    def _branches(self, parens: list[int]) -> bool:
        """Parse items of the open BRANCHES node up to the next tree.

        Returns:
            True with an UNINDEXED node open when a tree follows, either
            inside a new parenthesis (pushed onto ``parens``) or as the
            continuing chain. False when the BRANCHES node is complete.
        """
        builder = self._builder
        cursor = self._cursor
        while grammar.is_closure(cursor):
            self._indexed()
        if grammar.is_parenthesized(cursor):
            builder.start_node(SyntaxKind.BRANCH)
            parens.append(builder.depth)
            self._bump()
            if not (grammar.is_branch(cursor) or grammar.starts_bond(cursor)):
                raise self._error(NODE_START_KINDS | grammar.BOND_PREFIX_KINDS)
        elif not (grammar.is_branch(cursor) or grammar.starts_bond(cursor)):
            return False
        builder.start_node(SyntaxKind.UNINDEXED)
        self._bond_prefix()
        return True

    def _bond_prefix(self) -> None:
        """Optional edge or dot in front of an unindexed branch's tree."""
        if grammar.is_edge(self._cursor):
            self._edge()
            if not grammar.is_node(self._cursor):
                raise self._error(NODE_START_KINDS)
        elif self._at(SyntaxKind.DOT):
            self._bump()
            if not grammar.is_node(self._cursor):
                raise self._error(NODE_START_KINDS)

    def _edge(self) -> None:
        self._builder.start_node(SyntaxKind.EDGE)
        self._bump()
        self._builder.finish_node()

    def _indexed(self) -> None:
        self._builder.start_node(SyntaxKind.INDEXED)
        if grammar.is_edge(self._cursor):
            self._edge()
        self._index()
        self._builder.finish_node()

    def _index(self) -> None:
        self._builder.start_node(SyntaxKind.INDEX)
        if self._at(SyntaxKind.PERCENT):
            self._bump()
            self._expect(SyntaxKind.DIGIT)
            self._expect(SyntaxKind.DIGIT)
        else:
            self._expect(SyntaxKind.DIGIT, {SyntaxKind.PERCENT})
        self._builder.finish_node()

    def _node(self) -> None:
        builder = self._builder
        if not grammar.is_node(self._cursor):
            raise self._error(NODE_START_KINDS)
        # NODE wraps whichever form was read
        checkpoint = builder.checkpoint()
        if self._at(SyntaxKind.LEFT_BRACKET):
            self._brackets()
        else:
            builder.start_node(SyntaxKind.ELEMENT)
            self._bump()
            builder.finish_node()
        builder.start_node_at(checkpoint, SyntaxKind.NODE)
        builder.finish_node()

    def _brackets(self) -> None:
        builder = self._builder
        builder.start_node(SyntaxKind.BRACKETS)
        self._bump()

        symbol_expected: AbstractSet[SyntaxKind] = BRACKET_SYMBOL_KINDS
        if self._at(SyntaxKind.DIGIT):
            builder.start_node(SyntaxKind.ISOTOPE)
            self._unsigned()
            builder.finish_node()
        else:
            symbol_expected = BRACKET_SYMBOL_KINDS | _DIGIT

        if self._cursor.peek() not in BRACKET_SYMBOL_KINDS:
            raise self._error(symbol_expected)
        builder.start_node(SyntaxKind.ELEMENT)
        self._bump()
        builder.finish_node()

        productions = (self._parity, self._hydrogens, self._charge, self._class)
        remaining = list(range(len(_BRACKET_FIELDS)))
        while remaining:
            position = next(
                (i for i, field in enumerate(remaining)
                 if self._cursor.peek() in _BRACKET_FIELDS[field]),
                None,
            )
            if position is None:
                break
            field = remaining[position]
            productions[field]()
            del remaining[:position + 1]

        follow: set[SyntaxKind] = set()
        for field in remaining:
            follow |= _BRACKET_FIELDS[field]
        self._expect(SyntaxKind.RIGHT_BRACKET, follow)
        builder.finish_node()

    def _parity(self) -> None:
        builder = self._builder
        builder.start_node(SyntaxKind.PARITY)
        self._bump()
        if self._at(SyntaxKind.AT):
            self._bump()
        elif self._at(SyntaxKind.CHIRAL_CLASS):
            self._bump()
            self._unsigned()
        builder.finish_node()

    def _hydrogens(self) -> None:
        builder = self._builder
        builder.start_node(SyntaxKind.HYDROGENS)
        self._bump()
        if self._at(SyntaxKind.DIGIT):
            self._unsigned()
        builder.finish_node()

    def _charge(self) -> None:
        builder = self._builder
        cursor = self._cursor
        builder.start_node(SyntaxKind.CHARGE)
        builder.start_node(SyntaxKind.SIGNED)
        if grammar.is_doubled_sign(cursor) and self._options.allow_deprecated_charge:
            start = cursor.offset
            sign = self._bump()
            self._bump()
            self._deprecated.append((start, sign.text))
        else:
            self._bump()
            if self._at(SyntaxKind.DIGIT):
                self._unsigned()
        builder.finish_node()
        builder.finish_node()

    def _class(self) -> None:
        builder = self._builder
        builder.start_node(SyntaxKind.CLASS)
        self._bump()
        self._unsigned()
        builder.finish_node()


def parse(smiles: str, options: ParseOptions | None = None) -> SyntaxTree:
    """Parse a SMILES string into a lossless syntax tree.

    Args:
        smiles: SMILES string, optionally followed by whitespace and a title.
        options: Parser configuration; defaults to ``ParseOptions()``.

    Returns:
        The syntax tree.

    Raises:
        SmilesSyntaxError: If the input is not valid SMILES. The partial
            tree is available as ``error.tree``.

    Example:
        >>> tree = parse("C1CC1")
        >>> tree.root.kind
        SyntaxKind.ROOT
    """
    return Parser(smiles, options).parse().unwrap()
