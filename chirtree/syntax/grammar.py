"""
Lookahead predicates for the SMILES grammar.

Every decision the parser makes is one of these functions applied to the
token cursor. None of them consume input.

    tree          := node branches?
    branches      := (closure | parenthesized)* branch?
    branch        := (edge | '.')? tree
    closure       := edge? index
    parenthesized := '(' branch ')'
"""

from __future__ import annotations

from typing import Final, FrozenSet

from chirtree.syntax.cursor import TokenCursor
from chirtree.syntax.kinds import (
    CHARGE_SIGN_KINDS,
    EDGE_KINDS,
    INDEX_START_KINDS,
    NODE_START_KINDS,
    SyntaxKind,
)

# Kinds that may introduce an unindexed branch before its node
BOND_PREFIX_KINDS: Final[FrozenSet[SyntaxKind]] = EDGE_KINDS | {SyntaxKind.DOT}

# Everything that may follow a complete node inside a chain
CHAIN_FOLLOW_KINDS: Final[FrozenSet[SyntaxKind]] = (
    INDEX_START_KINDS | NODE_START_KINDS | BOND_PREFIX_KINDS | {SyntaxKind.LEFT_PAREN}
)


def is_node(cursor: TokenCursor, k: int = 0) -> bool:
    return cursor.peek(k) in NODE_START_KINDS


def is_edge(cursor: TokenCursor, k: int = 0) -> bool:
    return cursor.peek(k) in EDGE_KINDS


def is_index(cursor: TokenCursor, k: int = 0) -> bool:
    return cursor.peek(k) in INDEX_START_KINDS


def is_closure(cursor: TokenCursor) -> bool:
    """Ring closure: an index, or an edge directly followed by an index."""
    if is_index(cursor):
        return True
    return is_edge(cursor) and is_index(cursor, 1)


def is_parenthesized(cursor: TokenCursor) -> bool:
    return cursor.at(SyntaxKind.LEFT_PAREN)


def is_branch(cursor: TokenCursor) -> bool:
    """Unindexed branch: a node, or an edge or dot directly followed by a node."""
    if is_node(cursor):
        return True
    return cursor.peek() in BOND_PREFIX_KINDS and is_node(cursor, 1)


def starts_bond(cursor: TokenCursor) -> bool:
    """Edge or dot that is not part of a ring closure.

    Such a prefix commits the parser to a branch, so that ``C-`` reports a
    missing node after the bond rather than a stray bond.
    """
    return cursor.peek() in BOND_PREFIX_KINDS and not is_closure(cursor)


def has_branches(cursor: TokenCursor) -> bool:
    """Whether anything after a node belongs to its BRANCHES."""
    return (
        is_closure(cursor)
        or is_parenthesized(cursor)
        or is_branch(cursor)
        or starts_bond(cursor)
    )


def is_charge(cursor: TokenCursor) -> bool:
    return cursor.peek() in CHARGE_SIGN_KINDS


def is_doubled_sign(cursor: TokenCursor) -> bool:
    """``++`` or ``--`` at the cursor."""
    first = cursor.peek()
    return first in CHARGE_SIGN_KINDS and cursor.peek(1) is first
