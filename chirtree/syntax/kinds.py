"""
Syntax kinds.

A single enumeration tags both leaves (tokens) and internal nodes of the
syntax tree. Token kinds are produced by the lexer; node kinds are only ever
created by the parser through the tree builder.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Final, FrozenSet


@unique
class SyntaxKind(Enum):
    """Tag for every element of the syntax tree."""

    # Punctuation tokens
    AT = "@"
    BACKSLASH = "\\"
    COLON = ":"
    DOLLAR = "$"
    DOT = "."
    EQUALS = "="
    HASH = "#"
    MINUS = "-"
    PERCENT = "%"
    PLUS = "+"
    SLASH = "/"
    STAR = "*"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    # Value tokens
    DIGIT = "digit"
    IMPLICIT = "implicit"          # organic subset symbol outside brackets
    EXPLICIT = "explicit"          # element symbol inside brackets
    H = "H"                        # hydrogen inside brackets
    CHIRAL_CLASS = "chiral class"  # TH, AL, SP, TB, OH after '@'
    WHITESPACE = "whitespace"
    TEXT = "text"                  # title following the terminator
    ERROR_TOKEN = "unknown"

    # Synthetic token used in error reports only
    END_OF_STRING = "end of string"

    # Nodes
    ROOT = "ROOT"
    TREE = "TREE"
    BRANCHES = "BRANCHES"
    BRANCH = "BRANCH"
    INDEXED = "INDEXED"
    UNINDEXED = "UNINDEXED"
    EDGE = "EDGE"
    NODE = "NODE"
    ELEMENT = "ELEMENT"
    BRACKETS = "BRACKETS"
    ISOTOPE = "ISOTOPE"
    PARITY = "PARITY"
    HYDROGENS = "HYDROGENS"
    CHARGE = "CHARGE"
    CLASS = "CLASS"
    INDEX = "INDEX"
    UNSIGNED = "UNSIGNED"
    SIGNED = "SIGNED"
    TITLE = "TITLE"
    ERROR = "ERROR"

    @property
    def is_token(self) -> bool:
        """Whether this kind tags a leaf."""
        return self in TOKEN_KINDS

    @property
    def is_node(self) -> bool:
        """Whether this kind tags an internal node."""
        return not self.is_token

    def describe(self) -> str:
        """Human readable form used in error messages."""
        if len(self.value) == 1:
            return f"'{self.value}'"
        return self.value

    def __repr__(self) -> str:
        return f"SyntaxKind.{self.name}"


TOKEN_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.AT,
    SyntaxKind.BACKSLASH,
    SyntaxKind.COLON,
    SyntaxKind.DOLLAR,
    SyntaxKind.DOT,
    SyntaxKind.EQUALS,
    SyntaxKind.HASH,
    SyntaxKind.MINUS,
    SyntaxKind.PERCENT,
    SyntaxKind.PLUS,
    SyntaxKind.SLASH,
    SyntaxKind.STAR,
    SyntaxKind.LEFT_BRACKET,
    SyntaxKind.RIGHT_BRACKET,
    SyntaxKind.LEFT_PAREN,
    SyntaxKind.RIGHT_PAREN,
    SyntaxKind.DIGIT,
    SyntaxKind.IMPLICIT,
    SyntaxKind.EXPLICIT,
    SyntaxKind.H,
    SyntaxKind.CHIRAL_CLASS,
    SyntaxKind.WHITESPACE,
    SyntaxKind.TEXT,
    SyntaxKind.ERROR_TOKEN,
    SyntaxKind.END_OF_STRING,
})

# Tokens that may appear as a bond symbol
EDGE_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.MINUS,
    SyntaxKind.EQUALS,
    SyntaxKind.HASH,
    SyntaxKind.DOLLAR,
    SyntaxKind.COLON,
    SyntaxKind.SLASH,
    SyntaxKind.BACKSLASH,
})

# Tokens that start a NODE
NODE_START_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.LEFT_BRACKET,
    SyntaxKind.IMPLICIT,
    SyntaxKind.STAR,
})

# Tokens that start a ring-closure label
INDEX_START_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.DIGIT,
    SyntaxKind.PERCENT,
})

# Symbols accepted between the isotope and the rest of a bracket atom
BRACKET_SYMBOL_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.EXPLICIT,
    SyntaxKind.H,
    SyntaxKind.STAR,
})

CHARGE_SIGN_KINDS: Final[FrozenSet[SyntaxKind]] = frozenset({
    SyntaxKind.PLUS,
    SyntaxKind.MINUS,
})
