"""Lossless SMILES syntax: tokens, tree builder, parser and typed views."""

from chirtree.syntax.kinds import SyntaxKind
from chirtree.syntax.lexer import Token, tokenize
from chirtree.syntax.cursor import TokenCursor
from chirtree.syntax.tree import (
    Checkpoint,
    SyntaxNode,
    SyntaxToken,
    SyntaxTree,
    TreeBuilder,
)
from chirtree.syntax.parser import Parse, ParseOptions, Parser, parse
from chirtree.syntax.ast import (
    Brackets,
    Edge,
    Index,
    Indexed,
    Node,
    Root,
    Tree,
    Unindexed,
)

__all__ = [
    "SyntaxKind",
    "Token", "tokenize", "TokenCursor",
    "Checkpoint", "SyntaxNode", "SyntaxToken", "SyntaxTree", "TreeBuilder",
    "Parse", "ParseOptions", "Parser", "parse",
    "Brackets", "Edge", "Index", "Indexed", "Node", "Root", "Tree", "Unindexed",
]
