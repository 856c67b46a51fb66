"""
Lossless syntax tree.

The tree is stored as an arena: every element (node or token) is an integer
index into parallel arrays holding its kind, parent, source range and either
its text (tokens) or its children (nodes). ``SyntaxNode`` and ``SyntaxToken``
are lightweight ``(tree, index)`` handles over that arena.

Trees are only built through ``TreeBuilder``, which works like an event sink:
the parser announces node starts, tokens and node ends, and may open a node
retroactively around already emitted children through a ``Checkpoint``.

    >>> builder = TreeBuilder()
    >>> builder.start_node(SyntaxKind.ROOT)
    >>> builder.token(SyntaxKind.IMPLICIT, "C")
    >>> builder.finish_node()
    >>> builder.finish().text
    'C'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from chirtree.exceptions import TreeBuilderError
from chirtree.syntax.kinds import SyntaxKind


class SyntaxTree:
    """Immutable arena holding a finished syntax tree."""

    __slots__ = ("_source", "_kinds", "_parents", "_starts", "_ends", "_children", "_root")

    def __init__(
        self,
        source: str,
        kinds: list[SyntaxKind],
        parents: list[int | None],
        starts: list[int],
        ends: list[int],
        children: list[tuple[int, ...] | None],
        root: int,
    ) -> None:
        self._source = source
        self._kinds = kinds
        self._parents = parents
        self._starts = starts
        self._ends = ends
        self._children = children
        self._root = root

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self, self._root)

    @property
    def text(self) -> str:
        """Concatenated text of every token; always equals the parsed input."""
        return self._source

    def __len__(self) -> int:
        """Number of elements (nodes and tokens)."""
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"SyntaxTree({self._source!r})"

    def _element(self, index: int) -> SyntaxElement:
        if self._children[index] is None:
            return SyntaxToken(self, index)
        return SyntaxNode(self, index)


@dataclass(frozen=True, slots=True)
class _Handle:
    tree: SyntaxTree
    index: int

    @property
    def kind(self) -> SyntaxKind:
        return self.tree._kinds[self.index]

    @property
    def range(self) -> tuple[int, int]:
        """Half-open ``[start, end)`` range in the source text."""
        return (self.tree._starts[self.index], self.tree._ends[self.index])

    @property
    def text(self) -> str:
        start, end = self.range
        return self.tree._source[start:end]

    @property
    def parent(self) -> SyntaxNode | None:
        parent = self.tree._parents[self.index]
        return SyntaxNode(self.tree, parent) if parent is not None else None

    def ancestors(self) -> Iterator[SyntaxNode]:
        """Yield the parent, grandparent and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        start, end = self.range
        return f"{self.kind.name}@{start}..{end}"


class SyntaxToken(_Handle):
    """Leaf of the syntax tree."""

    __slots__ = ()


class SyntaxNode(_Handle):
    """Internal node of the syntax tree."""

    __slots__ = ()

    def children(self) -> list[SyntaxElement]:
        """Direct children, nodes and tokens, in source order."""
        tree = self.tree
        return [tree._element(i) for i in tree._children[self.index] or ()]

    def child_nodes(self) -> Iterator[SyntaxNode]:
        tree = self.tree
        for i in tree._children[self.index] or ():
            if tree._children[i] is not None:
                yield SyntaxNode(tree, i)

    def child_tokens(self) -> Iterator[SyntaxToken]:
        tree = self.tree
        for i in tree._children[self.index] or ():
            if tree._children[i] is None:
                yield SyntaxToken(tree, i)

    def find_node(self, *kinds: SyntaxKind) -> SyntaxNode | None:
        """First direct child node of one of ``kinds``."""
        return next((n for n in self.child_nodes() if n.kind in kinds), None)

    def find_token(self, *kinds: SyntaxKind) -> SyntaxToken | None:
        """First direct child token of one of ``kinds``."""
        return next((t for t in self.child_tokens() if t.kind in kinds), None)

    def descendants(self) -> Iterator[SyntaxElement]:
        """Pre-order walk over this node and everything below it.

        Iterative, so arbitrarily deep trees are fine.
        """
        tree = self.tree
        stack = [self.index]
        while stack:
            index = stack.pop()
            yield tree._element(index)
            children = tree._children[index]
            if children:
                stack.extend(reversed(children))

    def tokens(self) -> Iterator[SyntaxToken]:
        """Every leaf below this node, in source order."""
        for element in self.descendants():
            if isinstance(element, SyntaxToken):
                yield element


SyntaxElement = Union[SyntaxNode, SyntaxToken]


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Position in the builder that a node can later be opened at."""

    mark: int
    depth: int


class TreeBuilder:
    """Event sink that assembles a ``SyntaxTree``.

    Raises:
        TreeBuilderError: On unbalanced node boundaries, on a checkpoint
            that does not belong to the currently open node, or when
            ``finish`` is called with open nodes or without a single root.
    """

    __slots__ = (
        "_pieces", "_offset", "_kinds", "_parents", "_starts", "_ends",
        "_children", "_buffer", "_stack",
    )

    def __init__(self) -> None:
        self._pieces: list[str] = []
        self._offset = 0
        self._kinds: list[SyntaxKind] = []
        self._parents: list[int | None] = []
        self._starts: list[int] = []
        self._ends: list[int] = []
        self._children: list[tuple[int, ...] | None] = []
        # Finished elements not yet attached to a parent
        self._buffer: list[int] = []
        # Open nodes as (kind, buffer mark, start offset)
        self._stack: list[tuple[SyntaxKind, int, int]] = []

    @property
    def depth(self) -> int:
        """Number of currently open nodes."""
        return len(self._stack)

    def _allocate(self, kind: SyntaxKind, start: int, children: tuple[int, ...] | None) -> int:
        index = len(self._kinds)
        self._kinds.append(kind)
        self._parents.append(None)
        self._starts.append(start)
        self._ends.append(self._offset)
        self._children.append(children)
        return index

    def start_node(self, kind: SyntaxKind) -> None:
        if kind.is_token:
            raise TreeBuilderError(f"{kind!r} is a token kind")
        self._stack.append((kind, len(self._buffer), self._offset))

    def token(self, kind: SyntaxKind, text: str) -> None:
        if not kind.is_token:
            raise TreeBuilderError(f"{kind!r} is a node kind")
        if not self._stack:
            raise TreeBuilderError("token outside of any node")
        start = self._offset
        self._pieces.append(text)
        self._offset += len(text)
        self._buffer.append(self._allocate(kind, start, None))

    def finish_node(self) -> None:
        if not self._stack:
            raise TreeBuilderError("finish_node without matching start_node")
        kind, mark, start = self._stack.pop()
        children = tuple(self._buffer[mark:])
        del self._buffer[mark:]
        index = self._allocate(kind, start, children)
        for child in children:
            self._parents[child] = index
        self._buffer.append(index)

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(len(self._buffer), len(self._stack))

    def start_node_at(self, checkpoint: Checkpoint, kind: SyntaxKind) -> None:
        """Open a node that adopts every element emitted since ``checkpoint``."""
        if checkpoint.depth != len(self._stack):
            raise TreeBuilderError("checkpoint belongs to a different node")
        if self._stack and checkpoint.mark < self._stack[-1][1]:
            raise TreeBuilderError("checkpoint precedes the open node")
        if checkpoint.mark > len(self._buffer):
            raise TreeBuilderError("checkpoint is ahead of the builder")
        if kind.is_token:
            raise TreeBuilderError(f"{kind!r} is a token kind")
        if checkpoint.mark < len(self._buffer):
            start = self._starts[self._buffer[checkpoint.mark]]
        else:
            start = self._offset
        self._stack.append((kind, checkpoint.mark, start))

    def finish(self) -> SyntaxTree:
        if self._stack:
            raise TreeBuilderError(f"{len(self._stack)} node(s) left open")
        if len(self._buffer) != 1:
            raise TreeBuilderError(f"expected a single root, got {len(self._buffer)}")
        return SyntaxTree(
            "".join(self._pieces),
            self._kinds,
            self._parents,
            self._starts,
            self._ends,
            self._children,
            self._buffer[0],
        )
