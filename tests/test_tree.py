"""Tests for the syntax tree arena and its builder."""

from __future__ import annotations

import pytest

from chirtree.exceptions import TreeBuilderError
from chirtree.syntax import SyntaxKind, SyntaxNode, SyntaxToken, TreeBuilder, parse

K = SyntaxKind


def build_methane():
    builder = TreeBuilder()
    builder.start_node(K.ROOT)
    builder.start_node(K.NODE)
    builder.start_node(K.ELEMENT)
    builder.token(K.IMPLICIT, "C")
    builder.finish_node()
    builder.finish_node()
    builder.finish_node()
    return builder.finish()


class TestTreeBuilder:
    """Event-driven construction."""

    def test_simple(self):
        tree = build_methane()
        assert tree.text == "C"
        assert tree.root.kind is K.ROOT
        assert len(tree) == 4

    def test_children(self):
        tree = build_methane()
        (node,) = tree.root.children()
        assert isinstance(node, SyntaxNode)
        assert node.kind is K.NODE
        (element,) = node.children()
        (token,) = element.children()
        assert isinstance(token, SyntaxToken)
        assert token.text == "C"
        assert token.range == (0, 1)

    def test_checkpoint_wraps_emitted_children(self):
        """A node opened at a checkpoint adopts what came after it."""
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        checkpoint = builder.checkpoint()
        builder.token(K.IMPLICIT, "C")
        builder.token(K.EQUALS, "=")
        builder.start_node_at(checkpoint, K.ERROR)
        builder.finish_node()
        builder.token(K.IMPLICIT, "O")
        builder.finish_node()
        tree = builder.finish()

        children = tree.root.children()
        assert [c.kind for c in children] == [K.ERROR, K.IMPLICIT]
        assert children[0].text == "C="
        assert children[0].range == (0, 2)
        assert tree.text == "C=O"

    def test_empty_node(self):
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        builder.token(K.IMPLICIT, "C")
        builder.start_node(K.ERROR)
        builder.finish_node()
        builder.finish_node()
        tree = builder.finish()
        error = tree.root.find_node(K.ERROR)
        assert error is not None
        assert error.text == ""
        assert error.range == (1, 1)

    def test_depth(self):
        builder = TreeBuilder()
        assert builder.depth == 0
        builder.start_node(K.ROOT)
        builder.start_node(K.TREE)
        assert builder.depth == 2


class TestTreeBuilderErrors:
    """Unbalanced use is rejected."""

    def test_finish_node_without_start(self):
        with pytest.raises(TreeBuilderError):
            TreeBuilder().finish_node()

    def test_finish_with_open_node(self):
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        with pytest.raises(TreeBuilderError):
            builder.finish()

    def test_token_outside_node(self):
        with pytest.raises(TreeBuilderError):
            TreeBuilder().token(K.IMPLICIT, "C")

    def test_node_with_token_kind(self):
        with pytest.raises(TreeBuilderError):
            TreeBuilder().start_node(K.IMPLICIT)

    def test_token_with_node_kind(self):
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        with pytest.raises(TreeBuilderError):
            builder.token(K.TREE, "C")

    def test_two_roots(self):
        builder = TreeBuilder()
        for _ in range(2):
            builder.start_node(K.ROOT)
            builder.finish_node()
        with pytest.raises(TreeBuilderError):
            builder.finish()

    def test_checkpoint_from_other_node(self):
        """Checkpoints cannot reach outside the open node."""
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        checkpoint = builder.checkpoint()
        builder.start_node(K.TREE)
        with pytest.raises(TreeBuilderError):
            builder.start_node_at(checkpoint, K.NODE)

    def test_stale_checkpoint(self):
        """A checkpoint taken inside a finished node is no longer valid."""
        builder = TreeBuilder()
        builder.start_node(K.ROOT)
        builder.start_node(K.TREE)
        builder.token(K.IMPLICIT, "C")
        checkpoint = builder.checkpoint()
        builder.finish_node()
        with pytest.raises(TreeBuilderError):
            builder.start_node_at(checkpoint, K.NODE)


class TestHandles:
    """Node and token handles."""

    def test_equality_and_hash(self):
        tree = parse("CC")
        assert tree.root == tree.root
        assert len({tree.root, tree.root}) == 1

    def test_handles_of_different_trees_differ(self):
        assert parse("C").root != parse("C").root

    def test_repr(self):
        assert repr(parse("CO").root) == "ROOT@0..2"

    def test_parent_and_ancestors(self):
        tree = parse("CC")
        tokens = list(tree.root.tokens())
        last = tokens[-1]
        assert last.parent.kind is K.ELEMENT
        assert [n.kind for n in last.ancestors()] == [
            K.ELEMENT, K.NODE, K.TREE, K.UNINDEXED, K.BRANCHES, K.TREE, K.ROOT,
        ]
        assert tree.root.parent is None

    def test_descendants_pre_order(self):
        tree = parse("CC")
        assert [e.kind for e in tree.root.descendants()] == [
            K.ROOT,
            K.TREE, K.NODE, K.ELEMENT, K.IMPLICIT,
            K.BRANCHES, K.UNINDEXED,
            K.TREE, K.NODE, K.ELEMENT, K.IMPLICIT,
        ]

    def test_child_nodes_and_tokens(self):
        tree = parse("[CH4]")
        brackets = next(
            e for e in tree.root.descendants() if e.kind is K.BRACKETS
        )
        assert [t.kind for t in brackets.child_tokens()] == [K.LEFT_BRACKET, K.RIGHT_BRACKET]
        assert [n.kind for n in brackets.child_nodes()] == [K.ELEMENT, K.HYDROGENS]
        assert brackets.find_token(K.RIGHT_BRACKET).range == (4, 5)
        assert brackets.find_node(K.CHARGE) is None

    def test_node_text(self):
        tree = parse("CC(=O)O")
        branch = next(e for e in tree.root.descendants() if e.kind is K.BRANCH)
        assert branch.text == "(=O)"
        assert branch.range == (2, 6)
