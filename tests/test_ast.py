"""Tests for the typed views over the syntax tree."""

from __future__ import annotations

import pytest

from chirtree.exceptions import IntegerParseError
from chirtree.syntax import Indexed, Node, Root, SyntaxKind, Tree, Unindexed, parse


def root_of(smiles: str) -> Root:
    root = Root.cast(parse(smiles).root)
    assert root is not None
    return root


def first_node(smiles: str) -> Node:
    node = root_of(smiles).tree().node()
    assert node is not None
    return node


class TestCast:
    """Views only wrap nodes of their own kind."""

    def test_cast_matching_kind(self):
        tree = parse("C")
        assert Root.cast(tree.root) is not None

    def test_cast_other_kind(self):
        tree = parse("C")
        assert Tree.cast(tree.root) is None
        assert Node.cast(None) is None

    def test_views_compare_by_node(self):
        tree = parse("CC")
        assert Root.cast(tree.root) == Root.cast(tree.root)


class TestTreeViews:
    """Root, Tree and branch accessors."""

    def test_root_tree(self):
        root = root_of("CCO")
        tree = root.tree()
        assert isinstance(tree, Tree)
        assert tree.text == "CCO"
        assert root.title() is None
        assert root.error() is None

    def test_title(self):
        assert root_of("CCO ethyl alcohol").title() == "ethyl alcohol"

    def test_whitespace_without_title(self):
        assert root_of("CCO ").title() is None

    def test_branches_in_order(self):
        tree = root_of("CC(=O)O").tree().branches()
        (chain,) = list(tree)
        assert isinstance(chain, Unindexed)
        assert chain.edge() is None
        assert not chain.is_parenthesized

        inner = list(chain.tree().branches())
        assert len(inner) == 2
        paren, rest = inner
        assert paren.is_parenthesized
        assert paren.edge().symbol == "="
        assert paren.tree().text == "O"
        assert not rest.is_parenthesized
        assert rest.tree().text == "O"

    def test_indexed(self):
        branches = list(root_of("C=1CC1").tree().branches())
        closure = branches[0]
        assert isinstance(closure, Indexed)
        assert closure.edge().symbol == "="
        assert closure.index().label == 1

    def test_percent_labels(self):
        branches = list(root_of("C%01CC1").tree().branches())
        assert branches[0].index().label == 1
        assert branches[0].index().text == "%01"

    def test_two_labels_from_percent(self):
        labels = [b.index().label for b in root_of("C%123").tree().branches()]
        assert labels == [12, 3]

    def test_dot_branch(self):
        (gap,) = list(root_of("C.O").tree().branches())
        assert gap.is_dot
        assert gap.edge() is None

    def test_leaf_tree_has_no_branches(self):
        assert list(root_of("C").tree().branches()) == []


class TestNodeViews:
    """Atom level accessors."""

    def test_shorthand(self):
        node = first_node("Cl")
        assert not node.is_bracket
        assert node.brackets() is None
        assert node.symbol().text == "Cl"

    def test_aromatic(self):
        assert first_node("c1ccccc1").symbol().is_aromatic
        assert not first_node("C").symbol().is_aromatic

    def test_wildcard(self):
        assert first_node("*").symbol().is_wildcard
        assert first_node("[*]").symbol().is_wildcard

    def test_bracket_fields(self):
        brackets = first_node("[13CH3+:7]").brackets()
        assert brackets.isotope().value() == 13
        assert brackets.symbol().text == "C"
        assert brackets.hydrogens().count() == 3
        assert brackets.charge().value() == 1
        assert brackets.atom_class().value() == 7
        assert brackets.parity() is None

    def test_missing_fields(self):
        brackets = first_node("[Fe]").brackets()
        assert brackets.isotope() is None
        assert brackets.hydrogens() is None
        assert brackets.charge() is None
        assert brackets.atom_class() is None

    def test_bare_hydrogen_means_one(self):
        assert first_node("[CH]").brackets().hydrogens().count() == 1

    def test_multi_digit_hydrogens(self):
        assert first_node("[CH12]").brackets().hydrogens().count() == 12


class TestCharge:
    """Charge rules."""

    @pytest.mark.parametrize("smiles,charge", [
        ("[O-]", -1),
        ("[N+]", 1),
        ("[Fe+3]", 3),
        ("[Fe-2]", -2),
        ("[C+0]", 0),
        ("[Fe+15]", 15),
        ("[Fe-15]", -15),
    ])
    def test_value(self, smiles: str, charge: int):
        assert first_node(smiles).brackets().charge().value() == charge

    @pytest.mark.filterwarnings("ignore::chirtree.exceptions.DeprecatedSyntaxWarning")
    @pytest.mark.parametrize("smiles,charge", [("[Fe++]", 2), ("[O--]", -2)])
    def test_doubled(self, smiles: str, charge: int):
        view = first_node(smiles).brackets().charge()
        assert view.is_doubled
        assert view.value() == charge

    def test_out_of_range(self):
        view = first_node("[Fe+16]").brackets().charge()
        with pytest.raises(IntegerParseError) as excinfo:
            view.value()
        assert excinfo.value.field == "charge"
        assert excinfo.value.bounds == (0, 15)


class TestIsotope:
    """Isotope bounds."""

    def test_max(self):
        assert first_node("[999C]").brackets().isotope().value() == 999

    def test_zero(self):
        assert first_node("[0C]").brackets().isotope().value() == 0

    def test_too_large(self):
        view = first_node("[1000C]").brackets().isotope()
        with pytest.raises(IntegerParseError):
            view.value()

    def test_error_is_value_error(self):
        view = first_node("[1000C]").brackets().isotope()
        with pytest.raises(ValueError):
            view.value()


class TestParity:
    """Chirality markers."""

    def test_single(self):
        parity = first_node("[C@H]").brackets().parity()
        assert parity.text == "@"
        assert not parity.is_double
        assert parity.chiral_class is None
        assert parity.class_index() is None

    def test_double(self):
        assert first_node("[C@@H]").brackets().parity().is_double

    @pytest.mark.parametrize("smiles,chiral_class,index", [
        ("[C@TH1]", "TH", 1),
        ("[C@TH2]", "TH", 2),
        ("[C@AL2]", "AL", 2),
        ("[Pt@SP3]", "SP", 3),
        ("[As@TB20]", "TB", 20),
        ("[Co@OH30]", "OH", 30),
    ])
    def test_class(self, smiles: str, chiral_class: str, index: int):
        parity = first_node(smiles).brackets().parity()
        assert parity.chiral_class == chiral_class
        assert parity.class_index() == index

    @pytest.mark.parametrize("smiles", ["[C@TH3]", "[C@AL0]", "[Pt@SP4]", "[As@TB21]", "[Co@OH31]"])
    def test_class_out_of_range(self, smiles: str):
        parity = first_node(smiles).brackets().parity()
        with pytest.raises(IntegerParseError):
            parity.class_index()


def test_edge_token():
    (chain,) = list(root_of("C#N").tree().branches())
    assert chain.edge().token.kind is SyntaxKind.HASH
