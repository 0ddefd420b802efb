"""Tests for the generic tree node model."""

import gc

import pytest

from tree_converter.tree import Node


class TestNodeConstruction:
    """Test node creation and constructor-established relationships."""

    def test_default_node_is_unnamed_root(self) -> None:
        """Test that a bare node has no name, value, attributes or parent."""
        node = Node()

        assert node.name is None
        assert node.value is None
        assert node.attributes == {}
        assert node.children == []
        assert node.parent is None
        assert node.is_root

    def test_constructor_children_get_parent(self) -> None:
        """Test children passed to the constructor point back to the node."""
        child = Node("child")
        parent = Node("parent", children=[child])

        assert child.parent is parent
        assert not child.is_root

    def test_nodes_compare_by_identity(self) -> None:
        """Test that two equal-looking nodes are different nodes."""
        assert Node("a") != Node("a")

    def test_repr_is_shallow(self) -> None:
        """Test repr reports the child count instead of recursing."""
        node = Node("a", "1")
        node.add_child("b")

        assert repr(node) == "Node(name='a', value='1', attributes={}, children=1)"


class TestChildManagement:
    """Test adding, removing and re-parenting children."""

    def test_add_child_by_name_returns_new_child(self) -> None:
        """Test fluent construction with a name argument."""
        root = Node()
        child = root.add_child("item")

        assert isinstance(child, Node)
        assert child.name == "item"
        assert child.parent is root
        assert root.children == [child]

    def test_add_child_none_creates_unnamed_child(self) -> None:
        """Test adding None creates an unnamed node."""
        child = Node("a").add_child()

        assert child.name is None

    def test_add_existing_node(self) -> None:
        """Test adding an existing node keeps the same object."""
        root = Node()
        child = Node("item")

        assert root.add_child(child) is child
        assert child.parent is root

    def test_add_child_preserves_order(self) -> None:
        """Test children keep encounter order."""
        root = Node()
        names = ["c", "a", "b"]
        for name in names:
            root.add_child(name)

        assert [child.name for child in root.children] == names

    def test_add_child_moves_node_from_previous_parent(self) -> None:
        """Test a node is owned by exactly one parent."""
        first = Node("first")
        second = Node("second")
        child = first.add_child("child")

        second.add_child(child)

        assert child.parent is second
        assert first.children == []
        assert second.children == [child]

    def test_add_child_rejects_other_types(self) -> None:
        """Test that non-node arguments raise TypeError."""
        with pytest.raises(TypeError, match="Child must be a Node"):
            Node().add_child(42)  # type: ignore

    def test_remove_child_detaches_and_returns_child(self) -> None:
        """Test removing a child clears its parent link."""
        root = Node()
        child = root.add_child("item")

        removed = root.remove_child(child)

        assert removed is child
        assert child.parent is None
        assert root.children == []

    def test_remove_child_matches_identity_not_value(self) -> None:
        """Test that an equal-looking node that is not a child is not removed."""
        root = Node()
        root.add_child("item")

        assert root.remove_child(Node("item")) is None
        assert len(root.children) == 1

    def test_remove_child_removes_only_the_given_duplicate(self) -> None:
        """Test removing one of two same-named children."""
        root = Node()
        first = root.add_child("item")
        second = root.add_child("item")

        root.remove_child(second)

        assert root.children == [first]


class TestMutators:
    """Test direct mutators and attribute ordering."""

    def test_set_name_and_value(self) -> None:
        """Test name and value setters."""
        node = Node("old")
        node.set_name("new")
        node.set_value("text")

        assert node.name == "new"
        assert node.value == "text"

    def test_attribute_overwrite_keeps_position(self) -> None:
        """Test overwriting an attribute keeps its first position."""
        node = Node("x")
        node.set_attribute("a", "1")
        node.set_attribute("b", "2")
        node.set_attribute("a", "3")

        assert list(node.attributes.items()) == [("a", "3"), ("b", "2")]

    def test_get_attribute_with_default(self) -> None:
        """Test attribute lookup with a default value."""
        node = Node("x")
        node.set_attribute("a", "1")

        assert node.get_attribute("a") == "1"
        assert node.get_attribute("missing") is None
        assert node.get_attribute("missing", "fallback") == "fallback"


class TestPath:
    """Test path reconstruction."""

    def test_path_skips_unnamed_root(self) -> None:
        """Test the synthetic root contributes nothing to the path."""
        root = Node()
        leaf = root.add_child("a").add_child("b").add_child("c")

        assert leaf.path() == "a, b, c"

    def test_path_of_root_is_empty(self) -> None:
        """Test the root's own path is empty."""
        assert Node().path() == ""

    def test_path_is_stable(self) -> None:
        """Test recomputing the path without mutation gives the same string."""
        root = Node()
        leaf = root.add_child("a").add_child("b")

        assert leaf.path() == leaf.path() == "a, b"

    def test_path_survives_dropping_the_root(self) -> None:
        """Test a descendant keeps its full ancestor chain on its own."""
        root = Node()
        leaf = root.add_child("a").add_child("b")

        del root
        gc.collect()

        assert leaf.path() == "a, b"
        assert leaf.parent.parent.is_root

    def test_fluent_chain_without_held_root(self) -> None:
        """Test a chain built from a temporary root keeps every name."""
        leaf = Node().add_child("a").add_child("b").add_child("c")
        gc.collect()

        assert leaf.path() == "a, b, c"
        assert leaf.depth() == 3

    def test_path_follows_reparenting(self) -> None:
        """Test the path reflects the current parent."""
        root = Node()
        a = root.add_child("a")
        b = root.add_child("b")
        leaf = a.add_child("leaf")

        b.add_child(leaf)

        assert leaf.path() == "b, leaf"

    def test_depth(self) -> None:
        """Test depth counts edges from the root."""
        root = Node()
        leaf = root.add_child("a").add_child("b")

        assert root.depth() == 0
        assert leaf.depth() == 2


class TestTraversal:
    """Test lookups and traversal helpers."""

    @pytest.fixture
    def tree(self) -> Node:
        root = Node()
        a = root.add_child("a")
        a.add_child("b").set_value("1")
        a.add_child("c").add_child("b").set_value("2")
        root.add_child("d")
        return root

    def test_children_by_name_last_wins(self) -> None:
        """Test duplicate names map to the last child in first-seen order."""
        root = Node()
        first = root.add_child("x")
        other = root.add_child("y")
        last = root.add_child("x")

        mapping = root.children_by_name()

        assert list(mapping) == ["x", "y"]
        assert mapping["x"] is last
        assert mapping["y"] is other
        assert first in root.children

    def test_iter_nodes_is_document_order(self, tree: Node) -> None:
        """Test pre-order traversal."""
        names = [node.name for node in tree.iter_nodes()]

        assert names == [None, "a", "b", "c", "b", "d"]

    def test_find_and_find_all(self, tree: Node) -> None:
        """Test descendant lookups by name."""
        assert tree.find("b").value == "1"
        assert [node.value for node in tree.find_all("b")] == ["1", "2"]
        assert tree.find("missing") is None

    def test_to_dict(self) -> None:
        """Test dictionary conversion of a subtree."""
        node = Node("x", "hello")
        node.set_attribute("a", "1")

        assert node.to_dict() == {
            "name": "x",
            "value": "hello",
            "attributes": {"a": "1"},
            "children": [],
        }
