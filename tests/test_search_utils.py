"""Tests for the match predicate and the hierarchy traversal."""

import sys

import pytest
from conftest import make_node

from scenefind.data.models import Node
from scenefind.utils.search import (
    SearchParameters,
    matches,
    parse_target_names,
    traverse,
    type_name_matches,
)


def names(nodes):
    return [node.name for node in nodes]


class TestParseTargetNames:
    """Tests for comma-separated input parsing."""

    def test_split_and_trim(self):
        assert parse_target_names(" Rigidbody , BoxCollider,Light ") == (
            "Rigidbody", "BoxCollider", "Light",
        )

    def test_empty_pieces_dropped(self):
        assert parse_target_names("Rigidbody,, ,Light,") == ("Rigidbody", "Light")

    def test_whitespace_only(self):
        assert parse_target_names("   ") == ()

    def test_case_and_duplicates_preserved(self):
        assert parse_target_names("rigidBody,rigidBody") == ("rigidBody", "rigidBody")

    def test_from_text_never_raises(self):
        params = SearchParameters.from_text("   ", case_sensitive=True, include_inactive=False)
        assert params.target_names == ()
        assert params.case_sensitive is True
        assert params.include_inactive is False


class TestMatches:
    """Tests for the match predicate."""

    def test_case_insensitive_match(self):
        node = make_node("Box", "Rigidbody")
        assert matches(node, ["rigidbody"], case_sensitive=False)

    def test_case_sensitive_no_match(self):
        node = make_node("Box", "Rigidbody")
        assert not matches(node, ["rigidbody"], case_sensitive=True)
        assert matches(node, ["Rigidbody"], case_sensitive=True)

    def test_any_target_name(self):
        node = make_node("Box", "Transform", "BoxCollider")
        assert matches(node, ["Light", "BoxCollider"], case_sensitive=True)

    def test_no_attachments(self):
        assert not matches(make_node("Empty"), ["Transform"], case_sensitive=False)

    def test_no_target_names(self):
        assert not matches(make_node("Box", "Transform"), [], case_sensitive=False)

    def test_missing_attachments_skipped(self):
        node = make_node("Broken", None, "Light")
        assert matches(node, ["Light"], case_sensitive=True)
        assert not matches(make_node("Broken", None), ["Light"], case_sensitive=True)

    def test_exact_equality_not_substring(self):
        node = make_node("Box", "BoxCollider")
        assert not matches(node, ["Box"], case_sensitive=False)
        assert not matches(node, ["BoxCollider2D"], case_sensitive=False)

    def test_idempotent(self):
        node = make_node("Box", "Rigidbody")
        first = matches(node, ["RIGIDBODY"], False)
        second = matches(node, ["RIGIDBODY"], False)
        assert first == second is True

    def test_type_name_matches(self):
        assert type_name_matches("Light", ["LIGHT"], case_sensitive=False)
        assert not type_name_matches("Light", ["LIGHT"], case_sensitive=True)


class TestTraverse:
    """Tests for depth-first traversal."""

    def test_preorder_discovery_order(self):
        tree = make_node("A", "X", children=[
            make_node("B", "X", children=[make_node("C", "X")]),
            make_node("D", "X"),
        ])
        params = SearchParameters(("X",))
        assert names(traverse([tree], params)) == ["A", "B", "C", "D"]

    def test_include_inactive_visits_everything(self):
        c = make_node("C", "Light")
        b = make_node("B", "Light", active=False, children=[c])
        a = make_node("A", "Transform", children=[b])
        visited = []
        found = list(traverse(
            [a], SearchParameters(("Light",), include_inactive=True), on_visit=visited.append,
        ))
        assert names(found) == ["B", "C"]
        assert names(visited) == ["A", "B", "C"]

    def test_exclude_inactive_prunes_subtree(self):
        c = make_node("C", "Light")
        b = make_node("B", "Light", active=False, children=[c])
        a = make_node("A", "Transform", children=[b])
        visited_ids = set()
        visited = []
        found = list(traverse(
            [a],
            SearchParameters(("Light",), include_inactive=False),
            visited=visited_ids,
            on_visit=visited.append,
        ))
        assert found == []
        assert names(visited) == ["A"]
        assert visited_ids == {id(a)}

    def test_inactive_root_is_still_processed(self):
        root = make_node("Root", "Light", active=False, children=[make_node("Child", "Light")])
        found = list(traverse([root], SearchParameters(("Light",), include_inactive=False)))
        assert names(found) == ["Root", "Child"]

    def test_duplicate_roots_visited_once(self, world: Node):
        found = list(traverse([world, world], SearchParameters(("Rigidbody",))))
        assert names(found) == ["Player", "Enemy", "Turret"]

    def test_aliased_child_visited_once(self):
        shared = make_node("Shared", "Light")
        a = make_node("A", children=[shared])
        b = Node(name="B", children=[shared])
        found = list(traverse([a, b], SearchParameters(("Light",))))
        assert found == [shared]

    def test_cycle_terminates(self):
        a = make_node("A", "Light")
        b = a.add_child(make_node("B", "Light"))
        b.children.append(a)
        found = list(traverse([a], SearchParameters(("Light",))))
        assert found == [a, b]

    def test_shared_visited_set_across_calls(self, world: Node):
        visited = set()
        params = SearchParameters(("Transform",))
        first = list(traverse([world], params, visited=visited))
        second = list(traverse([world], params, visited=visited))
        assert len(first) == 5
        assert second == []

    def test_lazy(self, world: Node):
        gen = traverse([world], SearchParameters(("Transform",)))
        assert next(gen) is world

    def test_deep_hierarchy_does_not_recurse(self):
        root = node = make_node("N0", "Light")
        depth = sys.getrecursionlimit() + 100
        for i in range(1, depth):
            node = node.add_child(make_node(f"N{i}"))
        found = list(traverse([root], SearchParameters(("Light",))))
        assert found == [root]

    @pytest.mark.parametrize("include_inactive", [True, False])
    def test_nodes_not_mutated(self, world: Node, include_inactive: bool):
        before = [(n.name, n.active, len(n.children)) for n in [world] + world.children]
        list(traverse([world], SearchParameters(("Rigidbody",), include_inactive=include_inactive)))
        after = [(n.name, n.active, len(n.children)) for n in [world] + world.children]
        assert before == after
