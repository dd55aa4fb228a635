"""Tests for scene data models and path strings."""

from conftest import make_node

from scenefind.data.models import Attachment, Node, SceneInfo, node_path


class TestNodePath:
    """Tests for canonical path strings."""

    def test_nested_path(self, world: Node):
        """Root -> child -> grandchild gives a slash-delimited path."""
        weapon = world.children[0].children[0]
        assert node_path(weapon) == "/World/Player/Weapon"
        assert weapon.full_path == "/World/Player/Weapon"

    def test_root_path(self, world: Node):
        assert node_path(world) == "/World"

    def test_anonymous_node_uses_empty_segment(self):
        child = make_node(None)
        make_node("Root", children=[child])
        assert node_path(child) == "/Root/"

    def test_cyclic_parent_chain_terminates(self):
        a = Node(name="A")
        b = Node(name="B", parent=a)
        a.parent = b
        assert node_path(b) == "/A/B"


class TestNode:
    """Tests for Node behaviour."""

    def test_add_child_sets_parent(self):
        parent = Node(name="Parent")
        child = parent.add_child(Node(name="Child"))
        assert child.parent is parent
        assert parent.children == [child]
        assert parent.parent is None

    def test_identity_semantics(self):
        """Structurally identical nodes are distinct."""
        a = Node(name="Same")
        b = Node(name="Same")
        assert a != b
        assert len({a, b}) == 2

    def test_type_names_skip_degraded_attachments(self):
        node = Node(
            name="N",
            attachments=[Attachment("Transform"), None, Attachment(None), Attachment("")],
        )
        assert node.type_names == ["Transform"]


class TestSceneInfo:
    """Tests for SceneInfo helpers."""

    def test_node_count_and_component_names(self, world: Node):
        scene = SceneInfo(file_path="x.json", file_type="JSON", name="S", roots=[world])
        assert scene.node_count() == 5
        assert scene.component_names() == [
            "BoxCollider", "MeshRenderer", "Rigidbody", "Transform",
        ]

    def test_iter_nodes_counts_duplicate_roots_once(self, world: Node):
        scene = SceneInfo(file_path="x.json", file_type="JSON", name="S", roots=[world, world])
        assert scene.node_count() == 5
