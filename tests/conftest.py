"""Pytest configuration and fixtures for scenefind tests."""

import json
from pathlib import Path

import pytest

from scenefind.data.models import Attachment, Node


def make_node(name, *components, active=True, children=()):
    """Build a node with the given component type names and children."""
    node = Node(
        name=name,
        active=active,
        attachments=[Attachment(type_name=c) if c is not None else None for c in components],
    )
    for child in children:
        node.add_child(child)
    return node


@pytest.fixture
def world() -> Node:
    """World -> Player -> Weapon, plus an inactive Enemy branch."""
    weapon = make_node("Weapon", "Transform", "MeshRenderer", "BoxCollider")
    player = make_node("Player", "Transform", "Rigidbody", children=[weapon])
    turret = make_node("Turret", "Transform", "Rigidbody")
    enemy = make_node("Enemy", "Transform", "Rigidbody", active=False, children=[turret])
    return make_node("World", "Transform", children=[player, enemy])


@pytest.fixture
def three_roots() -> list[Node]:
    """Three roots; the first and third contain Rigidbody matches."""
    first = make_node("First", "Transform", children=[make_node("Crate", "Rigidbody")])
    second = make_node("Second", "Transform", children=[make_node("Lamp", "Light")])
    third = make_node("Third", "Rigidbody", children=[make_node("Barrel", "Rigidbody")])
    return [first, second, third]


@pytest.fixture
def scene_document() -> dict:
    """A small JSON scene document."""
    return {
        "name": "TestScene",
        "roots": [
            {
                "name": "World",
                "components": ["Transform"],
                "children": [
                    {
                        "name": "Player",
                        "components": ["Transform", {"type": "Rigidbody", "mass": 2.5}],
                        "children": [
                            {"name": "Weapon", "components": ["Transform", "MeshRenderer"]},
                        ],
                    },
                    {
                        "name": "Ghost",
                        "active": False,
                        "components": ["Transform", None, "Rigidbody"],
                    },
                ],
            },
            {"name": "Main Camera", "components": ["Transform", "Camera", "AudioListener"]},
        ],
    }


@pytest.fixture
def scene_file(tmp_path: Path, scene_document: dict) -> Path:
    """The sample scene document written to disk."""
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_document), encoding="utf-8")
    return path
