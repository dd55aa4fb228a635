#!/usr/bin/env python
"""Create sample scene files for testing scenefind."""

import json
import random


def build_scene(roots: int = 20, depth: int = 4, fanout: int = 3, seed: int = 0) -> dict:
    """Build a random scene document with a handful of well-known components."""
    rng = random.Random(seed)
    components = ["MeshRenderer", "Rigidbody", "BoxCollider", "AudioSource", "Light", "Camera"]

    def make_node(name: str, level: int) -> dict:
        node = {
            "name": name,
            "active": rng.random() > 0.15,
            "components": ["Transform"] + rng.sample(components, rng.randint(0, 2)),
            "children": [],
        }
        if level < depth:
            for i in range(rng.randint(0, fanout)):
                node["children"].append(make_node(f"{name}_{i}", level + 1))
        return node

    return {
        "name": "SampleScene",
        "roots": [make_node(f"Root{i}", 1) for i in range(roots)],
    }


def write_json(scene: dict, output_path: str = "test_scene.json") -> None:
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(scene, f, indent=2)
    print(f"Created {output_path}")


def write_hdf5(scene: dict, output_path: str = "test_scene.h5") -> None:
    """Write the scene as nested HDF5 groups (one group per node)."""
    import h5py

    def write_node(parent, node: dict) -> None:
        group = parent.create_group(node["name"])
        group.attrs["active"] = node["active"]
        group.attrs.create("components", node["components"], dtype=h5py.string_dtype())
        for child in node["children"]:
            write_node(group, child)

    with h5py.File(output_path, "w") as f:
        f.attrs["name"] = scene["name"]
        for root in scene["roots"]:
            write_node(f, root)
    print(f"Created {output_path}")


if __name__ == "__main__":
    scene = build_scene()
    write_json(scene)
    write_hdf5(scene)
