"""Scene document readers for JSON and HDF5 scene hierarchies.

This module builds the node forest searched by scenefind:
- JSON scene files (``{"name": ..., "roots": [...]}`` or a bare node list)
- HDF5 files where every group is a node and subgroups are its children
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

import numpy as np

from .models import Attachment, Node, SceneInfo

logger = logging.getLogger(__name__)

# Defer heavy imports until needed
_h5py = None


def _get_h5py():
    """Lazy import h5py."""
    global _h5py
    if _h5py is None:
        import h5py
        _h5py = h5py
    return _h5py


class SceneReader:
    """Reader for scene hierarchy documents."""

    JSON_EXTENSIONS = {".json"}
    HDF5_EXTENSIONS = {".h5", ".hdf5", ".he5"}
    SUPPORTED_EXTENSIONS = JSON_EXTENSIONS | HDF5_EXTENSIONS

    @classmethod
    def can_read(cls, file_path: Union[str, Path]) -> bool:
        """Check if the file extension is supported."""
        return Path(file_path).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @classmethod
    def read_file(cls, file_path: Union[str, Path]) -> SceneInfo:
        """Read a scene document into a forest of nodes.

        Args:
            file_path: Path to the scene file

        Returns:
            SceneInfo holding the root nodes in document order

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file type is unsupported or the content is malformed
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not cls.can_read(path):
            raise ValueError(f"Unsupported file type: {path.suffix}")

        try:
            if path.suffix.lower() in cls.JSON_EXTENSIONS:
                scene = cls._read_json(path)
            else:
                scene = cls._read_h5py(path)
        except (OSError, ValueError, TypeError, KeyError) as e:
            raise ValueError(f"Failed to read file {file_path}: {e}") from e

        logger.info(
            f"Loaded scene '{scene.name}' from {path} "
            f"({len(scene.roots)} root(s), {scene.node_count()} node(s))"
        )
        return scene

    # =========================================================================
    # JSON scenes
    # =========================================================================

    @classmethod
    def _read_json(cls, file_path: Path) -> SceneInfo:
        with open(file_path, "r", encoding="utf-8") as f:
            document = json.load(f)

        if isinstance(document, list):
            name, raw_roots = file_path.stem, document
        elif isinstance(document, dict):
            name = document.get("name") or file_path.stem
            raw_roots = document.get("roots", [])
        else:
            raise ValueError("scene document must be an object or a list of nodes")

        if not isinstance(raw_roots, list):
            raise ValueError("'roots' must be a list of nodes")

        return SceneInfo(
            file_path=str(file_path),
            file_type="JSON",
            name=name,
            roots=[cls.node_from_dict(raw) for raw in raw_roots],
        )

    @classmethod
    def node_from_dict(cls, raw: dict) -> Node:
        """Build a node and its whole subtree from a JSON mapping."""
        node = cls._node_from_json(raw)

        # Iterative so very deep documents do not exhaust the recursion limit
        stack = [(node, raw)]
        while stack:
            owner, raw_owner = stack.pop()
            for raw_child in raw_owner.get("children", []):
                child = owner.add_child(cls._node_from_json(raw_child))
                stack.append((child, raw_child))
        return node

    @classmethod
    def _node_from_json(cls, raw: Any) -> Node:
        """Build a single node (without children) from a JSON mapping."""
        if not isinstance(raw, dict):
            raise ValueError(f"node entries must be objects, got {type(raw).__name__}")

        name = raw.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError(f"node names must be strings, got {name!r}")
        active = raw.get("active", True)
        if not isinstance(active, bool):
            raise ValueError(f"'active' must be true or false, got {active!r}")

        return Node(
            name=name,
            active=active,
            attachments=[cls._attachment_from_json(c) for c in raw.get("components", [])],
        )

    @staticmethod
    def _attachment_from_json(raw: Any) -> Attachment | None:
        """Convert a component entry; missing components stay ``None``."""
        if raw is None:
            return None
        if isinstance(raw, str):
            return Attachment(type_name=raw)
        if isinstance(raw, dict):
            type_name = raw.get("type")
            if not isinstance(type_name, str):
                logger.warning(f"Skipping component with non-string type: {raw!r}")
                return None
            properties = {k: v for k, v in raw.items() if k != "type"}
            return Attachment(type_name=type_name, properties=properties)
        raise ValueError(f"unsupported component entry: {raw!r}")

    # =========================================================================
    # HDF5 scenes
    # =========================================================================

    @classmethod
    def _read_h5py(cls, file_path: Path) -> SceneInfo:
        h5py = _get_h5py()

        with h5py.File(file_path, "r") as f:
            name = _decode(f.attrs.get("name", file_path.stem))
            roots = []
            # Hard links can reach one group from several places, or form a cycle
            seen = set()
            for key in f.keys():
                item = f[key]
                if isinstance(item, h5py.Group) and item.id not in seen:
                    seen.add(item.id)
                    roots.append(cls._read_h5_group(item, key, seen))

        return SceneInfo(
            file_path=str(file_path),
            file_type="HDF5",
            name=name,
            roots=roots,
        )

    @classmethod
    def _read_h5_group(cls, group, name: str, seen: set) -> Node:
        """Read an HDF5 group and its subgroups as a node subtree.

        Each HDF5 object becomes at most one node; links to a group that
        was already read are skipped.
        """
        h5py = _get_h5py()

        node = cls._node_from_h5_attrs(group, name)
        stack = [(node, group)]
        while stack:
            owner, h5_group = stack.pop()
            for key in h5_group.keys():
                item = h5_group[key]
                # Datasets carry no hierarchy
                if not isinstance(item, h5py.Group):
                    continue
                if item.id in seen:
                    logger.warning(f"Skipping repeated link to group {item.name} at {h5_group.name}/{key}")
                    continue
                seen.add(item.id)
                child = owner.add_child(cls._node_from_h5_attrs(item, key))
                stack.append((child, item))
        return node

    @staticmethod
    def _node_from_h5_attrs(group, name: str) -> Node:
        active = group.attrs.get("active", True)
        components = group.attrs.get("components", [])
        return Node(
            name=name,
            active=bool(np.asarray(active).item()),
            attachments=[Attachment(type_name=n) for n in _string_list(components)],
        )


def _decode(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _string_list(value: Any) -> List[str]:
    """Normalise an HDF5 string attribute (scalar or array) to a list."""
    return [_decode(v) for v in np.atleast_1d(np.asarray(value, dtype=object)).tolist()]
