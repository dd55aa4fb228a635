"""Data models for representing scene hierarchies."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Attachment:
    """A component attached to a node, identified by its type name."""

    type_name: Optional[str]
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class Node:
    """Represents one entity in the scene hierarchy.

    Nodes compare and hash by identity: two structurally identical nodes
    are still distinct entities.
    """

    name: Optional[str]
    active: bool = True
    attachments: List[Optional[Attachment]] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False)

    def add_child(self, child: "Node") -> "Node":
        """Add a child node and return it."""
        child.parent = self
        self.children.append(child)
        return child

    @property
    def type_names(self) -> List[str]:
        """Type names of all well-formed attachments."""
        return [
            att.type_name for att in self.attachments
            if att is not None and att.type_name
        ]

    @property
    def full_path(self) -> str:
        """Slash-delimited path from the forest root to this node."""
        return node_path(self)


def node_path(node: Node) -> str:
    """Build the canonical path of a node, e.g. ``/World/Player/Weapon``.

    Anonymous nodes contribute an empty segment. The parent chain is walked
    with a guard so a malformed (cyclic) chain still terminates.
    """
    parts = []
    seen = set()
    current: Optional[Node] = node
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(current.name or "")
        current = current.parent
    return "/" + "/".join(reversed(parts))


@dataclass
class SceneInfo:
    """Information about an opened scene document."""

    file_path: str
    file_type: str
    name: str
    roots: List[Node] = field(default_factory=list)

    def iter_nodes(self):
        """Iterate over every node in the scene (depth-first, pre-order)."""
        stack = list(reversed(self.roots))
        seen = set()
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    def node_count(self) -> int:
        """Total number of nodes in the scene."""
        return sum(1 for _ in self.iter_nodes())

    def component_names(self) -> List[str]:
        """Sorted, distinct component type names used in the scene."""
        names = set()
        for node in self.iter_nodes():
            names.update(node.type_names)
        return sorted(names)
