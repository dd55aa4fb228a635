"""Tree population and formatting for scenefind.

This module handles:
- Populating Textual Tree widgets from scene node hierarchies
- Formatting tree node labels with Rich markup colors
- Locating and revealing the tree node of a search match
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection

from .config import ICON_ACTIVE, ICON_INACTIVE, ICON_MATCH, Colors
from .data.models import Node, SceneInfo

if TYPE_CHECKING:
    from textual.widgets._tree import TreeNode


# =============================================================================
# Tree Population
# =============================================================================

def populate_tree(tree_node: TreeNode, scene: SceneInfo) -> None:
    """Populate a Textual tree from the scene forest.

    Args:
        tree_node: The Textual TreeNode standing for the scene itself
        scene: The loaded scene

    Note:
        Built level by level, without recursion, so deep hierarchies are
        safe. A node reachable twice is only shown once.
    """
    tree_node.set_label(format_scene_label(scene))
    tree_node.data = None

    seen = set()
    queue = [(tree_node, root) for root in scene.roots]
    while queue:
        next_queue = []
        for parent, node in queue:
            if id(node) in seen:
                continue
            seen.add(id(node))
            child = parent.add(format_label(node), data=node, allow_expand=bool(node.children))
            next_queue.extend((child, grandchild) for grandchild in node.children)
        queue = next_queue


# =============================================================================
# Label Formatting
# =============================================================================

def format_scene_label(scene: SceneInfo) -> str:
    """Format the scene root label: "name (n roots)"."""
    return (
        f"[bold {Colors.scene()}]{_escape_rich_markup(scene.name)}[/] "
        f"[{Colors.muted()}]({len(scene.roots)} roots)[/]"
    )


def format_label(node: Node, matched: bool = False) -> str:
    """Format a tree node label with Rich markup colors.

    Label format: "<icon> name  [Comp1, Comp2]"
    - active nodes use the foreground color, inactive ones are grayed out
    - matched nodes are highlighted with the match color and icon
    """
    name = _escape_rich_markup(node.name or "")
    if matched:
        icon, color = ICON_MATCH, Colors.match()
        name = f"[bold {color}]{name}[/]"
    elif node.active:
        icon, color = ICON_ACTIVE, Colors.active()
        name = f"[{color}]{name}[/]"
    else:
        icon, color = ICON_INACTIVE, Colors.inactive()
        name = f"[italic {color}]{name}[/]"

    parts = [f"[{color}]{icon}[/]", name]
    if node.type_names:
        components = _escape_rich_markup(", ".join(node.type_names))
        parts.append(f"[{Colors.component()}]\\[{components}][/]")
    return " ".join(parts)


def refresh_labels(tree_node: TreeNode, matched: Collection[Node] = ()) -> None:
    """Recompute labels below ``tree_node`` (after a search or theme change)."""
    matched_ids = {id(node) for node in matched}
    for child in iter_tree_nodes(tree_node):
        if isinstance(child.data, Node):
            child.set_label(format_label(child.data, id(child.data) in matched_ids))


def _escape_rich_markup(text: str) -> str:
    """Escape Rich markup characters in text."""
    return text.replace('[', '\\[').replace(']', '\\]')


# =============================================================================
# Utility Functions
# =============================================================================

def iter_tree_nodes(tree_node: TreeNode):
    """Iterate over tree nodes below (and including) ``tree_node``."""
    stack = [tree_node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_tree_node(tree_node: TreeNode, node: Node) -> TreeNode | None:
    """Find the tree node holding a given scene node.

    Args:
        tree_node: Starting tree node to search from
        node: Scene node (matched by identity)

    Returns:
        The matching TreeNode, or None if not found
    """
    for candidate in iter_tree_nodes(tree_node):
        if candidate.data is node:
            return candidate
    return None


def reveal(tree_node: TreeNode) -> None:
    """Expand every ancestor so ``tree_node`` becomes visible."""
    parent = tree_node.parent
    while parent is not None:
        parent.expand()
        parent = parent.parent
