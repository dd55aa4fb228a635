"""Match predicate and hierarchy traversal for component searches."""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Sequence, Set, Tuple

from scenefind.data.models import Node


def parse_target_names(text: str) -> Tuple[str, ...]:
    """Split comma-separated input into trimmed, non-empty names."""
    return tuple(piece.strip() for piece in text.split(",") if piece.strip())


@dataclass(frozen=True)
class SearchParameters:
    """Immutable parameters of one search."""

    target_names: Tuple[str, ...]
    case_sensitive: bool = False
    include_inactive: bool = True

    @classmethod
    def from_text(
        cls,
        text: str,
        case_sensitive: bool = False,
        include_inactive: bool = True,
    ) -> "SearchParameters":
        """Build parameters from raw comma-separated input.

        Never raises: an empty name list is rejected when a session starts.
        """
        return cls(
            target_names=parse_target_names(text),
            case_sensitive=case_sensitive,
            include_inactive=include_inactive,
        )


def matches(node: Node, target_names: Sequence[str], case_sensitive: bool) -> bool:
    """
    Check whether any attachment of a node has one of the target type names.

    Comparison is ordinal string equality; case-insensitive mode lowercases
    both sides. Missing attachments and empty type names are ignored.

    Args:
        node: The node to test
        target_names: Component type names to look for
        case_sensitive: Whether to match case

    Returns:
        True on the first attachment/name pair that is equal
    """
    return any(
        type_name_matches(type_name, target_names, case_sensitive)
        for type_name in node.type_names
    )


def type_name_matches(type_name: str, target_names: Sequence[str], case_sensitive: bool) -> bool:
    """Check one component type name against the target names."""
    if case_sensitive:
        return any(type_name == name for name in target_names)
    lowered = type_name.lower()
    return any(lowered == name.lower() for name in target_names)


def traverse(
    roots: Iterable[Node],
    parameters: SearchParameters,
    visited: Optional[Set[int]] = None,
    on_visit: Optional[Callable[[Node], None]] = None,
) -> Iterator[Node]:
    """
    Walk a forest depth-first (pre-order) and yield nodes that match.

    Each root is always processed, whatever its own ``active`` flag. Below
    the root, ``include_inactive=False`` prunes every inactive child together
    with its subtree.

    Args:
        roots: Root nodes, searched in order
        parameters: Target names and matching options
        visited: Identities of nodes already processed; share it across calls
            to skip duplicate roots and aliased subtrees
        on_visit: Called once for every processed node

    Yields:
        Matching nodes in discovery order
    """
    if visited is None:
        visited = set()

    for root in roots:
        stack = [root]
        while stack:
            node = stack.pop()
            # id() is stable here: the forest keeps every node alive
            if id(node) in visited:
                continue
            visited.add(id(node))

            if on_visit is not None:
                on_visit(node)

            if matches(node, parameters.target_names, parameters.case_sensitive):
                yield node

            children = node.children
            if not parameters.include_inactive:
                children = [child for child in children if child.active]
            stack.extend(reversed(children))
