"""Detail panel rendering for scenefind.

Renders node information with:
- Header with node name, path and activity
- Component list (with matched components highlighted)
- Children summary
"""

from textual.containers import VerticalScroll
from textual.widgets import Static

from .config import ICON_ACTIVE, ICON_INACTIVE, Colors
from .data.models import Node, SceneInfo
from .utils.search import SearchParameters, type_name_matches


def render_details(
    container: VerticalScroll,
    node: Node,
    parameters: SearchParameters | None = None,
) -> None:
    """Render node details into the container."""
    container.remove_children()
    container.mount(Static(format_node_details(node, parameters)))


def render_scene_summary(container: VerticalScroll, scene: SceneInfo) -> None:
    """Render the scene overview shown before any node is selected."""
    container.remove_children()
    names = scene.component_names()
    lines = [
        f"[bold {Colors.scene()}]{_escape(scene.name)}[/]",
        "─" * 50,
        _field("File", scene.file_path),
        _field("Format", scene.file_type),
        _field("Roots", str(len(scene.roots))),
        _field("Nodes", str(scene.node_count())),
        "",
        f"[bold]Components in scene[/bold] [{Colors.muted()}]({len(names)})[/]",
    ]
    lines.extend(f"  [{Colors.component()}]{_escape(name)}[/]" for name in names)
    container.mount(Static("\n".join(lines)))


def format_node_details(node: Node, parameters: SearchParameters | None = None) -> str:
    """Format node information as Rich markup."""
    icon = ICON_ACTIVE if node.active else ICON_INACTIVE
    state = "active" if node.active else "inactive"
    in_hierarchy = "active" if _active_in_hierarchy(node) else "inactive"
    lines = [
        f"{icon} [bold]{_escape(node.name or '')}[/bold]",
        "─" * 50,
        _field("Path", node.full_path),
        _field("State", f"{state} (in hierarchy: {in_hierarchy})"),
        _field("Children", str(len(node.children))),
        "",
        "[bold]Components[/bold]",
    ]

    if not node.attachments:
        lines.append(f"  [{Colors.muted()}](none)[/]")

    for attachment in node.attachments:
        if attachment is None or not attachment.type_name:
            lines.append(f"  [{Colors.error()}](missing component)[/]")
            continue
        color = Colors.component()
        if parameters and type_name_matches(
            attachment.type_name, parameters.target_names, parameters.case_sensitive
        ):
            color = Colors.match()
        lines.append(f"  [{color}]{_escape(attachment.type_name)}[/]")
        for key, value in attachment.properties.items():
            lines.append(f"    [{Colors.muted()}]{_escape(str(key))}:[/] {_escape(str(value))}")

    return "\n".join(lines)


def _active_in_hierarchy(node: Node) -> bool:
    current = node
    seen = set()
    while current is not None and id(current) not in seen:
        if not current.active:
            return False
        seen.add(id(current))
        current = current.parent
    return True


def _field(label: str, value: str) -> str:
    return f"[{Colors.muted()}]{label}:[/] {_escape(value)}"


def _escape(text: str) -> str:
    return text.replace('[', '\\[').replace(']', '\\]')
