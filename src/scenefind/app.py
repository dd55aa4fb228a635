"""scenefind - Terminal component search for scene hierarchies.

A TUI application for locating nodes by component type with:
- Tree navigation of the scene hierarchy
- Comma-separated component search (case-sensitive / inactive toggles)
- Cancellable search with progress bar
- Copy or export of result paths
- Gruvbox dark/light themes
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.timer import Timer
from textual.widgets import (
    Button,
    Checkbox,
    Footer,
    Input,
    OptionList,
    ProgressBar,
    Static,
    Tree,
)

from .clipboard import copy_to_clipboard, export_results, format_results
from .config import CSS_PATH as APP_CSS_PATH
from .config import DEFAULT_EXPORT_FILENAME, SEARCH_TICK_INTERVAL, THEMES, Colors
from .data import Node, SceneInfo, SceneReader
from .details import render_details, render_scene_summary
from .errors import ExportError, InvalidInputError
from .search import SearchParameters, SearchSession, SearchTool, format_search_status
from .tree import find_tree_node, format_scene_label, populate_tree, refresh_labels, reveal

if TYPE_CHECKING:
    from textual.widgets._tree import TreeNode

logger = logging.getLogger(__name__)


# Debounce delay for tree navigation (seconds)
NAV_DEBOUNCE_DELAY = 0.05


class SceneFindApp(App[None]):
    """Component search tool over a scene hierarchy.

    Attributes:
        file_path: Path to the currently loaded scene
        scene: Loaded scene information
        tool: Owner of the active search session
        session: Session whose results are on screen
    """

    ENABLE_COMMAND_PALETTE = False
    CSS_PATH = APP_CSS_PATH
    TITLE = "Component Search"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("/", "focus_search", "Search"),
        Binding("escape", "cancel_search", "Cancel"),
        Binding("y", "copy_results", "Copy"),
        Binding("e", "export_results", "Export"),
        Binding("T", "cycle_theme", "Theme"),
    ]

    def __init__(self, file_path: str | None = None, names: str = "") -> None:
        """Initialize the application.

        Args:
            file_path: Optional path to a scene file to load on startup
            names: Initial content of the component names field
        """
        super().__init__()
        self.file_path = file_path
        self.initial_names = names
        self.scene: SceneInfo | None = None
        self.tool = SearchTool()
        self.session: SearchSession | None = None
        self.result_nodes: list[Node] = []
        self._search_timer: Timer | None = None
        self._nav_timer: Timer | None = None

    # =========================================================================
    # Composition
    # =========================================================================

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        with Horizontal(id="main"):
            with Vertical(id="tree-container"):
                yield Tree("Scene", id="tree")
            with Vertical(id="side"):
                yield Static("[bold]Search Parameters[/bold]", classes="section-title")
                yield Input(
                    value=self.initial_names,
                    placeholder="Component names (comma separated)",
                    id="names",
                )
                with Horizontal(classes="row"):
                    yield Checkbox("Case Sensitive", False, id="case-sensitive")
                    yield Checkbox("Include Inactive", True, id="include-inactive")
                with Horizontal(classes="row"):
                    yield Button("Search", id="search", variant="primary")
                    yield Button("Cancel", id="cancel", disabled=True)
                yield ProgressBar(total=100, show_eta=False, id="progress")
                yield Static("Found 0 node(s):", id="results-header")
                yield OptionList(id="results")
                with Horizontal(classes="row"):
                    yield Input(value=DEFAULT_EXPORT_FILENAME, id="export-path")
                    yield Button("Copy", id="copy", disabled=True)
                    yield Button("Export", id="export", disabled=True)
                with VerticalScroll(id="detail-container"):
                    yield Static(self._welcome_message(), id="welcome")
        yield Static("Ready", id="status-bar")
        yield Footer()

    def _welcome_message(self) -> str:
        return (
            "[bold yellow]Component Search[/bold yellow]\n\n"
            "[dim]Type component names (comma separated) and press Enter.\n"
            "Esc cancels a running search, y copies results, e exports them.\n"
            "Select a result to reveal it in the tree.[/dim]"
        )

    # =========================================================================
    # Lifecycle Events
    # =========================================================================

    def on_mount(self) -> None:
        """Register themes and load the scene if one was given."""
        for theme in THEMES.values():
            self.register_theme(theme)
        self.theme = Colors.get_theme().name
        self.query_one("#names", Input).focus()
        if self.file_path:
            self.run_worker(self._load_file_async(self.file_path), name="scene_loader")

    async def _load_file_async(self, path: str) -> None:
        """Load and display a scene file.

        Args:
            path: Path to the file to load
        """
        filename = Path(path).name
        try:
            self._status(f"Loading {filename}...")
            loop = asyncio.get_running_loop()
            self.scene = await loop.run_in_executor(None, SceneReader.read_file, path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {path}: {e}")
            self._status(f"Error: {e}")
            return

        tree = self._get_tree()
        tree.clear()
        populate_tree(tree.root, self.scene)
        tree.root.expand()
        render_scene_summary(self._get_detail_container(), self.scene)
        self._status(f"{filename} loaded")

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def on_button_pressed(self, event: Button.Pressed) -> None:
        handlers = {
            "search": self.action_search,
            "cancel": self.action_cancel_search,
            "copy": self.action_copy_results,
            "export": self.action_export_results,
        }
        handler = handlers.get(event.button.id)
        if handler is not None:
            handler()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "names":
            self.action_search()
        elif event.input.id == "export-path":
            self.action_export_results()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Reveal the selected result in the tree."""
        if not 0 <= event.option_index < len(self.result_nodes):
            return
        node = self.result_nodes[event.option_index]
        tree_node = find_tree_node(self._get_tree().root, node)
        if tree_node is not None:
            self._select_tree_node(tree_node)
        self._show_details(node)

    def on_tree_node_highlighted(self, event: Tree.NodeHighlighted) -> None:
        """Show details of the highlighted node (debounced)."""
        node = event.node.data
        if not isinstance(node, Node):
            return
        if self._nav_timer is not None:
            self._nav_timer.stop()
        self._nav_timer = self.set_timer(NAV_DEBOUNCE_DELAY, lambda: self._show_details(node))

    # =========================================================================
    # Search Actions
    # =========================================================================

    def action_focus_search(self) -> None:
        self.query_one("#names", Input).focus()

    def action_search(self) -> None:
        """Start a new search, replacing any running one."""
        if self.scene is None:
            self._status("No scene loaded")
            return

        raw = self.query_one("#names", Input).value
        if not raw.strip():
            self._status("Input Error: Please enter at least one component name.")
            return

        parameters = SearchParameters.from_text(
            raw,
            case_sensitive=self.query_one("#case-sensitive", Checkbox).value,
            include_inactive=self.query_one("#include-inactive", Checkbox).value,
        )
        try:
            session = self.tool.start(self.scene.roots, parameters, on_progress=self._on_progress)
        except InvalidInputError as e:
            self._status(f"Input Error: {e}")
            return

        self._stop_search_timer()
        self.session = session
        self._show_results([])
        self.query_one("#progress", ProgressBar).update(progress=0)
        self._set_searching(True)
        self._search_timer = self.set_interval(SEARCH_TICK_INTERVAL, self._advance_search)

    def action_cancel_search(self) -> None:
        """Request cancellation; it takes effect at the next root."""
        if self.tool.active is not None:
            self.tool.cancel()
            self._status("Cancelling...")

    def _advance_search(self) -> None:
        """Timer tick: search one more root subtree."""
        session = self.tool.advance()
        if session is None or not session.is_running:
            self._stop_search_timer()
            self._finish_search()

    def _on_progress(self, fraction: float, status: str) -> None:
        self.query_one("#progress", ProgressBar).update(progress=fraction * 100)
        count = len(self.session.results()) if self.session else 0
        self.query_one("#results-header", Static).update(f"Found {count} node(s):")
        self._status(status)

    def _finish_search(self) -> None:
        if self.session is None:
            return
        self._set_searching(False)
        self._show_results(self.session.results())
        refresh_labels(self._get_tree().root, self.result_nodes)
        self._status(format_search_status(self.session))

    def _stop_search_timer(self) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
            self._search_timer = None

    def _set_searching(self, searching: bool) -> None:
        search_button = self.query_one("#search", Button)
        search_button.disabled = searching
        search_button.label = "Searching..." if searching else "Search"
        self.query_one("#cancel", Button).disabled = not searching

    def _show_results(self, nodes: list[Node]) -> None:
        self.result_nodes = nodes
        results = self.query_one("#results", OptionList)
        results.clear_options()
        results.add_options([Text(node.full_path) for node in nodes])
        self.query_one("#results-header", Static).update(f"Found {len(nodes)} node(s):")
        self.query_one("#copy", Button).disabled = not nodes
        self.query_one("#export", Button).disabled = not nodes

    # =========================================================================
    # Export Actions
    # =========================================================================

    def action_copy_results(self) -> None:
        """Copy result paths to the clipboard."""
        if not self.result_nodes:
            return
        success, msg = copy_to_clipboard(format_results(self.result_nodes))
        self._status(msg if success else f"Clipboard unavailable. {msg}")

    def action_export_results(self) -> None:
        """Write result paths to the file named in the export field."""
        if not self.result_nodes:
            return
        destination = self.query_one("#export-path", Input).value.strip()
        if not destination:
            self._status("Export Failed: no destination given")
            return
        try:
            path = export_results(self.result_nodes, destination)
        except ExportError as e:
            self._status(f"Export Failed: {e}")
            return
        self._status(f"Results exported to: {path}")

    # =========================================================================
    # Theme Actions
    # =========================================================================

    def action_cycle_theme(self) -> None:
        """Toggle between Gruvbox dark and light themes."""
        name = Colors.next_theme()
        Colors.set_theme(name)
        self.theme = name
        if self.scene is not None:
            root = self._get_tree().root
            root.set_label(format_scene_label(self.scene))
            refresh_labels(root, self.result_nodes)
        self._status(f"Theme: {name.replace('-', ' ').title()}")

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _get_tree(self) -> Tree:
        return self.query_one("#tree", Tree)

    def _get_detail_container(self) -> VerticalScroll:
        return self.query_one("#detail-container", VerticalScroll)

    def _show_details(self, node: Node) -> None:
        parameters = self.session.parameters if self.session else None
        render_details(self._get_detail_container(), node, parameters)

    def _status(self, msg: str) -> None:
        """Update the status bar message."""
        self.query_one("#status-bar", Static).update(Text(msg))

    def _select_tree_node(self, tree_node: TreeNode) -> None:
        reveal(tree_node)
        tree = self._get_tree()
        tree.select_node(tree_node)
        tree.scroll_to_node(tree_node)
