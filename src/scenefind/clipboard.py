"""Clipboard and text-file sinks for search results."""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, Union

from .data.models import Node, node_path
from .errors import ExportError

logger = logging.getLogger(__name__)


def format_results(nodes: Iterable[Node]) -> str:
    """Join the path of every node with newlines."""
    return "\n".join(node_path(node) for node in nodes)


def copy_to_clipboard(content: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, message)."""
    commands = [
        ['xclip', '-selection', 'clipboard'],  # Linux
        ['pbcopy'],                              # macOS
        ['clip'],                                # Windows
    ]

    for cmd in commands:
        try:
            subprocess.run(cmd, input=content.encode(), check=True, capture_output=True)
            return True, "Search results copied to clipboard"
        except (FileNotFoundError, subprocess.CalledProcessError):
            continue

    # Fallback: save to temp file
    with tempfile.NamedTemporaryFile(
        mode='w', delete=False, suffix='.txt', encoding='utf-8'
    ) as f:
        f.write(content)
    logger.warning(f"No clipboard command available, results saved to {f.name}")
    return False, f"Saved to {f.name}"


def export_results(nodes: Iterable[Node], path: Union[str, Path]) -> Path:
    """Write one path per line to a UTF-8 text file.

    Args:
        nodes: Matched nodes, in the order to write them
        path: Destination file

    Returns:
        The path that was written

    Raises:
        ExportError: If the destination cannot be written
    """
    destination = Path(path).expanduser()
    lines = [node_path(node) + "\n" for node in nodes]
    try:
        with open(destination, "w", encoding="utf-8", newline="\n") as f:
            f.writelines(lines)
    except OSError as e:
        logger.error(f"Export to {destination} failed: {e}")
        raise ExportError(destination, f"An error occurred:\n{e}") from e

    logger.info(f"Exported {len(lines)} path(s) to {destination}")
    return destination
