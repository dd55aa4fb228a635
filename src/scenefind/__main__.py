"""Main entry point for scenefind."""

import argparse
import logging
import sys
from pathlib import Path

from .app import SceneFindApp
from .clipboard import export_results
from .config import LOG_FILENAME
from .data import SceneReader
from .errors import ExportError, InvalidInputError
from .search import SearchParameters, SearchSession


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Logs go to a file only: a stream handler would interfere with
    Textual's display.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILENAME, mode='w'),
        ],
        force=True  # Override any existing configuration
    )

    logging.getLogger('scenefind').setLevel(numeric_level)

    # Reduce noise from external libraries
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('textual').setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scenefind",
        description="Find scene nodes by attached component type",
    )
    parser.add_argument("scene", nargs="?", help="Scene file (.json, .h5, .hdf5)")
    parser.add_argument(
        "--find", "-f",
        metavar="NAMES",
        help="Comma-separated component names; runs without the UI",
    )
    parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    parser.add_argument(
        "--exclude-inactive",
        action="store_true",
        help="Do not descend into inactive nodes",
    )
    parser.add_argument("--output", "-o", help="Write result paths to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def run_headless(args: argparse.Namespace) -> int:
    """Run one search synchronously and print or export the paths.

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)

    if not args.scene:
        print("Error: a scene file is required with --find", file=sys.stderr)
        return 2

    try:
        scene = SceneReader.read_file(args.scene)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parameters = SearchParameters.from_text(
        args.find,
        case_sensitive=args.case_sensitive,
        include_inactive=not args.exclude_inactive,
    )
    session = SearchSession(
        on_progress=lambda fraction, status: logger.debug(f"{fraction:.0%} {status}")
    )
    try:
        results = session.start(scene.roots, parameters).run()
    except InvalidInputError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        return 2

    if args.output:
        try:
            path = export_results(results, args.output)
        except ExportError as e:
            print(f"Export Failed: {e}", file=sys.stderr)
            return 1
        print(f"Exported {len(results)} path(s) to {path}")
    else:
        for node_path in session.paths():
            print(node_path)
    return 0


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    setup_logging(log_level=args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Starting scenefind")

    if args.find is not None:
        sys.exit(run_headless(args))

    if args.scene and not Path(args.scene).exists():
        print(f"Error: File not found: {args.scene}")
        sys.exit(1)

    app = SceneFindApp(file_path=args.scene)
    app.run()

    logger.info("scenefind exited")


if __name__ == "__main__":
    main()
