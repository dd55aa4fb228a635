"""Cancellable, progress-reporting component search sessions."""

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .data.models import Node, node_path
from .errors import InvalidInputError
from .utils.search import SearchParameters, parse_target_names, traverse

__all__ = [
    "SearchParameters",
    "SearchSession",
    "SearchTool",
    "SessionState",
    "format_search_status",
    "parse_target_names",
]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]


class SessionState(Enum):
    """Lifecycle of a search session."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SearchSession:
    """One search over a forest of root nodes.

    The forest is processed one root subtree at a time. Cancellation is
    polled before each root, so a root is never left half-traversed and the
    results always hold complete roots only. Drive the session with
    ``step()`` from a host timer, or block on ``run()`` from a worker thread.

    Attributes:
        on_progress: Observer called with (fraction, status) after each root
    """

    def __init__(self, on_progress: Optional[ProgressCallback] = None) -> None:
        self.on_progress = on_progress
        self.parameters: Optional[SearchParameters] = None
        self._lock = threading.Lock()
        # Serialises whole steps so concurrent drivers never claim the same root
        self._step_lock = threading.RLock()
        self._cancel = threading.Event()
        self._state = SessionState.IDLE
        self._results: List[Node] = []
        self._progress = 0.0
        self._processed = 0
        self._total = 0
        self._visited: set[int] = set()
        self._visited_count = 0
        self._roots: List[Node] = []

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, forest: Sequence[Node], parameters: SearchParameters) -> "SearchSession":
        """Reset the session and begin searching ``forest``.

        Raises:
            InvalidInputError: If no component names remain after parsing
            RuntimeError: If the session is already running
        """
        if not parameters.target_names:
            raise InvalidInputError("Please enter at least one component name.")

        with self._lock:
            if self._state is SessionState.RUNNING:
                raise RuntimeError("Search session is already running")
            self.parameters = parameters
            self._cancel.clear()
            self._results = []
            self._visited = set()
            self._visited_count = 0
            self._roots = [root for root in forest if root is not None]
            self._processed = 0
            self._total = len(self._roots)
            self._progress = 0.0
            self._state = SessionState.RUNNING

        logger.info(
            f"Search started for {', '.join(parameters.target_names)} "
            f"(case_sensitive={parameters.case_sensitive}, "
            f"include_inactive={parameters.include_inactive}, roots={self._total})"
        )
        return self

    def step(self) -> bool:
        """Process the next root subtree.

        Safe to call from several threads; steps run one at a time.

        Returns:
            True while the session is still running
        """
        with self._step_lock:
            return self._step()

    def _step(self) -> bool:
        with self._lock:
            if self._state is not SessionState.RUNNING:
                return False
            if self._cancel.is_set():
                self._finish(SessionState.CANCELLED)
                return False
            if not self._roots:
                self._progress = 1.0
                self._finish(SessionState.COMPLETED)
                root = None
            else:
                root = self._roots[self._processed]

        if root is None:
            self._emit(1.0, "No root objects to search")
            return False

        found = list(traverse([root], self.parameters, visited=self._visited))

        with self._lock:
            self._results.extend(found)
            self._visited_count = len(self._visited)
            self._processed += 1
            self._progress = self._processed / self._total
            processed, total, progress = self._processed, self._total, self._progress
            done = processed == total
            if done:
                self._finish(SessionState.COMPLETED)

        logger.debug(f"Root {processed}/{total} '{root.name}': {len(found)} match(es)")
        self._emit(progress, f"Processing {processed}/{total} root objects...")
        return not done

    def run(self) -> List[Node]:
        """Drive the session to a terminal state and return the results."""
        while self.step():
            pass
        return self.results()

    def cancel(self) -> None:
        """Request cancellation at the next root boundary."""
        if not self._cancel.is_set() and self.is_running:
            logger.info("Search cancellation requested")
        self._cancel.set()

    def _emit(self, progress: float, status: str) -> None:
        if self.on_progress is not None:
            self.on_progress(progress, status)

    def _finish(self, state: SessionState) -> None:
        # Caller holds the lock
        self._state = state
        self._roots = []
        self._visited = set()
        if state is SessionState.COMPLETED:
            logger.info(
                f"Search completed. Found {len(self._results)} node(s) "
                f"with specified component(s)."
            )
        else:
            logger.info(
                f"Search cancelled after {self._processed}/{self._total} root(s). "
                f"Kept {len(self._results)} node(s)."
            )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SessionState.RUNNING

    @property
    def progress(self) -> float:
        """Last emitted completion fraction in [0, 1]."""
        return self._progress

    @property
    def visited_count(self) -> int:
        """Number of nodes processed so far."""
        return self._visited_count

    def results(self) -> List[Node]:
        """Point-in-time copy of the matches found so far."""
        with self._lock:
            return list(self._results)

    def paths(self) -> List[str]:
        """Path strings of the matches found so far."""
        return [node_path(node) for node in self.results()]


class SearchTool:
    """Owns the single active search session of one tool instance."""

    def __init__(self) -> None:
        self._active: Optional[SearchSession] = None

    @property
    def active(self) -> Optional[SearchSession]:
        return self._active

    def start(
        self,
        forest: Sequence[Node],
        parameters: SearchParameters,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SearchSession:
        """Disown any running session and start a new one.

        Returns:
            The new session handle

        Raises:
            InvalidInputError: If no component names remain after parsing;
                the running session is left untouched
        """
        if not parameters.target_names:
            raise InvalidInputError("Please enter at least one component name.")

        previous, self._active = self._active, None
        if previous is not None:
            previous.cancel()
            # Reaches the cancelled state without traversing anything more
            previous.step()

        session = SearchSession(on_progress=on_progress)
        session.start(forest, parameters)
        self._active = session
        return session

    def advance(self) -> Optional[SearchSession]:
        """Step the active session once; release it when it finishes.

        Returns:
            The session that was stepped, or None if nothing is active
        """
        session = self._active
        if session is None:
            return None
        if not session.step():
            self.release(session)
        return session

    def cancel(self) -> None:
        if self._active is not None:
            self._active.cancel()

    def release(self, session: SearchSession) -> None:
        """Forget ``session`` if it is still the active one."""
        if self._active is session:
            self._active = None


def format_search_status(session: Optional[SearchSession]) -> str:
    """Format status message for a search session."""
    if session is None or session.state is SessionState.IDLE:
        return ""

    count = len(session.results())
    if session.state is SessionState.RUNNING:
        return f"Searching... {round(session.progress * 100)}% | {count} found | Esc to cancel"
    if session.state is SessionState.CANCELLED:
        return f"Search cancelled | kept {count} node(s)"
    return f"Found {count} node(s)"
