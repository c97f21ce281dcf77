"""
Incremental fuzzy matching engine.

Items are pushed as opaque data with one indexed text column, a pattern
is parsed against that column, and the engine is ticked until every
item has been scored or the tick budget runs out. Scoring of each tick
is spread over a bounded thread pool. Reading a snapshot gives the
matched items ordered by score.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from ..core import get_logger
from .fuzzy import FuzzyPattern
from .models import CaseMatching, MatcherConfig

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MatchedItem(Generic[T]):
    """An item of the engine that matched the current pattern."""
    data: T
    index: int
    score: int


@dataclass(frozen=True)
class TickStatus:
    """
    Outcome of one tick.

    Attributes:
        changed: The matched set grew during this tick.
        running: Items remain to be scored.
    """
    changed: bool
    running: bool


class Snapshot(Generic[T]):
    """Immutable view of the matched items at one point in time."""

    def __init__(self, items: List[MatchedItem], item_count: int):
        self._items = items
        self.item_count = item_count

    @property
    def matched_item_count(self) -> int:
        return len(self._items)

    def matched_items(self, start: int = 0, end: Optional[int] = None) -> List[MatchedItem]:
        """Matched items in [start, end), best score first."""
        return self._items[start:end]


class Injector(Generic[T]):
    """Handle used to push items into an engine."""

    def __init__(self, engine: "MatchEngine"):
        self._engine = engine

    def push(self, data: T, column: Callable[[T], str]) -> int:
        return self._engine.push(data, column)


class MatchEngine(Generic[T]):
    """
    Fuzzy matcher over a growing set of items.

    Not tied to a document: every item pushed shares the same pattern,
    so scores are comparable across the whole corpus.
    """

    def __init__(self, config: MatcherConfig = None, case_matching: CaseMatching = None):
        """
        Initialize an empty engine.

        Args:
            config: Matcher settings (batch size, pool size, normalization).
            case_matching: Overrides config.fulltext_case.
        """
        self.config = config or MatcherConfig()
        self.case_matching = case_matching or self.config.fulltext_case

        self._lock = threading.Lock()
        self._items: List[Tuple[T, str]] = []
        self._pattern = FuzzyPattern.parse("", self.case_matching, self.config.normalize)
        self._scored = 0
        self._matches: List[MatchedItem] = []
        self._snapshot: Snapshot = Snapshot([], 0)
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "MatchEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def injector(self) -> Injector:
        return Injector(self)

    @property
    def item_count(self) -> int:
        with self._lock:
            return len(self._items)

    def push(self, data: T, column: Callable[[T], str]) -> int:
        """
        Add an item; column extracts its indexed text.

        Returns:
            The item index.
        """
        text = column(data)
        with self._lock:
            self._items.append((data, text))
            return len(self._items) - 1

    def reparse(self, pattern: str) -> None:
        """Replace the pattern; every item will be scored again."""
        with self._lock:
            self._pattern = FuzzyPattern.parse(pattern, self.case_matching, self.config.normalize)
            self._scored = 0
            self._matches = []
            self._snapshot = Snapshot([], len(self._items))

    def tick(self) -> TickStatus:
        """Score the next batch of pending items."""
        with self._lock:
            pattern = self._pattern
            start = self._scored
            stop = min(len(self._items), start + self.config.tick_batch_size * self.config.worker_threads)
            pending = self._items[start:stop]

        if not pending:
            return TickStatus(changed=False, running=False)

        found = self._score_batch(pattern, pending, start)

        with self._lock:
            # A reparse during scoring makes this batch stale.
            if pattern is not self._pattern or start != self._scored:
                return TickStatus(changed=False, running=True)

            self._scored = stop
            if found:
                self._matches.extend(found)
                self._matches.sort(key=lambda m: (-m.score, m.index))
            self._snapshot = Snapshot(list(self._matches), len(self._items))
            running = self._scored < len(self._items)

        return TickStatus(changed=bool(found), running=running)

    def run(self, max_ticks: int = None) -> bool:
        """
        Tick until every item is scored or the tick budget is spent.

        Args:
            max_ticks: Budget, defaults to config.max_ticks.

        Returns:
            True if the engine converged within the budget.
        """
        max_ticks = max_ticks or self.config.max_ticks

        for _ in range(max_ticks):
            if not self.tick().running:
                return True

        converged = self.pending_count == 0
        if not converged:
            logger.warning(
                f"Matching stopped after {max_ticks} ticks with {self.pending_count} items unscored"
            )
        return converged

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._items) - self._scored

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _score_batch(
        self,
        pattern: FuzzyPattern,
        pending: List[Tuple[T, str]],
        offset: int
    ) -> List[MatchedItem]:
        workers = self.config.worker_threads
        size = self.config.tick_batch_size

        chunks = [
            (offset + i, pending[i:i + size])
            for i in range(0, len(pending), size)
        ]

        if workers == 1 or len(chunks) == 1:
            results = [self._score_chunk(pattern, first, chunk) for first, chunk in chunks]
        else:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=workers,
                    thread_name_prefix="papr-match"
                )
            results = list(self._executor.map(
                lambda job: self._score_chunk(pattern, *job), chunks
            ))

        return [item for chunk in results for item in chunk]

    @staticmethod
    def _score_chunk(
        pattern: FuzzyPattern,
        first_index: int,
        chunk: List[Tuple[T, str]]
    ) -> List[MatchedItem]:
        found = []
        for offset, (data, text) in enumerate(chunk):
            score = pattern.score(text)
            if score is not None:
                found.append(MatchedItem(data=data, index=first_index + offset, score=score))
        return found
