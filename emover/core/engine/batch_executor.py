"""
Batch executor for emover.

Runs the file transformer over every candidate on a shared thread pool,
folds per-file results into totals and, when asked, commits cleaned files to
disk. Files are independent: workers share no mutable state and totals are
combined with an associative merge after the pool has finished.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from emover.core.engine.transformer import FileChange, FileTransformer
from emover.core.scanner.enumerator import EnumerationResult
from emover.core.utils.constants import DEFAULT_ENCODING, DEFAULT_MAX_WORKERS, TOOL_NAME
from emover.core.utils.util_methods import get_system_info


@dataclass(frozen=True)
class BatchTotals:
    """Partial sums over processed files; ``merge`` is associative and commutative."""
    files_changed: int = 0
    symbols_removed: int = 0
    files_failed: int = 0

    def merge(self, other: "BatchTotals") -> "BatchTotals":
        return BatchTotals(
            files_changed=self.files_changed + other.files_changed,
            symbols_removed=self.symbols_removed + other.symbols_removed,
            files_failed=self.files_failed + other.files_failed,
        )

    @classmethod
    def fold(cls, parts: Iterable["BatchTotals"]) -> "BatchTotals":
        return reduce(cls.merge, parts, cls())


@dataclass(frozen=True)
class CommitOutcome:
    """Result of writing one file during the commit phase."""
    path: Path
    written: bool
    removed_count: int = 0
    error: Optional[str] = None

    def to_totals(self) -> BatchTotals:
        if self.written:
            return BatchTotals(files_changed=1, symbols_removed=self.removed_count)
        if self.error is not None:
            return BatchTotals(files_failed=1)
        return BatchTotals()


@dataclass(frozen=True)
class DetectionResult:
    """Change set found by the detection pass, in candidate order."""
    changes: List[FileChange] = field(default_factory=list)
    totals: BatchTotals = field(default_factory=BatchTotals)


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counters for the final report."""
    files_scanned: int
    files_ignored: int
    files_modified: int
    symbols_removed: int
    files_failed: int = 0
    dry_run: bool = False


class BatchExecutor:
    """
    Fans the transformer out over a fixed-size thread pool.

    The commit phase re-reads and re-transforms every file instead of
    writing the text cached at detection time, so a file edited between
    detection and confirmation is cleaned from its current contents.

    Args:
        transformer: Shared transformer (and through it, the classifier)
        max_workers: Thread pool size
        logger: Logger for batch events, defaults to the module logger
    """

    def __init__(self, transformer: FileTransformer, max_workers: int = DEFAULT_MAX_WORKERS,
                 logger: Optional[logging.Logger] = None):
        self.transformer = transformer
        self.max_workers = max_workers
        self.logger = logger or logging.getLogger(__name__)

        self.logger.debug(
            "BATCH_EXECUTOR_INITIALIZED",
            extra={"max_workers": max_workers, "cpu_count": get_system_info()["cpu_count"]}
        )

    def _pool(self) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix=TOOL_NAME)

    def detect(self, candidates: Sequence[Path]) -> DetectionResult:
        """Transform every candidate and collect the non-empty changes."""
        start_time = time.perf_counter()

        with self._pool() as pool:
            results = list(pool.map(self.transformer.transform, candidates))

        changes = [change for change in results if change is not None]
        totals = BatchTotals.fold(
            BatchTotals(files_changed=1, symbols_removed=change.removed_count)
            for change in changes
        )

        self.logger.info(
            "DETECTION_COMPLETE",
            extra={
                "files": len(candidates),
                "changed": totals.files_changed,
                "symbols": totals.symbols_removed,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 1),
            }
        )
        return DetectionResult(changes=changes, totals=totals)

    def commit_file(self, path: Path) -> CommitOutcome:
        """Re-read, re-clean and overwrite one file."""
        text = self.transformer.read_text(path)
        if text is None:
            self.logger.warning("COMMIT_READ_FAILED", extra={"path": str(path)})
            return CommitOutcome(path=path, written=False, error="file could not be read as text")

        cleaned, removed = self.transformer.transform_text(text)
        if removed == 0:
            self.logger.info("COMMIT_NOTHING_TO_REMOVE", extra={"path": str(path)})
            return CommitOutcome(path=path, written=False)

        try:
            with open(path, "wb") as f:
                f.write(cleaned.encode(DEFAULT_ENCODING))
        except OSError as e:
            self.logger.warning("COMMIT_WRITE_FAILED", extra={"path": str(path), "error": str(e)})
            return CommitOutcome(path=path, written=False, error=str(e))

        self.logger.debug("FILE_COMMITTED", extra={"path": str(path), "removed": removed})
        return CommitOutcome(path=path, written=True, removed_count=removed)

    def commit(self, changes: Sequence[FileChange]) -> BatchTotals:
        """Write every change in the approved change set."""
        with self._pool() as pool:
            outcomes = list(pool.map(self.commit_file, [change.path for change in changes]))

        totals = BatchTotals.fold(outcome.to_totals() for outcome in outcomes)
        self.logger.info(
            "COMMIT_COMPLETE",
            extra={
                "modified": totals.files_changed,
                "symbols": totals.symbols_removed,
                "failed": totals.files_failed,
            }
        )
        return totals

    @staticmethod
    def summarize(enumeration: EnumerationResult, totals: BatchTotals,
                  dry_run: bool = False) -> RunSummary:
        """
        Build the final summary.

        Args:
            enumeration: Result of the path enumeration
            totals: Commit totals, or detection totals for a dry run
            dry_run: Whether ``totals`` describes changes that were not written
        """
        return RunSummary(
            files_scanned=len(enumeration.candidates),
            files_ignored=enumeration.ignored,
            files_modified=totals.files_changed,
            symbols_removed=totals.symbols_removed,
            files_failed=totals.files_failed,
            dry_run=dry_run,
        )
