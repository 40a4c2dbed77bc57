"""
Path enumeration for emover.

Expands the roots given on the command line into a deduplicated, ordered list
of candidate files. Directory roots are walked top-down with hidden and
infrastructure directories pruned; file roots are taken as given. Anything
that cannot be stat'd or listed is skipped without being reported as an error.
Symlinks are only honored when given as roots.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, List, Optional, Set

from emover.core.utils.constants import ALWAYS_IGNORED_DIRS, HIDDEN_DIR_PREFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnumerationResult:
    """Candidate files plus the number of regular files visited to find them."""
    candidates: List[Path] = field(default_factory=list)
    visited: int = 0

    @property
    def ignored(self) -> int:
        return self.visited - len(self.candidates)


class PathEnumerator:
    """
    Turns roots into candidate files.

    Args:
        exclude_patterns: Literal substrings matched against file names
        respect_ignore_dirs: Prune dot-prefixed directories during traversal
    """

    def __init__(self, exclude_patterns: Iterable[str] = (), respect_ignore_dirs: bool = True):
        self.exclude_patterns: FrozenSet[str] = frozenset(exclude_patterns)
        self.respect_ignore_dirs = respect_ignore_dirs

    def enumerate(self, roots: Iterable[Path]) -> EnumerationResult:
        candidates: List[Path] = []
        seen: Set[Path] = set()
        visited = 0

        for root in roots:
            for path in self._iter_root(Path(root)):
                key = self._resolve(path)
                if key is None or key in seen:
                    continue
                seen.add(key)
                visited += 1

                if self.is_excluded(path):
                    logger.debug("FILE_EXCLUDED", extra={"path": str(path)})
                    continue
                candidates.append(path)

        logger.info(
            "ENUMERATION_COMPLETE",
            extra={"visited": visited, "candidates": len(candidates)}
        )
        return EnumerationResult(candidates=candidates, visited=visited)

    def is_excluded(self, path: Path) -> bool:
        """True if the file name contains any exclude pattern."""
        name = path.name
        return any(pattern in name for pattern in self.exclude_patterns)

    def should_prune(self, dir_name: str) -> bool:
        """True if a directory found during traversal must not be entered."""
        if dir_name in ALWAYS_IGNORED_DIRS:
            return True
        return self.respect_ignore_dirs and dir_name.startswith(HIDDEN_DIR_PREFIX)

    def _iter_root(self, root: Path) -> Iterator[Path]:
        try:
            if root.is_file():
                yield root
                return
            if not root.is_dir():
                logger.debug("ROOT_SKIPPED", extra={"path": str(root)})
                return
        except OSError as e:
            logger.debug("ROOT_UNREADABLE", extra={"path": str(root), "error": str(e)})
            return

        if root.resolve().name in ALWAYS_IGNORED_DIRS:
            logger.debug("ROOT_ALWAYS_IGNORED", extra={"path": str(root)})
            return

        yield from self._walk(root)

    def _walk(self, root: Path) -> Iterator[Path]:
        def on_error(error: OSError) -> None:
            logger.debug("WALK_ERROR", extra={"path": error.filename, "error": str(error)})

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames[:] = sorted(d for d in dirnames if not self.should_prune(d))
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if self._is_regular_file(path):
                    yield path

    @staticmethod
    def _is_regular_file(path: Path) -> bool:
        # Symlinks met during traversal are not followed, even to files
        try:
            return not path.is_symlink() and path.is_file()
        except OSError:
            return False

    @staticmethod
    def _resolve(path: Path) -> Optional[Path]:
        try:
            return path.resolve()
        except (OSError, RuntimeError):
            return None
