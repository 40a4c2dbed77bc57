"""
File transformation: read one file, strip removable characters, report the delta.

The transformer never writes; committing a cleaned file is done by the
batch executor once the change set has been approved.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from emover.core.scanner.classifier import SymbolClassifier
from emover.core.utils.constants import BINARY_MARKER, DEFAULT_ENCODING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileChange:
    """Pending change for one file with at least one removable character."""
    path: Path
    removed_count: int
    cleaned_text: str = field(repr=False, compare=False)


class FileTransformer:
    """Reads files as UTF-8 text and produces their cleaned version."""

    def __init__(self, classifier: SymbolClassifier):
        self.classifier = classifier

    def transform_text(self, text: str) -> Tuple[str, int]:
        """
        Strip removable characters from ``text``.

        Returns:
            Tuple of cleaned text and number of removed characters
            (code points, not bytes)
        """
        cleaned = self.classifier.strip(text)
        return cleaned, len(text) - len(cleaned)

    def read_text(self, path: Path) -> Optional[str]:
        """
        Read ``path`` as text, or None if it is unreadable or binary.

        A file is binary if its raw bytes contain a null byte or if they are
        not valid UTF-8.
        """
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            logger.debug("FILE_UNREADABLE", extra={"path": str(path), "error": str(e)})
            return None

        if BINARY_MARKER in raw:
            logger.debug("FILE_SKIPPED_BINARY", extra={"path": str(path)})
            return None

        try:
            return raw.decode(DEFAULT_ENCODING)
        except UnicodeDecodeError:
            logger.debug("FILE_SKIPPED_UNDECODABLE", extra={"path": str(path)})
            return None

    def transform(self, path: Path) -> Optional[FileChange]:
        """Return the pending change for ``path``, or None if nothing would change."""
        text = self.read_text(path)
        if text is None:
            return None

        cleaned, removed = self.transform_text(text)
        if removed == 0:
            return None

        logger.debug("FILE_CHANGE_DETECTED", extra={"path": str(path), "removed": removed})
        return FileChange(path=path, removed_count=removed, cleaned_text=cleaned)
