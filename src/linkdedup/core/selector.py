"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/selector.py
Picks the canonical (kept) file of a duplicate group.

Policy: the oldest file by modification time is assumed to be the original.
Equal timestamps keep discovery order, so the first-seen file wins.
A file whose timestamp cannot be read sorts after every readable one.
"""
import os
import math
import logging
from typing import List, Optional, Tuple

from linkdedup.core.models import DuplicateGroup, CanonicalChoice, File, Issue, IssueKind
from linkdedup.core.errors import MetadataUnavailableError
from linkdedup.core.interfaces import CanonicalSelector, IssueCallback

logger = logging.getLogger(__name__)


def read_mtime_ns(path: str) -> int:
    """Modification time of `path` in nanoseconds."""
    try:
        return os.stat(path).st_mtime_ns
    except OSError as e:
        raise MetadataUnavailableError(path, e) from e


class CanonicalSelectorImpl(CanonicalSelector):
    """
    Sorts group members by ascending modification time and keeps the first.
    Does not modify the group.
    """

    def select(
        self,
        group: DuplicateGroup,
        issue_callback: Optional[IssueCallback] = None
    ) -> CanonicalChoice:
        if not group.is_duplicate():
            raise ValueError(f"Cannot select canonical file from {group!r}")

        keyed: List[Tuple[float, File]] = [
            (self._timestamp(file, issue_callback), file) for file in group.files
        ]
        # sorted() is stable: equal timestamps keep discovery order
        ordered = sorted(keyed, key=lambda item: item[0])

        kept_ts, kept = ordered[0]
        superseded = [file for _, file in ordered[1:]]
        kept_mtime = kept_ts / 1e9 if math.isfinite(kept_ts) else None

        logger.debug(f"Keeping {kept.path}, superseding {len(superseded)} file(s)")
        return CanonicalChoice(group=group, kept=kept, superseded=superseded, kept_mtime=kept_mtime)

    @staticmethod
    def _timestamp(file: File, issue_callback: Optional[IssueCallback]) -> float:
        try:
            return read_mtime_ns(file.path)
        except MetadataUnavailableError as e:
            logger.warning(f"Cannot read modification time of {file.path}: {e.cause}")
            if issue_callback:
                issue_callback(Issue(
                    kind=IssueKind.METADATA_UNAVAILABLE,
                    path=file.path,
                    message=str(e.cause),
                ))
            return math.inf
