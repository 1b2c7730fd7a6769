"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping by size and by content digest.
"""

import logging
from typing import List, Dict, Any, Callable, Optional
from collections import defaultdict

from linkdedup.core.interfaces import FileGrouper, Hasher, IssueCallback
from linkdedup.core.models import File, Issue, IssueKind
from linkdedup.core.errors import UnreadableFileError
from linkdedup.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]:
        """Groups files by their size. Sizes with a single file are dropped."""
        return self._group_by(files, lambda f: f.size)

    def group_by_digest(
        self,
        files: List[File],
        issue_callback: Optional[IssueCallback] = None
    ) -> Dict[str, List[File]]:
        """
        Groups files by full content digest.
        A file that cannot be read is left out; the others are still compared.
        """
        def on_error(file: File, error: UnreadableFileError) -> None:
            logger.warning(f"Excluding unreadable file {file.path}: {error.cause}")
            if issue_callback:
                issue_callback(Issue(
                    kind=IssueKind.UNREADABLE_FILE,
                    path=file.path,
                    message=str(error.cause),
                ))

        return self._group_by(files, self.hasher.compute_digest, on_error=on_error)

    @staticmethod
    def _group_by(
        files: List[File],
        key_func: Callable[[File], Any],
        on_error: Optional[Callable[[File, UnreadableFileError], None]] = None
    ) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a File
            on_error: Called for every file whose key raised UnreadableFileError
        Returns:
            Dict[key, List[File]] with input order kept inside each group
        """
        groups = defaultdict(list)
        skipped_files = 0
        for file in files:
            try:
                key = key_func(file)
            except UnreadableFileError as e:
                skipped_files += 1
                if on_error:
                    on_error(file, e)
                continue
            groups[key].append(file)

        if skipped_files > 0:
            logger.debug(f"Skipped {skipped_files} files due to read errors")

        # Avoid groups with less than 2 files
        return {key: group for key, group in groups.items() if len(group) >= 2}
