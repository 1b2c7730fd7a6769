"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Standardized interface for hash functions (e.g., xxHash, BLAKE2, MD5).
- Hasher: Interface for computing the content digest of a file.
- FileScanner: Interface for scanning directories and returning file descriptors.
- FileGrouper: Interface for grouping files by size or digest.
- CanonicalSelector: Picks the file to keep inside a duplicate group.
- ActionExecutor: Applies list/delete/hardlink to the superseded files of a group.
- Deduplicator: Interface for the detection engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable
from linkdedup.core.models import (
    File,
    DuplicateGroup,
    CanonicalChoice,
    GroupReport,
    DeduplicationStats,
    Issue,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]
IssueCallback = Callable[[Issue], None]


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting
    the rest of the deduplication logic.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for computing a file's content digest."""
    def compute_digest(self, file: File) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(
        self,
        progress_callback: Optional[ProgressCallback] = None,
        issue_callback: Optional[IssueCallback] = None
    ) -> List[File]:
        """
        Scan regular files under the configured root directory.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).
            issue_callback: Receives an Issue for every entry that had to be skipped.

        Returns:
            List of files in discovery order.

        Raises:
            InvalidRootError: If the root is missing or not a directory.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content digest.
    """
    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]:
        """Group files by their size in bytes."""
        ...

    def group_by_digest(
        self,
        files: List[File],
        issue_callback: Optional[IssueCallback] = None
    ) -> Dict[str, List[File]]:
        """Group files by their full content digest."""
        ...


class CanonicalSelector(Protocol):
    """Chooses the single file to keep in a duplicate group."""
    def select(
        self,
        group: DuplicateGroup,
        issue_callback: Optional[IssueCallback] = None
    ) -> CanonicalChoice:
        ...


class ActionExecutor(Protocol):
    """Applies the requested action to every superseded file of a choice."""
    def execute(
        self,
        choice: CanonicalChoice,
        issue_callback: Optional[IssueCallback] = None
    ) -> GroupReport:
        ...


class Deduplicator(Protocol):
    """
    Interface for the detection engine.

    Coordinates the size and content stages and collects statistics.
    """
    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None,
        issue_callback: Optional[IssueCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Run the detection pipeline.

        Returns:
            A tuple containing:
                - List of confirmed duplicate groups
                - Statistics collected during processing
        """
        ...
