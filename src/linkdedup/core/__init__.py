"""
Core deduplication engine — scanner, hasher, grouper, selector and pipeline orchestrator.

This package contains the performance-critical foundation of linkdedup:
- FileScannerImpl: recursive directory traversal collecting regular files and sizes
- HasherImpl + XXHashAlgorithmImpl: xxHash64-based full content digests
- FileGrouperImpl: size and digest-based grouping with single-file filtering
- DeduplicatorImpl: two-stage pipeline (size → full content digest)
- CanonicalSelectorImpl: keeps the oldest file of every group
- Models: File, DuplicateGroup, CanonicalChoice and configuration objects

All components are pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .deduplicator import DeduplicatorImpl
from .selector import CanonicalSelectorImpl
from .errors import (
    DeduplicationError, InvalidRootError, UnreadableFileError, MetadataUnavailableError,
    DeleteFailedError, LinkFailedError)
from .models import (
    File, DuplicateGroup, CanonicalChoice, Action, Outcome, ActionResult, GroupReport,
    Issue, IssueKind, DeduplicationParams, DeduplicationStats)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "DeduplicatorImpl",
    "CanonicalSelectorImpl",
    "DeduplicationError",
    "InvalidRootError",
    "UnreadableFileError",
    "MetadataUnavailableError",
    "DeleteFailedError",
    "LinkFailedError",
    "File",
    "DuplicateGroup",
    "CanonicalChoice",
    "Action",
    "Outcome",
    "ActionResult",
    "GroupReport",
    "Issue",
    "IssueKind",
    "DeduplicationParams",
    "DeduplicationStats",
]
