"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for business logic — used by the CLI and library callers.
"""
import time
import logging
from typing import List, Optional, Tuple

from linkdedup.core.models import (
    DuplicateGroup, DeduplicationStats, DeduplicationParams, GroupReport
)
from linkdedup.core.scanner import FileScannerImpl
from linkdedup.core.deduplicator import DeduplicatorImpl
from linkdedup.core.selector import CanonicalSelectorImpl
from linkdedup.core.interfaces import ProgressCallback
from linkdedup.services.action_service import ActionExecutorImpl

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire workflow:
    1. Scan the root directory (FileCatalog)
    2. Bucket by size, then split buckets by content digest
    3. Pick the canonical file of every group
    4. Apply the requested action to the superseded files

    Usage:
        params = DeduplicationParams(root_dir="/data", action=Action.HARDLINK)
        reports, stats = DeduplicationCommand().execute(params, progress_callback=printer)

    Every per-file problem ends up in stats.issues; only InvalidRootError is raised.
    """

    def __init__(
        self,
        deduplicator: Optional[DeduplicatorImpl] = None,
        selector: Optional[CanonicalSelectorImpl] = None
    ):
        self._deduplicator = deduplicator or DeduplicatorImpl()
        self._selector = selector or CanonicalSelectorImpl()

    def find(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Detection only: scan and group, no selection and no filesystem changes.

        Raises:
            InvalidRootError: If the root is missing or not a directory
        """
        issues = []
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
            excluded_dirs=params.excluded_dirs
        )

        start_time = time.time()
        files = scanner.scan(progress_callback=progress_callback, issue_callback=issues.append)

        groups, stats = self._deduplicator.find_duplicates(
            files,
            progress_callback=progress_callback,
            issue_callback=issues.append
        )

        stats.issues = issues
        stats.total_time = time.time() - start_time

        logger.debug(f"Found {len(groups)} duplicate groups among {len(files)} files")
        return groups, stats

    def resolve(
            self,
            groups: List[DuplicateGroup],
            params: DeduplicationParams,
            stats: DeduplicationStats
    ) -> List[GroupReport]:
        """
        Pick the kept file of every group and apply params.action to the others.
        Per-file problems are appended to stats.issues.
        """
        executor = ActionExecutorImpl(params.action, use_trash=params.use_trash)
        reports = []
        for group in groups:
            choice = self._selector.select(group, issue_callback=stats.add_issue)
            reports.append(executor.execute(choice, issue_callback=stats.add_issue))
        return reports

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[GroupReport], DeduplicationStats]:
        """
        Run detection and resolution with the given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (group_reports, statistics)

        Raises:
            InvalidRootError: If the root is missing or not a directory
        """
        start_time = time.time()
        groups, stats = self.find(params, progress_callback=progress_callback)
        reports = self.resolve(groups, params, stats)
        stats.total_time = time.time() - start_time
        return reports, stats
