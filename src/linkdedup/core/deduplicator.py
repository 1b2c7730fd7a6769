"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the two-stage detection pipeline: size → full content digest.
"""
import time
from typing import List, Tuple, Optional
from linkdedup.core.models import File, DuplicateGroup, DeduplicationStats
from linkdedup.core.grouper import FileGrouperImpl
from linkdedup.core.interfaces import Deduplicator, ProgressCallback, IssueCallback
from linkdedup.core.stages import SizeStageImpl, ContentHashStage


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs the size and content stages in sequence and collects statistics.
    """
    def __init__(self, grouper: FileGrouperImpl = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None,
        issue_callback: Optional[IssueCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main detection pipeline.
        Args:
            files: List of scanned files
            progress_callback: Reports progress per stage.
            issue_callback: Receives an Issue for every file that could not be hashed.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]
        """
        stats = DeduplicationStats()
        stats.files_scanned = len(files)
        total_start_time = time.time()

        start_time = time.time()
        candidates = SizeStageImpl(self.grouper).process(files, progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, "size", time.time() - start_time, candidates)

        start_time = time.time()
        duplicates = ContentHashStage(self.grouper).process(
            candidates,
            progress_callback=progress_callback,
            issue_callback=issue_callback
        )
        DeduplicatorImpl._update_stats(stats, "content", time.time() - start_time, duplicates)

        # Largest groups first; path order makes the listing reproducible
        duplicates.sort(key=lambda g: (-g.size, g.files[0].path))

        stats.total_time = time.time() - total_start_time
        return duplicates, stats

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: str,
        duration: float,
        groups: List[DuplicateGroup]
    ):
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=sum(len(g.files) for g in groups),
            duration=duration
        )
