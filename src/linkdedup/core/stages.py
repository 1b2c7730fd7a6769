"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Detection pipeline stages.

STAGES
------
SizeStageImpl     : Buckets files by exact byte size; single-file buckets are dropped
ContentHashStage  : Hashes every member of each bucket and splits it by digest

STAGE CONTRACTS
---------------
Each stage implements a `process()` method that:
  • Accepts the output of the previous stage
  • Returns groups with 2+ members only
  • Reports progress via callback (stage name, processed count, total count)

Files of a size nobody else has are never read, which is what makes the
two-stage design cheap on large trees.
"""

from typing import List, Optional
from linkdedup.core.models import File, DuplicateGroup, Stage
from linkdedup.core.grouper import FileGrouperImpl
from linkdedup.core.interfaces import ProgressCallback, IssueCallback


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[File],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of candidate DuplicateGroups with 2+ files of same size.
        """
        size_groups = self.grouper.group_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=files_list)
            for size, files_list in size_groups.items()
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        return groups


class ContentHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: List[DuplicateGroup],
            progress_callback: Optional[ProgressCallback] = None,
            issue_callback: Optional[IssueCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Split every size bucket by full content digest.
        Returns one DuplicateGroup per digest shared by 2+ files.
        """
        confirmed_duplicates = []
        total_files = sum(len(g.files) for g in groups)
        processed_files = 0

        for group in groups:
            hash_groups = self.grouper.group_by_digest(group.files, issue_callback=issue_callback)
            for digest, files in hash_groups.items():
                confirmed_duplicates.append(DuplicateGroup(size=group.size, files=files, digest=digest))

            processed_files += len(group.files)
            if progress_callback:
                progress_callback(Stage.CONTENT.value, processed_files, total_files)

        return confirmed_duplicates
