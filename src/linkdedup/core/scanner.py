"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements file scanning functionality using os.walk and pathlib.
Features:
- Recursively scans directories in a stable (sorted) order
- Keeps regular files only: symlinks, sockets, FIFOs and devices are skipped
- Skips unreadable entries with a warning instead of aborting the walk
- Applies optional size filters and excluded directories
- Returns a List containing scanned files
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional

from linkdedup.core.models import File, Issue, IssueKind
from linkdedup.core.errors import InvalidRootError
from linkdedup.core.interfaces import FileScanner, ProgressCallback, IssueCallback

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and catalogs every regular file with its size.

    Attributes:
        root_dir: Root directory to scan
        min_size: Minimum file size in bytes (optional, inclusive)
        max_size: Maximum file size in bytes (optional, inclusive)
        excluded_dirs: Directories pruned before descent
    """

    # Progress throttling: update every N files to reduce output overhead
    PROGRESS_INTERVAL = 5000

    def __init__(
        self,
        root_dir: str,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        excluded_dirs: Optional[List[str]] = None
    ):
        self.root_dir = root_dir
        self.min_size = min_size
        self.max_size = max_size
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []

    def validate_root(self) -> Path:
        """Raise InvalidRootError unless the root is an existing directory."""
        root_path = Path(self.root_dir)
        if not root_path.exists():
            logger.debug(f"Root does not exist: {self.root_dir}")
            raise InvalidRootError(self.root_dir, "Directory does not exist")
        if not root_path.is_dir():
            logger.debug(f"Root is not a directory: {self.root_dir}")
            raise InvalidRootError(self.root_dir, "Not a directory")
        return root_path

    def scan(self,
             progress_callback: Optional[ProgressCallback] = None,
             issue_callback: Optional[IssueCallback] = None) -> List[File]:
        """
        Single-pass scanner with throttled progress updates and debug logging.
        Returns the regular files found in the directory tree, in discovery order.
        """
        root_path = self.validate_root()

        logger.debug(f"Scanning directory: {self.root_dir}")
        logger.debug(f"Filters: min_size={self.min_size}, max_size={self.max_size}, "
                     f"excluded_dirs={self.excluded_dirs}")

        found_files = []
        processed_files = 0
        progress_counter = 0
        start_time = time.time()

        def on_walk_error(error: OSError) -> None:
            path = error.filename or self.root_dir
            self._report(issue_callback, IssueKind.TRAVERSAL_ENTRY, str(path), str(error))

        for root, dirs, files in os.walk(str(root_path), onerror=on_walk_error):
            # Sorted traversal keeps discovery order stable between runs
            dirs[:] = sorted(d for d in dirs if self._prefilter_dir(Path(root) / d))

            for filename in sorted(files):
                file_info = self._process_file(Path(root) / filename, issue_callback)
                if file_info:
                    found_files.append(file_info)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= self.PROGRESS_INTERVAL:
                    progress_callback("scanning", processed_files, None)
                    progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback("scanning", processed_files, None)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} regular files.")

        return found_files

    @staticmethod
    def _report(issue_callback: Optional[IssueCallback], kind: IssueKind, path: str, message: str) -> None:
        logger.warning(f"Skipping {path}: {message}")
        if issue_callback:
            issue_callback(Issue(kind=kind, path=path, message=message))

    def _is_excluded_directory(self, path: Path) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(path.resolve(strict=False))
        except (OSError, RuntimeError):
            return False
        for excluded_dir in self.excluded_dirs:
            normalized_excluded = os.path.normpath(excluded_dir)
            if path_str.startswith(normalized_excluded + os.sep) or \
                    path_str == normalized_excluded:
                return True
        return False

    def _prefilter_dir(self, path: Path) -> bool:
        """Pre-filter subdirectories BEFORE os.walk enters them."""
        # os.walk lists symlinked directories in `dirs` but does not follow them
        if path.is_symlink():
            logger.debug(f"Skipping symbolic link to directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        return True

    def _process_file(self, path: Path, issue_callback: Optional[IssueCallback] = None) -> Optional[File]:
        """
        Process an individual directory entry and return a File if it is a regular
        file that passes the size filters.
        """
        try:
            stat_result = path.lstat()
        except OSError as e:
            self._report(issue_callback, IssueKind.TRAVERSAL_ENTRY, str(path), str(e))
            return None

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return None

        size = stat_result.st_size

        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None

        return File(path=str(path), size=size)

    def _size_passes(self, size: int) -> bool:
        """
        Check if file size is within configured limits.
        """
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
