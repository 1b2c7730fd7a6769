"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations used to resolve duplicates: delete, move to trash, replace with hardlink.
Every method either succeeds or raises a typed error naming the state the path was left in.
"""
import os
import errno
import logging
from pathlib import Path
from send2trash import send2trash

from linkdedup.core.errors import DeleteFailedError, LinkFailedError

logger = logging.getLogger(__name__)


class FileService:
    """
    Filesystem operations on superseded files.
    The kept file is only ever used as a link target, never modified.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise DeleteFailedError(file_path, e) from e
        logger.debug(f"Deleted {file_path}")

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise DeleteFailedError(file_path, FileNotFoundError(f"File not found: {path}"))

        try:
            send2trash(str(path))
        except Exception as e:
            # send2trash raises platform-specific error types
            raise DeleteFailedError(file_path, e) from e
        logger.debug(f"Moved to trash {file_path}")

    @staticmethod
    def replace_with_hardlink(kept_path: str, superseded_path: str) -> None:
        """
        Removes `superseded_path` and creates a hardlink at the same path pointing
        to `kept_path`.

        Two non-atomic steps: portable link creation cannot overwrite an existing
        path. If the link fails after the removal, the superseded path is left
        missing and LinkFailedError is raised.

        Raises:
            DeleteFailedError: Removal failed, or the link is known to be impossible
                (kept file gone, different filesystem); the superseded file is untouched
            LinkFailedError: Removal succeeded, link creation failed
        """
        FileService._check_linkable(kept_path, superseded_path)
        FileService.delete_file(superseded_path)
        try:
            os.link(kept_path, superseded_path)
        except OSError as e:
            raise LinkFailedError(superseded_path, kept_path, e) from e
        logger.debug(f"Linked {superseded_path} -> {kept_path}")

    @staticmethod
    def _check_linkable(kept_path: str, superseded_path: str) -> None:
        """Hardlinks need an existing target on the same device as the link."""
        try:
            kept_dev = os.stat(kept_path).st_dev
            superseded_dev = os.stat(superseded_path).st_dev
        except OSError as e:
            raise DeleteFailedError(superseded_path, e) from e
        if kept_dev != superseded_dev:
            raise DeleteFailedError(
                superseded_path,
                OSError(errno.EXDEV, f"{kept_path} is on another device")
            )

    @staticmethod
    def is_same_file(first_path: str, second_path: str) -> bool:
        """True if both paths refer to the same inode (e.g. existing hardlinks)."""
        try:
            return os.path.samefile(first_path, second_path)
        except OSError:
            return False
