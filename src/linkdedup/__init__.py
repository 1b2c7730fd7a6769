"""
linkdedup — find content-identical files in a directory tree and collapse them.

Core features:
- Two-stage detection: files are bucketed by size, and only same-size files are hashed (xxHash64)
- The oldest file (by modification time) of every group is kept
- Duplicates can be listed, deleted (optionally to the system trash via send2trash),
  or replaced with hardlinks to the kept file
- Per-file errors are reported without stopping the run
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("linkdedup")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.0"

# Public API: only what users should import directly
from linkdedup.commands import DeduplicationCommand
from linkdedup.core import (
    DeduplicationParams, Action, Outcome, File, DuplicateGroup, CanonicalChoice, GroupReport,
    Issue, IssueKind, InvalidRootError)
from linkdedup.utils.convert_utils import ConvertUtils
from linkdedup.services import ActionExecutorImpl
from linkdedup.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "Action",
    "Outcome",
    "File",
    "DuplicateGroup",
    "CanonicalChoice",
    "GroupReport",
    "Issue",
    "IssueKind",
    "InvalidRootError",
    "ConvertUtils",
    "ActionExecutorImpl",
    "FileService",
    "__version__",
]
