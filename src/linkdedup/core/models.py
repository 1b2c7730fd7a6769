"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning, duplicate detection and resolution.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
from enum import Enum


# =============================
# Enums
# =============================

class Action(Enum):
    """
    What to do with the superseded members of every duplicate group.
    """
    LIST = "list"
    DELETE = "delete"
    HARDLINK = "hardlink"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            Action.LIST: "List only",
            Action.DELETE: "Delete duplicates",
            Action.HARDLINK: "Replace duplicates with hardlinks",
        }
        return mapping.get(self, self.value)

    @property
    def is_destructive(self) -> bool:
        return self is not Action.LIST

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SIZE = "Size grouping"
    CONTENT = "Content Hash"


class Outcome(Enum):
    """Per-file result of applying an Action to a superseded file."""
    LISTED = "listed"
    DELETED = "deleted"
    TRASHED = "trashed"
    LINKED = "linked"
    DELETE_FAILED = "delete-failed"  # file is still in place
    LINK_FAILED = "link-failed"      # file was removed, no link replaced it

    @property
    def is_failure(self) -> bool:
        return self in (Outcome.DELETE_FAILED, Outcome.LINK_FAILED)

    @property
    def label(self) -> str:
        mapping = {
            Outcome.LISTED: "DUP",
            Outcome.DELETED: "DEL",
            Outcome.TRASHED: "TRASH",
            Outcome.LINKED: "LINK",
            Outcome.DELETE_FAILED: "FAIL",
            Outcome.LINK_FAILED: "LOST",
        }
        return mapping[self]


class IssueKind(Enum):
    """Tagged per-file failure kinds. None of them aborts the run."""
    TRAVERSAL_ENTRY = "traversal-entry"
    UNREADABLE_FILE = "unreadable-file"
    METADATA_UNAVAILABLE = "metadata-unavailable"
    DELETE_FAILED = "delete-failed"
    LINK_FAILED = "link-failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class File:
    """
    A regular file discovered during traversal.
    Immutable: created once by the scanner and never changed afterwards.
    """
    path: str
    size: int  # in bytes

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A group of files sharing the same size and content digest.
    Files are kept in discovery order; the selector re-sorts them by timestamp.
    """
    size: int
    files: List[File]
    digest: Optional[str] = None  # None while the group is only a size bucket

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}, digest={self.digest}>"


@dataclass
class CanonicalChoice:
    """
    The file kept for a duplicate group and the ones it supersedes.
    `superseded` is ordered by ascending modification time, ties in discovery order.
    """
    group: DuplicateGroup
    kept: File
    superseded: List[File]
    kept_mtime: Optional[float] = None  # seconds since epoch, None if unreadable

    def __post_init__(self):
        if self.kept not in self.group.files:
            raise ValueError("Kept file must be a member of the group")
        if len(self.superseded) != len(self.group.files) - 1 or self.kept in self.superseded:
            raise ValueError("Superseded files must be every group member except the kept one")


@dataclass
class Issue:
    """A per-file problem reported during a run."""
    kind: IssueKind
    path: str
    message: str

    def __str__(self):
        return f"[{self.kind.value}] {self.path}: {self.message}"


@dataclass
class ActionResult:
    file: File
    outcome: Outcome
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.outcome.is_failure


@dataclass
class GroupReport:
    """Everything that happened to one duplicate group."""
    choice: CanonicalChoice
    action: Action
    results: List[ActionResult] = field(default_factory=list)

    @property
    def group(self) -> DuplicateGroup:
        return self.choice.group

    @property
    def has_errors(self) -> bool:
        return any(not r.ok for r in self.results)

    @property
    def reclaimed_bytes(self) -> int:
        """Bytes freed by this group (or that would be freed, in list mode)."""
        return sum(
            r.file.size for r in self.results
            if r.outcome in (Outcome.LISTED, Outcome.DELETED, Outcome.TRASHED, Outcome.LINKED)
        )


class DeduplicationStats:
    """
    Statistics collected during a run: per-stage counters, scanned files and issues.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_scanned: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.issues: List[Issue] = []

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def add_issue(self, issue: Issue) -> None:
        self.issues.append(issue)

    def print_summary(self) -> str:
        labels = {
            "size": "📁 Size Groups",
            "content": "🔍 Content Hash Groups",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files Scanned: {self.files_scanned}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.issues:
            lines.append(f"Issues reported: {len(self.issues)}")

        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Interface-agnostic — used by the CLI and by library callers.
"""
from linkdedup.utils.convert_utils import ConvertUtils


@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run with validation."""
    root_dir: str
    action: Action = Action.LIST
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None
    excluded_dirs: List[str] = field(default_factory=list)
    use_trash: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.use_trash and self.action != Action.DELETE:
            raise ValueError("Trash can only be used with the delete action")

    @staticmethod
    def from_human_readable(
            root_dir: str,
            action: Action = Action.LIST,
            min_size_str: str = "0",
            max_size_str: Optional[str] = None,
            excluded_dirs: Optional[List[str]] = None,
            use_trash: bool = False,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)
        max_size = ConvertUtils.human_to_bytes(max_size_str) if max_size_str else None

        return DeduplicationParams(
            root_dir=root_dir,
            action=action,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
            excluded_dirs=excluded_dirs or [],
            use_trash=use_trash,
        )
