"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the deduplication engine.

Only InvalidRootError escapes to the caller. The others are raised by a single
primitive (hashing, stat) and caught right where the affected file is processed,
turning into a tagged Issue instead.
"""


class DeduplicationError(RuntimeError):
    """Base class for all engine errors."""


class InvalidRootError(DeduplicationError):
    """The root path does not exist or is not a directory."""

    def __init__(self, root_dir: str, reason: str):
        self.root_dir = root_dir
        self.reason = reason
        super().__init__(f"{reason}: {root_dir}")


class UnreadableFileError(DeduplicationError):
    """A file's content could not be read for hashing."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


class MetadataUnavailableError(DeduplicationError):
    """A file's modification time could not be read."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to stat {path}: {cause}")


class DeleteFailedError(DeduplicationError):
    """A superseded file could not be removed; it is still in place."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to delete {path}: {cause}")


class LinkFailedError(DeduplicationError):
    """
    A superseded file was removed but the hardlink replacing it could not be
    created. The path no longer exists.
    """

    def __init__(self, path: str, target: str, cause: Exception):
        self.path = path
        self.target = target
        self.cause = cause
        super().__init__(f"Removed {path} but failed to link it to {target}: {cause}")
