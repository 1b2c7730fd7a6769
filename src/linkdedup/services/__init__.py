"""File operations and duplicate resolution services."""

from .file_service import FileService
from .action_service import ActionExecutorImpl

__all__ = ["FileService", "ActionExecutorImpl"]
