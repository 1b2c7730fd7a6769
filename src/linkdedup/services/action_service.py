"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/action_service.py
Applies the requested action to the superseded files of a duplicate group.
A failure on one file is recorded and never stops the remaining files or groups.
"""
import logging
from typing import Optional

from linkdedup.core.models import (
    Action, Outcome, ActionResult, GroupReport, CanonicalChoice, File, Issue, IssueKind
)
from linkdedup.core.errors import DeleteFailedError, LinkFailedError
from linkdedup.core.interfaces import ActionExecutor, IssueCallback
from linkdedup.services.file_service import FileService

logger = logging.getLogger(__name__)


class ActionExecutorImpl(ActionExecutor):
    """
    Executes one Action on every superseded file, in CanonicalChoice order.

    Attributes:
        action: LIST, DELETE or HARDLINK
        use_trash: with DELETE, move files to the system trash instead of unlinking
    """

    def __init__(self, action: Action = Action.LIST, use_trash: bool = False):
        if use_trash and action != Action.DELETE:
            raise ValueError("Trash can only be used with the delete action")
        self.action = action
        self.use_trash = use_trash

    def execute(
        self,
        choice: CanonicalChoice,
        issue_callback: Optional[IssueCallback] = None
    ) -> GroupReport:
        report = GroupReport(choice=choice, action=self.action)
        for file in choice.superseded:
            report.results.append(self._apply(choice.kept, file, issue_callback))
        return report

    def _apply(self, kept: File, file: File, issue_callback: Optional[IssueCallback]) -> ActionResult:
        if self.action == Action.LIST:
            return ActionResult(file=file, outcome=Outcome.LISTED)

        if self.action == Action.DELETE:
            try:
                if self.use_trash:
                    FileService.move_to_trash(file.path)
                    return ActionResult(file=file, outcome=Outcome.TRASHED)
                FileService.delete_file(file.path)
                return ActionResult(file=file, outcome=Outcome.DELETED)
            except DeleteFailedError as e:
                return self._failed(file, Outcome.DELETE_FAILED, IssueKind.DELETE_FAILED, e, issue_callback)

        if self.action == Action.HARDLINK:
            if FileService.is_same_file(kept.path, file.path):
                logger.debug(f"{file.path} is already linked to {kept.path}")
                return ActionResult(file=file, outcome=Outcome.LINKED)
            try:
                FileService.replace_with_hardlink(kept.path, file.path)
                return ActionResult(file=file, outcome=Outcome.LINKED)
            except DeleteFailedError as e:
                return self._failed(file, Outcome.DELETE_FAILED, IssueKind.DELETE_FAILED, e, issue_callback)
            except LinkFailedError as e:
                logger.error(f"{file.path} was removed but could not be linked to {kept.path}; "
                             f"the path is now missing: {e.cause}")
                return self._failed(file, Outcome.LINK_FAILED, IssueKind.LINK_FAILED, e, issue_callback,
                                    already_logged=True)

        raise ValueError(f"Unsupported action: {self.action!r}")

    @staticmethod
    def _failed(
        file: File,
        outcome: Outcome,
        kind: IssueKind,
        error: Exception,
        issue_callback: Optional[IssueCallback],
        already_logged: bool = False
    ) -> ActionResult:
        message = str(getattr(error, "cause", error))
        if not already_logged:
            logger.warning(f"{outcome.value}: {file.path}: {message}")
        if issue_callback:
            issue_callback(Issue(kind=kind, path=file.path, message=message))
        return ActionResult(file=file, outcome=outcome, error=message)
