#!/usr/bin/env python3
"""
linkdedup CLI — Command line interface for duplicate file detection and resolution.
Lists duplicate groups, deletes duplicates, or replaces them with hardlinks to the
oldest copy. A per-file error is reported and never stops the run.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from linkdedup.core.models import Action, DeduplicationParams, DeduplicationStats, GroupReport, Outcome
from linkdedup.core.errors import InvalidRootError
from linkdedup.commands import DeduplicationCommand
from linkdedup.utils.convert_utils import ConvertUtils
from linkdedup.aliases import ACTION_ALIASES, ACTION_CHOICES, ACTION_HELP_TEXT, EPILOG_TEXT

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with status 1 like every other invalid invocation."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        CLIApplication.error_exit(message)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = _ArgumentParser(
            prog="linkdedup",
            description="linkdedup — find content-identical files and collapse them into one copy",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            type=str,
            help="Root directory to scan for duplicates"
        )
        parser.add_argument(
            "action",
            nargs="?",
            choices=ACTION_CHOICES,
            default=None,
            help=ACTION_HELP_TEXT
        )

        # Flag spellings of the action, e.g. `linkdedup ~/Photos --hardlink`
        action_flags = parser.add_mutually_exclusive_group()
        for name in ACTION_CHOICES:
            action_flags.add_argument(
                f"--{name}",
                dest="action_flag",
                action="store_const",
                const=name,
                help=f"Same as the '{name}' action"
            )

        parser.add_argument(
            "--trash",
            action="store_true",
            help="With 'delete': move duplicates to the system trash instead of deleting them"
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--max-size", "-M",
            default=None,
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )
        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    @staticmethod
    def resolve_action(args: argparse.Namespace) -> Action:
        """Merge the positional action and the --list/--delete/--hardlink flags."""
        if args.action and args.action_flag and args.action != args.action_flag:
            CLIApplication.error_exit(
                f"Conflicting actions: '{args.action}' and '--{args.action_flag}'"
            )
        name = args.action or args.action_flag or "list"
        return ACTION_ALIASES[name]

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        root_path = Path(args.root)
        if not root_path.exists():
            self.error_exit(f"Invalid directory: {args.root} (not found)")
        if not root_path.is_dir():
            self.error_exit(f"Invalid directory: {args.root} (not a directory)")

        if args.trash and self.resolve_action(args) != Action.DELETE:
            self.error_exit("--trash can only be used with the delete action")

        try:
            min_size = ConvertUtils.human_to_bytes(args.min_size)
            if args.max_size is not None:
                max_size = ConvertUtils.human_to_bytes(args.max_size)
                if max_size < min_size:
                    self.error_exit("Maximum size cannot be less than minimum size")
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                root_dir=str(Path(args.root).resolve()),
                action=self.resolve_action(args),
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                excluded_dirs=[str(Path(d.strip()).resolve()) for d in args.excluded_dirs],
                use_trash=args.trash,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        level = logging.WARNING
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        logging.getLogger("linkdedup").setLevel(level)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_deduplication(self, params: DeduplicationParams) -> tuple[List[GroupReport], DeduplicationStats]:
        """Execute the scan → group → select → act workflow."""
        command = DeduplicationCommand()
        if self.verbose:
            print(f"Finding duplicates (action: {params.action.display_name})...")

        try:
            groups, stats = command.find(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except InvalidRootError as e:
            self.error_exit(f"Invalid directory: {e}")

        if self.verbose:
            sys.stderr.write("\n")

        # Counts go out before any file is touched
        if not self.quiet:
            print(f"Found {stats.files_scanned} files")
            if groups:
                print(f"Found {len(groups)} duplicate groups")
            else:
                print("No duplicate groups found.")

        reports = command.resolve(groups, params, stats)

        if self.verbose:
            print("\nDeduplication Statistics:")
            print(stats.print_summary())

        return reports, stats

    def output_results(self, reports: List[GroupReport], stats: DeduplicationStats, action: Action) -> None:
        """Print every group with its kept file and the outcome for each duplicate, then the summary."""
        if not self.quiet:
            for idx, report in enumerate(reports, 1):
                self._print_group(idx, report)

        self._print_summary(reports, stats, action)

    @staticmethod
    def _print_group(idx: int, report: GroupReport) -> None:
        group = report.group
        choice = report.choice
        size_str = ConvertUtils.bytes_to_human(group.size)
        print(f"\n📁 Group {idx} | Size: {size_str} | Files: {group.duplicate_count}")
        print(f"   Digest: {group.digest}")

        modified = (ConvertUtils.timestamp_to_human(choice.kept_mtime)
                    if choice.kept_mtime is not None else "unknown")
        print(f"   [KEEP] {choice.kept.path}")
        print(f"          Modified: {modified}")

        for result in report.results:
            print(f"   [{result.outcome.label}]".ljust(10) + f"{result.file.path}")
            if result.outcome == Outcome.LINK_FAILED:
                print(f"          ❌ Removed but NOT relinked, path is missing: {result.error}")
            elif result.error:
                print(f"          ⚠️  {result.error}")

    @staticmethod
    def _print_summary(reports: List[GroupReport], stats: DeduplicationStats, action: Action) -> None:
        """Printed on every completed run, quiet or not, with or without groups."""
        with_errors = [r for r in reports if r.has_errors]
        resolved = len(reports) - len(with_errors)
        superseded = sum(len(r.results) for r in reports)
        space = ConvertUtils.bytes_to_human(sum(r.reclaimed_bytes for r in reports))

        print()
        print("=" * 60)
        print(f"Summary: {len(reports)} duplicate groups, {superseded} duplicate files "
              f"(action: {action.value})")
        print(f"  Fully resolved groups:   {resolved}")
        print(f"  Groups with errors:      {len(with_errors)}")
        if stats.issues:
            print(f"  Warnings reported:       {len(stats.issues)}")
        if action.is_destructive:
            print(f"Space reclaimed: {space}")
        else:
            print(f"Space reclaimable: {space}")

        lost = [res.file.path for r in with_errors for res in r.results
                if res.outcome == Outcome.LINK_FAILED]
        if lost:
            print(f"❌ {len(lost)} file(s) were removed but could not be relinked:")
            for path in lost:
                print(f"  • {path}")

        # Logging may be raised to ERROR by --quiet, so issues are listed here too
        if stats.issues:
            print(f"⚠️  {len(stats.issues)} file(s) could not be fully processed:")
            for issue in stats.issues:
                print(f"  • {issue}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        self.configure_logging()
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        reports, stats = self.run_deduplication(params)
        self.output_results(reports, stats, params.action)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point. Returns the process exit status."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        return 130
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
