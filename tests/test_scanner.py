"""
Unit tests for FileScannerImpl.
Verifies file discovery, regular-file filtering, error handling, and edge cases.
"""
import os
import sys
import pytest
from pathlib import Path
from linkdedup.core.scanner import FileScannerImpl
from linkdedup.core.errors import InvalidRootError
from linkdedup.core.models import IssueKind


class TestFileScannerImpl:
    """Test file scanning with filters and error handling."""

    def test_scans_all_files_recursively(self, test_files, temp_dir):
        """Scanner must find every regular file, including those in subdirectories."""
        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        paths = {f.path for f in files}
        assert paths == {str(p) for p in test_files.values()}

    def test_records_exact_sizes(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir)).scan()
        sizes = {f.path: f.size for f in files}
        assert sizes[str(test_files["dup1_a"])] == 1024
        assert sizes[str(test_files["unique2"])] == 2500

    def test_includes_zero_byte_files(self, temp_dir):
        """Empty files are regular files too and must be cataloged."""
        (temp_dir / "empty1").write_bytes(b"")
        (temp_dir / "empty2").write_bytes(b"")

        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert len(files) == 2
        assert all(f.size == 0 for f in files)

    def test_discovery_order_is_stable(self, test_files, temp_dir):
        """Two scans of an unchanged tree must return files in the same order."""
        first = [f.path for f in FileScannerImpl(root_dir=str(temp_dir)).scan()]
        second = [f.path for f in FileScannerImpl(root_dir=str(temp_dir)).scan()]
        assert first == second
        # Files of a directory come sorted, before its subdirectories' files
        assert first[0] == str(test_files["dup1_a"])
        assert first[-1] == str(test_files["sub_dup"])

    def test_size_filters_are_inclusive(self, test_files, temp_dir):
        scanner = FileScannerImpl(root_dir=str(temp_dir), min_size=1500, max_size=2048)
        sizes = sorted(f.size for f in scanner.scan())
        assert sizes == [1500, 2048, 2048]

    def test_excluded_dirs_are_pruned(self, test_files, temp_dir):
        scanner = FileScannerImpl(root_dir=str(temp_dir), excluded_dirs=[str(temp_dir / "subdir")])
        paths = {f.path for f in scanner.scan()}
        assert str(test_files["sub_dup"]) not in paths
        assert str(test_files["dup1_a"]) in paths


class TestNonRegularFiles:
    """Only regular files may be cataloged."""

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_skips_symbolic_links(self, temp_dir):
        target = temp_dir / "real.txt"
        target.write_bytes(b"content")
        (temp_dir / "link.txt").symlink_to(target)

        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert [f.path for f in files] == [str(target)]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_does_not_follow_symlinked_directories(self, temp_dir):
        real_dir = temp_dir / "real"
        real_dir.mkdir()
        (real_dir / "file.txt").write_bytes(b"content")
        (temp_dir / "alias").symlink_to(real_dir, target_is_directory=True)

        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert [f.path for f in files] == [str(real_dir / "file.txt")]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
    def test_skips_fifos(self, temp_dir):
        os.mkfifo(temp_dir / "pipe")
        (temp_dir / "file.txt").write_bytes(b"content")

        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert [Path(f.path).name for f in files] == ["file.txt"]


class TestInvalidRoot:
    """The root must be an existing directory."""

    def test_missing_root_raises(self, temp_dir):
        with pytest.raises(InvalidRootError, match="does not exist"):
            FileScannerImpl(root_dir=str(temp_dir / "missing")).scan()

    def test_file_root_raises(self, temp_dir):
        file_path = temp_dir / "file.txt"
        file_path.write_bytes(b"x")
        with pytest.raises(InvalidRootError, match="Not a directory"):
            FileScannerImpl(root_dir=str(file_path)).scan()

    def test_invalid_root_is_checked_before_progress(self, temp_dir):
        calls = []
        with pytest.raises(InvalidRootError):
            FileScannerImpl(root_dir=str(temp_dir / "missing")).scan(
                progress_callback=lambda *a: calls.append(a)
            )
        assert calls == []


class TestPartialFailureTolerance:
    """One bad entry must not prevent cataloging the rest of the tree."""

    def test_unstatable_entry_is_skipped_and_reported(self, temp_dir, monkeypatch):
        good = temp_dir / "good.txt"
        bad = temp_dir / "bad.txt"
        good.write_bytes(b"good")
        bad.write_bytes(b"bad")

        original_lstat = Path.lstat

        def flaky_lstat(self):
            if self.name == "bad.txt":
                raise PermissionError(13, "Permission denied", str(self))
            return original_lstat(self)

        monkeypatch.setattr(Path, "lstat", flaky_lstat)

        issues = []
        files = FileScannerImpl(root_dir=str(temp_dir)).scan(issue_callback=issues.append)

        assert [f.path for f in files] == [str(good)]
        assert len(issues) == 1
        assert issues[0].kind == IssueKind.TRAVERSAL_ENTRY
        assert issues[0].path == str(bad)

    def test_unreadable_directory_is_reported(self, temp_dir, monkeypatch):
        (temp_dir / "ok.txt").write_bytes(b"ok")
        locked = temp_dir / "locked"
        locked.mkdir()
        (locked / "hidden.txt").write_bytes(b"hidden")

        original_scandir = os.scandir

        def flaky_scandir(path="."):
            if os.fspath(path) == str(locked):
                raise PermissionError(13, "Permission denied", str(locked))
            return original_scandir(path)

        monkeypatch.setattr(os, "scandir", flaky_scandir)

        issues = []
        files = FileScannerImpl(root_dir=str(temp_dir)).scan(issue_callback=issues.append)

        assert [f.path for f in files] == [str(temp_dir / "ok.txt")]
        assert [i.kind for i in issues] == [IssueKind.TRAVERSAL_ENTRY]
        assert issues[0].path == str(locked)

    def test_progress_reported_at_end(self, test_files, temp_dir):
        calls = []
        FileScannerImpl(root_dir=str(temp_dir)).scan(progress_callback=lambda *a: calls.append(a))
        assert calls == [("scanning", len(test_files), None)]
