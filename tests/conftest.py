"""
Shared fixtures for deduplication tests.
Creates isolated temporary directories with controlled test files and timestamps.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict

# Fixed base timestamp (2021-01-01) so ordering never depends on the wall clock
BASE_MTIME = 1_609_459_200


def set_mtime(path: Path, offset_seconds: int) -> None:
    """Set both atime and mtime of `path` to BASE_MTIME + offset_seconds."""
    ts = BASE_MTIME + offset_seconds
    os.utime(path, (ts, ts))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def age_file():
    """Returns the helper that pins a file's mtime at BASE_MTIME + offset seconds."""
    return set_mtime


@pytest.fixture
def hello_tree(temp_dir) -> Dict[str, Path]:
    """
    The reference scenario:
    - a.txt: "hello", oldest
    - b.txt: "hello", newer
    - c.txt: "world" (same size, different content)
    """
    files = {
        "a": temp_dir / "a.txt",
        "b": temp_dir / "b.txt",
        "c": temp_dir / "c.txt",
    }
    files["a"].write_bytes(b"hello")
    files["b"].write_bytes(b"hello")
    files["c"].write_bytes(b"world")
    set_mtime(files["a"], 0)
    set_mtime(files["b"], 100)
    set_mtime(files["c"], 50)
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 3 identical 1KB files (one in a subdirectory)
    - 2 identical 2KB files
    - 2 unique files of distinct sizes
    - 1 unique file sharing the 1KB size with different content
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    # Same size as the 1KB duplicates, different content
    files["same_size"] = temp_dir / "same_size.txt"
    files["same_size"].write_bytes(b"Z" * 1024)

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    for offset, key in enumerate(sorted(files)):
        set_mtime(files[key], offset * 10)

    return files
