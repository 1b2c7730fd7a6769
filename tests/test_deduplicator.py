"""
Integration tests for DeduplicatorImpl on real files.
Verifies group membership, ordering and statistics of the two-stage pipeline.
"""
from unittest.mock import patch
from linkdedup.core.deduplicator import DeduplicatorImpl
from linkdedup.core.scanner import FileScannerImpl
from linkdedup.core.hasher import HasherImpl


def _scan(root):
    return FileScannerImpl(root_dir=str(root)).scan()


class TestDeduplicatorImpl:

    def test_finds_expected_groups(self, test_files, temp_dir):
        groups, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))

        as_paths = [[f.path for f in g.files] for g in groups]
        assert as_paths == [
            [str(test_files["dup2_a"]), str(test_files["dup2_b"])],
            [str(test_files["dup1_a"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])],
        ]

    def test_group_members_share_size_and_digest(self, test_files, temp_dir):
        groups, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))
        hasher = HasherImpl()

        for group in groups:
            assert len(group.files) >= 2
            assert all(f.size == group.size for f in group.files)
            assert all(hasher.compute_digest(f) == group.digest for f in group.files)

    def test_groups_are_disjoint(self, test_files, temp_dir):
        groups, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))
        seen = [f.path for g in groups for f in g.files]
        assert len(seen) == len(set(seen))

    def test_same_size_different_content_not_grouped(self, test_files, temp_dir):
        groups, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))
        grouped = {f.path for g in groups for f in g.files}
        assert str(test_files["same_size"]) not in grouped

    def test_unique_sizes_are_never_hashed(self, test_files, temp_dir):
        with patch.object(HasherImpl, "compute_digest", autospec=True,
                          side_effect=HasherImpl.compute_digest) as spy:
            DeduplicatorImpl().find_duplicates(_scan(temp_dir))

        hashed = {call.args[1].path for call in spy.call_args_list}
        assert str(test_files["unique1"]) not in hashed
        assert str(test_files["unique2"]) not in hashed
        assert len(hashed) == 6

    def test_zero_byte_files_group_together(self, temp_dir):
        (temp_dir / "e1").write_bytes(b"")
        (temp_dir / "e2").write_bytes(b"")

        groups, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))

        assert len(groups) == 1
        assert groups[0].size == 0

    def test_no_duplicates(self, temp_dir):
        (temp_dir / "one").write_bytes(b"1")
        (temp_dir / "two").write_bytes(b"22")

        groups, stats = DeduplicatorImpl().find_duplicates(_scan(temp_dir))

        assert groups == []
        assert stats.files_scanned == 2

    def test_idempotent_detection(self, test_files, temp_dir):
        first, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))
        second, _ = DeduplicatorImpl().find_duplicates(_scan(temp_dir))
        assert [[f.path for f in g.files] for g in first] == [[f.path for f in g.files] for g in second]

    def test_stats_per_stage(self, test_files, temp_dir):
        _, stats = DeduplicatorImpl().find_duplicates(_scan(temp_dir))

        assert stats.files_scanned == len(test_files)
        assert stats.stage_stats["size"]["groups"] == 2
        assert stats.stage_stats["size"]["files"] == 6
        assert stats.stage_stats["content"]["groups"] == 2
        assert stats.stage_stats["content"]["files"] == 5
        assert "Files Scanned: 8" in stats.print_summary()
