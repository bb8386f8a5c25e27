"""Tests for folder_watcher.naming module"""
import os
import tempfile

import pytest

from folder_watcher.naming import classify, safe_target_path, watched_file
from folder_watcher.outcomes import Classification


class TestClassify:
    """Test suite for classify function"""

    @pytest.mark.parametrize("name", ["", "a", "short", "12345678", "inv-2024"])
    def test_short_names_are_malformed(self, name):
        """Anything under nine characters is malformed"""
        assert classify(name) is Classification.MALFORMED

    @pytest.mark.parametrize("name", ["123456789", "invoice2024", "INV-2024-000123"])
    def test_long_names_are_normal(self, name):
        assert classify(name) is Classification.NORMAL

    @pytest.mark.parametrize("name", ["TEST-FILE", "test-file-001", "Test-File_probe", "TEST-FILEX"])
    def test_marker_prefix_any_case(self, name):
        """The marker prefix matches case-insensitively"""
        assert classify(name) is Classification.TEST_MARKER

    def test_bare_prefix_is_marker(self):
        """The prefix alone counts; one character less is just a short name"""
        assert classify("test-file") is Classification.TEST_MARKER
        assert classify("TEST-FIL") is Classification.MALFORMED

    def test_prefix_must_lead(self):
        assert classify("my-TEST-FILE") is Classification.NORMAL


class TestWatchedFile:
    def test_splits_name_and_extension(self):
        wf = watched_file(os.path.join("in", "invoice2024.pdf"))
        assert wf.name == "invoice2024"
        assert wf.ext == ".pdf"
        assert os.path.isabs(wf.path)

    def test_no_extension(self):
        wf = watched_file("README")
        assert wf.name == "README"
        assert wf.ext == ""


class TestSafeTargetPath:
    """Test suite for safe_target_path function"""

    @pytest.fixture
    def target_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            yield tmpdir

    def touch(self, folder, name):
        with open(os.path.join(folder, name), "w") as f:
            f.write("x")

    def test_free_name_kept(self, target_dir):
        dest = safe_target_path("/elsewhere/invoice2024.pdf", target_dir)
        assert dest == os.path.join(target_dir, "invoice2024.pdf")

    def test_first_collision(self, target_dir):
        self.touch(target_dir, "invoice2024.pdf")
        dest = safe_target_path("/elsewhere/invoice2024.pdf", target_dir)
        assert os.path.basename(dest) == "invoice2024.[001].pdf"

    @pytest.mark.parametrize("existing", [2, 5, 12])
    def test_repeated_collisions(self, target_dir, existing):
        """With x, x.[001] .. x.[N-1] present the next free tag is N"""
        self.touch(target_dir, "x.pdf")
        for i in range(1, existing):
            self.touch(target_dir, f"x.[{i:03d}].pdf")

        dest = safe_target_path("x.pdf", target_dir)

        assert os.path.basename(dest) == f"x.[{existing:03d}].pdf"

    def test_gap_is_reused(self, target_dir):
        """Counting stops at the first free tag"""
        self.touch(target_dir, "x.pdf")
        self.touch(target_dir, "x.[002].pdf")
        assert os.path.basename(safe_target_path("x.pdf", target_dir)) == "x.[001].pdf"

    def test_no_extension(self, target_dir):
        self.touch(target_dir, "README")
        assert os.path.basename(safe_target_path("README", target_dir)) == "README.[001]"

    def test_missing_file_name_rejected(self, target_dir):
        with pytest.raises(ValueError):
            safe_target_path(target_dir + os.sep, target_dir)
