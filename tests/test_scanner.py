"""Tests for folder_watcher.scanner module"""
import os

from folder_watcher.scanner import scan_folder


class TestScanFolder:
    """Test suite for scan_folder function"""

    def test_matches_pattern_only(self, tmp_path):
        for name in ("b-invoice.pdf", "a-invoice.pdf", "notes.txt"):
            (tmp_path / name).write_text("x")

        result = scan_folder(str(tmp_path), "*.pdf")

        assert not result.folder_missing
        assert [os.path.basename(p) for p in result.files] == ["a-invoice.pdf", "b-invoice.pdf"]
        assert all(os.path.dirname(p) == str(tmp_path) for p in result.files)

    def test_not_recursive(self, tmp_path):
        sub = tmp_path / "nested"
        sub.mkdir()
        (sub / "deep-invoice.pdf").write_text("x")
        (tmp_path / "nested.pdf").mkdir()

        assert scan_folder(str(tmp_path), "*.pdf").files == []

    def test_missing_folder_flagged(self, tmp_path):
        """A missing folder is reported, not raised"""
        result = scan_folder(str(tmp_path / "gone"), "*.pdf")

        assert result.folder_missing
        assert result.files == []

    def test_default_pattern_is_pdf(self, tmp_path):
        (tmp_path / "invoice2024.pdf").write_text("x")
        (tmp_path / "invoice2024.doc").write_text("x")

        assert len(scan_folder(str(tmp_path)).files) == 1
