"""
Tests for task file and backup access
"""

import logging

import pytest

from todo_io import BackupFile, TaskFile


class TestTaskFile:
    """Test suite for TaskFile"""

    def test_read_creates_file(self, tmp_path):
        task_file = TaskFile(tmp_path / '.todo')
        assert task_file.read_lines() == []
        assert (tmp_path / '.todo').read_text() == ""

    def test_read_does_not_truncate(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_text("[ ] wash car\n[*] pay bills")
        assert TaskFile(path).read_lines() == ["[ ] wash car", "[*] pay bills"]
        assert path.read_text() == "[ ] wash car\n[*] pay bills"

    def test_write_adds_trailing_newlines(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_text("old contents that are longer than the new ones\n")
        assert TaskFile(path).write_lines(["[ ] a task", ""]) == 2
        assert path.read_text() == "[ ] a task\n\n"

    def test_only_newline_splits_lines(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_text("[ ] page\x0cbreak task\n[ ] tab\x0bbed line\n[ ] keep me\n", encoding='utf-8')
        assert TaskFile(path).read_lines() == [
            "[ ] page\x0cbreak task",
            "[ ] tab\x0bbed line",
            "[ ] keep me",
        ]

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_bytes(b"[ ] wash car\r\n[*] pay bills\r\n")
        assert TaskFile(path).read_lines() == ["[ ] wash car", "[*] pay bills"]

    def test_blank_lines_are_kept(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_text("\n[ ] wash car\n\n")
        assert TaskFile(path).read_lines() == ["", "[ ] wash car", ""]

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / '.todo'
        path.write_bytes(b"[ ] caf\xe9\n")
        with pytest.raises(UnicodeDecodeError):
            TaskFile(path).read_lines()

    def test_delete_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="Todo"):
            assert TaskFile(tmp_path / 'gone').delete() is False
        assert "Couldn't remove file" in caplog.text


class TestBackupFile:
    """Test suite for BackupFile"""

    def test_save_and_restore(self, tmp_path):
        source = tmp_path / '.todo'
        source.write_bytes(b"[ ] wash car\n")
        backup = BackupFile(tmp_path / 'todo.bak')

        assert backup.save(source) is True
        assert backup.exists()

        source.write_bytes(b"[ ] something else\n")
        backup.restore(source)
        assert source.read_bytes() == b"[ ] wash car\n"

    def test_save_missing_source(self, tmp_path, caplog):
        backup = BackupFile(tmp_path / 'todo.bak')
        with caplog.at_level(logging.ERROR, logger="Todo"):
            assert backup.save(tmp_path / 'missing') is False
        assert not backup.exists()

    def test_restore_without_backup(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BackupFile(tmp_path / 'todo.bak').restore(tmp_path / '.todo')
