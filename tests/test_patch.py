"""Tests for PatchEngine replace/insert/undo."""

import pytest

from genfs import PatchEngine, VirtualFileSystem
from genfs.errors import (
    AmbiguousMatch,
    NoMatch,
    NotAFile,
    NotFound,
    NothingToUndo,
    OutOfRange,
)


@pytest.fixture
def patch(vfs):
    vfs.create_file("/f.txt", "line one\nline two\nline three")
    return PatchEngine(vfs)


class TestReplaceInFile:
    """Test replace_in_file()."""

    def test_unique_match_replaced(self, patch, vfs):
        content = patch.replace_in_file("/f.txt", "two", "2")

        assert content == "line one\nline 2\nline three"
        assert vfs.read_file("/f.txt") == content

    def test_ambiguous_match_fails(self, patch, vfs):
        with pytest.raises(AmbiguousMatch) as exc_info:
            patch.replace_in_file("/f.txt", "line", "LINE")

        assert exc_info.value.count == 3
        assert vfs.read_file("/f.txt") == "line one\nline two\nline three"

    def test_no_match_fails(self, patch, vfs):
        with pytest.raises(NoMatch):
            patch.replace_in_file("/f.txt", "four", "4")

        assert vfs.read_file("/f.txt") == "line one\nline two\nline three"

    def test_empty_old_str_fails(self, patch):
        with pytest.raises(NoMatch):
            patch.replace_in_file("/f.txt", "", "x")

    def test_missing_file(self, patch):
        with pytest.raises(NotFound):
            patch.replace_in_file("/missing.txt", "a", "b")

    def test_directory(self, patch, vfs):
        vfs.create_directory("/dir")

        with pytest.raises(NotAFile):
            patch.replace_in_file("/dir", "a", "b")

    def test_replacement_may_repeat_text(self, patch, vfs):
        """Only the search string must be unique, not the result."""
        patch.replace_in_file("/f.txt", "line one", "line one\nline one")

        assert vfs.read_file("/f.txt").count("line one") == 2


class TestInsertInFile:
    """Test insert_in_file()."""

    def test_prepend(self, patch, vfs):
        patch.insert_in_file("/f.txt", 0, "header")

        assert vfs.read_file("/f.txt") == "header\nline one\nline two\nline three"

    def test_middle(self, patch, vfs):
        patch.insert_in_file("/f.txt", 1, "inserted")

        assert vfs.read_file("/f.txt") == "line one\ninserted\nline two\nline three"

    def test_append_at_line_count(self, patch, vfs):
        patch.insert_in_file("/f.txt", 3, "footer")

        assert vfs.read_file("/f.txt") == "line one\nline two\nline three\nfooter"

    def test_beyond_line_count_fails(self, patch, vfs):
        with pytest.raises(OutOfRange):
            patch.insert_in_file("/f.txt", 100, "x")

        assert vfs.read_file("/f.txt") == "line one\nline two\nline three"

    def test_negative_fails(self, patch):
        with pytest.raises(OutOfRange):
            patch.insert_in_file("/f.txt", -1, "x")

    def test_empty_file(self, vfs):
        vfs.create_file("/empty.txt", "")
        engine = PatchEngine(vfs)

        engine.insert_in_file("/empty.txt", 0, "first")

        assert vfs.read_file("/empty.txt") == "first"

    def test_missing_file(self, patch):
        with pytest.raises(NotFound):
            patch.insert_in_file("/missing.txt", 0, "x")


class TestUndoEdit:
    """Test undo_edit() and the per-file history."""

    def test_undo_replace(self, patch, vfs):
        patch.replace_in_file("/f.txt", "two", "2")

        restored = patch.undo_edit("/f.txt")

        assert restored == "line one\nline two\nline three"
        assert vfs.read_file("/f.txt") == restored

    def test_undo_insert(self, patch, vfs):
        patch.insert_in_file("/f.txt", 0, "header")
        patch.undo_edit("/f.txt")

        assert vfs.read_file("/f.txt") == "line one\nline two\nline three"

    def test_nothing_to_undo(self, patch):
        with pytest.raises(NothingToUndo):
            patch.undo_edit("/f.txt")

    def test_single_level_by_default(self, patch, vfs):
        patch.replace_in_file("/f.txt", "one", "1")
        patch.replace_in_file("/f.txt", "two", "2")

        patch.undo_edit("/f.txt")

        assert vfs.read_file("/f.txt") == "line 1\nline two\nline three"
        with pytest.raises(NothingToUndo):
            patch.undo_edit("/f.txt")

    def test_deeper_history(self):
        vfs = VirtualFileSystem(undo_depth=3)
        vfs.create_file("/f.txt", "a b c")
        engine = PatchEngine(vfs)

        engine.replace_in_file("/f.txt", "a", "1")
        engine.replace_in_file("/f.txt", "b", "2")
        engine.undo_edit("/f.txt")
        engine.undo_edit("/f.txt")

        assert vfs.read_file("/f.txt") == "a b c"

    def test_failed_edit_records_nothing(self, patch):
        with pytest.raises(NoMatch):
            patch.replace_in_file("/f.txt", "zzz", "y")

        with pytest.raises(NothingToUndo):
            patch.undo_edit("/f.txt")

    def test_history_follows_rename(self, patch, vfs):
        patch.replace_in_file("/f.txt", "two", "2")
        vfs.rename("/f.txt", "/docs/f.txt")

        patch.undo_edit("/docs/f.txt")

        assert vfs.read_file("/docs/f.txt") == "line one\nline two\nline three"

    def test_history_dropped_on_delete(self, patch, vfs):
        patch.replace_in_file("/f.txt", "two", "2")
        vfs.delete_file("/f.txt")
        vfs.create_file("/f.txt", "fresh")

        with pytest.raises(NothingToUndo):
            patch.undo_edit("/f.txt")

    def test_undo_missing_file(self, patch):
        with pytest.raises(NotFound):
            patch.undo_edit("/missing.txt")
