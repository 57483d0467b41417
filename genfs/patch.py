"""
Textual patch operations on single files.

Each operation is a read-modify-write against the VirtualFileSystem: the new
content is computed in full and committed with one update, or nothing is
written at all.
"""

from __future__ import annotations

import logging

from genfs import paths
from genfs.errors import (
    AmbiguousMatch,
    NoMatch,
    NotAFile,
    NotFound,
    NothingToUndo,
    OutOfRange,
)
from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)


class PatchEngine:
    """Exact-match replacement, line insertion and single-file undo."""

    def __init__(self, vfs: VirtualFileSystem):
        self.vfs = vfs

    def _read(self, path: str) -> str:
        node = self.vfs.get_node(path)
        if node is None:
            raise NotFound(f"File not found: {path}", path=path)
        if not node.is_file:
            raise NotAFile(f"Path is a directory, not a file: {path}", path=path)
        return node.content

    def _commit(self, path: str, previous: str, content: str) -> str:
        self.vfs.update_file(path, content)
        self.vfs.history.record(path, previous)
        return content

    def replace_in_file(self, path: str, old_str: str, new_str: str) -> str:
        """
        Replace the single occurrence of `old_str` in a file with `new_str`.

        The match must be unique so the edit can never land on the wrong
        occurrence.

        Args:
            path: Path to the file.
            old_str: Exact text to find.
            new_str: Replacement text.

        Returns:
            The file's new content.

        Raises:
            NotFound: If the file does not exist.
            NotAFile: If `path` is a directory.
            NoMatch: If `old_str` does not occur (or is empty).
            AmbiguousMatch: If `old_str` occurs more than once.
        """
        path = paths.normalize(path)
        content = self._read(path)

        if old_str == "":
            raise NoMatch(
                f"The string to replace must not be empty. Nothing was changed in {path}.",
                path=path,
            )
        count = content.count(old_str)
        if count == 0:
            raise NoMatch(
                f"String not found in file: {path}. "
                "Make sure you're using the exact text including whitespace.",
                path=path,
            )
        if count > 1:
            raise AmbiguousMatch(
                f"String appears {count} times in {path}. Please provide a more unique "
                "string that includes surrounding context to ensure only one match.",
                path=path,
                count=count,
            )

        new_content = content.replace(old_str, new_str, 1)
        logger.debug(
            "Replaced %d chars with %d chars in %s", len(old_str), len(new_str), path
        )
        return self._commit(path, content, new_content)

    def insert_in_file(self, path: str, line_number: int, text: str) -> str:
        """
        Insert `text` as a new line before line `line_number` (0-based).

        Inserting at 0 prepends; inserting at the line count appends.

        Raises:
            NotFound: If the file does not exist.
            NotAFile: If `path` is a directory.
            OutOfRange: If `line_number` is negative or beyond the line count.
        """
        path = paths.normalize(path)
        content = self._read(path)

        lines = content.split("\n") if content else []
        if line_number < 0 or line_number > len(lines):
            raise OutOfRange(
                f"Invalid line number: {line_number}. "
                f"File has {len(lines)} lines (valid range: 0-{len(lines)}).",
                path=path,
            )

        lines.insert(line_number, text)
        logger.debug("Inserted %d chars at line %d of %s", len(text), line_number, path)
        return self._commit(path, content, "\n".join(lines))

    def undo_edit(self, path: str) -> str:
        """
        Restore the content a file had before its most recent patch.

        Returns:
            The restored content.

        Raises:
            NotFound: If the file does not exist.
            NotAFile: If `path` is a directory.
            NothingToUndo: If no edit to this file has been recorded.
        """
        path = paths.normalize(path)
        self._read(path)

        previous = self.vfs.history.pop(path)
        if previous is None:
            raise NothingToUndo(f"No edit history found for {path}", path=path)

        self.vfs.update_file(path, previous)
        logger.debug("Reverted last edit to %s", path)
        return previous
