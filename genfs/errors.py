"""
Error taxonomy for GenFS.

Store, patch and serializer operations raise these; the command executor
converts them into a ToolResult so the agent can read the failure and retry.
"""

from __future__ import annotations


class GenFSError(Exception):
    """Base class for all GenFS errors."""

    code = "error"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class InvalidPath(GenFSError):
    """The path string is empty, relative, or malformed."""

    code = "invalid_path"


class ParentMissing(GenFSError):
    """The containing directory does not exist."""

    code = "parent_missing"


class AlreadyExists(GenFSError):
    """A node already occupies the target path."""

    code = "already_exists"


class NotFound(GenFSError):
    """No node exists at the path."""

    code = "not_found"


class NotAFile(GenFSError):
    """The path names a directory where a file was required."""

    code = "not_a_file"


class NotADirectory(GenFSError):
    """The path (or one of its ancestors) names a file where a directory was required."""

    code = "not_a_directory"


class NoMatch(GenFSError):
    """The search string does not occur in the file."""

    code = "no_match"


class AmbiguousMatch(GenFSError):
    """The search string occurs more than once in the file."""

    code = "ambiguous_match"

    def __init__(self, message: str, path: str | None = None, count: int = 0):
        super().__init__(message, path)
        self.count = count


class OutOfRange(GenFSError):
    """A line number lies outside the file."""

    code = "out_of_range"


class NothingToUndo(GenFSError):
    """No recorded edit exists for the path."""

    code = "nothing_to_undo"


class Corrupt(GenFSError):
    """A serialized snapshot cannot be turned back into a tree."""

    code = "corrupt"


class InvalidCommand(GenFSError):
    """A tool call named an unknown tool/command or carried bad arguments."""

    code = "invalid_command"
