"""
Per-file edit history backing the `undo_edit` command.
"""

from __future__ import annotations

from genfs import paths


class EditHistory:
    """Bounded stack of previous file contents, keyed by path."""

    def __init__(self, depth: int = 1):
        """
        Initialize the history.

        Args:
            depth: Number of edits remembered per file. Older entries are
                dropped once the limit is reached.
        """
        if depth < 1:
            raise ValueError("Undo depth must be at least 1")
        self.depth = depth
        self._stacks: dict[str, list[str]] = {}

    def record(self, path: str, previous_content: str) -> None:
        stack = self._stacks.setdefault(path, [])
        stack.append(previous_content)
        if len(stack) > self.depth:
            del stack[: len(stack) - self.depth]

    def pop(self, path: str) -> str | None:
        """Take the most recent previous content for `path`, if any."""
        stack = self._stacks.get(path)
        if not stack:
            return None
        content = stack.pop()
        if not stack:
            del self._stacks[path]
        return content

    def can_undo(self, path: str) -> bool:
        return bool(self._stacks.get(path))

    def move(self, old_prefix: str, new_prefix: str) -> None:
        """Rewrite every recorded path under `old_prefix` to live under `new_prefix`."""
        moved = {
            path: stack
            for path, stack in self._stacks.items()
            if paths.is_within(path, old_prefix)
        }
        for path in moved:
            del self._stacks[path]
        for path, stack in moved.items():
            self._stacks[paths.rebase(path, old_prefix, new_prefix)] = stack

    def discard(self, prefix: str) -> None:
        """Forget the history of `prefix` and everything beneath it."""
        for path in [p for p in self._stacks if paths.is_within(p, prefix)]:
            del self._stacks[path]

    def clear(self) -> None:
        self._stacks.clear()

    def __len__(self) -> int:
        return len(self._stacks)
