"""
Selection tracking for a rendering layer.

A SelectionTracker subscribes to a CommandExecutor and keeps the "currently
open" file consistent with the tree as the agent renames and deletes things.
"""

from __future__ import annotations

from genfs import paths
from genfs.types import EventType, FileSystemEvent
from genfs.vfs import VirtualFileSystem

DEFAULT_ENTRY_FILE = "/App.jsx"


class SelectionTracker:
    """Observer that follows the selected file through renames and deletes."""

    def __init__(self, vfs: VirtualFileSystem, selected: str | None = None):
        self.vfs = vfs
        self.selected = selected
        self.refresh_count = 0
        if self.selected is None:
            self.select_default()

    def select_default(self) -> str | None:
        """Pick /App.jsx if present, otherwise the first root-level file by name."""
        files = self.vfs.get_all_files()
        if DEFAULT_ENTRY_FILE in files:
            self.selected = DEFAULT_ENTRY_FILE
        else:
            root_files = sorted(
                path for path in files if paths.parent_of(path) == paths.ROOT
            )
            self.selected = root_files[0] if root_files else None
        return self.selected

    def select(self, path: str | None) -> None:
        self.selected = paths.normalize(path) if path else None

    def __call__(self, event: FileSystemEvent) -> None:
        self.refresh_count += 1
        selected = self.selected

        if event.type == EventType.RENAMED and selected and event.new_path:
            if paths.is_within(selected, event.path):
                self.selected = paths.rebase(selected, event.path, event.new_path)
        elif event.type == EventType.DELETED and selected:
            if paths.is_within(selected, event.path):
                self.selected = None

        if self.selected is None:
            self.select_default()
