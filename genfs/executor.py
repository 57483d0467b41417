"""
CommandExecutor - runs agent tool calls against a VirtualFileSystem.

Every call produces a ToolResult; nothing raises out of `execute`. Observers
are notified only after the underlying store or patch operation has
succeeded, so failed commands are never reflected outward.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from genfs import paths
from genfs.commands import (
    Command,
    CreateCommand,
    DeleteCommand,
    InsertCommand,
    RenameCommand,
    StrReplaceCommand,
    UndoEditCommand,
    ViewCommand,
    parse_command,
)
from genfs.errors import AlreadyExists, GenFSError, NotFound
from genfs.patch import PatchEngine
from genfs.types import (
    DirectoryNode,
    EventType,
    FileSystemEvent,
    ToolResult,
)
from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)

Observer = Callable[[FileSystemEvent], None]


class CommandExecutor:
    """Dispatches `str_replace_editor` and `file_manager` commands."""

    def __init__(self, vfs: VirtualFileSystem):
        """
        Initialize the executor.

        Args:
            vfs: The file system instance for the current turn.
        """
        self.vfs = vfs
        self.patch = PatchEngine(vfs)
        self._observers: list[Observer] = []

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callable that receives a FileSystemEvent per successful mutation.

        Returns:
            A function that unsubscribes the observer.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _publish(self, event: FileSystemEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception(
                    "Observer %r failed on %s event for %s",
                    observer,
                    event.type.value,
                    event.path,
                )

    # =========================================================================
    # Dispatch
    # =========================================================================

    def execute(self, tool_name: str, arguments: Any) -> ToolResult:
        """
        Execute one tool call.

        Args:
            tool_name: "str_replace_editor" or "file_manager".
            arguments: The agent-supplied argument bag.

        Returns:
            ToolResult describing success or the typed failure.
        """
        try:
            command = parse_command(tool_name, arguments)
        except GenFSError as e:
            logger.debug("Rejected %s call: %s", tool_name, e.message)
            return ToolResult.fail(e)

        handlers = {
            ViewCommand: self._view,
            CreateCommand: self._create,
            StrReplaceCommand: self._str_replace,
            InsertCommand: self._insert,
            UndoEditCommand: self._undo_edit,
            RenameCommand: self._rename,
            DeleteCommand: self._delete,
        }

        try:
            result, event = handlers[type(command)](command)
        except GenFSError as e:
            logger.debug("%s %s failed: %s", tool_name, command.command, e.message)
            return ToolResult.fail(e)
        except Exception as e:
            logger.exception("%s %s raised unexpectedly", tool_name, command.command)
            return ToolResult.fail(
                GenFSError(f"Tool execution failed: {e}", path=command.path)
            )

        if event is not None:
            self._publish(event)
        logger.debug("%s %s: %s", tool_name, command.command, result.message)
        return result

    def execute_text(self, tool_name: str, arguments: Any) -> str:
        """Execute one tool call and render the agent-facing text."""
        return self.execute(tool_name, arguments).text

    # =========================================================================
    # str_replace_editor
    # =========================================================================

    def _view(self, command: ViewCommand) -> tuple[ToolResult, None]:
        path = paths.normalize(command.path)
        node = self.vfs.get_node(path)
        if node is None:
            raise NotFound(f"File not found: {path}", path=path)

        if isinstance(node, DirectoryNode):
            entries = [
                f"[DIR] {paths.filename(child.path)}"
                if child.is_dir
                else f"[FILE] {paths.filename(child.path)}"
                for child in node.children.values()
            ]
            listing = "\n".join(entries) if entries else "(empty directory)"
            return ToolResult.ok(listing, data={"path": path, "type": "directory"}), None

        return ToolResult.ok(node.content, data={"path": path, "type": "file"}), None

    def _create(self, command: CreateCommand) -> tuple[ToolResult, FileSystemEvent]:
        node = self.vfs.create_file_with_parents(command.path, command.file_text)
        return (
            ToolResult.ok(f"File created: {node.path}", data={"path": node.path}),
            FileSystemEvent(EventType.CREATED, node.path, content=node.content),
        )

    def _edited(self, path: str, content: str) -> tuple[ToolResult, FileSystemEvent]:
        return (
            ToolResult.ok(f"File edited: {path}", data={"path": path}),
            FileSystemEvent(EventType.UPDATED, path, content=content),
        )

    def _str_replace(self, command: StrReplaceCommand) -> tuple[ToolResult, FileSystemEvent]:
        path = paths.normalize(command.path)
        content = self.patch.replace_in_file(path, command.old_str, command.new_str)
        return self._edited(path, content)

    def _insert(self, command: InsertCommand) -> tuple[ToolResult, FileSystemEvent]:
        path = paths.normalize(command.path)
        content = self.patch.insert_in_file(path, command.insert_line, command.new_str)
        return self._edited(path, content)

    def _undo_edit(self, command: UndoEditCommand) -> tuple[ToolResult, FileSystemEvent]:
        path = paths.normalize(command.path)
        content = self.patch.undo_edit(path)
        return (
            ToolResult.ok(f"Reverted last edit to {path}", data={"path": path}),
            FileSystemEvent(EventType.UPDATED, path, content=content),
        )

    # =========================================================================
    # file_manager
    # =========================================================================

    def _rename(self, command: RenameCommand) -> tuple[ToolResult, FileSystemEvent]:
        old_path = paths.normalize(command.path)
        new_path = paths.normalize(command.new_path)

        if not self.vfs.rename(old_path, new_path):
            if not self.vfs.exists(old_path):
                raise NotFound(f"Source not found: {old_path}", path=old_path)
            if self.vfs.exists(new_path):
                raise AlreadyExists(
                    f"Destination already exists: {new_path}", path=new_path
                )
            raise GenFSError(
                f"Failed to rename {old_path} to {new_path}: the destination is the "
                "root, lies inside the source, or sits beneath a file",
                path=old_path,
            )

        return (
            ToolResult.ok(
                f"Successfully renamed {old_path} to {new_path}",
                data={"path": old_path, "new_path": new_path},
            ),
            FileSystemEvent(EventType.RENAMED, old_path, new_path=new_path),
        )

    def _delete(self, command: DeleteCommand) -> tuple[ToolResult, FileSystemEvent]:
        path = paths.normalize(command.path)
        if not self.vfs.delete_file(path):
            raise NotFound(f"File not found: {path}", path=path)
        return (
            ToolResult.ok(f"Successfully deleted {path}", data={"path": path}),
            FileSystemEvent(EventType.DELETED, path),
        )
