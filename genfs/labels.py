"""
Human-readable labels for tool calls, as shown next to each step of a turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from genfs import paths
from genfs.commands import FILE_MANAGER, STR_REPLACE_EDITOR

MAX_FILENAME_LENGTH = 40

# Icon names
ICON_FILE_PLUS = "file-plus"
ICON_FILE_EDIT = "file-edit"
ICON_EYE = "eye"
ICON_TRASH = "trash"
ICON_RENAME = "arrow-right-left"
ICON_WRENCH = "wrench"
ICON_UNDO = "undo"


@dataclass(frozen=True)
class ToolLabel:
    """Label text and icon name for a tool call."""

    label: str
    icon: str


def truncate_filename(name: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """
    Shorten a filename to `max_length` characters.

    The extension is kept when the last dot lies near the end
    ("a-very-long...name.jsx"); otherwise the tail is cut ("prefix...").
    """
    if len(name) <= max_length:
        return name

    dot = name.rfind(".")
    if dot > 0 and dot > max_length - 10:
        extension = name[dot:]
        stem = name[:dot]
        return f"{stem[: max(0, max_length - len(extension) - 3)]}...{extension}"

    return f"{name[: max_length - 3]}..."


def _display_name(path: Any) -> str:
    if not path or not isinstance(path, str):
        return ""
    return truncate_filename(paths.filename(path))


def _str_replace_label(args: dict[str, Any]) -> ToolLabel:
    command = args.get("command")
    if not command:
        return ToolLabel("File operation", ICON_WRENCH)

    name = _display_name(args.get("path"))

    if command == "view":
        return ToolLabel(f"Viewing {name}" if name else "Viewing file", ICON_EYE)
    if command == "create":
        return ToolLabel(f"Creating {name}" if name else "Creating file", ICON_FILE_PLUS)
    if command in ("str_replace", "insert"):
        return ToolLabel(f"Editing {name}" if name else "Editing file", ICON_FILE_EDIT)
    if command == "undo_edit":
        return ToolLabel("Undoing changes", ICON_UNDO)
    return ToolLabel(f"Processing {name}" if name else "File operation", ICON_WRENCH)


def _file_manager_label(args: dict[str, Any]) -> ToolLabel:
    command = args.get("command")

    if command == "delete":
        name = _display_name(args.get("path"))
        return ToolLabel(f"Deleting {name}" if name else "Deleting file", ICON_TRASH)

    if command == "rename":
        old_name = _display_name(args.get("path"))
        new_name = _display_name(args.get("new_path"))
        if old_name and new_name:
            return ToolLabel(f"Renaming {old_name} → {new_name}", ICON_RENAME)
        if old_name:
            return ToolLabel(f"Renaming {old_name}", ICON_RENAME)
        return ToolLabel("Renaming file", ICON_RENAME)

    return ToolLabel("File operation", ICON_WRENCH)


def get_tool_label(tool_name: str | None, args: dict[str, Any] | None = None) -> ToolLabel:
    """
    Get a user-friendly label and icon for a tool call.

    Args:
        tool_name: Tool name; a UI part type such as "tool-file_manager" is
            accepted too.
        args: The tool call's arguments.

    Returns:
        ToolLabel with the label text and icon name.
    """
    tool = (tool_name or "unknown").removeprefix("tool-") or "unknown"
    args = args if isinstance(args, dict) else {}

    if tool == STR_REPLACE_EDITOR:
        return _str_replace_label(args)
    if tool == FILE_MANAGER:
        return _file_manager_label(args)
    return ToolLabel(tool, ICON_WRENCH)
