"""
Typed command schemas for the two agent-facing tools.

Agents send an untyped argument bag with a `command` discriminator. Each tool
is modelled as a tagged union with one pydantic model per command, carrying
only that command's fields. Anything that does not validate becomes an
InvalidCommand error before dispatch.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from genfs.errors import InvalidCommand

STR_REPLACE_EDITOR = "str_replace_editor"
FILE_MANAGER = "file_manager"


class _Command(BaseModel):
    """Base for command models."""

    mutating: ClassVar[bool] = True

    path: str = Field(description="Absolute path of the target file or directory")


# =============================================================================
# str_replace_editor
# =============================================================================


class ViewCommand(_Command):
    """Show a file's content or a directory listing."""

    mutating: ClassVar[bool] = False

    command: Literal["view"]


class CreateCommand(_Command):
    """Create a file, creating missing parent directories."""

    command: Literal["create"]
    file_text: str = Field(description="Full content of the new file")


class StrReplaceCommand(_Command):
    """Replace the unique occurrence of old_str with new_str."""

    command: Literal["str_replace"]
    old_str: str = Field(description="Exact text to replace; must occur exactly once")
    new_str: str = Field(description="Replacement text")


class InsertCommand(_Command):
    """Insert new_str as a new line at insert_line."""

    command: Literal["insert"]
    insert_line: int = Field(description="0-based line index to insert before")
    new_str: str = Field(description="Text of the inserted line")


class UndoEditCommand(_Command):
    """Revert the most recent edit to a file."""

    command: Literal["undo_edit"]


StrReplaceEditorCommand = Annotated[
    Union[
        ViewCommand,
        CreateCommand,
        StrReplaceCommand,
        InsertCommand,
        UndoEditCommand,
    ],
    Field(discriminator="command"),
]


# =============================================================================
# file_manager
# =============================================================================


class RenameCommand(_Command):
    """Move a file or directory to new_path."""

    command: Literal["rename"]
    new_path: str = Field(description="Destination path")


class DeleteCommand(_Command):
    """Delete a file, or a directory with everything inside it."""

    command: Literal["delete"]


FileManagerCommand = Annotated[
    Union[RenameCommand, DeleteCommand],
    Field(discriminator="command"),
]

Command = Union[
    ViewCommand,
    CreateCommand,
    StrReplaceCommand,
    InsertCommand,
    UndoEditCommand,
    RenameCommand,
    DeleteCommand,
]

TOOL_ADAPTERS: dict[str, TypeAdapter] = {
    STR_REPLACE_EDITOR: TypeAdapter(StrReplaceEditorCommand),
    FILE_MANAGER: TypeAdapter(FileManagerCommand),
}

TOOL_COMMANDS: dict[str, tuple[str, ...]] = {
    STR_REPLACE_EDITOR: ("view", "create", "str_replace", "insert", "undo_edit"),
    FILE_MANAGER: ("rename", "delete"),
}


def _describe_error(error: dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ())]
    error_type = error.get("type")
    ctx = error.get("ctx") or {}

    if error_type == "union_tag_not_found":
        return "missing required field 'command'"
    if error_type == "union_tag_invalid":
        return f"unknown command '{ctx.get('tag')}' (expected one of: {ctx.get('expected_tags')})"
    if error_type == "missing" and len(loc) >= 2:
        return f"missing required field '{loc[-1]}' for command '{loc[0]}'"
    if len(loc) >= 2:
        return f"invalid value for '{loc[-1]}' in command '{loc[0]}': {error.get('msg')}"
    return str(error.get("msg"))


def parse_command(tool_name: str, arguments: Any) -> Command:
    """
    Validate a tool call's arguments into a typed command.

    Args:
        tool_name: Name of the tool ("str_replace_editor" or "file_manager").
        arguments: The argument mapping, or a JSON string encoding one.

    Returns:
        The command model matching the `command` field.

    Raises:
        InvalidCommand: If the tool is unknown or the arguments do not form a
            valid command for it.
    """
    adapter = TOOL_ADAPTERS.get(tool_name)
    if adapter is None:
        raise InvalidCommand(
            f"Unknown tool: {tool_name}. Available tools: {', '.join(TOOL_ADAPTERS)}"
        )

    try:
        if isinstance(arguments, (str, bytes)):
            return adapter.validate_json(arguments)
        return adapter.validate_python(arguments)
    except ValidationError as e:
        problems = "; ".join(_describe_error(err) for err in e.errors())
        raise InvalidCommand(f"Invalid arguments for {tool_name}: {problems}") from e
