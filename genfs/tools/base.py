"""
Base classes for GenFS tool definitions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from genfs.commands import FILE_MANAGER, STR_REPLACE_EDITOR
from genfs.executor import CommandExecutor

TOOL_DESCRIPTIONS = {
    STR_REPLACE_EDITOR: (
        "View, create and edit files in the project. Commands: 'view' shows a file's "
        "content or a directory listing; 'create' writes a new file (parent directories "
        "are created automatically); 'str_replace' replaces old_str with new_str, where "
        "old_str must appear exactly once in the file - include surrounding context to "
        "make it unique; 'insert' adds new_str as a new line at insert_line (0 prepends, "
        "the line count appends); 'undo_edit' reverts the most recent edit to the file."
    ),
    FILE_MANAGER: (
        "Rename/move or delete files and directories. 'rename' moves path to new_path "
        "(missing parent directories are created); 'delete' removes a file, or a "
        "directory together with everything inside it."
    ),
}


class BaseToolProvider(ABC):
    """Abstract base class for tool providers that generate agent-specific tool definitions."""

    def __init__(self, executor: CommandExecutor):
        """
        Initialize the tool provider.

        Args:
            executor: The CommandExecutor bound to the turn's file system.
        """
        self.executor = executor

    @property
    def tool_names(self) -> list[str]:
        return [STR_REPLACE_EDITOR, FILE_MANAGER]

    @abstractmethod
    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions in the format expected by the target agent framework.

        Returns:
            List of tool definitions.
        """
        pass

    def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call and return the result.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments.

        Returns:
            String result to return to the agent. Failures start with "Error: ".
        """
        try:
            return self.executor.execute_text(tool_name, arguments)
        except Exception as e:
            return f"Error: Tool execution failed: {str(e)}"
