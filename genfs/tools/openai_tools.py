"""
OpenAI-compatible tool definitions for GenFS operations.
"""

from __future__ import annotations

from typing import Any

from genfs.commands import FILE_MANAGER, STR_REPLACE_EDITOR, TOOL_COMMANDS
from genfs.executor import CommandExecutor
from genfs.tools.base import TOOL_DESCRIPTIONS, BaseToolProvider
from genfs.vfs import VirtualFileSystem


class OpenAIToolProvider(BaseToolProvider):
    """OpenAI function calling compatible tool provider for GenFS."""

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Get OpenAI function calling compatible tool definitions."""
        return [
            # View / create / edit files
            {
                "type": "function",
                "function": {
                    "name": STR_REPLACE_EDITOR,
                    "description": TOOL_DESCRIPTIONS[STR_REPLACE_EDITOR],
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "command": {
                                "type": "string",
                                "enum": list(TOOL_COMMANDS[STR_REPLACE_EDITOR]),
                                "description": "The operation to perform",
                            },
                            "path": {
                                "type": "string",
                                "description": "Absolute path of the file or directory (e.g., '/App.jsx')",
                            },
                            "file_text": {
                                "type": "string",
                                "description": "Required for 'create': full content of the new file",
                            },
                            "old_str": {
                                "type": "string",
                                "description": "Required for 'str_replace': exact text to replace. Must appear exactly once.",
                            },
                            "new_str": {
                                "type": "string",
                                "description": "Required for 'str_replace' and 'insert': the new text",
                            },
                            "insert_line": {
                                "type": "integer",
                                "description": "Required for 'insert': 0-based line index to insert before",
                            },
                        },
                        "required": ["command", "path"],
                    },
                },
            },
            # Rename / delete
            {
                "type": "function",
                "function": {
                    "name": FILE_MANAGER,
                    "description": TOOL_DESCRIPTIONS[FILE_MANAGER],
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "command": {
                                "type": "string",
                                "enum": list(TOOL_COMMANDS[FILE_MANAGER]),
                                "description": "The operation to perform",
                            },
                            "path": {
                                "type": "string",
                                "description": "The current path of the file or directory",
                            },
                            "new_path": {
                                "type": "string",
                                "description": "Required for 'rename': the new path",
                            },
                        },
                        "required": ["command", "path"],
                    },
                },
            },
        ]


def get_openai_tools(vfs: VirtualFileSystem) -> list[dict[str, Any]]:
    """
    Convenience function to get OpenAI-compatible tool definitions.

    Args:
        vfs: The VirtualFileSystem instance.

    Returns:
        List of tool definitions for OpenAI function calling.
    """
    provider = OpenAIToolProvider(CommandExecutor(vfs))
    return provider.get_tool_definitions()


def execute_openai_tool(
    vfs: VirtualFileSystem,
    tool_name: str,
    arguments: dict[str, Any],
) -> str:
    """
    Convenience function to execute an OpenAI tool call.

    Args:
        vfs: The VirtualFileSystem instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        Text result for the agent.
    """
    provider = OpenAIToolProvider(CommandExecutor(vfs))
    return provider.execute_tool(tool_name, arguments)
