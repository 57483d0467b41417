"""
LangChain-compatible tool definitions for GenFS operations.

Provides tools that can be bound to LangChain chat models via:
- LangChainToolProvider class for direct integration
- get_langchain_tools() convenience function

Example usage:
    from genfs import VirtualFileSystem
    from genfs.executor import CommandExecutor
    from genfs.tools.langchain_tools import LangChainToolProvider

    provider = LangChainToolProvider(CommandExecutor(VirtualFileSystem()))
    model = init_chat_model("anthropic:claude-haiku-4-5").bind_tools(provider.get_tools())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Optional

from pydantic import BaseModel, Field

from genfs.commands import FILE_MANAGER, STR_REPLACE_EDITOR
from genfs.executor import CommandExecutor
from genfs.tools.base import TOOL_DESCRIPTIONS, BaseToolProvider

if TYPE_CHECKING:
    from langchain_core.tools import BaseTool

    from genfs.vfs import VirtualFileSystem


class StrReplaceEditorInput(BaseModel):
    """Input schema for the str_replace_editor tool."""

    command: Literal["view", "create", "str_replace", "insert", "undo_edit"] = Field(
        description="The operation to perform"
    )
    path: str = Field(
        description="Absolute path of the file or directory (e.g., '/App.jsx')"
    )
    file_text: Optional[str] = Field(
        default=None,
        description="Required for 'create': full content of the new file",
    )
    old_str: Optional[str] = Field(
        default=None,
        description="Required for 'str_replace': exact text to replace. Must appear exactly once.",
    )
    new_str: Optional[str] = Field(
        default=None,
        description="Required for 'str_replace' and 'insert': the new text",
    )
    insert_line: Optional[int] = Field(
        default=None,
        description="Required for 'insert': 0-based line index to insert before",
    )


class FileManagerInput(BaseModel):
    """Input schema for the file_manager tool."""

    command: Literal["rename", "delete"] = Field(description="The operation to perform")
    path: str = Field(description="The current path of the file or directory")
    new_path: Optional[str] = Field(
        default=None, description="Required for 'rename': the new path"
    )


class LangChainToolProvider(BaseToolProvider):
    """LangChain-compatible tool provider for GenFS."""

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions as dictionaries (for compatibility with base class).

        For LangChain usage, prefer get_tools() which returns actual Tool objects.
        """
        tools = self.get_tools()
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "args_schema": tool.args_schema,
            }
            for tool in tools
        ]

    def get_tools(self) -> list[BaseTool]:
        """
        Get LangChain Tool objects for use with agents.

        Returns:
            List of LangChain StructuredTool instances.
        """
        from langchain_core.tools import StructuredTool

        return [
            StructuredTool.from_function(
                func=self._str_replace_editor,
                name=STR_REPLACE_EDITOR,
                description=TOOL_DESCRIPTIONS[STR_REPLACE_EDITOR],
                args_schema=StrReplaceEditorInput,
            ),
            StructuredTool.from_function(
                func=self._file_manager,
                name=FILE_MANAGER,
                description=TOOL_DESCRIPTIONS[FILE_MANAGER],
                args_schema=FileManagerInput,
            ),
        ]

    @staticmethod
    def _present(**kwargs: Any) -> dict[str, Any]:
        # Unset optional fields arrive as None; drop them so the command
        # validation reports them as missing
        return {key: value for key, value in kwargs.items() if value is not None}

    def _str_replace_editor(
        self,
        command: str,
        path: str,
        file_text: Optional[str] = None,
        old_str: Optional[str] = None,
        new_str: Optional[str] = None,
        insert_line: Optional[int] = None,
    ) -> str:
        """View, create or edit a file."""
        return self.execute_tool(
            STR_REPLACE_EDITOR,
            self._present(
                command=command,
                path=path,
                file_text=file_text,
                old_str=old_str,
                new_str=new_str,
                insert_line=insert_line,
            ),
        )

    def _file_manager(
        self,
        command: str,
        path: str,
        new_path: Optional[str] = None,
    ) -> str:
        """Rename or delete a file or directory."""
        return self.execute_tool(
            FILE_MANAGER,
            self._present(command=command, path=path, new_path=new_path),
        )


def get_langchain_tools(vfs: VirtualFileSystem) -> list[BaseTool]:
    """
    Get LangChain tools for a VirtualFileSystem instance.

    Args:
        vfs: The VirtualFileSystem instance.

    Returns:
        List of LangChain StructuredTool instances.
    """
    provider = LangChainToolProvider(CommandExecutor(vfs))
    return provider.get_tools()


def execute_langchain_tool(
    vfs: VirtualFileSystem,
    tool_name: str,
    arguments: dict[str, Any],
) -> str:
    """
    Convenience function to execute a LangChain tool call.

    Args:
        vfs: The VirtualFileSystem instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        Text result for the agent.
    """
    provider = LangChainToolProvider(CommandExecutor(vfs))
    return provider.execute_tool(tool_name, arguments)
