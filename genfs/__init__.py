"""
GenFS - an in-memory virtual file system edited by a code-generation agent.

The agent issues `str_replace_editor` and `file_manager` tool commands; GenFS
turns those untyped arguments into safe mutations of a file tree and reports
each outcome back as text.

Single turn with a chat model:
    from genfs import GenFSConfig, TurnSession

    session = TurnSession(GenFSConfig.from_env(), snapshot=previous_snapshot)
    result = session.run([{"role": "user", "content": "Make a counter"}])
    save(result.snapshot)

Direct tool execution:
    from genfs import CommandExecutor, VirtualFileSystem

    executor = CommandExecutor(VirtualFileSystem())
    result = executor.execute(
        "str_replace_editor",
        {"command": "create", "path": "/App.jsx", "file_text": "<App/>"},
    )
    print(result.text)
"""

from genfs.config import GenFSConfig
from genfs.errors import (
    AlreadyExists,
    AmbiguousMatch,
    Corrupt,
    GenFSError,
    InvalidCommand,
    InvalidPath,
    NoMatch,
    NotADirectory,
    NotAFile,
    NotFound,
    NothingToUndo,
    OutOfRange,
    ParentMissing,
)
from genfs.executor import CommandExecutor
from genfs.labels import ToolLabel, get_tool_label
from genfs.patch import PatchEngine
from genfs.prompts import GENERATION_PROMPT
from genfs.selection import SelectionTracker
from genfs.serializer import deserialize, from_json, serialize, to_json
from genfs.session import ToolCallRecord, TurnResult, TurnSession, run_turn
from genfs.tools import execute_openai_tool, get_openai_tools
from genfs.types import (
    DirectoryNode,
    EventType,
    FileNode,
    FileSystemEvent,
    NodeType,
    ToolResult,
)
from genfs.vfs import VirtualFileSystem

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "VirtualFileSystem",
    "PatchEngine",
    "CommandExecutor",
    "GenFSConfig",
    # Turns
    "TurnSession",
    "TurnResult",
    "ToolCallRecord",
    "run_turn",
    # Serialization
    "serialize",
    "deserialize",
    "to_json",
    "from_json",
    # Tool helpers
    "get_openai_tools",
    "execute_openai_tool",
    "get_tool_label",
    "ToolLabel",
    "SelectionTracker",
    # Prompts
    "GENERATION_PROMPT",
    # Types
    "NodeType",
    "FileNode",
    "DirectoryNode",
    "EventType",
    "FileSystemEvent",
    "ToolResult",
    # Errors
    "GenFSError",
    "InvalidPath",
    "ParentMissing",
    "AlreadyExists",
    "NotFound",
    "NotAFile",
    "NotADirectory",
    "NoMatch",
    "AmbiguousMatch",
    "OutOfRange",
    "NothingToUndo",
    "Corrupt",
    "InvalidCommand",
]
