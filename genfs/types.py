"""
Core types for GenFS - the in-memory file tree edited by a code-generation agent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    from genfs.errors import GenFSError


# =============================================================================
# Nodes
# =============================================================================


class NodeType(str, Enum):
    """Type of node in the virtual file system."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(eq=False)
class FileNode:
    """A file: a leaf node holding text content."""

    path: str
    content: str = ""
    # Non-owning back-pointer, only used for path rewriting during rename
    parent: DirectoryNode | None = field(default=None, repr=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.FILE

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_dir(self) -> bool:
        return False


@dataclass(eq=False)
class DirectoryNode:
    """A directory: owns its children, keyed by name in insertion order."""

    path: str
    children: dict[str, Node] = field(default_factory=dict)
    parent: DirectoryNode | None = field(default=None, repr=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_dir(self) -> bool:
        return True


Node = Union[FileNode, DirectoryNode]


# =============================================================================
# Observer events
# =============================================================================


class EventType(str, Enum):
    """Kind of change reported to file system observers."""

    CREATED = "created"
    UPDATED = "updated"
    RENAMED = "renamed"
    DELETED = "deleted"


@dataclass
class FileSystemEvent:
    """A successful mutation, published after the store has applied it."""

    type: EventType
    path: str
    new_path: str | None = None
    content: str | None = None


# =============================================================================
# Tool results
# =============================================================================

# Tool result types for agent responses
ToolResultStatus = Literal["success", "error"]

ERROR_PREFIX = "Error: "


@dataclass
class ToolResult:
    """Standard result format for GenFS tool operations."""

    status: ToolResultStatus
    message: str
    data: Any = None
    error: GenFSError | None = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ToolResult":
        return cls(status="success", message=message, data=data)

    @classmethod
    def fail(cls, error: GenFSError, data: Any = None) -> "ToolResult":
        return cls(status="error", message=error.message, data=data, error=error)

    @property
    def success(self) -> bool:
        return self.status == "success"

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error is not None else None

    @property
    def text(self) -> str:
        """The agent-facing rendering; failures carry the "Error: " prefix."""
        if self.success:
            return self.message
        return f"{ERROR_PREFIX}{self.message}"

    def to_dict(self) -> dict[str, Any]:
        result = {"status": self.status, "message": self.message}
        if self.error is not None:
            result["error"] = self.error.code
        if self.data is not None:
            result["data"] = self.data
        return result
