"""
VirtualFileSystem - the in-memory node store for GenFS.

Holds a tree of FileNode and DirectoryNode objects under a single root
directory. A fresh instance is built for every agent turn (usually from a
serialized snapshot) and discarded once the turn's outcome is captured.
"""

from __future__ import annotations

import logging
from typing import Iterator

from genfs import paths
from genfs.errors import (
    AlreadyExists,
    NotADirectory,
    NotAFile,
    NotFound,
    ParentMissing,
)
from genfs.history import EditHistory
from genfs.types import DirectoryNode, FileNode, Node

logger = logging.getLogger(__name__)


class VirtualFileSystem:
    """
    In-memory hierarchical file store.

    Paths passed to public methods are normalized first, so "/src/" and
    "/src/./App.jsx" are accepted; relative paths raise InvalidPath.
    """

    def __init__(self, undo_depth: int = 1):
        """
        Initialize an empty file system.

        Args:
            undo_depth: Number of edits remembered per file for undo_edit.
        """
        self.root = DirectoryNode(path=paths.ROOT)
        self.history = EditHistory(depth=undo_depth)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_node(self, path: str) -> Node | None:
        """Find the node at `path`, or None if nothing is there."""
        path = paths.normalize(path)
        node: Node = self.root
        for name in paths.segments(path):
            if not isinstance(node, DirectoryNode):
                return None
            child = node.children.get(name)
            if child is None:
                return None
            node = child
        return node

    def exists(self, path: str) -> bool:
        return self.get_node(path) is not None

    def is_file(self, path: str) -> bool:
        return isinstance(self.get_node(path), FileNode)

    def is_dir(self, path: str) -> bool:
        return isinstance(self.get_node(path), DirectoryNode)

    def _require_parent(self, path: str) -> DirectoryNode:
        """Get the existing directory that should contain `path`."""
        parent_path = paths.parent_of(path)
        parent = self.get_node(parent_path)
        if parent is None:
            self._check_no_file_ancestor(path)
            raise ParentMissing(
                f"Parent directory does not exist: {parent_path}", path=path
            )
        if not isinstance(parent, DirectoryNode):
            raise NotADirectory(
                f"Parent path is a file, not a directory: {parent_path}", path=path
            )
        return parent

    def _check_no_file_ancestor(self, path: str) -> None:
        node: Node = self.root
        for name in paths.segments(path)[:-1]:
            child = node.children.get(name)
            if child is None:
                return
            if isinstance(child, FileNode):
                raise NotADirectory(
                    f"Path component is a file, not a directory: {child.path}",
                    path=path,
                )
            node = child

    def _ensure_directory(self, path: str) -> DirectoryNode:
        """Get the directory at `path`, creating it and its ancestors if missing."""
        node: DirectoryNode = self.root
        for name in paths.segments(path):
            child = node.children.get(name)
            if child is None:
                child = DirectoryNode(path=paths.join(node.path, name), parent=node)
                node.children[name] = child
                logger.debug("Created directory %s", child.path)
            elif isinstance(child, FileNode):
                raise NotADirectory(
                    f"Path component is a file, not a directory: {child.path}",
                    path=path,
                )
            node = child
        return node

    # =========================================================================
    # Create
    # =========================================================================

    def create_file(self, path: str, content: str = "") -> FileNode:
        """
        Create a file inside an existing directory.

        Args:
            path: Path for the new file.
            content: Initial content.

        Returns:
            The new FileNode.

        Raises:
            ParentMissing: If the containing directory does not exist.
            AlreadyExists: If a node already occupies `path`.
            NotADirectory: If an ancestor of `path` is a file.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise AlreadyExists("Cannot create a file at the root path", path=path)
        parent = self._require_parent(path)
        return self._attach_file(parent, path, content)

    def create_file_with_parents(self, path: str, content: str = "") -> FileNode:
        """
        Create a file, creating any missing ancestor directories first.

        Raises:
            AlreadyExists: If a file or directory already occupies `path`.
            NotADirectory: If an ancestor of `path` is a file.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise AlreadyExists("Cannot create a file at the root path", path=path)
        # Check the leaf first so a failed create leaves no new directories
        if self.exists(path):
            raise AlreadyExists(f"File already exists: {path}", path=path)
        self._check_no_file_ancestor(path)
        parent = self._ensure_directory(paths.parent_of(path))
        return self._attach_file(parent, path, content)

    def _attach_file(self, parent: DirectoryNode, path: str, content: str) -> FileNode:
        name = paths.filename(path)
        if name in parent.children:
            raise AlreadyExists(f"File already exists: {path}", path=path)
        node = FileNode(path=path, content=content, parent=parent)
        parent.children[name] = node
        logger.debug("Created file %s (%d chars)", path, len(content))
        return node

    def create_directory(self, path: str, parents: bool = False) -> DirectoryNode:
        """
        Create a directory.

        Args:
            path: Path for the new directory.
            parents: If True, create missing ancestors as well.

        Raises:
            AlreadyExists: If a node already occupies `path`.
            ParentMissing: If the parent is missing and `parents` is False.
            NotADirectory: If an ancestor of `path` is a file.
        """
        path = paths.normalize(path)
        if self.exists(path):
            raise AlreadyExists(f"Path already exists: {path}", path=path)
        if parents:
            return self._ensure_directory(path)
        parent = self._require_parent(path)
        node = DirectoryNode(path=path, parent=parent)
        parent.children[paths.filename(path)] = node
        logger.debug("Created directory %s", path)
        return node

    # =========================================================================
    # Read / update
    # =========================================================================

    def read_file(self, path: str) -> str | None:
        """Get a file's content; None if the path is missing or is a directory."""
        node = self.get_node(path)
        if isinstance(node, FileNode):
            return node.content
        return None

    def update_file(self, path: str, content: str) -> None:
        """
        Replace a file's content entirely.

        Raises:
            NotFound: If nothing exists at `path`.
            NotAFile: If `path` is a directory.
        """
        path = paths.normalize(path)
        node = self.get_node(path)
        if node is None:
            raise NotFound(f"File not found: {path}", path=path)
        if not isinstance(node, FileNode):
            raise NotAFile(f"Path is a directory, not a file: {path}", path=path)
        node.content = content
        logger.debug("Updated file %s (%d chars)", path, len(content))

    def list_directory(self, path: str = paths.ROOT) -> list[Node]:
        """
        List a directory's children in insertion order.

        Raises:
            NotFound: If nothing exists at `path`.
            NotADirectory: If `path` is a file.
        """
        path = paths.normalize(path)
        node = self.get_node(path)
        if node is None:
            raise NotFound(f"Directory not found: {path}", path=path)
        if not isinstance(node, DirectoryNode):
            raise NotADirectory(f"Path is a file, not a directory: {path}", path=path)
        return list(node.children.values())

    def walk(self) -> Iterator[Node]:
        """Yield every node pre-order, starting with the root."""
        stack: list[Node] = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, DirectoryNode):
                stack.extend(reversed(list(node.children.values())))

    def get_all_files(self) -> dict[str, str]:
        """Map every file path to its content. Directories are excluded."""
        return {
            node.path: node.content
            for node in self.walk()
            if isinstance(node, FileNode)
        }

    # =========================================================================
    # Delete / rename / reset
    # =========================================================================

    def delete_file(self, path: str) -> bool:
        """
        Remove a file, or a directory together with all its descendants.

        Deleting "/" empties the tree but keeps the root directory itself.

        Returns:
            False if nothing existed at `path` (the tree is left unchanged).
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            self.reset()
            return True
        node = self.get_node(path)
        if node is None:
            return False
        parent = node.parent
        del parent.children[paths.filename(path)]
        node.parent = None
        self.history.discard(path)
        logger.debug("Deleted %s", path)
        return True

    def rename(self, old_path: str, new_path: str) -> bool:
        """
        Move a node (and its whole subtree) to a new path.

        Missing ancestor directories of `new_path` are created. Every
        descendant path is rewritten from the `old_path` prefix to the
        `new_path` prefix before the subtree is reattached, so the tree is
        never observable half-renamed.

        Returns:
            False if `old_path` does not exist, `new_path` is occupied, the
            root would move, the destination lies inside the source, or an
            ancestor of the destination is a file.
        """
        old_path = paths.normalize(old_path)
        new_path = paths.normalize(new_path)
        if old_path == paths.ROOT or new_path == paths.ROOT:
            return False
        node = self.get_node(old_path)
        if node is None or self.exists(new_path):
            return False
        if isinstance(node, DirectoryNode) and paths.is_within(new_path, old_path):
            return False
        try:
            self._check_no_file_ancestor(new_path)
        except NotADirectory:
            return False

        old_parent = node.parent
        del old_parent.children[paths.filename(old_path)]

        stack: list[Node] = [node]
        while stack:
            current = stack.pop()
            current.path = paths.rebase(current.path, old_path, new_path)
            if isinstance(current, DirectoryNode):
                stack.extend(current.children.values())

        new_parent = self._ensure_directory(paths.parent_of(new_path))
        new_parent.children[paths.filename(new_path)] = node
        node.parent = new_parent
        self.history.move(old_path, new_path)
        logger.debug("Renamed %s -> %s", old_path, new_path)
        return True

    def reset(self) -> None:
        """Empty the tree back to a bare root directory."""
        for child in self.root.children.values():
            child.parent = None
        self.root.children = {}
        self.history.clear()
        logger.debug("Reset file system")

    def __len__(self) -> int:
        """Number of nodes, not counting the root."""
        return sum(1 for _ in self.walk()) - 1

    def __repr__(self) -> str:
        return f"VirtualFileSystem(nodes={len(self)})"
