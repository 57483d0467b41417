"""
Conversion between a live VirtualFileSystem and its flat transport form.

The transport form maps canonical paths to descriptors::

    {
        "/App.jsx": {"type": "file", "content": "<App/>"},
        "/components": {"type": "directory"},
    }

It is the only representation exchanged with the persistence layer and the
request/response boundary of the enclosing service.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from genfs import paths
from genfs.errors import Corrupt, GenFSError
from genfs.types import DirectoryNode, FileNode
from genfs.vfs import VirtualFileSystem


class SerializedNode(BaseModel):
    """Transport descriptor for one node."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["file", "directory"]
    content: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        if self.type == "file":
            return {"type": "file", "content": self.content or ""}
        return {"type": "directory"}


def serialize(vfs: VirtualFileSystem) -> dict[str, dict[str, Any]]:
    """
    Snapshot the whole tree as a flat mapping.

    Nodes are emitted pre-order, so children keep their insertion order when
    the snapshot is deserialized again. The root is implied and not emitted.
    """
    result: dict[str, dict[str, Any]] = {}
    for node in vfs.walk():
        if node is vfs.root:
            continue
        if isinstance(node, FileNode):
            result[node.path] = {"type": "file", "content": node.content}
        else:
            result[node.path] = {"type": "directory"}
    return result


def _iter_entries(
    data: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> Iterable[tuple[str, Any]]:
    if isinstance(data, Mapping):
        return data.items()
    return data


def deserialize(
    data: Mapping[str, Any] | Iterable[tuple[str, Any]],
    vfs: VirtualFileSystem | None = None,
) -> VirtualFileSystem:
    """
    Rebuild a tree from its flat transport form.

    Entries may arrive in any order: ancestor directories are created on
    demand, and a later directory entry for an already-created ancestor is
    accepted.

    Args:
        data: Mapping of path to descriptor, or an iterable of
            (path, descriptor) pairs (which allows duplicate detection).
        vfs: Existing (normally empty) instance to populate. A new one is
            created if omitted.

    Returns:
        The populated VirtualFileSystem.

    Raises:
        Corrupt: If a descriptor is invalid, a path is malformed, or two
            entries disagree about a path.
    """
    vfs = vfs if vfs is not None else VirtualFileSystem()
    declared: dict[str, SerializedNode] = {}

    for raw_path, raw_descriptor in _iter_entries(data):
        try:
            path = paths.normalize(raw_path)
        except GenFSError as e:
            raise Corrupt(f"Invalid path in snapshot: {e.message}", path=raw_path) from e

        try:
            descriptor = SerializedNode.model_validate(raw_descriptor)
        except ValidationError as e:
            raise Corrupt(
                f"Invalid descriptor for {path}: {e.errors()[0]['msg']}", path=path
            ) from e

        if descriptor.type == "directory" and descriptor.content is not None:
            raise Corrupt(f"Directory entry carries content: {path}", path=path)

        previous = declared.get(path)
        if previous is not None and previous.to_dict() != descriptor.to_dict():
            raise Corrupt(f"Conflicting entries for {path}", path=path)
        declared[path] = descriptor

        _apply_entry(vfs, path, descriptor)

    return vfs


def _apply_entry(vfs: VirtualFileSystem, path: str, descriptor: SerializedNode) -> None:
    existing = vfs.get_node(path)

    if descriptor.type == "directory":
        if existing is None:
            try:
                vfs.create_directory(path, parents=True)
            except GenFSError as e:
                raise Corrupt(f"Cannot place directory {path}: {e.message}", path=path) from e
        elif not isinstance(existing, DirectoryNode):
            raise Corrupt(f"Directory entry collides with a file: {path}", path=path)
        return

    if path == paths.ROOT:
        raise Corrupt("The root path must be a directory", path=path)
    if existing is not None:
        if isinstance(existing, DirectoryNode):
            raise Corrupt(f"File entry collides with a directory: {path}", path=path)
        # Identical duplicate, already applied
        return
    try:
        vfs.create_file_with_parents(path, descriptor.content or "")
    except GenFSError as e:
        raise Corrupt(f"Cannot place file {path}: {e.message}", path=path) from e


def to_json(vfs: VirtualFileSystem, **kwargs: Any) -> str:
    """Serialize the tree to the JSON blob stored by the persistence layer."""
    return json.dumps(serialize(vfs), **kwargs)


class _Pairs(list):
    """Key/value pairs of a decoded JSON object, in document order."""


def from_json(text: str, vfs: VirtualFileSystem | None = None) -> VirtualFileSystem:
    """
    Rebuild a tree from a JSON blob produced by `to_json`.

    Raises:
        Corrupt: If the text is not a JSON object or describes an invalid tree.
    """
    try:
        pairs = json.loads(text, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as e:
        raise Corrupt(f"Snapshot is not valid JSON: {e.msg}") from e
    if not isinstance(pairs, _Pairs):
        raise Corrupt("Snapshot must be a JSON object")
    # Nested descriptors also arrive as pair lists; turn those back into dicts
    entries = [
        (path, dict(descriptor) if isinstance(descriptor, _Pairs) else descriptor)
        for path, descriptor in pairs
    ]
    return deserialize(entries, vfs)
