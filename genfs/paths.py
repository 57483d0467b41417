"""
Path handling for the virtual file system.

Canonical paths are absolute, slash-delimited and case-sensitive. They never
end with a slash (except the root itself) and never contain empty segments.
"""

from __future__ import annotations

from genfs.errors import InvalidPath

ROOT = "/"
SEPARATOR = "/"


def normalize(raw: str) -> str:
    """
    Normalize a raw path string into its canonical form.

    A single trailing slash is dropped, "." segments are removed and ".."
    segments are resolved against the preceding segment.

    Args:
        raw: The path as supplied by the caller.

    Returns:
        The canonical path.

    Raises:
        InvalidPath: If the path is empty, relative, contains empty segments,
            or climbs above the root.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidPath("Path must be a non-empty string", path=raw or None)
    if "\x00" in raw:
        raise InvalidPath(f"Path contains a NUL character: {raw!r}", path=raw)
    if not raw.startswith(SEPARATOR):
        raise InvalidPath(f"Path must be absolute (start with '/'): {raw}", path=raw)
    if raw == ROOT:
        return ROOT

    body = raw[1:]
    if body.endswith(SEPARATOR):
        body = body[:-1]

    resolved: list[str] = []
    for part in body.split(SEPARATOR):
        if part == "":
            raise InvalidPath(f"Path contains an empty segment: {raw}", path=raw)
        if part == ".":
            continue
        if part == "..":
            if not resolved:
                raise InvalidPath(f"Path escapes the root: {raw}", path=raw)
            resolved.pop()
            continue
        resolved.append(part)

    if not resolved:
        return ROOT
    return SEPARATOR + SEPARATOR.join(resolved)


def segments(path: str) -> list[str]:
    """Split a canonical path into its names. The root has no segments."""
    if path == ROOT:
        return []
    return path[1:].split(SEPARATOR)


def parent_of(path: str) -> str | None:
    """Get the containing directory's path, or None for the root."""
    if path == ROOT:
        return None
    head = path.rsplit(SEPARATOR, 1)[0]
    return head or ROOT


def filename(path: str) -> str:
    """Get the final segment of a path, or "root" for the root path."""
    if not path or path == ROOT:
        return "root"
    return path.rsplit(SEPARATOR, 1)[-1] or "root"


def join(parent: str, name: str) -> str:
    """Build the path of a child named `name` inside `parent`."""
    if parent == ROOT:
        return ROOT + name
    return parent + SEPARATOR + name


def is_within(path: str, ancestor: str) -> bool:
    """Check whether `path` equals `ancestor` or lies beneath it."""
    if ancestor == ROOT:
        return True
    return path == ancestor or path.startswith(ancestor + SEPARATOR)


def rebase(path: str, old_prefix: str, new_prefix: str) -> str:
    """Replace the `old_prefix` part of `path` with `new_prefix`."""
    if path == old_prefix:
        return new_prefix
    suffix = path[len(old_prefix):]
    if new_prefix == ROOT:
        return suffix
    return new_prefix + suffix
