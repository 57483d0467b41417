"""Tests for snapshot serialization."""

import json

import pytest

from genfs import VirtualFileSystem, deserialize, from_json, serialize, to_json
from genfs.errors import Corrupt


def _structure(vfs):
    return [(node.path, node.node_type.value, getattr(node, "content", None)) for node in vfs.walk()]


class TestSerialize:
    """Test serialize()."""

    def test_empty_tree(self, vfs):
        assert serialize(vfs) == {}

    def test_flat_mapping(self, populated_vfs):
        data = serialize(populated_vfs)

        assert data["/App.jsx"] == {
            "type": "file",
            "content": "import Button from './components/Button';\n",
        }
        assert data["/components"] == {"type": "directory"}
        assert data["/assets"] == {"type": "directory"}
        assert "/" not in data

    def test_output_is_json_compatible(self, populated_vfs):
        assert json.loads(json.dumps(serialize(populated_vfs))) == serialize(populated_vfs)


class TestRoundTrip:
    """deserialize(serialize(T)) reproduces T."""

    def test_round_trip(self, populated_vfs):
        restored = deserialize(serialize(populated_vfs))

        assert _structure(restored) == _structure(populated_vfs)

    def test_round_trip_after_mutations(self, vfs):
        vfs.create_file_with_parents("/src/App.jsx", "app")
        vfs.create_file_with_parents("/src/lib/util.js", "util")
        vfs.create_directory("/empty")
        vfs.rename("/src/lib", "/lib")
        vfs.delete_file("/src/App.jsx")
        vfs.create_file("/index.js", "")

        restored = deserialize(serialize(vfs))

        assert _structure(restored) == _structure(vfs)
        assert restored.is_dir("/src")
        assert restored.is_dir("/empty")

    def test_json_round_trip(self, populated_vfs):
        restored = from_json(to_json(populated_vfs))

        assert _structure(restored) == _structure(populated_vfs)

    def test_parent_pointers_rebuilt(self, populated_vfs):
        restored = deserialize(serialize(populated_vfs))

        node = restored.get_node("/components/forms/Input.jsx")
        assert node.parent is restored.get_node("/components/forms")


class TestDeserialize:
    """Test deserialize() tolerance and corruption checks."""

    def test_children_before_parents(self):
        vfs = deserialize(
            {
                "/a/b/c.txt": {"type": "file", "content": "c"},
                "/a/b": {"type": "directory"},
                "/a": {"type": "directory"},
            }
        )

        assert vfs.is_dir("/a/b")
        assert vfs.read_file("/a/b/c.txt") == "c"

    def test_missing_content_is_empty(self):
        vfs = deserialize({"/a.txt": {"type": "file"}})

        assert vfs.read_file("/a.txt") == ""

    def test_extra_keys_ignored(self):
        vfs = deserialize(
            {"/a.txt": {"type": "file", "name": "a.txt", "path": "/a.txt", "content": "x"}}
        )

        assert vfs.read_file("/a.txt") == "x"

    def test_root_entry_accepted(self):
        vfs = deserialize({"/": {"type": "directory"}, "/a.txt": {"type": "file", "content": ""}})

        assert vfs.exists("/a.txt")

    def test_populates_given_instance(self):
        target = VirtualFileSystem()

        result = deserialize({"/a.txt": {"type": "file", "content": ""}}, target)

        assert result is target
        assert target.exists("/a.txt")

    def test_file_collides_with_directory(self):
        with pytest.raises(Corrupt):
            deserialize(
                {
                    "/a/b.txt": {"type": "file", "content": ""},
                    "/a": {"type": "file", "content": ""},
                }
            )

    def test_directory_collides_with_file(self):
        with pytest.raises(Corrupt):
            deserialize(
                {
                    "/a": {"type": "file", "content": ""},
                    "/a/b": {"type": "directory"},
                }
            )

    def test_duplicate_path_different_kinds(self):
        with pytest.raises(Corrupt):
            deserialize(
                [
                    ("/a", {"type": "directory"}),
                    ("/a", {"type": "file", "content": ""}),
                ]
            )

    def test_duplicate_identical_entries_tolerated(self):
        vfs = deserialize(
            [
                ("/a.txt", {"type": "file", "content": "x"}),
                ("/a.txt", {"type": "file", "content": "x"}),
            ]
        )

        assert vfs.read_file("/a.txt") == "x"

    def test_duplicate_files_with_different_content(self):
        with pytest.raises(Corrupt):
            deserialize(
                [
                    ("/a.txt", {"type": "file", "content": "x"}),
                    ("/a.txt", {"type": "file", "content": "y"}),
                ]
            )

    def test_unknown_type(self):
        with pytest.raises(Corrupt):
            deserialize({"/a": {"type": "symlink"}})

    def test_directory_with_content(self):
        with pytest.raises(Corrupt):
            deserialize({"/a": {"type": "directory", "content": "x"}})

    def test_invalid_path(self):
        with pytest.raises(Corrupt):
            deserialize({"relative.txt": {"type": "file", "content": ""}})

    def test_root_as_file(self):
        with pytest.raises(Corrupt):
            deserialize({"/": {"type": "file", "content": ""}})


class TestFromJson:
    """Test from_json()."""

    def test_invalid_json(self):
        with pytest.raises(Corrupt):
            from_json("{not json")

    def test_not_an_object(self):
        with pytest.raises(Corrupt):
            from_json('["/a.txt"]')

    def test_duplicate_keys_detected(self):
        text = '{"/a": {"type": "directory"}, "/a": {"type": "file", "content": ""}}'

        with pytest.raises(Corrupt):
            from_json(text)

    def test_empty_object(self):
        assert from_json("{}").get_all_files() == {}
