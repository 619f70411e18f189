"""Tests for saving and loading containers."""

import logging
import pickle

import pytest

from sortedtreelib import (
    LockedContainer,
    MaxHeap,
    PersistenceError,
    RedBlackTree,
    Tree24,
    AVLTree,
    create,
    deserialize,
    get_levels,
    load,
    save,
    serialize,
)
from sortedtreelib.registry import STRUCTURES
from sortedtreelib.testing import check_invariants

VALUES = [41, 38, 31, 12, 19, 8, 45, 50, 3, 27]


@pytest.fixture(params=list(STRUCTURES), ids=lambda kind: kind.value)
def filled(request):
    container = create(request.param)
    container.update(VALUES)
    return container


class TestRoundTrip:
    """A loaded container is indistinguishable from the saved one."""

    def test_bytes_round_trip(self, filled):
        loaded = deserialize(serialize(filled))

        assert type(loaded) is type(filled)
        assert loaded.traverse() == filled.traverse()
        assert get_levels(loaded) == get_levels(filled)
        check_invariants(loaded)

    def test_file_round_trip(self, filled, tmp_path):
        path = tmp_path / "tree.bin"
        save(filled, path)
        loaded = load(str(path))

        assert loaded.type_name() == filled.type_name()
        assert loaded.traverse() == sorted(VALUES)

    def test_loaded_container_stays_mutable(self, filled):
        loaded = deserialize(serialize(filled))

        for value in VALUES[:5]:
            assert loaded.delete(value) is True
            check_invariants(loaded)
        loaded.update(range(100, 120))
        check_invariants(loaded)

    def test_red_black_parent_links_are_rebuilt(self):
        tree = RedBlackTree()
        tree.update(range(20))
        loaded = deserialize(serialize(tree))

        root = loaded._root
        assert root.parent is None
        assert root.left.parent is root
        assert root.right.parent is root
        check_invariants(loaded)

    def test_empty_container_round_trip(self):
        loaded = deserialize(serialize(Tree24()))

        assert isinstance(loaded, Tree24)
        assert loaded.is_empty()

    def test_locked_container_saves_inner(self):
        locked = LockedContainer(AVLTree())
        locked.update([3, 1, 2])
        loaded = deserialize(serialize(locked))

        assert type(loaded) is AVLTree
        assert loaded.traverse() == [1, 2, 3]


class TestFailures:
    """Every failure surfaces as PersistenceError."""

    def test_payload_that_is_not_a_container(self, caplog):
        data = pickle.dumps([1, 2, 3])

        with caplog.at_level(logging.WARNING, logger="sortedtreelib"):
            with pytest.raises(PersistenceError, match="not a valid container"):
                deserialize(data)

        assert "list" in caplog.text

    def test_corrupt_bytes(self):
        with pytest.raises(PersistenceError):
            deserialize(b"not a pickle")

    def test_truncated_bytes(self):
        tree = AVLTree()
        tree.update(range(50))
        data = serialize(tree)

        with pytest.raises(PersistenceError) as excinfo:
            deserialize(data[:len(data) // 2])

        assert excinfo.value.__cause__ is not None

    def test_oversized_frame_length(self):
        tree = AVLTree()
        tree.update(range(30))
        data = bytearray(serialize(tree))
        assert data[2] == pickle.FRAME[0]

        # Frame length far beyond what the platform can address
        data[3:11] = b"\xff" * 8

        with pytest.raises(PersistenceError) as excinfo:
            deserialize(bytes(data))

        assert isinstance(excinfo.value.__cause__, OverflowError)

    def test_node_missing_a_field(self, caplog):
        tree = AVLTree()
        tree.update(range(10))
        del tree._root.left.height
        data = serialize(tree)

        with caplog.at_level(logging.WARNING, logger="sortedtreelib"):
            with pytest.raises(PersistenceError, match="corrupt"):
                deserialize(data)

        assert "Rejected corrupt AVLTree" in caplog.text

    def test_nodes_out_of_order(self):
        tree = RedBlackTree()
        tree.update(range(10))
        tree._root.left.value = 99
        data = serialize(tree)

        with pytest.raises(PersistenceError, match="corrupt"):
            deserialize(data)

    def test_broken_balance_is_rejected(self):
        tree = Tree24()
        tree.update(range(100))
        # Drop a whole subtree so leaves end up at different depths
        tree._root.children[0].children = []
        tree._size = len(tree.traverse())
        data = serialize(tree)

        with pytest.raises(PersistenceError, match="corrupt"):
            deserialize(data)

    def test_mangled_heap_storage(self):
        heap = MaxHeap()
        heap.update([9, 5, 7])
        heap._heap.append("x")
        data = serialize(heap)

        with pytest.raises(PersistenceError):
            deserialize(data)

    def test_serialize_rejects_non_container(self):
        with pytest.raises(PersistenceError):
            serialize([1, 2, 3])

    def test_unpicklable_value(self):
        tree = AVLTree()
        tree.insert(lambda: 0)

        with pytest.raises(PersistenceError):
            serialize(tree)

    def test_failed_save_leaves_existing_file(self, tmp_path):
        path = tmp_path / "tree.bin"
        path.write_bytes(b"previous")
        tree = AVLTree()
        tree.insert(lambda: 0)

        with pytest.raises(PersistenceError):
            save(tree, path)

        assert path.read_bytes() == b"previous"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(PersistenceError):
            load(tmp_path / "missing.bin")

    def test_save_into_missing_directory(self, tmp_path):
        with pytest.raises(PersistenceError):
            save(AVLTree(), tmp_path / "no" / "such" / "dir" / "tree.bin")

    def test_save_and_load_are_logged(self, tmp_path, caplog):
        path = tmp_path / "tree.bin"
        tree = Tree24()
        tree.update([1, 2, 3])

        with caplog.at_level(logging.INFO, logger="sortedtreelib"):
            save(tree, path)
            load(path)

        assert "Saved 2-4 Tree with 3 elements" in caplog.text
        assert "Loaded 2-4 Tree with 3 elements" in caplog.text
