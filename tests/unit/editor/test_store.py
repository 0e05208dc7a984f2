"""Unit tests for editor/store.py"""

import dataclasses

import pytest

from mdblocks.editor.store import CodeBlockStore


def test_register_and_update():
    """Updates replace the snapshot and notify subscribers."""
    store = CodeBlockStore()
    seen = []
    store.register("cb-1", "a", "js")
    store.subscribe("cb-1", seen.append)

    assert store.update_content("cb-1", "b")
    assert store.update_language("cb-1", "ts")
    assert store.get("cb-1").content == "b"
    assert store.get("cb-1").language == "ts"
    assert [s.content for s in seen] == ["b", "b"]


def test_snapshots_are_immutable():
    """States cannot be changed in place."""
    state = CodeBlockStore().register("cb-1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.content = "x"


def test_unknown_ids_are_ignored():
    """Updates to missing ids report False and change nothing."""
    store = CodeBlockStore()
    assert not store.update_content("nope", "x")
    assert not store.update_language("nope", "x")
    assert store.remove("nope") is None
    assert len(store) == 0


def test_remove_notifies_none():
    """Removal hands subscribers None."""
    store = CodeBlockStore()
    store.register("cb-1", "a")
    seen = []
    store.subscribe("cb-1", seen.append)
    assert store.remove("cb-1").content == "a"
    assert seen == [None]
    assert "cb-1" not in store
