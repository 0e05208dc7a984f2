"""Unit tests for editor/code_blocks.py"""

import pytest

from mdblocks.editor.code_blocks import detect_code_fence_start, is_convertible_block
from mdblocks.editor.tree import Element


@pytest.fixture(name="paragraph")
def paragraph_fixture(session):
    """A single settled paragraph with the caret inside it."""
    session.load("Hello world")
    p = session.root.children[0]
    session.selection.set_caret(p, 3)
    return p


@pytest.mark.parametrize("text, language", [
    ("```python", "python"),
    ("  ```c++  ", "c++"),
    ("```", None),
    ("```python extra", None),
    ("text ```js", None),
])
def test_detect_code_fence_start(text, language):
    """Only a whole-line fence with a language is detected."""
    assert detect_code_fence_start(text) == language


def test_convertible_blocks():
    """Paragraphs, divs and headings convert; list items and islands do not."""
    assert is_convertible_block(Element("h3"))
    assert not is_convertible_block(Element("li"))
    assert not is_convertible_block(Element("div", {"data-code-block-id": "cb-1"}))


def test_toggle_paragraph_to_island(session, paragraph):
    """The paragraph is replaced in place by an island seeded with its text."""
    session.editor.toggle()
    island = session.root.children[0]

    assert island.island_id == "cb-1"
    assert island.get_attribute("contenteditable") == "false"
    assert "code-block-wrapper" in island.classes
    assert session.store.get("cb-1").content == "Hello world"
    assert session.store.get("cb-1").language == ""
    assert session.editor.pending_focus == {"cb-1"}
    assert session.changes == 1


def test_toggle_round_trip(session, paragraph):
    """Converting to an island and back restores the paragraph text."""
    session.editor.toggle()
    session.flush()
    assert session.editor.is_in_code_block()

    session.editor.toggle()
    p = session.root.children[0]
    assert p.tag == "p"
    assert p.text == "Hello world"
    assert "cb-1" not in session.store
    assert session.selection.node is p
    assert session.selection.offset == len("Hello world")

    session.flush()
    assert not session.lifecycle.is_mounted("cb-1")


def test_toggle_back_uses_edited_content(session, paragraph):
    """Content typed into the island is what the paragraph receives."""
    session.editor.toggle()
    session.flush()
    session.lifecycle.get_instance("cb-1").renderer.edit("edited")
    session.editor.toggle(session.root.children[0])
    assert session.root.children[0].text == "edited"


def test_toggle_on_list_item_is_noop(session):
    """List items are not converted."""
    session.load("- item")
    li = session.root.children[0].children[0]
    session.selection.set_caret(li)
    session.editor.toggle()
    assert session.root.children[0].tag == "ul"
    assert len(session.store) == 0
    assert session.changes == 0


def test_toggle_without_target_is_noop(session):
    """No caret means nothing to toggle."""
    session.load("text")
    session.editor.toggle()
    assert session.root.children[0].tag == "p"


def test_detect_fence_pattern(session):
    """A block holding only ```lang becomes an empty island with that language."""
    p = session.root.append(Element("p", text="```python"))
    session.flush()
    assert session.editor.detect_fence_pattern(p)
    island = session.root.children[0]
    assert session.store.get(island.island_id).language == "python"
    assert session.store.get(island.island_id).content == ""
    assert island.island_id in session.editor.pending_focus


def test_bare_fence_is_not_converted(session):
    """``` without a language leaves the block alone."""
    p = session.root.append(Element("p", text="```"))
    assert not session.editor.detect_fence_pattern(p)
    assert session.root.children[0] is p


def test_caret_queries(session):
    """Language and id are reported only while the caret is inside an island."""
    session.load("```js\nx\n```")
    assert session.editor.current_language() is None
    pre = session.lifecycle.get_instance("cb-1").renderer.editable_surface
    session.selection.set_caret(pre)
    assert session.editor.current_code_block_id() == "cb-1"
    assert session.editor.current_language() == "js"
    session.editor.set_language("ts")
    assert session.store.get("cb-1").language == "ts"
    assert pre.get_attribute("data-format") == "typescript"


def test_remove_code_block(session):
    """Removing a block drops both its state and its island."""
    session.load("```js\nx\n```")
    session.editor.remove_code_block("cb-1")
    assert session.root.find_island("cb-1") is None
    assert session.editor.get_code_block("cb-1") is None
    session.flush()
    assert session.lifecycle.mounted_ids == []
