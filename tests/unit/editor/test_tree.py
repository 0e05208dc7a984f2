"""Unit tests for editor/tree.py and editor/scheduler.py"""

from mdblocks.editor.code_blocks import create_island_element
from mdblocks.editor.scheduler import Scheduler
from mdblocks.editor.tree import Document, Element


def _observed():
    scheduler = Scheduler()
    root = Document(scheduler)
    batches = []
    root.mutations.subscribe(batches.append)
    return scheduler, root, batches


def test_mutations_are_delivered_once_per_turn():
    """Several edits in one turn arrive as a single batch after the caller returns."""
    scheduler, root, batches = _observed()
    a = root.append(Element("p", text="a"))
    b = Element("p", text="b")
    a.replace_with(b)
    assert batches == []

    scheduler.run_pending()
    assert len(batches) == 1
    first, second = batches[0]
    assert first.added == [a]
    assert second.added == [b] and second.removed == [a]


def test_detached_edits_are_not_recorded():
    """Edits outside a document produce no records."""
    scheduler, root, batches = _observed()
    loose = Element("div")
    loose.append(Element("p"))
    assert scheduler.run_pending() == 0
    assert batches == []


def test_unsubscribe_stops_delivery():
    """An unsubscribed listener receives nothing."""
    scheduler = Scheduler()
    root = Document(scheduler)
    batches = []
    unsubscribe = root.mutations.subscribe(batches.append)
    unsubscribe()
    root.append(Element("p"))
    scheduler.run_pending()
    assert batches == []


def test_island_capabilities():
    """Islands expose their id, mount point and are found in subtrees."""
    island = create_island_element("cb-9", "x = 1", "python")
    section = Element("section", children=[Element("p"), island])
    assert island.island_id == "cb-9"
    assert island.find_mount_point().get_attribute("data-language") == "python"
    assert list(section.iter_islands()) == [island]
    assert list(island.iter_islands()) == [island]
    assert section.find_island("cb-9") is island
    assert Element("p").island_id is None


def test_siblings_and_text_content():
    """Sibling navigation and text concatenation follow document order."""
    a, b = Element("p", text="a"), Element("p", text="b")
    parent = Element("div", children=[a, b])
    assert a.next_sibling is b and b.previous_sibling is a
    assert a.previous_sibling is None and b.next_sibling is None
    assert parent.text_content == "ab"


def test_scheduler_runs_callbacks_queued_while_draining():
    """Callbacks scheduled by callbacks run in the same drain."""
    scheduler = Scheduler()
    calls = []
    scheduler.call_soon(lambda: scheduler.call_soon(calls.append, "inner"))
    scheduler.call_soon(calls.append, "outer")
    assert scheduler.run_pending() == 3
    assert calls == ["outer", "inner"]
