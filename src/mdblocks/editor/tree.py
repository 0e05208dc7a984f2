"""Minimal editable element tree and its mutation channel"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from mdblocks.editor.scheduler import Scheduler


ISLAND_ATTR = "data-code-block-id"
MOUNT_POINT_CLASS = "code-viewer-mount-point"


class Element:
    """A tree node with a tag, attributes, own text and child elements.

    Structural edits made while the node is attached to a Document are reported
    to that document's MutationChannel.
    """

    def __init__(self, tag: str, attrs: Optional[dict[str, str]] = None, text: str = "",
                 children: Optional[list["Element"]] = None):
        self.tag = tag.lower()
        self.attrs: dict[str, str] = dict(attrs or {})
        self.text = text
        self.parent: Optional[Element] = None
        self.children: list[Element] = []
        for child in children or []:
            self._attach(child, len(self.children))

    def __repr__(self) -> str:
        return f"<{self.tag} {self.attrs!r}>"

    # --- attributes ---

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self.attrs

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    @property
    def text_content(self) -> str:
        return self.text + "".join(c.text_content for c in self.children)

    # --- traversal ---

    @property
    def document(self) -> Optional["Document"]:
        node = self
        while node.parent is not None:
            node = node.parent
        return node if isinstance(node, Document) else None

    def iter(self) -> Iterator["Element"]:
        """Yield this element and all descendants in document order."""
        yield self
        for child in list(self.children):
            yield from child.iter()

    def closest(self, predicate: Callable[["Element"], bool]) -> Optional["Element"]:
        node: Optional[Element] = self
        while node is not None:
            if predicate(node):
                return node
            node = node.parent
        return None

    def is_inside(self, ancestor: "Element") -> bool:
        return self.closest(lambda e: e is ancestor) is not None

    @property
    def previous_sibling(self) -> Optional["Element"]:
        if self.parent is None:
            return None
        idx = self.parent.children.index(self)
        return self.parent.children[idx - 1] if idx > 0 else None

    @property
    def next_sibling(self) -> Optional["Element"]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        idx = siblings.index(self)
        return siblings[idx + 1] if idx + 1 < len(siblings) else None

    # --- island handle capabilities ---

    @property
    def island_id(self) -> Optional[str]:
        return self.attrs.get(ISLAND_ATTR) or None

    def find_mount_point(self) -> Optional["Element"]:
        for el in self.iter():
            if el is not self and MOUNT_POINT_CLASS in el.classes:
                return el
        return None

    def iter_islands(self) -> Iterator["Element"]:
        """Yield every island in this subtree, the subtree root included."""
        return (el for el in self.iter() if el.has_attribute(ISLAND_ATTR))

    def find_island(self, island_id: str) -> Optional["Element"]:
        return next((el for el in self.iter_islands() if el.island_id == island_id), None)

    # --- structural edits ---

    def _attach(self, child: "Element", index: int) -> None:
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.insert(index, child)

    def _record(self, added: tuple["Element", ...] = (), removed: tuple["Element", ...] = ()) -> None:
        doc = self.document
        if doc is not None:
            doc.mutations.record(added=list(added), removed=list(removed))

    def append(self, child: "Element") -> "Element":
        self._attach(child, len(self.children))
        self._record(added=(child,))
        return child

    def insert_after(self, new: "Element") -> "Element":
        if self.parent is None:
            raise ValueError("Cannot insert next to a detached element")
        parent = self.parent
        parent._attach(new, parent.children.index(self) + 1)
        parent._record(added=(new,))
        return new

    def replace_with(self, new: "Element") -> "Element":
        if self.parent is None:
            raise ValueError("Cannot replace a detached element")
        parent = self.parent
        if new.parent is not None:
            new.remove()
        idx = parent.children.index(self)
        parent.children[idx] = new
        new.parent = parent
        self.parent = None
        parent._record(added=(new,), removed=(self,))
        return new

    def remove(self) -> None:
        parent = self.parent
        if parent is None:
            return
        parent.children.remove(self)
        self.parent = None
        parent._record(removed=(self,))

    def clear(self) -> None:
        for child in list(self.children):
            child.remove()


@dataclass
class MutationBatch:
    added: list[Element] = field(default_factory=list)
    removed: list[Element] = field(default_factory=list)


MutationListener = Callable[[list[MutationBatch]], None]


class MutationChannel:
    """Collects mutation records and delivers them as one batch per scheduler turn."""

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._pending: list[MutationBatch] = []
        self._listeners: list[MutationListener] = []
        self._scheduled = False

    def subscribe(self, listener: MutationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def record(self, added: list[Element], removed: list[Element]) -> None:
        if not self._listeners:
            return
        self._pending.append(MutationBatch(added=added, removed=removed))
        if not self._scheduled:
            self._scheduled = True
            self._scheduler.call_soon(self._deliver)

    def _deliver(self) -> None:
        batch, self._pending = self._pending, []
        self._scheduled = False
        for listener in list(self._listeners):
            listener(batch)


class Document(Element):
    """Root of an editable tree; owns the mutation channel for everything beneath it."""

    def __init__(self, scheduler: Scheduler, children: Optional[list[Element]] = None):
        self.mutations = MutationChannel(scheduler)
        super().__init__("body", {"contenteditable": "true"}, children=children)
