"""Caret position within an editable tree"""

from typing import Optional

from mdblocks.editor.tree import Element


class Selection:
    def __init__(self, root: Element):
        self.root = root
        self.node: Optional[Element] = None
        self.offset = 0
        self.focused: Optional[Element] = None

    def set_caret(self, node: Element, offset: int = 0) -> None:
        self.node = node
        self.offset = offset

    def clear(self) -> None:
        self.node = None
        self.offset = 0
        self.focused = None

    def current_node(self) -> Optional[Element]:
        """The caret's element, or None when the caret is unset or outside the root."""
        if self.node is None or not self.node.is_inside(self.root):
            return None
        return self.node

    def place_at_start(self, el: Element) -> None:
        self.set_caret(el, 0)

    def place_at_end(self, el: Element) -> None:
        self.set_caret(el, len(el.text_content))

    def focus(self, el: Element) -> None:
        self.focused = el
        self.place_at_start(el)
