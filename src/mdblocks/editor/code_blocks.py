"""Convert editable blocks to code islands and back"""

import logging
import re
from typing import Callable, Optional

from mdblocks.editor.selection import Selection
from mdblocks.editor.store import CodeBlockState, CodeBlockStore
from mdblocks.editor.tree import ISLAND_ATTR, MOUNT_POINT_CLASS, Element


logger = logging.getLogger(__name__)

CONVERTIBLE_TAGS = frozenset({"p", "div", "h1", "h2", "h3", "h4", "h5", "h6"})
FENCE_START_RE = re.compile(r'^```([\w+#.-]+)$')


def is_convertible_block(el: Element) -> bool:
    return el.tag in CONVERTIBLE_TAGS and el.island_id is None


def is_island(el: Element) -> bool:
    return el.has_attribute(ISLAND_ATTR)


def detect_code_fence_start(text: str) -> Optional[str]:
    """Return the language of a lone ```` ```lang ```` line, else None (bare fences included)."""
    match = FENCE_START_RE.match(text.strip())
    return match.group(1) if match else None


def create_island_element(island_id: str, content: str = "", language: str = "",
                          auto_detected: bool = False) -> Element:
    """Build a non-editable island wrapper holding an empty mount point."""
    attrs = {"class": MOUNT_POINT_CLASS, "data-content": content, "data-language": language}
    if auto_detected:
        attrs["data-auto-detected"] = "true"
    return Element("div", {
        "class": "code-block-wrapper",
        "contenteditable": "false",
        ISLAND_ATTR: island_id,
    }, children=[Element("div", attrs)])


class CodeBlockEditor:
    """State machine moving blocks between editable text and code islands.

    Islands created here are marked pending focus; when the lifecycle reports
    the island mounted, the renderer's surface receives the caret.
    """

    def __init__(self, root: Element, selection: Selection, store: CodeBlockStore, *,
                 new_id: Callable[[], str], on_content_change: Optional[Callable[[], None]] = None):
        self.root = root
        self.selection = selection
        self.store = store
        self.new_id = new_id
        self.on_content_change = on_content_change
        self.pending_focus: set[str] = set()

    def _changed(self) -> None:
        if self.on_content_change is not None:
            self.on_content_change()

    # --- targets ---

    def _caret_island(self) -> Optional[Element]:
        node = self.selection.current_node()
        return node.closest(is_island) if node is not None else None

    def _target_block(self) -> Optional[Element]:
        node = self.selection.current_node()
        while node is not None and node is not self.root:
            if is_island(node) or node.tag == "li" or is_convertible_block(node):
                return node
            node = node.parent
        return None

    # --- transitions ---

    def _insert_island(self, block: Element, content: str, language: str) -> str:
        island_id = self.new_id()
        self.store.register(island_id, content, language)
        block.replace_with(create_island_element(island_id, content, language))
        self.pending_focus.add(island_id)
        return island_id

    def _island_to_paragraph(self, island: Element) -> Element:
        island_id = island.island_id or ""
        state = self.store.remove(island_id)
        self.pending_focus.discard(island_id)
        paragraph = Element("p", text=state.content if state else "")
        island.replace_with(paragraph)
        return paragraph

    def toggle(self, target: Optional[Element] = None) -> None:
        island = target.closest(is_island) if target is not None else self._caret_island()
        if island is not None:
            paragraph = self._island_to_paragraph(island)
            self.selection.place_at_end(paragraph)
            self._changed()
            return

        block = target if target is not None else self._target_block()
        if block is None:
            logger.debug("No block to toggle")
            return
        if not is_convertible_block(block):
            logger.debug("Block <%s> cannot become a code block", block.tag)
            return
        self._insert_island(block, block.text_content, "")
        self._changed()

    def detect_fence_pattern(self, target: Optional[Element] = None) -> bool:
        """Convert a block whose whole text is ```` ```lang ```` into an empty island."""
        block = target if target is not None else self._target_block()
        if block is None or not is_convertible_block(block) or block.closest(is_island):
            return False
        language = detect_code_fence_start(block.text_content)
        if language is None:
            return False
        self._insert_island(block, "", language)
        self._changed()
        return True

    def handle_mounted(self, island_id: str, instance) -> None:
        if island_id not in self.pending_focus:
            return
        self.pending_focus.discard(island_id)
        surface = instance.renderer.editable_surface
        if surface is not None:
            self.selection.focus(surface)

    # --- caret queries ---

    def is_in_code_block(self) -> bool:
        return self._caret_island() is not None

    def current_code_block_id(self) -> Optional[str]:
        island = self._caret_island()
        return island.island_id if island is not None else None

    def current_language(self) -> Optional[str]:
        island_id = self.current_code_block_id()
        if island_id is None:
            return None
        state = self.store.get(island_id)
        return state.language if state else ""

    def set_language(self, language: str) -> None:
        island_id = self.current_code_block_id()
        if island_id is not None:
            self.update_language(island_id, language)

    # --- state access ---

    def get_code_block(self, island_id: str) -> Optional[CodeBlockState]:
        return self.store.get(island_id)

    def register_code_block(self, island_id: str, content: str = "", language: str = "") -> None:
        self.store.register(island_id, content, language)

    def update_content(self, island_id: str, content: str) -> None:
        if self.store.update_content(island_id, content):
            self._changed()

    def update_language(self, island_id: str, language: str) -> None:
        if self.store.update_language(island_id, language):
            self._changed()

    def remove_code_block(self, island_id: str) -> None:
        self.store.remove(island_id)
        self.pending_focus.discard(island_id)
        island = self.root.find_island(island_id)
        if island is not None:
            island.remove()
        self._changed()

    # --- leaving an island ---

    def exit_code_block(self, island_id: str) -> None:
        """Open an empty paragraph after the island and move the caret into it."""
        island = self.root.find_island(island_id)
        if island is None:
            logger.debug("Cannot exit unknown island %s", island_id)
            return
        paragraph = island.insert_after(Element("p"))
        self.selection.place_at_start(paragraph)
        self._changed()

    def delete_code_block(self, island_id: str) -> None:
        island = self.root.find_island(island_id)
        if island is None:
            logger.debug("Cannot delete unknown island %s", island_id)
            return
        previous, following = island.previous_sibling, island.next_sibling
        parent = island.parent
        self.store.remove(island_id)
        self.pending_focus.discard(island_id)
        island.remove()

        if previous is not None:
            self.selection.place_at_end(previous)
        elif following is not None:
            self.selection.place_at_start(following)
        elif parent is not None:
            self.selection.place_at_start(parent.append(Element("p")))
        self._changed()
