"""Island renderer protocol and the default plain-text renderer"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from mdblocks.editor.store import CodeBlockState, CodeBlockStore
from mdblocks.editor.tree import Element


LANGUAGE_ALIASES = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "yml": "yaml",
    "md": "markdown",
    "sh": "bash",
    "shell": "bash",
}


def map_language_to_format(language: str) -> str:
    """Normalise a fence language tag to the viewer's format name."""
    if not language:
        return "text"
    lang = language.strip().lower()
    return LANGUAGE_ALIASES.get(lang, lang)


def _noop(*_args) -> None:
    return None


@dataclass
class IslandMount:
    """Everything a renderer is handed when an island is mounted."""
    id: str
    wrapper: Element
    mount_point: Element
    auto_detected: bool = False
    readonly: bool = False
    on_content_change: Callable[[str], None] = _noop
    on_format_change: Callable[[str], None] = _noop
    on_exit: Callable[[], None] = _noop
    on_delete: Callable[[], None] = _noop


class IslandRenderer(Protocol):
    @property
    def editable_surface(self) -> Optional[Element]: ...

    def destroy(self) -> None: ...


RendererFactory = Callable[[IslandMount, CodeBlockStore], IslandRenderer]


class TextIslandRenderer:
    """Renders a block as a single `pre` surface kept in step with the store."""

    def __init__(self, mount: IslandMount, store: CodeBlockStore):
        self.mount = mount
        self.destroyed = False
        state = store.get(mount.id)
        self.surface = Element("pre", {
            "contenteditable": "false" if mount.readonly else "true",
            "data-format": map_language_to_format(state.language if state else ""),
        }, text=state.content if state else "")
        mount.mount_point.clear()
        mount.mount_point.append(self.surface)
        self._unsubscribe = store.subscribe(mount.id, self._on_state)

    @property
    def editable_surface(self) -> Optional[Element]:
        return None if self.mount.readonly else self.surface

    def _on_state(self, state: Optional[CodeBlockState]) -> None:
        if state is None:
            return
        self.surface.text = state.content
        self.surface.set_attribute("data-format", map_language_to_format(state.language))

    def edit(self, content: str) -> None:
        """Apply a user edit of the block's text."""
        if self.mount.readonly:
            return
        self.mount.on_content_change(content)

    def change_format(self, fmt: str) -> None:
        self.mount.on_format_change(fmt)

    def request_exit(self) -> None:
        self.mount.on_exit()

    def request_delete(self) -> None:
        self.mount.on_delete()

    def destroy(self) -> None:
        if self.destroyed:
            return
        self._unsubscribe()
        self.mount.mount_point.clear()
        self.destroyed = True
