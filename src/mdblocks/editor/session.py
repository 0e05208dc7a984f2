"""Editor session wiring the tree, code block state machine and island lifecycle"""

import logging
from typing import Callable, Optional

from mdblocks.config import Settings
from mdblocks.core.emit import emit_markdown
from mdblocks.core.models import BaseToken
from mdblocks.core.tokenize.tokenizer import tokenize_blocks
from mdblocks.crud.preferences import StructuredDataPreference
from mdblocks.editor.code_blocks import CodeBlockEditor
from mdblocks.editor.lifecycle import IslandLifecycle, uuid_ids
from mdblocks.editor.renderer import RendererFactory, TextIslandRenderer
from mdblocks.editor.scheduler import Scheduler
from mdblocks.editor.selection import Selection
from mdblocks.editor.store import CodeBlockStore
from mdblocks.editor.sync import build_tree, tree_to_tokens
from mdblocks.editor.tree import Document


logger = logging.getLogger(__name__)


class EditorSession:
    """One editable document: load markdown, edit through `editor`, read it back.

    Structural edits are observed asynchronously; call `flush()` to let queued
    mutation batches and mounted notifications run.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        preference: Optional[StructuredDataPreference] = None,
        renderer_factory: RendererFactory = TextIslandRenderer,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.settings = settings or Settings()
        self.scheduler = Scheduler()
        self.root = Document(self.scheduler)
        self.selection = Selection(self.root)
        self.store = CodeBlockStore()
        self.changes = 0

        self.lifecycle = IslandLifecycle(
            self.root, self.store, self.scheduler,
            renderer_factory=renderer_factory,
            id_factory=id_factory or uuid_ids(self.settings.id_prefix),
            preference=preference,
            readonly=self.settings.readonly,
            on_mounted=lambda island_id, instance: self.editor.handle_mounted(island_id, instance),
            on_update_content=lambda island_id, content: self.editor.update_content(island_id, content),
            on_update_language=lambda island_id, language: self.editor.update_language(island_id, language),
            on_exit=lambda island_id: self.editor.exit_code_block(island_id),
            on_delete=lambda island_id: self.editor.delete_code_block(island_id),
            on_detached=lambda island_id: self.editor.pending_focus.discard(island_id),
        )
        self.editor = CodeBlockEditor(
            self.root, self.selection, self.store,
            new_id=self.lifecycle.new_id,
            on_content_change=self._content_changed,
        )
        self.lifecycle.connect()

    def _content_changed(self) -> None:
        self.changes += 1

    def flush(self) -> int:
        return self.scheduler.run_pending()

    def load(self, markdown: str) -> None:
        """Replace the document with the tokenized markdown and mount its islands."""
        self.root.clear()
        self.store.clear()
        self.editor.pending_focus.clear()
        self.selection.clear()
        tokens = tokenize_blocks(markdown)
        build_tree(self.root, tokens, self.lifecycle.new_id, self.editor.register_code_block)
        logger.info("Loaded %d block(s), %d code block(s)", len(tokens), len(self.store))
        self.flush()

    def to_tokens(self) -> list[BaseToken]:
        return tree_to_tokens(self.root, self.store)

    def to_markdown(self) -> str:
        return emit_markdown(self.to_tokens())

    def close(self) -> None:
        self.lifecycle.disconnect()
        self.flush()
