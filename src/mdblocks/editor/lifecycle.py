"""Mount and unmount code island renderers as islands enter and leave the tree"""

import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from mdblocks.core.utils.data_format import convert_structured, is_structured_format
from mdblocks.crud.preferences import StructuredDataPreference
from mdblocks.editor.renderer import (
    IslandMount,
    IslandRenderer,
    RendererFactory,
    TextIslandRenderer,
    map_language_to_format,
)
from mdblocks.editor.scheduler import Scheduler
from mdblocks.editor.store import CodeBlockStore
from mdblocks.editor.tree import Document, Element, MutationBatch


logger = logging.getLogger(__name__)

__all__ = [
    "IslandLifecycle",
    "MountedInstance",
    "map_language_to_format",
    "sequential_ids",
    "uuid_ids",
]


def uuid_ids(prefix: str = "cb-") -> Callable[[], str]:
    """Id factory producing `<prefix><uuid4>`."""
    return lambda: f"{prefix}{uuid.uuid4()}"


def sequential_ids(prefix: str = "cb-") -> Callable[[], str]:
    """Id factory producing `<prefix>1`, `<prefix>2`, ... (deterministic, for tests and fixtures)."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@dataclass
class MountedInstance:
    id: str
    wrapper: Element
    mount_point: Element
    renderer: IslandRenderer


class IslandLifecycle:
    """Keeps exactly one renderer per island present in the tree.

    Mounts are driven by mutation batches from the document. Each mount
    schedules an `on_mounted(id, instance)` notification on the scheduler, which
    is dropped if the instance was unmounted before it runs.
    """

    def __init__(
        self,
        root: Document,
        store: CodeBlockStore,
        scheduler: Scheduler,
        *,
        renderer_factory: RendererFactory = TextIslandRenderer,
        id_factory: Optional[Callable[[], str]] = None,
        preference: Optional[StructuredDataPreference] = None,
        readonly: bool = False,
        on_mounted: Optional[Callable[[str, MountedInstance], None]] = None,
        on_update_content: Optional[Callable[[str, str], None]] = None,
        on_update_language: Optional[Callable[[str, str], None]] = None,
        on_exit: Optional[Callable[[str], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        on_detached: Optional[Callable[[str], None]] = None,
    ):
        self.root = root
        self.store = store
        self.scheduler = scheduler
        self.renderer_factory = renderer_factory
        self.preference = preference
        self.readonly = readonly
        self.on_mounted = on_mounted
        self.on_update_content = on_update_content or store.update_content
        self.on_update_language = on_update_language or store.update_language
        self.on_exit = on_exit
        self.on_delete = on_delete
        self.on_detached = on_detached
        self._id_factory = id_factory or uuid_ids()
        self._instances: dict[str, MountedInstance] = {}
        self._unsubscribe: Optional[Callable[[], None]] = None

    def new_id(self) -> str:
        return self._id_factory()

    # --- registry ---

    def is_mounted(self, island_id: str) -> bool:
        return island_id in self._instances

    def get_instance(self, island_id: str) -> Optional[MountedInstance]:
        return self._instances.get(island_id)

    @property
    def mounted_ids(self) -> list[str]:
        return list(self._instances)

    # --- observation ---

    def connect(self) -> None:
        """Start observing the root and schedule the initial mount of existing islands."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.root.mutations.subscribe(self.sync)
        self.scheduler.call_soon(self.mount_all)

    def disconnect(self) -> None:
        """Stop observing and tear down every renderer."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.unmount_all()

    def sync(self, batch: list[MutationBatch]) -> None:
        for record in batch:
            for node in record.added:
                if not node.is_inside(self.root):
                    continue
                for island in node.iter_islands():
                    self.mount(island)
            for node in record.removed:
                for island in node.iter_islands():
                    if not island.island_id:
                        continue
                    self.unmount(island.island_id)
                    if self.on_detached is not None and not island.is_inside(self.root):
                        self.on_detached(island.island_id)

    # --- mounting ---

    def mount(self, island: Element) -> Optional[MountedInstance]:
        island_id = island.island_id
        if not island_id:
            logger.debug("Skipping island without an id")
            return None
        if island_id in self._instances:
            logger.debug("Island %s already mounted", island_id)
            return None
        mount_point = island.find_mount_point()
        if mount_point is None:
            logger.debug("Island %s has no mount point", island_id)
            return None

        auto_detected = mount_point.get_attribute("data-auto-detected") == "true"
        state = self.store.get(island_id)
        if state is None:
            state = self.store.register(
                island_id,
                mount_point.get_attribute("data-content", "") or "",
                mount_point.get_attribute("data-language", "") or "",
            )
        if auto_detected and is_structured_format(state.language) and self.preference is not None:
            preferred = self.preference.get()
            if preferred and preferred != state.language:
                self._apply_format(island_id, preferred)

        mount = IslandMount(
            id=island_id,
            wrapper=island,
            mount_point=mount_point,
            auto_detected=auto_detected,
            readonly=self.readonly,
            on_content_change=lambda content: self.on_update_content(island_id, content),
            on_format_change=lambda fmt: self.handle_format_change(island_id, fmt, auto_detected),
            on_exit=lambda: self.on_exit(island_id) if self.on_exit else None,
            on_delete=lambda: self.on_delete(island_id) if self.on_delete else None,
        )
        instance = MountedInstance(island_id, island, mount_point, self.renderer_factory(mount, self.store))
        self._instances[island_id] = instance
        logger.info("Mounted code island %s", island_id)
        self.scheduler.call_soon(self._notify_mounted, instance)
        return instance

    def _notify_mounted(self, instance: MountedInstance) -> None:
        if self._instances.get(instance.id) is not instance:
            logger.debug("Island %s gone before mount notification", instance.id)
            return
        if self.on_mounted is not None:
            self.on_mounted(instance.id, instance)

    def mount_all(self) -> None:
        for island in list(self.root.iter_islands()):
            self.mount(island)

    def unmount(self, island_id: str) -> None:
        instance = self._instances.pop(island_id, None)
        if instance is None:
            logger.debug("Island %s not mounted", island_id)
            return
        instance.renderer.destroy()
        logger.info("Unmounted code island %s", island_id)

    def unmount_all(self) -> None:
        for island_id in list(self._instances):
            self.unmount(island_id)

    # --- format ---

    def _apply_format(self, island_id: str, fmt: str) -> None:
        state = self.store.get(island_id)
        if state is None:
            return
        converted = convert_structured(state.content, state.language, fmt)
        if converted != state.content:
            self.on_update_content(island_id, converted)
        self.on_update_language(island_id, fmt)

    def handle_format_change(self, island_id: str, fmt: str, auto_detected: bool) -> None:
        """Switch a block's format; auto-detected blocks moved to JSON/YAML remember the choice."""
        self._apply_format(island_id, fmt)
        if auto_detected and is_structured_format(fmt) and self.preference is not None:
            self.preference.set(fmt)
