"""Reactive code block state keyed by island id"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterator, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeBlockState:
    id: str
    content: str = ""
    language: str = ""


StateListener = Callable[[Optional[CodeBlockState]], None]


class CodeBlockStore:
    """Island id -> CodeBlockState.

    States are immutable snapshots; every change replaces the entry and notifies
    listeners subscribed to that id. A removed entry notifies with None.
    """

    def __init__(self):
        self._states: dict[str, CodeBlockState] = {}
        self._listeners: dict[str, list[StateListener]] = {}

    def __contains__(self, island_id: str) -> bool:
        return island_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[CodeBlockState]:
        return iter(list(self._states.values()))

    def ids(self) -> list[str]:
        return list(self._states)

    def get(self, island_id: str) -> Optional[CodeBlockState]:
        return self._states.get(island_id)

    def register(self, island_id: str, content: str = "", language: str = "") -> CodeBlockState:
        state = CodeBlockState(id=island_id, content=content, language=language)
        self._set(state)
        return state

    def update_content(self, island_id: str, content: str) -> bool:
        state = self._states.get(island_id)
        if state is None:
            logger.debug("Ignoring content update for unknown block %s", island_id)
            return False
        if state.content != content:
            self._set(replace(state, content=content))
        return True

    def update_language(self, island_id: str, language: str) -> bool:
        state = self._states.get(island_id)
        if state is None:
            logger.debug("Ignoring language update for unknown block %s", island_id)
            return False
        if state.language != language:
            self._set(replace(state, language=language))
        return True

    def remove(self, island_id: str) -> Optional[CodeBlockState]:
        state = self._states.pop(island_id, None)
        if state is not None:
            self._notify(island_id, None)
        return state

    def clear(self) -> None:
        for island_id in self.ids():
            self.remove(island_id)

    def subscribe(self, island_id: str, listener: StateListener) -> Callable[[], None]:
        self._listeners.setdefault(island_id, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(island_id, [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(island_id, None)
        return unsubscribe

    def _set(self, state: CodeBlockState) -> None:
        self._states[state.id] = state
        self._notify(state.id, state)

    def _notify(self, island_id: str, state: Optional[CodeBlockState]) -> None:
        for listener in list(self._listeners.get(island_id, [])):
            listener(state)
