from __future__ import annotations
from abc import ABC, abstractmethod


class PreferenceRepo(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key; missing keys are ignored."""
        raise NotImplementedError
