from dataclasses import dataclass, field
from mdblocks.crud.repo import PreferenceRepo

@dataclass
class MemoryPreferenceRepo(PreferenceRepo):
    _values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
