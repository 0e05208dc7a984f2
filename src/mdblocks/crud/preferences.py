"""Persisted JSON/YAML display preference for auto-detected structured data"""

import logging
from typing import Optional

from mdblocks.core.utils.data_format import STRUCTURED_FORMATS, is_structured_format
from mdblocks.crud.repo import PreferenceRepo


logger = logging.getLogger(__name__)

STORAGE_KEY = "dx-structured-data-format"


class StructuredDataPreference:
    """Reads and writes the preferred structured-data format through a repo.

    Storage failures never propagate: reads fall back to "no preference" and
    writes are dropped, both logged at debug level.
    """

    def __init__(self, repo: PreferenceRepo, key: str = STORAGE_KEY):
        self.repo = repo
        self.key = key

    def get(self) -> Optional[str]:
        try:
            value = self.repo.get(self.key)
        except Exception:
            logger.debug("Preference storage unavailable", exc_info=True)
            return None
        return value if value and is_structured_format(value) else None

    def set(self, fmt: str) -> None:
        if not is_structured_format(fmt):
            raise ValueError(f"Unsupported format {fmt!r}; expected one of {', '.join(STRUCTURED_FORMATS)}")
        try:
            self.repo.set(self.key, fmt)
        except Exception:
            logger.debug("Could not persist preference %s=%s", self.key, fmt, exc_info=True)

    def clear(self) -> None:
        try:
            self.repo.delete(self.key)
        except Exception:
            logger.debug("Could not clear preference %s", self.key, exc_info=True)
