from __future__ import annotations
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from mdblocks.crud.models import Preference
from mdblocks.crud.repo import PreferenceRepo

class SQLPreferenceRepo(PreferenceRepo):
    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> str | None:
        row = self.session.get(Preference, key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.session.get(Preference, key)
        if row is None:
            row = Preference(key=key, value=value)
        else:
            row.value = value
            row.updated_at = datetime.now()
        self.session.add(row)
        self._commit()

    def delete(self, key: str) -> None:
        row = self.session.get(Preference, key)
        if row is not None:
            self.session.delete(row)
            self._commit()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
