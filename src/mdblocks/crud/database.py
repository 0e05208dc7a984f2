"""Engine construction and schema setup"""

from __future__ import annotations
import os
from sqlmodel import SQLModel, create_engine

# Registers the preferences table on SQLModel.metadata
from mdblocks.crud import models  # noqa: F401


DEFAULT_DB_URL = "sqlite:///mdblocks.db"


def get_url(explicit: str | None = None) -> str:
    if explicit:
        return explicit
    return os.getenv("MDBLOCKS_DB_URL") or DEFAULT_DB_URL


def make_engine(db_url: str | None = None):
    return create_engine(get_url(db_url), echo=False)


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)
