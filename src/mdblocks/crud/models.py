"""Database table definitions for stored user preferences"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel


class Preference(SQLModel, table=True):
    """A single user preference stored as a key-value pair"""
    __tablename__ = "preferences"
    key: str = Field(primary_key=True)
    value: str = Field(..., sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
