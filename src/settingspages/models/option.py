"""Named option mappings stored in the database."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptionRecord(SQLModel, table=True):
    """One option group: a name and the whole mapping of its values."""

    __tablename__: ClassVar[str] = "option"

    name: str = Field(primary_key=True, max_length=191)
    value: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
