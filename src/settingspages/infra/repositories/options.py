"""SQLModel implementation of the options repository."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import OptionsStorageError
from ...logging_config import get_logger
from ...models.option import OptionRecord

logger = get_logger("infra.options")


class SQLModelOptionsRepository:
    """Stores each option group as one JSON row keyed by name."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        self.session_factory = session_factory

    def get(self, name: str, default: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            with self.session_factory() as session:
                record = session.exec(select(OptionRecord).where(OptionRecord.name == name)).first()
                if record is None:
                    return copy.deepcopy(default)
                return copy.deepcopy(record.value)
        except SQLAlchemyError as exc:
            logger.exception("Failed to read option group", extra={"option_name": name})
            raise OptionsStorageError(f"Could not read option group '{name}'") from exc

    def put(self, name: str, value: Mapping[str, Any]) -> bool:
        try:
            with self.session_factory() as session:
                record = session.exec(select(OptionRecord).where(OptionRecord.name == name)).first()
                payload = dict(value) if value is not None else {}
                if record:
                    record.value = payload
                    record.updated_at = datetime.now(timezone.utc)
                else:
                    record = OptionRecord(name=name, value=payload)
                session.add(record)
                session.commit()
        except (SQLAlchemyError, TypeError, ValueError):
            logger.exception("Failed to persist option group", extra={"option_name": name})
            return False
        return True

    def delete(self, name: str) -> bool:
        try:
            with self.session_factory() as session:
                record = session.exec(select(OptionRecord).where(OptionRecord.name == name)).first()
                if record is None:
                    return False
                session.delete(record)
                session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to delete option group", extra={"option_name": name})
            return False
        return True


__all__ = ["SQLModelOptionsRepository"]
