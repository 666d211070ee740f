"""Cached wrapper around one named option mapping.

An :class:`OptionsStore` keeps an in-memory copy of the mapping stored under
its name and re-reads it after every successful write, so the writer never
sees a stale value mid-request. Writes from other processes between the read
and the write are not coordinated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from .domain.repositories import OptionsRepository
from .errors import OptionsStorageError, doing_it_wrong
from .logging_config import get_logger
from .sanitize import esc_attr, sanitize_key

logger = get_logger("options")

OptionKey = Union[str, int]


def default_repository() -> OptionsRepository:
    """Repository bound to the application engine."""

    from .extensions import session_scope
    from .infra.repositories import SQLModelOptionsRepository

    return SQLModelOptionsRepository(session_scope)


class OptionsStore:
    """Read and write one option group.

    A store built with an empty or non-string name is inert: it reports the
    misconfiguration once and every later call returns ``None``/``False``.
    """

    def __init__(
        self,
        name: Any,
        defaults: Optional[Mapping[str, Any]] = None,
        repository: Optional[OptionsRepository] = None,
    ) -> None:
        self.name: str = ""
        self.defaults: dict[str, Any] = dict(defaults or {})
        self._values: Optional[dict[str, Any]] = None
        self._repository = repository

        if name and isinstance(name, str) and sanitize_key(name):
            self.name = sanitize_key(name)
            if self._repository is None:
                self._repository = default_repository()
            self.refresh()
        else:
            doing_it_wrong("OptionsStore.__init__", "Invalid options name specified")

    @property
    def is_inert(self) -> bool:
        return not self.name

    def get(self, key: Optional[OptionKey] = None) -> Any:
        """Return one value by key, or the whole mapping when no key is given."""

        if self._values is None:
            return None
        if key is None or key == "":
            return dict(self._values)
        if isinstance(key, (str, int)):
            return self._values.get(key)
        return None

    def get_name(self) -> str:
        """Option name escaped for use in markup."""

        return esc_attr(self.name) if self.name else ""

    def set(self, value: Any, key: Optional[OptionKey] = None, deferred: bool = False) -> bool:
        """Replace the whole mapping or one entry, persisting unless deferred.

        With ``deferred=True`` and a key, the entry is only queued in memory and
        ``False`` is returned; the caller flushes with :meth:`save`.
        """

        if self.is_inert or self._values is None:
            return False

        whole = key is None or key == ""
        if whole:
            if not isinstance(value, Mapping):
                doing_it_wrong("OptionsStore.set", f"Option group '{self.name}' must be a mapping")
                return False
            self._values = dict(value)
        elif isinstance(key, (str, int)):
            self._values[key] = value
        else:
            return False

        if whole or not deferred:
            if self.save():
                # Re-read in case another write landed in between
                self.refresh()
                return True
            return False
        return False

    def refresh(self) -> bool:
        """Reload the cached mapping from storage, using the defaults if nothing is stored."""

        if self.is_inert or self._repository is None:
            return False
        try:
            stored = self._repository.get(self.name, self.defaults)
        except OptionsStorageError:
            # Keep the last good copy; a store that never loaded stays unusable
            logger.warning("Options not loaded", extra={"option_name": self.name})
            return False
        self._values = dict(stored) if isinstance(stored, Mapping) else dict(self.defaults)
        return True

    def save(self) -> bool:
        """Persist the full in-memory mapping."""

        if self.is_inert or self._repository is None or self._values is None:
            return False
        saved = self._repository.put(self.name, self._values)
        if not saved:
            logger.warning("Options not saved", extra={"option_name": self.name})
        return saved

    def __repr__(self) -> str:
        return f"OptionsStore(name={self.name!r})"


__all__ = ["OptionsStore", "default_repository"]
