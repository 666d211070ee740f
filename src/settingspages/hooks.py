"""Named filter hooks that let outside code reshape module fields and output."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from threading import Lock
from typing import Any, Callable, Dict, List

from .logging_config import get_logger

__all__ = [
    "add_filter",
    "apply_filters",
    "clear_filters",
    "has_filter",
    "remove_filter",
]

logger = get_logger("hooks")


@dataclass(frozen=True)
class _Filter:
    priority: int
    sequence: int
    callback: Callable[..., Any]


_FILTERS: Dict[str, List[_Filter]] = {}
_LOCK = Lock()
_SEQUENCE = count()


def add_filter(name: str, callback: Callable[..., Any], priority: int = 10) -> None:
    """Register ``callback`` on the filter ``name``.

    Callbacks run in ascending priority, registration order breaking ties. Each
    receives the current value followed by any extra arguments passed to
    :func:`apply_filters` and returns the replacement value.
    """

    entry = _Filter(priority=priority, sequence=next(_SEQUENCE), callback=callback)
    with _LOCK:
        bucket = _FILTERS.setdefault(name, [])
        bucket.append(entry)
        bucket.sort(key=lambda item: (item.priority, item.sequence))


def remove_filter(name: str, callback: Callable[..., Any]) -> bool:
    with _LOCK:
        bucket = _FILTERS.get(name, [])
        kept = [entry for entry in bucket if entry.callback != callback]
        if len(kept) == len(bucket):
            return False
        if kept:
            _FILTERS[name] = kept
        else:
            _FILTERS.pop(name, None)
        return True


def has_filter(name: str) -> bool:
    with _LOCK:
        return bool(_FILTERS.get(name))


def clear_filters() -> None:
    """Remove every registered filter (useful for tests)."""

    with _LOCK:
        _FILTERS.clear()


def apply_filters(name: str, value: Any, *args: Any) -> Any:
    """Thread ``value`` through every callback registered on ``name``."""

    with _LOCK:
        callbacks = [entry.callback for entry in _FILTERS.get(name, [])]
    for callback in callbacks:
        value = callback(value, *args)
    if callbacks:
        logger.debug("Applied %d filter(s) for %s", len(callbacks), name)
    return value
