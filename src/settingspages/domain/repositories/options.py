"""Options repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class OptionsRepository(Protocol):
    """Key-value storage holding one mapping per option name."""

    def get(self, name: str, default: Optional[Mapping[str, Any]] = None) -> Any:
        """Return the stored mapping for ``name`` or ``default`` when absent.

        Raises ``OptionsStorageError`` when the backend cannot be read.
        """
        ...

    def put(self, name: str, value: Mapping[str, Any]) -> bool:
        """Store ``value`` under ``name``; False when the write failed."""
        ...

    def delete(self, name: str) -> bool:
        """Remove the mapping stored under ``name``."""
        ...
