"""Registry mapping field type names to their implementations."""

from __future__ import annotations

from threading import Lock
from typing import Any, Dict, Optional

from ..errors import FieldSpecError, doing_it_wrong
from ..logging_config import get_logger
from ..sanitize import sanitize_key
from .base import FieldSpec, SettingField

logger = get_logger("fields.factory")


class FieldTypeRegistry:
    """Create and validate fields by type name.

    Type names are normalised with :func:`sanitize_key` before every lookup,
    so ``"Number"`` and ``"number"`` refer to the same implementation. A
    registered type is never overwritten.
    """

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}
        self._lock = Lock()

    def register(self, type_name: str, implementation: type) -> bool:
        if not type_name or implementation is None:
            return False
        key = sanitize_key(type_name)
        if not key:
            return False
        with self._lock:
            if key in self._types:
                logger.debug("Field type %s already registered; keeping %s", key, self._types[key])
                return False
            self._types[key] = implementation
        return True

    def is_registered(self, type_name: str) -> Optional[bool]:
        if not type_name:
            return None
        return sanitize_key(type_name) in self._types

    def registered_types(self) -> list[str]:
        """Sorted list of registered type keys, for debugging and the CLI."""

        with self._lock:
            return sorted(self._types)

    def _lookup(self, type_name: Any) -> Optional[type]:
        if not type_name:
            return None
        return self._types.get(sanitize_key(type_name))

    def create(self, type_name: str, spec: FieldSpec) -> Optional[SettingField]:
        if not type_name or not spec:
            return None
        implementation = self._lookup(type_name)
        if implementation is None:
            return None
        try:
            return implementation(spec)
        except FieldSpecError as exc:
            doing_it_wrong("FieldTypeRegistry.create", f"Could not build '{type_name}' field: {exc}")
            return None

    def get_unset_value(self, type_name: str) -> Any:
        implementation = self._lookup(type_name)
        if implementation is None:
            return None
        return implementation.get_unset_value()

    def validate(self, spec: FieldSpec, value: Any) -> Any:
        """Run the validation rule of ``spec["type"]`` against ``value``."""

        if not spec or "type" not in spec:
            return None
        implementation = self._lookup(spec["type"])
        if implementation is None:
            return None
        return implementation.validate(value, spec)


def build_default_registry() -> FieldTypeRegistry:
    """Return a registry with the built-in field types registered."""

    from .boolean import BooleanField
    from .base import TextField
    from .callback import CallbackField
    from .dropdown import DropdownField
    from .number import NumberField

    registry = FieldTypeRegistry()
    registry.register("text", TextField)
    registry.register("boolean", BooleanField)
    registry.register("callback", CallbackField)
    registry.register("dropdown", DropdownField)
    registry.register("number", NumberField)
    return registry


__all__ = ["FieldTypeRegistry", "build_default_registry"]
