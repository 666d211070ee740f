"""Settings field types and the shared type registry."""

from .base import FieldSpec, SettingField, TextField
from .boolean import BooleanField
from .callback import CallbackField
from .dropdown import DropdownField
from .number import NumberConstraints, NumberField
from .factory import FieldTypeRegistry, build_default_registry

# Process-wide registry; extensions call ``registry.register`` to add types.
registry = build_default_registry()

__all__ = [
    "BooleanField",
    "CallbackField",
    "DropdownField",
    "FieldSpec",
    "FieldTypeRegistry",
    "NumberConstraints",
    "NumberField",
    "SettingField",
    "TextField",
    "build_default_registry",
    "registry",
]
