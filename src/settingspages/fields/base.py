"""Base settings field: a labelled text input.

Every field type is constructed from a *field spec*, a plain mapping with the
keys ``type``, ``id``, ``label``, ``option`` (the option group the value is
stored under), ``data`` (current value), ``default`` and ``order``. Subclasses
read their own extra keys from the same mapping.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Protocol, Union

from ..errors import FieldSpecError
from ..sanitize import esc_attr, esc_html, kses_post

FieldSpec = Mapping[str, Any]


class SettingField(Protocol):
    """Capabilities the page layer and validation pipeline rely on."""

    order: int

    def get_data(self) -> Any: ...

    def get_label(self) -> str: ...

    def get_element_body(self) -> str: ...

    @staticmethod
    def get_unset_value() -> Any: ...

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any: ...


Number = Union[int, float]


def to_number(value: Any) -> Number | None:
    """Parse ints, floats and numeric strings; return None for anything else."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _as_order(value: Any) -> int:
    # "5.5" sorts as 5, anything unparseable as 0
    number = to_number(value)
    return int(number) if number is not None else 0


class TextField:
    """Plain text input; also the base every other field type extends."""

    def __init__(self, spec: FieldSpec) -> None:
        field_id = spec.get("id")
        label = spec.get("label")
        option = spec.get("option")
        if not all(isinstance(item, str) for item in (field_id, label, option)):
            raise FieldSpecError("Field specs need string 'id', 'label' and 'option' values.")

        self.id: str = field_id
        self.type: str = str(spec.get("type", ""))
        self.label: str = label
        self.option: str = option
        self.order: int = _as_order(spec.get("order"))
        # Stored as-is, each type decides how to interpret it
        self.data: Any = spec.get("data")
        default = spec.get("default")
        self.default: Any = default if default else ""

    def get_data(self) -> Any:
        """Return the stored value, falling back to the default."""

        if self.data is None:
            return self.default
        return self.data

    def get_label(self) -> str:
        return esc_html(self.label)

    def input_name(self) -> str:
        """Form name that nests this field under its option group."""

        return f"{esc_attr(self.option)}[{esc_attr(self.id)}]"

    def get_element_body(self) -> str:
        return '<input id="{}" type="text" name="{}" value="{}" />'.format(
            esc_attr(self.id), self.input_name(), esc_attr(self.get_data())
        )

    @staticmethod
    def get_unset_value() -> Any:
        """Text inputs are always posted, so there is no unset substitute."""

        return None

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any:
        # Allow the markup permitted in post content, strip the rest
        return kses_post(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, order={self.order})"


__all__ = ["FieldSpec", "Number", "SettingField", "TextField", "to_number"]
