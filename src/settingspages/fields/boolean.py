"""Checkbox field stored as the strings ``"on"`` / ``"off"``."""

from __future__ import annotations

from typing import Any

from ..sanitize import esc_html
from .base import FieldSpec, TextField

ON = "on"
OFF = "off"


def _as_flag(value: Any) -> bool | None:
    if value is True or value == ON:
        return True
    if value is False or value == OFF:
        return False
    return None


class BooleanField(TextField):
    """Checkbox with an optional ``description`` shown beside it.

    ``data`` and ``default`` accept ``True``/``False`` or ``"on"``/``"off"``;
    anything else leaves the data unset so the default applies. The default
    itself is ``False`` unless given as ``True`` or ``"on"``.
    """

    def __init__(self, spec: FieldSpec) -> None:
        super().__init__(spec)
        self.description: str = str(spec.get("description") or "")
        self.data = _as_flag(spec.get("data"))
        self.default = _as_flag(spec.get("default")) is True

    def get_element_body(self) -> str:
        checked = ' checked="checked"' if self.get_data() is True else ""
        return (
            '<span class="control"><input type="checkbox" name="{}"{} /></span>'
            '<span class="description">{}</span>'
        ).format(self.input_name(), checked, esc_html(self.description))

    @staticmethod
    def get_unset_value() -> Any:
        # Unchecked boxes are left out of the post entirely
        return OFF

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any:
        return ON if value == ON else OFF


__all__ = ["BooleanField", "OFF", "ON"]
