"""Select list field validated against a live set of allowed ids."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from ..errors import doing_it_wrong
from ..logging_config import get_logger
from ..sanitize import esc_attr, esc_html
from .base import FieldSpec, TextField

logger = get_logger("fields.dropdown")

ChoicesProvider = Callable[[], Iterable[Any]]


class DropdownField(TextField):
    """Drop-down built from ``data_list`` (option value -> display text).

    Submitted values are checked against ``choices_provider()``, which is
    called at validation time so ids removed since the form was rendered are
    rejected even if they were valid and stored before.
    """

    def __init__(self, spec: FieldSpec) -> None:
        super().__init__(spec)
        data_list = spec.get("data_list")
        self.data_list: Mapping[Any, Any] = data_list if isinstance(data_list, Mapping) else {}

    def get_element_body(self) -> str:
        if not self.data_list:
            return ""

        current = self.get_data()
        options = []
        for key, text in self.data_list.items():
            selected = ' selected="selected"' if str(key) == str(current) else ""
            options.append(
                '<option value="{}"{}>{}</option>'.format(esc_attr(key), selected, esc_html(text))
            )
        return '<select id="{}" name="{}">{}</select>'.format(
            esc_attr(self.id), self.input_name(), "".join(options)
        )

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any:
        provider: Optional[ChoicesProvider] = spec.get("choices_provider")
        if not callable(provider):
            doing_it_wrong(
                "DropdownField.validate",
                f"Dropdown '{spec.get('id', '')}' has no choices_provider to validate against.",
            )
            return None

        if value is None:
            return None
        # Ids may arrive as strings from the form while the provider yields ints
        wanted = str(value).strip()
        try:
            choices = list(provider())
        except Exception:
            logger.exception("Dropdown choices unavailable", extra={"field_id": spec.get("id")})
            return None
        for allowed in choices:
            if str(allowed) == wanted:
                return allowed
        return None


__all__ = ["ChoicesProvider", "DropdownField"]
