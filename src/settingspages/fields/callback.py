"""Field whose markup comes from a caller-supplied render function."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .base import FieldSpec, TextField


class CallbackField(TextField):
    """Renders by calling ``spec["callback"]``; stored values pass through untouched."""

    def __init__(self, spec: FieldSpec) -> None:
        super().__init__(spec)
        callback = spec.get("callback")
        self.callback: Optional[Callable[[], str]] = callback if callable(callback) else None

    def get_element_body(self) -> str:
        if self.callback is None:
            return ""
        return str(self.callback())

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any:
        return value


__all__ = ["CallbackField"]
