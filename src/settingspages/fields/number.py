"""Number input with minimum/maximum bounds and an optional step."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..sanitize import esc_attr, esc_html
from .base import FieldSpec, Number, TextField, to_number

INT_MAX = sys.maxsize


def _decimal(value: Number) -> Decimal:
    # str() keeps the written digits, so 0.1 stays exactly one tenth
    return Decimal(str(value))


@dataclass(frozen=True)
class NumberConstraints:
    """Resolved bounds for one number field.

    The minimum wins over the maximum: a maximum below the minimum collapses
    the field to the constant ``minimum``.
    """

    minimum: Number = 0
    maximum: Number = INT_MAX
    step: Number = 0

    @classmethod
    def from_spec(cls, spec: FieldSpec) -> NumberConstraints:
        minimum: Number = 0
        raw_min = to_number(spec.get("min"))
        if raw_min is not None and -INT_MAX <= raw_min <= INT_MAX:
            minimum = raw_min

        maximum: Number = INT_MAX
        raw_max = to_number(spec.get("max"))
        if raw_max is not None and raw_max <= INT_MAX:
            maximum = raw_max if raw_max >= minimum else minimum

        step: Number = 0
        raw_step = to_number(spec.get("step"))
        if raw_step is not None and raw_step > 0:
            step = raw_step

        return cls(minimum=minimum, maximum=maximum, step=step)

    def clamp(self, value: Any) -> Number:
        number = to_number(value)
        # Invalid values or values below the minimum become the minimum
        if number is None or number < self.minimum:
            return self.minimum
        if number > self.maximum:
            return self.maximum
        return number

    def constrain(self, value: Any) -> Number:
        """Clamp ``value`` then round it down onto the step grid anchored at the minimum."""

        number = self.clamp(value)
        if self.step <= 0:
            return number

        exact = _decimal(number)
        minimum = _decimal(self.minimum)
        remainder = (exact - minimum) % _decimal(self.step)
        rounded = exact - remainder
        if remainder > 0 and rounded >= minimum:
            if all(isinstance(part, int) for part in (number, self.minimum, self.step)):
                return int(rounded)
            return float(rounded)
        return number


class NumberField(TextField):
    """Number input; ``min`` defaults to 0, ``max`` to ``sys.maxsize``.

    Set ``step`` to an integer to make this an integer-only field. The default
    value is the minimum unless a numeric ``default`` is given.
    """

    def __init__(self, spec: FieldSpec) -> None:
        super().__init__(spec)
        self.constraints = NumberConstraints.from_spec(spec)
        default = to_number(spec.get("default"))
        self.default = default if default is not None else self.constraints.minimum

    @property
    def minimum(self) -> Number:
        return self.constraints.minimum

    @property
    def maximum(self) -> Number:
        return self.constraints.maximum

    @property
    def step(self) -> Number:
        return self.constraints.step

    def get_data(self) -> Number:
        """Current value or default, clamped to the field bounds."""

        if self.data is None or self.data == "":
            self.data = self.default
        return self.constraints.clamp(self.data)

    def validate_constraints(self, value: Any) -> Number:
        return self.constraints.constrain(value)

    def get_element_body(self) -> str:
        step_attribute = step_text = ""
        if self.step > 0:
            step_attribute = f' step="{esc_attr(self.step)}"'
            step_text = f", increments of {self.step}"

        return (
            '<span class="control"><input type="number" min="{}" max="{}" name="{}" value="{}"{} /></span>'
            '<span class="description">Minimum of {}, maximum of {}{}</span>'
        ).format(
            esc_attr(self.minimum),
            esc_attr(self.maximum),
            self.input_name(),
            esc_attr(self.get_data()),
            step_attribute,
            esc_html(self.minimum),
            esc_html(self.maximum),
            esc_html(step_text),
        )

    @staticmethod
    def validate(value: Any, spec: FieldSpec) -> Any:
        if not spec:
            return None
        # Bounds come from the field spec alone
        return NumberConstraints.from_spec(spec).constrain(value)


__all__ = ["INT_MAX", "NumberConstraints", "NumberField", "to_number"]
