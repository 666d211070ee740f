"""Tests for the built-in field types."""

from __future__ import annotations

import pytest

from settingspages.errors import MisconfigurationWarning
from settingspages.fields import (
    BooleanField,
    CallbackField,
    DropdownField,
    NumberConstraints,
    NumberField,
    TextField,
)
from settingspages.fields.number import INT_MAX, to_number


def _spec(**overrides):
    spec = {"id": "field", "label": "Field", "option": "opts", "order": 10}
    spec.update(overrides)
    return spec


# =============================================================================
# Text
# =============================================================================


def test_text_get_data_falls_back_to_default():
    assert TextField(_spec(type="text")).get_data() == ""
    assert TextField(_spec(type="text", default="Hello")).get_data() == "Hello"
    assert TextField(_spec(type="text", data="Stored", default="Hello")).get_data() == "Stored"


def test_text_validate_keeps_post_markup_only():
    cleaned = TextField.validate('<strong>Bold</strong><script>alert("x")</script>', {})

    assert "<strong>Bold</strong>" in cleaned
    assert "script" not in cleaned
    assert "alert" not in cleaned


def test_text_validate_strips_disallowed_attributes():
    cleaned = TextField.validate('<a href="https://example.com" onclick="steal()">link</a>', {})

    assert "onclick" not in cleaned
    assert 'href="https://example.com"' in cleaned


def test_text_element_body_escapes_value():
    field = TextField(_spec(type="text", id="site-title", data='"quoted" <b>'))
    body = field.get_element_body()

    assert 'name="opts[site-title]"' in body
    assert 'id="site-title"' in body
    assert "<b>" not in body
    assert "&lt;b&gt;" in body


def test_text_label_is_escaped():
    assert TextField(_spec(type="text", label="A & B")).get_label() == "A &amp; B"


def test_order_defaults_to_zero_when_missing():
    spec = _spec(type="text")
    del spec["order"]

    assert TextField(spec).order == 0


# =============================================================================
# Boolean
# =============================================================================


@pytest.mark.parametrize(
    "data, expected",
    [("on", True), (True, True), ("off", False), (False, False), (None, False), ("maybe", False)],
)
def test_boolean_data_resolution(data, expected):
    assert BooleanField(_spec(type="boolean", data=data)).get_data() is expected


def test_boolean_default_on():
    assert BooleanField(_spec(type="boolean", default="on")).get_data() is True
    assert BooleanField(_spec(type="boolean", default=True, data="off")).get_data() is False


def test_boolean_validate():
    assert BooleanField.validate("on", {}) == "on"
    assert BooleanField.validate("off", {}) == "off"
    assert BooleanField.validate("yes", {}) == "off"
    assert BooleanField.validate(None, {}) == "off"
    assert BooleanField.validate(True, {}) == "off"


def test_boolean_unset_value():
    assert BooleanField.get_unset_value() == "off"


def test_boolean_body_renders_checked_state_and_description():
    checked = BooleanField(_spec(type="boolean", data="on", description="Enable <it>")).get_element_body()
    unchecked = BooleanField(_spec(type="boolean")).get_element_body()

    assert 'type="checkbox"' in checked
    assert "checked" in checked
    assert "Enable &lt;it&gt;" in checked
    assert "checked" not in unchecked


# =============================================================================
# Callback
# =============================================================================


def test_callback_body_comes_from_render_function():
    field = CallbackField(_spec(type="callback", callback=lambda: "<div>custom</div>"))

    assert field.get_element_body() == "<div>custom</div>"


def test_callback_without_function_renders_nothing():
    assert CallbackField(_spec(type="callback", callback="not-callable")).get_element_body() == ""


def test_callback_validate_passes_through():
    value = {"nested": [1, 2]}

    assert CallbackField.validate(value, {}) is value
    assert CallbackField.get_unset_value() is None


# =============================================================================
# Dropdown
# =============================================================================


def test_dropdown_body_marks_selected_option():
    field = DropdownField(
        _spec(type="dropdown", id="front-page", data=7, data_list={5: "About", 7: "Blog & News"})
    )
    body = field.get_element_body()

    assert body.startswith('<select id="front-page" name="opts[front-page]">')
    assert '<option value="7" selected="selected">Blog &amp; News</option>' in body
    assert '<option value="5">About</option>' in body


def test_dropdown_without_options_renders_nothing():
    assert DropdownField(_spec(type="dropdown")).get_element_body() == ""


def test_dropdown_validate_accepts_live_ids():
    spec = {"type": "dropdown", "id": "front-page", "choices_provider": lambda: [5, 7]}

    assert DropdownField.validate("7", spec) == 7
    assert DropdownField.validate(5, spec) == 5


def test_dropdown_validate_rejects_ids_no_longer_allowed():
    allowed = [5, 7]
    spec = {"type": "dropdown", "id": "front-page", "choices_provider": lambda: list(allowed)}

    assert DropdownField.validate("7", spec) == 7
    allowed.remove(7)
    assert DropdownField.validate("7", spec) is None
    assert DropdownField.validate(None, spec) is None


def test_dropdown_validate_without_provider_is_misconfiguration():
    with pytest.warns(MisconfigurationWarning):
        assert DropdownField.validate("5", {"type": "dropdown", "id": "front-page"}) is None


# =============================================================================
# Number
# =============================================================================


def test_number_clamps_to_bounds():
    spec = {"type": "number", "min": 0, "max": 10, "step": 0}

    assert NumberField.validate(-5, spec) == 0
    assert NumberField.validate(15, spec) == 10
    assert NumberField.validate(5, spec) == 5
    assert NumberField.validate("5", spec) == 5


def test_number_non_numeric_input_becomes_minimum():
    spec = {"type": "number", "min": 2, "max": 10}

    assert NumberField.validate("abc", spec) == 2
    assert NumberField.validate(None, spec) == 2
    assert NumberField.validate(True, spec) == 2


def test_number_step_rounds_down():
    spec = {"type": "number", "min": 0, "max": 10, "step": 3}

    assert NumberField.validate(7, spec) == 6
    assert NumberField.validate(10, spec) == 9
    assert NumberField.validate(2, spec) == 0


def test_number_step_leaves_exact_multiples_unchanged():
    spec = {"type": "number", "min": 0, "max": 10, "step": 3}

    assert NumberField.validate(9, spec) == 9
    assert NumberField.validate(6, spec) == 6
    assert NumberField.validate(0, spec) == 0


def test_number_step_grid_starts_at_minimum():
    spec = {"type": "number", "min": 1, "max": 20, "step": 5}

    assert NumberField.validate(8, spec) == 6
    assert NumberField.validate(11, spec) == 11


def test_number_step_applies_after_clamping():
    spec = {"type": "number", "min": 0, "max": 10, "step": 4}

    assert NumberField.validate(100, spec) == 8


def test_number_non_positive_step_is_ignored():
    assert NumberConstraints.from_spec({"step": -2}).step == 0
    assert NumberField.validate(7, {"type": "number", "min": 0, "max": 10, "step": -2}) == 7


def test_number_max_below_min_collapses_to_constant():
    spec = {"type": "number", "min": 5, "max": 2}
    constraints = NumberConstraints.from_spec(spec)

    assert constraints.minimum == constraints.maximum == 5
    for value in (-100, 0, 3, 5, 6, 1000, "junk"):
        assert NumberField.validate(value, spec) == 5


def test_number_defaults():
    constraints = NumberConstraints.from_spec({})

    assert constraints.minimum == 0
    assert constraints.maximum == INT_MAX
    assert constraints.step == 0


def test_number_ignores_non_numeric_bounds():
    constraints = NumberConstraints.from_spec({"min": "low", "max": "high", "step": "big"})

    assert (constraints.minimum, constraints.maximum, constraints.step) == (0, INT_MAX, 0)


def test_number_get_data_defaults_to_minimum_and_clamps():
    assert NumberField(_spec(type="number", min=3, max=9)).get_data() == 3
    assert NumberField(_spec(type="number", min=3, max=9, default=4)).get_data() == 4
    assert NumberField(_spec(type="number", min=3, max=9, data=50)).get_data() == 9
    assert NumberField(_spec(type="number", min=3, max=9, data="")).get_data() == 3


def test_number_validate_constraints_uses_instance_bounds():
    field = NumberField(_spec(type="number", min=0, max=10, step=3))

    assert field.validate_constraints(8) == 6


def test_number_validate_empty_spec_is_none():
    assert NumberField.validate(5, {}) is None


def test_number_body_describes_bounds():
    body = NumberField(_spec(type="number", id="reserve", min=0, max=10, step=2, data=4)).get_element_body()

    assert 'type="number"' in body
    assert 'min="0"' in body
    assert 'max="10"' in body
    assert 'step="2"' in body
    assert 'value="4"' in body
    assert "Minimum of 0, maximum of 10, increments of 2" in body


@pytest.mark.parametrize(
    "raw, expected",
    [(7, 7), ("7", 7), (" 12 ", 12), ("2.5", 2.5), (2.5, 2.5), ("", None), ("nan", None), (False, None), ([], None)],
)
def test_to_number(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize(
    "raw, spec, expected",
    [
        ("0.3", {"min": 0, "max": 1, "step": 0.1}, 0.3),
        ("0.7", {"min": 0.1, "max": 5, "step": 0.2}, 0.7),
        ("0.35", {"min": 0, "max": 1, "step": 0.1}, 0.3),
        ("0.8", {"min": 0.1, "max": 5, "step": 0.2}, 0.7),
        ("2.5", {"min": 0, "max": 10, "step": 0.5}, 2.5),
    ],
)
def test_number_fractional_step(raw, spec, expected):
    assert NumberField.validate(raw, {"type": "number", **spec}) == expected


def test_number_integer_step_keeps_int_type():
    result = NumberField.validate("10", {"type": "number", "min": 0, "max": 10, "step": 3})

    assert result == 9
    assert isinstance(result, int)


def test_dropdown_failing_provider_rejects_value():
    def unavailable():
        raise LookupError("backend down")

    spec = {"type": "dropdown", "id": "front-page", "choices_provider": unavailable}

    assert DropdownField.validate("3", spec) is None


@pytest.mark.parametrize("order, expected", [("5.5", 5), (7.9, 7), ("12", 12), ("-3.2", -3), ("soon", 0)])
def test_order_is_truncated_to_int(order, expected):
    assert TextField(_spec(type="text", order=order)).order == expected
