"""Settings modules: feature-owned sections wired onto a settings page.

A feature describes itself with a :class:`SettingsModule` (titles, section
key, storage name and a function producing its field specs) and is attached
to a page with :func:`attach_module`. Submitted values are run through
:func:`validate_options`, which reconciles fields missing from the post with
their stored values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from . import hooks
from .domain.repositories import OptionsRepository
from .errors import doing_it_wrong
from .fields import FieldSpec, FieldTypeRegistry, registry as default_registry
from .fields.number import to_number
from .logging_config import get_logger
from .options import OptionsStore
from .pages import SettingsPage
from .sanitize import kses_post, sanitize_key

logger = get_logger("modules")

FieldSpecBuilder = Callable[[OptionsStore], List[FieldSpec]]


@dataclass(frozen=True)
class SettingsModule:
    """Declaration a feature supplies to contribute one page section.

    ``field_specs`` is called with the module's store each time the section
    is built so specs can carry the current stored values. ``options_filter``
    names the filter hooks; it defaults to the section key.
    """

    admin_title: str
    admin_description: str
    section_key: str
    options_handle: str
    field_specs: FieldSpecBuilder
    options_filter: Optional[str] = None

    @property
    def filter_name(self) -> str:
        return self.options_filter or sanitize_key(self.section_key)

    @property
    def validation_filter_name(self) -> str:
        return f"{self.filter_name}_validation"


def validate_options(
    field_specs: List[FieldSpec],
    store: OptionsStore,
    raw_input: Optional[Mapping[str, Any]],
    *,
    validation_filter: Optional[str] = None,
    registry: Optional[FieldTypeRegistry] = None,
) -> Optional[Dict[str, Any]]:
    """Turn one submitted ``{field_id: value}`` mapping into the values to store.

    Every declared field starts from its stored value. Fields present in the
    submission are validated by type; absent fields use their type's unset
    value (e.g. ``"off"`` for checkboxes) or, if the type has none, keep the
    stored value. Fields owned by other forms therefore keep their values.
    """

    if store is None or store.is_inert:
        return None

    registry = registry or default_registry
    raw_input = raw_input if isinstance(raw_input, Mapping) else {}
    filtered_input: Dict[str, Any] = {}
    output: Dict[str, Any] = {}

    for spec in field_specs:
        field_id = spec.get("id")
        field_type = spec.get("type")
        if field_id is None or field_type is None:
            continue

        output[field_id] = store.get(field_id)

        if raw_input.get(field_id) is not None:
            filtered_input[field_id] = raw_input[field_id]
        else:
            unset = registry.get_unset_value(field_type)
            if unset is None:
                continue
            filtered_input[field_id] = unset

        output[field_id] = registry.validate(spec, filtered_input[field_id])

    if validation_filter:
        return hooks.apply_filters(validation_filter, output, filtered_input)
    return output


@dataclass
class BoundSettingsModule:
    """A module attached to a page, with its store and current field specs."""

    module: SettingsModule
    page: SettingsPage
    store: OptionsStore
    registry: FieldTypeRegistry = field(default=default_registry)
    field_specs: List[FieldSpec] = field(default_factory=list)

    @property
    def section_key(self) -> str:
        return sanitize_key(self.module.section_key)

    def build_section(self) -> None:
        """Rebuild the field specs from the store and refill the page section."""

        specs = list(self.module.field_specs(self.store) or [])
        specs = hooks.apply_filters(self.module.filter_name, specs, self.store)
        self.field_specs = list(specs or [])

        section = self.page.sections.get(self.section_key)
        if section is None:
            return
        section.clear()
        for spec in self.field_specs:
            self.page.add_setting(self.section_key, spec)

    def validate_options(self, raw_input: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        return validate_options(
            self.field_specs,
            self.store,
            raw_input,
            validation_filter=self.module.validation_filter_name,
            registry=self.registry,
        )

    def get_boolean_value(self, name: str, default: str = "off") -> bool:
        """``True`` when the stored value is ``"on"``; the default applies when nothing is stored."""

        value = self.store.get(sanitize_key(name))
        if value:
            return value == "on"
        return default == "on"

    def get_html_value(self, name: str) -> Any:
        value = self.store.get(sanitize_key(name))
        if value:
            value = kses_post(value)
        return value

    def get_integer_value(self, name: str, default: int = 0, positive: bool = True) -> Optional[int]:
        """Stored value as an int, falling back to ``default``.

        With ``positive`` set, negative defaults become 0 and negative stored
        values are replaced by the default.
        """

        if not name:
            return None
        if positive and default < 0:
            default = 0
        default = int(default)

        number = to_number(self.get_string_value(name))
        if number is None:
            return default
        value = int(number)
        if positive and value < 0:
            return default
        return value

    def get_string_value(self, name: str, default: Any = None) -> Any:
        value = self.store.get(sanitize_key(name))
        if value is None:
            return default
        return value


def attach_module(
    page: SettingsPage,
    module: SettingsModule,
    *,
    repository: Optional[OptionsRepository] = None,
    registry: Optional[FieldTypeRegistry] = None,
) -> Optional[BoundSettingsModule]:
    """Register ``module``'s section, validator and fields on ``page``.

    Returns ``None`` (after reporting the misconfiguration) when the page is
    missing, a required module attribute is empty or the section key is taken.
    """

    if not isinstance(page, SettingsPage):
        doing_it_wrong("attach_module", "An instance of SettingsPage was not supplied.")
        return None
    if not module.admin_description or not module.section_key or not module.admin_title:
        doing_it_wrong(
            "attach_module",
            "Register a valid admin_description, section_key and admin_title for the module",
        )
        return None
    if not module.options_handle:
        doing_it_wrong("attach_module", "Handle to refer to the options store is missing.")
        return None

    store = OptionsStore(module.options_handle, {}, repository=repository)
    if store.is_inert:
        return None

    if not page.add_section(
        module.section_key,
        {"name": module.admin_title, "description": module.admin_description},
    ):
        return None

    bound = BoundSettingsModule(
        module=module,
        page=page,
        store=store,
        registry=registry or default_registry,
    )
    page.add_options({"name": store.get_name(), "validation": bound.validate_options, "store": store})
    page.add_section_builder(bound.build_section)
    bound.build_section()

    logger.info(
        "Attached settings module",
        extra={"section": bound.section_key, "option_name": store.name, "fields": len(bound.field_specs)},
    )
    return bound


__all__ = [
    "BoundSettingsModule",
    "FieldSpecBuilder",
    "SettingsModule",
    "attach_module",
    "validate_options",
]
