"""Settings pages, their sections and the page factory."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Iterator, List, Optional

from .errors import doing_it_wrong
from .fields import FieldSpec, FieldTypeRegistry, SettingField, registry as default_registry
from .logging_config import get_logger
from .options import OptionsStore
from .sanitize import esc_attr, sanitize_key

logger = get_logger("pages")

DEFAULT_POSITION = 61

Validator = Callable[[Mapping[str, Any]], Any]


class SettingsSection:
    """A titled group of fields rendered together on a settings page."""

    def __init__(
        self,
        header: Optional[Mapping[str, Any]] = None,
        registry: Optional[FieldTypeRegistry] = None,
    ) -> None:
        header = header or {}
        self.name: str = str(header.get("name") or "")
        self.description: str = str(header.get("description") or "")
        self.elements: List[SettingField] = []
        self._registry = registry or default_registry

    def add_element(self, spec: FieldSpec) -> bool:
        """Build a field from ``spec`` through the type registry and keep it."""

        type_name = sanitize_key(spec.get("type")) if spec else ""
        if not type_name:
            return False
        element = self._registry.create(type_name, spec)
        if element is None:
            logger.info("Skipped field", extra={"field_type": type_name, "field_id": spec.get("id")})
            return False
        self.elements.append(element)
        return True

    def clear(self) -> None:
        self.elements = []

    def has_elements(self) -> bool:
        return bool(self.elements)

    def sorted_elements(self) -> List[SettingField]:
        # sorted() is stable, so equal orders keep declaration order
        return sorted(self.elements, key=lambda element: element.order)

    def get_section_name(self) -> str:
        return self.name

    def get_section_body(self) -> str:
        """Label/control markup for every field, in display order."""

        if not self.has_elements():
            return ""
        rows = []
        for element in self.sorted_elements():
            rows.append(
                '<label class="field"><span class="field-title">{}</span>\n'
                '<span class="field-control">{}</span></label>\n'.format(
                    element.get_label(), element.get_element_body()
                )
            )
        return "".join(rows)


@dataclass
class OptionGroup:
    """An option name, the validator run on its submitted values and where they are stored."""

    name: str
    validate: Validator
    store: Optional[OptionsStore] = None


class SettingsPage:
    """One admin settings page made of sections contributed by settings modules."""

    def __init__(self, slug: str, args: Mapping[str, Any], registry: Optional[FieldTypeRegistry] = None) -> None:
        for key, label in (("page", "page name"), ("menu", "menu name"), ("options", "options group")):
            if not isinstance(args.get(key), str) or not args.get(key):
                doing_it_wrong("SettingsPage.__init__", f"Set a valid {label} for this settings page")
        if not isinstance(slug, str) or not slug:
            doing_it_wrong("SettingsPage.__init__", "Set a valid menu slug for this settings page")

        position = args.get("position")
        self.slug: str = sanitize_key(slug)
        self.page_title: str = str(args.get("page") or "")
        self.menu_title: str = str(args.get("menu") or "")
        self.option_group: str = str(args.get("options") or "")
        self.position: int = position if isinstance(position, int) and not isinstance(position, bool) else DEFAULT_POSITION
        self.sections: Dict[str, SettingsSection] = {}
        self.validators: List[OptionGroup] = []
        self._builders: List[Callable[[], None]] = []
        self._registry = registry or default_registry

    def add_options(self, args: Mapping[str, Any]) -> bool:
        """Register an option name with the validator run on its submitted values."""

        name = args.get("name")
        validation = args.get("validation")
        if not name or not callable(validation):
            return False
        self.validators.append(
            OptionGroup(name=sanitize_key(name), validate=validation, store=args.get("store"))
        )
        return True

    def add_section(self, key: str, header: Optional[Mapping[str, Any]] = None) -> bool:
        safe_key = sanitize_key(key)
        if not safe_key:
            doing_it_wrong("SettingsPage.add_section", "Section key is empty")
            return False
        if safe_key in self.sections:
            doing_it_wrong("SettingsPage.add_section", f"The section {safe_key} is already registered")
            return False
        self.sections[safe_key] = SettingsSection(header, registry=self._registry)
        return True

    def add_setting(self, section_key: str, spec: FieldSpec) -> bool:
        """Add a field to an existing section; False if either is missing or the field can't be built."""

        if not spec or not section_key:
            return False
        section = self.sections.get(sanitize_key(section_key))
        if section is None:
            return False
        return section.add_element(spec)

    def add_section_builder(self, builder: Callable[[], None]) -> None:
        """Register a callable that refills a section with freshly built fields."""

        self._builders.append(builder)

    def rebuild(self) -> None:
        """Re-run every section builder so fields carry the currently stored values."""

        for builder in self._builders:
            builder()

    def iter_sections(self) -> Iterator[tuple[str, str, SettingsSection]]:
        """Sections in registration order with their keys and DOM target ids."""

        for key, section in self.sections.items():
            yield key, f"tns-section-{esc_attr(key)}", section

    def section_title(self, key: str) -> str:
        section = self.sections[key]
        return section.get_section_name() or f"<Section {key}>"

    def process_submission(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate every registered option group against ``form`` and store the results.

        ``form`` maps option names to the submitted ``{field_id: value}``
        mappings. Groups missing from the form are still validated with an
        empty mapping so unset values (unchecked boxes) are applied.
        """

        results: Dict[str, Any] = {}
        for group in self.validators:
            submitted = form.get(group.name)
            if not isinstance(submitted, Mapping):
                submitted = {}
            output = group.validate(submitted)
            results[group.name] = output
            if group.store is not None and isinstance(output, Mapping):
                if not group.store.set(output):
                    logger.warning("Option group was not saved", extra={"option_name": group.name})
        logger.info("Processed settings submission", extra={"page": self.slug, "groups": list(results)})
        return results

    def __repr__(self) -> str:
        return f"SettingsPage(slug={self.slug!r}, sections={list(self.sections)})"


_PAGES: Dict[str, SettingsPage] = {}
_LOCK = Lock()


def build_page(slug: str, args: Mapping[str, Any], registry: Optional[FieldTypeRegistry] = None) -> Optional[SettingsPage]:
    """Create and register a settings page under a unique slug.

    ``args`` carries ``page`` (title), ``menu`` (menu title), ``options``
    (form option group) and an optional integer ``position``.
    """

    if not isinstance(slug, str) or not sanitize_key(slug):
        doing_it_wrong("build_page", "Set a valid menu slug for this settings page")
        return None
    safe_slug = sanitize_key(slug)

    with _LOCK:
        if safe_slug in _PAGES:
            doing_it_wrong("build_page", f"The page {safe_slug} is already registered")
            return None
        page = SettingsPage(safe_slug, args, registry=registry)
        _PAGES[safe_slug] = page

    logger.info("Registered settings page", extra={"page": safe_slug})
    return page


def get_page(slug: str) -> Optional[SettingsPage]:
    with _LOCK:
        return _PAGES.get(sanitize_key(slug))


def registered_pages() -> List[SettingsPage]:
    with _LOCK:
        return sorted(_PAGES.values(), key=lambda page: (page.position, page.slug))


def clear_pages() -> None:
    """Forget every registered page (useful for tests)."""

    with _LOCK:
        _PAGES.clear()


__all__ = [
    "DEFAULT_POSITION",
    "OptionGroup",
    "SettingsPage",
    "SettingsSection",
    "build_page",
    "clear_pages",
    "get_page",
    "registered_pages",
]
