"""General site options: title and tagline fields that accept post markup."""

from __future__ import annotations

from typing import Any, List, Optional

from ..domain.repositories import OptionsRepository
from ..fields import FieldSpec
from ..modules import BoundSettingsModule, SettingsModule, attach_module
from ..options import OptionsStore
from ..pages import SettingsPage

SITE_TITLE_ID = "tns-site-title"
SITE_TAGLINE_ID = "tns-site-tagline"
SECTION_KEY = "tns-general"


def general_field_specs(store: OptionsStore) -> List[FieldSpec]:
    option = store.get_name()
    return [
        {
            "type": "text",
            "section": SECTION_KEY,
            "id": SITE_TITLE_ID,
            "label": "Site Title",
            "option": option,
            "data": store.get(SITE_TITLE_ID),
            "default": "",
            "order": 10,
        },
        {
            "type": "text",
            "section": SECTION_KEY,
            "id": SITE_TAGLINE_ID,
            "label": "Site Tagline",
            "option": option,
            "data": store.get(SITE_TAGLINE_ID),
            "default": "",
            "order": 20,
        },
    ]


GENERAL_SETTINGS = SettingsModule(
    admin_title="General Options",
    admin_description="Title and tagline fields which allow HTML tags",
    section_key=SECTION_KEY,
    options_handle="tns_general_options",
    field_specs=general_field_specs,
)


def register_general_settings(
    page: SettingsPage, repository: Optional[OptionsRepository] = None
) -> Optional[BoundSettingsModule]:
    return attach_module(page, GENERAL_SETTINGS, repository=repository)


def get_site_title(bound: BoundSettingsModule) -> Any:
    """Site title as stored, limited to post markup."""

    return bound.get_html_value(SITE_TITLE_ID)


def get_site_tagline(bound: BoundSettingsModule) -> Any:
    return bound.get_html_value(SITE_TAGLINE_ID)


__all__ = [
    "GENERAL_SETTINGS",
    "SITE_TAGLINE_ID",
    "SITE_TITLE_ID",
    "general_field_specs",
    "get_site_tagline",
    "get_site_title",
    "register_general_settings",
]
