"""Feature modules that contribute sections to the settings page."""

from .general import (
    GENERAL_SETTINGS,
    SITE_TAGLINE_ID,
    SITE_TITLE_ID,
    get_site_tagline,
    get_site_title,
    register_general_settings,
)

__all__ = [
    "GENERAL_SETTINGS",
    "SITE_TAGLINE_ID",
    "SITE_TITLE_ID",
    "get_site_tagline",
    "get_site_title",
    "register_general_settings",
]
