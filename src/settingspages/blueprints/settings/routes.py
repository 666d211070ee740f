"""Settings page routes."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Tuple

from flask import abort, flash, redirect, render_template, request, url_for

from ...logging_config import get_logger
from ...pages import SettingsPage, get_page, registered_pages
from . import bp

logger = get_logger("blueprints.settings")

# Matches names such as ``tns_general_options[tns-site-title]``
_FIELD_NAME = re.compile(r"^(?P<option>[^\[\]]+)\[(?P<field>[^\[\]]+)\]$")


def nest_form(items: Iterable[Tuple[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Group ``option[field]`` form keys into ``{option: {field: value}}``."""

    nested: Dict[str, Dict[str, Any]] = {}
    for key, value in items:
        match = _FIELD_NAME.match(key)
        if not match:
            continue
        nested.setdefault(match.group("option"), {})[match.group("field")] = value
    return nested


def _load_page(slug: str) -> SettingsPage:
    page = get_page(slug)
    if page is None:
        abort(404)
    return page


@bp.get("/")
def index():
    """Redirect to the first registered page, ordered by menu position."""

    pages = registered_pages()
    if not pages:
        abort(404)
    return redirect(url_for("settings.show_page", slug=pages[0].slug))


@bp.get("/<slug>")
def show_page(slug: str):
    page = _load_page(slug)
    # Fields are rebuilt per request so they show the currently stored values
    page.rebuild()
    return render_template(
        "settings/page.html",
        page=page,
        menu=registered_pages(),
        updated=request.args.get("settings-updated") == "true",
    )


@bp.post("/<slug>")
def save_page(slug: str):
    page = _load_page(slug)
    page.rebuild()
    submitted = nest_form(request.form.items())
    results = page.process_submission(submitted)
    logger.info("Settings saved", extra={"page": page.slug, "option_groups": sorted(results)})
    flash("Options saved", "success")
    return redirect(url_for("settings.show_page", slug=page.slug, **{"settings-updated": "true"}))
