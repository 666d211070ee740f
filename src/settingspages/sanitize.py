"""Key normalisation, escaping and restricted-HTML helpers."""

from __future__ import annotations

import re
from typing import Any

import nh3
from markupsafe import escape

_KEY_PATTERN = re.compile(r"[^a-z0-9_\-]")

# Markup a post body may carry; everything else is stripped.
POST_TAGS: frozenset[str] = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "cite", "code", "del", "div", "em",
        "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins", "li", "ol",
        "p", "pre", "q", "s", "small", "span", "strike", "strong", "sub", "sup",
        "u", "ul",
    }
)
POST_ATTRIBUTES: dict[str, set[str]] = {
    "*": {"class", "id", "title"},
    "a": {"href", "target"},
    "abbr": {"title"},
    "blockquote": {"cite"},
    "img": {"src", "alt", "width", "height"},
    "q": {"cite"},
}


def sanitize_key(value: Any) -> str:
    """Lowercase ``value`` and drop anything outside ``[a-z0-9_-]``."""

    if value is None:
        return ""
    return _KEY_PATTERN.sub("", str(value).lower())


def esc_attr(value: Any) -> str:
    """Escape a value for use inside an HTML attribute."""

    if value is None:
        return ""
    return str(escape(value))


def esc_html(value: Any) -> str:
    if value is None:
        return ""
    return str(escape(value))


def kses_post(value: Any) -> str:
    """Strip ``value`` down to the markup allowed in post content."""

    if value is None:
        return ""
    return nh3.clean(str(value), tags=set(POST_TAGS), attributes=POST_ATTRIBUTES)


__all__ = ["POST_ATTRIBUTES", "POST_TAGS", "esc_attr", "esc_html", "kses_post", "sanitize_key"]
