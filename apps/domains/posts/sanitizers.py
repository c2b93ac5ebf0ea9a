import html
import re

import bleach

# Body fragment markup only: no html / head / body / script / style.
ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS) | {
    "p", "br", "hr", "div", "span",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "img", "figure", "figcaption",
    "pre", "u", "s", "sub", "sup",
}
ALLOWED_ATTRIBUTES = {
    **bleach.sanitizer.ALLOWED_ATTRIBUTES,
    "img": ["src", "alt", "title", "width", "height"],
    "span": ["class"],
    "div": ["class"],
    "pre": ["class"],
}

_WHITESPACE = re.compile(r"\s+")


def sanitize_content(value: str) -> str:
    return bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True).strip()


def strip_markup(value: str) -> str:
    """Plain text of ``value``; markup removed, entities decoded."""
    text = html.unescape(bleach.clean(value, tags=set(), strip=True))
    return _WHITESPACE.sub(" ", text).strip()


def make_excerpt(content: str, length: int) -> str:
    text = strip_markup(content)
    if len(text) > length:
        return text[:length] + "..."
    return text
