"""
Output sanitisation for user-supplied text.

Free-text fields are echoed back to clients that may render them as HTML, so
every read path runs them through :func:`clean_text`.  A small whitelist of
formatting markup survives; anything else (``<script>``, event-handler
attributes, ``javascript:`` links) is escaped or dropped by ``bleach``.
"""
import bleach

ALLOWED_TAGS: frozenset[str] = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "del", "div", "em",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li", "ol",
    "p", "pre", "s", "small", "span", "strong", "sub", "sup", "u", "ul",
})

ALLOWED_ATTRIBUTES: dict[str, list[str]] = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS: frozenset[str] = frozenset({"http", "https", "mailto"})


def clean_text(value: str | None) -> str | None:
    """Return *value* with active script content neutralised; None stays None."""
    if value is None:
        return None
    return bleach.clean(
        value,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,
    )
