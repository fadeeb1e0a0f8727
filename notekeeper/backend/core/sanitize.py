"""
HTML Sanitization.

Markup cleaning for user-supplied text. Both helpers are idempotent:
cleaning already-clean text returns it unchanged.
"""

import html
import re

import nh3

# Tags allowed in rich note content
ALLOWED_TAGS: frozenset[str] = frozenset({
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "del",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
})

ALLOWED_ATTRIBUTES: dict[str, set[str]] = {
    "a": {"href", "title"},
    "abbr": {"title"},
}

# Tags removed together with everything inside them
STRIPPED_CONTENT_TAGS: frozenset[str] = frozenset({"script", "style"})

# Entities the serializer writes for plain text that are safe to turn back into characters
TEXT_ENTITIES: dict[str, str] = {"&gt;": ">", "&quot;": "\"", "&nbsp;": " "}

_ENTITY_RE = re.compile(r"&(?:amp|gt|quot|nbsp);")
_REFERENCE_RE = re.compile(r"#?[A-Za-z0-9]*;?")


def _unescape_text(value: str) -> str:
    """
    Decode serializer entities back to plain characters.

    &lt; stays escaped, and so does an &amp; whose ampersand would start a
    character reference when parsed again.
    """

    def replace(match: re.Match[str]) -> str:
        entity = match.group(0)
        if entity != "&amp;":
            return TEXT_ENTITIES[entity]
        reference = "&" + _REFERENCE_RE.match(value, match.end()).group(0)
        return "&" if html.unescape(reference) == reference else entity

    return _ENTITY_RE.sub(replace, value)


def strip_all_tags(value: str) -> str:
    """
    Remove all markup and normalize whitespace.

    Args:
        value: Raw text, possibly containing HTML

    Returns:
        Single-line plain text with runs of whitespace collapsed
    """
    cleaned = nh3.clean(
        value,
        tags=set(),
        clean_content_tags=set(STRIPPED_CONTENT_TAGS),
    )
    return " ".join(_unescape_text(cleaned).split())


def clean_html(value: str) -> str:
    """
    Keep a safe subset of HTML and strip everything else.

    Args:
        value: Raw HTML fragment

    Returns:
        Sanitized HTML fragment
    """
    return nh3.clean(
        value,
        tags=set(ALLOWED_TAGS),
        attributes={tag: set(attrs) for tag, attrs in ALLOWED_ATTRIBUTES.items()},
        clean_content_tags=set(STRIPPED_CONTENT_TAGS),
        url_schemes={"http", "https", "mailto"},
    )


def excerpt(value: str, num_words: int = 15, more: str = "…") -> str:
    """
    Plain-text excerpt limited to a number of words.

    Args:
        value: Raw text, possibly containing HTML
        num_words: Maximum number of words to keep
        more: Suffix appended when the text was truncated

    Returns:
        Excerpt text
    """
    words = strip_all_tags(value).split()
    if len(words) <= num_words:
        return " ".join(words)
    return " ".join(words[:num_words]) + more
