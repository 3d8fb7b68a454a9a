"""HTML sanitization for everything inserted into the page.

Uses nh3 (ammonia bindings) with an allow-list tuned for rendered Markdown.
Script and style elements are removed together with their content, links
are forced to rel="noopener noreferrer", and only web and mail URL schemes
are kept.
"""

import html
from collections.abc import Callable
from typing import NewType

import nh3

from seka_portal.rendering.markdown import render_markdown

SafeHtml = NewType("SafeHtml", str)

ALLOWED_TAGS = {
    "a", "b", "blockquote", "br", "code", "del", "em", "h1", "h2", "h3", "h4",
    "h5", "h6", "hr", "i", "img", "li", "ol", "p", "pre", "s", "strong",
    "table", "tbody", "td", "th", "thead", "tr", "ul",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "img": {"src", "alt", "title"},
    "code": {"class"},
    "ol": {"start"},
}

CLEAN_CONTENT_TAGS = {"script", "style"}

URL_SCHEMES = {"http", "https", "mailto"}


def sanitize_html(value: str) -> SafeHtml:
    """Clean arbitrary text or HTML into markup that is safe to insert.

    Args:
        value: Untrusted HTML or text.

    Returns:
        HTML containing only allow-listed tags and attributes.
    """
    return SafeHtml(
        nh3.clean(
            value,
            tags=ALLOWED_TAGS,
            clean_content_tags=CLEAN_CONTENT_TAGS,
            attributes=ALLOWED_ATTRIBUTES,
            url_schemes=URL_SCHEMES,
            link_rel="noopener noreferrer",
        )
    )


def render_user_text(text: str) -> SafeHtml:
    """Render user-typed text as escaped HTML with preserved line breaks."""
    escaped = html.escape(text).replace("\n", "<br>")
    return sanitize_html(escaped)


def render_assistant_text(text: str, render: Callable[[str], str] = render_markdown) -> SafeHtml:
    """Render accumulated assistant text through Markdown, then sanitize."""
    return sanitize_html(render(text))
