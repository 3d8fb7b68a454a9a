"""Rendering helpers for chat content.

Responsibilities:
    - Markdown to HTML conversion with markdown-it-py
    - Allow-list HTML sanitization with nh3
    - Escaping of user-typed text

Every piece of content shown in the chat passes through sanitize_html.
"""

from seka_portal.rendering.markdown import render_markdown
from seka_portal.rendering.sanitize import (
    SafeHtml,
    render_assistant_text,
    render_user_text,
    sanitize_html,
)

__all__ = [
    "SafeHtml",
    "render_assistant_text",
    "render_markdown",
    "render_user_text",
    "sanitize_html",
]
