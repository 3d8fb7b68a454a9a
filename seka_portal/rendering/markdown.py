"""Markdown to HTML conversion using markdown-it-py.

The "js-default" preset mirrors the JavaScript markdown-it defaults: raw
HTML in the source is escaped, tables and strikethrough are enabled.
"""

from markdown_it import MarkdownIt

_md = MarkdownIt("js-default")


def render_markdown(text: str) -> str:
    """Render Markdown text to an HTML string.

    Pure and synchronous; the same input always gives the same output.
    """
    return _md.render(text)
