"""Markdown + LaTeX rendering helpers shared by Qt and web clients.

Question and answer text is converted to HTML on the server side; math is
left as ``$...$`` markup for MathJax to typeset in the browser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without the surrounding paragraph tag."""

        return self._markdown.renderInline(markdown_text.strip())


renderer = MarkdownMathRenderer()
# MarkdownIt is safe for concurrent read-only renders, so the API threads and
# the Qt window share this instance.
