"""Common Markdown formatting shared by every output flavor."""

import re
from abc import ABC, abstractmethod
from typing import Optional

from ..lang.models import Location, Repo

_ESCAPE_RE = re.compile(r'([\\`*_\[\]<>|#])')


class Format(ABC):
    """Markdown flavor used by the renderer.

    Subclasses decide how anchors, collapsible sections and links to source
    code are written for the platform that will display the output.
    """

    name = ""

    def bold(self, text: str) -> str:
        if not text:
            return ""
        return f"**{self.escape(text)}**"

    def code_block(self, code: str, language: str = "python") -> str:
        fence = "```"
        while fence in code:
            fence += "`"
        body = code.strip("\n")
        return f"{fence}{language}\n{body}\n{fence}"

    def header(self, text: str, level: int) -> str:
        level = min(max(level, 1), 6)
        return f"{'#' * level} {text}"

    def link(self, text: str, href: str) -> str:
        if not href:
            return text
        return f"[{text}]({href})"

    def list_entry(self, depth: int, text: str) -> str:
        if not text:
            return ""
        return f"{'  ' * depth}- {text}"

    def escape(self, text: str) -> str:
        return _ESCAPE_RE.sub(r'\\\1', text)

    def local_link(self, text: str, anchor: str) -> str:
        href = self.local_href(anchor)
        if not href:
            return self.escape(text)
        return self.link(self.escape(text), href)

    def local_href(self, anchor: str) -> str:
        slug = self.anchor(anchor)
        return f"#{slug}" if slug else ""

    def accordion_header(self, title: str) -> str:
        return f"<details><summary>{title}</summary>\n<p>"

    def accordion_terminator(self) -> str:
        return "</p>\n</details>"

    def accordion(self, title: str, body: str) -> str:
        return f"{self.accordion_header(title)}\n\n{body}\n\n{self.accordion_terminator()}"

    @abstractmethod
    def anchor(self, text: str) -> str:
        """Slug the platform generates for a heading with the given text."""

    @abstractmethod
    def code_href(self, location: Location, repository: Optional[Repo]) -> str:
        """Link to the source of a symbol, or an empty string."""
