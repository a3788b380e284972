"""Markdown flavors for GitHub, Azure DevOps and plain renderers."""

import re
from typing import Optional
from urllib.parse import quote

from ..lang.models import Location, Repo
from .base import Format


class GitHubFlavoredMarkdown(Format):
    """Markdown rendered by GitHub."""

    name = "github"

    def anchor(self, text: str) -> str:
        slug = text.strip().lower()
        slug = re.sub(r'[^\w\- ]', '', slug)
        return slug.replace(' ', '-')

    def code_href(self, location: Location, repository: Optional[Repo]) -> str:
        if repository is None or not repository.remote:
            return ""

        lines = f"L{location.start}"
        if location.end > location.start:
            lines += f"-L{location.end}"

        return (
            f"{repository.remote}/blob/{repository.default_branch}"
            f"{repository.path_from_root}{location.file}#{lines}"
        )


class AzureDevOpsMarkdown(Format):
    """Markdown rendered by Azure DevOps repos and wikis."""

    name = "azure-devops"

    def anchor(self, text: str) -> str:
        slug = text.strip().lower().replace(' ', '-')
        return quote(slug, safe='-_.~')

    def code_href(self, location: Location, repository: Optional[Repo]) -> str:
        if repository is None or not repository.remote:
            return ""

        path = quote(f"{repository.path_from_root}{location.file}", safe='/')
        return (
            f"{repository.remote}?path={path}"
            f"&version=GB{repository.default_branch}"
            f"&_a=contents&line={location.start}&lineStyle=plain"
            f"&lineEnd={location.end + 1}&lineStartColumn=1&lineEndColumn=1"
        )


class PlainMarkdown(Format):
    """Markdown without anchors, collapsible sections or source links."""

    name = "plain"

    def anchor(self, text: str) -> str:
        return ""

    def code_href(self, location: Location, repository: Optional[Repo]) -> str:
        return ""

    def accordion_header(self, title: str) -> str:
        return self.header(title, 2)

    def accordion_terminator(self) -> str:
        return ""

    def accordion(self, title: str, body: str) -> str:
        return f"{self.accordion_header(title)}\n\n{body}"
