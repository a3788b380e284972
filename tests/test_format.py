"""Tests for the Markdown output flavors."""

import pytest

from pymarkdoc.exceptions import ConfigError
from pymarkdoc.format import (
    AzureDevOpsMarkdown,
    FormatKind,
    GitHubFlavoredMarkdown,
    PlainMarkdown,
    get_format,
)
from pymarkdoc.lang.models import Location, Repo

REPO = Repo(remote="https://github.com/org/proj", default_branch="main", path_from_root="/src/")
LOCATION = Location(file="mod.py", start=3, end=7)


class TestGetFormat:

    @pytest.mark.parametrize("name,cls", [
        ("github", GitHubFlavoredMarkdown),
        ("azure-devops", AzureDevOpsMarkdown),
        ("plain", PlainMarkdown),
    ])
    def test_known_formats(self, name, cls):
        assert isinstance(get_format(name), cls)

    def test_every_kind_has_a_format(self):
        for kind in FormatKind:
            assert get_format(kind.value).name == kind.value

    def test_unknown_format(self):
        with pytest.raises(ConfigError, match="invalid format: html"):
            get_format("html")


class TestCommonFormatting:

    def test_header_levels_are_clamped(self):
        fmt = PlainMarkdown()

        assert fmt.header("Title", 1) == "# Title"
        assert fmt.header("Deep", 9) == "###### Deep"

    def test_code_block(self):
        assert GitHubFlavoredMarkdown().code_block("x = 1") == "```python\nx = 1\n```"

    def test_code_block_containing_fence(self):
        block = GitHubFlavoredMarkdown().code_block("s = '```'")

        assert block.startswith("````python\n")
        assert block.endswith("\n````")

    def test_escape(self):
        assert GitHubFlavoredMarkdown().escape("snake_case *x*") == "snake\\_case \\*x\\*"

    def test_bold(self):
        fmt = GitHubFlavoredMarkdown()

        assert fmt.bold("name") == "**name**"
        assert fmt.bold("") == ""

    def test_link_without_href(self):
        assert GitHubFlavoredMarkdown().link("text", "") == "text"

    def test_list_entry(self):
        fmt = GitHubFlavoredMarkdown()

        assert fmt.list_entry(0, "a") == "- a"
        assert fmt.list_entry(2, "b") == "    - b"


class TestGitHub:

    def test_anchor(self):
        assert GitHubFlavoredMarkdown().anchor("def Square.area") == "def-squarearea"

    def test_local_link(self):
        assert GitHubFlavoredMarkdown().local_link("Values", "Values") == "[Values](#values)"

    def test_code_href(self):
        href = GitHubFlavoredMarkdown().code_href(LOCATION, REPO)

        assert href == "https://github.com/org/proj/blob/main/src/mod.py#L3-L7"

    def test_single_line_href(self):
        href = GitHubFlavoredMarkdown().code_href(Location("mod.py", 4, 4), REPO)

        assert href.endswith("#L4")

    def test_no_repository(self):
        assert GitHubFlavoredMarkdown().code_href(LOCATION, None) == ""

    def test_accordion(self):
        text = GitHubFlavoredMarkdown().accordion("Example", "body")

        assert text.startswith("<details><summary>Example</summary>")
        assert "body" in text
        assert text.endswith("</details>")


class TestAzureDevOps:

    def test_code_href(self):
        repo = Repo(remote="https://dev.azure.com/org/proj/_git/repo", default_branch="main", path_from_root="/")
        href = AzureDevOpsMarkdown().code_href(LOCATION, repo)

        assert href.startswith("https://dev.azure.com/org/proj/_git/repo?path=/mod.py")
        assert "version=GBmain" in href
        assert "line=3" in href
        assert "lineEnd=8" in href


class TestPlain:

    def test_no_links(self):
        fmt = PlainMarkdown()

        assert fmt.code_href(LOCATION, REPO) == ""
        assert fmt.local_link("Values", "Values") == "Values"

    def test_accordion_uses_header(self):
        assert PlainMarkdown().accordion("Example", "body") == "## Example\n\nbody"
