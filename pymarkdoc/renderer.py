"""Rendering of documentation models into Markdown text."""

import re
from typing import Dict, Optional

import jinja2

from .exceptions import ConfigError, RenderError
from .format import Format
from .lang.doc import parse_doc, synopsis
from .lang.models import File
from .templates import TEMPLATES

_BLANK_RUN_RE = re.compile(r'\n{3,}')


def _tidy(text: str) -> str:
    text = _BLANK_RUN_RE.sub('\n\n', text)
    return text.strip('\n') + '\n'


class Renderer:
    """Render documentation files through Jinja2 templates."""

    def __init__(self, format: Format, overrides: Optional[Dict[str, str]] = None):
        """Initialize the renderer.

        Args:
            format: Markdown flavor to render with
            overrides: Template source keyed by built-in template name

        Raises:
            ConfigError: If an override names an unknown template or fails
                to compile
        """
        self.format = format

        templates = dict(TEMPLATES)
        for name, source in (overrides or {}).items():
            if name not in TEMPLATES:
                raise ConfigError(f"unknown template: {name}")
            templates[name] = source

        self.env = jinja2.Environment(
            loader=jinja2.DictLoader(templates),
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.globals.update(
            fmt=format,
            parse_doc=parse_doc,
            synopsis=synopsis,
            code_href=format.code_href,
        )

        for name in templates:
            try:
                self.env.get_template(name)
            except jinja2.TemplateSyntaxError as e:
                raise ConfigError(f"invalid template {name}: {e}") from e

    def file(self, file: File) -> str:
        """Render a complete output file."""
        try:
            text = self.env.get_template("file").render(file=file)
        except jinja2.TemplateError as e:
            raise RenderError(f"failed to render documentation: {e}") from e
        return _tidy(text)
