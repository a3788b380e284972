#!/usr/bin/env python3
"""
Command-line interface for pymarkdoc.
"""

from typing import Dict, Tuple

import click
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape

from . import __version__
from .command import run_command
from .config import Config
from .exceptions import MarkdocError
from .utils import get_log_level, logger
from .version import print_version

err_console = Console(stderr=True)

# Command-line parameters that map onto configuration keys
CONFIG_PARAMS = [
    'output',
    'check',
    'embed',
    'format',
    'template',
    'template_file',
    'header',
    'header_file',
    'footer',
    'footer_file',
    'tags',
    'include_unexported',
    'repository_url',
    'repository_default_branch',
    'repository_path',
]


def _parse_mapping(ctx, param, values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated NAME=VALUE options into a dictionary."""
    mapping = {}
    for item in values:
        name, sep, value = item.partition('=')
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", ctx=ctx, param=param)
        mapping[name.strip()] = value
    return mapping


def _parse_tags(ctx, param, values: Tuple[str, ...]):
    tags = []
    for item in values:
        tags.extend(tag.strip() for tag in item.split(',') if tag.strip())
    return tags


def _given(ctx: click.Context, name: str) -> bool:
    source = ctx.get_parameter_source(name)
    return source not in (None, ParameterSource.DEFAULT, ParameterSource.DEFAULT_MAP)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('packages', nargs=-1)
@click.option('--config', 'config_file', type=click.Path(), help='File from which to load configuration (default: .pymarkdoc.yml)')
@click.option('--include-unexported', '-u', is_flag=True, help='Output documentation for names starting with an underscore as well.')
@click.option('--output', '-o', help='File or template specifying where to write documentation. Defaults to printing to stdout.')
@click.option('--check', '-c', is_flag=True, help='Check that the output matches the generated documentation. --output must be set.')
@click.option('--embed', '-e', is_flag=True, help='Embed documentation into existing files if available, otherwise append to the file.')
@click.option('--format', '-f', 'format_name', help='Format to use for writing output: github (default), azure-devops, plain.')
@click.option('--template', '-t', multiple=True, callback=_parse_mapping, metavar='NAME=TEMPLATE', help='Template to use in place of the built-in template with that name.')
@click.option('--template-file', multiple=True, callback=_parse_mapping, metavar='NAME=PATH', help='Template file to use in place of the built-in template with that name.')
@click.option('--header', help='Additional content to inject at the beginning of each output file.')
@click.option('--header-file', type=click.Path(), help='File containing content to inject at the beginning of each output file.')
@click.option('--footer', help='Additional content to inject at the end of each output file.')
@click.option('--footer-file', type=click.Path(), help='File containing content to inject at the end of each output file.')
@click.option('--tags', multiple=True, callback=_parse_tags, help='Build tags selecting which modules are documented. Comma separated.')
@click.option('--verbose', '-v', count=True, help='Log additional output. Can be repeated for more verbosity.')
@click.option('--repository.url', 'repository_url', help='Repository URL to use in place of automatic detection.')
@click.option('--repository.default-branch', 'repository_default_branch', help='Default branch to use in place of automatic detection.')
@click.option('--repository.path', 'repository_path', help='Path from the repository root to use in place of automatic detection.')
@click.option('--version', 'show_version', is_flag=True, help='Print the version.')
@click.pass_context
def cli(ctx, packages, config_file, verbose, show_version, format_name, **params):
    """Generate Markdown documentation for Python packages.

    PACKAGES are directories (./pkg, ./pkg/... for everything below it) or
    importable names (json, xml.etree). Defaults to the current directory.
    """
    if show_version:
        print_version(__version__)
        return

    logger.setLevel(get_log_level(verbose))

    params['format'] = format_name
    overrides = {
        name: params[name]
        for name in CONFIG_PARAMS
        if _given(ctx, 'format_name' if name == 'format' else name)
    }

    try:
        options = Config(config_file).options(**overrides)
        run_command(list(packages) or ["."], options)
    except MarkdocError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        logger.debug("run failed", exc_info=True)
        ctx.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
