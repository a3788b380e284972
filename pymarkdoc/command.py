"""The documentation pipeline: expand, route, load, render and reconcile."""

from typing import Dict, List, Optional

from .config import MarkdocConfig
from .exceptions import ConfigError, LoadError
from .format import get_format
from .lang.loader import load_package
from .lang.models import Repo
from .output import write_output
from .renderer import Renderer
from .specs import PackageSpec, compile_output_template, get_specs, group_by_output, resolve_output
from .tags import default_tags
from .utils import logger, read_text_file


def resolve_overrides(template: Dict[str, str], template_file: Dict[str, str]) -> Dict[str, str]:
    """Collect template overrides, preferring inline content over files."""
    overrides = dict(template)

    for name, path in template_file.items():
        if name in overrides:
            continue
        try:
            overrides[name] = read_text_file(path)
        except OSError as e:
            raise ConfigError(f"couldn't resolve template for {name}: {e}") from e

    return overrides


def _resolve_text(text: str, file_name: str, what: str) -> str:
    if text:
        return text
    if file_name:
        try:
            return read_text_file(file_name)
        except OSError as e:
            raise ConfigError(f"couldn't resolve {what} file: {e}") from e
    return ""


def resolve_header(options: MarkdocConfig) -> str:
    return _resolve_text(options.header, options.header_file, "header")


def resolve_footer(options: MarkdocConfig) -> str:
    return _resolve_text(options.footer, options.footer_file, "footer")


def resolve_tags(options: MarkdocConfig) -> List[str]:
    if options.tags is not None:
        return [tag for tag in options.tags if tag]
    return default_tags()


def _repository_overrides(options: MarkdocConfig) -> Repo:
    return Repo(
        remote=options.repository.url,
        default_branch=options.repository.default_branch,
        path_from_root=options.repository.path,
    )


def load_packages(specs: List[PackageSpec], options: MarkdocConfig, tags: Optional[List[str]] = None) -> None:
    """Load the documentation model of every spec.

    Failures for specs found by recursive expansion are skipped, since such
    expansion routinely picks up directories that are not packages.
    """
    tags = resolve_tags(options) if tags is None else tags
    repository = _repository_overrides(options)

    for spec in specs:
        try:
            spec.pkg = load_package(
                spec.import_path,
                tags=tags,
                include_unexported=options.include_unexported,
                repository=repository,
            )
        except LoadError as e:
            logger.debug(f"{spec.dir}: unable to load package: {e}")
            if spec.is_wildcard:
                continue
            raise


def run_command(paths: List[str], options: MarkdocConfig) -> None:
    """Generate documentation for the given package arguments.

    Raises:
        MarkdocError: On the first fatal error; nothing further is processed
    """
    if options.check and not options.output:
        raise ConfigError("check mode cannot be run without an output set")

    output_template = compile_output_template(options.output)
    renderer = Renderer(
        get_format(options.format),
        resolve_overrides(options.template, options.template_file),
    )
    header = resolve_header(options)
    footer = resolve_footer(options)

    specs = get_specs(*(paths or ["."]))
    resolve_output(specs, output_template)
    load_packages(specs, options)

    write_output(
        group_by_output(specs),
        renderer,
        header=header,
        footer=footer,
        embed=options.embed,
        check=options.check,
    )
