"""Expansion of package arguments and routing of packages to output files."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import jinja2

from .constants import (
    CWD_PATH_PREFIX,
    IGNORED_DIRS,
    PARENT_PATH_PREFIX,
    RECURSIVE_SUFFIX,
)
from .exceptions import ConfigError
from .lang.models import Package


@dataclass
class PackageSpec:
    """A package slated for documentation.

    Attributes:
        dir: Local path of the package. Always "." for packages resolved by
            import name.
        import_path: Name handed to the loader. Equal to ``dir`` for local
            packages, otherwise the dotted import name (e.g. "json").
        is_wildcard: Whether the spec was discovered by recursive expansion
        is_local: Whether ``dir`` is a real filesystem path
        output_file: Destination file; empty means standard output
        pkg: Documentation model, set once the package has been loaded
    """
    dir: str
    import_path: str
    is_wildcard: bool = False
    is_local: bool = False
    output_file: str = ""
    pkg: Optional[Package] = None

    def template_data(self) -> Dict[str, Any]:
        """Values exposed to the --output template."""
        return {
            "dir": self.dir,
            "import_path": self.import_path,
            "is_local": self.is_local,
            "is_wildcard": self.is_wildcard,
        }


@dataclass
class OutputUnit:
    """All packages that render into the same output file."""
    output_file: str
    packages: List[Package] = field(default_factory=list)


def is_local_path(path: str) -> bool:
    """Check whether a path refers to the filesystem rather than an import name."""
    return (
        path.startswith(CWD_PATH_PREFIX)
        or path.startswith(PARENT_PATH_PREFIX)
        or os.path.isabs(path)
    )


def is_ignored_dir(dirname: str) -> bool:
    """Identify directories that recursive expansion never enters."""
    return dirname in IGNORED_DIRS


def _to_native(path: str) -> str:
    if os.sep == "/":
        return path
    return path.replace("/", os.sep)


def _trim_recursive(path: str) -> str:
    trimmed = path[:-len(RECURSIVE_SUFFIX)]
    # "./..." and friends keep their separator so they still read as local
    if trimmed in ("", ".", ".."):
        trimmed += os.sep
    return trimmed


def _list_subdirs(path: str) -> List[str]:
    with os.scandir(path) as entries:
        names = [
            entry.name
            for entry in entries
            if not is_ignored_dir(entry.name) and entry.is_dir(follow_symlinks=False)
        ]
    return sorted(names)


def _expand_recursive(root: str) -> List[PackageSpec]:
    expanded = [PackageSpec(dir=root, import_path=root, is_wildcard=True, is_local=True)]

    worklist = [root]
    cursor = 0
    while cursor < len(worklist):
        current = worklist[cursor]
        cursor += 1

        try:
            subdirs = _list_subdirs(current)
        except OSError:
            # Nothing below an unreadable directory can be documented
            continue

        for name in subdirs:
            sub_path = os.path.join(current, name)
            if not is_local_path(sub_path):
                sub_path = CWD_PATH_PREFIX + sub_path

            expanded.append(
                PackageSpec(dir=sub_path, import_path=sub_path, is_wildcard=True, is_local=True)
            )
            worklist.append(sub_path)

    return expanded


def get_specs(*paths: str) -> List[PackageSpec]:
    """Expand package arguments into package specs.

    Arguments ending in ``/...`` are expanded breadth-first into one spec per
    directory below them. Any other argument yields exactly one spec.

    Args:
        paths: Raw package arguments as given on the command line

    Returns:
        Specs in discovery order
    """
    expanded: List[PackageSpec] = []
    for path in paths:
        path = _to_native(path)

        if not path.endswith(RECURSIVE_SUFFIX):
            is_local = is_local_path(path)
            expanded.append(PackageSpec(
                dir=path if is_local else ".",
                import_path=path,
                is_wildcard=False,
                is_local=is_local,
            ))
            continue

        trimmed = _trim_recursive(path)

        # Not a filesystem path. Keep the argument as written so that the
        # loader reports it rather than silently documenting something else.
        if not is_local_path(trimmed):
            expanded.append(PackageSpec(dir=".", import_path=path, is_wildcard=False, is_local=False))
            continue

        expanded.extend(_expand_recursive(trimmed))

    return expanded


def compile_output_template(text: str) -> jinja2.Template:
    """Compile the --output path template."""
    env = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)
    try:
        return env.from_string(text or "")
    except jinja2.TemplateSyntaxError as e:
        raise ConfigError(f"invalid output template: {e}") from e


def resolve_output(specs: List[PackageSpec], output_template: jinja2.Template) -> None:
    """Assign an output file to each spec from the output template."""
    for spec in specs:
        try:
            rendered = output_template.render(**spec.template_data())
        except jinja2.TemplateError as e:
            raise ConfigError(f"invalid output template: {e}") from e

        if rendered == "":
            # Preserve empty values
            spec.output_file = ""
        else:
            spec.output_file = os.path.normpath(rendered)


def group_by_output(specs: List[PackageSpec]) -> List[OutputUnit]:
    """Group loaded packages by output file, keeping discovery order."""
    units: Dict[str, OutputUnit] = {}
    for spec in specs:
        if spec.pkg is None:
            continue

        unit = units.get(spec.output_file)
        if unit is None:
            unit = units[spec.output_file] = OutputUnit(output_file=spec.output_file)
        unit.packages.append(spec.pkg)

    return list(units.values())
