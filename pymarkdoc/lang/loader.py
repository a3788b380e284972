"""Loading of Python packages into documentation models."""

import ast
import importlib.util
import io
import os
import tokenize
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..constants import BUILD_DIRECTIVE, CWD_PATH_PREFIX, PARENT_PATH_PREFIX
from ..exceptions import LoadError
from ..utils import logger, read_text_file
from .models import Package, Repo
from .repository import detect_repository
from .visitor import ModuleVisitor

TEST_FILE_PREFIX = 'test_'
TEST_FILE_SUFFIX = '_test.py'
EXCLUDED_FILES = {'conftest.py', 'setup.py'}


def _is_directory_path(path: str) -> bool:
    return (
        path in ('.', '..')
        or path.startswith(CWD_PATH_PREFIX)
        or path.startswith(PARENT_PATH_PREFIX)
        or os.path.isabs(path)
    )


def _is_source_file(name: str) -> bool:
    if not name.endswith('.py') or name in EXCLUDED_FILES:
        return False
    return not (name.startswith(TEST_FILE_PREFIX) or name.endswith(TEST_FILE_SUFFIX))


def build_constraint(source: str) -> Optional[List[str]]:
    """Extract the build directive from a module's leading comment block.

    Returns:
        The terms of the directive, or None when the module has none
    """
    try:
        tokens = tokenize.generate_tokens(io.StringIO(source).readline)
        for token in tokens:
            if token.type == tokenize.COMMENT:
                text = token.string.lstrip('#').strip()
                if text.startswith(BUILD_DIRECTIVE):
                    return text[len(BUILD_DIRECTIVE):].split()
            elif token.type not in (tokenize.NL, tokenize.NEWLINE, tokenize.ENCODING):
                break
    except (tokenize.TokenError, SyntaxError):
        return None
    return None


def matches_tags(terms: Optional[List[str]], tags: Iterable[str]) -> bool:
    """Evaluate a build directive against the active tags.

    A module is kept when any plain term is active or any ``!term`` is not.
    """
    if terms is None:
        return True

    active = set(tags)
    for term in terms:
        if term.startswith('!'):
            if term[1:] not in active:
                return True
        elif term in active:
            return True
    return False


def _resolve_import_path(import_path: str) -> Tuple[str, List[str]]:
    """Locate an importable name without importing it.

    Returns:
        The package directory and the file names to document in it
    """
    try:
        spec = importlib.util.find_spec(import_path)
    except (ImportError, ValueError, AttributeError) as e:
        raise LoadError(f"invalid package at import path: {import_path}", import_path) from e

    if spec is None:
        raise LoadError(f"invalid package at import path: {import_path}", import_path)

    if spec.submodule_search_locations:
        locations = list(spec.submodule_search_locations)
        if locations:
            directory = locations[0]
            return directory, sorted(os.listdir(directory))

    if spec.origin and spec.origin.endswith('.py') and os.path.isfile(spec.origin):
        return os.path.dirname(spec.origin), [os.path.basename(spec.origin)]

    raise LoadError(f"invalid package at import path: {import_path}", import_path)


def _resolve_directory(import_path: str) -> Tuple[str, List[str]]:
    if not os.path.isdir(import_path):
        raise LoadError(f"invalid package in directory: {import_path}", import_path)
    try:
        return import_path, sorted(os.listdir(import_path))
    except OSError as e:
        raise LoadError(f"invalid package in directory: {import_path}", import_path) from e


def _package_name(import_path: str, directory: str, files: List[str]) -> str:
    if not _is_directory_path(import_path):
        if len(files) == 1 and files[0] != '__init__.py':
            return import_path
        return import_path.rsplit('.', 1)[-1] if '.' in import_path else import_path
    return Path(directory).resolve().name


def load_package(
    import_path: str,
    tags: Iterable[str] = (),
    include_unexported: bool = False,
    repository: Optional[Repo] = None,
) -> Package:
    """Load a package into a documentation model.

    Args:
        import_path: Local directory (``./pkg``) or dotted import name
        tags: Active build tags
        include_unexported: Whether to keep names starting with an underscore
        repository: Repository overrides used for source links

    Returns:
        The documentation model for the package

    Raises:
        LoadError: If the package cannot be found, has no modules left after
            applying build tags, or fails to parse
    """
    tags = list(tags)
    is_directory = _is_directory_path(import_path)

    if is_directory:
        directory, names = _resolve_directory(import_path)
    else:
        directory, names = _resolve_import_path(import_path)

    invalid = (
        f"invalid package in directory: {import_path}"
        if is_directory
        else f"invalid package at import path: {import_path}"
    )

    selected = []
    for name in names:
        file_path = os.path.join(directory, name)
        if not _is_source_file(name) or not os.path.isfile(file_path):
            continue
        try:
            source = read_text_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"unable to read {file_path}: {e}", import_path) from e

        if not matches_tags(build_constraint(source), tags):
            logger.debug(f"{file_path}: excluded by build tags")
            continue
        selected.append((name, source))

    if not selected:
        raise LoadError(invalid, import_path)

    package = Package(
        name=_package_name(import_path, directory, [name for name, _ in selected]),
        import_path=import_path,
        dir=directory,
        modules=[name for name, _ in selected],
    )

    module_docs = {}
    for name, source in selected:
        try:
            tree = ast.parse(source, filename=os.path.join(directory, name))
        except SyntaxError as e:
            raise LoadError(f"unable to parse {os.path.join(directory, name)}: {e}", import_path) from e

        module_docs[name] = ast.get_docstring(tree) or ''

        visitor = ModuleVisitor(name, include_unexported=include_unexported)
        visitor.visit(tree)
        package.values.extend(visitor.values)
        package.funcs.extend(visitor.funcs)
        package.types.extend(visitor.types)

    package.doc = module_docs.get('__init__.py') or next(
        (doc for doc in module_docs.values() if doc), ''
    )
    package.funcs.sort(key=lambda f: f.name)
    package.types.sort(key=lambda t: t.name)
    package.repository = detect_repository(directory, repository)

    logger.debug(
        f"{import_path}: loaded {len(package.modules)} modules, "
        f"{len(package.types)} types, {len(package.funcs)} functions"
    )
    return package
