"""Tests for loading packages into documentation models."""

import os
import textwrap

import pytest

from pymarkdoc.exceptions import LoadError
from pymarkdoc.lang.loader import build_constraint, load_package, matches_tags
from pymarkdoc.lang.models import Repo


def write(path, source):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")


@pytest.fixture
def package_dir(tmp_path, monkeypatch):
    """A small package with public and private members."""
    pkg = tmp_path / "shapes"
    write(pkg / "__init__.py", '''
        """Geometric shapes.

        Provides simple shapes and helpers.
        """
    ''')
    write(pkg / "square.py", '''
        """Squares."""

        DEFAULT_SIZE = 1
        """Side length used when none is given."""

        _cache = {}


        class Square:
            """A square."""

            sides: int = 4

            def __init__(self, size=DEFAULT_SIZE):
                self.size = size

            def area(self) -> int:
                """Area of the square."""
                return self.size ** 2

            def _grow(self):
                pass


        def make_square(size: int = 1) -> Square:
            """Create a square."""
            return Square(size)


        async def fetch_square():
            pass


        def _helper():
            pass


        class _Private:
            pass
    ''')
    write(pkg / "test_square.py", '''
        def test_area():
            pass
    ''')
    write(pkg / "square_test.py", '''
        def check():
            pass
    ''')
    write(pkg / "conftest.py", '''
        def fixture():
            pass
    ''')
    monkeypatch.chdir(tmp_path)
    return pkg


class TestBuildConstraint:

    def test_no_directive(self):
        assert build_constraint("import os\n") is None

    def test_directive_in_leading_comments(self):
        source = "#!/usr/bin/env python\n# pymarkdoc:build linux !legacy\n\nx = 1\n"

        assert build_constraint(source) == ["linux", "!legacy"]

    def test_directive_after_code_is_ignored(self):
        source = "x = 1\n# pymarkdoc:build linux\n"

        assert build_constraint(source) is None

    def test_empty_source(self):
        assert build_constraint("") is None


class TestMatchesTags:

    def test_no_constraint(self):
        assert matches_tags(None, [])

    def test_positive_term(self):
        assert matches_tags(["linux"], ["linux"])
        assert not matches_tags(["linux"], ["darwin"])

    def test_negated_term(self):
        assert matches_tags(["!legacy"], [])
        assert not matches_tags(["!legacy"], ["legacy"])

    def test_any_term_matches(self):
        assert matches_tags(["linux", "darwin"], ["darwin"])


class TestLoadDirectory:

    def test_package_metadata(self, package_dir):
        pkg = load_package("./shapes")

        assert pkg.name == "shapes"
        assert pkg.import_path == "./shapes"
        assert pkg.doc.startswith("Geometric shapes.")
        assert pkg.modules == ["__init__.py", "square.py"]

    def test_test_files_are_skipped(self, package_dir):
        pkg = load_package("./shapes")

        assert "test_square.py" not in pkg.modules
        assert "square_test.py" not in pkg.modules
        assert "conftest.py" not in pkg.modules
        assert "test_area" not in [f.name for f in pkg.funcs]

    def test_exported_symbols(self, package_dir):
        pkg = load_package("./shapes")

        assert [f.name for f in pkg.funcs] == ["fetch_square", "make_square"]
        assert [t.name for t in pkg.types] == ["Square"]
        assert [v.name for v in pkg.values] == ["DEFAULT_SIZE"]

    def test_value_docstring(self, package_dir):
        pkg = load_package("./shapes")
        value = pkg.values[0]

        assert value.signature == "DEFAULT_SIZE = 1"
        assert value.doc == "Side length used when none is given."
        assert value.location.file == "square.py"

    def test_function_signature(self, package_dir):
        pkg = load_package("./shapes")
        funcs = {f.name: f for f in pkg.funcs}

        assert funcs["make_square"].signature == "def make_square(size: int=1) -> Square"
        assert funcs["make_square"].doc == "Create a square."
        assert funcs["fetch_square"].signature == "async def fetch_square()"

    def test_class_members(self, package_dir):
        pkg = load_package("./shapes")
        square = pkg.types[0]

        assert square.doc == "A square."
        assert [m.name for m in square.methods] == ["__init__", "area"]
        assert square.methods[1].title == "Square.area"
        assert [a.name for a in square.attributes] == ["sides"]

    def test_location_spans_definition(self, package_dir):
        pkg = load_package("./shapes")
        square = pkg.types[0]

        assert square.location.start < square.location.end

    def test_include_unexported(self, package_dir):
        pkg = load_package("./shapes", include_unexported=True)

        assert "_helper" in [f.name for f in pkg.funcs]
        assert "_Private" in [t.name for t in pkg.types]
        assert "_cache" in [v.name for v in pkg.values]
        assert "_grow" in [m.name for m in pkg.types[0].methods]

    def test_missing_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(LoadError, match="invalid package in directory: ./missing"):
            load_package("./missing")

    def test_directory_without_sources(self, tmp_path, monkeypatch):
        (tmp_path / "empty").mkdir()
        (tmp_path / "empty" / "notes.txt").write_text("nothing here")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(LoadError, match="invalid package in directory"):
            load_package("./empty")

    def test_syntax_error(self, tmp_path, monkeypatch):
        write(tmp_path / "broken" / "mod.py", "def broken(:\n")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(LoadError, match="unable to parse"):
            load_package("./broken")

    def test_absolute_path(self, package_dir):
        pkg = load_package(str(package_dir))

        assert pkg.name == "shapes"

    def test_repository_override(self, package_dir):
        pkg = load_package(
            "./shapes",
            repository=Repo(remote="https://example.com/org/repo", default_branch="dev", path_from_root="lib"),
        )

        assert pkg.repository.remote == "https://example.com/org/repo"
        assert pkg.repository.default_branch == "dev"
        assert pkg.repository.path_from_root == "/lib/"


class TestBuildTags:

    @pytest.fixture
    def tagged(self, tmp_path, monkeypatch):
        write(tmp_path / "tagged" / "common.py", '''
            def common():
                pass
        ''')
        write(tmp_path / "tagged" / "linux.py", '''
            # pymarkdoc:build linux
            def linux_only():
                pass
        ''')
        write(tmp_path / "tagged" / "legacy.py", '''
            # pymarkdoc:build !modern
            def legacy_only():
                pass
        ''')
        monkeypatch.chdir(tmp_path)

    def test_without_tags(self, tagged):
        pkg = load_package("./tagged")

        assert [f.name for f in pkg.funcs] == ["common", "legacy_only"]

    def test_with_tags(self, tagged):
        pkg = load_package("./tagged", tags=["linux", "modern"])

        assert [f.name for f in pkg.funcs] == ["common", "linux_only"]

    def test_all_modules_excluded(self, tmp_path, monkeypatch):
        write(tmp_path / "only" / "mod.py", '''
            # pymarkdoc:build never
            x = 1
        ''')
        monkeypatch.chdir(tmp_path)

        with pytest.raises(LoadError):
            load_package("./only")


class TestLoadImportPath:

    def test_package_by_name(self):
        pkg = load_package("json")

        assert pkg.name == "json"
        assert pkg.import_path == "json"
        assert "__init__.py" in pkg.modules
        assert "loads" in [f.name for f in pkg.funcs]
        assert os.path.isdir(pkg.dir)

    def test_single_module(self):
        pkg = load_package("textwrap")

        assert pkg.name == "textwrap"
        assert pkg.modules == ["textwrap.py"]
        assert "dedent" in [f.name for f in pkg.funcs]

    def test_unknown_name(self):
        with pytest.raises(LoadError, match="invalid package at import path: no_such_package_xyz"):
            load_package("no_such_package_xyz")

    def test_recursive_marker_is_not_importable(self):
        with pytest.raises(LoadError, match="invalid package at import path"):
            load_package(os.path.join("xml", "..."))
