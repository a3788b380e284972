"""Tests for utility helpers."""

import io

import pytest

from pymarkdoc.exceptions import OutputError
from pymarkdoc.utils import ensure_directory, get_log_level, read_text_file, streams_equal


class BrokenStream(io.RawIOBase):

    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("device not ready")


class TestStreamsEqual:

    def test_identical_content(self):
        assert streams_equal(io.BytesIO(b"same"), io.BytesIO(b"same"))

    def test_empty_streams(self):
        assert streams_equal(io.BytesIO(b""), io.BytesIO(b""))

    def test_different_content(self):
        assert not streams_equal(io.BytesIO(b"one"), io.BytesIO(b"two"))

    def test_prefix_is_not_equal(self):
        assert not streams_equal(io.BytesIO(b"abc"), io.BytesIO(b"abcd"))

    def test_symmetric(self):
        a, b = b"left", b"right"

        assert streams_equal(io.BytesIO(a), io.BytesIO(b)) == streams_equal(io.BytesIO(b), io.BytesIO(a))

    def test_large_content_spanning_chunks(self):
        data = b"x" * 10000

        assert streams_equal(io.BytesIO(data), io.BytesIO(data))
        assert not streams_equal(io.BytesIO(data), io.BytesIO(data[:-1] + b"y"))

    def test_read_failure(self):
        with pytest.raises(OutputError, match="failed when checking documentation"):
            streams_equal(BrokenStream(), io.BytesIO(b"data"))


@pytest.mark.parametrize("verbosity,level", [
    (0, "WARNING"),
    (1, "INFO"),
    (2, "DEBUG"),
    (5, "DEBUG"),
])
def test_get_log_level(verbosity, level):
    assert get_log_level(verbosity) == level


def test_ensure_directory(tmp_path):
    path = ensure_directory(tmp_path / "a" / "b")

    assert path.is_dir()
    assert ensure_directory(path) == path


def test_read_text_file(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("héllo", encoding="utf-8")

    assert read_text_file(path) == "héllo"
