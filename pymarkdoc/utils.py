"""
Utility functions for pymarkdoc.
"""

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Union

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import OutputError

CHUNK_SIZE = 4096


# Configure logging with Rich handler
def setup_logger(name: str = "pymarkdoc", level: str = "WARNING") -> logging.Logger:
    """Set up a logger with Rich formatting.

    Log records go to stderr so documentation printed to stdout stays clean.
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger()


def get_log_level(verbosity: int) -> str:
    """Map the number of -v flags to a logging level name."""
    if verbosity <= 0:
        return "WARNING"
    if verbosity == 1:
        return "INFO"
    return "DEBUG"


def _stream_digest(stream: BinaryIO) -> bytes:
    digest = hashlib.blake2b(digest_size=16)
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b''):
        digest.update(chunk)
    return digest.digest()


def streams_equal(first: BinaryIO, second: BinaryIO) -> bool:
    """Check whether two binary streams hold identical content.

    Each stream is consumed in chunks into its own digest, so neither side
    needs to be held in memory. Equal digests are treated as equal content.

    Args:
        first: Readable binary stream
        second: Readable binary stream

    Returns:
        True if both streams produced the same digest

    Raises:
        OutputError: If reading either stream fails
    """
    try:
        first_digest = _stream_digest(first)
        second_digest = _stream_digest(second)
    except OSError as e:
        raise OutputError(f"failed when checking documentation: {e}") from e

    return first_digest == second_digest


def ensure_directory(path: Union[str, Path], mode: int = 0o755) -> Path:
    """Ensure a directory exists."""
    path = Path(path)
    path.mkdir(mode=mode, parents=True, exist_ok=True)
    return path


def read_text_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file."""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
