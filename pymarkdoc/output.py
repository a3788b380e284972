"""Reconciliation of rendered documentation with the files on disk."""

import io
import os
import re
from enum import Enum
from typing import List

import click

from .constants import DIR_MODE, EMBED_END_MARKER, EMBED_KEYWORD, EMBED_START_MARKER, FILE_MODE
from .exceptions import DriftError, OutputError
from .lang.models import File
from .renderer import Renderer
from .specs import OutputUnit
from .utils import ensure_directory, logger, streams_equal

_KEYWORD = re.escape(EMBED_KEYWORD)

# Line tails stop short of any \r so CRLF files keep their line endings
EMBED_STANDALONE_RE = re.compile(
    rf'^[ \t]*<!--\s*{_KEYWORD}\s*-->[ \t]*(?=\r?$)',
    re.MULTILINE | re.IGNORECASE,
)
EMBED_REGION_RE = re.compile(
    rf'^[ \t]*<!--\s*{_KEYWORD}:start\s*-->.*?<!--\s*{_KEYWORD}:end\s*-->[ \t]*(?=\r?$)',
    re.MULTILINE | re.IGNORECASE | re.DOTALL,
)


class ReconciliationPolicy(Enum):
    """What to do with rendered text for one output file."""
    PRINT = "print"
    VERIFY = "verify"
    MERGE = "merge"
    REPLACE = "replace"


def select_policy(output_file: str, embed: bool, check: bool) -> ReconciliationPolicy:
    """Pick the policy for an output file.

    An empty output file always prints, whatever the flags say.
    """
    if not output_file:
        return ReconciliationPolicy.PRINT
    if check:
        return ReconciliationPolicy.VERIFY
    if embed:
        return ReconciliationPolicy.MERGE
    return ReconciliationPolicy.REPLACE


def wrap_embedded(text: str) -> str:
    """Surround text with the embed start and end markers."""
    # Rendered files end with a newline; the region keeps one blank line before the end marker
    body = text.rstrip("\n")
    return f"{EMBED_START_MARKER}\n\n{body}\n\n{EMBED_END_MARKER}"


def embed_contents(file_name: str, text: str) -> str:
    """Splice rendered text into the existing content of a file.

    Standalone ``<!-- gomarkdoc:embed -->`` markers and existing
    start/end regions are replaced with the wrapped text. If the file has
    no markers the wrapped text is appended; if the file cannot be read the
    wrapped text is the whole result.

    Args:
        file_name: File the documentation is embedded into
        text: Rendered documentation

    Returns:
        The new content of the file
    """
    embed_text = wrap_embedded(text)

    try:
        with open(file_name, 'r', encoding='utf-8', newline='') as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"unable to read {file_name} for embedding ({e}), creating a new file instead")
        return embed_text

    data, standalone = EMBED_STANDALONE_RE.subn(lambda _: embed_text, data)
    data, regions = EMBED_REGION_RE.subn(lambda _: embed_text, data)

    if standalone + regions == 0:
        logger.debug(f"no embed markers found in {file_name}, appending documentation instead")
        return f"{data}\n\n{embed_text}"

    return data


def write_file(file_name: str, text: str) -> None:
    """Write text to a file, creating its parent folders as needed."""
    folder = os.path.dirname(file_name)

    if folder:
        try:
            ensure_directory(folder, mode=DIR_MODE)
        except OSError as e:
            raise OutputError(f"failed to create folder {folder}: {e}", file_name) from e

    try:
        fd = os.open(file_name, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise OutputError(f"failed to write output file {file_name}: {e}", file_name) from e


def check_file(text: str, file_name: str) -> None:
    """Verify that a file holds exactly the given text.

    Raises:
        DriftError: If the file is missing, cannot be opened or differs
        OutputError: If reading the file fails part way through
    """
    try:
        f = open(file_name, 'rb')
    except OSError as e:
        logger.debug(f"unable to open {file_name} for checking: {e}")
        raise DriftError(file_name) from e

    with f:
        match = streams_equal(io.BytesIO(text.encode('utf-8')), f)

    if not match:
        raise DriftError(file_name)


class Reconciler:
    """Apply the run's reconciliation policy to each rendered output file."""

    def __init__(self, embed: bool = False, check: bool = False):
        self.embed = embed
        self.check = check

    def reconcile(self, text: str, output_file: str) -> ReconciliationPolicy:
        """Print, verify, merge or write rendered text for one output file."""
        policy = select_policy(output_file, self.embed, self.check)

        if policy is ReconciliationPolicy.PRINT:
            click.echo(text, nl=False)
        elif policy is ReconciliationPolicy.VERIFY:
            expected = embed_contents(output_file, text) if self.embed else text
            check_file(expected, output_file)
            logger.info(f"{output_file} is up to date")
        elif policy is ReconciliationPolicy.MERGE:
            write_file(output_file, embed_contents(output_file, text))
            logger.info(f"embedded documentation into {output_file}")
        else:
            write_file(output_file, text)
            logger.info(f"wrote documentation to {output_file}")

        return policy


def write_output(
    units: List[OutputUnit],
    renderer: Renderer,
    header: str = "",
    footer: str = "",
    embed: bool = False,
    check: bool = False,
) -> None:
    """Render each output unit and reconcile it with the filesystem."""
    reconciler = Reconciler(embed=embed, check=check)

    for unit in units:
        text = renderer.file(File(header=header, footer=footer, packages=unit.packages))
        reconciler.reconcile(text, unit.output_file)
