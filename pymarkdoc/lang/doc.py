"""Splitting of docstrings into renderable blocks."""

import re
import textwrap
from typing import List

from .models import BlockKind, DocBlock

_UNDERLINE_RE = re.compile(r'^(=+|-+|~+)$')


def _is_code_line(line: str) -> bool:
    return line.startswith('    ') or line.startswith('\t') or line.lstrip().startswith('>>>')


def _flush(blocks: List[DocBlock], kind: BlockKind, lines: List[str]) -> None:
    if not lines:
        return
    if kind is BlockKind.CODE:
        text = textwrap.dedent('\n'.join(lines)).strip('\n')
    else:
        text = ' '.join(line.strip() for line in lines)
    if text:
        blocks.append(DocBlock(kind=kind, text=text))


def parse_doc(text: str) -> List[DocBlock]:
    """Split a docstring into paragraph, code and header blocks.

    Indented lines and doctest sessions become code blocks. A line followed
    by an underline of ``=``, ``-`` or ``~`` becomes a header. Everything
    else is grouped into paragraphs separated by blank lines.
    """
    blocks: List[DocBlock] = []
    if not text:
        return blocks

    lines = textwrap.dedent(text).strip('\n').splitlines()
    current: List[str] = []
    kind = BlockKind.PARAGRAPH

    i = 0
    while i < len(lines):
        line = lines[i].rstrip()

        if not line.strip():
            if kind is BlockKind.CODE:
                # Blank lines inside a code sample belong to it if more code follows
                following = next((l for l in lines[i + 1:] if l.strip()), '')
                if following and _is_code_line(following):
                    current.append('')
                    i += 1
                    continue
            _flush(blocks, kind, current)
            current, kind = [], BlockKind.PARAGRAPH
            i += 1
            continue

        next_line = lines[i + 1].strip() if i + 1 < len(lines) else ''
        if not current and not _is_code_line(line) and next_line and _UNDERLINE_RE.match(next_line):
            blocks.append(DocBlock(kind=BlockKind.HEADER, text=line.strip()))
            i += 2
            continue

        line_kind = BlockKind.CODE if _is_code_line(line) else BlockKind.PARAGRAPH
        if current and line_kind is not kind:
            # Doctest output lines are unindented but belong to the sample
            if kind is BlockKind.CODE and current[-1].lstrip().startswith('>>>'):
                current.append(line)
                i += 1
                continue
            _flush(blocks, kind, current)
            current = []
        kind = line_kind
        current.append(line)
        i += 1

    _flush(blocks, kind, current)
    return blocks


def synopsis(text: str) -> str:
    """First sentence of a docstring's first paragraph."""
    for block in parse_doc(text):
        if block.kind is BlockKind.PARAGRAPH:
            match = re.match(r'(.+?[.!?])(\s|$)', block.text)
            return match.group(1) if match else block.text
    return ''
