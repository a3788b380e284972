"""Fallback resolution of build tags from the environment."""

import argparse
import os
from typing import List, Mapping, Optional

from .constants import FLAGS_ENV_VAR
from .utils import logger


class _FlagParseError(Exception):
    pass


class _FlagParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message):
        raise _FlagParseError(message)


def _build_parser() -> _FlagParser:
    parser = _FlagParser(prog=FLAGS_ENV_VAR, add_help=False, allow_abbrev=False)
    parser.add_argument('-tags', '--tags', dest='tags', default='')
    return parser


def default_tags(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Read build tags from the flags string in the environment.

    The variable holds whitespace separated flags such as
    ``-tags=docs,linux``. The tags option is the only flag recognized, so
    any other flag makes the whole string unparsable.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        The tags, or an empty list if the variable is unset or unparsable
    """
    environ = os.environ if environ is None else environ
    flags = environ.get(FLAGS_ENV_VAR)
    if flags is None:
        return []

    try:
        args = _build_parser().parse_args(flags.split())
    except _FlagParseError as e:
        logger.debug(f"ignoring unparsable {FLAGS_ENV_VAR} value {flags!r}: {e}")
        return []

    if not args.tags:
        return []

    return [tag for tag in args.tags.split(',') if tag]
