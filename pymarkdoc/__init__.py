"""
pymarkdoc: Markdown documentation for Python packages.

Generates README-style reference documentation from package sources and
keeps it in sync with the files on disk.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .command import run_command
from .config import Config, MarkdocConfig
from .exceptions import ConfigError, DriftError, LoadError, MarkdocError, OutputError, RenderError

__all__ = [
    "Config",
    "ConfigError",
    "DriftError",
    "LoadError",
    "MarkdocConfig",
    "MarkdocError",
    "OutputError",
    "RenderError",
    "run_command",
]
