"""Output flavors for generated Markdown."""

from enum import Enum

from ..exceptions import ConfigError
from .base import Format
from .flavors import AzureDevOpsMarkdown, GitHubFlavoredMarkdown, PlainMarkdown


class FormatKind(Enum):
    """Supported Markdown flavors."""
    GITHUB = "github"
    AZURE_DEVOPS = "azure-devops"
    PLAIN = "plain"


_FORMATS = {
    FormatKind.GITHUB: GitHubFlavoredMarkdown,
    FormatKind.AZURE_DEVOPS: AzureDevOpsMarkdown,
    FormatKind.PLAIN: PlainMarkdown,
}


def get_format(name: str) -> Format:
    """Resolve a format name into a formatter.

    Raises:
        ConfigError: If the name is not a supported format
    """
    try:
        kind = FormatKind(name)
    except ValueError as e:
        raise ConfigError(f"invalid format: {name}") from e
    return _FORMATS[kind]()


__all__ = [
    'AzureDevOpsMarkdown',
    'Format',
    'FormatKind',
    'GitHubFlavoredMarkdown',
    'PlainMarkdown',
    'get_format',
]
