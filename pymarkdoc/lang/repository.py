"""Detection of the git repository a package lives in."""

import re
from pathlib import Path
from typing import Optional

try:
    import git
except ImportError:
    raise ImportError("GitPython is required. Install with: pip install GitPython")

from ..utils import logger
from .models import Repo

DEFAULT_BRANCH = 'main'

_SCP_REMOTE_RE = re.compile(r'^(?:[\w.-]+@)?([\w.-]+):(?!//)(.+)$')


def normalize_remote(url: str) -> str:
    """Turn a git remote URL into a browsable https URL."""
    url = url.strip()
    if not url:
        return ''

    if url.startswith(('http://', 'https://')):
        normalized = re.sub(r'^(https?://)[^@/]+@', r'\1', url)
    elif url.startswith('ssh://'):
        normalized = re.sub(r'^ssh://(?:[^@/]+@)?([^/:]+)(?::\d+)?/', r'https://\1/', url)
    else:
        match = _SCP_REMOTE_RE.match(url)
        if not match:
            return url
        normalized = f"https://{match.group(1)}/{match.group(2)}"

    if normalized.endswith('.git'):
        normalized = normalized[:-len('.git')]
    return normalized.rstrip('/')


def _default_branch(repo: 'git.Repo') -> str:
    try:
        head = repo.remotes.origin.refs.HEAD.reference
        return head.remote_head
    except (AttributeError, IndexError, TypeError, ValueError, git.GitCommandError):
        pass

    try:
        return repo.active_branch.name
    except (TypeError, ValueError):
        return DEFAULT_BRANCH


def _path_from_root(repo: 'git.Repo', directory: str) -> str:
    root = Path(repo.working_tree_dir).resolve()
    relative = Path(directory).resolve().relative_to(root)
    parts = [p for p in relative.parts if p not in ('', '.')]
    if not parts:
        return '/'
    return '/' + '/'.join(parts) + '/'


def detect_repository(directory: str, overrides: Optional[Repo] = None) -> Optional[Repo]:
    """Work out the repository information for a package directory.

    Values found in the enclosing git work tree are replaced field by field
    with non-empty overrides.

    Args:
        directory: Package directory
        overrides: Explicit repository settings

    Returns:
        Repository information, or None if there is neither a usable git
        repository nor any override
    """
    overrides = overrides or Repo()
    detected = Repo()

    try:
        repo = git.Repo(directory, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        logger.debug(f"{directory}: no git repository found ({e.__class__.__name__})")
        repo = None

    if repo is not None:
        try:
            if repo.remotes and 'origin' in [r.name for r in repo.remotes]:
                detected.remote = normalize_remote(repo.remotes.origin.url)
            detected.default_branch = _default_branch(repo)
            if repo.working_tree_dir:
                detected.path_from_root = _path_from_root(repo, directory)
        except (ValueError, OSError, git.GitCommandError) as e:
            logger.debug(f"{directory}: unable to inspect git repository: {e}")
        finally:
            repo.close()

    merged = Repo(
        remote=overrides.remote or detected.remote,
        default_branch=overrides.default_branch or detected.default_branch or DEFAULT_BRANCH,
        path_from_root=overrides.path_from_root or detected.path_from_root,
    )

    if not merged.remote:
        return None

    if merged.path_from_root and not merged.path_from_root.endswith('/'):
        merged.path_from_root += '/'
    if not merged.path_from_root.startswith('/'):
        merged.path_from_root = '/' + merged.path_from_root
    return merged
